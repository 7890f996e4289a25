from __future__ import annotations

import os

import typer

from .. import console
from ..config import save_sample_config


def init(
    path: str = typer.Option("doctor.toml", "--path", help="Where to write the sample config."),
    force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
):
    """
    Write a sample doctor.toml with common requirements.
    """
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    saved = save_sample_config(path)
    console.ok(f"Config written: {saved}")
    console.info("Next: edit the requirements and run `doctor`.")
