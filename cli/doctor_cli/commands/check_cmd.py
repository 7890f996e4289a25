from __future__ import annotations

import typer

from doctor_core import DoctorError, create_env_checker

from .. import console
from ..config import load_config
from ..formatting import results_payload
from ..logging_ import is_verbose
from .verify_cmd import report_result


def check(
        binary: str = typer.Argument(..., help="Binary name, e.g. node or git."),
        requirement: str = typer.Argument(..., help='Requirement like ">= 18.0.0, < 23".'),
        config: str | None = typer.Option(None, "--config", "-c", help="Config file with extra checkers."),
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
) -> None:
    """
    Check a single binary against a requirement string.
    """
    extra = {}
    if config:
        try:
            cfg = load_config(config)
        except DoctorError as exc:
            console.err(str(exc))
            raise typer.Exit(code=2)
        if cfg is not None:
            extra = cfg.checkers

    checker = create_env_checker(extra)
    if binary not in checker.checkers:
        console.err(f"No checker configured for binary: {binary}")
        console.info("Run `doctor checkers` to list built-in checkers.")
        raise typer.Exit(code=2)

    result = checker.check_version(binary, requirement)
    if json_output:
        console.print_json(results_payload([result]))
    else:
        report_result(result, verbose=is_verbose())
    if not result.satisfies:
        raise typer.Exit(code=1)
