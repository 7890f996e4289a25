from __future__ import annotations

from importlib import metadata

import typer

from .commands import check_cmd, checkers_cmd, init_cmd, verify_cmd
from .logging_ import setup_logging

COMMANDS = ("verify", "check", "checkers", "init")


def cli_version() -> str:
    try:
        return metadata.version("envdoctor")
    except Exception:
        return "0.0.0"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(cli_version())
        raise typer.Exit(code=0)


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="doctor",
        help="Doctor - environment checker. Verifies installed tool versions.",
        no_args_is_help=False,
    )

    app.command("verify")(verify_cmd.verify)
    app.command("check")(check_cmd.check)
    app.command("checkers")(checkers_cmd.list_checkers)
    app.command("init")(init_cmd.init)

    @app.callback(invoke_without_command=True)
    def _main(
            ctx: typer.Context,
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
            version: bool = typer.Option(
                False, "--version", help="Show version and exit.", callback=_version_callback, is_eager=True
            ),
    ):
        setup_logging(verbose)
        if ctx.invoked_subcommand is None:
            verify_cmd.run_verify(None)

    return app


app = _build_app()
