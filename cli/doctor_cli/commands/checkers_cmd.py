from __future__ import annotations

import typer
from rich.table import Table

from doctor_core.builtin import COMMON_CHECKERS

from .. import console
from ..formatting import format_parser


def list_checkers(
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
) -> None:
    """
    List built-in binary checkers.
    """
    if json_output:
        console.print_json(
            [
                {
                    "name": c.name,
                    "command": c.executable,
                    "args": c.args,
                    "parse_version": format_parser(c),
                    "components": c.parse_components is not None,
                }
                for c in COMMON_CHECKERS.values()
            ]
        )
        return

    table = Table(title="Built-in checkers")
    table.add_column("Name", style="bold")
    table.add_column("Command")
    table.add_column("Parser")
    table.add_column("Components")
    for c in COMMON_CHECKERS.values():
        table.add_row(
            c.name,
            " ".join([c.executable, *c.args]),
            format_parser(c),
            "yes" if c.parse_components is not None else "-",
        )
    console.print(table)
