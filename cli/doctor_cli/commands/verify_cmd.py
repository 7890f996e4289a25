from __future__ import annotations

import typer

from doctor_core import DoctorError, VersionCheckResult, create_env_checker

from .. import console
from ..config import CONFIG_FILENAMES, load_config
from ..formatting import format_components, format_result_line, results_payload
from ..logging_ import is_verbose

USAGE_LINES = (
    "No config file found. Usage:",
    "  doctor [config-file]     Verify requirements from a config file",
    "  doctor init              Write a sample doctor.toml",
    "  doctor --help            Show detailed help",
    "",
    "Supported config files:",
    *(f"  {name}" for name in CONFIG_FILENAMES),
    "",
    "Example config (doctor.toml):",
    "  [requirements]",
    '  node = ">= 18.0.0, < 23.0.0"',
    '  git = { operator = ">=", version = "2.0.0" }',
)


def report_result(result: VersionCheckResult, *, verbose: bool) -> None:
    line = format_result_line(result)
    if result.satisfies:
        console.ok(line)
    else:
        console.err(line)
    requirement = result.requirement
    if requirement is not None:
        for failed in requirement.failed_constraints:
            console.detail(f"failed: {failed}")
        if verbose:
            for satisfied in requirement.satisfied_constraints:
                console.detail(f"satisfied: {satisfied}")
    if verbose and result.components:
        console.detail(f"components: {format_components(result.components)}")


def run_verify(config: str | None, *, json_output: bool = False) -> None:
    try:
        cfg = load_config(config)
    except DoctorError as exc:
        console.err(f"Failed to load or parse requirements: {exc}")
        raise typer.Exit(code=2)

    if cfg is None:
        console.print("Doctor - Environment Checker", style="bold")
        for line in USAGE_LINES:
            console.print(line, highlight=False, markup=False)
        return

    if not json_output:
        console.info(f"Found config file: {cfg.source}")

    checker = create_env_checker(cfg.checkers)
    results = checker.check_multiple(cfg.requirements)

    if json_output:
        console.print_json(results_payload(results))
    else:
        verbose = is_verbose()
        for result in results:
            report_result(result, verbose=verbose)

    if not all(r.satisfies for r in results):
        raise typer.Exit(code=1)


def verify(
        config: str | None = typer.Argument(None, help="Config file (TOML, JSON, YAML, Python) or inline JSON."),
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
) -> None:
    """
    Verify installed tool versions against configured requirements.
    """
    run_verify(config, json_output=json_output)
