from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Mapping

from .builtin import COMMON_CHECKERS
from .checker_types import BinaryChecker, VersionCheckResult
from .errors import CheckerNotFoundError
from .extract import extract_components, extract_version
from .requirements import VersionRequirement, parse_version_requirement, satisfies_requirement
from .runner import CommandOutput, CommandRunner

logger = logging.getLogger(__name__)

MAX_WORKERS = 8


def not_found_message(binary: str) -> str:
    return f"Binary '{binary}' not found or version could not be determined"


class EnvChecker:
    """Registry of binary checkers and the entry point for version checks.

    The registry is owned by the instance; pass the checkers in explicitly
    (``create_env_checker`` starts from the built-in table).
    """

    def __init__(
        self,
        checkers: Mapping[str, BinaryChecker] | Iterable[BinaryChecker] = (),
        runner: CommandRunner | None = None,
    ):
        self._checkers: dict[str, BinaryChecker] = {}
        self.runner = runner or CommandRunner()
        items = checkers.values() if isinstance(checkers, Mapping) else checkers
        for checker in items:
            self.add_checker(checker)

    @property
    def checkers(self) -> dict[str, BinaryChecker]:
        return dict(self._checkers)

    def add_checker(self, checker: BinaryChecker) -> None:
        self._checkers[checker.name] = checker

    def get_checker(self, binary: str) -> BinaryChecker:
        checker = self._checkers.get(binary)
        if checker is None:
            raise CheckerNotFoundError(binary)
        return checker

    def _run(self, checker: BinaryChecker) -> CommandOutput | None:
        return self.runner.run(checker.executable, checker.args)

    def get_current_version(self, binary: str) -> str | None:
        checker = self.get_checker(binary)
        output = self._run(checker)
        if output is None:
            return None
        return extract_version(checker.parse_version, output.text)

    def get_components(self, binary: str) -> dict[str, str] | None:
        checker = self.get_checker(binary)
        if checker.parse_components is None:
            return None
        output = self._run(checker)
        if output is None:
            return None
        return extract_components(checker.parse_components, output.text)

    def check_version(self, binary: str, requirement: VersionRequirement) -> VersionCheckResult:
        try:
            checker = self.get_checker(binary)
            output = self._run(checker)
            text = output.text if output is not None else ""
            current = extract_version(checker.parse_version, text) if output is not None else None
            if not current:
                return VersionCheckResult(
                    binary=binary,
                    current_version=None,
                    satisfies=False,
                    error=not_found_message(binary),
                )

            result = satisfies_requirement(current, parse_version_requirement(requirement))
            logger.debug("%s %s: %s", binary, current, result)
            return VersionCheckResult(
                binary=binary,
                current_version=current,
                satisfies=result.satisfies,
                requirement=result,
                components=extract_components(checker.parse_components, text),
            )
        except Exception as exc:
            logger.debug("Check for %s failed", binary, exc_info=True)
            return VersionCheckResult(binary=binary, current_version=None, satisfies=False, error=str(exc))

    def check_multiple(
        self, requirements: Mapping[str, VersionRequirement]
    ) -> list[VersionCheckResult]:
        if not requirements:
            return []
        workers = min(MAX_WORKERS, len(requirements))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self.check_version, name, req) for name, req in requirements.items()]
            return [f.result() for f in futures]


def create_env_checker(
    additional: Mapping[str, BinaryChecker] | Iterable[BinaryChecker] | None = None,
    runner: CommandRunner | None = None,
) -> EnvChecker:
    checker = EnvChecker(COMMON_CHECKERS, runner=runner)
    if additional:
        items = additional.values() if isinstance(additional, Mapping) else additional
        for extra in items:
            checker.add_checker(extra)
    return checker
