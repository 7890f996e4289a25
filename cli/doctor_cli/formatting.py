from __future__ import annotations

import re
from typing import Any, Iterable

from doctor_core import BinaryChecker, VersionCheckResult


def format_version(result: VersionCheckResult) -> str:
    return result.current_version or "not found"


def format_result_line(result: VersionCheckResult) -> str:
    line = f"{result.binary}: {format_version(result)}"
    if result.error and result.current_version is None:
        line = f"{line} ({result.error})"
    return line


def format_components(components: dict[str, str] | None) -> str:
    if not components:
        return "-"
    return ", ".join(f"{name}={version}" for name, version in components.items())


def format_parser(checker: BinaryChecker) -> str:
    rule = checker.parse_version
    if isinstance(rule, re.Pattern):
        return rule.pattern
    if isinstance(rule, str):
        return rule
    return f"<{getattr(rule, '__name__', 'callable')}>"


def results_payload(results: Iterable[VersionCheckResult]) -> dict[str, Any]:
    items = [r.to_dict() for r in results]
    return {"ok": all(item["satisfies"] for item in items), "results": items}
