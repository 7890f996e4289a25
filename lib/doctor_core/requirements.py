"""Requirement parsing and constraint evaluation.

A requirement is given either as free text (``">= 20.0.0, < 22"``), a single
:class:`VersionConstraint` or a list of them. Everything is normalized to an
ordered list of constraints which is then evaluated constraint by constraint,
so callers see exactly which bounds passed and which failed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from . import semver

logger = logging.getLogger(__name__)

OPERATORS: tuple[str, ...] = ("=", ">=", "<=", ">", "<", "^", "~")

# two-character operators first so ">=" is not read as ">" followed by "=..."
_CONSTRAINT_RE = re.compile(r"^(>=|<=|=|>|<|\^|~)\s*(.+)$")

INVALID_CURRENT_VERSION = "Invalid current version format"
PROCESSING_ERROR = "Error processing version requirement"


@dataclass(frozen=True)
class VersionConstraint:
    operator: str
    version: str

    def __post_init__(self) -> None:
        if self.operator not in OPERATORS:
            raise ValueError(f"Unsupported operator: {self.operator!r}")

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VersionConstraint":
        return cls(operator=str(data.get("operator") or ""), version=str(data.get("version") or ""))


ConstraintLike = Union[VersionConstraint, Mapping[str, Any]]
VersionRequirement = Union[str, ConstraintLike, Sequence[ConstraintLike]]


@dataclass
class RequirementCheckResult:
    satisfies: bool
    satisfied_constraints: list[str] = field(default_factory=list)
    failed_constraints: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "satisfies": self.satisfies,
            "satisfied_constraints": list(self.satisfied_constraints),
            "failed_constraints": list(self.failed_constraints),
        }


def parse_string_requirement(text: str) -> list[VersionConstraint]:
    constraints: list[VersionConstraint] = []
    for fragment in (text or "").split(","):
        fragment = fragment.strip()
        m = _CONSTRAINT_RE.match(fragment)
        if not m:
            if fragment:
                logger.debug("Ignoring unparseable requirement fragment %r", fragment)
            continue
        constraints.append(VersionConstraint(operator=m.group(1), version=m.group(2).rstrip()))
    return constraints


def parse_version_requirement(requirement: VersionRequirement) -> list[VersionConstraint]:
    if isinstance(requirement, str):
        return parse_string_requirement(requirement)
    if isinstance(requirement, VersionConstraint):
        return [requirement]
    if isinstance(requirement, Mapping):
        return [VersionConstraint.from_mapping(requirement)]
    if isinstance(requirement, (list, tuple)):
        if isinstance(requirement, list) and all(isinstance(c, VersionConstraint) for c in requirement):
            return requirement
        return [c if isinstance(c, VersionConstraint) else VersionConstraint.from_mapping(c) for c in requirement]
    raise TypeError(f"Unsupported requirement type: {type(requirement).__name__}")


def satisfies_requirement(current_version: str, constraints: Sequence[VersionConstraint]) -> RequirementCheckResult:
    try:
        current = semver.parse_semver(current_version)
        if current is None:
            return RequirementCheckResult(satisfies=False, failed_constraints=[INVALID_CURRENT_VERSION])

        satisfied: list[str] = []
        failed: list[str] = []
        for constraint in constraints:
            cleaned = semver.clean(constraint.version)
            if cleaned is None:
                failed.append(f"Invalid version format: {constraint.operator}{constraint.version}")
                continue
            description = f"{constraint.operator}{cleaned}"
            if semver.satisfies(current, description):
                satisfied.append(description)
            else:
                failed.append(description)

        return RequirementCheckResult(
            satisfies=not failed,
            satisfied_constraints=satisfied,
            failed_constraints=failed,
        )
    except Exception:
        logger.debug("Failed to evaluate %r against %r", current_version, constraints, exc_info=True)
        return RequirementCheckResult(satisfies=False, failed_constraints=[PROCESSING_ERROR])
