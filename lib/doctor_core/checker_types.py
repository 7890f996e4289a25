from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .extract import ComponentsParser, VersionParser
from .requirements import RequirementCheckResult

DEFAULT_VERSION_FLAG = "--version"


@dataclass(frozen=True)
class BinaryChecker:
    name: str
    parse_version: VersionParser
    command: str | None = None
    version_flag: str | list[str] | None = None
    parse_components: ComponentsParser | None = None

    @property
    def executable(self) -> str:
        return self.command or self.name

    @property
    def args(self) -> list[str]:
        flag = self.version_flag if self.version_flag is not None else DEFAULT_VERSION_FLAG
        if isinstance(flag, str):
            return [flag]
        return list(flag)


@dataclass
class VersionCheckResult:
    binary: str
    current_version: str | None
    satisfies: bool
    error: str | None = None
    requirement: RequirementCheckResult | None = None
    components: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "binary": self.binary,
            "current_version": self.current_version,
            "satisfies": self.satisfies,
        }
        if self.error is not None:
            data["error"] = self.error
        if self.requirement is not None:
            requirement = self.requirement.to_dict()
            data["satisfied_constraints"] = requirement["satisfied_constraints"]
            data["failed_constraints"] = requirement["failed_constraints"]
        if self.components:
            data["components"] = dict(self.components)
        return data
