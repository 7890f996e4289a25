from .checker import EnvChecker, create_env_checker
from .checker_types import BinaryChecker, VersionCheckResult
from .errors import CheckerNotFoundError, ConfigError, DoctorError
from .requirements import (
    RequirementCheckResult,
    VersionConstraint,
    parse_string_requirement,
    parse_version_requirement,
    satisfies_requirement,
)

__all__ = [
    "BinaryChecker",
    "CheckerNotFoundError",
    "ConfigError",
    "DoctorError",
    "EnvChecker",
    "RequirementCheckResult",
    "VersionCheckResult",
    "VersionConstraint",
    "create_env_checker",
    "parse_string_requirement",
    "parse_version_requirement",
    "satisfies_requirement",
]
