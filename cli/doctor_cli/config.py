from __future__ import annotations

import importlib.util
import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import tomli_w
import yaml
from platformdirs import user_config_dir

from doctor_core import BinaryChecker, ConfigError, VersionConstraint
from doctor_core.extract import resolve_parser
from doctor_core.requirements import OPERATORS

from .path_utils import looks_like_config_path

APP_NAME = "doctor"
ENV_CONFIG = "DOCTOR_CONFIG"
USER_CONFIG_FILENAME = "doctor.toml"
CONFIG_FILENAMES = (
    "doctor.toml",
    "doctor.config.toml",
    "doctor.config.py",
    "doctor.config.json",
    "doctor.config.yaml",
    "doctor.config.yml",
)

RequirementValue = str | VersionConstraint | list[VersionConstraint]


@dataclass
class DoctorConfig:
    requirements: dict[str, RequirementValue] = field(default_factory=dict)
    checkers: dict[str, BinaryChecker] = field(default_factory=dict)
    source: str | None = None


def user_config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{USER_CONFIG_FILENAME}"


def find_config_file(cwd: str | Path | None = None) -> str | None:
    base = Path(cwd) if cwd is not None else Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return str(candidate)
    fallback = Path(user_config_path())
    if fallback.is_file():
        return str(fallback)
    return None


def _constraint_from_mapping(data: Mapping[str, Any], where: str) -> VersionConstraint:
    operator = data.get("operator")
    version = data.get("version")
    if operator not in OPERATORS:
        raise ConfigError(f"{where}: unsupported operator {operator!r} (expected one of {', '.join(OPERATORS)})")
    if not isinstance(version, str):
        raise ConfigError(f"{where}: version must be a string")
    return VersionConstraint(operator=operator, version=version)


def _requirement_from_raw(name: str, raw: Any) -> RequirementValue:
    where = f"requirements.{name}"
    if isinstance(raw, str):
        return raw
    if isinstance(raw, VersionConstraint):
        return raw
    if isinstance(raw, Mapping):
        return _constraint_from_mapping(raw, where)
    if isinstance(raw, (list, tuple)):
        constraints: list[VersionConstraint] = []
        for i, item in enumerate(raw):
            if isinstance(item, VersionConstraint):
                constraints.append(item)
            elif isinstance(item, Mapping):
                constraints.append(_constraint_from_mapping(item, f"{where}[{i}]"))
            else:
                raise ConfigError(f"{where}[{i}]: expected an operator/version table")
        return constraints
    raise ConfigError(f"{where}: expected a string, an operator/version table or a list of them")


def _checker_from_raw(name: str, raw: Any) -> BinaryChecker:
    where = f"checkers.{name}"
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{where}: expected a table")
    command = raw.get("command")
    if command is not None and not isinstance(command, str):
        raise ConfigError(f"{where}.command: expected a string")
    version_flag = raw.get("version_flag", raw.get("versionFlag"))
    if version_flag is not None:
        if isinstance(version_flag, (list, tuple)) and all(isinstance(v, str) for v in version_flag):
            version_flag = list(version_flag)
        elif not isinstance(version_flag, str):
            raise ConfigError(f"{where}.version_flag: expected a string or a list of strings")
    parse_version = raw.get("parse_version", raw.get("parseVersion"))
    if parse_version is None:
        raise ConfigError(f"{where}.parse_version is required")
    if not isinstance(parse_version, (str, re.Pattern)) and not callable(parse_version):
        raise ConfigError(f"{where}.parse_version: expected a regex or a callable")
    # fail on bad patterns now rather than at check time
    resolve_parser(parse_version)
    parse_components = raw.get("parse_components", raw.get("parseComponents"))
    if parse_components is not None and not callable(parse_components):
        raise ConfigError(f"{where}.parse_components: expected a callable")
    return BinaryChecker(
        name=name,
        command=command,
        version_flag=version_flag,
        parse_version=parse_version,
        parse_components=parse_components,
    )


def from_mapping(data: Any, source: str | None = None) -> DoctorConfig:
    if not isinstance(data, Mapping):
        raise ConfigError("Config must be a mapping of requirements", source=source)

    if "requirements" in data or "checkers" in data:
        requirements_raw = data.get("requirements") or {}
        checkers_raw = data.get("checkers") or {}
    else:
        # flat shape: every top-level key is a binary requirement
        requirements_raw = data
        checkers_raw = {}

    if not isinstance(requirements_raw, Mapping):
        raise ConfigError("requirements: expected a table", source=source)
    if not isinstance(checkers_raw, Mapping):
        raise ConfigError("checkers: expected a table", source=source)

    try:
        requirements = {str(k): _requirement_from_raw(str(k), v) for k, v in requirements_raw.items()}
        checkers = {str(k): _checker_from_raw(str(k), v) for k, v in checkers_raw.items()}
    except ConfigError as exc:
        exc.source = source
        raise
    return DoctorConfig(requirements=requirements, checkers=checkers, source=source)


def _load_python(path: Path) -> dict[str, Any]:
    spec = importlib.util.spec_from_file_location(f"_doctor_config_{path.stem.replace('.', '_')}", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import {path}", source=str(path))
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ConfigError(f"Failed to import {path}: {exc}", source=str(path)) from exc
    config = getattr(module, "config", None)
    if config is not None:
        return config
    data = {key: getattr(module, key) for key in ("requirements", "checkers") if hasattr(module, key)}
    if not data:
        raise ConfigError(f"{path} defines neither `config` nor `requirements`", source=str(path))
    return data


def _load_file(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix == ".py":
        return _load_python(path)
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        return tomllib.loads(text)
    if suffix == ".json":
        return json.loads(text)
    if suffix in {".yaml", ".yml"}:
        return yaml.safe_load(text) or {}
    try:
        return json.loads(text)
    except ValueError:
        return tomllib.loads(text)


def load_file(path: str | Path) -> DoctorConfig:
    p = Path(path).expanduser()
    try:
        data = _load_file(p)
    except ConfigError:
        raise
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {p}", source=str(p)) from exc
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load requirements from {p}: {exc}", source=str(p)) from exc
    return from_mapping(data, source=str(p))


def load_inline(text: str) -> DoctorConfig:
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise ConfigError(f"Failed to parse inline requirements: {exc}") from exc
    return from_mapping(data, source="<inline>")


def load_config(source: str | None = None) -> DoctorConfig | None:
    """Load config from a path or inline JSON; discover one when ``source`` is empty."""
    if not source:
        source = os.getenv(ENV_CONFIG, "").strip() or find_config_file()
    if not source:
        return None
    if looks_like_config_path(source):
        return load_file(source)
    return load_inline(source)


def sample_config() -> dict[str, Any]:
    return {
        "requirements": {
            "node": ">= 18.0.0, < 23.0.0",
            "npm": {"operator": ">=", "version": "8.0.0"},
            "git": {"operator": ">=", "version": "2.0.0"},
            "python3": [
                {"operator": ">=", "version": "3.10.0"},
                {"operator": "<", "version": "4.0.0"},
            ],
        },
        "checkers": {
            "rustc": {
                "command": "rustc",
                "version_flag": "--version",
                "parse_version": r"rustc (\d+\.\d+\.\d+)",
            },
        },
    }


def ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def save_sample_config(path: str) -> str:
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(sample_config()).encode("utf-8"))
    return path
