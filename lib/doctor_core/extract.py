from __future__ import annotations

import logging
import re
from typing import Callable, Union

from .errors import ConfigError

logger = logging.getLogger(__name__)

VersionParser = Union[str, "re.Pattern[str]", Callable[[str], "str | None"]]
ComponentsParser = Callable[[str], "dict[str, str] | None"]


def _pattern_parser(pattern: re.Pattern[str]) -> Callable[[str], str | None]:
    def parse(output: str) -> str | None:
        m = pattern.search(output)
        if not m:
            return None
        return m.group(1) if pattern.groups else m.group(0)

    return parse


def resolve_parser(rule: VersionParser) -> Callable[[str], str | None]:
    """Turn a parse rule (regex text, compiled pattern or callable) into a callable."""
    if isinstance(rule, re.Pattern):
        return _pattern_parser(rule)
    if isinstance(rule, str):
        try:
            return _pattern_parser(re.compile(rule))
        except re.error as exc:
            raise ConfigError(f"Invalid parse_version pattern {rule!r}: {exc}") from exc
    if callable(rule):
        return rule
    raise ConfigError(f"Unsupported parse_version rule: {type(rule).__name__}")


def extract_version(rule: VersionParser, output: str) -> str | None:
    parser = resolve_parser(rule)
    try:
        value = parser(output)
    except Exception:
        logger.debug("Version parser failed on %r", output, exc_info=True)
        return None
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def extract_components(parser: ComponentsParser | None, output: str) -> dict[str, str] | None:
    if parser is None:
        return None
    try:
        components = parser(output)
    except Exception:
        logger.debug("Components parser failed on %r", output, exc_info=True)
        return None
    if not components:
        return None
    return {str(k): str(v) for k, v in components.items()}
