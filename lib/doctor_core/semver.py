"""Semver cleaning and range matching.

Cleaning follows the usual package-manager convention: surrounding whitespace
and leading ``=``/``v`` characters are dropped, the rest must be a complete
``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` version. Build metadata is not part
of the cleaned form.

Supported range comparators:
- exact versions ("1.2.3", "=1.2.3")
- ordering comparators (">=1.2.3", "<2", ">1.2")
- caret ranges ^x.y.z -> >=x.y.z,<(x+1).0.0-0 (leftmost non-zero part fixed)
- tilde ranges ~x.y.z -> >=x.y.z,<x.(y+1).0-0 (~x -> <(x+1).0.0-0)
- comparator sets split by spaces or commas (AND), alternatives split by "||"
"""

from __future__ import annotations

import re

from semver import Version

_LEADING_RE = re.compile(r"^[=v]+")
_OPERATOR_GAP_RE = re.compile(r"(>=|<=|>|<|=|\^|~)\s+")
_COMPARATOR_RE = re.compile(
    r"^(>=|<=|>|<|=|\^|~)?v?"
    r"(0|[1-9]\d*)"
    r"(?:\.(0|[1-9]\d*)"
    r"(?:\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?)?)?$"
)


def parse_semver(text: str | None) -> Version | None:
    if not isinstance(text, str):
        return None
    candidate = _LEADING_RE.sub("", text.strip())
    try:
        version = Version.parse(candidate)
    except ValueError:
        return None
    return version.replace(build=None)


def clean(text: str | None) -> str | None:
    """Return the canonical form of ``text`` or None when it is not a version."""
    version = parse_semver(text)
    if version is None:
        return None
    return str(version)


def _floor(major: int, minor: int = 0, patch: int = 0) -> Version:
    # lowest possible version with this release triple, prereleases included
    return Version(major, minor, patch, prerelease="0")


def _desugar(token: str) -> list[tuple[str, Version]]:
    m = _COMPARATOR_RE.match(token)
    if not m:
        raise ValueError(f"Invalid comparator: {token!r}")
    op = m.group(1) or "="
    major = int(m.group(2))
    minor = int(m.group(3)) if m.group(3) is not None else None
    patch = int(m.group(4)) if m.group(4) is not None else None
    full = minor is not None and patch is not None
    lower = Version(major, minor or 0, patch or 0, prerelease=m.group(5) if full else None)

    if minor is None:
        next_up = _floor(major + 1)
    else:
        next_up = _floor(major, minor + 1)

    if op == "=":
        if full:
            return [("=", lower)]
        return [(">=", lower), ("<", next_up)]
    if op == ">=":
        return [(">=", lower)]
    if op == ">":
        if full:
            return [(">", lower)]
        return [(">=", next_up.replace(prerelease=None))]
    if op == "<":
        if full:
            return [("<", lower)]
        return [("<", lower.replace(prerelease="0"))]
    if op == "<=":
        if full:
            return [("<=", lower)]
        return [("<", next_up)]
    if op == "~":
        return [(">=", lower), ("<", next_up)]

    # caret
    if major != 0 or minor is None:
        upper = _floor(major + 1)
    elif minor != 0 or patch is None:
        upper = _floor(0, minor + 1)
    else:
        upper = _floor(0, 0, patch + 1)
    return [(">=", lower), ("<", upper)]


def parse_range(range_expr: str) -> list[list[tuple[str, Version]]]:
    """Parse a range expression into alternatives of primitive comparators."""
    alternatives: list[list[tuple[str, Version]]] = []
    for alternative in (range_expr or "").split("||"):
        glued = _OPERATOR_GAP_RE.sub(r"\1", alternative.strip())
        comparators: list[tuple[str, Version]] = []
        for token in re.split(r"[\s,]+", glued):
            if token:
                comparators.extend(_desugar(token))
        alternatives.append(comparators)
    return alternatives


def _test(version: Version, op: str, bound: Version) -> bool:
    cmp = version.compare(bound)
    if op == "=":
        return cmp == 0
    if op == ">=":
        return cmp >= 0
    if op == ">":
        return cmp > 0
    if op == "<=":
        return cmp <= 0
    return cmp < 0


def satisfies(version: str | Version, range_expr: str) -> bool:
    """Check ``version`` against ``range_expr``.

    Raises ValueError when the range itself cannot be parsed; an unparseable
    version simply does not satisfy anything.
    """
    v = version if isinstance(version, Version) else parse_semver(version)
    alternatives = parse_range(range_expr)
    if v is None:
        return False
    return any(all(_test(v, op, bound) for op, bound in comparators) for comparators in alternatives)

