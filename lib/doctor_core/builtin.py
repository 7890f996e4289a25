from __future__ import annotations

import json
import re

from .checker_types import BinaryChecker

_SEMVER_TRIPLE = r"(\d+\.\d+\.\d+)"


def _docker_json(output: str) -> dict:
    try:
        data = json.loads(output)
    except (TypeError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def parse_docker_version(output: str) -> str | None:
    client = _docker_json(output).get("Client")
    if not isinstance(client, dict):
        return None
    version = client.get("Version")
    return str(version) if version else None


def parse_docker_components(output: str) -> dict[str, str] | None:
    data = _docker_json(output)
    components: dict[str, str] = {}

    client = data.get("Client")
    if isinstance(client, dict) and client.get("Version"):
        components["Client"] = str(client["Version"])

    server = data.get("Server")
    if isinstance(server, dict):
        if server.get("Version"):
            components["Server"] = str(server["Version"])
        for comp in server.get("Components") or []:
            if isinstance(comp, dict) and comp.get("Name") and comp.get("Version"):
                components[str(comp["Name"])] = str(comp["Version"])

    return components or None


COMMON_CHECKERS: dict[str, BinaryChecker] = {
    "node": BinaryChecker(name="node", parse_version=re.compile(r"v?" + _SEMVER_TRIPLE)),
    "npm": BinaryChecker(name="npm", parse_version=_SEMVER_TRIPLE),
    "pnpm": BinaryChecker(name="pnpm", parse_version=re.compile(_SEMVER_TRIPLE)),
    "git": BinaryChecker(name="git", parse_version=re.compile(r"git version " + _SEMVER_TRIPLE)),
    "docker": BinaryChecker(
        name="docker",
        version_flag=["version", "-f", "json"],
        parse_version=parse_docker_version,
        parse_components=parse_docker_components,
    ),
    "python": BinaryChecker(name="python", parse_version=re.compile(r"Python " + _SEMVER_TRIPLE)),
    "python3": BinaryChecker(name="python3", parse_version=re.compile(r"Python " + _SEMVER_TRIPLE)),
    "bun": BinaryChecker(name="bun", parse_version=re.compile(_SEMVER_TRIPLE)),
}
