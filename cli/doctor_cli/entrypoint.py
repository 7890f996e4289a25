from __future__ import annotations

import sys

from .main import COMMANDS


def _with_default_command(argv: list[str]) -> list[str]:
    # `doctor doctor.toml` is shorthand for `doctor verify doctor.toml`
    for i, arg in enumerate(argv):
        if arg.startswith("-"):
            continue
        if arg in COMMANDS:
            return argv
        return [*argv[:i], "verify", *argv[i:]]
    return argv


def main() -> None:
    from .main import app

    sys.argv = [sys.argv[0], *_with_default_command(sys.argv[1:])]
    app()


if __name__ == "__main__":
    main()
