from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0


@dataclass(frozen=True)
class CommandOutput:
    stdout: str
    stderr: str
    returncode: int

    @property
    def text(self) -> str:
        out = (self.stdout or "").strip()
        if out:
            return out
        return (self.stderr or "").strip()


class CommandRunner:
    def __init__(self, timeout_s: float = DEFAULT_TIMEOUT_S):
        self.timeout_s = timeout_s

    def which(self, command: str) -> str | None:
        return shutil.which(command)

    def run(self, command: str, args: Sequence[str]) -> CommandOutput | None:
        """Run ``command`` with ``args``; None when the binary cannot be executed."""
        path = self.which(command)
        if not path:
            logger.debug("Binary %s not found on PATH", command)
            return None
        cmd = [path, *args]
        logger.debug("Running %s", cmd)
        try:
            res = subprocess.run(cmd, text=True, capture_output=True, timeout=self.timeout_s)
        except subprocess.TimeoutExpired:
            logger.debug("Command %s timed out after %ss", cmd, self.timeout_s)
            return None
        except OSError as exc:
            logger.debug("Command %s failed to start: %s", cmd, exc)
            return None
        return CommandOutput(stdout=res.stdout or "", stderr=res.stderr or "", returncode=res.returncode)
