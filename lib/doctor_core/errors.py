from __future__ import annotations


class DoctorError(Exception):
    """Base doctor error."""


class ConfigError(DoctorError):
    """Invalid or unreadable configuration."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class CheckerNotFoundError(DoctorError):
    def __init__(self, binary: str):
        super().__init__(f"No checker configured for binary: {binary}")
        self.binary = binary
