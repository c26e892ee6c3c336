"""Exception types shared by the semi-cli commands."""

from __future__ import annotations


class SemiError(Exception):
    """Base exception for failures that end an invocation with an exit code."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.exit_code = exit_code
        super().__init__(message)


class ScaffoldError(SemiError):
    """Raised when a project directory cannot be prepared or written."""


class InstallError(SemiError):
    """Raised when a package-manager process exits non-zero."""

    def __init__(self, message: str, command: str = "", exit_code: int = 1) -> None:
        self.command = command
        super().__init__(message, exit_code=exit_code)
