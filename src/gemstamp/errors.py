"""Exception types raised while resolving and scaffolding gems."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class GemstampError(RuntimeError):
    """Base class for user facing errors reported by the command line."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UsageError(GemstampError):
    """Raised when the argument list cannot be parsed."""


class PathRequiredError(GemstampError):
    """Raised when ``new`` is invoked without a target path."""

    def __init__(self) -> None:
        super().__init__("Error: Path is required\nUsage: gemstamp new PATH")


class TargetExistsError(GemstampError):
    """Raised when the target path is already present on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Error: Directory '{path}' already exists")


class DirectoryNotEmptyError(GemstampError):
    """Raised when ``new .`` finds entries outside the allow-list."""

    def __init__(self, found: Iterable[str], allowed: Iterable[str]) -> None:
        self.found = tuple(found)
        self.allowed = tuple(allowed)
        super().__init__(
            "Error: Current directory is not empty\n"
            f"Found files: {', '.join(self.found)}\n"
            f"Only these files are allowed: {', '.join(self.allowed)}"
        )


class ConfigurationError(GemstampError):
    """Raised when the GEMSTAMP_* environment variables hold invalid values."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Error: Invalid environment settings: {reason}")


class UnknownCommandError(GemstampError):
    """Raised when the first argument is not a recognised command."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unknown command: {command}")


__all__ = [
    "ConfigurationError",
    "DirectoryNotEmptyError",
    "GemstampError",
    "PathRequiredError",
    "TargetExistsError",
    "UnknownCommandError",
    "UsageError",
]
