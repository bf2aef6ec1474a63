"""Unified exception hierarchy for hustle.

All custom exceptions inherit from HustleError for consistent error handling.
The CLI catches these and converts them to console output plus an exit code.

Dependency direction:
    This module has NO internal dependencies (leaf module).
    It may be imported by: all other hustle modules.
    It should NOT import from any other hustle modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from .commands import Command


class HustleError(Exception):
    """Base exception for all hustle errors.

    All hustle-specific exceptions should inherit from this class.
    This enables consistent error handling at the CLI layer.
    """

    exit_code = 1


class ConfigError(HustleError):
    """Configuration-related errors.

    Examples:
        - Missing dotfile
        - Missing per-service container name
    """


class ConfigNotFoundError(ConfigError):
    """Raised when the persisted container-name dotfile does not exist."""

    def __init__(self, path: Path, key: str | None = None) -> None:
        self.path = path
        self.key = key
        if key:
            message = f"{key} is missing from {path}"
        else:
            message = f"Config file not found: {path}"
        super().__init__(f"{message} (run 'hustle new <base-image>' first)")


class ServiceNotConfiguredError(ConfigError):
    """Raised when a --service has no container name in .hustlerc or the environment."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No value for key {key} in .hustlerc or environment")


class ArityError(HustleError):
    """Raised when a verb receives the wrong number of arguments."""

    def __init__(self, syntax: str) -> None:
        self.syntax = syntax
        super().__init__(f"Syntax: {syntax}")


class UnrecognizedVerbError(HustleError):
    """Raised when a verb matches neither a known keyword nor a run alias."""

    def __init__(self, verb: str, run_syntax: str = "") -> None:
        self.verb = verb
        self.run_syntax = run_syntax
        super().__init__(f"hustle '{verb}' does not exist. Run 'hustle --help'")


class ValidationError(HustleError):
    """Input validation errors.

    Examples:
        - Empty base image name
    """


class EngineError(HustleError):
    """Container engine operation errors.

    Base class for all engine-related exceptions.
    """


class EngineNotFoundError(EngineError):
    """Raised when the container engine is not installed or not in PATH."""


class SubcommandError(EngineError):
    """Raised when an executed engine command exits non-zero.

    The exit status is propagated as the process exit code.
    """

    def __init__(self, command: Command, returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        # Killed by signal N -> 128 + N, like a shell
        self.exit_code = returncode if returncode > 0 else 128 - returncode
        super().__init__(f"Command failed with exit status {returncode}: {command}")
