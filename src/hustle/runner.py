"""Execution of engine commands.

Three modes:
- INHERIT runs the command as a blocking subprocess on the terminal's
  stdio, so long-running output (``up``, ``build``) streams live. Only
  the exit status comes back.
- CAPTURE runs the command as a blocking subprocess and returns its
  output and exit status.
- REPLACE execs the command in place of the current process. Control
  never returns, so nothing may be expected to run afterwards.

Ctrl+C during a blocking command yields exit status 130.
"""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, NoReturn, Protocol

from .errors import EngineNotFoundError
from .logging import get_logger

if TYPE_CHECKING:
    from .commands import Command

logger = get_logger(__name__)

INTERRUPTED = 130  # Standard Ctrl+C code


class ExecMode(str, Enum):
    INHERIT = "inherit"
    CAPTURE = "capture"
    REPLACE = "replace"


@dataclass(frozen=True)
class CommandResult:
    """Output and exit status of a command.

    ``output`` is empty unless the command ran in CAPTURE mode.
    """

    output: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Runner(Protocol):
    def __call__(self, command: Command, mode: ExecMode = ExecMode.INHERIT) -> CommandResult: ...


def _run(command: Command, *, capture_output: bool) -> CommandResult:
    logger.debug("Running command: %s (capture=%s)", command.argv, capture_output)
    try:
        result = subprocess.run(
            command.argv,
            capture_output=capture_output,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        logger.error("%s not found in PATH", command.program)
        raise EngineNotFoundError(
            f"{command.program} not found in PATH. Command: {command}"
        ) from e
    except KeyboardInterrupt:
        logger.debug("Interrupted: %s", command.argv)
        return CommandResult(output="", returncode=INTERRUPTED)
    logger.debug("Command completed: exit=%d", result.returncode)
    output = (result.stdout or "") + (result.stderr or "") if capture_output else ""
    return CommandResult(output=output, returncode=result.returncode)


def run_inherited(command: Command) -> CommandResult:
    """Run a command to completion on the terminal's stdio.

    Raises:
        EngineNotFoundError: If the program is not found in PATH.
    """
    return _run(command, capture_output=False)


def run_captured(command: Command) -> CommandResult:
    """Run a command to completion, capturing stdout and stderr.

    Raises:
        EngineNotFoundError: If the program is not found in PATH.
    """
    return _run(command, capture_output=True)


def replace_process(command: Command) -> NoReturn:
    """Replace the current process with the command.

    Raises:
        EngineNotFoundError: If the program cannot be executed.
    """
    logger.debug("Replacing process with: %s", command.argv)
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execvp(command.program, command.argv)
    except OSError as e:
        logger.error("Cannot exec %s: %s", command.program, e)
        raise EngineNotFoundError(f"Cannot execute {command.program}: {e}") from e


def execute(command: Command, mode: ExecMode = ExecMode.INHERIT) -> CommandResult:
    """Execute a command in the given mode (REPLACE never returns)."""
    if mode is ExecMode.INHERIT:
        return run_inherited(command)
    if mode is ExecMode.CAPTURE:
        return run_captured(command)
    replace_process(command)
