"""Command catalog: (verb, mode) -> engine command.

Commands are built as argument lists and only flattened to a string for
display. Compose mode covers start/stop/build/remove; every other verb
falls back to its direct-mode command.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .constants import COMPOSE_ENGINE, COMPOSE_FILE, DEFAULT_LINK, ENGINE, PWD_TOKEN, SHELL_PATH
from .logging import get_logger
from .run_config import RunConfig

logger = get_logger(__name__)


class Verb(str, Enum):
    """Atomic engine operations."""

    START = "start"
    STOP = "stop"
    REMOVE = "remove"
    REMOVE_IMAGE = "remove_image"
    BUILD = "build"
    DEBUG = "debug"
    SHELL = "shell"
    EXEC = "exec"


class Mode(str, Enum):
    """Command construction strategy."""

    COMPOSE = "compose"
    DIRECT = "direct"


@dataclass(frozen=True)
class Command:
    """A fully resolved engine command."""

    program: str
    args: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True for no-op commands (compose-mode remove)."""
        return not self.args

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


def detect_mode(cwd: Path) -> Mode:
    """Compose mode if a compose manifest exists in ``cwd``, else direct."""
    mode = Mode.COMPOSE if (cwd / COMPOSE_FILE).is_file() else Mode.DIRECT
    logger.debug("Command mode: %s", mode.value)
    return mode


def daemonize_flag(config: RunConfig) -> list[str]:
    return ["-d"] if config.daemonize else []


def ports_flag(config: RunConfig) -> list[str]:
    return ["-p", config.ports] if config.ports else []


def link_flag(config: RunConfig, cwd: Path | None = None) -> list[str]:
    """Volume mount arguments.

    ``config.link`` of None means the default mount, "" disables it.
    ``$(pwd)`` is expanded since commands do not go through a shell.
    """
    link = DEFAULT_LINK if config.link is None else config.link
    tokens = shlex.split(link)
    if not any(PWD_TOKEN in token for token in tokens):
        return tokens
    # Split before expanding: the directory may contain spaces
    pwd = str(cwd or Path.cwd())
    return [token.replace(PWD_TOKEN, pwd) for token in tokens]


def force_flag(config: RunConfig) -> list[str]:
    return ["-f"] if config.force else []


@dataclass(frozen=True)
class CommandContext:
    """Inputs shared by every template."""

    config: RunConfig
    identity: str
    cmd: tuple[str, ...] = ()
    cwd: Path | None = None


Template = Callable[[CommandContext], list[str]]


def _start(ctx: CommandContext) -> list[str]:
    return [
        "run",
        *ports_flag(ctx.config),
        *link_flag(ctx.config, ctx.cwd),
        *daemonize_flag(ctx.config),
        "--name",
        ctx.identity,
        ctx.identity,
    ]


def _exec(ctx: CommandContext) -> list[str]:
    return ["exec", "-i", "-t", ctx.identity, "sh", "-c", shlex.join(ctx.cmd)]


DIRECT_TEMPLATES: dict[Verb, Template] = {
    Verb.START: _start,
    Verb.STOP: lambda ctx: ["stop", ctx.identity],
    Verb.REMOVE: lambda ctx: ["rm", *force_flag(ctx.config), ctx.identity],
    Verb.REMOVE_IMAGE: lambda ctx: ["rmi", *force_flag(ctx.config), ctx.identity],
    Verb.BUILD: lambda ctx: ["build", ".", "--no-cache=true", "-t", ctx.identity],
    Verb.DEBUG: lambda ctx: ["run", "-it", f"--entrypoint={SHELL_PATH}", ctx.identity, "-s"],
    Verb.SHELL: lambda ctx: ["exec", "-i", "-t", ctx.identity, "sh", "-c", SHELL_PATH],
    Verb.EXEC: _exec,
}

COMPOSE_TEMPLATES: dict[Verb, Template] = {
    Verb.START: lambda ctx: ["up", *daemonize_flag(ctx.config)],
    Verb.STOP: lambda ctx: ["down"],
    Verb.BUILD: lambda ctx: ["build"],
    Verb.REMOVE: lambda ctx: [],
}


def build_command(
    verb: Verb,
    mode: Mode,
    config: RunConfig,
    identity: str,
    *,
    cmd: Sequence[str] = (),
    cwd: Path | None = None,
) -> Command:
    """Build the engine command for a verb.

    Args:
        verb: Operation to perform.
        mode: Compose or direct; see detect_mode().
        config: Invocation flags (ports, link, daemonize, force).
        identity: Resolved container name.
        cmd: In-container command for Verb.EXEC.
        cwd: Working directory for ``$(pwd)`` expansion.

    Returns:
        The command; compose-mode remove yields an empty (no-op) command.
    """
    ctx = CommandContext(config=config, identity=identity, cmd=tuple(cmd), cwd=cwd)
    if mode is Mode.COMPOSE and verb in COMPOSE_TEMPLATES:
        command = Command(COMPOSE_ENGINE, tuple(COMPOSE_TEMPLATES[verb](ctx)))
    else:
        command = Command(ENGINE, tuple(DIRECT_TEMPLATES[verb](ctx)))
    logger.debug("Built %s/%s command: %s", verb.value, mode.value, command.argv)
    return command
