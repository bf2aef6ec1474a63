"""Lifecycle engine: CLI verbs -> ordered engine commands.

Compound verbs run their steps strictly in order. A step whose exit
status is non-zero raises SubcommandError, so later steps never run and
the compound verb fails with that status.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .commands import Command, Mode, Verb, build_command
from .config import ConfigStore
from .constants import APP_COPY_PATH, CONTAINER_NAME_KEY, ENGINE
from .errors import ArityError, SubcommandError
from .logging import get_logger
from .naming import generate_container_name
from .run_config import RunConfig
from .runner import CommandResult, ExecMode, Runner, execute

console = Console()
logger = get_logger(__name__)

NEW_SYNTAX = "hustle new <base-image>"
RUN_SYNTAX = "hustle run <command> [args...]"


class Action(str, Enum):
    """Everything the first CLI token can select."""

    NEW = "new"
    START = "start"
    STOP = "stop"
    REMOVE = "rm"
    RESTART = "restart"
    PRISTINE = "pristine"
    BUILD = "build"
    DEBUG = "debug"
    SHELL = "shell"
    RUN = "run"
    RUN_HARD = "run-hard"
    UNRECOGNIZED = "unrecognized"


# Keyword (and short alias) -> action
ACTION_KEYWORDS: dict[str, Action] = {
    "new": Action.NEW,
    "start": Action.START,
    "s": Action.START,
    "stop": Action.STOP,
    "rm": Action.REMOVE,
    "remove": Action.REMOVE,
    "restart": Action.RESTART,
    "r": Action.RESTART,
    "pristine": Action.PRISTINE,
    "build": Action.BUILD,
    "rebuild": Action.BUILD,
    "debug": Action.DEBUG,
    "shell": Action.SHELL,
    "run": Action.RUN,
    "run-hard": Action.RUN_HARD,
}


@dataclass(frozen=True)
class Invocation:
    """A parsed verb plus the arguments forwarded to it."""

    action: Action
    verb: str
    args: tuple[str, ...] = ()


def compile_alias_pattern(aliases: Sequence[str]) -> re.Pattern[str]:
    """Compile run aliases into an alternation; use fullmatch() on the verb."""
    alternation = "|".join(re.escape(alias) for alias in aliases)
    return re.compile(rf"(?:{alternation})")


def parse_invocation(
    verb: str,
    args: Sequence[str],
    alias_pattern: re.Pattern[str],
) -> Invocation:
    """Map the first CLI token onto an Action.

    Known keywords win. A verb matching the alias pattern becomes ``run``
    with the verb itself prepended to the forwarded arguments. Anything
    else is Action.UNRECOGNIZED.
    """
    if verb in ACTION_KEYWORDS:
        return Invocation(ACTION_KEYWORDS[verb], verb, tuple(args))
    if alias_pattern.fullmatch(verb):
        logger.debug("Verb %r matched run alias pattern %s", verb, alias_pattern.pattern)
        return Invocation(Action.RUN, verb, (verb, *args))
    return Invocation(Action.UNRECOGNIZED, verb, tuple(args))


@dataclass(frozen=True)
class LifecycleEngine:
    """Runs atomic and compound verbs against one container identity."""

    config: RunConfig
    identity: str
    mode: Mode
    runner: Runner = execute
    cwd: Path | None = None

    def command(self, verb: Verb, cmd: Sequence[str] = ()) -> Command:
        return build_command(verb, self.mode, self.config, self.identity, cmd=cmd, cwd=self.cwd)

    def run_command(self, command: Command, mode: ExecMode = ExecMode.INHERIT) -> CommandResult:
        """Echo and execute one command.

        Empty commands are no-ops and succeed.

        Raises:
            SubcommandError: If the command exits non-zero.
        """
        if command.is_empty:
            logger.debug("Skipping no-op command for %s", command.program)
            return CommandResult(output="", returncode=0)

        console.print(f"[dim]RUNNING: {escape(str(command))}[/dim]", highlight=False)
        result = self.runner(command, mode)
        if result.output:
            console.print(result.output, end="", markup=False, highlight=False)
        if not result.ok:
            logger.debug("Step failed: %s (exit=%d)", command.argv, result.returncode)
            raise SubcommandError(command, result.returncode)
        return result

    def _step(
        self,
        verb: Verb,
        cmd: Sequence[str] = (),
        mode: ExecMode = ExecMode.INHERIT,
    ) -> CommandResult:
        return self.run_command(self.command(verb, cmd), mode)

    # Atomic verbs

    def start(self) -> CommandResult:
        return self._step(Verb.START)

    def stop(self) -> CommandResult:
        return self._step(Verb.STOP)

    def remove(self) -> CommandResult:
        return self._step(Verb.REMOVE)

    def remove_image(self) -> CommandResult:
        return self._step(Verb.REMOVE_IMAGE)

    def build(self) -> CommandResult:
        return self._step(Verb.BUILD)

    def debug(self) -> CommandResult:
        return self._step(Verb.DEBUG, mode=ExecMode.REPLACE)

    def shell(self) -> CommandResult:
        return self._step(Verb.SHELL, mode=ExecMode.REPLACE)

    def run(self, cmd: Sequence[str]) -> CommandResult:
        """Run a command in the container and return to the caller."""
        if not cmd:
            raise ArityError(RUN_SYNTAX)
        return self._step(Verb.EXEC, cmd, mode=ExecMode.CAPTURE)

    def run_hard(self, cmd: Sequence[str]) -> CommandResult:
        """Run a command in the container, replacing this process."""
        if not cmd:
            raise ArityError(RUN_SYNTAX)
        return self._step(Verb.EXEC, cmd, mode=ExecMode.REPLACE)

    # Compound verbs

    def stop_and_remove(self) -> CommandResult:
        """Stop then remove; compose mode tears down in one ``down``."""
        if self.mode is Mode.COMPOSE:
            return self.stop()
        self.stop()
        return self.remove()

    def restart(self) -> CommandResult:
        self.stop_and_remove()
        return self.start()

    def pristine(self) -> CommandResult:
        self.stop_and_remove()
        return self.remove_image()


def new_app(
    args: Sequence[str],
    *,
    config: RunConfig,
    store: ConfigStore,
    mode: Mode,
    runner: Runner = execute,
    cwd: Path | None = None,
) -> str:
    """Bootstrap a new app from a base image.

    Generates and persists a container name, runs the base image under
    that name, copies /app out of it, tears the bootstrap container down
    and builds the dev image from the copied sources.

    Returns:
        The generated container name.

    Raises:
        ArityError: Unless exactly one argument (the base image) is given.
        SubcommandError: If any step fails; later steps are skipped.
    """
    if len(args) != 1:
        raise ArityError(NEW_SYNTAX)

    base_image = args[0]
    name = generate_container_name(base_image)
    store.save({CONTAINER_NAME_KEY: name})
    console.print(f"[green]{CONTAINER_NAME_KEY}={escape(name)}[/green] saved to {store.path}")

    # The bootstrap container is a plain `docker run`, so tear it down directly
    bootstrap = LifecycleEngine(config, name, Mode.DIRECT, runner, cwd)
    bootstrap.run_command(Command(ENGINE, ("run", "-d", "--name", name, base_image)))
    target_dir = str(cwd) if cwd is not None else "."
    bootstrap.run_command(Command(ENGINE, ("cp", f"{name}:{APP_COPY_PATH}", target_dir)))
    bootstrap.stop_and_remove()

    LifecycleEngine(config, name, mode, runner, cwd).build()
    return name


ActionHandler = Callable[[LifecycleEngine, tuple[str, ...]], CommandResult]

ACTION_HANDLERS: dict[Action, ActionHandler] = {
    Action.START: lambda engine, args: engine.start(),
    Action.STOP: lambda engine, args: engine.stop(),
    Action.REMOVE: lambda engine, args: engine.remove(),
    Action.RESTART: lambda engine, args: engine.restart(),
    Action.PRISTINE: lambda engine, args: engine.pristine(),
    Action.BUILD: lambda engine, args: engine.build(),
    Action.DEBUG: lambda engine, args: engine.debug(),
    Action.SHELL: lambda engine, args: engine.shell(),
    Action.RUN: lambda engine, args: engine.run(args),
    Action.RUN_HARD: lambda engine, args: engine.run_hard(args),
}


def perform(engine: LifecycleEngine, invocation: Invocation) -> CommandResult:
    """Dispatch a parsed invocation (other than new/unrecognized) to the engine."""
    return ACTION_HANDLERS[invocation.action](engine, invocation.args)
