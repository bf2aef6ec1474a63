"""Invocation flow for hustle.

Parses the verb, resolves the container identity and hands off to the
lifecycle engine.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from ..commands import detect_mode
from ..config import ConfigStore, load_run_aliases, run_aliases_override
from ..errors import UnrecognizedVerbError
from ..lifecycle import (
    Action,
    LifecycleEngine,
    compile_alias_pattern,
    new_app,
    parse_invocation,
    perform,
)
from ..logging import get_logger
from ..resolver import resolve_target
from ..run_config import RunConfig
from ..runner import Runner, execute

logger = get_logger(__name__)


def run_syntax(aliases: Sequence[str]) -> str:
    """Usage line for forwarding a command into the container."""
    return f"hustle [{'|'.join(aliases)}] <command> [args...]"


def dispatch(
    config: RunConfig,
    verb: str,
    args: Sequence[str],
    *,
    cwd: Path,
    home: Path,
    environ: Mapping[str, str] | None = None,
    runner: Runner = execute,
) -> None:
    """Execute one hustle invocation.

    Raises:
        UnrecognizedVerbError: If the verb is neither a keyword nor a run alias.
        ArityError: If ``new`` does not get exactly one argument.
        ConfigNotFoundError: If .env is needed but missing.
        SubcommandError: If an engine command fails.
    """
    mode = detect_mode(cwd)
    store = ConfigStore.in_directory(cwd)
    aliases = load_run_aliases(cwd=cwd, home=home, override=run_aliases_override(environ))
    invocation = parse_invocation(verb, args, compile_alias_pattern(aliases))
    logger.debug("Invocation: %s %s", invocation.action.value, list(invocation.args))

    if invocation.action is Action.UNRECOGNIZED:
        raise UnrecognizedVerbError(verb, run_syntax=run_syntax(aliases))

    if invocation.action is Action.NEW:
        new_app(invocation.args, config=config, store=store, mode=mode, runner=runner, cwd=cwd)
        return

    identity = resolve_target(config, store, cwd=cwd, home=home, environ=environ)
    engine = LifecycleEngine(config, identity, mode, runner, cwd)
    perform(engine, invocation)
