"""Configuration files for hustle.

Two KEY=VALUE files are involved:

- ``.env`` in the working directory holds the persisted container name
  (ConfigStore). It is written only by ``hustle new``.
- ``.hustlerc`` in the working directory or home directory holds optional
  overrides: run-verb aliases and per-service container names.

There is no locking; concurrent invocations writing ``.env`` race.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .constants import (
    CONTAINER_NAME_KEY,
    DEFAULT_RUN_ALIASES,
    DOT_FILE,
    RC_FILE,
    RUN_ALIASES_ENV,
    RUN_ALIASES_KEY,
)
from .errors import ConfigNotFoundError
from .logging import get_logger

logger = get_logger(__name__)


def parse_env_text(text: str) -> dict[str, str]:
    """Parse KEY=VALUE lines.

    Each line is split on the first ``=`` and both sides are stripped.
    Blank lines, ``#`` comments and lines without ``=`` are skipped, and
    a leading ``export`` is ignored. The last occurrence of a key wins.
    """
    entries: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export ") :].strip()
        if key:
            entries[key] = value.strip()
    return entries


def format_env_text(entries: Mapping[str, str]) -> str:
    """Render entries as one KEY=VALUE line each."""
    return "".join(f"{key}={value}\n" for key, value in entries.items())


@dataclass(frozen=True)
class ConfigStore:
    """Reads and writes the persisted container-name mapping."""

    path: Path

    @classmethod
    def in_directory(cls, cwd: Path) -> ConfigStore:
        return cls(cwd / DOT_FILE)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> dict[str, str]:
        """Load all entries.

        Raises:
            ConfigNotFoundError: If the dotfile does not exist.
        """
        if not self.exists():
            raise ConfigNotFoundError(self.path)
        entries = parse_env_text(self.path.read_text(encoding="utf-8"))
        logger.debug("Loaded %d entries from %s", len(entries), self.path)
        return entries

    def save(self, entries: Mapping[str, str]) -> None:
        """Overwrite the dotfile with one KEY=VALUE line per entry."""
        self.path.write_text(format_env_text(entries), encoding="utf-8")
        logger.debug("Saved %s", self.path)

    def container_name(self, entries: Mapping[str, str] | None = None) -> str:
        """Return the persisted CONTAINER_NAME.

        ``entries`` is a previous load() result; the file is read when omitted.

        Raises:
            ConfigNotFoundError: If the dotfile or the key is missing.
        """
        if entries is None:
            entries = self.load()
        if CONTAINER_NAME_KEY not in entries:
            raise ConfigNotFoundError(self.path, CONTAINER_NAME_KEY)
        return entries[CONTAINER_NAME_KEY]


def load_rc_files(cwd: Path, home: Path) -> list[dict[str, str]]:
    """Load .hustlerc from the working directory, then the home directory.

    Missing files are skipped. The result is ordered by lookup priority.
    """
    found: list[dict[str, str]] = []
    seen: set[Path] = set()
    for directory in (cwd, home):
        rc_path = directory / RC_FILE
        if not rc_path.is_file() or rc_path.resolve() in seen:
            continue
        seen.add(rc_path.resolve())
        try:
            found.append(parse_env_text(rc_path.read_text(encoding="utf-8")))
        except OSError as e:
            logger.warning("Cannot read %s: %s", rc_path, e)
    return found


def lookup_setting(
    key: str,
    *,
    cwd: Path,
    home: Path,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Look up a key in .hustlerc (cwd, then home), then the environment."""
    for rc in load_rc_files(cwd, home):
        if key in rc:
            return rc[key]
    env = os.environ if environ is None else environ
    return env.get(key)


def load_run_aliases(
    *,
    cwd: Path,
    home: Path,
    override: str | None = None,
) -> list[str]:
    """Return the run-verb allow-list.

    Priority: explicit override, then RUN_ALIASES from .hustlerc
    (cwd, then home), then the literal default ``run``.
    """
    raw = override
    if raw is None:
        for rc in load_rc_files(cwd, home):
            if RUN_ALIASES_KEY in rc:
                raw = rc[RUN_ALIASES_KEY]
                break
    if raw is None:
        raw = DEFAULT_RUN_ALIASES
    aliases = [alias.strip() for alias in raw.split(",") if alias.strip()]
    return aliases or [DEFAULT_RUN_ALIASES]


def run_aliases_override(environ: Mapping[str, str] | None = None) -> str | None:
    env = os.environ if environ is None else environ
    return env.get(RUN_ALIASES_ENV)
