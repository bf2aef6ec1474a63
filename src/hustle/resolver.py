"""Target resolution: which container name does this invocation act on?

The identity is computed once per invocation by the CLI layer and passed
explicitly to the lifecycle engine; nothing here caches.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from .config import ConfigStore, lookup_setting
from .constants import PRODUCTION_SUFFIX, SERVICE_KEY_SUFFIX
from .errors import ServiceNotConfiguredError
from .logging import get_logger
from .run_config import RunConfig

logger = get_logger(__name__)


def service_key(service: str) -> str:
    """``web`` -> ``WEB_CONTAINER_NAME``."""
    return f"{service}{SERVICE_KEY_SUFFIX}".upper()


def production_name(dev_name: str) -> str:
    return f"{dev_name}{PRODUCTION_SUFFIX}"


def resolve_target(
    config: RunConfig,
    store: ConfigStore,
    *,
    cwd: Path,
    home: Path,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Resolve the container identity for this invocation.

    Order:
        1. ``--service NAME``: ``{NAME}_CONTAINER_NAME`` from .hustlerc
           (cwd, then home), then the environment.
        2. ``--env production``: the persisted name plus ``-prod``.
        3. Otherwise the persisted ``CONTAINER_NAME``.

    Raises:
        ServiceNotConfiguredError: If the service has no container name.
        ConfigNotFoundError: If .env is missing, even when a service is
            targeted, or lacks CONTAINER_NAME outside service mode.
    """
    entries = store.load()

    if config.service:
        key = service_key(config.service)
        value = lookup_setting(key, cwd=cwd, home=home, environ=environ)
        if not value:
            raise ServiceNotConfiguredError(key)
        logger.debug("Resolved identity %s from %s", value, key)
        return value

    dev_name = store.container_name(entries)
    if config.is_production:
        logger.debug("Resolved production identity for %s", dev_name)
        return production_name(dev_name)

    logger.debug("Resolved identity %s from %s", dev_name, store.path)
    return dev_name
