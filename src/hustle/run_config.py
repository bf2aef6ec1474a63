"""Run configuration dataclass for hustle.

Bundles CLI flags into a single immutable value that is threaded through
the resolver, the command catalog and the lifecycle engine.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_ENVIRONMENT, DEFAULT_PORTS, PRODUCTION_ENVIRONMENT


@dataclass(frozen=True)
class RunConfig:
    """Configuration for a single hustle invocation.

    Immutable dataclass built once at startup from the CLI flags.
    ``link`` is None for the default volume mount and "" to disable it.
    """

    daemonize: bool = False
    environment: str = DEFAULT_ENVIRONMENT
    link: str | None = None
    force: bool = False
    ports: str = DEFAULT_PORTS
    service: str | None = None
    verbose: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION_ENVIRONMENT

    @classmethod
    def from_cli(
        cls,
        *,
        daemonize: bool = False,
        env: str | None = None,
        no_links: bool = False,
        link: str | None = None,
        force: bool = False,
        ports: str | None = None,
        service: str | None = None,
        verbose: bool = False,
    ) -> RunConfig:
        """Create RunConfig from CLI arguments.

        Handles argument transformation (e.g., --no-links -> link="").
        """
        return cls(
            daemonize=daemonize,
            environment=env or DEFAULT_ENVIRONMENT,
            link="" if no_links else link,
            force=force,
            ports=ports or DEFAULT_PORTS,
            service=service or None,
            verbose=verbose,
        )
