"""CLI package for hustle.

- __init__: the click command and exit-code mapping
- run: invocation flow (verb -> identity -> engine)
- utils: console output helpers
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from .. import __version__
from ..config import ConfigStore
from ..errors import HustleError, UnrecognizedVerbError
from ..logging import set_debug
from ..run_config import RunConfig
from .run import dispatch
from .utils import report_error, report_unrecognized

__all__ = ["cli", "main"]

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    # Everything after the verb is forwarded untouched
    "allow_interspersed_args": False,
    "ignore_unknown_options": True,
}


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.option("-d", "daemonize", is_flag=True, help="Run the container in the background")
@click.option("--env", "-e", help="Environment (development or production)")
@click.option("--no-links", is_flag=True, help="Do not mount the app volume")
@click.option("--link", "-l", help="Volume mount flags (default: -v $(pwd)/myapp:/myapp)")
@click.option("--force", "-f", is_flag=True, help="Force removal of containers and images")
@click.option("--ports", "-p", help="Port mapping ext:int (default: 3000:3000)")
@click.option("--service", "-s", help="Target the container named by {SERVICE}_CONTAINER_NAME")
@click.argument("verb", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.version_option(version=__version__, prog_name="hustle")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    daemonize: bool,
    env: str | None,
    no_links: bool,
    link: str | None,
    force: bool,
    ports: str | None,
    service: str | None,
    verb: str | None,
    args: tuple[str, ...],
) -> None:
    """hustle - short verbs for your development container.

    \b
    Verbs:
      new <base-image>   Bootstrap an app and save CONTAINER_NAME to .env
      start | s          Run the container
      stop               Stop the container
      rm                 Remove the container
      restart | r        Stop, remove and start
      pristine           Stop, remove and delete the image
      build | rebuild    Build the image
      debug              Run the image with a bash entrypoint
      shell              Open a shell in the running container
      run <cmd>          Run a command in the container
      run-hard <cmd>     Same, replacing this process
    """
    if verbose:
        set_debug(True)

    if verb is None:
        click.echo(ctx.get_help())
        return

    config = RunConfig.from_cli(
        daemonize=daemonize,
        env=env,
        no_links=no_links,
        link=link,
        force=force,
        ports=ports,
        service=service,
        verbose=verbose,
    )

    try:
        dispatch(config, verb, args, cwd=Path.cwd(), home=Path.home(), environ=os.environ)
    except UnrecognizedVerbError as e:
        report_unrecognized(e, config, ConfigStore.in_directory(Path.cwd()))
        sys.exit(e.exit_code)
    except HustleError as e:
        report_error(e)
        sys.exit(e.exit_code)


def main() -> None:
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
