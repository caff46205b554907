"""CLI entrypoint for stillalive."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

import rich_click as click

from stillalive import __version__
from stillalive.config import Settings
from stillalive.controllers import SuperviseCommand, SupervisorCliController
from stillalive.tasks.models import ConfigurationError

click.rich_click.USE_MARKDOWN = True
SUPERVISOR_CONTROLLER = SupervisorCliController()


def _show_help_and_fail(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help())
    ctx.exit(1)


@click.command(add_help_option=False)
@click.version_option(version=__version__, prog_name="stillalive")
@click.option(
    "--dry",
    is_flag=True,
    default=False,
    help="Dry run (won't actually execute any tasks).",
)
@click.option(
    "--pool",
    default=None,
    metavar="<pool-id>",
    help=(
        "Only tasks in this pool will be kept alive. If not specified, only tasks "
        "with no pool target will be kept alive on this node."
    ),
)
@click.option("--verbose", is_flag=True, default=False, help="Be verbose in output.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Settings file. Defaults to STILLALIVE_CONFIG_PATH or ./localSettings.json.",
)
@click.option(
    "--help",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_show_help_and_fail,
    help="Show this message.",
)
@click.pass_context
def stillalive(
    ctx: click.Context,
    dry: bool,
    pool: str | None,
    verbose: bool,
    config_path: Path | None,
) -> None:
    """Ensure that all configured tasks are running.

    Meant to be invoked repeatedly, for example from cron.
    """

    try:
        _configure_logging(verbose=verbose)
        _emit_lines(
            SUPERVISOR_CONTROLLER.run(
                SuperviseCommand(
                    config_path=config_path,
                    dry=dry,
                    verbose=verbose,
                    pool=pool,
                ),
            ),
        )
    except ConfigurationError as error:
        click.echo(str(error))
        ctx.exit(1)


def _configure_logging(*, verbose: bool) -> None:
    level_name = "DEBUG" if verbose else Settings.from_env().log_level
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _emit_lines(lines: Iterable[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    stillalive()
