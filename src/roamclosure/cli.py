"""Root CLI group for roamclosure with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from roamclosure import __version__
from roamclosure.commands import register_commands
from roamclosure.commands._base import RoamGroup
from roamclosure.commands._context import AppContext
from roamclosure.config.settings import RoamSettings


@click.group(cls=RoamGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="roamclosure")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Bare paths, one per line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and error detail.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--db",
    "db_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="org-roam database (default: ~/.emacs.d/org-roam.db).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    db_path: Path | None,
) -> None:
    """roamclosure — collect the notes and assets an org-roam note pulls in."""
    settings = RoamSettings.from_cli(
        config_path=config_path,
        db_path=db_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
