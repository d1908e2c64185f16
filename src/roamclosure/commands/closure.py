"""Commands: closure and refs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roamclosure.commands._base import RoamCommand
from roamclosure.domain.files import RoamFile
from roamclosure.services.closure import ClosureService

if TYPE_CHECKING:
    from roamclosure.commands._context import AppContext


@click.command(
    cls=RoamCommand,
    examples="""\
  roamclosure closure ~/roam/project.org
  roamclosure closure ~/roam/a.org ~/roam/b.org --exclude '*/journal/*'
  roamclosure -q closure ~/roam/project.org | tar -czf project.tgz -T -
  roamclosure --json closure ~/roam/project.org""",
)
@click.argument("seeds", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "-x",
    "--exclude",
    "exclude",
    multiple=True,
    help="Glob of note paths not to expand (repeatable; added to [closure] exclude).",
)
@click.pass_obj
def closure(app: AppContext, seeds: tuple[str, ...], exclude: tuple[str, ...]) -> None:
    """Find every note and asset reachable from SEEDS."""
    patterns = [*app.settings.closure.exclude, *exclude]
    notes = [RoamFile.of(seed) for seed in seeds]
    app.emit(ClosureService(app.store).closure(notes, exclude_patterns=patterns))


@click.command(
    cls=RoamCommand,
    examples="""\
  roamclosure refs ~/roam/project.org
  roamclosure --json refs ~/roam/project.org""",
)
@click.argument("note", type=click.Path(dir_okay=False))
@click.pass_obj
def refs(app: AppContext, note: str) -> None:
    """List the notes and assets NOTE links to directly."""
    app.emit(ClosureService(app.store).references(RoamFile.of(note)))
