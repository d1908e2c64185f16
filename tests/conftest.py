"""Shared pytest fixtures and test helpers for roamclosure tests."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import insert
from sqlalchemy.engine import Engine

from roamclosure.domain.files import RoamFile, encode_elisp_string
from roamclosure.infrastructure.database.engine import create_store_engine
from roamclosure.infrastructure.database.schema import (
    FILE_LINK,
    ID_LINK,
    files,
    links,
    metadata,
    nodes,
)
from roamclosure.infrastructure.store import Store


class RoamDb:
    """Builds an org-roam database the way org-roam itself writes it.

    Every TEXT value is elisp-encoded; each note gets one file-level node
    (level 0) whose id is the note's name.
    """

    def __init__(self, engine: Engine, db_path: Path, root: Path) -> None:
        self.engine = engine
        self.db_path = db_path
        self.root = root
        self._pos = itertools.count(1)
        self._node_ids: dict[RoamFile, str] = {}

    def note(self, name: str, *, create: bool = False) -> RoamFile:
        """Index a note at ``{root}/{name}.org``; *create* also writes the file."""
        path = self.root / f"{name}.org"
        if create:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"#+title: {name}\n", encoding="utf-8")
        note = RoamFile(str(path))
        with self.engine.begin() as conn:
            conn.execute(
                insert(files).values(
                    file=note.to_sql(),
                    title=encode_elisp_string(name),
                    hash=encode_elisp_string(name),
                    atime='"(0 0 0 0)"',
                    mtime='"(0 0 0 0)"',
                )
            )
        self.heading(note, name, level=0)
        self._node_ids[note] = name
        return note

    def heading(self, note: RoamFile, node_id: str, *, level: int = 1) -> str:
        """Add a node with id *node_id* inside *note*."""
        with self.engine.begin() as conn:
            conn.execute(
                insert(nodes).values(
                    id=encode_elisp_string(node_id),
                    file=note.to_sql(),
                    level=level,
                    pos=1,
                    title=encode_elisp_string(node_id),
                )
            )
        return node_id

    def link(self, source: RoamFile, dest: RoamFile | str, *, from_node: str | None = None) -> None:
        """Add an ``id:`` link from *source* to a note or a node id."""
        dest_id = self._node_ids[dest] if isinstance(dest, RoamFile) else dest
        self._insert_link(from_node or self._node_ids[source], encode_elisp_string(dest_id), ID_LINK)

    def file_link(self, source: RoamFile, target: str) -> None:
        """Add a ``file:`` link from *source* to the raw *target* string."""
        self._insert_link(self._node_ids[source], encode_elisp_string(target), FILE_LINK)

    def raw_link(self, source: RoamFile, dest: str, link_type: str) -> None:
        """Add a link with already-encoded *dest* and *link_type*."""
        self._insert_link(self._node_ids[source], dest, link_type)

    def _insert_link(self, source_id: str, dest: str, link_type: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                insert(links).values(
                    pos=next(self._pos),
                    source=encode_elisp_string(source_id),
                    dest=dest,
                    type=link_type,
                    properties="nil",
                )
            )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def roam_root(tmp_path: Path) -> Path:
    """Directory holding the note files."""
    root = tmp_path / "roam"
    root.mkdir()
    return root


@pytest.fixture
def roam_db(tmp_path: Path, roam_root: Path) -> Iterator[RoamDb]:
    """Empty org-roam database at ``{tmp_path}/org-roam.db``."""
    db_path = tmp_path / "org-roam.db"
    engine = create_store_engine(db_path, read_only=False)
    metadata.create_all(engine)
    try:
        yield RoamDb(engine, db_path, roam_root)
    finally:
        engine.dispose()


@pytest.fixture
def store(roam_db: RoamDb) -> Iterator[Store]:
    """Read-only store over ``roam_db``."""
    s = Store(roam_db.db_path)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty directory with no config discovery side effects."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ROAMCLOSURE_CONFIG", raising=False)
    monkeypatch.delenv("ROAMCLOSURE_DATABASE__LOCATION", raising=False)
