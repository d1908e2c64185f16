"""Tests for the closure and refs commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from roamclosure.cli import cli
from tests.conftest import RoamDb


def _chain(roam_db: RoamDb, roam_root: Path) -> None:
    """a -> b -> c, with b referencing img/pic.png."""
    a, b, c = roam_db.note("a"), roam_db.note("b"), roam_db.note("c")
    roam_db.link(a, b)
    roam_db.link(b, c)
    (roam_root / "img").mkdir()
    (roam_root / "img" / "pic.png").write_bytes(b"")
    roam_db.file_link(b, "img/pic.png")


@pytest.mark.usefixtures("_isolated_cwd")
class TestClosureCommand:
    def test_json(self, cli_runner: CliRunner, roam_db: RoamDb, roam_root: Path) -> None:
        _chain(roam_db, roam_root)
        result = cli_runner.invoke(
            cli, ["--json", "--db", str(roam_db.db_path), "closure", str(roam_root / "a.org")]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["notes"] == [str(roam_root / n) for n in ("a.org", "b.org", "c.org")]
        assert data["data"]["assets"] == [str((roam_root / "img" / "pic.png").resolve())]

    def test_exclude_option(self, cli_runner: CliRunner, roam_db: RoamDb, roam_root: Path) -> None:
        _chain(roam_db, roam_root)
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "--db",
                str(roam_db.db_path),
                "closure",
                str(roam_root / "a.org"),
                "--exclude",
                "*/b.org",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["data"]["notes"] == [str(roam_root / "a.org"), str(roam_root / "b.org")]
        assert data["data"]["assets"] == []

    def test_exclude_from_config(
        self, cli_runner: CliRunner, roam_db: RoamDb, roam_root: Path, tmp_path: Path
    ) -> None:
        _chain(roam_db, roam_root)
        (tmp_path / "roamclosure.toml").write_text(
            f'[database]\nlocation = "{roam_db.db_path}"\n[closure]\nexclude = ["*/b.org"]\n'
        )
        result = cli_runner.invoke(cli, ["--json", "closure", str(roam_root / "a.org")])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["data"]["note_count"] == 2
        assert data["data"]["excluded"] == ["*/b.org"]

    def test_relative_seed(self, cli_runner: CliRunner, roam_db: RoamDb, roam_root: Path) -> None:
        _chain(roam_db, roam_root)
        result = cli_runner.invoke(
            cli, ["--json", "--db", str(roam_db.db_path), "closure", "roam/a.org"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["note_count"] == 3

    def test_quiet_prints_paths(
        self, cli_runner: CliRunner, roam_db: RoamDb, roam_root: Path
    ) -> None:
        _chain(roam_db, roam_root)
        result = cli_runner.invoke(
            cli, ["-q", "--db", str(roam_db.db_path), "closure", str(roam_root / "a.org")]
        )
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            str(roam_root / "a.org"),
            str(roam_root / "b.org"),
            str(roam_root / "c.org"),
            str((roam_root / "img" / "pic.png").resolve()),
        ]

    def test_human_output(self, cli_runner: CliRunner, roam_db: RoamDb, roam_root: Path) -> None:
        _chain(roam_db, roam_root)
        result = cli_runner.invoke(
            cli, ["--db", str(roam_db.db_path), "closure", str(roam_root / "a.org")]
        )
        assert result.exit_code == 0, result.output
        assert "OK" in result.output
        assert "pic.png" in result.output

    def test_unknown_seed_warns(self, cli_runner: CliRunner, roam_db: RoamDb) -> None:
        roam_db.note("a")
        result = cli_runner.invoke(cli, ["--db", str(roam_db.db_path), "closure", "/nowhere.org"])
        assert result.exit_code == 0
        assert "WARNING" in result.output
        assert "not indexed" in result.output

    def test_missing_database(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "--db", str(tmp_path / "missing.db"), "closure", "/a.org"]
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error"]["code"] == "DB_NOT_FOUND"

    def test_store_error(self, cli_runner: CliRunner, roam_db: RoamDb) -> None:
        a = roam_db.note("a")
        roam_db.raw_link(a, "unquoted", '"file"')
        result = cli_runner.invoke(cli, ["--db", str(roam_db.db_path), "closure", a.path])
        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert "closure" in result.output

    def test_requires_seed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["closure"])
        assert result.exit_code == 2

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["closure", "--examples"])
        assert result.exit_code == 0
        assert "roamclosure closure" in result.output


@pytest.mark.usefixtures("_isolated_cwd")
class TestRefsCommand:
    def test_direct_only(self, cli_runner: CliRunner, roam_db: RoamDb, roam_root: Path) -> None:
        _chain(roam_db, roam_root)
        result = cli_runner.invoke(
            cli, ["--json", "--db", str(roam_db.db_path), "refs", str(roam_root / "a.org")]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["op"] == "references"
        assert data["data"]["notes"] == [str(roam_root / "b.org")]
        assert data["data"]["assets"] == []

    def test_assets(self, cli_runner: CliRunner, roam_db: RoamDb, roam_root: Path) -> None:
        _chain(roam_db, roam_root)
        result = cli_runner.invoke(
            cli, ["-q", "--db", str(roam_db.db_path), "refs", str(roam_root / "b.org")]
        )
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            str(roam_root / "c.org"),
            str((roam_root / "img" / "pic.png").resolve()),
        ]
