# tests/test_cli.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from mstodo_exporter.cli.main import main
from mstodo_exporter.connectors.console_connector import ConsoleConfirmer
from mstodo_exporter.core import exporter as exporter_mod

from .fakes import FakeConfirmer, TodoDbBuilder


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("MSTODO_"):
            monkeypatch.delenv(name, raising=False)


def test_main_reports_missing_database(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--dbPath", str(tmp_path / "missing.sqlite"), "--outputDir", str(tmp_path / "out")])

    assert code == 1
    assert "Database file not found" in capsys.readouterr().out
    assert not (tmp_path / "out").exists()


def test_main_reports_missing_output_dir(todo_db: TodoDbBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--dbPath", str(todo_db.db_path)])

    assert code == 1
    assert "Output directory not specified" in capsys.readouterr().out


def test_main_runs_export(todo_db: TodoDbBuilder, output_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    todo_db.add_folder("f1", "Work")
    todo_db.add_task("t1", "f1", "Buy milk")

    code = main([f"dbPath={todo_db.db_path}", f"outputDir={output_dir}"])

    assert code == 0
    assert (output_dir / "Work" / "Buy milk.md").read_text(encoding="utf-8") == "# Buy milk\n\n"
    assert "Export complete!" in capsys.readouterr().out


def test_main_writes_log_file(todo_db: TodoDbBuilder, output_dir: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "export.log"

    code = main(["--dbPath", str(todo_db.db_path), "--outputDir", str(output_dir), "--logFile", str(log_file)])

    assert code == 0
    assert "Export complete!" in log_file.read_text(encoding="utf-8")


def test_main_abort_returns_error(
    todo_db: TodoDbBuilder,
    output_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def locked(*_args, **_kwargs):
        raise PermissionError("locked")

    monkeypatch.setattr(exporter_mod.shutil, "rmtree", locked)
    output_dir.mkdir(parents=True)
    confirmer = FakeConfirmer(answer=False)

    code = main(
        ["--dbPath", str(todo_db.db_path), "--outputDir", str(output_dir), "--clearOutputDirBeforeExport"],
        confirmer=confirmer,
    )

    assert code == 1
    assert confirmer.prompts == ["Do you want to continue? (y/n)"]
    out = capsys.readouterr().out
    assert "Error clearing output directory: locked" in out
    assert "Aborting export." in out


@pytest.mark.parametrize(
    ("answer", "expected"),
    [("y", True), ("Y", True), (" y", False), ("y ", False), ("n", False), ("yes", False), ("", False)],
)
def test_console_confirmer_answers(answer: str, expected: bool, capsys: pytest.CaptureFixture[str]) -> None:
    confirmer = ConsoleConfirmer(read_line=lambda _prompt: answer)

    assert confirmer.confirm("Do you want to continue? (y/n)") is expected
    assert "Do you want to continue? (y/n)" in capsys.readouterr().out


def test_console_confirmer_eof_is_no() -> None:
    def eof(_prompt: str) -> str:
        raise EOFError

    assert ConsoleConfirmer(read_line=eof).confirm("continue?") is False


def test_main_ignores_unknown_arguments(todo_db: TodoDbBuilder, output_dir: Path) -> None:
    todo_db.add_folder("f1", "Work")
    todo_db.add_task("t1", "f1", "Buy milk")

    code = main(["--dbPath", str(todo_db.db_path), "--outputDir", str(output_dir), "--verbose", "extra=1"])

    assert code == 0
    assert (output_dir / "Work" / "Buy milk.md").is_file()
