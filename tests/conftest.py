# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mstodo_exporter.config import Settings

from .fakes import FakeConfirmer, TodoDbBuilder


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """CLI tests call setup_logging(); put the root logger back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def todo_db(tmp_path: Path) -> TodoDbBuilder:
    """Empty To Do database under tmp_path/store (attachments live beside it)."""
    return TodoDbBuilder(tmp_path / "store" / "todo.sqlite")


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    # Own parent so archives created next to it are easy to find.
    return tmp_path / "export" / "tasks"


@pytest.fixture()
def settings(todo_db: TodoDbBuilder, output_dir: Path) -> Settings:
    """Settings with every switch off; tests flip what they need with dataclasses.replace."""
    return Settings(db_path=todo_db.db_path, output_dir=output_dir)


@pytest.fixture()
def confirmer() -> FakeConfirmer:
    return FakeConfirmer()
