# src/mstodo_exporter/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the exporter.

The exporter depends on Protocols instead of concrete implementations,
so tests can swap the console prompt and the database for fakes.
"""

from pathlib import Path
from typing import Protocol

from ..todo.todo_models import TodoSnapshot


class Confirmer(Protocol):
    """Yes/no decision source for recoverable errors (console prompt, canned answer...)."""
    def confirm(self, prompt: str) -> bool: ...


class TodoRepo(Protocol):
    @property
    def attachments_dir(self) -> Path: ...

    def load_snapshot(self) -> TodoSnapshot: ...
