# src/mstodo_exporter/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
wires the database store and the console prompt into an Exporter for the given settings.
"""

from __future__ import annotations

import logging

from ..config import Settings
from ..connectors.console_connector import ConsoleConfirmer
from ..core.exporter import Exporter
from ..core.ports import Confirmer
from ..todo.todo_store import TodoStore

logger = logging.getLogger(__name__)


def create_exporter(settings: Settings, *, confirmer: Confirmer | None = None) -> Exporter:
    """
    Create an Exporter from validated settings.

    Keeping the confirmer injectable lets tests answer the clear-failure prompt without stdin.
    """
    if confirmer is None:
        confirmer = ConsoleConfirmer()

    store = TodoStore(settings.db_path)
    logger.debug(
        "Exporter wired db=%s out=%s non_interactive=%s",
        settings.db_path,
        settings.output_dir,
        settings.non_interactive,
    )
    return Exporter(settings, store, confirmer)
