# todo/todo_store.py

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from .todo_models import Attachment, Folder, Step, Task, TodoSnapshot

logger = logging.getLogger(__name__)


def _text(value) -> str:
    return "" if value is None else str(value)


def _opt_text(value) -> str | None:
    return None if value is None else str(value)


class TodoStore:
    """
    Read-only access to a To Do SQLite database.

    The schema belongs to the To Do app, not to us:
    - task_folders(local_id, name, deleted)
    - tasks(local_id, task_folder_local_id, subject, body_content, due_date, reminder_datetime, deleted)
    - steps(task_local_id, subject, completed, deleted)
    - linked_entities(task_local_id, display_name, web_link, local_id, deleted)

    Soft-deleted rows (deleted != 0) are never returned. Nothing is ever written.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)

    @property
    def attachments_dir(self) -> Path:
        """Attachment files live next to the database: Attachments/<local_id>/<display_name>."""
        return self._db_path.parent / "Attachments"

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        # URI form so SQLite itself refuses writes.
        uri = self._db_path.resolve().as_uri() + "?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
        conn.row_factory = sqlite3.Row
        return conn

    # ---- queries ----

    @staticmethod
    def _load_folders(conn: sqlite3.Connection) -> list[Folder]:
        cur = conn.execute("SELECT local_id, name FROM task_folders WHERE deleted = 0")
        return [Folder(id=_text(r["local_id"]), name=_text(r["name"])) for r in cur.fetchall()]

    @staticmethod
    def _load_tasks(conn: sqlite3.Connection) -> list[Task]:
        cur = conn.execute(
            """
            SELECT local_id, task_folder_local_id, subject, body_content, due_date, reminder_datetime
            FROM tasks
            WHERE deleted = 0
            """
        )
        return [
            Task(
                id=_text(r["local_id"]),
                folder_id=_text(r["task_folder_local_id"]),
                subject=_text(r["subject"]),
                body=_opt_text(r["body_content"]),
                due_date=_opt_text(r["due_date"]),
                reminder_date=_opt_text(r["reminder_datetime"]),
            )
            for r in cur.fetchall()
        ]

    @staticmethod
    def _load_steps(conn: sqlite3.Connection) -> list[Step]:
        cur = conn.execute("SELECT task_local_id, subject, completed FROM steps WHERE deleted = 0")
        return [
            Step(
                task_id=_text(r["task_local_id"]),
                subject=_text(r["subject"]),
                completed=bool(r["completed"]),
            )
            for r in cur.fetchall()
        ]

    @staticmethod
    def _load_attachments(conn: sqlite3.Connection) -> list[Attachment]:
        cur = conn.execute(
            "SELECT task_local_id, display_name, web_link, local_id FROM linked_entities WHERE deleted = 0"
        )
        return [
            Attachment(
                task_id=_text(r["task_local_id"]),
                display_name=_text(r["display_name"]),
                web_link=_opt_text(r["web_link"]),
                local_id=_text(r["local_id"]),
            )
            for r in cur.fetchall()
        ]

    # ---- public API ----

    def load_snapshot(self) -> TodoSnapshot:
        """Run the four queries on one read-only connection and close it before returning."""
        conn = self._get_conn()
        try:
            snapshot = TodoSnapshot(
                folders=self._load_folders(conn),
                tasks=self._load_tasks(conn),
                steps=self._load_steps(conn),
                attachments=self._load_attachments(conn),
            )
        finally:
            conn.close()

        logger.info(
            "Loaded db=%s folders=%d tasks=%d steps=%d attachments=%d",
            self._db_path,
            len(snapshot.folders),
            len(snapshot.tasks),
            len(snapshot.steps),
            len(snapshot.attachments),
        )
        return snapshot
