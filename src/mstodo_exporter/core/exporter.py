# src/mstodo_exporter/core/exporter.py

"""
The export run.

Strictly linear:
- optional backup archive of an existing output dir,
- optional clear of the output dir (confirmation on failure),
- load everything from the database (read-only, connection closed afterwards),
- one directory per folder, one Markdown file per task, attachments into assets/,
- optional archive of the result (and optional removal of the output dir).

No rollback: files already written stay on disk if a later step fails.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from ..todo.todo_models import Folder, Task, TodoSnapshot
from .archive import archive_directory
from .ports import Confirmer, TodoRepo
from .render import ASSETS_DIR_NAME, render_task, sanitize_name

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

BACKUP_ARCHIVE_NAME = "exported_tasks_backup"
OUTPUT_ARCHIVE_NAME = "exported_tasks"


class ExportAborted(RuntimeError):
    """The run was stopped before any export happened (declined prompt / non-interactive)."""


@dataclass(slots=True)
class ExportReport:
    folders: int = 0
    tasks: int = 0
    steps: int = 0
    attachments_copied: int = 0
    attachments_missing: int = 0
    attachments_failed: int = 0
    orphan_tasks: int = 0

    backup_archive: Path | None = None
    archive: Path | None = None
    output_removed: bool = False


class Exporter:
    def __init__(
        self,
        settings: Settings,
        repo: TodoRepo,
        confirmer: Confirmer,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings = settings
        self._repo = repo
        self._confirmer = confirmer
        self._clock = clock

    @property
    def output_dir(self) -> Path:
        return Path(self._settings.output_dir)

    # ---- steps ----

    def _prepare_output_dir(self, report: ExportReport) -> None:
        s = self._settings
        out = self.output_dir

        if s.archive_output_dir_if_exists_before_export and out.is_dir():
            logger.info("Output directory already exists.")
            report.backup_archive = archive_directory(out, BACKUP_ARCHIVE_NAME, now=self._clock())

        if s.clear_output_dir_before_export and out.is_dir():
            logger.info("Clearing existing output directory...")
            try:
                shutil.rmtree(out)
            except OSError as e:
                logger.error("Error clearing output directory: %s", e)
                if s.non_interactive:
                    raise ExportAborted("Aborting export due to error in non-interactive mode.") from e
                if not self._confirmer.confirm("Do you want to continue? (y/n)"):
                    raise ExportAborted("Aborting export.") from e

        out.mkdir(parents=True, exist_ok=True)

    def _copy_attachment(self, source: Path, dest: Path, report: ExportReport) -> None:
        try:
            if source.is_file():
                shutil.copyfile(source, dest)
                report.attachments_copied += 1
            else:
                logger.warning("Attachment not found: %s", source)
                report.attachments_missing += 1
        except OSError as e:
            logger.error("Error copying attachment: %s", e)
            report.attachments_failed += 1

    def _export_task(self, snapshot: TodoSnapshot, task: Task, folder_path: Path, report: ExportReport) -> None:
        steps = snapshot.steps_for(task.id)
        attachments = [a for a in snapshot.attachments_for(task.id) if a.display_name]

        task_file = folder_path / (sanitize_name(task.subject) + ".md")
        # Collisions after sanitisation overwrite the previous file.
        task_file.write_text(
            render_task(task, steps, [a.display_name for a in attachments]),
            encoding="utf-8",
            newline="",
        )
        report.tasks += 1
        report.steps += len(steps)

        if not attachments:
            return

        assets = folder_path / ASSETS_DIR_NAME
        assets.mkdir(exist_ok=True)
        for att in attachments:
            # The link is already written even if the copy below does not happen.
            source = self._repo.attachments_dir / att.local_id / att.display_name
            self._copy_attachment(source, assets / att.display_name, report)

    def _export_folder(self, snapshot: TodoSnapshot, folder: Folder, report: ExportReport) -> None:
        folder_path = self.output_dir / sanitize_name(folder.name)
        folder_path.mkdir(parents=True, exist_ok=True)
        report.folders += 1

        for task in snapshot.tasks_in(folder.id):
            self._export_task(snapshot, task, folder_path, report)

    def _archive_output(self, report: ExportReport) -> None:
        s = self._settings
        if not s.archive_output:
            return

        report.archive = archive_directory(self.output_dir, OUTPUT_ARCHIVE_NAME, now=self._clock())

        if s.remove_output_dir_after_archive:
            shutil.rmtree(self.output_dir)
            report.output_removed = True
            logger.info("Removed output directory after archiving.")

    # ---- public API ----

    def run(self) -> ExportReport:
        """
        Run one export.

        Raises ValueError for unusable settings (before anything touches the disk)
        and ExportAborted if the user (or non-interactive mode) stops it.
        """
        self._settings.validate()
        report = ExportReport()

        self._prepare_output_dir(report)

        snapshot = self._repo.load_snapshot()
        orphans = snapshot.orphan_tasks()
        report.orphan_tasks = len(orphans)
        if orphans:
            logger.debug("Skipping %d task(s) without a loaded folder.", len(orphans))

        for folder in snapshot.folders:
            self._export_folder(snapshot, folder, report)

        self._archive_output(report)

        logger.info(
            "Export complete! folders=%d tasks=%d attachments copied=%d missing=%d failed=%d",
            report.folders,
            report.tasks,
            report.attachments_copied,
            report.attachments_missing,
            report.attachments_failed,
        )
        return report
