# todo/todo_models.py

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Folder:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    folder_id: str
    subject: str

    # Dates are stored as text by the app and passed through verbatim.
    body: str | None = None
    due_date: str | None = None
    reminder_date: str | None = None


@dataclass(frozen=True, slots=True)
class Step:
    task_id: str
    subject: str
    completed: bool


@dataclass(frozen=True, slots=True)
class Attachment:
    task_id: str
    display_name: str
    web_link: str | None
    local_id: str


def _group(items, key) -> dict[str, list]:
    out: dict[str, list] = defaultdict(list)
    for item in items:
        out[key(item)].append(item)
    return dict(out)


@dataclass(slots=True)
class TodoSnapshot:
    """
    Everything one export run needs, loaded up front.

    Children are grouped once by their owning key; each group keeps load order.
    """

    folders: list[Folder]
    tasks: list[Task]
    steps: list[Step]
    attachments: list[Attachment]

    _tasks_by_folder: dict[str, list[Task]] = field(init=False, repr=False)
    _steps_by_task: dict[str, list[Step]] = field(init=False, repr=False)
    _attachments_by_task: dict[str, list[Attachment]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._tasks_by_folder = _group(self.tasks, lambda t: t.folder_id)
        self._steps_by_task = _group(self.steps, lambda s: s.task_id)
        self._attachments_by_task = _group(self.attachments, lambda a: a.task_id)

    def tasks_in(self, folder_id: str) -> list[Task]:
        return list(self._tasks_by_folder.get(folder_id, ()))

    def steps_for(self, task_id: str) -> list[Step]:
        return list(self._steps_by_task.get(task_id, ()))

    def attachments_for(self, task_id: str) -> list[Attachment]:
        return list(self._attachments_by_task.get(task_id, ()))

    def orphan_tasks(self) -> list[Task]:
        """Tasks whose folder was not loaded (deleted or missing). They are never exported."""
        known = {f.id for f in self.folders}
        return [t for t in self.tasks if t.folder_id not in known]
