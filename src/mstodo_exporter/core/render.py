# src/mstodo_exporter/core/render.py

"""
Markdown rendering for a single task, plus file name sanitisation.

Rendering is pure: it returns text and never touches the file system.
Attachment copying is the exporter's job.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from urllib.parse import quote

from ..todo.todo_models import Step, Task

ASSETS_DIR_NAME = "assets"

# Characters the host refuses in a single path component.
_WINDOWS_INVALID = "".join(chr(i) for i in range(32)) + '<>:"/\\|?*'
_POSIX_INVALID = "\x00/"


def invalid_name_chars(platform: str | None = None) -> str:
    platform = os.name if platform is None else platform
    return _WINDOWS_INVALID if platform == "nt" else _POSIX_INVALID


def sanitize_name(name: str, *, platform: str | None = None) -> str:
    """Replace every character invalid in a file name on the host with '_'."""
    pattern = "[" + re.escape(invalid_name_chars(platform)) + "]"
    return re.sub(pattern, "_", name)


def attachment_link(display_name: str) -> str:
    # quote(safe="") leaves only RFC 3986 unreserved characters unescaped.
    return f"- [{display_name}]({ASSETS_DIR_NAME}/{quote(display_name, safe='')})"


def render_task(task: Task, steps: Iterable[Step] = (), attachment_names: Iterable[str] = ()) -> str:
    """
    Render one task as Markdown.

    Sections appear only when their source is non-empty and always in this order:
    Notes, Due, Reminder, Steps, Attachments. Values are written exactly as stored.
    """
    lines: list[str] = [f"# {task.subject}", ""]

    if task.body:
        lines += ["## Notes", task.body, ""]

    if task.due_date:
        lines += [f"**Due:** {task.due_date}", ""]

    if task.reminder_date:
        lines += [f"**Reminder:** {task.reminder_date}", ""]

    steps = list(steps)
    if steps:
        lines.append("## Steps")
        lines += [f"- [{'x' if s.completed else ' '}] {s.subject}" for s in steps]
        lines.append("")

    names = [n for n in attachment_names if n]
    if names:
        lines.append("## Attachments")
        lines += [attachment_link(n) for n in names]
        lines.append("")

    return "\n".join(lines) + "\n"
