# tests/test_render.py

from __future__ import annotations

from mstodo_exporter.core.render import attachment_link, render_task, sanitize_name
from mstodo_exporter.todo.todo_models import Step, Task


def test_render_full_scenario_matches_expected_lines() -> None:
    task = Task(id="t1", folder_id="f1", subject="Buy milk", body="2%", due_date="2024-01-01")
    steps = [
        Step(task_id="t1", subject="Go to store", completed=False),
        Step(task_id="t1", subject="Pay", completed=True),
    ]

    text = render_task(task, steps)

    assert text.split("\n") == [
        "# Buy milk",
        "",
        "## Notes",
        "2%",
        "",
        "**Due:** 2024-01-01",
        "",
        "## Steps",
        "- [ ] Go to store",
        "- [x] Pay",
        "",
        "",
    ]


def test_render_only_heading_when_everything_empty() -> None:
    task = Task(id="t1", folder_id="f1", subject="Bare", body="", due_date=None, reminder_date="")
    assert render_task(task) == "# Bare\n\n"


def test_render_sections_in_fixed_order() -> None:
    task = Task(
        id="t1",
        folder_id="f1",
        subject="All",
        body="line 1\nline 2",
        due_date="2024-05-01",
        reminder_date="2024-04-30T08:00:00",
    )
    steps = [Step(task_id="t1", subject="s", completed=False)]

    text = render_task(task, steps, ["a.pdf"])

    headers = [line for line in text.splitlines() if line.startswith(("## ", "**"))]
    assert headers == ["## Notes", "**Due:** 2024-05-01", "**Reminder:** 2024-04-30T08:00:00", "## Steps", "## Attachments"]
    assert "line 1\nline 2\n\n" in text


def test_render_body_passed_through_verbatim() -> None:
    body = "<b>raw</b> *not* escaped"
    text = render_task(Task(id="t", folder_id="f", subject="x", body=body))
    assert f"## Notes\n{body}\n" in text


def test_render_skips_attachments_without_name() -> None:
    task = Task(id="t", folder_id="f", subject="x")
    assert "## Attachments" not in render_task(task, [], ["", ""])

    text = render_task(task, [], ["", "keep.txt"])
    assert text.endswith("## Attachments\n- [keep.txt](assets/keep.txt)\n\n")


def test_attachment_link_escapes_name() -> None:
    assert attachment_link("my file (1).pdf") == "- [my file (1).pdf](assets/my%20file%20%281%29.pdf)"
    assert attachment_link("a-b_c.~d") == "- [a-b_c.~d](assets/a-b_c.~d)"
    assert attachment_link("é.txt") == "- [é.txt](assets/%C3%A9.txt)"


def test_sanitize_posix() -> None:
    assert sanitize_name("a/b\x00c", platform="posix") == "a_b_c"
    assert sanitize_name('ok: "fine"?', platform="posix") == 'ok: "fine"?'


def test_sanitize_windows() -> None:
    assert sanitize_name('a<b>c:d"e/f\\g|h?i*j', platform="nt") == "a_b_c_d_e_f_g_h_i_j"
    assert sanitize_name("tab\there", platform="nt") == "tab_here"
    assert sanitize_name("Buy milk", platform="nt") == "Buy milk"


def test_sanitize_host_always_replaces_slash() -> None:
    assert sanitize_name("2024/01 report") == "2024_01 report"
