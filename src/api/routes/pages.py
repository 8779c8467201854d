"""
Server-rendered task pages (HTML form surface).

Uses redirect-after-post: every successful form action answers 303 to
/tasks. Toggle and delete on an unknown id are silent and still redirect.
"""

import logging

from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from src.api.deps import get_rules, get_task_store, parse_task_id
from src.components.tasks import (
    CreateTaskInput,
    DeleteTaskInput,
    ListTasksInput,
    TaskStore,
    ToggleTaskInput,
    run_clear_completed,
    run_complete_all,
    run_create,
    run_delete,
    run_list,
    run_stats,
    run_toggle,
)
from src.domain.entities import Task, TaskStats, TaskStatusFilter
from src.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()

TASKS_URL = "/tasks"

STATUS_LABELS: dict[str, str] = {
    "all": "All",
    "pending": "Pending",
    "done": "Done",
}


# --- HTML Rendering ---


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def render_page(title: str, body_content: str, site_title: str = "Task List") -> str:
    """Wrap body content in the shared layout."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{_escape_html(title)} | {_escape_html(site_title)}</title>
    <link rel="stylesheet" href="/static/style.css" />
</head>
<body>
    <nav>
        <a href="/">Home</a>
        <a href="{TASKS_URL}">Tasks</a>
        <a href="/about">About</a>
        <a href="/contact">Contact</a>
    </nav>
    <main>
    {body_content}
    </main>
</body>
</html>"""


def _render_task_item(task: Task) -> str:
    css_class = "task done" if task.done else "task"
    toggle_label = "Undo" if task.done else "Done"
    return f"""
        <li class="{css_class}" data-id="{task.id}">
            <span class="title">{_escape_html(task.title)}</span>
            <form method="post" action="{TASKS_URL}/{task.id}/toggle">
                <button type="submit">{toggle_label}</button>
            </form>
            <form method="post" action="{TASKS_URL}/{task.id}/delete">
                <button type="submit">Delete</button>
            </form>
        </li>"""


def _render_filters(active: str) -> str:
    links = []
    for value, label in STATUS_LABELS.items():
        if value == active:
            links.append(f'<strong>{label}</strong>')
        else:
            links.append(f'<a href="{TASKS_URL}?status={value}">{label}</a>')
    return " | ".join(links)


def render_tasks_page(
    tasks: tuple[Task, ...],
    stats: TaskStats,
    status: str = "all",
    error: str | None = None,
    site_title: str = "Task List",
) -> str:
    """Render the task list with its counters, filters and forms."""
    error_html = f'<p class="error" role="alert">{_escape_html(error)}</p>' if error else ""

    if tasks:
        items = "".join(_render_task_item(task) for task in tasks)
        list_html = f'<ul class="tasks">{items}\n    </ul>'
    else:
        list_html = '<p class="empty">No tasks.</p>'

    body = f"""
    <h1>Tasks</h1>
    <p class="summary">{len(tasks)} task(s) shown &middot; {stats.completed}/{stats.total} completed ({stats.completion_rate}%)</p>
    {error_html}
    <form method="post" action="{TASKS_URL}">
        <input type="text" name="title" placeholder="New task" />
        <button type="submit">Add</button>
    </form>
    <p class="filters">{_render_filters(status)}</p>
    {list_html}
    <form method="post" action="{TASKS_URL}/complete-all">
        <button type="submit">Complete all</button>
    </form>
    <form method="post" action="{TASKS_URL}/clear-completed">
        <button type="submit">Clear completed</button>
    </form>
    """
    return render_page("Tasks", body, site_title)


def render_not_found_page(site_title: str = "Task List") -> str:
    body = """
    <h1>Page not found</h1>
    <p>Sorry, the page you are looking for does not exist.</p>
    <p><a href="/">Back to home</a></p>
    """
    return render_page("Page not found", body, site_title)


def _redirect_to_tasks() -> RedirectResponse:
    return RedirectResponse(url=TASKS_URL, status_code=303)


def _tasks_response(
    store: TaskStore,
    rules: Rules,
    status: TaskStatusFilter = "all",
    error: str | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    listing = run_list(store, ListTasksInput(status=status))
    stats = run_stats(store).stats
    html = render_tasks_page(listing.tasks, stats, status, error, rules.project.title)
    return HTMLResponse(content=html, status_code=status_code)


# --- Static Pages ---


@router.get("/", response_class=HTMLResponse)
def home_page(rules: Rules = Depends(get_rules)) -> HTMLResponse:
    body = f"""
    <h1>Welcome, {_escape_html(rules.pages.user_name)}!</h1>
    <p>Keep track of what needs doing.</p>
    <p><a href="{TASKS_URL}">View your tasks</a></p>
    """
    return HTMLResponse(content=render_page("Home", body, rules.project.title))


@router.get("/about", response_class=HTMLResponse)
def about_page(rules: Rules = Depends(get_rules)) -> HTMLResponse:
    body = """
    <h1>About</h1>
    <p>A small task list served as HTML pages and as a JSON API under
    <code>/api</code>. Tasks live in memory and reset on restart.</p>
    """
    return HTMLResponse(content=render_page("About", body, rules.project.title))


@router.get("/contact", response_class=HTMLResponse)
def contact_page(rules: Rules = Depends(get_rules)) -> HTMLResponse:
    email = _escape_html(rules.pages.contact_email)
    body = f"""
    <h1>Contact</h1>
    <p>Write to <a href="mailto:{email}">{email}</a>.</p>
    """
    return HTMLResponse(content=render_page("Contact", body, rules.project.title))


# --- Task Pages ---


@router.get(TASKS_URL, response_class=HTMLResponse)
def tasks_page(
    status: TaskStatusFilter = Query(default="all"),
    store: TaskStore = Depends(get_task_store),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    return _tasks_response(store, rules, status=status)


@router.post(TASKS_URL, response_model=None)
def create_task_form(
    title: str | None = Form(default=None),
    store: TaskStore = Depends(get_task_store),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse | RedirectResponse:
    """Create from the form; re-render with the error on a blank title."""
    result = run_create(CreateTaskInput(title=title), store)
    if not result.success:
        message = result.errors[0].message
        logger.warning("Rejected task form: %s", message)
        return _tasks_response(store, rules, error=message, status_code=400)

    assert result.task is not None
    logger.info("Created task %s", result.task.id)
    return _redirect_to_tasks()


@router.post(f"{TASKS_URL}/complete-all")
def complete_all_form(store: TaskStore = Depends(get_task_store)) -> RedirectResponse:
    run_complete_all(store)
    return _redirect_to_tasks()


@router.post(f"{TASKS_URL}/clear-completed")
def clear_completed_form(store: TaskStore = Depends(get_task_store)) -> RedirectResponse:
    result = run_clear_completed(store)
    if result.affected:
        logger.info("Cleared %d completed tasks", result.affected)
    return _redirect_to_tasks()


@router.post(TASKS_URL + "/{task_id}/toggle")
def toggle_task_form(task_id: str, store: TaskStore = Depends(get_task_store)) -> RedirectResponse:
    parsed = parse_task_id(task_id)
    if parsed is not None:
        run_toggle(ToggleTaskInput(task_id=parsed), store)
    return _redirect_to_tasks()


@router.post(TASKS_URL + "/{task_id}/delete")
def delete_task_form(task_id: str, store: TaskStore = Depends(get_task_store)) -> RedirectResponse:
    parsed = parse_task_id(task_id)
    if parsed is not None:
        result = run_delete(DeleteTaskInput(task_id=parsed), store)
        if result.success:
            logger.info("Deleted task %s", parsed)
    return _redirect_to_tasks()
