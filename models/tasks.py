"""Task models."""
import csv
import datetime as dt
import io
import json

from utils.constants import PRIORITIES, STATUSES
from utils.helpers import current_date_formatted, generate_unique_id
from utils.log import get_logger
from .datasets import load_tasks, save_tasks
from .store import KeyValueStore

logger = get_logger(__name__)

CSV_HEADERS = ["id", "title", "description", "priority", "status", "createdAt", "dueDate"]


class TaskValidationError(ValueError):
    """Task input failed validation."""


class TaskNotFoundError(LookupError):
    """No task with the given id in the file."""


def new_task(
    *,
    title: str,
    description: str = "",
    priority: str = "normal",
    status: str = "todo",
    due_date: dt.date | None = None,
    today: dt.date | None = None,
) -> dict:
    """Validate input and build a task record."""
    title = (title or "").strip()
    if not title:
        raise TaskValidationError("Please enter a title.")
    if priority not in PRIORITIES:
        raise TaskValidationError(f"Unknown priority: {priority!r}")
    if status not in STATUSES:
        raise TaskValidationError(f"Unknown status: {status!r}")

    task = {
        "id": generate_unique_id(),
        "title": title,
        "description": (description or "").strip(),
        "priority": priority,
        "status": status,
        "createdAt": current_date_formatted(today),
    }
    if due_date is not None:
        task["dueDate"] = due_date.strftime("%d/%m/%Y")
    return task


def add_task(store: KeyValueStore, file_id: str, task: dict) -> list[dict]:
    tasks = [*load_tasks(store, file_id), task]
    save_tasks(store, file_id, tasks)
    logger.info("task_added", file_id=file_id, task_id=task["id"])
    return tasks


def update_task_status(store: KeyValueStore, file_id: str, task_id: str, status: str) -> list[dict]:
    if status not in STATUSES:
        raise TaskValidationError(f"Unknown status: {status!r}")
    tasks = load_tasks(store, file_id)
    if not any(t["id"] == task_id for t in tasks):
        raise TaskNotFoundError(task_id)
    tasks = [{**t, "status": status} if t["id"] == task_id else t for t in tasks]
    save_tasks(store, file_id, tasks)
    logger.info("task_status_updated", file_id=file_id, task_id=task_id, status=status)
    return tasks


def delete_task(store: KeyValueStore, file_id: str, task_id: str) -> list[dict]:
    tasks = [t for t in load_tasks(store, file_id) if t["id"] != task_id]
    save_tasks(store, file_id, tasks)
    logger.info("task_deleted", file_id=file_id, task_id=task_id)
    return tasks


def filter_tasks(tasks: list[dict], *, priority: str = "all", status: str = "all", search: str = "") -> list[dict]:
    result = list(tasks)
    if priority != "all":
        result = [t for t in result if t.get("priority") == priority]
    if status != "all":
        result = [t for t in result if t.get("status") == status]
    term = (search or "").strip().lower()
    if term:
        result = [
            t for t in result
            if term in (t.get("title") or "").lower() or term in (t.get("description") or "").lower()
        ]
    return result


def count_by_status(tasks: list[dict]) -> dict[str, int]:
    counts = {"all": len(tasks), **{s: 0 for s in STATUSES}}
    for t in tasks:
        if t.get("status") in counts:
            counts[t["status"]] += 1
    return counts


def tasks_to_csv(tasks: list[dict]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_HEADERS)
    for t in tasks:
        writer.writerow([t.get(h, "") or "" for h in CSV_HEADERS])
    return buf.getvalue()


def tasks_to_json(tasks: list[dict]) -> str:
    return json.dumps(tasks, ensure_ascii=False, indent=2)


def export_file_names(file_name: str | None, today: dt.date | None = None) -> tuple[str, str]:
    """CSV and JSON download names for a task file."""
    base = file_name or "tasks"
    return f"{base}-{current_date_formatted(today)}.csv", f"{base}.json"
