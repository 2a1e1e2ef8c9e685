"""Named task files and their task lists."""
import datetime as dt
import json
from typing import Any

from utils.constants import LAST_ACTIVE_FILE_KEY, TASK_FILES_KEY, TASKS_KEY_PREFIX
from utils.helpers import current_date_formatted, generate_unique_id
from utils.log import get_logger
from .store import KeyValueStore

logger = get_logger(__name__)

TASK_FIELDS = ("id", "title", "description", "priority", "status", "createdAt")


class DatasetError(ValueError):
    """A task file operation was rejected."""


def _tasks_key(file_id: str) -> str:
    return f"{TASKS_KEY_PREFIX}{file_id}"


def list_files(store: KeyValueStore) -> list[dict]:
    return list(store.get(TASK_FILES_KEY) or [])


def get_file(store: KeyValueStore, file_id: str) -> dict | None:
    for f in list_files(store):
        if f["id"] == file_id:
            return f
    return None


def create_file(store: KeyValueStore, name: str, today: dt.date | None = None, tasks: list[dict] | None = None) -> dict:
    """Add a task file, seed its task list, and make it active."""
    name = (name or "").strip()
    if not name:
        raise DatasetError("Please enter a file name.")
    if name.lower().endswith(".json"):
        name = name[: -len(".json")]

    new_file = {"id": generate_unique_id(), "name": name, "createdAt": current_date_formatted(today)}
    store.set(TASK_FILES_KEY, [*list_files(store), new_file])
    store.set(_tasks_key(new_file["id"]), list(tasks or []))
    store.set(LAST_ACTIVE_FILE_KEY, new_file["id"])
    logger.info("task_file_created", file_id=new_file["id"], name=name)
    return new_file


def delete_file(store: KeyValueStore, file_id: str) -> str:
    """Delete a file and its tasks. Returns the id of the file active afterwards."""
    files = list_files(store)
    if not any(f["id"] == file_id for f in files):
        raise DatasetError(f"Unknown file: {file_id}")
    if len(files) <= 1:
        raise DatasetError("The only remaining file cannot be deleted.")

    remaining = [f for f in files if f["id"] != file_id]
    store.set(TASK_FILES_KEY, remaining)
    store.delete(_tasks_key(file_id))

    active = store.get(LAST_ACTIVE_FILE_KEY)
    if active == file_id or not any(f["id"] == active for f in remaining):
        active = remaining[0]["id"]
        store.set(LAST_ACTIVE_FILE_KEY, active)
    logger.info("task_file_deleted", file_id=file_id, active=active)
    return active


def get_active_file_id(store: KeyValueStore) -> str | None:
    files = list_files(store)
    if not files:
        return None
    active = store.get(LAST_ACTIVE_FILE_KEY)
    if any(f["id"] == active for f in files):
        return active
    return files[0]["id"]


def set_active_file(store: KeyValueStore, file_id: str) -> None:
    if get_file(store, file_id) is None:
        raise DatasetError(f"Unknown file: {file_id}")
    store.set(LAST_ACTIVE_FILE_KEY, file_id)


def load_tasks(store: KeyValueStore, file_id: str) -> list[dict]:
    return list(store.get(_tasks_key(file_id)) or [])


def save_tasks(store: KeyValueStore, file_id: str, tasks: list[dict]) -> None:
    if get_file(store, file_id) is None:
        raise DatasetError(f"Unknown file: {file_id}")
    store.set(_tasks_key(file_id), list(tasks))


def _is_valid_task(item: Any) -> bool:
    return isinstance(item, dict) and all(isinstance(item.get(k), str) for k in TASK_FIELDS)


def import_tasks(store: KeyValueStore, name: str, raw: bytes | str | list) -> dict:
    """Create a new file from an exported task list."""
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DatasetError("The file is not valid JSON.") from e
    if not isinstance(raw, list) or not all(_is_valid_task(t) for t in raw):
        raise DatasetError("The file does not contain a task list in the expected format.")
    return create_file(store, name, tasks=raw)
