"""Expense and user data models."""
import csv
import datetime as dt
import io
import json
import math
from typing import Any

from utils.constants import EXPENSE_CATEGORIES, USER_DATA_KEY
from utils.helpers import (
    format_expense_date,
    from_timestamp_ms,
    generate_unique_id,
    parse_expense_date,
    to_timestamp_ms,
)
from utils.log import get_logger
from .store import KeyValueStore

logger = get_logger(__name__)

MIN_AMOUNT = 1


class ExpenseValidationError(ValueError):
    """Expense input failed validation."""


class ExpenseNotFoundError(LookupError):
    """No expense with the given id."""


class InvalidUserDataError(ValueError):
    """An imported document is not a user data file."""


def _now_iso(now: dt.datetime | None = None) -> str:
    return (now or dt.datetime.now()).isoformat()


def default_user_data(now: dt.datetime | None = None) -> dict:
    stamp = _now_iso(now)
    return {"name": "", "expenses": [], "created": stamp, "lastUpdated": stamp}


def is_valid_user_data(data: Any) -> bool:
    """Check that a document has the user data shape."""
    return (
        isinstance(data, dict)
        and isinstance(data.get("name"), str)
        and isinstance(data.get("expenses"), list)
        and isinstance(data.get("created"), str)
        and isinstance(data.get("lastUpdated"), str)
    )


def _validate_fields(amount: float, category: str, subcategory: str) -> None:
    try:
        value = float(amount)
    except (TypeError, ValueError) as e:
        raise ExpenseValidationError(f"Amount must be a number, got {amount!r}") from e
    if not math.isfinite(value) or value < MIN_AMOUNT:
        raise ExpenseValidationError("Amount must be greater than 0.")
    if category not in EXPENSE_CATEGORIES:
        raise ExpenseValidationError(f"Unknown category: {category!r}")
    if not (subcategory or "").strip():
        raise ExpenseValidationError("Please choose a subcategory.")
    if subcategory not in EXPENSE_CATEGORIES[category]:
        raise ExpenseValidationError(f"{subcategory!r} is not part of {category!r}")


def new_expense(
    *,
    amount: float,
    category: str,
    subcategory: str,
    description: str = "",
    occurred_on: dt.date,
    occurred_at_time: dt.time | None = None,
) -> dict:
    """Validate input and build an expense record."""
    _validate_fields(amount, category, subcategory)
    occurred_at = dt.datetime.combine(occurred_on, occurred_at_time or dt.time(0, 0))
    return {
        "id": generate_unique_id(),
        "amount": float(amount),
        "category": category,
        "subcategory": subcategory,
        "description": (description or "").strip(),
        "date": format_expense_date(occurred_on),
        "timestamp": to_timestamp_ms(occurred_at),
    }


def load_user_data(store: KeyValueStore) -> dict | None:
    return store.get(USER_DATA_KEY)


def save_user_data(store: KeyValueStore, data: dict, now: dt.datetime | None = None) -> dict:
    """Persist user data, refreshing lastUpdated."""
    updated = {**data, "lastUpdated": _now_iso(now)}
    store.set(USER_DATA_KEY, updated)
    return updated


def _load_or_default(store: KeyValueStore) -> dict:
    return load_user_data(store) or default_user_data()


def set_user_name(store: KeyValueStore, name: str) -> dict:
    """Name the dataset, creating it on first run."""
    name = (name or "").strip()
    if not name:
        raise ExpenseValidationError("Please enter a name.")
    data = _load_or_default(store)
    data["name"] = name
    logger.info("user_name_set", name=name)
    return save_user_data(store, data)


def add_expense(store: KeyValueStore, expense: dict) -> dict:
    data = _load_or_default(store)
    data["expenses"] = [*data["expenses"], expense]
    logger.info("expense_added", expense_id=expense["id"], amount=expense["amount"], category=expense["category"])
    return save_user_data(store, data)


def update_expense(
    store: KeyValueStore,
    expense_id: str,
    *,
    amount: float,
    category: str,
    subcategory: str,
    description: str,
    occurred_on: dt.date,
    occurred_at_time: dt.time | None = None,
) -> dict:
    """Replace the editable fields of an existing expense."""
    _validate_fields(amount, category, subcategory)
    data = _load_or_default(store)
    for i, existing in enumerate(data["expenses"]):
        if existing.get("id") == expense_id:
            break
    else:
        raise ExpenseNotFoundError(expense_id)

    occurred_at = dt.datetime.combine(occurred_on, occurred_at_time or dt.time(0, 0))
    expenses = list(data["expenses"])
    expenses[i] = {
        **existing,
        "amount": float(amount),
        "category": category,
        "subcategory": subcategory,
        "description": (description or "").strip(),
        "date": format_expense_date(occurred_on),
        "timestamp": to_timestamp_ms(occurred_at),
    }
    data["expenses"] = expenses
    logger.info("expense_updated", expense_id=expense_id)
    return save_user_data(store, data)


def delete_expense(store: KeyValueStore, expense_id: str) -> dict:
    data = _load_or_default(store)
    data["expenses"] = [e for e in data["expenses"] if e.get("id") != expense_id]
    logger.info("expense_deleted", expense_id=expense_id)
    return save_user_data(store, data)


def get_expense(data: dict, expense_id: str) -> dict | None:
    for expense in data.get("expenses", []):
        if expense.get("id") == expense_id:
            return expense
    return None


def list_expenses(expenses: list[dict], *, search: str = "", category: str | None = None) -> list[dict]:
    """Expenses matching the filters, newest first."""
    q = (search or "").strip().lower()
    rows = []
    for e in expenses:
        if category and e.get("category") != category:
            continue
        if q:
            haystack = " ".join(
                str(e.get(k) or "") for k in ("description", "category", "subcategory")
            ).lower()
            if q not in haystack:
                continue
        rows.append(e)
    return sorted(rows, key=lambda e: e.get("timestamp") or 0, reverse=True)


def import_user_data(store: KeyValueStore, raw: bytes | str | dict) -> dict:
    """Replace the current dataset with an imported one."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUserDataError("The file is not UTF-8 text.") from e
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidUserDataError("The file is not valid JSON.") from e

    if not is_valid_user_data(raw):
        raise InvalidUserDataError("The file does not contain expense data in the expected format.")

    store.set(USER_DATA_KEY, raw)
    logger.info("user_data_imported", name=raw["name"], expenses=len(raw["expenses"]))
    return raw


def export_user_data(data: dict) -> tuple[str, bytes]:
    """File name and JSON payload for a user data download."""
    filename = f"{data.get('name') or 'expense'}-data.json"
    payload = json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")
    return filename, payload


def expenses_to_csv(expenses: list[dict]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(["date", "category", "subcategory", "description", "amount"])
    for e in expenses:
        writer.writerow([
            e.get("date", ""),
            e.get("category", ""),
            e.get("subcategory", ""),
            e.get("description", ""),
            f"{float(e.get('amount') or 0):.2f}",
        ])
    return buf.getvalue()


def expense_date(expense: dict) -> dt.date:
    """Calendar date of an expense, tolerating ISO dates from older files.

    Falls back to the timestamp's date when the date text is unusable.
    """
    try:
        return parse_expense_date(expense.get("date") or "")
    except ValueError:
        return from_timestamp_ms(expense.get("timestamp") or 0).date()
