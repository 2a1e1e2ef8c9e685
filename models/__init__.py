"""Models package for persistence and business logic."""
from .database import init_db, get_engine, reset_all_data
from .store import KeyValueStore, MemoryStore, SqlStore, StorageError, get_store
from .expense import (
    ExpenseNotFoundError,
    ExpenseValidationError,
    InvalidUserDataError,
    new_expense,
    load_user_data,
    save_user_data,
    set_user_name,
    add_expense,
    update_expense,
    delete_expense,
    list_expenses,
    import_user_data,
    export_user_data,
)
from .settings import get_settings, save_settings
from .analytics import (
    filter_expenses_by_time_frame,
    group_expenses_by_category,
    group_expenses_by_subcategory,
    group_expenses_by_date,
    calculate_total_expenses,
    expense_summary,
    compare_by_category,
)
from .datasets import DatasetError, list_files, create_file, delete_file, get_active_file_id, set_active_file
from .tasks import TaskNotFoundError, TaskValidationError, new_task, add_task, update_task_status, delete_task, filter_tasks
from .gold import GoldPriceError, GoldPriceTracker

__all__ = [
    "init_db",
    "get_engine",
    "reset_all_data",
    "KeyValueStore",
    "MemoryStore",
    "SqlStore",
    "StorageError",
    "get_store",
    "ExpenseNotFoundError",
    "ExpenseValidationError",
    "InvalidUserDataError",
    "new_expense",
    "load_user_data",
    "save_user_data",
    "set_user_name",
    "add_expense",
    "update_expense",
    "delete_expense",
    "list_expenses",
    "import_user_data",
    "export_user_data",
    "get_settings",
    "save_settings",
    "filter_expenses_by_time_frame",
    "group_expenses_by_category",
    "group_expenses_by_subcategory",
    "group_expenses_by_date",
    "calculate_total_expenses",
    "expense_summary",
    "compare_by_category",
    "DatasetError",
    "list_files",
    "create_file",
    "delete_file",
    "get_active_file_id",
    "set_active_file",
    "TaskNotFoundError",
    "TaskValidationError",
    "new_task",
    "add_task",
    "update_task_status",
    "delete_task",
    "filter_tasks",
    "GoldPriceError",
    "GoldPriceTracker",
]
