"""Tests for tasks within a task file."""

import csv
import datetime as dt
import io
import json

import pytest

from models.datasets import create_file, load_tasks
from models.tasks import (
    CSV_HEADERS,
    TaskNotFoundError,
    TaskValidationError,
    add_task,
    count_by_status,
    delete_task,
    export_file_names,
    filter_tasks,
    new_task,
    tasks_to_csv,
    tasks_to_json,
    update_task_status,
)


@pytest.fixture
def file_id(store):
    return create_file(store, "Công việc")["id"]


class TestNewTask:
    def test_defaults(self):
        task = new_task(title="  Gọi điện  ", today=dt.date(2024, 3, 9))
        assert task["title"] == "Gọi điện"
        assert task["priority"] == "normal"
        assert task["status"] == "todo"
        assert task["createdAt"] == "09-03-24"
        assert "dueDate" not in task

    def test_due_date_is_formatted(self):
        task = new_task(title="a", due_date=dt.date(2024, 12, 1))
        assert task["dueDate"] == "01/12/2024"

    @pytest.mark.parametrize(
        "kwargs",
        [{"title": ""}, {"title": "a", "priority": "later"}, {"title": "a", "status": "done"}],
    )
    def test_invalid_input(self, kwargs):
        with pytest.raises(TaskValidationError):
            new_task(**kwargs)


class TestTaskLifecycle:
    def test_add_update_delete(self, store, file_id):
        task = new_task(title="Mua vé")
        add_task(store, file_id, task)
        assert load_tasks(store, file_id) == [task]

        update_task_status(store, file_id, task["id"], "in-progress")
        assert load_tasks(store, file_id)[0]["status"] == "in-progress"

        delete_task(store, file_id, task["id"])
        assert load_tasks(store, file_id) == []

    def test_update_unknown_task(self, store, file_id):
        with pytest.raises(TaskNotFoundError):
            update_task_status(store, file_id, "nope", "completed")

    def test_update_with_bad_status(self, store, file_id):
        task = new_task(title="a")
        add_task(store, file_id, task)
        with pytest.raises(TaskValidationError):
            update_task_status(store, file_id, task["id"], "archived")

    def test_tasks_are_scoped_to_their_file(self, store, file_id):
        other = create_file(store, "Khác")["id"]
        add_task(store, file_id, new_task(title="a"))
        assert load_tasks(store, other) == []


class TestFilteringAndCounts:
    @pytest.fixture
    def tasks(self):
        return [
            new_task(title="Viết báo cáo", priority="urgent", status="todo"),
            new_task(title="Họp nhóm", description="Chuẩn bị slide", priority="normal", status="preparing"),
            new_task(title="Nộp thuế", priority="urgent", status="completed"),
        ]

    def test_filter_by_priority_and_status(self, tasks):
        assert filter_tasks(tasks, priority="urgent") == [tasks[0], tasks[2]]
        assert filter_tasks(tasks, priority="urgent", status="completed") == [tasks[2]]

    def test_search_matches_title_and_description(self, tasks):
        assert filter_tasks(tasks, search="SLIDE") == [tasks[1]]
        assert filter_tasks(tasks, search="thuế") == [tasks[2]]

    def test_count_by_status(self, tasks):
        assert count_by_status(tasks) == {
            "all": 3,
            "todo": 1,
            "preparing": 1,
            "in-progress": 0,
            "completed": 1,
        }


class TestExports:
    def test_csv_has_headers_and_blank_due_date(self):
        task = new_task(title="Trả lời, email", today=dt.date(2024, 3, 9))
        rows = list(csv.reader(io.StringIO(tasks_to_csv([task]))))
        assert rows[0] == CSV_HEADERS
        assert rows[1] == [task["id"], "Trả lời, email", "", "normal", "todo", "09-03-24", ""]

    def test_json_keeps_unicode(self):
        task = new_task(title="Đi chợ")
        payload = tasks_to_json([task])
        assert "Đi chợ" in payload
        assert json.loads(payload) == [task]

    def test_export_file_names(self):
        assert export_file_names("Công việc", dt.date(2024, 3, 9)) == ("Công việc-09-03-24.csv", "Công việc.json")
        assert export_file_names(None, dt.date(2024, 3, 9)) == ("tasks-09-03-24.csv", "tasks.json")
