"""Tests for task files."""

import datetime as dt
import json

import pytest

from models.datasets import (
    DatasetError,
    create_file,
    delete_file,
    get_active_file_id,
    import_tasks,
    list_files,
    load_tasks,
    save_tasks,
    set_active_file,
)


class TestCreateFile:
    def test_create_file_activates_it_and_seeds_empty_list(self, store):
        f = create_file(store, "Công việc", today=dt.date(2024, 3, 9))
        assert f["name"] == "Công việc"
        assert f["createdAt"] == "09-03-24"
        assert list_files(store) == [f]
        assert load_tasks(store, f["id"]) == []
        assert get_active_file_id(store) == f["id"]

    def test_json_suffix_is_stripped(self, store):
        assert create_file(store, "backup.JSON")["name"] == "backup"

    def test_blank_name_is_rejected(self, store):
        with pytest.raises(DatasetError):
            create_file(store, "  ")
        assert list_files(store) == []

    def test_files_keep_creation_order(self, store):
        names = [create_file(store, n)["name"] for n in ("a", "b", "c")]
        assert [f["name"] for f in list_files(store)] == names


class TestActiveFile:
    def test_no_files_means_no_active_file(self, store):
        assert get_active_file_id(store) is None

    def test_stale_active_id_falls_back_to_first_file(self, store):
        first = create_file(store, "a")
        create_file(store, "b")
        store.set("lastActiveFileId", "gone")
        assert get_active_file_id(store) == first["id"]

    def test_set_active_file(self, store):
        first = create_file(store, "a")
        create_file(store, "b")
        set_active_file(store, first["id"])
        assert get_active_file_id(store) == first["id"]

    def test_set_active_file_unknown(self, store):
        with pytest.raises(DatasetError):
            set_active_file(store, "nope")


class TestDeleteFile:
    def test_deleting_active_file_activates_first_remaining(self, store):
        first = create_file(store, "a")
        second = create_file(store, "b")
        save_tasks(store, second["id"], [{"id": "t1"}])

        assert delete_file(store, second["id"]) == first["id"]
        assert list_files(store) == [first]
        assert store.get(f"tasks_{second['id']}") is None
        assert get_active_file_id(store) == first["id"]

    def test_deleting_inactive_file_keeps_active(self, store):
        first = create_file(store, "a")
        second = create_file(store, "b")
        assert delete_file(store, first["id"]) == second["id"]

    def test_only_file_cannot_be_deleted(self, store):
        only = create_file(store, "a")
        with pytest.raises(DatasetError):
            delete_file(store, only["id"])
        assert list_files(store) == [only]

    def test_unknown_file(self, store):
        create_file(store, "a")
        create_file(store, "b")
        with pytest.raises(DatasetError):
            delete_file(store, "nope")


class TestImportTasks:
    TASKS = [
        {
            "id": "t1",
            "title": "Viết báo cáo",
            "description": "",
            "priority": "urgent",
            "status": "todo",
            "createdAt": "01-03-24",
        }
    ]

    def test_import_creates_new_active_file(self, store):
        create_file(store, "existing")
        f = import_tasks(store, "imported.json", json.dumps(self.TASKS).encode("utf-8"))
        assert f["name"] == "imported"
        assert load_tasks(store, f["id"]) == self.TASKS
        assert get_active_file_id(store) == f["id"]

    @pytest.mark.parametrize("raw", ["{broken", '{"id": "t1"}', '[{"id": "t1"}]'])
    def test_invalid_payloads_are_rejected(self, store, raw):
        with pytest.raises(DatasetError):
            import_tasks(store, "x", raw)
        assert list_files(store) == []

    def test_save_tasks_to_unknown_file(self, store):
        with pytest.raises(DatasetError):
            save_tasks(store, "nope", [])
