"""Task manager view."""
import streamlit as st
from models.datasets import (
    DatasetError,
    create_file,
    delete_file,
    get_active_file_id,
    get_file,
    import_tasks,
    list_files,
    load_tasks,
    set_active_file,
)
from models.store import get_store
from models.tasks import (
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
from utils.constants import PRIORITIES, STATUSES
from utils.i18n import priority_label, status_label, t
from .common import current_settings, render_header

PRIORITY_COLORS = {"urgent": "red", "tomorrow": "orange", "normal": "blue"}


def _render_first_file() -> None:
    st.subheader("Chào mừng đến với Quản lý công việc")
    st.caption("Vui lòng đặt tên cho file lưu trữ công việc đầu tiên của bạn.")
    with st.form("first_task_file"):
        name = st.text_input("Tên file", placeholder="Nhập tên file (không cần .json)")
        started = st.form_submit_button("Bắt đầu", use_container_width=True)
    if started:
        try:
            create_file(get_store(), name)
        except DatasetError as e:
            st.error(str(e))
        else:
            st.rerun()


def _render_file_controls(files: list[dict], active_id: str) -> None:
    store = get_store()
    ids = [f["id"] for f in files]
    names = {f["id"]: f["name"] for f in files}

    c1, c2 = st.columns([3, 1])
    with c1:
        selected = st.selectbox(
            "File công việc",
            ids,
            index=ids.index(active_id),
            format_func=lambda fid: names[fid],
            key="task_file_select",
        )
        if selected != active_id:
            set_active_file(store, selected)
            st.rerun()
    with c2:
        st.write("")
        if st.button("🗑️ Xóa file", disabled=len(files) <= 1, use_container_width=True):
            try:
                delete_file(store, active_id)
            except DatasetError as e:
                st.error(str(e))
            else:
                st.session_state.pop("task_file_select", None)
                st.rerun()

    with st.expander("Tạo file mới / Nhập file"):
        with st.form("new_task_file", clear_on_submit=True):
            name = st.text_input("Tên file", placeholder="Nhập tên file (không cần .json)")
            created = st.form_submit_button("Tạo file")
        if created:
            try:
                create_file(store, name)
            except DatasetError as e:
                st.error(str(e))
            else:
                st.session_state.pop("task_file_select", None)
                st.rerun()

        uploaded = st.file_uploader("Nhập file JSON công việc", type=["json"], key="task_import")
        if uploaded is not None and st.button("Nhập", key="task_import_button"):
            try:
                import_tasks(store, uploaded.name, uploaded.getvalue())
            except DatasetError as e:
                st.error(str(e))
            else:
                st.session_state.pop("task_file_select", None)
                st.rerun()


def _render_new_task(file_id: str, lang: str) -> None:
    with st.expander("➕ Thêm công việc"):
        with st.form("new_task", clear_on_submit=True):
            title = st.text_input("Tiêu đề", placeholder="Nhập tiêu đề công việc")
            description = st.text_area("Mô tả", placeholder="Mô tả chi tiết công việc")
            c1, c2 = st.columns([1, 1])
            with c1:
                priority = st.selectbox("Ưu tiên", PRIORITIES, format_func=lambda p: priority_label(p, lang))
            with c2:
                status = st.selectbox("Trạng thái", STATUSES, format_func=lambda s: status_label(s, lang))
            has_due = st.checkbox("Có hạn cuối")
            due_date = st.date_input("Hạn cuối", format="DD/MM/YYYY")
            submitted = st.form_submit_button("Thêm công việc", use_container_width=True)
        if submitted:
            try:
                task = new_task(
                    title=title,
                    description=description,
                    priority=priority,
                    status=status,
                    due_date=due_date if has_due else None,
                )
            except TaskValidationError as e:
                st.error(str(e))
            else:
                add_task(get_store(), file_id, task)
                st.rerun()


def _render_task_card(file_id: str, task: dict, lang: str, tab: str) -> None:
    with st.container(border=True):
        st.markdown(f"**{task['title']}**")
        color = PRIORITY_COLORS.get(task.get("priority"), "gray")
        meta = f":{color}[{priority_label(task.get('priority'), lang)}] · {status_label(task.get('status'), lang)}"
        if task.get("dueDate"):
            meta += f" · Hạn cuối: {task['dueDate']}"
        st.caption(meta)
        if task.get("description"):
            st.write(task["description"])

        c1, c2 = st.columns([3, 1])
        with c1:
            current = task.get("status") if task.get("status") in STATUSES else STATUSES[0]
            new_status = st.selectbox(
                "Cập nhật trạng thái",
                STATUSES,
                index=STATUSES.index(current),
                format_func=lambda s: status_label(s, lang),
                key=f"status_{tab}_{task['id']}",
                label_visibility="collapsed",
            )
            if new_status != current:
                try:
                    update_task_status(get_store(), file_id, task["id"], new_status)
                except TaskNotFoundError as e:
                    st.error(str(e))
                else:
                    st.rerun()
        with c2:
            if st.button("Xóa", key=f"delete_task_{tab}_{task['id']}", type="primary", use_container_width=True):
                delete_task(get_store(), file_id, task["id"])
                st.rerun()


def render_tasks():
    """Render tasks tab."""
    settings = current_settings()
    lang = settings["language"]
    render_header(t("tasks", lang), "Quản lý công việc theo từng file", "#43e97b,#38f9d7")

    store = get_store()
    files = list_files(store)
    if not files:
        _render_first_file()
        return

    active_id = get_active_file_id(store)
    _render_file_controls(files, active_id)
    active_file = get_file(store, active_id)
    tasks = load_tasks(store, active_id)

    _render_new_task(active_id, lang)

    csv_name, json_name = export_file_names(active_file["name"] if active_file else None)
    e1, e2 = st.columns([1, 1])
    with e1:
        st.download_button("CSV", data=tasks_to_csv(tasks).encode("utf-8"), file_name=csv_name, mime="text/csv")
    with e2:
        st.download_button("JSON", data=tasks_to_json(tasks).encode("utf-8"), file_name=json_name, mime="application/json")

    search = st.text_input("Tìm kiếm công việc...", key="task_search")
    f1, f2 = st.columns([1, 1])
    with f1:
        priority = st.selectbox(
            "Lọc theo ưu tiên",
            ["all"] + PRIORITIES,
            format_func=lambda p: "Tất cả ưu tiên" if p == "all" else priority_label(p, lang),
        )
    with f2:
        status = st.selectbox(
            "Lọc theo trạng thái",
            ["all"] + STATUSES,
            format_func=lambda s: "Tất cả trạng thái" if s == "all" else status_label(s, lang),
        )

    filtered = filter_tasks(tasks, priority=priority, status=status, search=search)
    counts = count_by_status(filtered)
    tab_keys = ["all"] + STATUSES
    tabs = st.tabs([
        f"{'Tất cả' if k == 'all' else status_label(k, lang)} ({counts[k]})" for k in tab_keys
    ])
    for tab_key, tab in zip(tab_keys, tabs):
        with tab:
            shown = [x for x in filtered if tab_key == "all" or x.get("status") == tab_key]
            if not shown:
                suffix = "" if tab_key == "all" else f" có trạng thái {status_label(tab_key, lang)}"
                st.caption(f"Không có công việc nào{suffix}")
            for task in shown:
                _render_task_card(active_id, task, lang, tab_key)
