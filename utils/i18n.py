"""UI translations."""

TRANSLATIONS = {
    "en": {
        "dashboard": "Dashboard",
        "expenses": "Expenses",
        "add_expense": "Add expense",
        "tasks": "Tasks",
        "gold": "Gold",
        "compare": "Compare",
        "settings": "Settings",
        "currency": "Currency",
        "language": "Language",
        "greeting": "Hello, {name}",
        "welcome_title": "Welcome",
        "welcome_prompt": "What should we call you?",
        "total_spent": "Total spent",
        "top_categories": "Top categories",
        "no_expenses": "No expenses yet.",
        "import_file": "Import file",
        "export_file": "Export file",
        "import_warning": "Importing replaces all current data. Export a backup first.",
        "time_frame": "Time frame",
        "chart_type": "Chart type",
        "week": "This week",
        "month": "This month",
        "year": "This year",
        "all": "All time",
        "bar": "Bar chart",
        "pie": "Pie chart",
        "line": "Line chart",
        "priority_normal": "To do",
        "priority_tomorrow": "Do tomorrow",
        "priority_urgent": "Urgent",
        "status_todo": "To do",
        "status_preparing": "Preparing",
        "status_in-progress": "In progress",
        "status_completed": "Completed",
    },
    "vi": {
        "dashboard": "Bảng Điều Khiển",
        "expenses": "Chi Tiêu",
        "add_expense": "Thêm chi tiêu mới",
        "tasks": "Công Việc",
        "gold": "Giá Vàng",
        "compare": "So Sánh",
        "settings": "Cài Đặt",
        "currency": "Tiền Tệ",
        "language": "Ngôn Ngữ",
        "greeting": "Xin chào, {name}",
        "welcome_title": "Chào mừng",
        "welcome_prompt": "Bạn tên là gì?",
        "total_spent": "Tổng chi tiêu",
        "top_categories": "Danh mục chi nhiều nhất",
        "no_expenses": "Chưa có chi tiêu nào.",
        "import_file": "Nhập file",
        "export_file": "Xuất file",
        "import_warning": "Nhập file sẽ thay thế toàn bộ dữ liệu hiện tại. Hãy xuất dữ liệu để sao lưu trước.",
        "time_frame": "Khoảng thời gian",
        "chart_type": "Loại biểu đồ",
        "week": "Tuần này",
        "month": "Tháng này",
        "year": "Năm này",
        "all": "Tất cả",
        "bar": "Biểu đồ cột",
        "pie": "Biểu đồ tròn",
        "line": "Biểu đồ đường",
        "priority_normal": "Cần làm",
        "priority_tomorrow": "Cần làm vào ngày mai",
        "priority_urgent": "Cần gấp",
        "status_todo": "Cần làm",
        "status_preparing": "Chuẩn bị",
        "status_in-progress": "Đang làm",
        "status_completed": "Hoàn thành",
    },
}

DEFAULT_LANGUAGE = "vi"


def t(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Translate a UI key, falling back to English and then to the key."""
    text = TRANSLATIONS.get(lang, {}).get(key) or TRANSLATIONS["en"].get(key) or key
    return text.format(**kwargs) if kwargs else text


def priority_label(priority: str, lang: str = DEFAULT_LANGUAGE) -> str:
    return t(f"priority_{priority}", lang)


def status_label(status: str, lang: str = DEFAULT_LANGUAGE) -> str:
    return t(f"status_{status}", lang)
