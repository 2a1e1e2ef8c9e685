"""Application constants."""

EXPENSE_CATEGORIES = {
    "Chi tiêu thiết yếu": [
        "Đi chợ siêu thị",
        "Nhà hàng",
        "Chi trả hóa đơn",
        "Tiền nhà",
        "Đi lại",
        "Giúp việc",
        "Khác",
    ],
    "Mua sắm giải trí": [
        "Vui chơi giải trí",
        "Mua sắm",
        "Đồ gia dụng",
        "Làm đẹp thể thao",
        "Khác",
    ],
    "Giáo dục và y tế": ["Giáo dục", "Y tế", "Bảo hiểm", "Khác"],
    "Tiết kiệm": ["Tiết kiệm"],
    "Đầu tư": ["Sự kiện", "Chứng khoán", "Bất động sản", "Quỹ", "Khác"],
    "Chi khác": ["Biếu tặng", "Dịch vụ công", "Khác"],
    "Tiền vay": ["Tiền vay", "Khác"],
}

CATEGORIES = list(EXPENSE_CATEGORIES)

FALLBACK_CATEGORY = "Chi khác"

DESCRIPTION_SUGGESTIONS = {
    "Chi tiêu thiết yếu": {
        "Đi chợ siêu thị": ["Đi siêu thị mua thực phẩm", "Mua đồ dùng nhà bếp", "Mua thực phẩm hàng tuần"],
        "Nhà hàng": ["Tiệc tối cùng gia đình", "Ăn tối ngoài", "Ăn trưa công việc"],
        "Chi trả hóa đơn": ["Hóa đơn điện tháng", "Hóa đơn nước", "Hóa đơn internet"],
        "Tiền nhà": ["Tiền thuê nhà tháng", "Phí quản lý chung cư", "Phí bảo trì căn hộ"],
        "Đi lại": ["Tiền xăng xe", "Vé xe buýt", "Phí gửi xe", "Đi grab"],
        "Giúp việc": ["Tiền công giúp việc", "Dịch vụ dọn nhà", "Giặt ủi"],
        "Khác": ["Chi phí thiết yếu hàng ngày"],
    },
    "Mua sắm giải trí": {
        "Vui chơi giải trí": ["Vé xem phim", "Vé concert", "Tiền karaoke", "Du lịch cuối tuần"],
        "Mua sắm": ["Quần áo mới", "Giày dép", "Phụ kiện thời trang"],
        "Đồ gia dụng": ["Mua đồ trang trí nhà", "Thiết bị điện tử", "Dụng cụ nhà bếp mới"],
        "Làm đẹp thể thao": ["Đăng ký tập gym", "Spa và làm đẹp", "Mỹ phẩm"],
        "Khác": ["Chi phí giải trí khác"],
    },
    "Giáo dục và y tế": {
        "Giáo dục": ["Học phí khóa học", "Sách giáo trình", "Phí gia sư"],
        "Y tế": ["Khám bệnh định kỳ", "Thuốc men", "Chi phí nha khoa"],
        "Bảo hiểm": ["Phí bảo hiểm sức khỏe", "Bảo hiểm nhân thọ", "Bảo hiểm xe"],
        "Khác": ["Chi phí giáo dục hoặc y tế khác"],
    },
    "Tiết kiệm": {
        "Tiết kiệm": ["Tiết kiệm hàng tháng", "Quỹ dự phòng", "Tiết kiệm mục tiêu"],
    },
    "Đầu tư": {
        "Sự kiện": ["Đầu tư cho sự kiện", "Tổ chức event"],
        "Chứng khoán": ["Mua cổ phiếu", "Quỹ đầu tư", "ETF"],
        "Bất động sản": ["Đặt cọc mua nhà", "Góp vốn bất động sản", "Tiền thuê đất"],
        "Quỹ": ["Đóng góp quỹ hưu trí", "Quỹ tín thác"],
        "Khác": ["Đầu tư dài hạn khác"],
    },
    "Chi khác": {
        "Biếu tặng": ["Quà sinh nhật", "Quà cưới", "Tiền mừng"],
        "Dịch vụ công": ["Phí hành chính", "Dịch vụ công chứng", "Thủ tục giấy tờ"],
        "Khác": ["Chi phí phát sinh khác"],
    },
    "Tiền vay": {
        "Tiền vay": ["Trả góp vay ngân hàng", "Trả nợ", "Vay tạm người thân"],
        "Khác": ["Khoản vay khác"],
    },
}

CATEGORY_COLORS = {
    "Chi tiêu thiết yếu": "#FF6B6B",
    "Mua sắm giải trí": "#4ECDC4",
    "Giáo dục và y tế": "#FFD166",
    "Tiết kiệm": "#06D6A0",
    "Đầu tư": "#118AB2",
    "Chi khác": "#9775FA",
    "Tiền vay": "#EF4444",
}

TIME_FRAMES = ["week", "month", "year", "all"]
CHART_TYPES = ["bar", "pie", "line"]

PRIORITIES = ["normal", "tomorrow", "urgent"]
STATUSES = ["todo", "preparing", "in-progress", "completed"]

CURRENCIES = ["VND", "USD"]
LANGUAGES = ["vi", "en"]

# Store keys
USER_DATA_KEY = "userData"
SETTINGS_KEY = "settings"
TASK_FILES_KEY = "taskFiles"
LAST_ACTIVE_FILE_KEY = "lastActiveFileId"
TASKS_KEY_PREFIX = "tasks_"
GOLD_LATEST_KEY = "goldLatest"
GOLD_HISTORY_KEY = "goldHistory"

GOLD_HISTORY_LIMIT = 1000

TABS = [
    ("dashboard", "dashboard", "▣"),
    ("transactions", "expenses", "☰"),
    ("add", "", "+"),
    ("tasks", "tasks", "✓"),
    ("gold", "gold", "◉"),
    ("compare", "compare", "⇄"),
    ("settings", "settings", "⚙"),
]
