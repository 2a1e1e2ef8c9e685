"""Helper utility functions."""
import datetime as dt
import uuid
from .constants import EXPENSE_CATEGORIES, FALLBACK_CATEGORY

_UNIT_WORDS = ["", "một", "hai", "ba", "bốn", "năm", "sáu", "bảy", "tám", "chín"]
_SCALE_WORDS = ["", "nghìn", "triệu", "tỷ", "nghìn tỷ", "triệu tỷ", "tỷ tỷ"]


def format_currency(amount: float, currency: str = "VND") -> str:
    """Format an amount the way the dashboard displays money."""
    value = float(amount or 0)
    sign = "-" if value < 0 else ""
    if currency == "USD":
        return f"{sign}${abs(value):,.2f}"
    grouped = f"{abs(round(value)):,.0f}".replace(",", ".")
    return f"{sign}{grouped} ₫"


def format_date(date_str: str) -> str:
    """Turn DD-MM-YYYY into DD/MM/YYYY."""
    parts = (date_str or "").split("-")
    if len(parts) != 3:
        return date_str
    day, month, year = parts
    return f"{day}/{month}/{year}"


def current_date_formatted(today: dt.date | None = None) -> str:
    """Short DD-MM-YY stamp used for task files and export names."""
    today = today or dt.date.today()
    return today.strftime("%d-%m-%y")


def format_expense_date(value: dt.date) -> str:
    return value.strftime("%d-%m-%Y")


def parse_expense_date(value: str) -> dt.date:
    """Parse an expense date, accepting DD-MM-YYYY and ISO YYYY-MM-DD."""
    text = (value or "").strip()
    for fmt in ("%d-%m-%Y", "%Y-%m-%d", "%d/%m/%Y"):
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {value!r}")


def to_timestamp_ms(value: dt.datetime) -> int:
    return int(value.timestamp() * 1000)


def from_timestamp_ms(value: int | float) -> dt.datetime:
    return dt.datetime.fromtimestamp(float(value) / 1000.0)


def category_from_subcategory(subcategory: str) -> str:
    """Find the category owning a subcategory."""
    for category, subcategories in EXPENSE_CATEGORIES.items():
        if subcategory in subcategories:
            return category
    return FALLBACK_CATEGORY


def generate_unique_id() -> str:
    return uuid.uuid4().hex


def _read_three_digits(number: int, has_higher: bool) -> str:
    hundreds, remainder = divmod(number, 100)
    tens, units = divmod(remainder, 10)

    words: list[str] = []
    if hundreds > 0:
        words += [_UNIT_WORDS[hundreds], "trăm"]
    elif has_higher and (tens > 0 or units > 0):
        words += ["không", "trăm"]

    if tens > 1:
        words += [_UNIT_WORDS[tens], "mươi"]
    elif tens == 1:
        words.append("mười")
    elif units > 0 and (hundreds > 0 or has_higher):
        words.append("lẻ")

    if tens > 1 and units == 1:
        words.append("mốt")
    elif tens > 0 and units == 5:
        words.append("lăm")
    elif units > 0:
        words.append(_UNIT_WORDS[units])

    return " ".join(words)


def read_number(number: int) -> str:
    """Spell out a VND amount in Vietnamese, e.g. 100000 -> 'Một trăm nghìn đồng'."""
    number = int(number)
    if number == 0:
        return "Không đồng"

    remaining = abs(number)
    groups: list[str] = []
    index = 0
    while remaining > 0:
        remaining, chunk = divmod(remaining, 1000)
        chunk_words = _read_three_digits(chunk, has_higher=remaining > 0)
        if chunk_words:
            scale = _SCALE_WORDS[index] if index < len(_SCALE_WORDS) else ""
            groups.insert(0, f"{chunk_words} {scale}".strip())
        index += 1

    text = ("âm " if number < 0 else "") + " ".join(groups) + " đồng"
    return text[0].upper() + text[1:]


def subcategory_choices(category: str, current: str | None = None) -> tuple[list[str], int]:
    """Subcategories of ``category`` and the index to preselect."""
    options = EXPENSE_CATEGORIES.get(category, [])
    return options, options.index(current) if current in options else 0
