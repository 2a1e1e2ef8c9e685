"""Expense aggregation over in-memory expense lists."""
import datetime as dt

from utils.constants import TIME_FRAMES
from utils.helpers import format_expense_date, from_timestamp_ms, parse_expense_date, to_timestamp_ms


def _check_time_frame(time_frame: str) -> None:
    if time_frame not in TIME_FRAMES:
        raise ValueError(f"Unknown time frame: {time_frame!r}")


def start_of_time_frame(time_frame: str, now: dt.datetime | None = None) -> dt.datetime:
    """First instant of the current week (Monday), month, year, or the epoch for 'all'."""
    _check_time_frame(time_frame)
    now = now or dt.datetime.now()
    midnight = dt.datetime.combine(now.date(), dt.time(0, 0))
    if time_frame == "week":
        return midnight - dt.timedelta(days=now.weekday())
    if time_frame == "month":
        return midnight.replace(day=1)
    if time_frame == "year":
        return midnight.replace(month=1, day=1)
    return from_timestamp_ms(0)


def filter_expenses_by_time_frame(expenses: list[dict], time_frame: str, now: dt.datetime | None = None) -> list[dict]:
    start_ms = to_timestamp_ms(start_of_time_frame(time_frame, now))
    return [e for e in expenses if (e.get("timestamp") or 0) >= start_ms]


def _sum_by(expenses: list[dict], field: str) -> dict[str, float]:
    totals: dict[str, float] = {}
    for e in expenses:
        key = e.get(field) or ""
        totals[key] = totals.get(key, 0.0) + float(e.get("amount") or 0)
    return totals


def group_expenses_by_category(expenses: list[dict]) -> dict[str, float]:
    return _sum_by(expenses, "category")


def group_expenses_by_subcategory(expenses: list[dict]) -> dict[str, float]:
    return _sum_by(expenses, "subcategory")


def date_bucket(expense: dict, time_frame: str) -> str:
    """DD-MM-YYYY bucket, or MM-YYYY when viewing a whole year.

    Dates that cannot be parsed are bucketed under their raw text.
    """
    raw = expense.get("date") or ""
    try:
        day = parse_expense_date(raw)
    except ValueError:
        return raw
    return day.strftime("%m-%Y") if time_frame == "year" else format_expense_date(day)


def _bucket_sort_key(bucket: str):
    # Unparseable buckets sort first, by text.
    for fmt in ("%d-%m-%Y", "%m-%Y"):
        try:
            d = dt.datetime.strptime(bucket, fmt)
        except ValueError:
            continue
        return (1, d.year, d.month, d.day)
    return (0, bucket)


def group_expenses_by_date(expenses: list[dict], time_frame: str) -> dict[str, float]:
    """Totals per date bucket in chronological order."""
    _check_time_frame(time_frame)
    totals: dict[str, float] = {}
    for e in expenses:
        key = date_bucket(e, time_frame)
        totals[key] = totals.get(key, 0.0) + float(e.get("amount") or 0)
    return {k: totals[k] for k in sorted(totals, key=_bucket_sort_key)}


def calculate_total_expenses(expenses: list[dict]) -> float:
    return sum(float(e.get("amount") or 0) for e in expenses)


def top_categories(expenses: list[dict], n: int = 3) -> list[tuple[str, float]]:
    grouped = group_expenses_by_category(expenses)
    return sorted(grouped.items(), key=lambda kv: kv[1], reverse=True)[:n]


def _previous_period_start(time_frame: str, start: dt.datetime) -> dt.datetime:
    if time_frame == "week":
        return start - dt.timedelta(days=7)
    if time_frame == "month":
        if start.month == 1:
            return start.replace(year=start.year - 1, month=12)
        return start.replace(month=start.month - 1)
    return start.replace(year=start.year - 1)


def previous_period_expenses(expenses: list[dict], time_frame: str, now: dt.datetime | None = None) -> list[dict]:
    """Expenses in the period right before the current one. Empty for 'all'."""
    _check_time_frame(time_frame)
    if time_frame == "all":
        return []
    start = start_of_time_frame(time_frame, now)
    prev_start_ms = to_timestamp_ms(_previous_period_start(time_frame, start))
    start_ms = to_timestamp_ms(start)
    return [e for e in expenses if prev_start_ms <= (e.get("timestamp") or 0) < start_ms]


def percentage_change(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100.0


def expense_summary(expenses: list[dict], time_frame: str, now: dt.datetime | None = None) -> dict:
    """Totals for the current period compared with the previous one.

    ``expenses`` is the full, unfiltered list; the time frame is applied here.
    """
    current = filter_expenses_by_time_frame(expenses, time_frame, now)
    previous = previous_period_expenses(expenses, time_frame, now)
    total = calculate_total_expenses(current)
    previous_total = calculate_total_expenses(previous)
    return {
        "total": total,
        "previous_total": previous_total,
        "percentage_change": percentage_change(total, previous_total),
        "count": len(current),
        "top_categories": top_categories(current, 3),
    }


def category_breakdown_by_date(expenses: list[dict], time_frame: str, top_n: int = 3) -> list[dict]:
    """One row per date bucket with amounts for the overall top categories.

    Each row also carries ``total``, the bucket's spending across all categories.
    """
    leaders = [name for name, _ in top_categories(expenses, top_n)]
    rows: dict[str, dict] = {}
    for bucket, total in group_expenses_by_date(expenses, time_frame).items():
        rows[bucket] = {"name": bucket, **{c: 0.0 for c in leaders}, "total": total}
    for e in expenses:
        category = e.get("category")
        if category in leaders:
            rows[date_bucket(e, time_frame)][category] += float(e.get("amount") or 0)
    return list(rows.values())


def compare_by_category(data1: dict, data2: dict) -> list[dict]:
    """Per-category totals of two user data files side by side."""
    totals1 = group_expenses_by_category(data1.get("expenses", []))
    totals2 = group_expenses_by_category(data2.get("expenses", []))
    names = list(dict.fromkeys([*totals1, *totals2]))
    return [
        {"name": name, "file1": totals1.get(name, 0.0), "file2": totals2.get(name, 0.0)}
        for name in names
    ]
