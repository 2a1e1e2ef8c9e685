"""Tests for expense aggregation."""

import datetime as dt

import pytest

from models.analytics import (
    calculate_total_expenses,
    category_breakdown_by_date,
    compare_by_category,
    expense_summary,
    filter_expenses_by_time_frame,
    group_expenses_by_category,
    group_expenses_by_date,
    group_expenses_by_subcategory,
    percentage_change,
    previous_period_expenses,
    start_of_time_frame,
    top_categories,
)

# Wednesday
NOW = dt.datetime(2024, 5, 15, 12, 0)


class TestStartOfTimeFrame:
    def test_week_starts_monday_midnight(self):
        assert start_of_time_frame("week", NOW) == dt.datetime(2024, 5, 13)

    def test_week_on_a_monday(self):
        assert start_of_time_frame("week", dt.datetime(2024, 5, 13, 23, 59)) == dt.datetime(2024, 5, 13)

    def test_month_and_year(self):
        assert start_of_time_frame("month", NOW) == dt.datetime(2024, 5, 1)
        assert start_of_time_frame("year", NOW) == dt.datetime(2024, 1, 1)

    def test_unknown_time_frame(self):
        with pytest.raises(ValueError):
            start_of_time_frame("decade", NOW)


class TestFiltering:
    def test_filter_by_week_and_month(self, make_expense):
        this_week = make_expense(10, when=dt.datetime(2024, 5, 13, 0, 0))
        last_week = make_expense(20, when=dt.datetime(2024, 5, 12, 23, 59))
        last_month = make_expense(30, when=dt.datetime(2024, 4, 30))
        expenses = [this_week, last_week, last_month]

        assert filter_expenses_by_time_frame(expenses, "week", NOW) == [this_week]
        assert filter_expenses_by_time_frame(expenses, "month", NOW) == [this_week, last_week]
        assert filter_expenses_by_time_frame(expenses, "year", NOW) == expenses
        assert filter_expenses_by_time_frame(expenses, "all", NOW) == expenses

    def test_previous_week_window(self, make_expense):
        inside = make_expense(10, when=dt.datetime(2024, 5, 6))
        before = make_expense(20, when=dt.datetime(2024, 5, 5, 23, 0))
        current = make_expense(30, when=dt.datetime(2024, 5, 13))
        assert previous_period_expenses([inside, before, current], "week", NOW) == [inside]

    def test_previous_month_crosses_year(self, make_expense):
        december = make_expense(10, when=dt.datetime(2023, 12, 20))
        november = make_expense(20, when=dt.datetime(2023, 11, 20))
        now = dt.datetime(2024, 1, 10)
        assert previous_period_expenses([december, november], "month", now) == [december]

    def test_previous_period_for_all_is_empty(self, make_expense):
        assert previous_period_expenses([make_expense(10)], "all", NOW) == []


class TestGrouping:
    def test_group_by_category_and_subcategory(self, make_expense):
        expenses = [
            make_expense(100, subcategory="Nhà hàng"),
            make_expense(50, subcategory="Đi lại"),
            make_expense(25, category="Tiết kiệm", subcategory="Tiết kiệm"),
        ]
        assert group_expenses_by_category(expenses) == {"Chi tiêu thiết yếu": 150.0, "Tiết kiệm": 25.0}
        assert group_expenses_by_subcategory(expenses) == {"Nhà hàng": 100.0, "Đi lại": 50.0, "Tiết kiệm": 25.0}
        assert calculate_total_expenses(expenses) == 175.0

    def test_group_by_date_is_chronological(self, make_expense):
        expenses = [
            make_expense(1, when=dt.datetime(2024, 5, 2)),
            make_expense(2, when=dt.datetime(2024, 4, 30)),
            make_expense(3, when=dt.datetime(2024, 5, 2, 18, 0)),
            make_expense(4, when=dt.datetime(2023, 12, 31)),
        ]
        assert list(group_expenses_by_date(expenses, "all").items()) == [
            ("31-12-2023", 4.0),
            ("30-04-2024", 2.0),
            ("02-05-2024", 4.0),
        ]

    def test_year_view_buckets_by_month(self, make_expense):
        expenses = [
            make_expense(5, when=dt.datetime(2024, 3, 1)),
            make_expense(7, when=dt.datetime(2024, 3, 28)),
            make_expense(1, when=dt.datetime(2024, 1, 9)),
        ]
        assert group_expenses_by_date(expenses, "year") == {"01-2024": 1.0, "03-2024": 12.0}

    def test_top_categories(self, make_expense):
        expenses = [
            make_expense(10, category="Tiết kiệm", subcategory="Tiết kiệm"),
            make_expense(40, category="Đầu tư", subcategory="Quỹ"),
            make_expense(30),
            make_expense(5, category="Tiền vay", subcategory="Tiền vay"),
        ]
        assert top_categories(expenses) == [("Đầu tư", 40.0), ("Chi tiêu thiết yếu", 30.0), ("Tiết kiệm", 10.0)]


class TestSummary:
    def test_percentage_change(self):
        assert percentage_change(150, 100) == 50.0
        assert percentage_change(50, 100) == -50.0
        assert percentage_change(10, 0) == 100.0
        assert percentage_change(0, 0) == 0.0

    def test_month_summary(self, make_expense):
        expenses = [
            make_expense(300, when=dt.datetime(2024, 5, 3)),
            make_expense(100, category="Tiết kiệm", subcategory="Tiết kiệm", when=dt.datetime(2024, 5, 10)),
            make_expense(200, when=dt.datetime(2024, 4, 10)),
            make_expense(999, when=dt.datetime(2024, 3, 10)),
        ]
        summary = expense_summary(expenses, "month", NOW)
        assert summary["total"] == 400.0
        assert summary["previous_total"] == 200.0
        assert summary["percentage_change"] == 100.0
        assert summary["count"] == 2
        assert summary["top_categories"] == [("Chi tiêu thiết yếu", 300.0), ("Tiết kiệm", 100.0)]

    def test_empty_summary(self):
        summary = expense_summary([], "week", NOW)
        assert summary["total"] == 0.0
        assert summary["percentage_change"] == 0.0
        assert summary["top_categories"] == []


class TestBreakdownAndCompare:
    def test_breakdown_rows_cover_top_categories_per_bucket(self, make_expense):
        expenses = [
            make_expense(10, when=dt.datetime(2024, 5, 1)),
            make_expense(20, category="Đầu tư", subcategory="Quỹ", when=dt.datetime(2024, 5, 2)),
            make_expense(1, category="Tiền vay", subcategory="Tiền vay", when=dt.datetime(2024, 5, 2)),
        ]
        rows = category_breakdown_by_date(expenses, "month", top_n=2)
        assert rows == [
            {"name": "01-05-2024", "Đầu tư": 0.0, "Chi tiêu thiết yếu": 10.0, "total": 10.0},
            {"name": "02-05-2024", "Đầu tư": 20.0, "Chi tiêu thiết yếu": 0.0, "total": 21.0},
        ]

    def test_compare_by_category_unions_categories(self, make_expense):
        first = {"expenses": [make_expense(10), make_expense(5, category="Tiết kiệm", subcategory="Tiết kiệm")]}
        second = {"expenses": [make_expense(7, category="Đầu tư", subcategory="Quỹ"), make_expense(3)]}
        assert compare_by_category(first, second) == [
            {"name": "Chi tiêu thiết yếu", "file1": 10.0, "file2": 3.0},
            {"name": "Tiết kiệm", "file1": 5.0, "file2": 0.0},
            {"name": "Đầu tư", "file1": 0.0, "file2": 7.0},
        ]


class TestImportedDates:
    """Date text from imported files in other or broken formats."""

    def test_iso_dates_group_chronologically_with_stored_format(self, make_expense):
        june = {**make_expense(1, when=dt.datetime(2024, 6, 1)), "date": "2024-06-01"}
        may_iso = {**make_expense(2, when=dt.datetime(2024, 5, 2)), "date": "2024-05-02"}
        may = make_expense(3, when=dt.datetime(2024, 5, 2, 18, 0))
        grouped = group_expenses_by_date([june, may_iso, may], "month")
        assert list(grouped.items()) == [("02-05-2024", 5.0), ("01-06-2024", 1.0)]

    def test_unparseable_dates_get_their_own_bucket(self, make_expense):
        broken = {**make_expense(5), "date": ""}
        fine = make_expense(7, when=dt.datetime(2024, 3, 1))
        assert list(group_expenses_by_date([fine, broken], "year").items()) == [("", 5.0), ("03-2024", 7.0)]
        assert list(group_expenses_by_date([fine, broken], "all").items()) == [("", 5.0), ("01-03-2024", 7.0)]

    def test_breakdown_tolerates_iso_and_broken_dates(self, make_expense):
        iso = {**make_expense(4, when=dt.datetime(2024, 5, 2)), "date": "2024-05-02"}
        broken = {**make_expense(6), "date": "someday"}
        rows = category_breakdown_by_date([iso, broken], "month", top_n=1)
        assert rows == [
            {"name": "someday", "Chi tiêu thiết yếu": 6.0, "total": 6.0},
            {"name": "02-05-2024", "Chi tiêu thiết yếu": 4.0, "total": 4.0},
        ]
