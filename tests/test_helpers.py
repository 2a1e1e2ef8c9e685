"""Tests for formatting helpers and translations."""

import datetime as dt

import pytest

from utils.helpers import (
    category_from_subcategory,
    current_date_formatted,
    format_currency,
    format_date,
    parse_expense_date,
    read_number,
    subcategory_choices,
)
from utils.i18n import priority_label, status_label, t


class TestFormatCurrency:
    def test_vnd_uses_dot_grouping_and_dong_sign(self):
        assert format_currency(1234567) == "1.234.567 ₫"

    def test_vnd_rounds_to_whole_dong(self):
        assert format_currency(999.6) == "1.000 ₫"

    def test_usd(self):
        assert format_currency(1234.5, "USD") == "$1,234.50"

    def test_negative_amounts(self):
        assert format_currency(-5000) == "-5.000 ₫"
        assert format_currency(-2, "USD") == "-$2.00"

    def test_none_is_zero(self):
        assert format_currency(None) == "0 ₫"


class TestDates:
    def test_format_date_swaps_separator(self):
        assert format_date("09-03-2024") == "09/03/2024"

    def test_format_date_leaves_other_text_alone(self):
        assert format_date("2024/03/09") == "2024/03/09"

    @pytest.mark.parametrize("text", ["09-03-2024", "2024-03-09", "09/03/2024"])
    def test_parse_expense_date_formats(self, text):
        assert parse_expense_date(text) == dt.date(2024, 3, 9)

    def test_parse_expense_date_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_expense_date("yesterday")

    def test_current_date_formatted(self):
        assert current_date_formatted(dt.date(2024, 3, 9)) == "09-03-24"


class TestCategoryLookup:
    def test_known_subcategory(self):
        assert category_from_subcategory("Chứng khoán") == "Đầu tư"

    def test_unknown_subcategory_falls_back(self):
        assert category_from_subcategory("Lottery") == "Chi khác"


class TestSubcategoryChoices:
    """Options offered when editing an expense."""

    def test_lists_only_subcategories_of_the_category(self):
        options, index = subcategory_choices("Đầu tư", "Quỹ")
        assert options == ["Sự kiện", "Chứng khoán", "Bất động sản", "Quỹ", "Khác"]
        assert index == 3

    def test_subcategory_from_another_category_selects_first(self):
        options, index = subcategory_choices("Tiết kiệm", "Nhà hàng")
        assert options == ["Tiết kiệm"]
        assert index == 0


class TestReadNumber:
    """Vietnamese amount reading."""

    @pytest.mark.parametrize(
        "number,expected",
        [
            (0, "Không đồng"),
            (5, "Năm đồng"),
            (10, "Mười đồng"),
            (15, "Mười lăm đồng"),
            (21, "Hai mươi mốt đồng"),
            (25, "Hai mươi lăm đồng"),
            (105, "Một trăm lẻ năm đồng"),
            (1005, "Một nghìn không trăm lẻ năm đồng"),
            (100000, "Một trăm nghìn đồng"),
            (1000000, "Một triệu đồng"),
            (2500000, "Hai triệu năm trăm nghìn đồng"),
            (1000000000, "Một tỷ đồng"),
        ],
    )
    def test_reads_amounts(self, number, expected):
        assert read_number(number) == expected

    def test_negative_amount(self):
        assert read_number(-20) == "Âm hai mươi đồng"


class TestTranslations:
    def test_translates_to_requested_language(self):
        assert t("settings", "en") == "Settings"
        assert t("greeting", "vi", name="Lan") == "Xin chào, Lan"

    def test_unknown_language_falls_back_to_english(self):
        assert t("compare", "fr") == "Compare"

    def test_unknown_key_returns_key(self):
        assert t("no_such_key", "en") == "no_such_key"

    def test_priority_and_status_labels(self):
        assert priority_label("urgent", "en") == "Urgent"
        assert status_label("in-progress", "vi") == "Đang làm"
