"""Shared fixtures."""
import datetime as dt

import pytest

from models.store import MemoryStore
from utils.helpers import to_timestamp_ms


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_expense():
    """Build an expense record without going through validation."""
    counter = {"n": 0}

    def _make(amount, category="Chi tiêu thiết yếu", subcategory="Nhà hàng", when=None, description=""):
        counter["n"] += 1
        when = when or dt.datetime(2024, 5, 15, 12, 0)
        return {
            "id": f"e{counter['n']}",
            "amount": float(amount),
            "category": category,
            "subcategory": subcategory,
            "description": description,
            "date": when.strftime("%d-%m-%Y"),
            "timestamp": to_timestamp_ms(when),
        }

    return _make
