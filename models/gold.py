"""Gold price feed: parsing, change detection and capped history.

The BTMC feed returns an XML document with one element per gold type, e.g.
``<Data row="1" n_1="VÀNG MIẾNG SJC" k_1="24k" h_1="999.9" pb_1="..." ps_1="..."/>``.
Each poll is diffed against the last known record per gold type and only
changed entries are appended to the stored history.
"""
import datetime as dt
import json
import os
import re
import xml.etree.ElementTree as ET

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from utils.constants import GOLD_HISTORY_KEY, GOLD_HISTORY_LIMIT, GOLD_LATEST_KEY
from utils.log import get_logger
from .store import KeyValueStore

logger = get_logger(__name__)

ELEMENT_NAMES = ("Data", "data", "item", "row")
TRACKED_FIELDS = ("karat", "purity", "buyPrice", "sellPrice")
TXT_HEADERS = ["Thời gian", "Ngày", "Tên vàng", "Giá mua", "Giá bán", "Karat", "Độ tinh khiết"]


class GoldPriceError(Exception):
    """The feed could not be fetched or contained no usable prices."""


def gold_api_url() -> str:
    return os.getenv("GOLD_API_URL", "http://api.btmc.vn/api/BTMCAPI/getpricebtmc?key=1")


def gold_poll_seconds() -> int:
    return int(os.getenv("GOLD_POLL_SECONDS", "60"))


def poll_due(last_polled: dt.datetime | None, now: dt.datetime, interval_s: float, slack_s: float = 1.0) -> bool:
    """Whether a new fetch is allowed. ``slack_s`` absorbs timer jitter on scheduled reruns."""
    if last_polled is None:
        return True
    return (now - last_polled).total_seconds() >= interval_s - slack_s


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type(requests.RequestException),
    reraise=True,
)
def _get(url: str, timeout: float) -> str:
    resp = requests.get(
        url,
        headers={"Accept": "application/xml, text/xml, */*", "Cache-Control": "no-cache"},
        timeout=timeout,
    )
    resp.raise_for_status()
    return resp.text


def fetch_gold_xml(url: str | None = None, timeout: float = 10) -> str:
    url = url or gold_api_url()
    try:
        return _get(url, timeout)
    except requests.RequestException as e:
        logger.warning("gold_fetch_failed", url=url, error=str(e))
        raise GoldPriceError(f"Could not fetch gold prices: {e}") from e


def _to_int(value: str | None) -> int:
    digits = re.sub(r"[^\d-]", "", value or "")
    try:
        return int(digits)
    except ValueError:
        return 0


def _attr(element: ET.Element, row: str, *names: str) -> str | None:
    for name in names:
        value = element.get(f"{name}_{row}")
        if value:
            return value
    for name in names:
        value = element.get(name)
        if value:
            return value
    return None


def parse_gold_xml(xml_text: str, now: dt.datetime | None = None) -> list[dict]:
    """Parse the feed into price records. Raises GoldPriceError if nothing usable is found."""
    if not (xml_text or "").strip():
        raise GoldPriceError("Empty response from gold price feed")
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise GoldPriceError(f"Malformed gold price XML: {e}") from e

    elements: list[ET.Element] = []
    for tag in ELEMENT_NAMES:
        elements = list(root.iter(tag))
        if elements:
            break
    if not elements:
        raise GoldPriceError(f"No price entries found under <{root.tag}>")

    now = now or dt.datetime.now()
    records = []
    for index, element in enumerate(elements):
        row = element.get("row") or str(index + 1)
        name = _attr(element, row, "n", "name") or (element.text or "").strip()
        record = {
            "row": _to_int(row) or index + 1,
            "name": name,
            "karat": _attr(element, row, "k", "karat") or "24K",
            "purity": _attr(element, row, "h", "purity") or "999.9",
            "buyPrice": _to_int(_attr(element, row, "pb", "buy")),
            "sellPrice": _to_int(_attr(element, row, "ps", "sell")),
            "change": _to_int(_attr(element, row, "pt", "change")),
            "date": _attr(element, row, "d", "date") or now.strftime("%d/%m/%Y"),
            "timestamp": now.isoformat(),
            "time": now.strftime("%H:%M:%S"),
        }
        if record["name"] and (record["buyPrice"] > 0 or record["sellPrice"] > 0):
            records.append(record)

    if not records:
        raise GoldPriceError("Gold price feed contained no valid entries")
    return records


def latest_by_name(records: list[dict]) -> dict[str, dict]:
    """Newest record per gold type."""
    latest: dict[str, dict] = {}
    for r in records:
        name = r.get("name")
        if not name:
            continue
        if name not in latest or r["timestamp"] >= latest[name]["timestamp"]:
            latest[name] = r
    return latest


def has_changed(record: dict, previous: dict | None) -> bool:
    if previous is None:
        return True
    return any(record.get(f) != previous.get(f) for f in TRACKED_FIELDS)


def detect_changes(fresh: list[dict], last_by_name: dict[str, dict]) -> list[dict]:
    """Records whose gold type is new or whose tracked fields differ from the last one seen."""
    current = dict(last_by_name)
    changes = []
    for r in fresh:
        if has_changed(r, current.get(r["name"])):
            changes.append(r)
        current[r["name"]] = r
    return changes


def append_capped(history: list[dict], entries: list[dict], limit: int) -> list[dict]:
    """Append entries, keeping only the newest ``limit`` records."""
    if limit <= 0:
        return []
    return [*history, *entries][-limit:]


class GoldPriceTracker:
    """Keeps the latest price per gold type and a capped change history in a store."""

    def __init__(self, store: KeyValueStore, history_limit: int = GOLD_HISTORY_LIMIT):
        self._store = store
        self.history_limit = history_limit

    @property
    def latest(self) -> dict[str, dict]:
        return dict(self._store.get(GOLD_LATEST_KEY) or {})

    @property
    def history(self) -> list[dict]:
        return list(self._store.get(GOLD_HISTORY_KEY) or [])

    def current_prices(self) -> list[dict]:
        return sorted(self.latest.values(), key=lambda r: r.get("row") or 0)

    def ingest(self, records: list[dict]) -> list[dict]:
        """Store a fresh batch. Returns the records that were appended to history."""
        previous = self.latest
        changes = detect_changes(records, previous)
        if changes:
            self._store.set(GOLD_HISTORY_KEY, append_capped(self.history, changes, self.history_limit))
        self._store.set(GOLD_LATEST_KEY, {**previous, **latest_by_name(records)})
        logger.info("gold_prices_ingested", received=len(records), changed=len(changes))
        return changes

    def poll(self, fetcher=fetch_gold_xml, url: str | None = None) -> list[dict]:
        xml_text = fetcher(url or gold_api_url())
        return self.ingest(parse_gold_xml(xml_text))

    def clear(self) -> None:
        self._store.delete(GOLD_HISTORY_KEY)
        self._store.delete(GOLD_LATEST_KEY)


def price_stats(current: list[dict]) -> dict | None:
    prices = [r["sellPrice"] for r in current if (r.get("sellPrice") or 0) > 0]
    if not prices:
        return None
    return {
        "avgSellPrice": sum(prices) / len(prices),
        "maxPrice": max(prices),
        "minPrice": min(prices),
    }


def chart_series(history: list[dict], name: str, limit: int = 20) -> list[dict]:
    """Last ``limit`` history points for one gold type."""
    points = [r for r in history if r.get("name") == name][-limit:]
    return [
        {
            "time": r.get("time"),
            "buyPrice": r.get("buyPrice"),
            "sellPrice": r.get("sellPrice") or r.get("buyPrice"),
        }
        for r in points
    ]


def export_json(current: list[dict], history: list[dict], now: dt.datetime | None = None) -> tuple[str, str]:
    now = now or dt.datetime.now()
    payload = {
        "currentPrices": current,
        "historicalData": history,
        "exportTime": now.isoformat(),
        "totalRecords": len(history),
    }
    return f"gold-price-data-{now.date().isoformat()}.json", json.dumps(payload, ensure_ascii=False, indent=2)


def _vi_number(value: int) -> str:
    return f"{int(value or 0):,}".replace(",", ".")


def export_txt(history: list[dict], now: dt.datetime | None = None) -> tuple[str, str]:
    now = now or dt.datetime.now()
    lines = ["\t".join(TXT_HEADERS)]
    for r in history:
        lines.append(
            "\t".join([
                str(r.get("time", "")),
                str(r.get("date", "")),
                str(r.get("name", "")),
                _vi_number(r.get("buyPrice")),
                _vi_number(r.get("sellPrice")),
                str(r.get("karat", "")),
                str(r.get("purity", "")),
            ])
        )
    return f"gold-price-data-{now.date().isoformat()}.txt", "\n".join(lines)
