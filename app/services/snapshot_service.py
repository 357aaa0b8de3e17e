"""
app/services/snapshot_service.py

Latest-snapshot resolution: one record per keyword, the one with the most
recent (year, month). Rankings and scatter views read from this snapshot;
summary totals do not.
"""

from __future__ import annotations

from typing import Iterable

from app.domain.buzz_record import BuzzRecord
from app.mappers.month_normalizer import month_ordinal


def recency_key(record: BuzzRecord) -> tuple[int, int]:
    return record.year, month_ordinal(record.month)


def latest_per_keyword(records: Iterable[BuzzRecord]) -> dict[str, BuzzRecord]:
    """
    Map each keyword to its most recent record.

    A later record only replaces the current one when its (year, month) is
    strictly greater, so on ties the first-seen record is kept. Keys keep
    first-seen keyword order.
    """

    latest: dict[str, BuzzRecord] = {}
    for record in records:
        current = latest.get(record.keyword)
        if current is None or recency_key(record) > recency_key(current):
            latest[record.keyword] = record
    return latest
