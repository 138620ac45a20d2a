"""
Batch recomputation of booking prices from dates and cabin rates.

This is the derive-from-dates path of the pricing engine applied to bookings
that already exist, e.g. after cabin rates were corrected or after a bulk
import whose prices were not trusted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.engine import Connection

from wild_oasis.db.readers.cabins import get_cabins_by_ids
from wild_oasis.db.writers.bookings import update_booking
from wild_oasis.models.bookings import Booking
from wild_oasis.services.pricing import DEFAULT_BREAKFAST_PRICE, quote_stay

logger = structlog.get_logger(__name__)

PRICE_FIELDS = ("num_nights", "cabin_price", "extras_price", "total_price")


@dataclass
class RepricingReport:
    examined: int = 0
    changed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def reprice_bookings(
    conn: Connection,
    breakfast_price: float = DEFAULT_BREAKFAST_PRICE,
    dry_run: bool = False,
) -> RepricingReport:
    """
    Recompute nights and prices of every booking and store the ones that differ.

    Bookings whose cabin no longer exists, or whose dates give fewer than one
    night, are skipped and reported.

    Args:
        conn: Connection inside a transaction
        breakfast_price: Per-guest, per-night breakfast rate
        dry_run: If True, compute and report without writing

    Returns:
        RepricingReport: ids of changed and skipped bookings
    """
    rows = [dict(r) for r in conn.execute(select(Booking)).mappings().all()]
    cabins = get_cabins_by_ids(conn, (r["cabin_id"] for r in rows))
    report = RepricingReport(examined=len(rows))

    for row in rows:
        cabin = cabins.get(row["cabin_id"])
        if cabin is None:
            report.skipped.append(row["id"])
            continue

        quote = quote_stay(
            cabin,
            row["start_date"],
            row["end_date"],
            row["num_guests"],
            row["has_breakfast"],
            breakfast_price,
        )
        if quote.num_nights < 1 or quote.cabin_price < 0:
            report.skipped.append(row["id"])
            continue

        values: dict[str, Any] = {name: getattr(quote, name) for name in PRICE_FIELDS}
        if all(row[name] == values[name] for name in PRICE_FIELDS):
            continue

        report.changed.append(row["id"])
        if not dry_run:
            update_booking(conn, row["id"], values)

    logger.info(
        "bookings_repriced",
        examined=report.examined,
        changed=len(report.changed),
        skipped=len(report.skipped),
        dry_run=dry_run,
    )
    return report
