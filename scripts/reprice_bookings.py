import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse

import structlog

from wild_oasis.db.engine import engine
from wild_oasis.logging_config import setup_logging
from wild_oasis.services.repricing import reprice_bookings
from wild_oasis.services.settings import get_settings_or_default

setup_logging()
logger = structlog.get_logger(__name__)


def main() -> None:
    """
    Recompute nights and prices of all bookings using the current settings'
    breakfast price. Pass --dry-run to only report what would change.
    """
    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument("--dry-run", action="store_true", help="Report without writing")
    args = parser.parse_args()

    try:
        with engine.begin() as conn:
            breakfast_price = get_settings_or_default(conn).values["breakfast_price"]
            report = reprice_bookings(conn, breakfast_price=breakfast_price, dry_run=args.dry_run)
        logger.info(
            "repricing_finished",
            changed=len(report.changed),
            skipped=len(report.skipped),
        )
    except Exception:
        logger.exception("repricing_failed")
        raise


if __name__ == "__main__":
    main()
