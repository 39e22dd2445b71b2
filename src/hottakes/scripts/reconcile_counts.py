"""Recompute post vote counters from the vote ledger.

Run after an incident that may have left counters out of step with the vote
rows, e.g. ``python -m hottakes.scripts.reconcile_counts --post-id 42``.
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from hottakes.core.errors import ServiceError
from hottakes.db.session import SessionLocal
from hottakes.services.reconcile import reconcile_all, reconcile_post

logger = logging.getLogger("hottakes.reconcile")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reconcile post vote counters")
    parser.add_argument(
        "--post-id",
        type=int,
        action="append",
        default=None,
        help="Reconcile only this post (may be repeated). Defaults to every post.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="[reconcile] %(levelname)s %(message)s")

    db = SessionLocal()
    try:
        if args.post_id:
            results = [reconcile_post(db, post_id) for post_id in args.post_id]
            drifted = [result for result in results if result.drifted]
        else:
            drifted = reconcile_all(db)
    except (ServiceError, SQLAlchemyError) as exc:
        db.rollback()
        logger.error("Reconciliation failed: %s", exc)
        return 1
    finally:
        db.close()

    for result in drifted:
        logger.info(
            "post %s: %s -> %s",
            result.post_id,
            result.before,
            result.after,
        )
    logger.info("%d post(s) corrected", len(drifted))
    return 0


if __name__ == "__main__":
    sys.exit(main())
