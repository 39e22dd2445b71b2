"""System endpoints: health and test-environment reset."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from hottakes.api.v1.dependencies import SessionDep
from hottakes.core.errors import NotFoundError
from hottakes.core.settings import settings
from hottakes.db.session import Base

router = APIRouter(prefix="/system", tags=["system"])

logger = logging.getLogger(__name__)


@router.get("/health")
async def health() -> dict[str, str]:
    """Report service identity and liveness."""
    return {"status": "ok", "name": settings.app_name, "version": settings.app_version}


@router.delete("/reset")
async def reset_database(db: SessionDep) -> dict[str, bool]:
    """Delete every row in every table.

    Only available when ENABLE_TEST_RESET is set; otherwise the route
    behaves as if it did not exist.
    """
    if not settings.enable_test_reset:
        raise NotFoundError("not found")

    for table in reversed(Base.metadata.sorted_tables):
        db.execute(table.delete())
    db.commit()
    logger.warning("Database reset through the system endpoint")
    return {"cleared": True}
