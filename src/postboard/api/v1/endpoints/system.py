# src/postboard/api/v1/endpoints/system.py
"""System monitoring endpoints."""

from typing import Any

from fastapi import APIRouter

from postboard.api.v1.dependencies import StoreDep

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/store/metrics")
async def get_store_metrics(store: StoreDep) -> dict[str, Any]:
    """Get remote store traffic metrics.

    Returns:
        Request and failure counts, response times and per-collection totals
        since startup.
    """
    return store.get_metrics()
