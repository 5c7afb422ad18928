from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """
    Liveness only: does not touch the database.
    """
    return {"status": "ok"}
