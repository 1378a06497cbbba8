"""Kubernetes probe endpoints.

Mounted at root level, outside /api/v1, and not routed by the ingress.
"""

from fastapi import APIRouter

router = APIRouter(tags=["internal"])


@router.get("/healthz", include_in_schema=False)
async def healthz():
    """Liveness probe - is the process alive?"""
    return {"status": "ok"}


@router.get("/readyz", include_in_schema=False)
async def readyz():
    """Readiness probe - is the service ready to receive traffic?"""
    return {"status": "ok"}
