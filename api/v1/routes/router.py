from fastapi import APIRouter, Response

from api.v1.routes import health
from packages.banking.routes import banking
from packages.billing.routes import webhooks
from packages.chat.routes import chat
from packages.receipts.routes import receipts

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, prefix="/health", tags=["health"])

# Webhooks (no user auth - signature or shared key verified internally)
api_router.include_router(webhooks.router, tags=["webhooks"])

# Metered routes - every handler passes through the usage gate
api_router.include_router(chat.router, tags=["chat"])
api_router.include_router(banking.router, prefix="/banking", tags=["banking"])
api_router.include_router(receipts.router, prefix="/receipts", tags=["receipts"])


@api_router.options("/{path:path}", include_in_schema=False)
async def preflight(path: str) -> Response:
    """Bare OPTIONS requests get a plain 200; CORS preflights never reach here."""
    return Response(content="ok", media_type="text/plain")
