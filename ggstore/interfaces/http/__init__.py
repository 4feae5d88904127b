from fastapi import APIRouter

from ggstore.interfaces.http.routers import webhooks


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(webhooks.router, prefix="/webhook", tags=["webhooks"])
    return router


__all__ = [
    "create_api_router",
]
