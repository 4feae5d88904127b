"""Container backed dependency providers."""

from fastapi import Depends, HTTPException, Request, status

from ggstore.core.container import ApplicationContainer
from ggstore.modules.payments import WebhookService


def get_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Service starting")
    return container


def get_webhook_service(container: ApplicationContainer = Depends(get_container)) -> WebhookService:
    return container.webhooks


__all__ = [
    "get_container",
    "get_webhook_service",
]
