"""Payment provider callbacks."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ggstore.core.exceptions import StorageUnavailableError
from ggstore.interfaces.http.deps import get_webhook_service
from ggstore.modules.payments import (
    InvalidSignatureError,
    MalformedNotificationError,
    MalformedReferenceError,
    PagSeguroGateway,
    UnknownProviderError,
    WebhookService,
    WegateGateway,
)
from ggstore.modules.users import UserNotFoundError
from ggstore.schemas import WebhookAckResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def _reconcile(provider: str, request: Request, service: WebhookService) -> WebhookAckResponse:
    body = await request.body()
    try:
        result = await service.reconcile(
            provider,
            body,
            request.headers,
            request.headers.get("content-type"),
        )
    except InvalidSignatureError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid signature") from exc
    except (MalformedNotificationError, MalformedReferenceError) as exc:
        logger.warning("Malformed %s webhook: %s", provider, exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UserNotFoundError as exc:
        logger.warning("%s webhook for unknown user %s", provider, exc.user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from exc
    except UnknownProviderError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageUnavailableError as exc:
        logger.error("Storage unavailable while handling %s webhook: %s", provider, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Storage unavailable"
        ) from exc

    return WebhookAckResponse(
        status=result.status.value,
        credited=len(result.credits),
        duplicates=result.duplicates,
    )


@router.post("/wegate-pix", response_model=WebhookAckResponse)
async def wegate_pix_webhook(request: Request, service: WebhookService = Depends(get_webhook_service)):
    return await _reconcile(WegateGateway.name, request, service)


@router.post("/pagseguro", response_model=WebhookAckResponse)
async def pagseguro_webhook(request: Request, service: WebhookService = Depends(get_webhook_service)):
    return await _reconcile(PagSeguroGateway.name, request, service)
