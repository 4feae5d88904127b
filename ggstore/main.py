from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ggstore import __version__
from ggstore.core.config import Settings, get_settings
from ggstore.core.container import ApplicationContainer
from ggstore.interfaces.http import create_api_router
from ggstore.interfaces.telegram import build_application, start_bot, stop_bot
from ggstore.schemas import HealthResponse

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ApplicationContainer] = None,
    *,
    run_bot: Optional[bool] = None,
) -> FastAPI:
    settings = settings or (container.settings if container else get_settings())
    if run_bot is None:
        run_bot = settings.telegram_enabled

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        active = container or ApplicationContainer.build(settings)
        await active.start()
        app.state.container = active

        bot = None
        if run_bot:
            bot = build_application(active)
            await start_bot(bot, drop_pending_updates=settings.telegram.drop_pending_updates)
        else:
            logger.warning("Telegram bot disabled; serving payment webhooks only")

        try:
            yield
        finally:
            if bot is not None:
                await stop_bot(bot)
            app.state.container = None
            await active.close()

    app = FastAPI(
        title=settings.project_name,
        description="GG store bot: Telegram commands and payment webhooks",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(create_api_router())

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=__version__, telegram=run_bot)

    return app
