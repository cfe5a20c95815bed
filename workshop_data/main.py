"""Data layer factory and lifespan."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from workshop_data.application.services import UnifiedDataFacade
from workshop_data.config import Settings, get_settings
from workshop_data.infrastructure.dependencies import build_data_facade, get_remote_store
from workshop_data.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_data_layer(settings: Settings | None = None) -> AsyncIterator[UnifiedDataFacade]:
    """Build the remote store and facade, and release the store's resources on exit.

    Usage:
        async with open_data_layer() as data:
            await data.load_all()
            for view in data.client_relationships:
                ...
    """
    settings = settings or get_settings()
    setup_logging(settings)

    store = await get_remote_store(settings)
    logger.info("Data layer started (backend=%s, env=%s)", settings.remote_backend, settings.app_env)
    try:
        yield build_data_facade(store, settings)
    finally:
        await store.close()
        logger.info("Data layer closed")
