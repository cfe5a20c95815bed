"""Cached client/instrument/connection data layer for an instrument workshop."""

from workshop_data.application.services import (
    CacheStatus,
    FetchResult,
    MutationResult,
    UnifiedDataFacade,
    UnifiedStateStore,
)
from workshop_data.domain.entities import EntityType
from workshop_data.main import open_data_layer

__all__ = [
    "CacheStatus",
    "EntityType",
    "FetchResult",
    "MutationResult",
    "UnifiedDataFacade",
    "UnifiedStateStore",
    "open_data_layer",
]
