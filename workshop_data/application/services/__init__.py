from .state_store import DataState, UnifiedStateStore
from .relationships import RelationshipProjector, derive_relationships
from .search import SearchResult, apply_query, search_all
from .data_facade import CacheStatus, FetchResult, MutationResult, UnifiedDataFacade

__all__ = [
    "DataState",
    "UnifiedStateStore",
    "RelationshipProjector",
    "derive_relationships",
    "SearchResult",
    "apply_query",
    "search_all",
    "CacheStatus",
    "FetchResult",
    "MutationResult",
    "UnifiedDataFacade",
]
