from .remote_store import (
    ErrorInfo,
    Pagination,
    QueryFilter,
    RemoteStore,
    Row,
    SortSpec,
    StoreResult,
)

__all__ = [
    "ErrorInfo",
    "Pagination",
    "QueryFilter",
    "RemoteStore",
    "Row",
    "SortSpec",
    "StoreResult",
]
