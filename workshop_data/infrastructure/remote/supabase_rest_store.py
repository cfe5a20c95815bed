"""Supabase RemoteStore adapter — talks to PostgREST over httpx.

Query composition follows PostgREST conventions::

    GET    /rest/v1/{table}?select=*&client_id=eq.{id}&order=created_at.desc&limit=1000
    POST   /rest/v1/{table}                  Prefer: return=representation
    PATCH  /rest/v1/{table}?id=eq.{id}       Prefer: return=representation
    DELETE /rest/v1/{table}?id=eq.{id}

Transport failures and non-2xx responses are converted to ``ErrorInfo``.
"""

import logging
from typing import Any

import httpx

from workshop_data.application.interfaces import (
    ErrorInfo,
    Pagination,
    QueryFilter,
    RemoteStore,
    Row,
    SortSpec,
    StoreResult,
)
from workshop_data.domain.exceptions import RemoteStoreConfigurationError

logger = logging.getLogger(__name__)


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _filter_param(query_filter: QueryFilter) -> tuple[str, str]:
    """Render one filter as a ``column=op.value`` query parameter."""
    value = query_filter.value
    if query_filter.operator == "in":
        rendered = ",".join(_format_value(item) for item in value)
        return query_filter.column, f"in.({rendered})"
    return query_filter.column, f"{query_filter.operator}.{_format_value(value)}"


def _parse_count(content_range: str | None) -> int | None:
    """Extract the total from a ``Content-Range: 0-24/3573`` header."""
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


class SupabaseRestStore(RemoteStore):
    """Infrastructure adapter — connects to a Supabase project's REST API.

    Uses a shared ``httpx.AsyncClient``; pass one in to control pooling or
    to substitute a mock transport in tests.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        schema: str = "public",
        timeout: float = 15.0,
        access_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not url or not api_key:
            raise RemoteStoreConfigurationError(
                "supabase", "SUPABASE_URL and SUPABASE_ANON_KEY must both be set"
            )
        self._base_url = f"{url.rstrip('/')}/rest/v1"
        self._api_key = api_key
        self._schema = schema
        self._access_token = access_token
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    def set_access_token(self, access_token: str | None) -> None:
        """Use a signed-in user's JWT instead of the anon key for row-level security."""
        self._access_token = access_token

    def _get_headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token or self._api_key}",
            "Content-Type": "application/json",
            "Accept-Profile": self._schema,
            "Content-Profile": self._schema,
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def close(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()

    async def _send(
        self,
        method: str,
        table: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json: Row | None = None,
        prefer: str | None = None,
    ) -> httpx.Response | ErrorInfo:
        try:
            return await self._http_client.request(
                method,
                f"{self._base_url}/{table}",
                params=params,
                json=json,
                headers=self._get_headers(prefer),
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out: %s", method, table, exc)
            return ErrorInfo(message=f"Request to '{table}' timed out", code="TIMEOUT")
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, table, exc)
            return ErrorInfo(message=str(exc) or type(exc).__name__, code="NETWORK_ERROR")

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ErrorInfo:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            return ErrorInfo(
                message=body.get("message") or response.reason_phrase or "Request failed",
                code=str(body["code"]) if body.get("code") is not None else str(response.status_code),
                details=body.get("details"),
                hint=body.get("hint"),
            )
        return ErrorInfo(
            message=response.text or response.reason_phrase or "Request failed",
            code=str(response.status_code),
        )

    async def fetch(
        self,
        table: str,
        filters: tuple[QueryFilter, ...] = (),
        sort: SortSpec | None = None,
        pagination: Pagination | None = None,
    ) -> StoreResult[list[Row]]:
        params: list[tuple[str, str]] = [("select", "*")]
        params.extend(_filter_param(query_filter) for query_filter in filters)
        if sort is not None:
            params.append(("order", f"{sort.column}.{'asc' if sort.ascending else 'desc'}"))
        if pagination is not None:
            if pagination.offset:
                params.append(("offset", str(pagination.offset)))
            if pagination.limit is not None:
                params.append(("limit", str(pagination.limit)))

        response = await self._send("GET", table, params=params, prefer="count=exact")
        if isinstance(response, ErrorInfo):
            return StoreResult(error=response)
        if response.is_error:
            return StoreResult(error=self._error_from_response(response))

        return StoreResult(
            data=list(response.json() or []),
            count=_parse_count(response.headers.get("content-range")),
        )

    async def insert(self, table: str, row: Row) -> StoreResult[Row]:
        response = await self._send("POST", table, json=row, prefer="return=representation")
        if isinstance(response, ErrorInfo):
            return StoreResult(error=response)
        if response.is_error:
            return StoreResult(error=self._error_from_response(response))
        return self._single_row(response, table, "insert")

    async def update(self, table: str, row_id: str, partial_row: Row) -> StoreResult[Row]:
        response = await self._send(
            "PATCH",
            table,
            params=[("id", f"eq.{row_id}")],
            json=partial_row,
            prefer="return=representation",
        )
        if isinstance(response, ErrorInfo):
            return StoreResult(error=response)
        if response.is_error:
            return StoreResult(error=self._error_from_response(response))
        return self._single_row(response, table, "update", row_id)

    async def delete(self, table: str, row_id: str) -> StoreResult[None]:
        response = await self._send("DELETE", table, params=[("id", f"eq.{row_id}")])
        if isinstance(response, ErrorInfo):
            return StoreResult(error=response)
        if response.is_error:
            return StoreResult(error=self._error_from_response(response))
        return StoreResult()

    @staticmethod
    def _single_row(
        response: httpx.Response, table: str, operation: str, row_id: str | None = None
    ) -> StoreResult[Row]:
        rows = response.json() if response.content else []
        if isinstance(rows, dict):
            return StoreResult(data=rows)
        if not rows:
            target = f" with id '{row_id}'" if row_id else ""
            return StoreResult(
                error=ErrorInfo(
                    message=f"{operation} on '{table}'{target} matched no rows",
                    code="NOT_FOUND",
                )
            )
        return StoreResult(data=rows[0])
