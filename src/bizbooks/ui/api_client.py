"""HTTP client wrapper for the backend API.

This module only needs httpx, so it stays importable without the optional
`frontend` extra.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from bizbooks.domain.documents import Company, DocumentRecord, Scope, record_from_mapping
from bizbooks.domain.value_objects import DocumentKind, ScopeRule
from bizbooks.exceptions import FetchFailedError
from bizbooks.logging_config import get_logger
from bizbooks.repositories.interfaces import DocumentSource

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class APIError(Exception):
    status_code: int
    detail: str

    def __str__(self) -> str:
        return f"APIError({self.status_code}): {self.detail}"


# 502: the server answered, but not with what the endpoint promises.
def _expect(data: Any, kind: type, path: str) -> Any:
    if not isinstance(data, kind):
        raise APIError(
            status_code=502,
            detail=f"Unexpected response from {path}: expected {kind.__name__}",
        )
    return data


class BooksAPIClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._client = (
            client
            if client is not None
            else httpx.AsyncClient(base_url=base_url, timeout=timeout)
        )
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        r = await self._client.request(method, path, params=params, json=json)
        if 200 <= r.status_code < 300:
            if r.status_code == 204:
                return None
            try:
                return r.json()
            except ValueError as e:
                raise APIError(status_code=502, detail=f"Invalid JSON from {path}") from e

        detail = r.text
        try:
            payload = r.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            raw_detail = payload.get("message", payload.get("detail"))
            detail = raw_detail if isinstance(raw_detail, str) else str(raw_detail)

        raise APIError(status_code=r.status_code, detail=detail)

    async def list_companies(self) -> list[Company]:
        data = _expect(await self._request_json("GET", "/companies"), list, "/companies")
        return [_company_from_json(_expect(item, dict, "/companies")) for item in data]

    async def create_company(
        self, name: str, company_id: str | None = None, currency: str = "KES"
    ) -> Company:
        payload: dict[str, Any] = {"name": name, "currency": currency}
        if company_id is not None:
            payload["id"] = company_id
        data = _expect(
            await self._request_json("POST", "/companies", json=payload), dict, "/companies"
        )
        return _company_from_json(data)

    async def list_documents(
        self, kind: DocumentKind, scope: Scope
    ) -> list[DocumentRecord]:
        param = "user_id" if scope.rule is ScopeRule.IDENTITY else "company_id"
        path = f"/documents/{kind.value}"
        data = _expect(
            await self._request_json("GET", path, params={param: scope.value}), list, path
        )
        return [record_from_mapping(kind, _expect(item, dict, path)) for item in data]


def _company_from_json(data: dict[str, Any]) -> Company:
    if "id" not in data:
        raise APIError(status_code=502, detail="Company without an id")
    return Company(
        id=str(data["id"]),
        name=str(data.get("name", data["id"])),
        currency=str(data.get("currency", "KES")),
    )


class APIDocumentSource(DocumentSource):
    """Document source backed by the HTTP API.

    The scope travels as a query parameter so the server does the filtering.
    """

    def __init__(self, client: BooksAPIClient) -> None:
        self._client = client

    async def fetch(self, kind: DocumentKind, scope: Scope) -> list[DocumentRecord]:
        self.check_scope(kind, scope)
        try:
            return await self._client.list_documents(kind, scope)
        except APIError as e:
            logger.warning(
                "api_fetch_failed",
                kind=kind.value,
                status_code=e.status_code,
                detail=e.detail,
            )
            raise FetchFailedError(kind.label, e.detail or f"HTTP {e.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("api_unreachable", kind=kind.value, error=str(e))
            raise FetchFailedError(kind.label, str(e) or type(e).__name__) from e
