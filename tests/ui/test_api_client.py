from __future__ import annotations

from datetime import date
from decimal import Decimal

import httpx
import pytest

from bizbooks.domain.documents import Invoice, Scope
from bizbooks.domain.value_objects import DocumentKind, PresentationCategory
from bizbooks.exceptions import FetchFailedError, ScopeMismatchError
from bizbooks.repositories.sqlite import SQLiteDocumentRepository
from bizbooks.services.context import (
    LoggingNotifier,
    StaticSessionResolver,
    TenantContext,
)
from bizbooks.services.document_lists import INVOICES_LIST
from bizbooks.services.list_controller import Failed, ListViewController, Populated
from bizbooks.ui.api_client import APIDocumentSource, APIError, BooksAPIClient


class TestBooksAPIClient:
    async def test_list_companies_empty(self, api_client) -> None:
        assert await api_client.list_companies() == []

    async def test_create_company(self, api_client) -> None:
        company = await api_client.create_company("Acme Traders", company_id="acme")

        assert company.id == "acme"
        assert company.currency == "KES"
        assert [c.id for c in await api_client.list_companies()] == ["acme"]

    async def test_duplicate_company_raises_api_error(self, api_client) -> None:
        await api_client.create_company("Acme", company_id="acme")

        with pytest.raises(APIError) as exc:
            await api_client.create_company("Acme", company_id="acme")

        assert exc.value.status_code == 409
        assert "already exists" in exc.value.detail

    async def test_list_documents_returns_records(self, api_client, api_db) -> None:
        await api_client.create_company("Acme", company_id="acme")
        SQLiteDocumentRepository(api_db).add(
            Invoice(
                company_id="acme",
                document_number="INV-1",
                primary_date=date(2026, 3, 1),
                total=Decimal("1500"),
                status="paid",
            )
        )

        records = await api_client.list_documents(
            DocumentKind.INVOICES, Scope.tenant("acme")
        )

        assert len(records) == 1
        assert isinstance(records[0], Invoice)
        assert records[0].total == Decimal("1500")
        assert records[0].due_date is None


class TestAPIDocumentSource:
    async def test_unknown_company_becomes_fetch_failed(self, api_client) -> None:
        source = APIDocumentSource(api_client)

        with pytest.raises(FetchFailedError) as exc:
            await source.fetch(DocumentKind.INVOICES, Scope.tenant("ghost"))

        assert "Company not found" in exc.value.reason

    async def test_wrong_scope_is_rejected_before_request(self, api_client) -> None:
        source = APIDocumentSource(api_client)

        with pytest.raises(ScopeMismatchError):
            await source.fetch(DocumentKind.EXPENSES, Scope.tenant("acme"))

    async def test_unreachable_server_becomes_fetch_failed(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(refuse), base_url="http://test"
        ) as c:
            source = APIDocumentSource(BooksAPIClient(base_url="http://test", client=c))

            with pytest.raises(FetchFailedError) as exc:
                await source.fetch(DocumentKind.EXPENSES, Scope.identity("u1"))

        assert exc.value.reason == "connection refused"

    async def test_controller_over_http(self, api_client, api_db) -> None:
        acme = await api_client.create_company("Acme", company_id="acme")
        SQLiteDocumentRepository(api_db).add(
            Invoice(
                company_id="acme",
                document_number="INV-1",
                primary_date=date(2026, 3, 1),
                status="overdue",
            )
        )
        notifier = LoggingNotifier()
        controller = ListViewController(
            INVOICES_LIST,
            APIDocumentSource(api_client),
            TenantContext(acme),
            StaticSessionResolver(),
            notifier,
        )

        state = await controller.refresh()

        assert isinstance(state, Populated)
        assert state.rows[0].category == PresentationCategory.DANGER

    async def test_controller_reports_http_failure(self, api_client) -> None:
        # Selected locally but unknown to the server.
        from bizbooks.domain.documents import Company

        notifier = LoggingNotifier()
        controller = ListViewController(
            INVOICES_LIST,
            APIDocumentSource(api_client),
            TenantContext(Company(id="ghost", name="Ghost")),
            StaticSessionResolver(),
            notifier,
        )

        state = await controller.refresh()

        assert state == Failed("Error loading invoices")
        assert notifier.messages == ["Error loading invoices"]


def _serving(payload: object, status_code: int = 200) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://test")


class TestIrregularResponses:
    async def test_row_missing_date_still_renders(self) -> None:
        from bizbooks.domain.documents import Company
        from bizbooks.services.currency import CurrencyFormatter

        row = {
            "id": "x",
            "document_number": "INV-1",
            "company_id": "acme",
            "primary_date": None,
            "total": "5",
            "status": "paid",
        }
        notifier = LoggingNotifier()
        async with _serving([row]) as c:
            controller = ListViewController(
                INVOICES_LIST,
                APIDocumentSource(BooksAPIClient(base_url="http://test", client=c)),
                TenantContext(Company(id="acme", name="Acme")),
                StaticSessionResolver(),
                notifier,
            )
            state = await controller.refresh()

        assert isinstance(state, Populated)
        assert state.rows[0].category == PresentationCategory.SUCCESS
        table = controller.table_rows(CurrencyFormatter("KES"))
        assert table[0]["document_number"] == "INV-1"
        assert table[0]["date"] == ""
        assert notifier.messages == []

    async def test_row_without_number_or_owner(self) -> None:
        async with _serving([{"id": "e1", "user_id": None, "primary_date": "soon"}]) as c:
            source = APIDocumentSource(BooksAPIClient(base_url="http://test", client=c))
            records = await source.fetch(DocumentKind.EXPENSES, Scope.identity("u1"))

        assert records[0].document_number == ""
        assert records[0].primary_date is None

    async def test_object_instead_of_list_becomes_fetch_failed(self) -> None:
        async with _serving({}) as c:
            source = APIDocumentSource(BooksAPIClient(base_url="http://test", client=c))

            with pytest.raises(FetchFailedError) as exc:
                await source.fetch(DocumentKind.INVOICES, Scope.tenant("acme"))

        assert "Unexpected response" in exc.value.reason

    async def test_non_object_row_fails_the_list(self) -> None:
        from bizbooks.domain.documents import Company

        notifier = LoggingNotifier()
        async with _serving(["INV-1"]) as c:
            controller = ListViewController(
                INVOICES_LIST,
                APIDocumentSource(BooksAPIClient(base_url="http://test", client=c)),
                TenantContext(Company(id="acme", name="Acme")),
                StaticSessionResolver(),
                notifier,
            )
            state = await controller.refresh()

        assert state == Failed("Error loading invoices")
        assert notifier.messages == ["Error loading invoices"]

    async def test_non_json_body_is_an_api_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://test"
        ) as c:
            client = BooksAPIClient(base_url="http://test", client=c)

            with pytest.raises(APIError) as exc:
                await client.list_companies()

        assert exc.value.status_code == 502

    async def test_error_body_that_is_a_list_keeps_raw_text(self) -> None:
        async with _serving(["nope"], status_code=500) as c:
            client = BooksAPIClient(base_url="http://test", client=c)

            with pytest.raises(APIError) as exc:
                await client.list_companies()

        assert exc.value.status_code == 500
        assert "nope" in exc.value.detail
