"""Tests for the SQLite company and document repositories."""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from bizbooks.domain.documents import (
    Company,
    Expense,
    Invoice,
    PurchaseOrder,
    SaleReceipt,
    Scope,
)
from bizbooks.domain.value_objects import DocumentKind
from bizbooks.exceptions import (
    DatabaseError,
    DuplicateCompanyError,
    FetchFailedError,
    ScopeMismatchError,
)
from bizbooks.repositories.sqlite import (
    SQLiteCompanyRepository,
    SQLiteDatabase,
    SQLiteDocumentRepository,
)


def at(minutes: int) -> datetime:
    return datetime(2026, 3, 2, 9, 0, tzinfo=UTC) + timedelta(minutes=minutes)


def _invoice(number: str, minutes: int, company_id: str = "acme", **kwargs) -> Invoice:
    return Invoice(
        company_id=company_id,
        document_number=number,
        primary_date=date(2026, 3, 1),
        total=Decimal("100"),
        created_at=at(minutes),
        **kwargs,
    )


class TestSQLiteCompanyRepository:
    def test_add_and_get(self, company_repo: SQLiteCompanyRepository, acme: Company) -> None:
        company_repo.add(acme)

        loaded = company_repo.get("acme")
        assert loaded is not None
        assert loaded.name == "Acme Traders"
        assert loaded.currency == "KES"
        assert loaded.created_at == acme.created_at

    def test_get_missing_returns_none(self, company_repo: SQLiteCompanyRepository) -> None:
        assert company_repo.get("nope") is None

    def test_duplicate_id_raises(
        self, company_repo: SQLiteCompanyRepository, acme: Company
    ) -> None:
        company_repo.add(acme)
        with pytest.raises(DuplicateCompanyError) as exc:
            company_repo.add(Company(id="acme", name="Other"))
        assert exc.value.status_code == 409

    def test_list_all_sorted_by_name(self, company_repo: SQLiteCompanyRepository) -> None:
        company_repo.add(Company(id="z", name="Zebra Ltd"))
        company_repo.add(Company(id="a", name="Mango Ltd"))
        company_repo.add(Company(id="m", name="Apple Ltd"))

        names = [c.name for c in company_repo.list_all()]
        assert names == ["Apple Ltd", "Mango Ltd", "Zebra Ltd"]


class TestSQLiteDocumentRepositoryStorage:
    def test_add_and_get_invoice(
        self,
        companies: list[Company],
        document_repo: SQLiteDocumentRepository,
        paid_invoice: Invoice,
    ) -> None:
        document_repo.add(paid_invoice)

        loaded = document_repo.get(DocumentKind.INVOICES, paid_invoice.id)
        assert loaded == paid_invoice

    def test_add_expense_without_company(
        self, document_repo: SQLiteDocumentRepository
    ) -> None:
        expense = Expense(
            user_id="u1",
            document_number="EXP-9",
            primary_date=date(2026, 3, 1),
            total=Decimal("12.50"),
        )
        document_repo.add(expense)

        loaded = document_repo.get(DocumentKind.EXPENSES, expense.id)
        assert isinstance(loaded, Expense)
        assert loaded.company_id is None
        assert loaded.total == Decimal("12.50")

    def test_get_missing_returns_none(self, document_repo: SQLiteDocumentRepository) -> None:
        assert document_repo.get(DocumentKind.INVOICES, "missing") is None

    def test_count(
        self,
        companies: list[Company],
        document_repo: SQLiteDocumentRepository,
        paid_invoice: Invoice,
        overdue_invoice: Invoice,
    ) -> None:
        document_repo.add(paid_invoice)
        document_repo.add(overdue_invoice)

        assert document_repo.count(DocumentKind.INVOICES) == 2
        assert document_repo.count(DocumentKind.SALE_RECEIPTS) == 0

    def test_document_number_unique_per_company(
        self, companies: list[Company], document_repo: SQLiteDocumentRepository
    ) -> None:
        document_repo.add(_invoice("INV-1", 0))
        document_repo.add(_invoice("INV-1", 1, company_id="globex"))

        with pytest.raises(DatabaseError):
            document_repo.add(_invoice("INV-1", 2))

    def test_unknown_company_rejected(self, document_repo: SQLiteDocumentRepository) -> None:
        with pytest.raises(DatabaseError):
            document_repo.add(_invoice("INV-1", 0, company_id="ghost"))


class TestSQLiteDocumentRepositoryFetch:
    async def test_newest_first(
        self, companies: list[Company], document_repo: SQLiteDocumentRepository
    ) -> None:
        document_repo.add(_invoice("INV-1", 0))
        document_repo.add(_invoice("INV-3", 30))
        document_repo.add(_invoice("INV-2", 10))

        records = await document_repo.fetch(DocumentKind.INVOICES, Scope.tenant("acme"))

        assert [r.document_number for r in records] == ["INV-3", "INV-2", "INV-1"]

    async def test_equal_timestamps_break_ties_by_id(
        self, companies: list[Company], document_repo: SQLiteDocumentRepository
    ) -> None:
        document_repo.add(
            PurchaseOrder(
                id="a", company_id="acme", document_number="PO-A",
                primary_date=date(2026, 3, 1), created_at=at(0),
            )
        )
        document_repo.add(
            PurchaseOrder(
                id="b", company_id="acme", document_number="PO-B",
                primary_date=date(2026, 3, 1), created_at=at(0),
            )
        )

        records = await document_repo.fetch(
            DocumentKind.PURCHASE_ORDERS, Scope.tenant("acme")
        )
        assert [r.id for r in records] == ["b", "a"]

    async def test_fetch_is_idempotent(
        self,
        companies: list[Company],
        document_repo: SQLiteDocumentRepository,
        paid_invoice: Invoice,
        overdue_invoice: Invoice,
    ) -> None:
        document_repo.add(paid_invoice)
        document_repo.add(overdue_invoice)
        scope = Scope.tenant("acme")

        first = await document_repo.fetch(DocumentKind.INVOICES, scope)
        second = await document_repo.fetch(DocumentKind.INVOICES, scope)

        assert first == second

    async def test_tenants_are_isolated(
        self,
        companies: list[Company],
        document_repo: SQLiteDocumentRepository,
        sample_sale_receipt: SaleReceipt,
    ) -> None:
        document_repo.add(sample_sale_receipt)

        acme_rows = await document_repo.fetch(
            DocumentKind.SALE_RECEIPTS, Scope.tenant("acme")
        )
        globex_rows = await document_repo.fetch(
            DocumentKind.SALE_RECEIPTS, Scope.tenant("globex")
        )

        assert acme_rows == []
        assert [r.id for r in globex_rows] == [sample_sale_receipt.id]
        assert all(r.scope_id == "globex" for r in globex_rows)

    async def test_expenses_scoped_by_user(
        self, document_repo: SQLiteDocumentRepository, sample_expense: Expense
    ) -> None:
        document_repo.add(sample_expense)

        mine = await document_repo.fetch(DocumentKind.EXPENSES, Scope.identity("u2"))
        theirs = await document_repo.fetch(DocumentKind.EXPENSES, Scope.identity("u1"))

        assert [r.id for r in mine] == [sample_expense.id]
        assert theirs == []

    async def test_wrong_scope_rule_raises(
        self, document_repo: SQLiteDocumentRepository
    ) -> None:
        with pytest.raises(ScopeMismatchError):
            await document_repo.fetch(DocumentKind.EXPENSES, Scope.tenant("acme"))

        with pytest.raises(ScopeMismatchError):
            await document_repo.fetch(DocumentKind.INVOICES, Scope.identity("u1"))

    async def test_query_failure_becomes_fetch_failed(self) -> None:
        # Never initialized, so the tables do not exist.
        repo = SQLiteDocumentRepository(SQLiteDatabase(":memory:"))

        with pytest.raises(FetchFailedError) as exc:
            await repo.fetch(DocumentKind.INVOICES, Scope.tenant("acme"))

        assert exc.value.kind == "invoices"
        assert exc.value.error_code == "FETCH_FAILED"

    def test_list_for_scope_matches_fetch_order(
        self, companies: list[Company], document_repo: SQLiteDocumentRepository
    ) -> None:
        document_repo.add(_invoice("INV-1", 0))
        document_repo.add(_invoice("INV-2", 10))

        records = document_repo.list_for_scope(DocumentKind.INVOICES, "acme")
        assert [r.document_number for r in records] == ["INV-2", "INV-1"]
