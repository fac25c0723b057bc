from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from bizbooks.domain.documents import (
    Company,
    Expense,
    Invoice,
    PurchaseOrder,
    SaleReceipt,
)
from bizbooks.repositories.sqlite import (
    SQLiteCompanyRepository,
    SQLiteDatabase,
    SQLiteDocumentRepository,
)

BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def at(minutes: int) -> datetime:
    """A creation timestamp ``minutes`` after a fixed base time."""
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def db() -> SQLiteDatabase:
    database = SQLiteDatabase(":memory:", check_same_thread=False)
    database.initialize()
    yield database
    database.close()


@pytest.fixture
def company_repo(db: SQLiteDatabase) -> SQLiteCompanyRepository:
    return SQLiteCompanyRepository(db)


@pytest.fixture
def document_repo(db: SQLiteDatabase) -> SQLiteDocumentRepository:
    return SQLiteDocumentRepository(db)


@pytest.fixture
def acme() -> Company:
    return Company(id="acme", name="Acme Traders", currency="KES")


@pytest.fixture
def globex() -> Company:
    return Company(id="globex", name="Globex Supplies", currency="KES")


@pytest.fixture
def companies(
    company_repo: SQLiteCompanyRepository, acme: Company, globex: Company
) -> list[Company]:
    company_repo.add(acme)
    company_repo.add(globex)
    return [acme, globex]


@pytest.fixture
def paid_invoice() -> Invoice:
    return Invoice(
        company_id="acme",
        document_number="INV-001",
        counterparty_name="Jane Wanjiru",
        primary_date=date(2026, 3, 1),
        due_date=date(2026, 3, 31),
        total=Decimal("1500"),
        paid_amount=Decimal("1500"),
        status="paid",
        created_at=at(0),
    )


@pytest.fixture
def overdue_invoice() -> Invoice:
    return Invoice(
        company_id="acme",
        document_number="INV-002",
        counterparty_name="Otieno Hardware",
        primary_date=date(2026, 2, 1),
        due_date=date(2026, 2, 15),
        total=Decimal("2300.5"),
        status="overdue",
        created_at=at(5),
    )


@pytest.fixture
def sample_expense() -> Expense:
    return Expense(
        user_id="u2",
        company_id="acme",
        document_number="EXP-001",
        counterparty_name="Kenya Power",
        category="utilities",
        payment_method="mpesa",
        primary_date=date(2026, 3, 1),
        total=Decimal("4200"),
        status="approved",
        created_at=at(0),
    )


@pytest.fixture
def sample_purchase_order() -> PurchaseOrder:
    return PurchaseOrder(
        company_id="acme",
        document_number="PO-001",
        counterparty_name="Mombasa Cement",
        primary_date=date(2026, 3, 1),
        total=Decimal("98000"),
        status="approved",
        created_at=at(0),
    )


@pytest.fixture
def sample_sale_receipt() -> SaleReceipt:
    return SaleReceipt(
        company_id="globex",
        document_number="SR-001",
        counterparty_name="Walk-in",
        primary_date=date(2026, 3, 1),
        total=Decimal("350"),
        payment_method="mpesa",
        created_at=at(0),
    )
