"""Financial document records listed per company (or per user, for expenses)."""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar
from uuid import uuid4

from bizbooks.domain.value_objects import DocumentKind, ScopeRule


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True, slots=True)
class Company:
    """A tenant whose records are isolated from every other company."""

    id: str
    name: str
    currency: str = "KES"
    created_at: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True, slots=True)
class Identity:
    """The signed-in user."""

    id: str
    email: str | None = None


@dataclass(frozen=True, slots=True)
class Scope:
    """Key a document fetch is filtered by."""

    rule: ScopeRule
    value: str

    @classmethod
    def tenant(cls, company_id: str) -> "Scope":
        return cls(ScopeRule.TENANT, company_id)

    @classmethod
    def identity(cls, user_id: str) -> "Scope":
        return cls(ScopeRule.IDENTITY, user_id)


@dataclass(frozen=True, kw_only=True)
class DocumentRecord:
    """Fields shared by every document kind.

    Subclasses set ``kind`` and say which attribute carries the token the
    status classifier looks at. Every field has a default because rows from
    the API may arrive incomplete and still have to reach the table.
    """

    kind: ClassVar[DocumentKind]
    token_field: ClassVar[str] = "status"

    document_number: str = ""
    counterparty_name: str = ""
    primary_date: date | None = None
    total: Decimal = Decimal("0")
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utc_now)

    @property
    def classification_token(self) -> str | None:
        return getattr(self, self.token_field, None)

    @property
    def scope_id(self) -> str:
        if self.kind.scope_rule is ScopeRule.IDENTITY:
            return getattr(self, "user_id")
        return getattr(self, "company_id")


@dataclass(frozen=True, kw_only=True)
class Expense(DocumentRecord):
    kind: ClassVar[DocumentKind] = DocumentKind.EXPENSES

    user_id: str = ""
    company_id: str | None = None
    category: str = ""
    payment_method: str = ""
    status: str = "pending"


@dataclass(frozen=True, kw_only=True)
class Invoice(DocumentRecord):
    kind: ClassVar[DocumentKind] = DocumentKind.INVOICES

    company_id: str = ""
    due_date: date | None = None
    status: str = "draft"
    # Not guaranteed to be <= total; upstream does not enforce it.
    paid_amount: Decimal = Decimal("0")

    @property
    def balance_due(self) -> Decimal:
        return self.total - self.paid_amount


@dataclass(frozen=True, kw_only=True)
class PurchaseOrder(DocumentRecord):
    kind: ClassVar[DocumentKind] = DocumentKind.PURCHASE_ORDERS

    company_id: str = ""
    status: str = "pending"


@dataclass(frozen=True, kw_only=True)
class SaleReceipt(DocumentRecord):
    kind: ClassVar[DocumentKind] = DocumentKind.SALE_RECEIPTS
    token_field: ClassVar[str] = "payment_method"

    company_id: str = ""
    payment_method: str = "cash"


RECORD_TYPES: dict[DocumentKind, type[DocumentRecord]] = {
    DocumentKind.EXPENSES: Expense,
    DocumentKind.INVOICES: Invoice,
    DocumentKind.PURCHASE_ORDERS: PurchaseOrder,
    DocumentKind.SALE_RECEIPTS: SaleReceipt,
}


def record_columns(kind: DocumentKind) -> list[str]:
    """Storage column names for a kind, in dataclass field order."""
    return [f.name for f in fields(RECORD_TYPES[kind])]


def _to_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _to_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


_CONVERTERS = {
    "primary_date": _to_date,
    "due_date": _to_date,
    "created_at": _to_datetime,
    "total": _to_decimal,
    "paid_amount": _to_decimal,
}


def record_from_mapping(kind: DocumentKind, data: Mapping[str, Any]) -> DocumentRecord:
    """Build a record of ``kind`` from a database row or JSON object.

    Unknown keys are ignored. Missing, null or unparseable values fall back to
    the dataclass defaults so one odd row does not break a whole list; a null
    is kept only where the default itself is ``None``.
    """
    record_type = RECORD_TYPES[kind]
    source = dict(data)
    kwargs: dict[str, Any] = {}
    for f in fields(record_type):
        if f.name not in source:
            continue
        value = source[f.name]
        converter = _CONVERTERS.get(f.name)
        if converter is not None:
            value = converter(value)
        if value is None and f.default is not None:
            continue
        kwargs[f.name] = value
    return record_type(**kwargs)


def record_to_mapping(record: DocumentRecord) -> dict[str, Any]:
    """Flatten a record into storage-friendly primitives (ISO dates, decimal strings)."""
    row: dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        elif isinstance(value, Decimal):
            value = str(value)
        row[f.name] = value
    return row
