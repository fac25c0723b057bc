"""Column schemas and messages for the four document lists.

One ``ListSpec`` per document kind parameterizes the generic list controller:
what to fetch, how each row is scoped, which columns to show, and what to
say when the list is empty or fails to load.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Final

from bizbooks.domain.documents import DocumentRecord
from bizbooks.domain.value_objects import DocumentKind, ScopeRule
from bizbooks.services.interfaces import AmountFormatter

NO_COMPANY_MESSAGE: Final[str] = "Please select a company first."
NO_IDENTITY_MESSAGE: Final[str] = "Please sign in first."


class CellFormat(str, Enum):
    TEXT = "text"
    DATE = "date"
    MONEY = "money"
    BADGE = "badge"


@dataclass(frozen=True, slots=True)
class Column:
    key: str
    header: str
    value: Callable[[DocumentRecord], Any]
    format: CellFormat = CellFormat.TEXT
    align: str = "left"

    def render(
        self,
        record: DocumentRecord,
        formatter: AmountFormatter,
        date_format: str = "%d/%m/%Y",
    ) -> str:
        """Produce the display text for this column of ``record``.

        Missing values render as an empty string.
        """
        raw = self.value(record)
        if raw is None:
            return ""
        if self.format is CellFormat.MONEY:
            return formatter.format(raw if isinstance(raw, Decimal) else str(raw))
        if self.format is CellFormat.DATE and isinstance(raw, date):
            return raw.strftime(date_format)
        return str(raw)


def _attr(name: str) -> Callable[[DocumentRecord], Any]:
    return lambda record: getattr(record, name, None)


@dataclass(frozen=True, slots=True)
class ListSpec:
    kind: DocumentKind
    title: str
    subtitle: str
    columns: tuple[Column, ...]
    empty_message: str
    error_message: str

    @property
    def scope_rule(self) -> ScopeRule:
        return self.kind.scope_rule

    def no_context_message(self, company_selected: bool) -> str:
        """Placeholder for a list that cannot be scoped yet.

        Every list needs a company first; expenses also need a signed-in user.
        """
        if company_selected and self.scope_rule is ScopeRule.IDENTITY:
            return NO_IDENTITY_MESSAGE
        return NO_COMPANY_MESSAGE

    @property
    def badge_column(self) -> Column | None:
        for column in self.columns:
            if column.format is CellFormat.BADGE:
                return column
        return None


EXPENSES_LIST: Final[ListSpec] = ListSpec(
    kind=DocumentKind.EXPENSES,
    title="Expenses",
    subtitle="Track your business expenses",
    columns=(
        Column("document_number", "Expense #", _attr("document_number")),
        Column("category", "Category", _attr("category")),
        Column("vendor", "Vendor", _attr("counterparty_name")),
        Column("date", "Date", _attr("primary_date"), CellFormat.DATE),
        Column("payment_method", "Payment", _attr("payment_method")),
        Column("status", "Status", _attr("status"), CellFormat.BADGE),
        Column("total", "Amount", _attr("total"), CellFormat.MONEY, "right"),
    ),
    empty_message="No expenses found. Record your first one!",
    error_message="Error loading expenses",
)

INVOICES_LIST: Final[ListSpec] = ListSpec(
    kind=DocumentKind.INVOICES,
    title="Invoices",
    subtitle="Manage your invoices",
    columns=(
        Column("document_number", "Invoice #", _attr("document_number")),
        Column("customer", "Customer", _attr("counterparty_name")),
        Column("date", "Date", _attr("primary_date"), CellFormat.DATE),
        Column("due_date", "Due Date", _attr("due_date"), CellFormat.DATE),
        Column("status", "Status", _attr("status"), CellFormat.BADGE),
        Column("total", "Total", _attr("total"), CellFormat.MONEY, "right"),
        Column("paid_amount", "Paid", _attr("paid_amount"), CellFormat.MONEY, "right"),
    ),
    empty_message="No invoices found. Create your first one!",
    error_message="Error loading invoices",
)

PURCHASE_ORDERS_LIST: Final[ListSpec] = ListSpec(
    kind=DocumentKind.PURCHASE_ORDERS,
    title="Purchase Orders",
    subtitle="Manage your purchase orders",
    columns=(
        Column("document_number", "PO Number", _attr("document_number")),
        Column("supplier", "Supplier", _attr("counterparty_name")),
        Column("date", "Date", _attr("primary_date"), CellFormat.DATE),
        Column("status", "Status", _attr("status"), CellFormat.BADGE),
        Column("total", "Total", _attr("total"), CellFormat.MONEY, "right"),
    ),
    empty_message="No purchase orders found. Create your first one!",
    error_message="Error loading purchase orders",
)

SALE_RECEIPTS_LIST: Final[ListSpec] = ListSpec(
    kind=DocumentKind.SALE_RECEIPTS,
    title="Sale Receipts",
    subtitle="Record your sales",
    columns=(
        Column("document_number", "Receipt #", _attr("document_number")),
        Column("customer", "Customer", _attr("counterparty_name")),
        Column("date", "Date", _attr("primary_date"), CellFormat.DATE),
        Column("payment_method", "Payment Method", _attr("payment_method"), CellFormat.BADGE),
        Column("total", "Total", _attr("total"), CellFormat.MONEY, "right"),
    ),
    empty_message="No sale receipts found. Create your first one!",
    error_message="Error loading sale receipts",
)

LIST_SPECS: Final[dict[DocumentKind, ListSpec]] = {
    spec.kind: spec
    for spec in (EXPENSES_LIST, INVOICES_LIST, PURCHASE_ORDERS_LIST, SALE_RECEIPTS_LIST)
}


def get_list_spec(kind: DocumentKind | str) -> ListSpec:
    return LIST_SPECS[DocumentKind(kind)]
