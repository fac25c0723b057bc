from bizbooks.domain.documents import (
    RECORD_TYPES,
    Company,
    DocumentRecord,
    Expense,
    Identity,
    Invoice,
    PurchaseOrder,
    SaleReceipt,
    Scope,
    record_from_mapping,
    record_to_mapping,
)
from bizbooks.domain.value_objects import (
    Currency,
    DocumentKind,
    PresentationCategory,
    ScopeRule,
)

__all__ = [
    "RECORD_TYPES",
    "Company",
    "Currency",
    "DocumentKind",
    "DocumentRecord",
    "Expense",
    "Identity",
    "Invoice",
    "PresentationCategory",
    "PurchaseOrder",
    "SaleReceipt",
    "Scope",
    "ScopeRule",
    "record_from_mapping",
    "record_to_mapping",
]
