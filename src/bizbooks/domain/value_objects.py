from enum import Enum


class Currency(str, Enum):
    KES = "KES"
    UGX = "UGX"
    TZS = "TZS"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class DocumentKind(str, Enum):
    EXPENSES = "expenses"
    INVOICES = "invoices"
    PURCHASE_ORDERS = "purchase_orders"
    SALE_RECEIPTS = "sale_receipts"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @property
    def scope_rule(self) -> "ScopeRule":
        # Expenses belong to the user who recorded them, everything else to a company.
        if self is DocumentKind.EXPENSES:
            return ScopeRule.IDENTITY
        return ScopeRule.TENANT


class ScopeRule(str, Enum):
    TENANT = "tenant"
    IDENTITY = "identity"


class PresentationCategory(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"
    ACCENT = "accent"
    NEUTRAL = "neutral"
    DEFAULT = "default"
