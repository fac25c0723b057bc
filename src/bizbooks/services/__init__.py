from bizbooks.services.context import (
    LoggingNotifier,
    StaticSessionResolver,
    TenantContext,
)
from bizbooks.services.currency import CurrencyFormatter
from bizbooks.services.document_lists import (
    LIST_SPECS,
    Column,
    ListSpec,
    get_list_spec,
)
from bizbooks.services.interfaces import AmountFormatter, Notifier, SessionResolver
from bizbooks.services.list_controller import (
    Empty,
    Failed,
    ListRow,
    ListViewController,
    Loading,
    Populated,
    ViewState,
)
from bizbooks.services.status_classifier import classify, classify_record

__all__ = [
    "LIST_SPECS",
    "AmountFormatter",
    "Column",
    "CurrencyFormatter",
    "Empty",
    "Failed",
    "ListRow",
    "ListSpec",
    "ListViewController",
    "Loading",
    "LoggingNotifier",
    "Notifier",
    "Populated",
    "SessionResolver",
    "StaticSessionResolver",
    "TenantContext",
    "ViewState",
    "classify",
    "classify_record",
    "get_list_spec",
]
