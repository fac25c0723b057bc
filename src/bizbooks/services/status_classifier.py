"""Status classifier for document badges.

Maps a document's status (or, for sale receipts, payment method) token to a
presentation category. Each kind has a closed lookup table plus a fallback
category, so unfamiliar tokens degrade to the fallback instead of failing.
"""

from typing import Final

from bizbooks.domain.documents import DocumentRecord
from bizbooks.domain.value_objects import DocumentKind, PresentationCategory

Category = PresentationCategory

STATUS_CATEGORIES: Final[dict[DocumentKind, dict[str, PresentationCategory]]] = {
    DocumentKind.EXPENSES: {
        "paid": Category.SUCCESS,
        "approved": Category.INFO,
        "rejected": Category.DANGER,
    },
    DocumentKind.INVOICES: {
        "paid": Category.SUCCESS,
        "partial": Category.WARNING,
        "overdue": Category.DANGER,
        "cancelled": Category.NEUTRAL,
    },
    DocumentKind.PURCHASE_ORDERS: {
        "approved": Category.ACCENT,
        "received": Category.SUCCESS,
        "cancelled": Category.DANGER,
    },
    # Sale receipts are colored by payment method, not status.
    DocumentKind.SALE_RECEIPTS: {
        "mpesa": Category.ACCENT,
        "cash": Category.SUCCESS,
        "card": Category.INFO,
    },
}

FALLBACK_CATEGORIES: Final[dict[DocumentKind, PresentationCategory]] = {
    DocumentKind.EXPENSES: Category.WARNING,
    DocumentKind.INVOICES: Category.INFO,
    DocumentKind.PURCHASE_ORDERS: Category.WARNING,
    DocumentKind.SALE_RECEIPTS: Category.NEUTRAL,
}


def classify(kind: DocumentKind, token: str | None) -> PresentationCategory:
    """Classify a status/payment token for a document kind.

    Tokens are matched exactly. Anything not in the kind's table, including
    None, gets the kind's fallback category; a kind without a table gets
    PresentationCategory.DEFAULT.
    """
    table = STATUS_CATEGORIES.get(kind)
    if table is None:
        return Category.DEFAULT
    if token is not None and token in table:
        return table[token]
    return FALLBACK_CATEGORIES.get(kind, Category.DEFAULT)


def classify_record(record: DocumentRecord) -> PresentationCategory:
    return classify(record.kind, record.classification_token)
