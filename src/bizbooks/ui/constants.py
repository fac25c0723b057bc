"""UI constants for BizBooks.

These are kept small and utility-oriented: the UI is data-dense, not decorative.
"""

from __future__ import annotations

from typing import Final

from bizbooks.domain.value_objects import PresentationCategory

# Tailwind class constants
CARD: Final[str] = "bg-white rounded-lg shadow-sm border border-slate-200"
CARD_PAD: Final[str] = "p-4"

TABLE: Final[str] = "w-full"

BUTTON_SECONDARY: Final[str] = (
    "bg-slate-200 text-slate-900 hover:bg-slate-300 focus:ring-2 focus:ring-slate-300"
)

NAV_LINK: Final[str] = "block px-3 py-2 rounded hover:bg-slate-100"

MUTED_TEXT: Final[str] = "text-slate-500"
EMPTY_STATE: Final[str] = "w-full py-12 text-center text-slate-500"
PLACEHOLDER: Final[str] = "w-full h-96 items-center justify-center text-slate-500"

CATEGORY_BADGE_CLASSES: Final[dict[str, str]] = {
    PresentationCategory.SUCCESS.value: "bg-emerald-600 text-white",
    PresentationCategory.INFO.value: "bg-sky-600 text-white",
    PresentationCategory.WARNING.value: "bg-amber-500 text-white",
    PresentationCategory.DANGER.value: "bg-rose-600 text-white",
    PresentationCategory.ACCENT.value: "bg-violet-600 text-white",
    PresentationCategory.NEUTRAL.value: "bg-slate-300 text-slate-800",
    PresentationCategory.DEFAULT.value: "bg-slate-100 text-slate-800",
}

NAV_ITEMS: Final[list[dict[str, str]]] = [
    {"label": "Invoices", "path": "/invoices"},
    {"label": "Sale Receipts", "path": "/sale-receipts"},
    {"label": "Purchase Orders", "path": "/purchase-orders"},
    {"label": "Expenses", "path": "/expenses"},
]
