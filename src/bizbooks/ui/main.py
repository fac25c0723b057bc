# pyright: reportMissingImports=false

"""NiceGUI entry point and routing."""

from __future__ import annotations

from typing import Any

from bizbooks.config import get_settings
from bizbooks.domain.value_objects import DocumentKind
from bizbooks.logging_config import configure_logging
from bizbooks.ui.api_client import BooksAPIClient

PAGES: dict[str, DocumentKind] = {
    "/": DocumentKind.INVOICES,
    "/invoices": DocumentKind.INVOICES,
    "/sale-receipts": DocumentKind.SALE_RECEIPTS,
    "/purchase-orders": DocumentKind.PURCHASE_ORDERS,
    "/expenses": DocumentKind.EXPENSES,
}


def _require_nicegui() -> Any:
    try:
        from nicegui import ui
    except ImportError as e:  # pragma: no cover
        raise ImportError(
            "NiceGUI is required for the frontend. Install with 'bizbooks[frontend]'."
        ) from e
    return ui


def add_global_styles() -> None:
    ui = _require_nicegui()
    ui.add_head_html(
        """
<style type="text/tailwindcss">
  @layer components {
    .bizbooks-page {
      @apply bg-slate-50 min-h-screen;
    }
  }
</style>
"""
    )


def create_ui(api: BooksAPIClient) -> None:
    ui = _require_nicegui()

    from bizbooks.ui.components.nav import header, sidebar
    from bizbooks.ui.pages import documents
    from bizbooks.ui.state import PageState

    def shell(kind: DocumentKind) -> None:
        state = PageState(api=api)
        add_global_styles()
        header(state)
        sidebar()
        with ui.column().classes("bizbooks-page w-full"):  # noqa: SIM117
            with ui.column().classes("max-w-[1200px] w-full mx-auto p-6 gap-4"):
                documents.render(kind, state)

    def page_for(kind: DocumentKind) -> Any:
        def page() -> None:
            shell(kind)

        return page

    for path, kind in PAGES.items():
        ui.page(path)(page_for(kind))


def run(
    *,
    port: int | None = None,
    api_url: str | None = None,
    reload: bool = False,
) -> None:
    ui = _require_nicegui()
    settings = get_settings()
    configure_logging(settings)

    api = BooksAPIClient(
        base_url=api_url or settings.api_url,
        timeout=settings.api_timeout,
    )
    create_ui(api)
    ui.run(
        title=settings.app_name,
        port=port or settings.ui_port,
        reload=reload,
        storage_secret=settings.ui_storage_secret,
    )
