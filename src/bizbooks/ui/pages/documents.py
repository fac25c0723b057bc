# pyright: reportMissingImports=false

"""Document list pages: expenses, invoices, purchase orders, sale receipts."""

from __future__ import annotations

from nicegui import ui  # pyright: ignore[reportMissingImports]

from bizbooks.config import Settings, get_settings
from bizbooks.domain.value_objects import DocumentKind
from bizbooks.logging_config import get_logger
from bizbooks.services.currency import CurrencyFormatter
from bizbooks.services.document_lists import get_list_spec
from bizbooks.services.list_controller import ListViewController
from bizbooks.ui.api_client import APIDocumentSource
from bizbooks.ui.components.tables import document_table
from bizbooks.ui.constants import BUTTON_SECONDARY, CARD, CARD_PAD, MUTED_TEXT
from bizbooks.ui.state import PageState

logger = get_logger(__name__)


class NiceGUINotifier:
    """Shows list errors as a toast on the current page."""

    def notify_error(self, message: str) -> None:
        logger.info("user_notified", message=message)
        ui.notify(message, type="negative", position="top")


def render(kind: DocumentKind, state: PageState, settings: Settings | None = None) -> ListViewController:
    settings = settings or get_settings()
    spec = get_list_spec(kind)
    formatter = CurrencyFormatter(settings.currency)
    controller = ListViewController(
        spec,
        APIDocumentSource(state.api),
        state.tenants,
        state.session,
        NiceGUINotifier(),
    )

    with ui.row().classes("w-full items-center justify-between"):
        with ui.column().classes("gap-0"):
            ui.label(spec.title).classes("text-xl font-semibold text-slate-900")
            ui.label(spec.subtitle).classes(MUTED_TEXT)
        ui.button("Refresh", on_click=controller.refresh).classes(BUTTON_SECONDARY)

    @ui.refreshable
    def body() -> None:
        document_table(controller, formatter, settings.date_format)

    with ui.card().classes(f"{CARD} {CARD_PAD} w-full"):
        body()

    controller.add_listener(lambda _: body.refresh())
    ui.context.client.on_disconnect(controller.stop)
    ui.timer(0.05, controller.start, once=True)
    return controller
