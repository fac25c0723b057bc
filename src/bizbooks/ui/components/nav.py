# pyright: reportMissingImports=false

"""Navigation components."""

from __future__ import annotations

from typing import Any

import httpx
from nicegui import app, ui  # pyright: ignore[reportMissingImports]

from bizbooks.domain.documents import Company
from bizbooks.logging_config import get_logger
from bizbooks.ui.api_client import APIError
from bizbooks.ui.constants import NAV_ITEMS, NAV_LINK
from bizbooks.ui.state import PageState

logger = get_logger(__name__)

_COMPANY_KEY = "company_id"


def _company_options(companies: list[Company]) -> dict[str, str]:
    options: dict[str, str] = {"": "Select a company"}
    for c in companies:
        options[c.id] = c.name
    return options


def header(state: PageState) -> None:
    """Top bar with the company selector driving ``state.tenants``."""
    with ui.header(elevated=True).classes("bg-white border-b border-slate-200"):  # noqa: SIM117
        with ui.row().classes("w-full items-center justify-between px-4 py-2"):
            ui.label("BizBooks").classes("text-lg font-semibold text-slate-900")

            def on_change(e: Any) -> None:
                raw = str(e.value or "")
                app.storage.user[_COMPANY_KEY] = raw
                state.tenants.select(state.company_by_id(raw))

            selector = ui.select(
                options={"": "Loading..."},
                value="",
                label="Company",
                on_change=on_change,
            ).props("dense outlined")

            async def load_companies() -> None:
                try:
                    state.companies = await state.api.list_companies()
                except (APIError, httpx.HTTPError) as e:
                    logger.warning("company_list_failed", error=str(e))
                    ui.notify("Error loading companies", type="negative", position="top")
                    return
                selector.options = _company_options(state.companies)
                remembered = app.storage.user.get(_COMPANY_KEY, "")
                selector.value = remembered if state.company_by_id(remembered) else ""
                selector.update()
                state.tenants.select(state.company_by_id(selector.value))

            ui.timer(0.05, load_companies, once=True)


def sidebar() -> None:
    with (
        ui.left_drawer(top_corner=True, bottom_corner=True).classes(
            "bg-white border-r border-slate-200"
        ),
        ui.column().classes("w-56 p-3 gap-1"),
    ):
        for item in NAV_ITEMS:
            ui.link(item["label"], item["path"]).classes(NAV_LINK)
