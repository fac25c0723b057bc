# pyright: reportMissingImports=false

"""Table helpers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from nicegui import ui  # pyright: ignore[reportMissingImports]

from bizbooks.services.document_lists import ListSpec
from bizbooks.services.interfaces import AmountFormatter
from bizbooks.services.list_controller import (
    Empty,
    Failed,
    ListViewController,
    Loading,
)
from bizbooks.ui.constants import (
    CATEGORY_BADGE_CLASSES,
    EMPTY_STATE,
    PLACEHOLDER,
    TABLE,
)

_BADGE_SLOT = r"""
<q-td :props="props">
  <q-badge :class="props.row.badge_class" :label="props.value" />
</q-td>
"""


def data_table(
    *,
    columns: list[dict[str, Any]],
    rows: list[dict[str, Any]],
    row_key: str = "id",
    on_row_click: Callable[[dict[str, Any]], None] | None = None,
    pagination: int | dict[str, Any] = 25,
) -> Any:
    table = ui.table(
        columns=columns,
        rows=rows,
        row_key=row_key,
        pagination=pagination,
    ).classes(TABLE)

    if on_row_click is not None:
        table.on("rowClick", lambda e: on_row_click(e.args[1]))

    return table


def table_columns(spec: ListSpec) -> list[dict[str, Any]]:
    return [
        {
            "name": column.key,
            "label": column.header,
            "field": column.key,
            "align": column.align,
            "sortable": True,
        }
        for column in spec.columns
    ]


def document_table(
    controller: ListViewController,
    formatter: AmountFormatter,
    date_format: str,
) -> None:
    """Render the controller's current state.

    Loading shows a spinner, Empty shows its message, Failed shows an empty
    table (the error itself was already announced), Populated shows rows with
    a colored badge in the list's badge column.
    """
    state = controller.state
    spec = controller.spec

    if isinstance(state, Loading):
        with ui.row().classes("w-full justify-center py-12"):
            ui.spinner(size="lg")
        return

    if isinstance(state, Empty):
        if state.no_context:
            with ui.column().classes(PLACEHOLDER):
                ui.label(state.message)
        else:
            ui.label(state.message).classes(EMPTY_STATE)
        return

    rows = [] if isinstance(state, Failed) else controller.table_rows(formatter, date_format)
    for row in rows:
        row["badge_class"] = CATEGORY_BADGE_CLASSES[row["presentation"]]

    table = data_table(columns=table_columns(spec), rows=rows, row_key="id")
    badge = spec.badge_column
    if badge is not None:
        table.add_slot(f"body-cell-{badge.key}", _BADGE_SLOT)
