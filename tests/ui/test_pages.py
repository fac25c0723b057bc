from __future__ import annotations

import pytest

from bizbooks.domain.value_objects import DocumentKind, PresentationCategory
from bizbooks.services.document_lists import INVOICES_LIST
from bizbooks.ui.constants import CATEGORY_BADGE_CLASSES, NAV_ITEMS


class TestPages:
    def test_can_import_pages_when_installed(self) -> None:
        pytest.importorskip("nicegui")
        from bizbooks.ui.components import nav, tables
        from bizbooks.ui.pages import documents

        assert callable(documents.render)
        assert callable(nav.header)
        assert callable(nav.sidebar)
        assert callable(tables.document_table)

    def test_routes_cover_every_kind(self) -> None:
        from bizbooks.ui.main import PAGES

        assert set(PAGES.values()) == set(DocumentKind)
        assert PAGES["/"] is DocumentKind.INVOICES

    def test_nav_links_match_routes(self) -> None:
        from bizbooks.ui.main import PAGES

        assert {item["path"] for item in NAV_ITEMS} <= set(PAGES)

    def test_every_category_has_a_badge_style(self) -> None:
        assert set(CATEGORY_BADGE_CLASSES) == {c.value for c in PresentationCategory}

    def test_table_columns(self) -> None:
        pytest.importorskip("nicegui")
        from bizbooks.ui.components.tables import table_columns

        columns = table_columns(INVOICES_LIST)

        assert [c["label"] for c in columns][:2] == ["Invoice #", "Customer"]
        assert columns[-1] == {
            "name": "paid_amount",
            "label": "Paid",
            "field": "paid_amount",
            "align": "right",
            "sortable": True,
        }
