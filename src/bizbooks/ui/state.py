"""Per-page UI state.

Every page visit builds its own PageState, so one browser tab switching
companies never affects another tab's lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bizbooks.config import get_settings
from bizbooks.domain.documents import Company
from bizbooks.services.context import StaticSessionResolver, TenantContext
from bizbooks.ui.api_client import BooksAPIClient


def _default_session() -> StaticSessionResolver:
    return StaticSessionResolver.from_user_id(get_settings().user_id)


@dataclass(slots=True)
class PageState:
    api: BooksAPIClient
    tenants: TenantContext = field(default_factory=TenantContext)
    session: StaticSessionResolver = field(default_factory=_default_session)

    # Refreshed on page load
    companies: list[Company] = field(default_factory=list)

    def company_by_id(self, company_id: str | None) -> Company | None:
        if not company_id:
            return None
        for company in self.companies:
            if company.id == company_id:
                return company
        return None
