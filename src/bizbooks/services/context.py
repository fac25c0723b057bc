"""Observable scoping context: the selected company and the signed-in user.

Lists re-fetch whenever either changes, so both expose ``subscribe``.
Instances are owned by whoever composes the page or command; there is no
module-level selection state.
"""

from __future__ import annotations

from collections.abc import Callable

from bizbooks.domain.documents import Company, Identity
from bizbooks.logging_config import get_logger
from bizbooks.services.interfaces import Unsubscribe

logger = get_logger(__name__)

Listener = Callable[[], None]


class _Observable:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener()


class TenantContext(_Observable):
    """The currently selected company, or None when nothing is selected."""

    def __init__(self, company: Company | None = None) -> None:
        super().__init__()
        self._company = company

    def current(self) -> Company | None:
        return self._company

    def select(self, company: Company | None) -> None:
        if company == self._company:
            return
        self._company = company
        logger.debug(
            "tenant_selected",
            company_id=company.id if company is not None else None,
        )
        self._emit()

    def clear(self) -> None:
        self.select(None)


class StaticSessionResolver(_Observable):
    """Session resolver holding a fixed identity until told otherwise.

    Sign-in itself happens elsewhere; this only reflects its outcome.
    """

    def __init__(self, identity: Identity | None = None) -> None:
        super().__init__()
        self._identity = identity

    @classmethod
    def from_user_id(cls, user_id: str | None) -> StaticSessionResolver:
        return cls(Identity(id=user_id) if user_id else None)

    def current_identity(self) -> Identity | None:
        return self._identity

    def sign_in(self, identity: Identity) -> None:
        if identity == self._identity:
            return
        self._identity = identity
        self._emit()

    def sign_out(self) -> None:
        if self._identity is None:
            return
        self._identity = None
        self._emit()


class LoggingNotifier:
    """Notifier that records user-facing errors in the structured log."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify_error(self, message: str) -> None:
        self.messages.append(message)
        logger.warning("user_notified", message=message)
