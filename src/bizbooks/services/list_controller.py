"""Generic list view controller for tenant-scoped document tables.

A controller drives one list through ``Loading -> Empty | Populated | Failed``.
It re-runs from ``Loading`` whenever the selected company or the signed-in
user changes, and only the most recently started fetch may publish a result:
each refresh takes a new generation number and completions carrying an older
number are dropped.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from bizbooks.domain.documents import DocumentRecord, Scope
from bizbooks.domain.value_objects import PresentationCategory, ScopeRule
from bizbooks.exceptions import BizBooksError
from bizbooks.logging_config import get_logger
from bizbooks.repositories.interfaces import DocumentSource
from bizbooks.services.context import TenantContext
from bizbooks.services.document_lists import ListSpec
from bizbooks.services.interfaces import (
    AmountFormatter,
    Notifier,
    ObservableSession,
    SessionResolver,
    Unsubscribe,
)
from bizbooks.services.status_classifier import classify_record

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Loading:
    pass


@dataclass(frozen=True, slots=True)
class Empty:
    message: str
    no_context: bool = False


@dataclass(frozen=True, slots=True)
class ListRow:
    record: DocumentRecord
    category: PresentationCategory


@dataclass(frozen=True, slots=True)
class Populated:
    rows: tuple[ListRow, ...]


@dataclass(frozen=True, slots=True)
class Failed:
    reason: str


ViewState = Loading | Empty | Populated | Failed
StateListener = Callable[[ViewState], None]


class ListViewController:
    """Fetches, classifies and publishes one document list.

    Attributes:
        spec: What to list and how to present it.
    """

    def __init__(
        self,
        spec: ListSpec,
        source: DocumentSource,
        tenants: TenantContext,
        session: SessionResolver,
        notifier: Notifier,
    ) -> None:
        self.spec = spec
        self._source = source
        self._tenants = tenants
        self._session = session
        self._notifier = notifier

        self._state: ViewState = Loading()
        self._generation = 0
        self._listeners: list[StateListener] = []
        self._subscriptions: list[Unsubscribe] = []
        self._pending: set[asyncio.Task[ViewState]] = set()
        self._log = logger.bind(kind=spec.kind.value)

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def rows(self) -> tuple[ListRow, ...]:
        if isinstance(self._state, Populated):
            return self._state.rows
        return ()

    def add_listener(self, listener: StateListener) -> Unsubscribe:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def resolve_scope(self) -> Scope | None:
        """Scope required by this list's kind, or None if it is not available.

        A company must be selected for every kind, even expenses, which are
        then filtered by the signed-in user rather than by the company.
        """
        company = self._tenants.current()
        if company is None:
            return None
        if self.spec.scope_rule is ScopeRule.IDENTITY:
            identity = self._session.current_identity()
            return Scope.identity(identity.id) if identity is not None else None
        return Scope.tenant(company.id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> asyncio.Task[ViewState]:
        """Subscribe to context changes and kick off the first load.

        Must be called from code running on the event loop.
        """
        if not self._subscriptions:
            self._subscriptions.append(self._tenants.subscribe(self._on_context_changed))
            if isinstance(self._session, ObservableSession):
                self._subscriptions.append(
                    self._session.subscribe(self._on_context_changed)
                )
        return self._schedule_refresh()

    def stop(self) -> None:
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()

    async def refresh(self) -> ViewState:
        """Restart the list at Loading and run one fetch to completion.

        Also serves as the explicit user-triggered refresh; nothing retries
        on its own.
        """
        generation, scope = self._begin()
        if scope is None:
            return self._state
        return await self._load(generation, scope)

    async def wait_idle(self) -> ViewState:
        """Wait for every scheduled refresh to settle and return the final state."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
        return self._state

    def _on_context_changed(self) -> None:
        self._log.debug("list_context_changed")
        self._schedule_refresh()

    def _schedule_refresh(self) -> asyncio.Task[ViewState]:
        # Generation and scope are taken now, not when the task gets to run.
        generation, scope = self._begin()

        async def run() -> ViewState:
            if scope is None:
                return self._state
            return await self._load(generation, scope)

        task = asyncio.get_running_loop().create_task(run())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _begin(self) -> tuple[int, Scope | None]:
        self._generation += 1
        self._set_state(Loading())
        scope = self.resolve_scope()
        if scope is None:
            self._log.debug("list_scope_missing", rule=self.spec.scope_rule.value)
            message = self.spec.no_context_message(self._tenants.current() is not None)
            self._set_state(Empty(message, no_context=True))
        return self._generation, scope

    async def _load(self, generation: int, scope: Scope) -> ViewState:
        self._log.debug(
            "document_fetch_started",
            scope_rule=scope.rule.value,
            scope=scope.value,
            generation=generation,
        )
        try:
            records = await self._source.fetch(self.spec.kind, scope)
        except BizBooksError as e:
            if self._is_stale(generation, outcome="error"):
                return self._state
            self._log.warning(
                "document_fetch_failed",
                scope=scope.value,
                error_code=e.error_code,
                error=e.message,
            )
            self._set_state(Failed(self.spec.error_message))
            self._notifier.notify_error(self.spec.error_message)
            return self._state

        if self._is_stale(generation, outcome="rows"):
            return self._state

        self._log.debug("document_fetch_completed", scope=scope.value, count=len(records))
        if not records:
            self._set_state(Empty(self.spec.empty_message))
        else:
            self._set_state(
                Populated(tuple(ListRow(r, classify_record(r)) for r in records))
            )
        return self._state

    def _is_stale(self, generation: int, *, outcome: str) -> bool:
        if generation == self._generation:
            return False
        self._log.debug(
            "stale_fetch_discarded",
            generation=generation,
            current_generation=self._generation,
            outcome=outcome,
        )
        return True

    def _set_state(self, state: ViewState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def table_rows(
        self, formatter: AmountFormatter, date_format: str = "%d/%m/%Y"
    ) -> list[dict[str, Any]]:
        """Rows for a table renderer, one dict per record keyed by column key.

        Cells are formatted on every call; nothing formatted is cached. Each
        row also carries ``id`` and its ``presentation`` category.
        """
        table: list[dict[str, Any]] = []
        for row in self.rows:
            cells: dict[str, Any] = {
                "id": row.record.id,
                "presentation": row.category.value,
            }
            for column in self.spec.columns:
                cells[column.key] = column.render(row.record, formatter, date_format)
            table.append(cells)
        return table
