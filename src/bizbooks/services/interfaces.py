from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Protocol, runtime_checkable

from bizbooks.domain.documents import Identity

Unsubscribe = Callable[[], None]


class SessionResolver(Protocol):
    """Supplies the signed-in identity, if any."""

    def current_identity(self) -> Identity | None:
        """Return the current identity, or None when nobody is signed in."""
        ...


@runtime_checkable
class ObservableSession(Protocol):
    """A session resolver that can announce identity changes."""

    def current_identity(self) -> Identity | None: ...

    def subscribe(self, listener: Callable[[], None]) -> Unsubscribe: ...


class Notifier(Protocol):
    """One-shot, fire-and-forget error notifications (toasts, stderr lines)."""

    def notify_error(self, message: str) -> None: ...


class AmountFormatter(Protocol):
    """Turns a monetary amount into display text."""

    def format(self, amount: Decimal | int | float | str) -> str: ...
