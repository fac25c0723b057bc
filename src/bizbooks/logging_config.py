"""structlog setup for the API, the CLI and the NiceGUI frontend.

Log lines go to stderr so ``bizbooks list`` can print its table on stdout.
``BIZBOOKS_LOG_FORMAT=json`` switches from the colored console renderer to
one JSON object per line, tagged with the app name and environment.
"""

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from bizbooks.config import Settings, get_settings

# Libraries that log every request or poll; capped at INFO even in DEBUG runs.
_CHATTY_LOGGERS = ("httpcore", "httpx", "uvicorn.access", "nicegui", "asyncio")


def _tag_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("environment", settings.environment.value)
    return event_dict


def _processors(json_output: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        chain += [
            _tag_service,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        chain.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return chain


def configure_logging(settings: Settings | None = None) -> None:
    """Route structlog through stdlib logging at the configured level.

    Safe to call more than once; the API lifespan, ``bizbooks`` and the
    frontend entry point each call it on startup.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.value)

    structlog.configure(
        processors=_processors(settings.log_format == "json"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(settings.log_file)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logging.getLogger().addHandler(handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Module logger; events are snake_case names plus keyword fields.

    Example:
        logger = get_logger(__name__)
        logger.info("document_fetch_completed", kind="invoices", count=2)
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach fields (request id, path) to every log line in this task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Bind fields for the duration of a ``with`` block.

    Values bound before the block are restored afterwards, not dropped:

        with LogContext(command="list", kind="invoices"):
            controller.refresh()
    """

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self._bound: AbstractContextManager[None] | None = None

    def __enter__(self) -> "LogContext":
        self._bound = structlog.contextvars.bound_contextvars(**self.kwargs)
        self._bound.__enter__()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._bound is not None:
            self._bound.__exit__(*exc_info)
            self._bound = None
