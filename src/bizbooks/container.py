"""Dependency injection container for BizBooks.

Provides centralized dependency management using a simple container pattern.
This allows for:
- Easy testing through dependency replacement
- Configuration-driven repository instantiation
- Lazy initialization of the database

Usage:
    from bizbooks.container import get_container

    container = get_container()
    repo = container.document_repository
"""

from functools import cached_property, lru_cache

from bizbooks.config import Settings, get_settings
from bizbooks.logging_config import get_logger
from bizbooks.repositories.sqlite import (
    SQLiteCompanyRepository,
    SQLiteDatabase,
    SQLiteDocumentRepository,
)
from bizbooks.services.currency import CurrencyFormatter

logger = get_logger(__name__)


class Container:
    """Dependency injection container.

    Repositories are instantiated on first access and cached for reuse.

        test_settings = Settings(sqlite_path=":memory:")
        container = Container(settings=test_settings)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        logger.debug(
            "container_created",
            sqlite_path=str(self._settings.sqlite_path),
            environment=self._settings.environment.value,
        )

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        return self._settings

    @cached_property
    def database(self) -> SQLiteDatabase:
        """Get the SQLite database, creating tables on first access."""
        db_path = str(self._settings.sqlite_path)
        logger.info("initializing_sqlite_database", path=db_path)

        # FastAPI runs sync dependencies in a worker thread pool.
        db = SQLiteDatabase(db_path, check_same_thread=False)
        db.initialize()
        return db

    @cached_property
    def company_repository(self) -> SQLiteCompanyRepository:
        return SQLiteCompanyRepository(self.database)

    @cached_property
    def document_repository(self) -> SQLiteDocumentRepository:
        return SQLiteDocumentRepository(self.database)

    @cached_property
    def formatter(self) -> CurrencyFormatter:
        return CurrencyFormatter(self._settings.currency)

    def close(self) -> None:
        """Close all resources held by the container.

        Should be called during application shutdown.
        """
        if "database" in self.__dict__:
            logger.info("closing_database_connection")
            self.database.close()

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


@lru_cache
def get_container() -> Container:
    """Get the global container.

    For testing, create a Container directly with custom settings instead
    of using this function.
    """
    return Container()


def reset_container() -> None:
    """Close and forget the global container.

    Used primarily for testing to ensure a fresh container state.
    """
    if get_container.cache_info().currsize:
        get_container().close()
    get_container.cache_clear()


# FastAPI dependency functions
def get_database() -> SQLiteDatabase:
    """FastAPI dependency for database access."""
    return get_container().database
