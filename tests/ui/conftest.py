from __future__ import annotations

import pytest


@pytest.fixture
def api_db():
    from bizbooks.repositories.sqlite import SQLiteDatabase

    db = SQLiteDatabase(":memory:", check_same_thread=False)
    db.initialize()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def api_app(api_db):
    """Create a test instance of the backend API with an in-memory DB."""

    from bizbooks.api.app import create_app
    from bizbooks.container import get_database

    app = create_app()
    app.dependency_overrides[get_database] = lambda: api_db
    return app


@pytest.fixture
async def api_client(api_app):
    """BooksAPIClient wired to the in-process FastAPI app."""

    from httpx import ASGITransport, AsyncClient

    from bizbooks.ui.api_client import BooksAPIClient

    async with AsyncClient(
        transport=ASGITransport(app=api_app), base_url="http://test"
    ) as c:
        yield BooksAPIClient(base_url="http://test", client=c)
