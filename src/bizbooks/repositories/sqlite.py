"""SQLite implementations of repository interfaces."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from bizbooks.domain.documents import (
    Company,
    DocumentRecord,
    Scope,
    record_columns,
    record_from_mapping,
    record_to_mapping,
)
from bizbooks.domain.value_objects import DocumentKind
from bizbooks.exceptions import DatabaseError, DuplicateCompanyError, FetchFailedError
from bizbooks.logging_config import get_logger
from bizbooks.repositories.interfaces import CompanyRepository, DocumentRepository

logger = get_logger(__name__)

# Column each kind is filtered by. Expenses follow their owner, not a company.
SCOPE_COLUMNS: dict[DocumentKind, str] = {
    DocumentKind.EXPENSES: "user_id",
    DocumentKind.INVOICES: "company_id",
    DocumentKind.PURCHASE_ORDERS: "company_id",
    DocumentKind.SALE_RECEIPTS: "company_id",
}


class SQLiteDatabase:
    """SQLite database connection manager."""

    def __init__(
        self, path: str | Path = ":memory:", check_same_thread: bool = True
    ) -> None:
        self._path = str(path)
        self._check_same_thread = check_same_thread
        self._connection: sqlite3.Connection | None = None

    @property
    def path(self) -> str:
        return self._path

    def get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(
                self._path, check_same_thread=self._check_same_thread
            )
            self._connection.row_factory = sqlite3.Row
            self._connection.execute("PRAGMA foreign_keys = ON")
        return self._connection

    def initialize(self) -> None:
        """Create all database tables."""
        conn = self.get_connection()
        conn.executescript(
            """
            -- Companies (tenants)
            CREATE TABLE IF NOT EXISTS companies (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                currency TEXT NOT NULL DEFAULT 'KES',
                created_at TEXT NOT NULL
            );

            -- Expenses are owned by a user; company_id is informational only
            CREATE TABLE IF NOT EXISTS expenses (
                id TEXT PRIMARY KEY,
                document_number TEXT NOT NULL,
                counterparty_name TEXT NOT NULL DEFAULT '',
                primary_date TEXT NOT NULL,
                total TEXT NOT NULL DEFAULT '0',
                created_at TEXT NOT NULL,
                user_id TEXT NOT NULL,
                company_id TEXT,
                category TEXT NOT NULL DEFAULT '',
                payment_method TEXT NOT NULL DEFAULT '',
                status TEXT NOT NULL DEFAULT 'pending'
            );

            CREATE TABLE IF NOT EXISTS invoices (
                id TEXT PRIMARY KEY,
                document_number TEXT NOT NULL,
                counterparty_name TEXT NOT NULL DEFAULT '',
                primary_date TEXT NOT NULL,
                total TEXT NOT NULL DEFAULT '0',
                created_at TEXT NOT NULL,
                company_id TEXT NOT NULL,
                due_date TEXT,
                status TEXT NOT NULL DEFAULT 'draft',
                paid_amount TEXT NOT NULL DEFAULT '0',
                UNIQUE(company_id, document_number),
                FOREIGN KEY (company_id) REFERENCES companies(id)
            );

            CREATE TABLE IF NOT EXISTS purchase_orders (
                id TEXT PRIMARY KEY,
                document_number TEXT NOT NULL,
                counterparty_name TEXT NOT NULL DEFAULT '',
                primary_date TEXT NOT NULL,
                total TEXT NOT NULL DEFAULT '0',
                created_at TEXT NOT NULL,
                company_id TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'pending',
                UNIQUE(company_id, document_number),
                FOREIGN KEY (company_id) REFERENCES companies(id)
            );

            CREATE TABLE IF NOT EXISTS sale_receipts (
                id TEXT PRIMARY KEY,
                document_number TEXT NOT NULL,
                counterparty_name TEXT NOT NULL DEFAULT '',
                primary_date TEXT NOT NULL,
                total TEXT NOT NULL DEFAULT '0',
                created_at TEXT NOT NULL,
                company_id TEXT NOT NULL,
                payment_method TEXT NOT NULL DEFAULT 'cash',
                UNIQUE(company_id, document_number),
                FOREIGN KEY (company_id) REFERENCES companies(id)
            );

            -- Indexes matching the list queries (scope filter + newest first)
            CREATE INDEX IF NOT EXISTS idx_expenses_user_created ON expenses(user_id, created_at);
            CREATE INDEX IF NOT EXISTS idx_invoices_company_created ON invoices(company_id, created_at);
            CREATE INDEX IF NOT EXISTS idx_purchase_orders_company_created ON purchase_orders(company_id, created_at);
            CREATE INDEX IF NOT EXISTS idx_sale_receipts_company_created ON sale_receipts(company_id, created_at);
            """
        )
        conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None


class SQLiteCompanyRepository(CompanyRepository):
    def __init__(self, db: SQLiteDatabase) -> None:
        self._db = db

    def add(self, company: Company) -> None:
        conn = self._db.get_connection()
        try:
            conn.execute(
                """
                INSERT INTO companies (id, name, currency, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (
                    company.id,
                    company.name,
                    company.currency,
                    company.created_at.isoformat(),
                ),
            )
        except sqlite3.IntegrityError as e:
            raise DuplicateCompanyError(company.id) from e
        conn.commit()

    def get(self, company_id: str) -> Company | None:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM companies WHERE id = ?", (company_id,)
        ).fetchone()
        if row is None:
            return None
        return self._row_to_company(row)

    def list_all(self) -> Iterable[Company]:
        conn = self._db.get_connection()
        rows = conn.execute("SELECT * FROM companies ORDER BY name, id").fetchall()
        return [self._row_to_company(row) for row in rows]

    def _row_to_company(self, row: sqlite3.Row) -> Company:
        return Company(
            id=row["id"],
            name=row["name"],
            currency=row["currency"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )


class SQLiteDocumentRepository(DocumentRepository):
    """All four document tables behind one repository.

    Queries run on the calling thread; ``fetch`` is async only to satisfy the
    list controller's contract.
    """

    def __init__(self, db: SQLiteDatabase) -> None:
        self._db = db

    def add(self, record: DocumentRecord) -> None:
        kind = record.kind
        row = record_to_mapping(record)
        columns = record_columns(kind)
        placeholders = ", ".join("?" for _ in columns)
        conn = self._db.get_connection()
        try:
            conn.execute(
                f"INSERT INTO {kind.value} ({', '.join(columns)}) VALUES ({placeholders})",
                tuple(row[c] for c in columns),
            )
        except sqlite3.Error as e:
            raise DatabaseError(
                f"Could not store {kind.label} {record.document_number}: {e}",
                context={"kind": kind.value, "id": record.id},
            ) from e
        conn.commit()

    def get(self, kind: DocumentKind, record_id: str) -> DocumentRecord | None:
        conn = self._db.get_connection()
        row = conn.execute(
            f"SELECT * FROM {kind.value} WHERE id = ?", (record_id,)
        ).fetchone()
        if row is None:
            return None
        return record_from_mapping(kind, row)

    def count(self, kind: DocumentKind) -> int:
        conn = self._db.get_connection()
        row = conn.execute(f"SELECT COUNT(*) AS n FROM {kind.value}").fetchone()
        return int(row["n"])

    async def fetch(self, kind: DocumentKind, scope: Scope) -> list[DocumentRecord]:
        self.check_scope(kind, scope)
        return self.list_for_scope(kind, scope.value)

    def list_for_scope(self, kind: DocumentKind, scope_value: str) -> list[DocumentRecord]:
        """Synchronous form of ``fetch`` for callers outside the event loop."""
        column = SCOPE_COLUMNS[kind]
        try:
            conn = self._db.get_connection()
            rows = conn.execute(
                f"""
                SELECT * FROM {kind.value}
                WHERE {column} = ?
                ORDER BY created_at DESC, id DESC
                """,
                (scope_value,),
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(
                "document_query_failed",
                kind=kind.value,
                scope_rule=kind.scope_rule.value,
                error=str(e),
            )
            raise FetchFailedError(kind.label, str(e)) from e
        return [record_from_mapping(kind, row) for row in rows]
