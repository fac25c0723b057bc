from bizbooks.repositories.interfaces import (
    CompanyRepository,
    DocumentRepository,
    DocumentSource,
)
from bizbooks.repositories.sqlite import (
    SQLiteCompanyRepository,
    SQLiteDatabase,
    SQLiteDocumentRepository,
)

__all__ = [
    "CompanyRepository",
    "DocumentRepository",
    "DocumentSource",
    "SQLiteCompanyRepository",
    "SQLiteDatabase",
    "SQLiteDocumentRepository",
]
