"""API routes for BizBooks."""

from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, Depends, Query, status

from bizbooks import __version__
from bizbooks.api.schemas import (
    CompanyCreate,
    CompanyResponse,
    DocumentResponse,
    HealthResponse,
)
from bizbooks.container import get_database
from bizbooks.domain.documents import Company, DocumentRecord, Scope, record_to_mapping
from bizbooks.domain.value_objects import DocumentKind, ScopeRule
from bizbooks.exceptions import (
    AuthMissingError,
    CompanyNotFoundError,
    ScopeMismatchError,
    ScopeMissingError,
)
from bizbooks.repositories.interfaces import CompanyRepository, DocumentRepository
from bizbooks.repositories.sqlite import (
    SQLiteCompanyRepository,
    SQLiteDatabase,
    SQLiteDocumentRepository,
)

# Create routers
health_router = APIRouter(tags=["health"])
company_router = APIRouter(prefix="/companies", tags=["companies"])
document_router = APIRouter(prefix="/documents", tags=["documents"])

Database = Annotated[SQLiteDatabase, Depends(get_database)]


# Dependency injection functions
def get_company_repository(db: SQLiteDatabase) -> CompanyRepository:
    """Get company repository instance."""
    return SQLiteCompanyRepository(db)


def get_document_repository(db: SQLiteDatabase) -> DocumentRepository:
    """Get document repository instance."""
    return SQLiteDocumentRepository(db)


# Helper functions
def _company_to_response(company: Company) -> CompanyResponse:
    """Convert Company domain object to response schema."""
    return CompanyResponse(
        id=company.id,
        name=company.name,
        currency=company.currency,
        created_at=company.created_at,
    )


def _document_to_response(record: DocumentRecord) -> DocumentResponse:
    """Convert a document record to the flat response schema."""
    return DocumentResponse(kind=record.kind.value, **record_to_mapping(record))


def _scope_from_query(
    kind: DocumentKind, company_id: str | None, user_id: str | None
) -> Scope:
    """Pick the scope a kind is listed by out of the query parameters."""
    if kind.scope_rule is ScopeRule.IDENTITY:
        if user_id:
            return Scope.identity(user_id)
        if company_id:
            raise ScopeMismatchError(
                kind.value, ScopeRule.IDENTITY.value, ScopeRule.TENANT.value
            )
        raise AuthMissingError(kind.value)

    if company_id:
        return Scope.tenant(company_id)
    if user_id:
        raise ScopeMismatchError(
            kind.value, ScopeRule.TENANT.value, ScopeRule.IDENTITY.value
        )
    raise ScopeMissingError(kind.value, ScopeRule.TENANT.value)


# Health endpoints
@health_router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


# Company endpoints
@company_router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_company(payload: CompanyCreate, db: Database) -> CompanyResponse:
    """Create a new company."""
    company_repo = get_company_repository(db)
    company = Company(
        id=payload.id or str(uuid4()),
        name=payload.name,
        currency=payload.currency.upper(),
    )
    company_repo.add(company)
    return _company_to_response(company)


@company_router.get("", response_model=list[CompanyResponse])
def list_companies(db: Database) -> list[CompanyResponse]:
    """List all companies."""
    company_repo = get_company_repository(db)
    return [_company_to_response(c) for c in company_repo.list_all()]


@company_router.get("/{company_id}", response_model=CompanyResponse)
def get_company(company_id: str, db: Database) -> CompanyResponse:
    """Get company by ID."""
    company = get_company_repository(db).get(company_id)
    if company is None:
        raise CompanyNotFoundError(company_id)
    return _company_to_response(company)


# Document endpoints
@document_router.get("/{kind}", response_model=list[DocumentResponse])
async def list_documents(
    kind: DocumentKind,
    db: Database,
    company_id: Annotated[str | None, Query(description="Company scope")] = None,
    user_id: Annotated[str | None, Query(description="Owner scope (expenses)")] = None,
) -> list[DocumentResponse]:
    """List one kind of document for a company or, for expenses, a user.

    Newest first. The scope parameter must match the kind: expenses take
    ``user_id``, every other kind takes ``company_id``.
    """
    scope = _scope_from_query(kind, company_id, user_id)
    if scope.rule is ScopeRule.TENANT and get_company_repository(db).get(scope.value) is None:
        raise CompanyNotFoundError(scope.value)

    records = await get_document_repository(db).fetch(kind, scope)
    return [_document_to_response(r) for r in records]
