"""Domain exception hierarchy for BizBooks.

All domain-specific exceptions inherit from BizBooksError.
This allows catching all application errors with a single base class
while preserving specificity for individual error types.
"""

from typing import Any


class BizBooksError(Exception):
    """Base exception for all BizBooks errors.

    Includes optional error_code for API responses and extra context.
    """

    error_code: str = "BIZBOOKS_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Scope Errors
# =============================================================================


class ScopeError(BizBooksError):
    """Base exception for scoping problems (who or which company a fetch is for)."""

    error_code = "SCOPE_ERROR"
    status_code = 400


class AuthMissingError(ScopeError):
    """Raised when an identity is required but nobody is signed in."""

    error_code = "AUTH_MISSING"
    status_code = 401

    def __init__(self, kind: str) -> None:
        super().__init__(
            f"Sign-in required to list {kind}",
            context={"kind": kind},
        )


class ScopeMissingError(ScopeError):
    """Raised when a tenant or identity scope is required but absent."""

    error_code = "SCOPE_MISSING"

    def __init__(self, kind: str, rule: str) -> None:
        super().__init__(
            f"Listing {kind} requires a {rule} scope",
            context={"kind": kind, "rule": rule},
        )


class ScopeMismatchError(ScopeError):
    """Raised when a fetch is scoped by the wrong key for its document kind."""

    error_code = "SCOPE_MISMATCH"

    def __init__(self, kind: str, expected: str, received: str) -> None:
        super().__init__(
            f"{kind} are scoped by {expected}, not {received}",
            context={"kind": kind, "expected": expected, "received": received},
        )


# =============================================================================
# Fetch Errors
# =============================================================================


class FetchFailedError(BizBooksError):
    """Raised when the backing store cannot return a document list.

    Covers network, authorization and backend failures alike.
    """

    error_code = "FETCH_FAILED"
    status_code = 502

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(
            f"Could not load {kind}: {reason}",
            context={"kind": kind, "reason": reason},
        )
        self.kind = kind
        self.reason = reason


# =============================================================================
# Company Errors
# =============================================================================


class CompanyError(BizBooksError):
    """Base exception for company-related errors."""

    error_code = "COMPANY_ERROR"
    status_code = 400


class CompanyNotFoundError(CompanyError):
    """Raised when a company cannot be found."""

    error_code = "COMPANY_NOT_FOUND"
    status_code = 404

    def __init__(self, company_id: str) -> None:
        super().__init__(
            f"Company not found: {company_id}",
            context={"company_id": company_id},
        )


class DuplicateCompanyError(CompanyError):
    """Raised when attempting to create a company whose id is taken."""

    error_code = "DUPLICATE_COMPANY"
    status_code = 409

    def __init__(self, company_id: str) -> None:
        super().__init__(
            f"Company already exists: {company_id}",
            context={"company_id": company_id},
        )


# =============================================================================
# Database Errors
# =============================================================================


class DatabaseError(BizBooksError):
    """Raised when a database write fails."""

    error_code = "DATABASE_ERROR"
    status_code = 500
