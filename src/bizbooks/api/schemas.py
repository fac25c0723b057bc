"""Pydantic v2 schemas for API request/response models."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


# Company Schemas
class CompanyCreate(BaseModel):
    """Schema for creating a company."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str | None = Field(
        default=None, min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$"
    )
    name: str = Field(..., min_length=1, max_length=255)
    currency: str = Field(default="KES", min_length=3, max_length=3)


class CompanyResponse(BaseModel):
    """Schema for company response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    currency: str
    created_at: datetime


# Document Schemas
class DocumentResponse(BaseModel):
    """One row of a document list.

    Kind-specific fields are null for kinds that do not carry them.
    """

    kind: str
    id: str
    document_number: str
    counterparty_name: str
    primary_date: date | None = None
    total: str
    created_at: datetime
    company_id: str | None = None
    user_id: str | None = None
    status: str | None = None
    payment_method: str | None = None
    category: str | None = None
    due_date: date | None = None
    paid_amount: str | None = None


# Health Schemas
class HealthResponse(BaseModel):
    """Schema for health check response."""

    status: str
    version: str
