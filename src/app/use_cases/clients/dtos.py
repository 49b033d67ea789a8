"""Data Transfer Objects for Client Use Cases"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field

from src.app.use_cases.invoices.dtos import PaginationDTO


class ClientCommandDTO(BaseModel):
    """
    Command DTO for creating or updating a client

    Update replaces every field (omitted optional fields become empty).
    """

    client_name: str = Field(..., description="Client display name")
    client_email: Optional[str] = Field(default=None)
    client_address: Optional[str] = Field(default=None)
    client_phone: Optional[str] = Field(default=None)
    tax_id: Optional[str] = Field(default=None, description="Tax/VAT identifier")

    class Config:
        json_schema_extra = {
            "example": {
                "client_name": "Acme Corp",
                "client_email": "billing@acme.test",
                "client_address": "1 Main Street, Springfield",
                "client_phone": "+1 555 0100",
                "tax_id": "US123456789"
            }
        }


class ClientDTO(BaseModel):
    id: int
    client_name: str
    client_email: Optional[str] = None
    client_address: Optional[str] = None
    client_phone: Optional[str] = None
    tax_id: Optional[str] = None
    invoice_count: int = 0
    created_at: datetime
    updated_at: datetime


class ClientInvoiceDTO(BaseModel):
    """Invoice row shown on a client's page"""

    id: int
    invoice_number: str
    invoice_date: date
    due_date: Optional[date] = None
    currency: str
    total: Decimal
    status: str


class ClientDetailDTO(ClientDTO):
    """Client with its most recent invoices"""

    recent_invoices: List[ClientInvoiceDTO] = Field(default_factory=list)


class ListClientsQueryDTO(BaseModel):
    page: int = 1
    limit: int = 10
    search: Optional[str] = None


class ListClientsResponseDTO(BaseModel):
    clients: List[ClientDTO]
    pagination: PaginationDTO
