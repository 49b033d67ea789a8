"""Client Domain Entity

Billing counterparty owned by a user.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String
from src.domain.base import BaseModel, BigIntegerId


class Client(BaseModel, table=True):
    """
    Client - Billing counterparty

    Domain Rules:
    - Each client belongs to exactly one user
    - Deleting a client keeps its invoices (invoice.client_id becomes NULL)
    """

    __tablename__ = "clients"
    __table_args__ = (
        Index('ix_clients_user_id', 'user_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique client identifier (auto-increment)"
    )

    user_id: int = Field(
        sa_column=Column(BigIntegerId, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        description="Owner user ID"
    )

    client_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client or company name"
    )

    client_email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    client_address: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
    )

    client_phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
    )

    tax_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="VAT / tax registration number"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Client creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": 1,
                "client_name": "Acme Corp",
                "client_email": "billing@acme.test",
                "client_address": "1 Main Street, Springfield",
                "client_phone": "+1 555 0100",
                "tax_id": "US123456789",
                "created_at": "2025-03-01T00:00:00Z",
                "updated_at": "2025-03-01T00:00:00Z"
            }
        }
