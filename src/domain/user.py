"""User Domain Entity

Account that owns clients and invoices.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, BigIntegerId


class User(BaseModel, table=True):
    """
    User - Authenticated account

    Domain Rules:
    - email is unique and stored lower-cased
    - Only the bcrypt hash of the password is stored
    - full_name/company_name are used for display and PDF rendering only
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique user identifier (auto-increment)"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True, index=True),
        description="Login email (lower-cased, unique)"
    )

    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="bcrypt password hash"
    )

    full_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Display name"
    )

    company_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Company name printed on invoices"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Account creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last profile update timestamp"
    )
