"""Data Transfer Objects for Authentication Use Cases"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class RegisterCommandDTO(BaseModel):
    email: str = Field(..., description="Login email (case-insensitive)")
    password: str = Field(..., description="Plain password (hashed before storage)")
    full_name: Optional[str] = Field(default=None)
    company_name: Optional[str] = Field(default=None, description="Printed as the issuer on invoices")


class LoginCommandDTO(BaseModel):
    email: str
    password: str


class UserDTO(BaseModel):
    """Public user profile (never includes the password hash)"""

    id: int
    email: str
    full_name: Optional[str] = None
    company_name: Optional[str] = None
    created_at: datetime


class AuthResponseDTO(BaseModel):
    """Access token plus the authenticated user"""

    access_token: str
    token_type: str = "bearer"
    user: UserDTO

    class Config:
        json_schema_extra = {
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "user": {
                    "id": 1,
                    "email": "owner@example.com",
                    "full_name": "Jane Owner",
                    "company_name": "Owner Studio",
                    "created_at": "2025-03-01T10:00:00Z"
                }
            }
        }
