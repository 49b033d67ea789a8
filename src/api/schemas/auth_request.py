"""Request schemas for Authentication API"""

import re
from typing import Optional
from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RegisterRequestSchema(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(
        ...,
        min_length=6,
        max_length=72,
        description="6-72 characters (bcrypt limit)"
    )
    full_name: Optional[str] = Field(default=None, max_length=255)
    company_name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "email": "owner@example.com",
                "password": "s3cret-pass",
                "full_name": "Jane Owner",
                "company_name": "Owner Studio"
            }
        }


class LoginRequestSchema(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, max_length=72)
