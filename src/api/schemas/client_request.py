"""Request schemas for Client API"""

from typing import Optional
from pydantic import BaseModel, Field

from src.app.use_cases.clients.dtos import ClientCommandDTO


class ClientRequestSchema(BaseModel):
    """
    Request schema for creating or replacing a client

    Used for POST /clients and PUT /clients/{id}.
    """

    client_name: str = Field(..., min_length=1, max_length=255)
    client_email: Optional[str] = Field(default=None, max_length=255)
    client_address: Optional[str] = Field(default=None)
    client_phone: Optional[str] = Field(default=None, max_length=50)
    tax_id: Optional[str] = Field(default=None, max_length=100)

    def to_command(self) -> ClientCommandDTO:
        return ClientCommandDTO(**self.model_dump())

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
