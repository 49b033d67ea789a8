"""Request schemas for extraction API"""

from pydantic import BaseModel, Field


class ParseTextRequestSchema(BaseModel):
    """Request schema for POST /nlp/parse"""

    text: str = Field(
        ...,
        max_length=5000,
        description="Free-text invoice request"
    )

    class Config:
        json_schema_extra = {
            "example": {"text": "Invoice Acme Corp for 5 hours of design at $100/hr, 10% tax"}
        }
