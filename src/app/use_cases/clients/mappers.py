from typing import Any, Dict, List

from src.domain.client import Client
from src.domain.invoice import Invoice
from src.app.use_cases.invoices.mappers import enum_value
from .dtos import ClientCommandDTO, ClientDTO, ClientInvoiceDTO


def clean(value):
    """Strip strings and turn blank ones into None"""
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_client_command(command: ClientCommandDTO) -> List[Dict[str, Any]]:
    details = []
    if not clean(command.client_name):
        details.append({"field": "client_name", "message": "Client name is required"})
    if command.client_email and "@" not in command.client_email:
        details.append({"field": "client_email", "message": "Invalid email address"})
    return details


def to_client_dto(client: Client, invoice_count: int = 0) -> ClientDTO:
    return ClientDTO(
        id=client.id,
        client_name=client.client_name,
        client_email=client.client_email,
        client_address=client.client_address,
        client_phone=client.client_phone,
        tax_id=client.tax_id,
        invoice_count=invoice_count,
        created_at=client.created_at,
        updated_at=client.updated_at,
    )


def to_client_invoice_dto(invoice: Invoice) -> ClientInvoiceDTO:
    return ClientInvoiceDTO(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        currency=invoice.currency,
        total=invoice.total,
        status=enum_value(invoice.status),
    )
