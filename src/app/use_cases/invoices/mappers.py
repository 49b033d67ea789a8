"""Entity -> DTO mapping and shared error builders for invoice use cases"""

from typing import List, Optional

from libs.result import Error
from src.domain import money
from src.domain.client import Client
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_totals import InvoiceTotals
from src.domain.line_item import LineItem
from src.domain.payment import Payment
from .dtos import (
    ClientSummaryDTO,
    InvoiceDetailDTO,
    InvoiceSummaryDTO,
    LineItemDTO,
    PaymentDTO,
)


def enum_value(value) -> str:
    """Enum members and plain strings both come back from the database"""
    return getattr(value, "value", value)


def to_client_summary(client: Optional[Client]) -> Optional[ClientSummaryDTO]:
    if client is None:
        return None
    return ClientSummaryDTO(
        id=client.id,
        client_name=client.client_name,
        client_email=client.client_email,
        client_address=client.client_address,
        client_phone=client.client_phone,
    )


def to_line_item_dto(line_item: LineItem) -> LineItemDTO:
    return LineItemDTO(
        id=line_item.id,
        description=line_item.description,
        quantity=line_item.quantity,
        unit_price=line_item.unit_price,
        tax_rate=line_item.tax_rate,
        tax_amount=line_item.tax_amount,
        line_total=line_item.line_total,
        sort_order=line_item.sort_order,
    )


def to_payment_dto(payment: Payment) -> PaymentDTO:
    return PaymentDTO(
        id=payment.id,
        amount=payment.amount,
        payment_date=payment.payment_date,
        payment_method=payment.payment_method,
        reference_number=payment.reference_number,
        notes=payment.notes,
    )


def to_invoice_detail(
    invoice: Invoice,
    line_items: List[LineItem],
    payments: List[Payment],
    client: Optional[ClientSummaryDTO],
) -> InvoiceDetailDTO:
    return InvoiceDetailDTO(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        client_id=invoice.client_id,
        client=client,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        currency=invoice.currency,
        subtotal=invoice.subtotal,
        total_tax=invoice.total_tax,
        total=invoice.total,
        status=enum_value(invoice.status),
        source=enum_value(invoice.source),
        confidence_score=invoice.confidence_score,
        payment_terms=invoice.payment_terms,
        notes=invoice.notes,
        line_items=[to_line_item_dto(li) for li in line_items],
        payments=[to_payment_dto(p) for p in payments],
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def to_invoice_summary(
    invoice: Invoice,
    client: Optional[ClientSummaryDTO],
    line_item_count: int = 0,
    payment_count: int = 0,
) -> InvoiceSummaryDTO:
    return InvoiceSummaryDTO(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        client_id=invoice.client_id,
        client=client,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        currency=invoice.currency,
        subtotal=invoice.subtotal,
        total_tax=invoice.total_tax,
        total=invoice.total,
        status=enum_value(invoice.status),
        source=enum_value(invoice.source),
        line_item_count=line_item_count,
        payment_count=payment_count,
        created_at=invoice.created_at,
    )


def build_line_items(invoice_id: int, totals: InvoiceTotals) -> List[LineItem]:
    """Persistable rows from computed totals, rounded to storage precision"""
    return [
        LineItem(
            invoice_id=invoice_id,
            description=line.description.strip(),
            quantity=money.round_storage(line.quantity),
            unit_price=money.round_storage(line.unit_price),
            tax_rate=money.round_storage(line.tax_rate),
            tax_amount=money.round_storage(line.tax_amount),
            line_total=money.round_storage(line.line_total),
            sort_order=line.sort_order,
        )
        for line in totals.line_items
    ]


def invoice_not_found(invoice_id: int) -> Error:
    return Error(
        code="INVOICE_NOT_FOUND",
        message=f"Invoice {invoice_id} not found",
        reason="Invoice does not exist or belongs to another user",
    )


def invalid_transition(current: InvoiceStatus, target: InvoiceStatus) -> Error:
    return Error(
        code="INVALID_STATUS_TRANSITION",
        message=f"Cannot change status from {enum_value(current)} to {enum_value(target)}",
        reason="Status transition not allowed",
    )


def client_not_found(client_id: int) -> Error:
    return Error(
        code="CLIENT_NOT_FOUND",
        message=f"Client {client_id} not found",
        reason="Client does not exist or belongs to another user",
    )
