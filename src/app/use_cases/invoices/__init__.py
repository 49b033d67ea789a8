"""Invoice lifecycle use cases"""
from .create_invoice import CreateInvoice
from .get_invoice import GetInvoice
from .update_invoice import UpdateInvoice
from .update_invoice_status import UpdateInvoiceStatus
from .delete_invoice import DeleteInvoice
from .list_invoices import ListInvoices
from .get_invoice_stats import GetInvoiceStats
from .generate_invoice_pdf import GenerateInvoicePdf
from .dtos import (
    LineItemDraftDTO,
    InvoiceDraftDTO,
    ClientSummaryDTO,
    LineItemDTO,
    PaymentDTO,
    InvoiceDetailDTO,
    InvoiceSummaryDTO,
    PaginationDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    InvoiceStatsDTO,
    DeleteResponseDTO,
    InvoicePdfDTO,
    OverdueScanResultDTO,
)

__all__ = [
    "CreateInvoice",
    "GetInvoice",
    "UpdateInvoice",
    "UpdateInvoiceStatus",
    "DeleteInvoice",
    "ListInvoices",
    "GetInvoiceStats",
    "GenerateInvoicePdf",
    "LineItemDraftDTO",
    "InvoiceDraftDTO",
    "ClientSummaryDTO",
    "LineItemDTO",
    "PaymentDTO",
    "InvoiceDetailDTO",
    "InvoiceSummaryDTO",
    "PaginationDTO",
    "ListInvoicesQueryDTO",
    "ListInvoicesResponseDTO",
    "InvoiceStatsDTO",
    "DeleteResponseDTO",
    "InvoicePdfDTO",
    "OverdueScanResultDTO",
]
