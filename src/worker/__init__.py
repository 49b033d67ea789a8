"""Background workers for the invoice service"""
from .overdue_invoices import OverdueInvoiceWorker

__all__ = ["OverdueInvoiceWorker"]
