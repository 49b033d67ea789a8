from .base import BaseModel
from .user import User
from .client import Client
from .invoice import Invoice, InvoiceStatus, InvoiceSource, can_transition
from .line_item import LineItem
from .payment import Payment

__all__ = [
    "BaseModel",
    "User",
    "Client",
    "Invoice",
    "InvoiceStatus",
    "InvoiceSource",
    "can_transition",
    "LineItem",
    "Payment",
]
