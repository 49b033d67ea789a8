from .user_repository import UserRepository
from .client_repository import ClientRepository
from .invoice_repository import InvoiceRepository, SORTABLE_FIELDS, SORT_ORDERS
from .line_item_repository import LineItemRepository
from .payment_repository import PaymentRepository

__all__ = [
    "UserRepository",
    "ClientRepository",
    "InvoiceRepository",
    "SORTABLE_FIELDS",
    "SORT_ORDERS",
    "LineItemRepository",
    "PaymentRepository",
]
