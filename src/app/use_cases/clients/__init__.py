"""Client registry use cases"""
from .create_client import CreateClient
from .list_clients import ListClients
from .get_client import GetClient
from .update_client import UpdateClient
from .delete_client import DeleteClient
from .dtos import (
    ClientCommandDTO,
    ClientDTO,
    ClientInvoiceDTO,
    ClientDetailDTO,
    ListClientsQueryDTO,
    ListClientsResponseDTO,
)

__all__ = [
    "CreateClient",
    "ListClients",
    "GetClient",
    "UpdateClient",
    "DeleteClient",
    "ClientCommandDTO",
    "ClientDTO",
    "ClientInvoiceDTO",
    "ClientDetailDTO",
    "ListClientsQueryDTO",
    "ListClientsResponseDTO",
]
