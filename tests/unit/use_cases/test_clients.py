"""Unit tests for client use cases"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.clients import (
    CreateClient,
    ListClients,
    GetClient,
    UpdateClient,
    DeleteClient,
    ClientCommandDTO,
    ListClientsQueryDTO,
)


async def persist_client(client):
    client.id = 3
    return client


async def return_same(entity):
    return entity


@pytest.fixture
def client_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=persist_client)
    repo.update = AsyncMock(side_effect=return_same)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def invoice_repo():
    repo = MagicMock()
    repo.count_by_client_ids = AsyncMock(return_value={})
    repo.get_recent_for_client = AsyncMock(return_value=[])
    repo.detach_client = AsyncMock()
    return repo


@pytest.mark.asyncio
class TestCreateClient:

    async def test_create_client(self, mock_uow, client_repo):
        """
        Given: A client with padded fields and a blank phone
        When: create_client is called
        Then: Values are trimmed, blanks stored as None
        """
        # Arrange
        command = ClientCommandDTO(
            client_name="  Acme Corp ",
            client_email="billing@acme.test",
            client_phone="   ",
        )

        # Act
        result = await CreateClient(mock_uow, client_repo).execute(1, command)

        # Assert
        assert result.is_ok()
        assert result.value.id == 3
        assert result.value.client_name == "Acme Corp"
        assert result.value.client_phone is None
        assert result.value.invoice_count == 0
        assert client_repo.create.call_args[0][0].user_id == 1
        mock_uow.commit.assert_called_once()

    async def test_name_required(self, mock_uow, client_repo):
        result = await CreateClient(mock_uow, client_repo).execute(1, ClientCommandDTO(client_name=" "))

        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details == [{"field": "client_name", "message": "Client name is required"}]
        client_repo.create.assert_not_called()

    async def test_invalid_email(self, mock_uow, client_repo):
        command = ClientCommandDTO(client_name="Acme", client_email="not-an-email")

        result = await CreateClient(mock_uow, client_repo).execute(1, command)

        assert result.error.details[0]["field"] == "client_email"


@pytest.mark.asyncio
class TestListClients:

    async def test_page_with_invoice_counts(self, client_repo, invoice_repo, sample_client):
        client_repo.search = AsyncMock(return_value=([sample_client], 11))
        invoice_repo.count_by_client_ids = AsyncMock(return_value={3: 5})

        result = await ListClients(client_repo, invoice_repo).execute(
            1, ListClientsQueryDTO(page=2, limit=10, search="acme")
        )

        assert result.is_ok()
        assert result.value.clients[0].invoice_count == 5
        assert result.value.pagination.total_pages == 2
        client_repo.search.assert_called_once_with(owner_id=1, search="acme", limit=10, offset=10)

    async def test_invalid_limit(self, client_repo, invoice_repo):
        result = await ListClients(client_repo, invoice_repo).execute(1, ListClientsQueryDTO(limit=0))

        assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
class TestGetClient:

    async def test_with_recent_invoices(self, client_repo, invoice_repo, sample_client, make_invoice):
        client_repo.get_for_owner = AsyncMock(return_value=sample_client)
        invoice_repo.get_recent_for_client = AsyncMock(return_value=[make_invoice(client_id=3)])
        invoice_repo.count_by_client_ids = AsyncMock(return_value={3: 1})

        result = await GetClient(client_repo, invoice_repo).execute(1, 3)

        assert result.is_ok()
        assert result.value.invoice_count == 1
        assert result.value.recent_invoices[0].invoice_number == "INV-202503-0001"
        assert result.value.recent_invoices[0].status == "draft"
        invoice_repo.get_recent_for_client.assert_called_once_with(1, 3, limit=10)

    async def test_other_owner(self, client_repo, invoice_repo):
        client_repo.get_for_owner = AsyncMock(return_value=None)

        result = await GetClient(client_repo, invoice_repo).execute(2, 3)

        assert result.error.code == "CLIENT_NOT_FOUND"


@pytest.mark.asyncio
class TestUpdateClient:

    async def test_replaces_fields(self, mock_uow, client_repo, invoice_repo, sample_client):
        client_repo.get_for_owner = AsyncMock(return_value=sample_client)

        result = await UpdateClient(mock_uow, client_repo, invoice_repo).execute(
            1, 3, ClientCommandDTO(client_name="Acme Ltd", tax_id="GB1")
        )

        assert result.is_ok()
        assert result.value.client_name == "Acme Ltd"
        assert result.value.client_email is None
        assert result.value.tax_id == "GB1"
        mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
class TestDeleteClient:

    async def test_detaches_invoices(self, mock_uow, client_repo, invoice_repo, sample_client):
        """
        Given: A client with invoices
        When: it is deleted
        Then: Its invoices are detached before the client row is removed
        """
        client_repo.get_for_owner = AsyncMock(return_value=sample_client)

        result = await DeleteClient(mock_uow, client_repo, invoice_repo).execute(1, 3)

        assert result.is_ok()
        assert result.value.message == "Client deleted successfully"
        invoice_repo.detach_client.assert_called_once_with(1, 3)
        client_repo.delete.assert_called_once_with(sample_client)
        mock_uow.commit.assert_called_once()

    async def test_rollback_on_exception(self, mock_uow, client_repo, invoice_repo, sample_client):
        client_repo.get_for_owner = AsyncMock(return_value=sample_client)
        invoice_repo.detach_client = AsyncMock(side_effect=Exception("Database error"))

        result = await DeleteClient(mock_uow, client_repo, invoice_repo).execute(1, 3)

        assert result.error.code == "DELETE_CLIENT_FAILED"
        mock_uow.rollback.assert_called_once()
        client_repo.delete.assert_not_called()
