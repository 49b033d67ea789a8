"""Integration tests for Client API endpoints"""

import pytest
from httpx import AsyncClient

INVOICE_PAYLOAD = {
    "invoice_date": "2025-03-14",
    "line_items": [{"description": "Consulting", "quantity": 2, "unit_price": 100}],
}


@pytest.mark.asyncio
class TestClientsAPIIntegration:
    """Integration test suite for /clients endpoints"""

    async def test_client_crud(self, client: AsyncClient, api_prefix, auth_headers):
        # Arrange
        created = await client.post(
            f"{api_prefix}/clients",
            json={"client_name": "  Acme Corp ", "client_email": "billing@acme.test", "client_phone": ""},
            headers=auth_headers,
        )
        assert created.status_code == 201
        client_id = created.json()["id"]
        assert created.json()["client_name"] == "Acme Corp"
        assert created.json()["client_phone"] is None

        # Act
        updated = await client.put(
            f"{api_prefix}/clients/{client_id}",
            json={"client_name": "Acme Corporation", "tax_id": "US-123"},
            headers=auth_headers,
        )
        fetched = await client.get(f"{api_prefix}/clients/{client_id}", headers=auth_headers)
        deleted = await client.delete(f"{api_prefix}/clients/{client_id}", headers=auth_headers)
        missing = await client.get(f"{api_prefix}/clients/{client_id}", headers=auth_headers)

        # Assert
        assert updated.status_code == 200
        assert updated.json()["client_name"] == "Acme Corporation"
        assert updated.json()["client_email"] is None
        assert fetched.json()["tax_id"] == "US-123"
        assert fetched.json()["recent_invoices"] == []
        assert deleted.status_code == 200
        assert deleted.json()["id"] == client_id
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "CLIENT_NOT_FOUND"

    async def test_list_with_search_and_invoice_counts(self, client: AsyncClient, api_prefix, auth_headers):
        """
        Given two clients, one of which has an invoice
        When listing clients with and without a search term
        Then counts and pagination reflect the matches
        """
        # Arrange
        acme = await client.post(f"{api_prefix}/clients", json={"client_name": "Acme Corp"}, headers=auth_headers)
        await client.post(
            f"{api_prefix}/clients",
            json={"client_name": "Globex", "client_email": "ap@globex.test"},
            headers=auth_headers,
        )
        acme_id = acme.json()["id"]
        await client.post(
            f"{api_prefix}/invoices",
            json={**INVOICE_PAYLOAD, "client_id": acme_id},
            headers=auth_headers,
        )

        # Act
        everyone = await client.get(f"{api_prefix}/clients", headers=auth_headers)
        by_email = await client.get(f"{api_prefix}/clients", params={"search": "globex.test"}, headers=auth_headers)

        # Assert
        body = everyone.json()
        assert body["pagination"]["total"] == 2
        counts = {item["client_name"]: item["invoice_count"] for item in body["clients"]}
        assert counts == {"Acme Corp": 1, "Globex": 0}
        assert [item["client_name"] for item in by_email.json()["clients"]] == ["Globex"]

    async def test_delete_client_keeps_its_invoices(self, client: AsyncClient, api_prefix, auth_headers):
        # Arrange
        acme = await client.post(f"{api_prefix}/clients", json={"client_name": "Acme Corp"}, headers=auth_headers)
        acme_id = acme.json()["id"]
        invoice = await client.post(
            f"{api_prefix}/invoices",
            json={**INVOICE_PAYLOAD, "client_id": acme_id},
            headers=auth_headers,
        )
        invoice_id = invoice.json()["id"]

        # Act
        await client.delete(f"{api_prefix}/clients/{acme_id}", headers=auth_headers)
        response = await client.get(f"{api_prefix}/invoices/{invoice_id}", headers=auth_headers)

        # Assert
        assert response.status_code == 200
        assert response.json()["client_id"] is None
        assert response.json()["client"] is None

    async def test_blank_name_is_a_use_case_validation_error(self, client: AsyncClient, api_prefix, auth_headers):
        response = await client.post(f"{api_prefix}/clients", json={"client_name": "   "}, headers=auth_headers)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"][0]["field"] == "client_name"

    async def test_missing_name_is_rejected_by_schema(self, client: AsyncClient, api_prefix, auth_headers):
        response = await client.post(f"{api_prefix}/clients", json={}, headers=auth_headers)

        assert response.status_code == 422

    async def test_clients_are_private_to_their_owner(
        self, client: AsyncClient, api_prefix, auth_headers, register_user
    ):
        # Arrange
        acme = await client.post(f"{api_prefix}/clients", json={"client_name": "Acme Corp"}, headers=auth_headers)
        acme_id = acme.json()["id"]
        intruder = await register_user("intruder@example.com")

        # Act
        fetched = await client.get(f"{api_prefix}/clients/{acme_id}", headers=intruder)
        deleted = await client.delete(f"{api_prefix}/clients/{acme_id}", headers=intruder)
        listed = await client.get(f"{api_prefix}/clients", headers=intruder)

        # Assert
        assert fetched.status_code == 404
        assert deleted.status_code == 404
        assert listed.json()["clients"] == []

    async def test_requires_token(self, client: AsyncClient, api_prefix):
        response = await client.get(f"{api_prefix}/clients")

        assert response.status_code == 401
