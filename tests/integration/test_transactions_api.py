"""Integration tests for the transaction endpoints."""

from decimal import Decimal
from uuid import uuid4

import pytest

SAMPLE_STATEMENT = (
    "05/09/2025 - Ifood Delivery - R$ 45,90\n"
    "Garbage line\n"
    "06/09/2025 - Uber Viagem - R$ 23,00"
)


def _payload(**overrides) -> dict:
    payload = {
        "title": "Mercado Extra",
        "amount": "123.45",
        "type": "EXPENSE",
        "category": "Supermercado",
        "date": "2025-09-05",
    }
    payload.update(overrides)
    return payload


async def _create(client, headers, **overrides) -> dict:
    response = await client.post("/transactions", json=_payload(**overrides), headers=headers)
    assert response.status_code == 201
    return response.json()


class TestAuthRequired:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Basic dXNlcjpwYXNz"},
            {"Authorization": "Bearer"},
            {"Authorization": "Bearer not-a-jwt"},
        ],
    )
    async def test_rejected_without_valid_token(self, client, auth_headers, headers):
        response = await client.post("/transactions", json=_payload(), headers=headers)

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error_code"] in {"AUTH_001", "AUTH_002"}

        listing = await client.get("/transactions", headers=auth_headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_import_rejected_without_token(self, client, auth_headers):
        response = await client.post(
            "/transactions/import", json={"text_content": SAMPLE_STATEMENT}
        )

        assert response.status_code == 401
        listing = await client.get("/transactions", headers=auth_headers)
        assert listing.json() == []


class TestCreateTransaction:
    @pytest.mark.asyncio
    async def test_create(self, client, auth_headers, test_user):
        data = await _create(client, auth_headers)

        assert data["title"] == "Mercado Extra"
        assert Decimal(data["amount"]) == Decimal("123.45")
        assert data["type"] == "EXPENSE"
        assert data["category"] == "Supermercado"
        assert data["date"].startswith("2025-09-05")
        assert data["user_id"] == str(test_user.id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["title", "amount", "type", "category", "date"])
    async def test_missing_field(self, client, auth_headers, missing):
        payload = _payload()
        del payload[missing]

        response = await client.post("/transactions", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    @pytest.mark.asyncio
    async def test_unknown_type(self, client, auth_headers):
        response = await client.post(
            "/transactions", json=_payload(type="TRANSFER"), headers=auth_headers
        )

        assert response.status_code == 400


class TestListTransactions:
    @pytest.mark.asyncio
    async def test_month_filter(self, client, auth_headers):
        for title, day in [
            ("august", "2025-08-31"),
            ("early", "2025-09-05"),
            ("late", "2025-09-30"),
            ("october", "2025-10-01"),
        ]:
            await _create(client, auth_headers, title=title, date=day)

        response = await client.get(
            "/transactions", params={"year": 2025, "month": 9}, headers=auth_headers
        )

        assert response.status_code == 200
        assert [txn["title"] for txn in response.json()] == ["late", "early"]

    @pytest.mark.asyncio
    async def test_no_filter_lists_all_newest_first(self, client, auth_headers):
        await _create(client, auth_headers, title="old", date="2025-01-10")
        await _create(client, auth_headers, title="new", date="2025-06-10")

        response = await client.get("/transactions", headers=auth_headers)

        assert [txn["title"] for txn in response.json()] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_year_alone_is_ignored(self, client, auth_headers):
        await _create(client, auth_headers, date="2024-03-01")

        response = await client.get(
            "/transactions", params={"year": 2025}, headers=auth_headers
        )

        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_month_out_of_range(self, client, auth_headers):
        response = await client.get(
            "/transactions", params={"year": 2025, "month": 13}, headers=auth_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_only_own_transactions(self, client, auth_headers, other_auth_headers):
        await _create(client, auth_headers, title="mine")
        await _create(client, other_auth_headers, title="theirs")

        response = await client.get("/transactions", headers=auth_headers)

        assert [txn["title"] for txn in response.json()] == ["mine"]


class TestImport:
    @pytest.mark.asyncio
    async def test_import_sample(self, client, auth_headers):
        response = await client.post(
            "/transactions/import",
            json={"text_content": SAMPLE_STATEMENT},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json() == {
            "message": "2 transactions imported successfully.",
            "created_count": 2,
        }

        listing = (await client.get("/transactions", headers=auth_headers)).json()
        by_title = {txn["title"]: txn for txn in listing}
        assert set(by_title) == {"Ifood Delivery", "Uber Viagem"}
        assert by_title["Ifood Delivery"]["category"] == "Alimentação"
        assert by_title["Uber Viagem"]["category"] == "Transporte"
        assert all(txn["type"] == "EXPENSE" for txn in listing)
        assert Decimal(by_title["Ifood Delivery"]["amount"]) == Decimal("45.90")

    @pytest.mark.asyncio
    async def test_import_camel_case_field(self, client, auth_headers):
        response = await client.post(
            "/transactions/import",
            json={"textContent": "01/10/2025 - Netflix - R$ 55,90"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["created_count"] == 1

    @pytest.mark.asyncio
    async def test_import_nothing_parsable(self, client, auth_headers):
        response = await client.post(
            "/transactions/import",
            json={"text_content": "no statement lines here"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["created_count"] == 0

    @pytest.mark.asyncio
    async def test_import_skips_values_the_table_cannot_hold(self, client, auth_headers):
        text = (
            "05/09/2025 - Ifood - R$ 45,999\n"
            "05/09/2025 - Aluguel - R$ 1.000.000.000.000,00\n"
            f"05/09/2025 - {'x' * 300} - R$ 10,00\n"
            "06/09/2025 - Spotify - R$ 21,90"
        )

        response = await client.post(
            "/transactions/import", json={"text_content": text}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["created_count"] == 1
        listing = (await client.get("/transactions", headers=auth_headers)).json()
        assert [txn["title"] for txn in listing] == ["Spotify"]
        assert Decimal(listing[0]["amount"]) == Decimal("21.90")

    @pytest.mark.asyncio
    async def test_import_requires_text(self, client, auth_headers):
        response = await client.post("/transactions/import", json={}, headers=auth_headers)

        assert response.status_code == 400


class TestUpdateTransaction:
    @pytest.mark.asyncio
    async def test_partial_update(self, client, auth_headers):
        created = await _create(client, auth_headers)

        response = await client.put(
            f"/transactions/{created['id']}",
            json={"title": "Mercado Pão de Açúcar", "amount": "99.90"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Mercado Pão de Açúcar"
        assert Decimal(data["amount"]) == Decimal("99.90")
        assert data["category"] == "Supermercado"
        assert data["type"] == "EXPENSE"
        assert data["date"].startswith("2025-09-05")

    @pytest.mark.asyncio
    async def test_update_missing(self, client, auth_headers):
        response = await client.put(
            f"/transactions/{uuid4()}", json={"title": "x"}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "TXN_001"

    @pytest.mark.asyncio
    async def test_update_other_users_transaction(self, client, auth_headers, other_auth_headers):
        created = await _create(client, auth_headers)

        response = await client.put(
            f"/transactions/{created['id']}", json={"title": "hijack"}, headers=other_auth_headers
        )

        assert response.status_code == 404
        listing = (await client.get("/transactions", headers=auth_headers)).json()
        assert listing[0]["title"] == "Mercado Extra"


class TestDeleteTransaction:
    @pytest.mark.asyncio
    async def test_delete(self, client, auth_headers):
        created = await _create(client, auth_headers)

        response = await client.delete(f"/transactions/{created['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert response.content == b""
        listing = await client.get("/transactions", headers=auth_headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_delete_twice(self, client, auth_headers):
        created = await _create(client, auth_headers)
        await client.delete(f"/transactions/{created['id']}", headers=auth_headers)

        response = await client.delete(f"/transactions/{created['id']}", headers=auth_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_other_users_transaction(self, client, auth_headers, other_auth_headers):
        created = await _create(client, auth_headers)

        response = await client.delete(
            f"/transactions/{created['id']}", headers=other_auth_headers
        )

        assert response.status_code == 404
        listing = await client.get("/transactions", headers=auth_headers)
        assert len(listing.json()) == 1
