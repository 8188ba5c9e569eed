from __future__ import annotations

from uuid import uuid4

import pytest
from httpx import AsyncClient

from agro.services.producer_service import ProducerService

CPF = "529.982.247-25"
CNPJ = "11.222.333/0001-81"


async def _create_producer(client: AsyncClient, document: str = CPF, name: str = "Maria Souza") -> dict:
    response = await client.post("/api/v1/producers", json={"document": document, "name": name})
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_individual_and_company_producers(db_client: AsyncClient) -> None:
    individual = await _create_producer(db_client)
    company = await _create_producer(db_client, CNPJ, "Agro Cerrado Ltda")

    assert individual["document"] == "52998224725"
    assert individual["kind"] == "individual"
    assert individual["farm_count"] == 0
    assert company["document"] == "11222333000181"
    assert company["kind"] == "company"


async def test_duplicate_document_conflicts(db_client: AsyncClient) -> None:
    await _create_producer(db_client)

    response = await db_client.post("/api/v1/producers", json={"document": "52998224725", "name": "Other"})

    assert response.status_code == 409


async def test_invalid_document_is_rejected(db_client: AsyncClient) -> None:
    response = await db_client.post("/api/v1/producers", json={"document": "123.456.789-00", "name": "X"})

    assert response.status_code == 422


async def test_list_and_get_producers(db_client: AsyncClient) -> None:
    await _create_producer(db_client, CNPJ, "Beta Agro")
    created = await _create_producer(db_client, CPF, "Alice")

    listing = await db_client.get("/api/v1/producers")
    assert listing.status_code == 200
    body = listing.json()
    assert body["total"] == 2
    assert [item["name"] for item in body["items"]] == ["Alice", "Beta Agro"]

    detail = await db_client.get(f"/api/v1/producers/{created['id']}")
    assert detail.status_code == 200
    assert detail.json()["document"] == "52998224725"


@pytest.mark.usefixtures("reference_cities")
async def test_delete_producer_removes_its_farms(db_client: AsyncClient) -> None:
    producer = await _create_producer(db_client)
    farm = await db_client.post(
        "/api/v1/farms",
        json={
            "name": "Fazenda Boa Vista",
            "city": "Sorriso",
            "state": "MT",
            "total_area": "100.00",
            "arable_area": "60.00",
            "vegetation_area": "30.00",
            "producer_id": producer["id"],
        },
    )
    assert farm.status_code == 201

    deleted = await db_client.delete(f"/api/v1/producers/{producer['id']}")
    assert deleted.status_code == 204

    assert (await db_client.get(f"/api/v1/producers/{producer['id']}")).status_code == 404
    assert (await db_client.get(f"/api/v1/farms/{farm.json()['id']}")).status_code == 404


async def test_unknown_producer_is_not_found(db_client: AsyncClient) -> None:
    assert (await db_client.get(f"/api/v1/producers/{uuid4()}")).status_code == 404
    assert (await db_client.delete(f"/api/v1/producers/{uuid4()}")).status_code == 404


@pytest.mark.asyncio
async def test_unexpected_service_failure_maps_to_500(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_list(self: ProducerService, *, limit: int, offset: int) -> object:
        raise RuntimeError("boom")

    monkeypatch.setattr(ProducerService, "list_producers", fake_list)

    response = await client.get("/api/v1/producers")

    assert response.status_code == 500
    assert response.json()["detail"] == "Unexpected producer service failure"
