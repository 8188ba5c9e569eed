from __future__ import annotations

from decimal import Decimal

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agro.models import City, Farm, FarmHarvest, FarmHarvestCrop, Harvest, Producer
from agro.models.enums import BrazilianState, CropType


async def _seed(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with session_factory.begin() as session:
        producer = Producer(document="52998224725", name="Maria")
        harvest = Harvest(year="2024", description="Safra 2024/2025")
        session.add_all([producer, harvest])
        await session.flush()

        farms = [
            Farm(
                name="Fazenda A",
                city="Sorriso",
                state=BrazilianState.MT,
                total_area=Decimal("100.00"),
                arable_area=Decimal("60.00"),
                vegetation_area=Decimal("30.00"),
                producer_id=producer.id,
            ),
            Farm(
                name="Fazenda B",
                city="Sinop",
                state=BrazilianState.MT,
                total_area=Decimal("50.50"),
                arable_area=Decimal("20.25"),
                vegetation_area=Decimal("10.00"),
                producer_id=producer.id,
            ),
            Farm(
                name="Fazenda C",
                city="Toledo",
                state=BrazilianState.PR,
                total_area=Decimal("10.00"),
                arable_area=Decimal("5.00"),
                vegetation_area=Decimal("5.00"),
                producer_id=producer.id,
            ),
        ]
        session.add_all(farms)
        await session.flush()

        farm_harvests = [FarmHarvest(farm_id=farm.id, harvest_id=harvest.id) for farm in farms[:2]]
        session.add_all(farm_harvests)
        await session.flush()
        session.add_all(
            [
                FarmHarvestCrop(farm_harvest_id=farm_harvests[0].id, crop_type=CropType.soy),
                FarmHarvestCrop(farm_harvest_id=farm_harvests[0].id, crop_type=CropType.corn),
                FarmHarvestCrop(farm_harvest_id=farm_harvests[1].id, crop_type=CropType.soy),
            ]
        )
        session.add_all(
            [
                City(name="Sorriso", state=BrazilianState.MT, ibge_code="5107925"),
                City(name="Sinop", state=BrazilianState.MT, ibge_code="5107909"),
                City(name="Toledo", state=BrazilianState.PR, ibge_code="4127700"),
            ]
        )


async def test_dashboard_on_empty_store(db_client: AsyncClient) -> None:
    response = await db_client.get("/api/v1/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert body["total_producers"] == 0
    assert body["total_farms"] == 0
    assert Decimal(body["total_hectares"]) == 0
    assert body["by_state"] == []
    assert body["by_crop"] == []


async def test_dashboard_aggregates(
    db_client: AsyncClient,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    await _seed(session_factory)

    body = (await db_client.get("/api/v1/dashboard")).json()

    assert body["total_producers"] == 1
    assert body["total_farms"] == 3
    assert Decimal(body["total_hectares"]) == Decimal("160.50")
    assert body["by_state"] == [{"state": "MT", "farm_count": 2}, {"state": "PR", "farm_count": 1}]
    assert body["by_crop"] == [
        {"crop_type": "soy", "planting_count": 2},
        {"crop_type": "corn", "planting_count": 1},
    ]
    land_use = {key: Decimal(value) for key, value in body["land_use"].items()}
    assert land_use == {
        "arable_area": Decimal("85.25"),
        "vegetation_area": Decimal("45.00"),
        "unused_area": Decimal("30.25"),
    }


async def test_cities_filter_by_state_and_prefix(
    db_client: AsyncClient,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    await _seed(session_factory)

    mato_grosso = (await db_client.get("/api/v1/cities", params={"state": "MT"})).json()["items"]
    by_prefix = (await db_client.get("/api/v1/cities", params={"name": "Tol"})).json()["items"]

    assert [city["name"] for city in mato_grosso] == ["Sinop", "Sorriso"]
    assert [(city["name"], city["state"], city["ibge_code"]) for city in by_prefix] == [
        ("Toledo", "PR", "4127700")
    ]


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "agro-admin", "version": "0.1.0"}
