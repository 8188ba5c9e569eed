"""IBGE municipality catalog client: one GET per federative unit, no retries.

Endpoint: ``{base_url}/estados/{UF}/municipios`` returns a JSON list of
municipalities; only ``id`` and ``nome`` are consumed here.  Rate limiting and
persistence belong to the caller.
"""

from __future__ import annotations

from types import TracebackType

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from agro.config import get_settings
from agro.errors import CatalogFetchError

logger = structlog.get_logger("agro.catalog")


class CatalogMunicipality(BaseModel):
	model_config = ConfigDict(populate_by_name=True, extra="ignore")

	external_id: int = Field(alias="id")
	name: str = Field(alias="nome", min_length=1)


_MUNICIPALITY_LIST = TypeAdapter(list[CatalogMunicipality])


class CatalogClient:
	def __init__(
		self,
		base_url: str | None = None,
		*,
		timeout_seconds: float | None = None,
		client: httpx.AsyncClient | None = None,
	) -> None:
		settings = get_settings()
		self.base_url = (base_url or settings.ibge_api_base_url).rstrip("/")
		timeout = timeout_seconds if timeout_seconds is not None else settings.ibge_timeout_seconds
		self._owns_client = client is None
		self._client = client or httpx.AsyncClient(timeout=timeout)

	async def fetch_by_region(self, region_code: str) -> list[CatalogMunicipality]:
		"""Fetch every municipality of ``region_code``.

		Raises ``CatalogFetchError`` on transport errors, non-2xx responses, and
		payloads that are not a list of ``{id, nome}`` objects.
		"""
		url = f"{self.base_url}/estados/{region_code}/municipios"
		logger.debug("catalog_fetch", region=region_code, url=url)
		try:
			response = await self._client.get(url)
			response.raise_for_status()
			municipalities = _MUNICIPALITY_LIST.validate_python(response.json())
		except (httpx.HTTPError, ValueError, ValidationError) as exc:
			logger.error("catalog_fetch_failed", region=region_code, url=url, error=str(exc))
			raise CatalogFetchError(region_code, exc) from exc

		logger.debug("catalog_fetched", region=region_code, city_count=len(municipalities))
		return municipalities

	async def aclose(self) -> None:
		if self._owns_client:
			await self._client.aclose()

	async def __aenter__(self) -> CatalogClient:
		return self

	async def __aexit__(
		self,
		exc_type: type[BaseException] | None,
		exc: BaseException | None,
		tb: TracebackType | None,
	) -> None:
		await self.aclose()
