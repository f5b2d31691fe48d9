import logging
from typing import Any, List, Optional

import httpx

from config import settings
from models.schemas import OfficeRecord, OfficialRecord

logger = logging.getLogger(__name__)

REPRESENTATIVES_PATH = "/representatives"
USER_AGENT = "BallotCompass/1.0"


def parse_representatives(data: dict[str, Any]) -> List[OfficeRecord]:
    """Join offices with the officials they reference by index."""
    officials = data.get("officials", []) or []
    offices = []
    for office in data.get("offices", []) or []:
        holders = []
        for index in office.get("officialIndices", []) or []:
            if not isinstance(index, int) or not 0 <= index < len(officials):
                logger.warning(f"Office '{office.get('name')}' references unknown official index {index}")
                continue
            official = officials[index]
            holders.append(
                OfficialRecord(
                    name=official.get("name", ""),
                    party=official.get("party"),
                    urls=official.get("urls", []) or [],
                    phones=official.get("phones", []) or [],
                )
            )
        offices.append(
            OfficeRecord(
                name=office.get("name", ""),
                division_id=office.get("divisionId"),
                officials=holders,
            )
        )
    return offices


class CivicLookupService:
    """Fetches elected representatives for an address from a civic-information API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self.api_base = (api_base or settings.civic_api_base).rstrip("/")
        self.timeout = timeout or settings.civic_timeout_seconds
        self._transport = transport

    def _get_api_key(self) -> str:
        api_key = self._api_key or settings.civic_api_key
        if not api_key:
            raise ValueError("CIVIC_API_KEY is required for representative lookup")
        return api_key

    async def lookup_representatives(self, address: str) -> List[OfficeRecord]:
        params = {"address": address, "key": self._get_api_key()}
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(
                    f"{self.api_base}{REPRESENTATIVES_PATH}",
                    params=params,
                    headers=headers,
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"Civic API error for '{address}': {e}")
                raise

        offices = parse_representatives(response.json())
        logger.info(f"Found {len(offices)} offices for '{address}'")
        return offices
