"""OneMap (Singapore Land Authority) reverse-geocode and search client.

Docs: https://www.onemap.gov.sg/apidocs/

/revgeocode requires a token; an expired or missing token is reported as a
failed lookup, never raised. /elastic/search is public.
"""

import logging
import math
from typing import Any

import httpx

from pinsight.config import settings
from pinsight.data.postal import NO_POSTAL_CODE, resolve_postal_prefix
from pinsight.models.area import GeoPoint
from pinsight.models.resolution import (
    AddressCandidate,
    FetchStatus,
    GeocodeResult,
    PlaceHit,
    SearchResult,
)

logger = logging.getLogger(__name__)

REVGEOCODE_PATH = "/api/public/revgeocode"
SEARCH_PATH = "/api/common/elastic/search"


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_candidate(info: dict) -> AddressCandidate:
    return AddressCandidate(
        planning_area=_clean(info.get("PLANNING_AREA")),
        postal_code=_clean(info.get("POSTALCODE")),
        building=_clean(info.get("BUILDINGNAME")),
        road=_clean(info.get("ROAD")),
    )


def _parse_hit(row: dict) -> PlaceHit | None:
    try:
        lat = float(row["LATITUDE"])
        lng = float(row["LONGITUDE"])
    except (KeyError, TypeError, ValueError):
        return None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return PlaceHit(
        point=GeoPoint(latitude=lat, longitude=lng),
        address=_clean(row.get("ADDRESS")),
        postal_code=_clean(row.get("POSTAL")),
    )


def area_from_candidates(candidates: list[AddressCandidate]) -> str | None:
    """Derive a planning area from reverse-geocode candidates.

    /revgeocode rarely carries PLANNING_AREA and often ranks results with a
    "NIL" postal code first, so every candidate is tried in order: an explicit
    area wins, otherwise a usable postal code goes through the prefix tables.
    """
    for candidate in candidates:
        if candidate.planning_area:
            return candidate.planning_area
        if candidate.postal_code and candidate.postal_code != NO_POSTAL_CODE:
            area = resolve_postal_prefix(candidate.postal_code)
            if area:
                return area
    return None


class OneMapClient:
    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token if token is not None else settings.onemap_token
        self.base_url = base_url or settings.onemap_base_url
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.http_timeout,
            transport=self._transport,
        )

    async def reverse_geocode(self, point: GeoPoint, radius_m: int = 300) -> GeocodeResult:
        """Reverse geocode a point within a buffer of radius_m metres."""
        if not self.token:
            logger.debug("OneMap token not configured, skipping reverse geocode")
            return GeocodeResult(status=FetchStatus.FAILED, error="OneMap token not configured")

        params = {
            "location": f"{point.latitude},{point.longitude}",
            "buffer": radius_m,
            "addressType": "All",
            "otherFeatures": "N",
        }
        try:
            async with self._client() as client:
                resp = await client.get(
                    REVGEOCODE_PATH,
                    params=params,
                    headers={"Authorization": self.token},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code in (401, 403):
                logger.warning("OneMap token rejected (expired?): %s", e.response.status_code)
            else:
                logger.warning("OneMap reverse geocode failed: %s", e)
            return GeocodeResult(status=FetchStatus.FAILED, error=str(e))
        except (httpx.RequestError, ValueError) as e:
            logger.warning("OneMap reverse geocode request error: %s", e)
            return GeocodeResult(status=FetchStatus.FAILED, error=str(e))

        if not isinstance(data, dict):
            return GeocodeResult(status=FetchStatus.EMPTY)

        infos = data.get("GeocodeInfo")
        if not infos and data.get("error"):
            # Some auth errors arrive as 200 with an error body
            logger.warning("OneMap reverse geocode returned error: %s", data.get("error"))
            return GeocodeResult(status=FetchStatus.FAILED, error=str(data.get("error")))

        if not isinstance(infos, list):
            return GeocodeResult(status=FetchStatus.EMPTY)
        candidates = [_parse_candidate(info) for info in infos if isinstance(info, dict)]
        if not candidates:
            return GeocodeResult(status=FetchStatus.EMPTY)
        return GeocodeResult(status=FetchStatus.SUCCESS, candidates=candidates)

    async def search(self, query: str) -> SearchResult:
        """Search OneMap for a place name, postal code or address."""
        params = {
            "searchVal": query,
            "returnGeom": "Y",
            "getAddrDetails": "Y",
            "pageNum": 1,
        }
        try:
            async with self._client() as client:
                resp = await client.get(SEARCH_PATH, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.warning("OneMap search failed for %r: %s", query, e)
            return SearchResult(status=FetchStatus.FAILED, error=str(e))
        except (httpx.RequestError, ValueError) as e:
            logger.warning("OneMap search request error for %r: %s", query, e)
            return SearchResult(status=FetchStatus.FAILED, error=str(e))

        rows = data.get("results") if isinstance(data, dict) else None
        if not isinstance(rows, list):
            return SearchResult(status=FetchStatus.EMPTY)
        hits = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            hit = _parse_hit(row)
            if hit is not None:
                hits.append(hit)
        if not hits:
            return SearchResult(status=FetchStatus.EMPTY)
        return SearchResult(status=FetchStatus.SUCCESS, hits=hits)
