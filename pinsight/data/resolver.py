"""Area resolver: turns a map pin or a search query into a planning area + demographics.

Flow (pin):    OneMap reverse geocode 300 m → 500 m → nearest centroid → demographics
Flow (search): OneMap search → local area-name match → pin flow on the found point

Remote failures never propagate: each tier reports a FetchStatus and the
resolver moves on to the next one. The only failures returned to the caller
are "no area for this point" and "no results for this query".
"""

import logging

from pinsight.config import settings
from pinsight.data.base import GeocodeSource
from pinsight.data.centroids import nearest_planning_area, planning_area_centroid
from pinsight.data.onemap import OneMapClient, area_from_candidates
from pinsight.data.reference import ReferenceStore
from pinsight.data.singstat import DemographicsService, LiveDemographicsCache
from pinsight.engine.insights import generate_insights
from pinsight.models.area import GeoPoint
from pinsight.models.resolution import (
    FailureKind,
    GeocodeResult,
    Provenance,
    ResolutionFailure,
    ResolutionResult,
)

logger = logging.getLogger(__name__)

NO_AREA_MESSAGE = "Could not determine a planning area for this location."


def no_search_results_message(query: str) -> str:
    return (
        f'No results found for "{query}". '
        'Try a planning area name like "Tampines" or "Clementi".'
    )


class AreaResolver:
    def __init__(
        self,
        geocoder: GeocodeSource | None = None,
        demographics: DemographicsService | None = None,
        radius_m: int | None = None,
        wider_radius_m: int | None = None,
    ):
        self.geocoder = geocoder or OneMapClient()
        if demographics is None:
            reference = ReferenceStore()
            demographics = DemographicsService(LiveDemographicsCache(reference=reference), reference)
        self.demographics = demographics
        self.reference = demographics.reference
        self.radius_m = radius_m or settings.reverse_geocode_radius_m
        self.wider_radius_m = wider_radius_m or settings.reverse_geocode_wider_radius_m

    def match_area(self, raw_area: str | None) -> str | None:
        """Exact lookup against known areas, then the permissive fuzzy match."""
        if not raw_area:
            return None
        if self.reference.lookup(raw_area) is not None:
            return raw_area.upper().strip()
        return self.reference.fuzzy_match(raw_area)

    def _area_from_geocode(self, result: GeocodeResult) -> str | None:
        return self.match_area(area_from_candidates(result.candidates))

    async def resolve_point(self, point: GeoPoint) -> ResolutionResult | ResolutionFailure:
        """Resolve a coordinate to a planning area and its demographics."""
        provenance = Provenance.OFFLINE_ESTIMATE
        resolved: str | None = None

        # Step 1: narrow reverse geocode
        first = await self.geocoder.reverse_geocode(point, self.radius_m)
        if first.status.reachable:
            # OneMap answered; it counts as the live source even if nothing matched
            provenance = Provenance.REMOTE
            resolved = self._area_from_geocode(first)

            # Step 2: near area boundaries the narrow buffer often returns nothing
            if resolved is None:
                wider = await self.geocoder.reverse_geocode(point, self.wider_radius_m)
                resolved = self._area_from_geocode(wider)
        else:
            logger.info(
                "Reverse geocode unavailable for (%s, %s), using centroid estimate",
                point.latitude, point.longitude,
            )

        # Step 3: nearest centroid always yields an area
        if resolved is None:
            resolved = nearest_planning_area(point)

        # Step 4: demographics (live SingStat, else embedded census)
        record, source = await self.demographics.get(resolved)
        if record is None:
            logger.warning("No demographics for resolved area %s", resolved)
            return ResolutionFailure(kind=FailureKind.NO_AREA, message=NO_AREA_MESSAGE)

        logger.info("Resolved (%s, %s) → %s [%s]", point.latitude, point.longitude, resolved, provenance.value)
        return ResolutionResult(
            point=point,
            resolved_area=resolved,
            provenance=provenance,
            demographics=record,
            data_source=source,
            insights=generate_insights(record),
        )

    async def locate_query(self, query: str) -> GeoPoint | None:
        """Find a point for a free-text query: OneMap search, then local area-name match."""
        search = await self.geocoder.search(query)
        if search.hits:
            return search.hits[0].point

        matched = self.reference.fuzzy_match(query)
        if matched is None:
            return None
        return planning_area_centroid(matched)

    async def resolve_query(self, query: str) -> ResolutionResult | ResolutionFailure:
        """Find the place, then resolve it exactly like a dropped pin."""
        query = (query or "").strip()
        point = await self.locate_query(query) if query else None
        if point is None:
            logger.info("No location found for query %r", query)
            return ResolutionFailure(
                kind=FailureKind.NO_SEARCH_RESULTS,
                message=no_search_results_message(query),
                query=query,
            )
        return await self.resolve_point(point)
