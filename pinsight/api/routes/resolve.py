"""Resolution routes: the primary API entry point for the map UI."""

from fastapi import APIRouter, Depends, HTTPException, Query

from pinsight.api.deps import get_resolver
from pinsight.api.schemas import (
    ResolutionResponse,
    demographics_response,
    insights_response,
    point_response,
)
from pinsight.data.resolver import AreaResolver
from pinsight.models.area import GeoPoint
from pinsight.models.resolution import Provenance, ResolutionFailure, ResolutionResult

router = APIRouter(prefix="/api/v1/resolve", tags=["resolve"])


def _result_to_response(result: ResolutionResult | ResolutionFailure) -> ResolutionResponse:
    if isinstance(result, ResolutionFailure):
        raise HTTPException(status_code=404, detail=result.message)
    return ResolutionResponse(
        area=result.resolved_area,
        provenance=result.provenance.value,
        estimated=result.provenance is Provenance.OFFLINE_ESTIMATE,
        point=point_response(result.point),
        data_source=result.data_source,
        demographics=demographics_response(result.demographics),
        insights=insights_response(result.insights),
    )


@router.get("/point", response_model=ResolutionResponse)
async def resolve_point(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    resolver: AreaResolver = Depends(get_resolver),
):
    """Resolve a dropped pin to its planning area and demographics."""
    result = await resolver.resolve_point(GeoPoint(latitude=lat, longitude=lng))
    return _result_to_response(result)


@router.get("/search", response_model=ResolutionResponse)
async def resolve_search(
    q: str = Query(..., min_length=1),
    resolver: AreaResolver = Depends(get_resolver),
):
    """Search for a place, then resolve it like a dropped pin."""
    result = await resolver.resolve_query(q)
    return _result_to_response(result)
