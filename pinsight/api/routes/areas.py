"""Planning area routes."""

from fastapi import APIRouter, Depends, HTTPException

from pinsight.api.deps import get_resolver
from pinsight.api.schemas import (
    AreaDetailResponse,
    AreaSummaryResponse,
    demographics_response,
    insights_response,
    point_response,
)
from pinsight.data.centroids import planning_area_centroid
from pinsight.data.resolver import AreaResolver
from pinsight.engine.insights import generate_insights

router = APIRouter(prefix="/api/v1/areas", tags=["areas"])


@router.get("", response_model=list[AreaSummaryResponse])
async def list_areas(resolver: AreaResolver = Depends(get_resolver)):
    """All known planning areas, embedded plus any learned from SingStat."""
    areas = []
    for name in resolver.reference.list_all_area_names():
        centroid = planning_area_centroid(name)
        areas.append(AreaSummaryResponse(
            name=name,
            centroid=point_response(centroid) if centroid else None,
        ))
    return areas


@router.get("/{name}", response_model=AreaDetailResponse)
async def get_area(name: str, resolver: AreaResolver = Depends(get_resolver)):
    """Demographics for a planning area by (fuzzy) name."""
    matched = resolver.match_area(name)
    if matched is None:
        raise HTTPException(status_code=404, detail=f"Unknown planning area: {name}")

    record, source = await resolver.demographics.get(matched)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No demographics for planning area: {matched}")

    return AreaDetailResponse(
        area=matched,
        data_source=source,
        demographics=demographics_response(record),
        insights=insights_response(generate_insights(record)),
    )
