"""Pydantic schemas for API response models."""

from pydantic import BaseModel, Field

from pinsight.engine.insights import (
    density_colour,
    density_label,
    dominant_dwelling,
    largest_age_band,
)
from pinsight.models.area import DemographicRecord, GeoPoint
from pinsight.models.resolution import Insight


class GeoPointResponse(BaseModel):
    latitude: float
    longitude: float


class DwellingResponse(BaseModel):
    hdb: int
    condo: int
    landed: int
    other: int


class AgeGroupsResponse(BaseModel):
    young: int = Field(..., description="% aged 0-24")
    working: int = Field(..., description="% aged 25-64")
    senior: int = Field(..., description="% aged 65+")


class DemographicsResponse(BaseModel):
    population: int
    median_age: int
    median_household_income: int = Field(..., description="SGD per month")
    density: int = Field(..., description="Residents per km²")
    density_label: str
    density_colour: str
    dominant_dwelling: str
    largest_age_band: str
    dwellings: DwellingResponse
    age_groups: AgeGroupsResponse


class InsightResponse(BaseModel):
    icon: str
    text: str


class ResolutionResponse(BaseModel):
    area: str
    provenance: str  # "remote" | "offline-estimate"
    estimated: bool  # True when the area came from the offline centroid fallback
    point: GeoPointResponse
    data_source: str
    demographics: DemographicsResponse
    insights: list[InsightResponse]


class AreaSummaryResponse(BaseModel):
    name: str
    centroid: GeoPointResponse | None = None


class AreaDetailResponse(BaseModel):
    area: str
    data_source: str
    demographics: DemographicsResponse
    insights: list[InsightResponse]


def point_response(point: GeoPoint) -> GeoPointResponse:
    return GeoPointResponse(latitude=point.latitude, longitude=point.longitude)


def demographics_response(record: DemographicRecord) -> DemographicsResponse:
    return DemographicsResponse(
        population=record.population,
        median_age=record.median_age,
        median_household_income=record.median_household_income,
        density=record.density,
        density_label=density_label(record.density),
        density_colour=density_colour(record.density),
        dominant_dwelling=dominant_dwelling(record.dwellings),
        largest_age_band=largest_age_band(record.age_groups),
        dwellings=DwellingResponse(**record.dwellings.as_dict()),
        age_groups=AgeGroupsResponse(**record.age_groups.as_dict()),
    )


def insights_response(insights: list[Insight]) -> list[InsightResponse]:
    return [InsightResponse(icon=i.icon, text=i.text) for i in insights]
