"""Planning-area reference and demographic data types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class DwellingMix:
    """Percentage share of resident households by dwelling type."""

    hdb: int
    condo: int
    landed: int
    other: int

    def as_dict(self) -> dict[str, int]:
        return {"hdb": self.hdb, "condo": self.condo, "landed": self.landed, "other": self.other}

    @property
    def total(self) -> int:
        return self.hdb + self.condo + self.landed + self.other


@dataclass(frozen=True)
class AgeMix:
    """Percentage share of residents: young 0-24, working 25-64, senior 65+."""

    young: int
    working: int
    senior: int

    def as_dict(self) -> dict[str, int]:
        return {"young": self.young, "working": self.working, "senior": self.senior}

    @property
    def total(self) -> int:
        return self.young + self.working + self.senior


@dataclass(frozen=True)
class DemographicRecord:
    population: int
    median_age: int
    median_household_income: int  # SGD / month
    density: int  # residents per km²
    dwellings: DwellingMix
    age_groups: AgeMix


@dataclass(frozen=True)
class PlanningArea:
    name: str  # canonical uppercase key, e.g. "TOA PAYOH"
    centroid: GeoPoint
    population: int = 0
    density: int = 0

    @property
    def land_area_km2(self) -> float | None:
        if self.density <= 0:
            return None
        return self.population / self.density


# Neutral values substituted when neither the live tables nor the reference
# table know a field for an area.
DEFAULT_MEDIAN_AGE = 40
DEFAULT_MEDIAN_HH_INCOME = 8_000
DEFAULT_DENSITY = 0
DEFAULT_DWELLINGS = DwellingMix(hdb=50, condo=30, landed=10, other=10)
DEFAULT_AGE_GROUPS = AgeMix(young=25, working=60, senior=15)
