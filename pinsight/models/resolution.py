"""Result types for remote lookups and the area resolution pipeline."""

from dataclasses import dataclass, field
from enum import Enum

from pinsight.models.area import DemographicRecord, GeoPoint


class FetchStatus(Enum):
    SUCCESS = "success"  # reachable, usable records returned
    EMPTY = "empty"  # reachable, nothing usable
    FAILED = "failed"  # transport, HTTP or auth failure

    @property
    def reachable(self) -> bool:
        return self is not FetchStatus.FAILED


class Provenance(Enum):
    REMOTE = "remote"
    OFFLINE_ESTIMATE = "offline-estimate"


class FailureKind(Enum):
    NO_AREA = "no_area"
    NO_SEARCH_RESULTS = "no_search_results"


@dataclass(frozen=True)
class AddressCandidate:
    planning_area: str | None = None
    postal_code: str | None = None
    building: str | None = None
    road: str | None = None


@dataclass(frozen=True)
class PlaceHit:
    point: GeoPoint
    address: str | None = None
    postal_code: str | None = None


@dataclass(frozen=True)
class GeocodeResult:
    status: FetchStatus
    candidates: list[AddressCandidate] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class SearchResult:
    status: FetchStatus
    hits: list[PlaceHit] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class Insight:
    icon: str
    text: str


@dataclass(frozen=True)
class ResolutionResult:
    point: GeoPoint
    resolved_area: str | None
    provenance: Provenance
    demographics: DemographicRecord | None
    data_source: str = ""
    insights: list[Insight] = field(default_factory=list)


@dataclass(frozen=True)
class ResolutionFailure:
    kind: FailureKind
    message: str
    query: str | None = None
