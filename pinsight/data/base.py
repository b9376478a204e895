"""Protocol definitions for data sources.

Each protocol defines the interface that concrete data source implementations must satisfy.
Geocode sources never raise on transport or upstream failures; they report
them through the returned result's status. Stat table sources raise, and the
caller decides how much of a multi-table fetch to keep.
"""

from typing import Any, Protocol, runtime_checkable

from pinsight.models.area import GeoPoint
from pinsight.models.resolution import GeocodeResult, SearchResult


@runtime_checkable
class GeocodeSource(Protocol):
    async def reverse_geocode(self, point: GeoPoint, radius_m: int) -> GeocodeResult:
        """Find address candidates within radius_m metres of a point."""
        ...

    async def search(self, query: str) -> SearchResult:
        """Free-text place search."""
        ...


@runtime_checkable
class StatTableSource(Protocol):
    async def fetch_table(self, table_id: str) -> dict[str, Any]:
        """Fetch the `Data` payload of a statistical table. Raises on failure."""
        ...
