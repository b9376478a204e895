"""Embedded Census 2020 resident demographics by planning area.

Used whenever the SingStat API is unreachable, incomplete, or silent on a
field. Values: population, median age, median monthly household income (SGD),
density (residents/km²), dwelling share (%), age band share (%).
"""

import logging

from pinsight.data.centroids import PLANNING_AREA_CENTROIDS
from pinsight.models.area import (
    AgeMix,
    DemographicRecord,
    DwellingMix,
    GeoPoint,
    PlanningArea,
)

logger = logging.getLogger(__name__)

REFERENCE_SOURCE_LABEL = "Census 2020 (embedded)"


def _rec(
    population: int,
    median_age: int,
    income: int,
    density: int,
    dwellings: tuple[int, int, int, int],
    ages: tuple[int, int, int],
) -> DemographicRecord:
    return DemographicRecord(
        population=population,
        median_age=median_age,
        median_household_income=income,
        density=density,
        dwellings=DwellingMix(*dwellings),
        age_groups=AgeMix(*ages),
    )


# dwellings: (hdb, condo, landed, other)   ages: (0-24, 25-64, 65+)
PLANNING_AREA_DATA: dict[str, DemographicRecord] = {
    "ANG MO KIO": _rec(177_400, 44, 9_020, 19_700, (84, 12, 1, 3), (22, 57, 21)),
    "BEDOK": _rec(278_100, 44, 9_160, 16_600, (85, 11, 2, 2), (21, 57, 22)),
    "BISHAN": _rec(90_700, 39, 12_590, 11_300, (63, 35, 1, 1), (25, 59, 16)),
    "BOON LAY": _rec(70_900, 36, 8_320, 7_100, (92, 6, 1, 1), (29, 59, 12)),
    "BUKIT BATOK": _rec(139_800, 41, 9_880, 11_100, (83, 14, 2, 1), (23, 59, 18)),
    "BUKIT MERAH": _rec(144_300, 45, 9_580, 18_900, (81, 15, 1, 3), (19, 57, 24)),
    "BUKIT PANJANG": _rec(134_500, 37, 10_350, 7_900, (76, 19, 4, 1), (27, 60, 13)),
    "BUKIT TIMAH": _rec(83_100, 41, 18_200, 4_000, (10, 48, 40, 2), (24, 60, 16)),
    "CENTRAL WATER CATCHMENT": _rec(500, 38, 11_000, 10, (0, 5, 90, 5), (25, 65, 10)),
    "CHANGI": _rec(8_300, 36, 10_100, 400, (2, 10, 85, 3), (27, 62, 11)),
    "CHOA CHU KANG": _rec(184_200, 37, 10_050, 9_300, (79, 18, 2, 1), (27, 60, 13)),
    "CLEMENTI": _rec(79_900, 39, 11_120, 9_700, (71, 26, 2, 1), (24, 59, 17)),
    "DOWNTOWN CORE": _rec(7_200, 36, 15_200, 3_200, (0, 89, 1, 10), (22, 72, 6)),
    "GEYLANG": _rec(92_000, 42, 8_050, 17_500, (46, 32, 8, 14), (20, 62, 18)),
    "HOUGANG": _rec(222_900, 41, 9_550, 9_700, (84, 14, 1, 1), (24, 57, 19)),
    "JURONG EAST": _rec(95_700, 38, 10_350, 8_100, (72, 24, 2, 2), (25, 60, 15)),
    "JURONG WEST": _rec(262_400, 37, 9_200, 9_100, (87, 11, 1, 1), (27, 60, 13)),
    "KALLANG": _rec(101_800, 40, 10_900, 11_200, (59, 36, 2, 3), (23, 60, 17)),
    "LIM CHU KANG": _rec(2_100, 35, 8_500, 50, (5, 5, 85, 5), (28, 63, 9)),
    "MANDAI": _rec(4_900, 38, 9_100, 200, (15, 10, 72, 3), (26, 62, 12)),
    "MARINE PARADE": _rec(28_900, 45, 12_400, 13_600, (53, 42, 3, 2), (20, 57, 23)),
    "MUSEUM": _rec(6_800, 40, 14_500, 7_600, (0, 82, 5, 13), (20, 66, 14)),
    "NEWTON": _rec(16_200, 43, 17_800, 8_400, (0, 72, 26, 2), (20, 60, 20)),
    "NOVENA": _rec(45_900, 39, 14_100, 12_800, (16, 73, 9, 2), (23, 62, 15)),
    "ORCHARD": _rec(9_000, 39, 13_800, 6_100, (0, 75, 10, 15), (20, 65, 15)),
    "OUTRAM": _rec(22_500, 47, 8_900, 15_300, (72, 20, 0, 8), (17, 57, 26)),
    "PASIR RIS": _rec(133_700, 38, 10_200, 7_200, (81, 16, 2, 1), (26, 59, 15)),
    "PIONEER": _rec(18_800, 35, 8_700, 1_200, (78, 10, 10, 2), (28, 63, 9)),
    "PUNGGOL": _rec(155_700, 31, 11_700, 8_500, (79, 20, 0, 1), (38, 57, 5)),
    "QUEENSTOWN": _rec(104_300, 42, 11_300, 13_500, (64, 33, 1, 2), (22, 59, 19)),
    "RIVER VALLEY": _rec(22_600, 39, 16_400, 9_800, (0, 84, 12, 4), (22, 66, 12)),
    "ROCHOR": _rec(14_300, 43, 9_200, 18_100, (54, 36, 0, 10), (18, 62, 20)),
    "SEMBAWANG": _rec(97_700, 35, 9_800, 4_400, (83, 14, 2, 1), (30, 59, 11)),
    "SENGKANG": _rec(235_900, 33, 11_200, 12_200, (81, 18, 0, 1), (35, 59, 6)),
    "SERANGOON": _rec(103_300, 40, 11_100, 10_900, (62, 28, 8, 2), (23, 59, 18)),
    "SINGAPORE RIVER": _rec(6_400, 38, 14_800, 4_800, (0, 88, 2, 10), (21, 70, 9)),
    "STRAITS VIEW": _rec(900, 40, 13_000, 300, (0, 60, 35, 5), (22, 65, 13)),
    "TAMPINES": _rec(266_600, 39, 10_250, 11_300, (84, 14, 1, 1), (25, 58, 17)),
    "TANGLIN": _rec(27_600, 44, 19_500, 4_800, (0, 55, 43, 2), (21, 58, 21)),
    "TOA PAYOH": _rec(108_700, 46, 9_700, 20_300, (83, 15, 0, 2), (19, 55, 26)),
    "WESTERN ISLANDS": _rec(12_900, 31, 7_500, 500, (85, 5, 5, 5), (30, 66, 4)),
    "WESTERN WATER CATCHMENT": _rec(1_100, 35, 9_000, 30, (10, 5, 80, 5), (27, 65, 8)),
    "WOODLANDS": _rec(258_700, 37, 9_350, 9_200, (91, 7, 1, 1), (28, 59, 13)),
    "YISHUN": _rec(222_300, 39, 9_050, 9_900, (88, 10, 1, 1), (25, 58, 17)),
}


def _planning_areas(data: dict[str, DemographicRecord]) -> dict[str, PlanningArea]:
    return {
        name: PlanningArea(
            name=name,
            centroid=GeoPoint(*PLANNING_AREA_CENTROIDS[name]),
            population=record.population,
            density=record.density,
        )
        for name, record in data.items()
        if name in PLANNING_AREA_CENTROIDS
    }


PLANNING_AREAS: dict[str, PlanningArea] = _planning_areas(PLANNING_AREA_DATA)


def _normalize(name: str | None) -> str:
    return (name or "").upper().strip()


class ReferenceStore:
    """Lookup over the embedded table, plus area names learned from live data.

    Name matching is intentionally permissive so that OneMap naming variance
    ("Toa Payoh Central" vs "TOA PAYOH") still lands on a known area. An input
    that is a substring of two areas resolves to whichever comes first in the
    table; that imprecision is accepted.
    """

    def __init__(self, data: dict[str, DemographicRecord] | None = None):
        if data is None:
            self._data = PLANNING_AREA_DATA
            self._areas = PLANNING_AREAS
        else:
            self._data = data
            self._areas = _planning_areas(data)
        self._learned: list[str] = []

    def lookup(self, area: str | None) -> DemographicRecord | None:
        return self._data.get(_normalize(area))

    def list_all_area_names(self) -> list[str]:
        """Embedded area names in table order, then any learned from a live fetch."""
        return list(self._data) + self._learned

    def learn_area_names(self, names) -> None:
        for name in names:
            key = _normalize(name)
            if key and key not in self._data and key not in self._learned:
                self._learned.append(key)
                logger.debug("Learned planning area from live data: %s", key)

    def fuzzy_match(self, raw: str | None) -> str | None:
        upper = _normalize(raw)
        if not upper:
            return None
        known = self.list_all_area_names()
        if upper in known:
            return upper
        for area in known:
            if upper in area or area in upper:
                return area
        return None

    def land_area_km2(self, area: str) -> float | None:
        planning_area = self._areas.get(_normalize(area))
        return planning_area.land_area_km2 if planning_area else None
