"""SingStat Table Builder client for planning-area demographics.

API docs: https://tablebuilder.singstat.gov.sg/view-api/for-developers
Census:   https://www.singstat.gov.sg/publications/reference/cop2020

The four census tables are fetched together; if any one of them fails the
whole live snapshot is discarded and callers fall back to the embedded
reference table. A successful snapshot is kept for the life of the process.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from pinsight.config import settings
from pinsight.data.base import StatTableSource
from pinsight.data.reference import REFERENCE_SOURCE_LABEL, ReferenceStore
from pinsight.engine.stats import (
    AGE_BRACKETS,
    INCOME_BRACKETS,
    SENIOR_KEYS,
    WORKING_KEYS,
    YOUNG_KEYS,
    grouped_median,
    parse_count,
    percent_share,
    round_half_up,
)
from pinsight.models.area import (
    DEFAULT_AGE_GROUPS,
    DEFAULT_DENSITY,
    DEFAULT_DWELLINGS,
    DEFAULT_MEDIAN_AGE,
    DEFAULT_MEDIAN_HH_INCOME,
    AgeMix,
    DemographicRecord,
    DwellingMix,
)

logger = logging.getLogger(__name__)

# Census of Population 2020 planning-area tables.
# Update these when newer census / GHS tables are published.
SINGSTAT_TABLES = {
    "population": "17561",  # Resident Population by Planning Area, Ethnic Group and Sex
    "age": "17560",  # Resident Population by Planning Area, Age Group and Sex
    "dwelling": "17574",  # Resident Households by Planning Area and Type of Dwelling
    "income": "17779",  # Resident Households by Planning Area and Monthly HH Income
}

SUBZONE_TOTAL_SUFFIX = " - Total"


class SingStatClient:
    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.singstat_base_url
        self._transport = transport

    async def fetch_table(self, table_id: str) -> dict[str, Any]:
        """Fetch the `Data` object of a table. Raises on HTTP or payload errors."""
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.http_timeout,
            transport=self._transport,
        ) as client:
            resp = await client.get(f"/table/tabledata/{table_id}")
            resp.raise_for_status()
            data = resp.json()

        payload = data.get("Data") if isinstance(data, dict) else None
        if not isinstance(payload, dict):
            raise ValueError(f"SingStat table {table_id} returned no Data")
        return payload


# ── Table parsers ──────────────────────────────────────────────────


def _columns(node: Any) -> list[dict]:
    cols = node.get("columns") if isinstance(node, dict) else None
    if not isinstance(cols, list):
        return []
    return [c for c in cols if isinstance(c, dict)]


def _find_column(columns: list[dict], key: str) -> dict | None:
    for col in columns:
        if col.get("key") == key:
            return col
    return None


def _planning_area_rows(payload: dict, has_subzones: bool) -> list[tuple[str, list[dict]]]:
    """(AREA, columns) for each planning-area row, skipping the grand total.

    Tables broken down by subzone carry one "<Area> - Total" row per area.
    """
    rows = payload.get("row") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        return []
    out = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        text = str(row.get("rowText") or "").strip()
        if not text or text == "Total":
            continue
        if has_subzones:
            if not text.endswith(SUBZONE_TOTAL_SUFFIX):
                continue
            text = text[: -len(SUBZONE_TOTAL_SUFFIX)]
        out.append((text.upper().strip(), _columns(row)))
    return out


def build_population_map(payload: dict) -> dict[str, int]:
    population = {}
    for area, columns in _planning_area_rows(payload, has_subzones=True):
        group = _find_column(columns, "Total")
        total = _find_column(_columns(group), "Total")
        if total is not None:
            population[area] = parse_count(total.get("value"))
    return population


@dataclass(frozen=True)
class AgeProfile:
    age_groups: AgeMix
    median_age: int


def build_age_map(payload: dict) -> dict[str, AgeProfile]:
    ages = {}
    for area, columns in _planning_area_rows(payload, has_subzones=True):
        group = _find_column(columns, "Total")
        if group is None:
            continue
        counts: dict[str, int] = {}
        total = 0
        for col in _columns(group):
            if col.get("key") == "Total":
                total = parse_count(col.get("value"))
            else:
                counts[str(col.get("key"))] = parse_count(col.get("value"))
        if total <= 0:
            continue

        def band(keys: list[str]) -> int:
            return percent_share(sum(counts.get(k, 0) for k in keys), total)

        median = grouped_median(counts, AGE_BRACKETS, total)
        ages[area] = AgeProfile(
            age_groups=AgeMix(young=band(YOUNG_KEYS), working=band(WORKING_KEYS), senior=band(SENIOR_KEYS)),
            median_age=median if median is not None else DEFAULT_MEDIAN_AGE,
        )
    return ages


def build_dwelling_map(payload: dict) -> dict[str, DwellingMix]:
    dwellings = {}
    for area, columns in _planning_area_rows(payload, has_subzones=False):
        total = hdb = condo = landed = other = 0
        for col in columns:
            key = col.get("key")
            if key == "Total":
                total = parse_count(col.get("value"))
            elif key == "HDB Dwellings":
                sub = next(
                    (c for c in _columns(col) if str(c.get("key", "")).startswith("Total")),
                    None,
                )
                hdb = parse_count(sub.get("value")) if sub else 0
            elif key == "Condominiums and Other Apartments":
                condo = parse_count(col.get("value"))
            elif key == "Landed Properties":
                landed = parse_count(col.get("value"))
            elif key == "Others":
                other = parse_count(col.get("value"))
        if total > 0:
            dwellings[area] = DwellingMix(
                hdb=percent_share(hdb, total),
                condo=percent_share(condo, total),
                landed=percent_share(landed, total),
                other=percent_share(other, total),
            )
    return dwellings


def build_income_map(payload: dict) -> dict[str, int]:
    incomes = {}
    for area, columns in _planning_area_rows(payload, has_subzones=False):
        counts: dict[str, int] = {}
        for col in columns:
            key = col.get("key")
            if key in ("Total", "No Employed Person"):
                continue
            counts[str(key)] = parse_count(col.get("value"))
        median = grouped_median(counts, INCOME_BRACKETS, sum(counts.values()))
        if median is not None:
            incomes[area] = median
    return incomes


def source_label(age_payload: dict) -> str:
    table_type = age_payload.get("tableType") or "Census"
    updated = age_payload.get("dataLastUpdated") or "N/A"
    return f"{table_type} · Updated {updated}"


# ── Snapshot & cache ───────────────────────────────────────────────


@dataclass(frozen=True)
class LiveDemographics:
    records: dict[str, DemographicRecord] = field(default_factory=dict)
    source_label: str = ""


def merge_live_tables(
    population: dict[str, int],
    ages: dict[str, AgeProfile],
    dwellings: dict[str, DwellingMix],
    incomes: dict[str, int],
    reference: ReferenceStore,
) -> dict[str, DemographicRecord]:
    """Merge per-table maps into records, field by field.

    Live value first, then the reference table, then a neutral default.
    """
    areas = dict.fromkeys([*population, *ages, *dwellings, *incomes])
    merged = {}
    for area in areas:
        ref = reference.lookup(area)
        pop = population.get(area)
        if pop is None:
            pop = ref.population if ref else 0

        land_area = reference.land_area_km2(area)
        if land_area and pop:
            density = round_half_up(pop / land_area)
        else:
            density = ref.density if ref else DEFAULT_DENSITY

        age = ages.get(area)
        merged[area] = DemographicRecord(
            population=pop,
            median_age=(
                age.median_age if age else ref.median_age if ref else DEFAULT_MEDIAN_AGE
            ),
            median_household_income=incomes.get(
                area, ref.median_household_income if ref else DEFAULT_MEDIAN_HH_INCOME
            ),
            density=density,
            dwellings=dwellings.get(area, ref.dwellings if ref else DEFAULT_DWELLINGS),
            age_groups=(
                age.age_groups if age else ref.age_groups if ref else DEFAULT_AGE_GROUPS
            ),
        )
    return merged


class LiveDemographicsCache:
    """Process-lifetime cache of the merged SingStat snapshot.

    Populated once, read many times, never invalidated. Concurrent first
    callers may each fetch; the first complete snapshot is kept and later
    ones are discarded. A failed fetch leaves the cache empty.
    """

    def __init__(
        self,
        client: StatTableSource | None = None,
        reference: ReferenceStore | None = None,
    ):
        self.client = client or SingStatClient()
        self.reference = reference or ReferenceStore()
        self._snapshot: LiveDemographics | None = None

    @property
    def snapshot(self) -> LiveDemographics | None:
        return self._snapshot

    async def ensure_loaded(self) -> LiveDemographics | None:
        if self._snapshot is not None:
            logger.debug("Live demographics cache hit")
            return self._snapshot

        keys = ["population", "age", "dwelling", "income"]
        results = await asyncio.gather(
            *(self.client.fetch_table(SINGSTAT_TABLES[k]) for k in keys),
            return_exceptions=True,
        )
        failed = [(k, r) for k, r in zip(keys, results) if isinstance(r, BaseException)]
        if failed:
            for key, err in failed:
                logger.warning("SingStat %s table fetch failed: %s", key, err)
            return None

        pop_data, age_data, dwell_data, income_data = results
        try:
            records = merge_live_tables(
                build_population_map(pop_data),
                build_age_map(age_data),
                build_dwelling_map(dwell_data),
                build_income_map(income_data),
                self.reference,
            )
            label = source_label(age_data)
        except (TypeError, AttributeError, KeyError, ValueError) as e:
            logger.warning("SingStat tables could not be parsed: %s", e)
            return None
        if not records:
            logger.warning("SingStat tables contained no planning-area rows")
            return None

        snapshot = LiveDemographics(records=records, source_label=label)
        if self._snapshot is None:
            self._snapshot = snapshot
            self.reference.learn_area_names(records)
            logger.info("Loaded live demographics for %d planning areas", len(records))
        return self._snapshot


class DemographicsService:
    """Live SingStat record for an area when available, else the reference record."""

    def __init__(
        self,
        cache: LiveDemographicsCache | None = None,
        reference: ReferenceStore | None = None,
    ):
        if cache is None:
            cache = LiveDemographicsCache(reference=reference or ReferenceStore())
        self.cache = cache
        self.reference = reference or cache.reference

    async def get(self, area: str) -> tuple[DemographicRecord | None, str]:
        """Return (record, source label). Record is None for an unknown area."""
        key = area.upper().strip()
        live = await self.cache.ensure_loaded()
        if live is not None and key in live.records:
            return live.records[key], live.source_label
        return self.reference.lookup(key), REFERENCE_SOURCE_LABEL

    def source_label(self) -> str:
        snapshot = self.cache.snapshot
        return snapshot.source_label if snapshot else REFERENCE_SOURCE_LABEL
