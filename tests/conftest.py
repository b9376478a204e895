"""Shared fixtures: embedded reference store, SingStat payloads, stub geocoders.

SingStat fixture tables:
  BISHAN   in all four tables (100,000 residents, 1,000 households sampled)
  TENGAH   population table only (no embedded record, no land area)
  CLEMENTI dwelling table only
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from pinsight.data.reference import ReferenceStore
from pinsight.data.resolver import AreaResolver
from pinsight.data.singstat import SINGSTAT_TABLES, DemographicsService, LiveDemographicsCache
from pinsight.models.resolution import FetchStatus, GeocodeResult, SearchResult


def _value(key: str, value: str) -> dict:
    return {"key": key, "value": value}


@pytest.fixture
def population_payload() -> dict:
    return {
        "title": "Resident Population by Planning Area/Subzone",
        "row": [
            {"rowText": "Total", "columns": [{"key": "Total", "columns": [_value("Total", "4,044,210")]}]},
            {"rowText": "Bishan - Total", "columns": [{"key": "Total", "columns": [_value("Total", "100,000")]}]},
            {"rowText": "Bishan East", "columns": [{"key": "Total", "columns": [_value("Total", "30,000")]}]},
            {"rowText": "Tengah - Total", "columns": [{"key": "Total", "columns": [_value("Total", "5,000")]}]},
        ],
    }


@pytest.fixture
def age_payload() -> dict:
    return {
        "title": "Resident Population by Planning Area/Subzone, Age Group and Sex",
        "tableType": "Census of Population 2020",
        "dataLastUpdated": "16/06/2021",
        "row": [
            {"rowText": "Total", "columns": [{"key": "Total", "columns": [_value("Total", "4,044,210")]}]},
            {
                "rowText": "Bishan - Total",
                "columns": [
                    {
                        "key": "Total",
                        "columns": [
                            _value("Total", "1,000"),
                            _value("20 - 24", "200"),
                            _value("30 - 34", "300"),
                            _value("40 - 44", "300"),
                            _value("70 - 74", "200"),
                            _value("90 & Over", "-"),
                        ],
                    },
                    {"key": "Males", "columns": [_value("Total", "480")]},
                ],
            },
            {"rowText": "Ghost Town - Total", "columns": [{"key": "Total", "columns": [_value("Total", "0")]}]},
        ],
    }


@pytest.fixture
def dwelling_payload() -> dict:
    return {
        "title": "Resident Households by Planning Area and Type of Dwelling",
        "row": [
            {"rowText": "Total", "columns": [_value("Total", "1,366,660")]},
            {
                "rowText": "Bishan",
                "columns": [
                    _value("Total", "1,000"),
                    {
                        "key": "HDB Dwellings",
                        "columns": [_value("Total HDB", "600"), _value("1- and 2-Room Flats", "10")],
                    },
                    _value("Condominiums and Other Apartments", "300"),
                    _value("Landed Properties", "50"),
                    _value("Others", "50"),
                ],
            },
            {
                "rowText": "Clementi",
                "columns": [
                    _value("Total", "200"),
                    {"key": "HDB Dwellings", "columns": [_value("Total HDB", "150")]},
                    _value("Condominiums and Other Apartments", "40"),
                    _value("Landed Properties", "6"),
                    _value("Others", "4"),
                ],
            },
        ],
    }


@pytest.fixture
def income_payload() -> dict:
    return {
        "title": "Resident Households by Planning Area and Monthly Household Income from Work",
        "row": [
            {"rowText": "Total", "columns": [_value("Total", "1,366,660")]},
            {
                "rowText": "Bishan",
                "columns": [
                    _value("Total", "1,000"),
                    _value("No Employed Person", "500"),
                    _value("Below $1,000", "100"),
                    _value("$5,000 - $5,999", "100"),
                    _value("$10,000 - $10,999", "200"),
                    _value("$20,000 & Over", "100"),
                ],
            },
        ],
    }


@pytest.fixture
def singstat_payloads(population_payload, age_payload, dwelling_payload, income_payload) -> dict:
    """Table id → Data payload, as SingStatClient.fetch_table returns it."""
    return {
        SINGSTAT_TABLES["population"]: population_payload,
        SINGSTAT_TABLES["age"]: age_payload,
        SINGSTAT_TABLES["dwelling"]: dwelling_payload,
        SINGSTAT_TABLES["income"]: income_payload,
    }


@pytest.fixture
def live_stat_source(singstat_payloads):
    source = AsyncMock()

    async def fetch_table(table_id):
        return singstat_payloads[table_id]

    source.fetch_table = AsyncMock(side_effect=fetch_table)
    return source


@pytest.fixture
def offline_stat_source():
    source = AsyncMock()
    source.fetch_table = AsyncMock(side_effect=httpx.ConnectError("SingStat unreachable"))
    return source


@pytest.fixture
def reference() -> ReferenceStore:
    return ReferenceStore()


@pytest.fixture
def offline_demographics(offline_stat_source, reference) -> DemographicsService:
    """Demographics served from the embedded table only."""
    return DemographicsService(LiveDemographicsCache(offline_stat_source, reference), reference)


@pytest.fixture
def offline_geocoder():
    """A OneMap stand-in that cannot be reached."""
    geocoder = AsyncMock()
    geocoder.reverse_geocode = AsyncMock(
        return_value=GeocodeResult(status=FetchStatus.FAILED, error="connection refused")
    )
    geocoder.search = AsyncMock(return_value=SearchResult(status=FetchStatus.FAILED, error="connection refused"))
    return geocoder


@pytest.fixture
def offline_resolver(offline_geocoder, offline_demographics) -> AreaResolver:
    return AreaResolver(offline_geocoder, offline_demographics, radius_m=300, wider_radius_m=500)
