"""Tests for the OneMap reverse-geocode and search client."""

import httpx
import pytest

from pinsight.data.onemap import (
    REVGEOCODE_PATH,
    SEARCH_PATH,
    OneMapClient,
    area_from_candidates,
)
from pinsight.models.area import GeoPoint
from pinsight.models.resolution import AddressCandidate, FetchStatus

CLEMENTI = GeoPoint(1.3162, 103.7649)


def _client(handler, token="test-token") -> OneMapClient:
    return OneMapClient(
        token=token,
        base_url="https://onemap.test",
        transport=httpx.MockTransport(handler),
    )


class TestAreaFromCandidates:
    def test_explicit_area_wins(self):
        candidates = [AddressCandidate(planning_area="Clementi", postal_code="520123")]
        assert area_from_candidates(candidates) == "Clementi"

    def test_skips_nil_postal_code(self):
        candidates = [
            AddressCandidate(postal_code="NIL", building="CLEMENTI MRT STATION"),
            AddressCandidate(postal_code="600043"),
        ]
        assert area_from_candidates(candidates) == "CLEMENTI"

    def test_skips_unknown_prefix(self):
        candidates = [AddressCandidate(postal_code="990000"), AddressCandidate(postal_code="520201")]
        assert area_from_candidates(candidates) == "TAMPINES"

    def test_nothing_usable(self):
        assert area_from_candidates([AddressCandidate(postal_code="NIL")]) is None
        assert area_from_candidates([]) is None


class TestReverseGeocode:
    async def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={
                "GeocodeInfo": [
                    {"BUILDINGNAME": "NIL", "ROAD": "CLEMENTI AVE 3", "POSTALCODE": "NIL"},
                    {"BUILDINGNAME": "CLEMENTI MALL", "ROAD": "COMMONWEALTH AVE WEST", "POSTALCODE": "129588"},
                ],
            })

        result = await _client(handler).reverse_geocode(CLEMENTI, 300)

        assert result.status is FetchStatus.SUCCESS
        assert [c.postal_code for c in result.candidates] == ["NIL", "129588"]
        assert result.candidates[1].building == "CLEMENTI MALL"

        request = seen["request"]
        assert request.url.path == REVGEOCODE_PATH
        assert request.url.params["location"] == "1.3162,103.7649"
        assert request.url.params["buffer"] == "300"
        assert request.url.params["addressType"] == "All"
        assert request.headers["Authorization"] == "test-token"

    async def test_empty(self):
        def handler(request):
            return httpx.Response(200, json={"GeocodeInfo": []})

        result = await _client(handler).reverse_geocode(CLEMENTI, 300)
        assert result.status is FetchStatus.EMPTY
        assert result.status.reachable
        assert result.candidates == []

    @pytest.mark.parametrize("infos", [5, "NIL", {"POSTALCODE": "600043"}])
    async def test_non_list_geocode_info(self, infos):
        def handler(request):
            return httpx.Response(200, json={"GeocodeInfo": infos})

        result = await _client(handler).reverse_geocode(CLEMENTI, 300)
        assert result.status is FetchStatus.EMPTY
        assert result.candidates == []

    async def test_expired_token(self):
        def handler(request):
            return httpx.Response(401, json={"error": "Unauthorized"})

        result = await _client(handler).reverse_geocode(CLEMENTI, 300)
        assert result.status is FetchStatus.FAILED
        assert not result.status.reachable

    async def test_error_body_with_200(self):
        def handler(request):
            return httpx.Response(200, json={"error": "Token has expired"})

        result = await _client(handler).reverse_geocode(CLEMENTI, 300)
        assert result.status is FetchStatus.FAILED
        assert "expired" in result.error

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await _client(handler).reverse_geocode(CLEMENTI, 300)
        assert result.status is FetchStatus.FAILED

    async def test_malformed_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        result = await _client(handler).reverse_geocode(CLEMENTI, 300)
        assert result.status is FetchStatus.FAILED

    async def test_missing_token_skips_request(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"GeocodeInfo": []})

        result = await _client(handler, token="").reverse_geocode(CLEMENTI, 300)
        assert result.status is FetchStatus.FAILED
        assert calls == []


class TestSearch:
    async def test_success(self):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json={
                "found": 3,
                "results": [
                    {"ADDRESS": "TAMPINES MALL", "POSTAL": "529510", "LATITUDE": "1.35252", "LONGITUDE": "103.94496"},
                    {"ADDRESS": "BROKEN ROW", "LATITUDE": "NaN", "LONGITUDE": "103.9"},
                    {"ADDRESS": "NO GEOMETRY"},
                ],
            })

        result = await _client(handler).search("Tampines Mall")

        assert result.status is FetchStatus.SUCCESS
        assert len(result.hits) == 1
        assert result.hits[0].point == GeoPoint(1.35252, 103.94496)
        assert result.hits[0].postal_code == "529510"

        request = seen["request"]
        assert request.url.path == SEARCH_PATH
        assert request.url.params["searchVal"] == "Tampines Mall"
        assert request.url.params["returnGeom"] == "Y"
        assert "Authorization" not in request.headers

    async def test_works_without_token(self):
        def handler(request):
            return httpx.Response(200, json={
                "results": [{"ADDRESS": "X", "LATITUDE": "1.3", "LONGITUDE": "103.8"}],
            })

        result = await _client(handler, token="").search("x")
        assert result.status is FetchStatus.SUCCESS

    async def test_no_results(self):
        def handler(request):
            return httpx.Response(200, json={"found": 0, "results": []})

        result = await _client(handler).search("qwertyzzz")
        assert result.status is FetchStatus.EMPTY
        assert result.hits == []

    @pytest.mark.parametrize("rows", [5, "none", {"LATITUDE": "1.3", "LONGITUDE": "103.8"}])
    async def test_non_list_results(self, rows):
        def handler(request):
            return httpx.Response(200, json={"found": 1, "results": rows})

        result = await _client(handler).search("Tampines")
        assert result.status is FetchStatus.EMPTY
        assert result.hits == []

    @pytest.mark.parametrize("status_code", [500, 503])
    async def test_server_error(self, status_code):
        def handler(request):
            return httpx.Response(status_code)

        result = await _client(handler).search("Tampines")
        assert result.status is FetchStatus.FAILED

    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = await _client(handler).search("Tampines")
        assert result.status is FetchStatus.FAILED
