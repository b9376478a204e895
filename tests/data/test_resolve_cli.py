"""Tests for the resolver CLI output."""

from unittest.mock import AsyncMock, patch

from pinsight.data import resolve_cli
from pinsight.models.area import GeoPoint


class TestPrinting:
    async def test_offline_result(self, offline_resolver, capsys):
        result = await offline_resolver.resolve_point(GeoPoint(1.3162, 103.7649))

        resolve_cli.print_result(result)

        out = capsys.readouterr().out
        assert "CLEMENTI" in out
        assert "estimated (offline mode)" in out
        assert "Population:       79,900" in out
        assert "(dominant: HDB)" in out

    async def test_failure(self, offline_resolver, capsys):
        failure = await offline_resolver.resolve_query("qwertyzzz")

        resolve_cli.print_failure(failure)

        assert 'No results found for "qwertyzzz"' in capsys.readouterr().out


class TestMain:
    async def test_lat_lng(self, offline_resolver, capsys):
        argv = ["resolve_cli", "--lat", "1.3496", "--lng", "103.9568"]
        with (
            patch("sys.argv", argv),
            patch.object(resolve_cli, "AreaResolver", return_value=offline_resolver),
        ):
            await resolve_cli.main()

        assert "TAMPINES" in capsys.readouterr().out

    async def test_list_areas(self, offline_resolver, capsys):
        offline_resolver.geocoder.reverse_geocode = AsyncMock()
        with (
            patch("sys.argv", ["resolve_cli", "--areas"]),
            patch.object(resolve_cli, "AreaResolver", return_value=offline_resolver),
        ):
            await resolve_cli.main()

        lines = capsys.readouterr().out.split()
        assert "BISHAN" in lines
        offline_resolver.geocoder.reverse_geocode.assert_not_awaited()
