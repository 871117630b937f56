from unittest.mock import MagicMock, patch

import googlemaps.exceptions
import pytest

from carbonroute.core.exceptions import DirectionsError, ExternalSourceUnavailable
from carbonroute.repositories.maps.google_maps import GoogleMapsRepository


@pytest.fixture
def mock_gmaps_client():
    with patch("googlemaps.Client") as mock_client_cls:
        client = MagicMock()
        mock_client_cls.return_value = client
        yield client


@pytest.fixture
def repository(mock_gmaps_client):
    return GoogleMapsRepository(api_key="AIzaTestKey")


class TestGetDirections:
    """Tests for GoogleMapsRepository.get_directions."""

    async def test_parses_route(self, repository, mock_gmaps_client, sample_directions_response):
        """Test distance and duration conversion plus step parsing."""
        mock_gmaps_client.directions.return_value = sample_directions_response

        route = await repository.get_directions("Bandung, Indonesia", "Jakarta, Indonesia")

        assert route.distance_km == 151.23
        assert route.duration_hours == 3.0
        assert route.distance_text == "151 km"
        assert route.start_address == "Bandung, West Java, Indonesia"
        assert route.warnings == ["Heavy traffic expected near Cikampek"]
        assert len(route.steps) == 2
        assert route.steps[0].instructions == "Head north on Jl. Asia Afrika"
        assert route.steps[1].end_location.latitude == -6.17
        assert route.avoid_tolls is False

    async def test_decodes_overview_polyline(self, repository, mock_gmaps_client, sample_directions_response):
        mock_gmaps_client.directions.return_value = sample_directions_response

        route = await repository.get_directions("Bandung", "Jakarta")

        assert route.path_points == [
            pytest.approx((38.5, -120.2)),
            pytest.approx((40.7, -120.95)),
            pytest.approx((43.252, -126.453)),
        ]

    async def test_request_parameters(self, repository, mock_gmaps_client, sample_directions_response):
        mock_gmaps_client.directions.return_value = sample_directions_response

        await repository.get_directions("Bandung", "Jakarta")

        kwargs = mock_gmaps_client.directions.call_args.kwargs
        assert kwargs["origin"] == "Bandung"
        assert kwargs["destination"] == "Jakarta"
        assert kwargs["mode"] == "driving"
        assert kwargs["units"] == "metric"
        assert kwargs["avoid"] is None

    async def test_avoid_tolls(self, repository, mock_gmaps_client, sample_directions_response):
        mock_gmaps_client.directions.return_value = sample_directions_response

        route = await repository.get_directions("Bandung", "Jakarta", avoid_tolls=True)

        assert mock_gmaps_client.directions.call_args.kwargs["avoid"] == "tolls"
        assert route.avoid_tolls is True

    async def test_summary(self, repository, mock_gmaps_client, sample_directions_response):
        mock_gmaps_client.directions.return_value = sample_directions_response

        summary = (await repository.get_directions("Bandung", "Jakarta")).to_summary()

        assert summary.distance_km == 151.23
        assert summary.duration_hours == 3.0
        assert summary.warnings == ["Heavy traffic expected near Cikampek"]

    async def test_no_route_found(self, repository, mock_gmaps_client):
        mock_gmaps_client.directions.return_value = []

        with pytest.raises(DirectionsError, match="No route found"):
            await repository.get_directions("Bandung", "Atlantis")

    async def test_api_error(self, repository, mock_gmaps_client):
        mock_gmaps_client.directions.side_effect = googlemaps.exceptions.ApiError("REQUEST_DENIED", "bad key")

        with pytest.raises(DirectionsError):
            await repository.get_directions("Bandung", "Jakarta")

    async def test_timeout(self, repository, mock_gmaps_client):
        mock_gmaps_client.directions.side_effect = googlemaps.exceptions.Timeout()

        with pytest.raises(ExternalSourceUnavailable):
            await repository.get_directions("Bandung", "Jakarta")

    async def test_malformed_response(self, repository, mock_gmaps_client):
        mock_gmaps_client.directions.return_value = [{"legs": []}]

        with pytest.raises(DirectionsError, match="Malformed"):
            await repository.get_directions("Bandung", "Jakarta")

    async def test_missing_api_key(self):
        repository = GoogleMapsRepository(api_key=None)

        assert repository.client is None
        with pytest.raises(DirectionsError, match="not configured"):
            await repository.get_directions("Bandung", "Jakarta")


class TestGetRouteOptions:
    """Tests for GoogleMapsRepository.get_route_options."""

    async def test_both_options(self, repository, mock_gmaps_client, sample_directions_response):
        mock_gmaps_client.directions.return_value = sample_directions_response

        options = await repository.get_route_options("Bandung", "Jakarta")

        assert options.with_tolls.avoid_tolls is False
        assert options.without_tolls.avoid_tolls is True
        assert options.errors == []

    async def test_one_option_fails(self, repository, mock_gmaps_client, sample_directions_response):
        def directions(**kwargs):
            if kwargs["avoid"] == "tolls":
                raise googlemaps.exceptions.ApiError("ZERO_RESULTS")
            return sample_directions_response

        mock_gmaps_client.directions.side_effect = directions

        options = await repository.get_route_options("Bandung", "Jakarta")

        assert options.with_tolls is not None
        assert options.without_tolls is None
        assert len(options.errors) == 1
        assert options.errors[0].startswith("without_tolls")

    async def test_both_options_fail(self, repository, mock_gmaps_client):
        mock_gmaps_client.directions.return_value = []

        with pytest.raises(DirectionsError, match="Could not retrieve any route option"):
            await repository.get_route_options("Bandung", "Jakarta")
