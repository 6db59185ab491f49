"""Tests for the synthetic and HTTP quote providers."""

import random
from dataclasses import replace
from unittest.mock import MagicMock

import pytest
import requests

from charter_funnel.adapters.quotes import FLEET, HttpQuoteProvider, SyntheticQuoteProvider
from charter_funnel.config import QuoteConfig
from charter_funnel.domain.errors import QuoteProviderError
from charter_funnel.domain.models import AircraftClass, Itinerary, TripType
from charter_funnel.services.airport_search import AirportSearchService


@pytest.fixture
def itinerary():
    return Itinerary(
        from_location="Austin (AUS)",
        to_location="New Orleans (MSY)",
        depart_date="03/14/2027",
        depart_time="9:30 AM",
        passenger_count=6,
        trip_type=TripType.ONE_WAY,
        contact_email="lead@example.com",
        contact_name="Sam Lead",
    )


class TestSyntheticQuoteProvider:
    def test_one_quote_per_fleet_entry(self, itinerary):
        quotes = SyntheticQuoteProvider(QuoteConfig(seed=1)).fetch_quotes(itinerary)

        assert [q.aircraft_class for q in quotes] == [
            AircraftClass.LIGHT,
            AircraftClass.MIDSIZE,
            AircraftClass.HEAVY,
            AircraftClass.ULTRA_LONG_RANGE,
        ]
        assert [q.quote_id for q in quotes] == ["1", "2", "3", "4"]
        assert quotes[0].aircraft_model == "Citation CJ3"
        assert quotes[3].operator_name == "GFK Flight Support"

    def test_prices_within_class_band(self, itinerary):
        quotes = SyntheticQuoteProvider(QuoteConfig(seed=3)).fetch_quotes(itinerary)

        for quote, entry in zip(quotes, FLEET):
            assert entry.base_price <= quote.price_low <= entry.base_price + entry.price_spread
            assert quote.price_high == quote.price_low * 4
            assert quote.currency == "USD"

    def test_flat_prices_without_multiplier(self, itinerary):
        provider = SyntheticQuoteProvider(QuoteConfig(price_range_multiplier=None))
        assert all(q.price_high is None for q in provider.fetch_quotes(itinerary))

    def test_seeded_prices_are_reproducible(self, itinerary):
        first = SyntheticQuoteProvider(QuoteConfig(seed=42)).fetch_quotes(itinerary)
        second = SyntheticQuoteProvider(QuoteConfig(), rng=random.Random(42)).fetch_quotes(
            itinerary
        )
        assert [q.price_low for q in first] == [q.price_low for q in second]

    def test_durations_and_departure(self, itinerary):
        quotes = SyntheticQuoteProvider(QuoteConfig(seed=1)).fetch_quotes(itinerary)

        assert [q.flight_duration for q in quotes] == ["1h 45m", "1h 40m", "1h 35m", "1h 29m"]
        assert all(q.departure_timestamp == "2027-03-14T09:30" for q in quotes)


def make_response(body=None, status=200, reason="OK", invalid_json=False):
    response = MagicMock()
    response.status_code = status
    response.reason = reason
    if invalid_json:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body
    return response


class TestHttpQuoteProvider:
    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def provider(self, session):
        config = QuoteConfig(url="https://quotes.example.com/api", api_key="secret")
        return HttpQuoteProvider(config, session=session)

    def test_posts_codes_and_maps_quotes(self, provider, session, itinerary):
        session.post.return_value = make_response(
            {
                "success": True,
                "data": {
                    "quotes": [
                        {
                            "id": "q-17",
                            "aircraft_class": "Light",
                            "aircraft_model": "Phenom 300",
                            "price_low": 9000,
                            "price_high": 15000,
                            "currency": "USD",
                            "departure_time": "2027-03-14T10:00",
                            "flight_time": "1h 50m",
                            "company": "Lone Star Jets",
                        },
                        {"aircraft_class": "Turboprop", "price": 5000},
                    ]
                },
            }
        )

        quotes = provider.fetch_quotes(itinerary)

        assert len(quotes) == 1
        quote = quotes[0]
        assert quote.quote_id == "q-17"
        assert quote.aircraft_class is AircraftClass.LIGHT
        assert quote.price_label == "$9,000-$15,000 USD"
        assert quote.flight_duration == "1h 50m"
        assert quote.operator_name == "Lone Star Jets"

        url = session.post.call_args.args[0]
        kwargs = session.post.call_args.kwargs
        assert url == "https://quotes.example.com/api"
        assert kwargs["json"] == {
            "departure_airport": "AUS",
            "arrival_airport": "MSY",
            "departure_date": "2027-03-14",
            "passengers": 6,
            "trip_type": "one-way",
        }
        assert kwargs["headers"]["Authorization"] == "Bearer secret"

    def test_list_data_and_estimated_duration(self, provider, session, itinerary):
        session.post.return_value = make_response(
            {"success": True, "data": [{"aircraft": "Heavy", "price": 21000}]}
        )

        quote = provider.fetch_quotes(itinerary)[0]

        assert quote.quote_id == "1"
        assert quote.price_high is None
        assert quote.flight_duration == "1h 35m"
        assert quote.departure_timestamp == "2027-03-14T09:30"

    def test_round_trip_sends_return_date(self, provider, session, itinerary):
        session.post.return_value = make_response({"success": True, "data": []})
        round_trip = replace(
            itinerary,
            passenger_count=2,
            trip_type=TripType.ROUND_TRIP,
            return_date="March 20, 2027",
            return_time="5:00 PM",
        )

        assert provider.fetch_quotes(round_trip) == []
        body = session.post.call_args.kwargs["json"]
        assert body["trip_type"] == "round-trip"
        assert body["return_date"] == "2027-03-20"

    def test_missing_codes(self, session, itinerary):
        provider = HttpQuoteProvider(QuoteConfig(), session=session)
        no_codes = Itinerary(
            from_location="Austin",
            to_location="Somewhere",
            depart_date="03/14/2027",
            depart_time="9:30 AM",
            passenger_count=1,
            trip_type=TripType.ONE_WAY,
            contact_email="a@b.c",
            contact_name="A",
        )

        with pytest.raises(QuoteProviderError) as exc_info:
            provider.fetch_quotes(no_codes)

        assert exc_info.value.message == "Could not find airport codes for the specified locations"
        session.post.assert_not_called()

    def test_codes_from_search(self, session, itinerary):
        search = MagicMock(spec=AirportSearchService)
        search.best_code.side_effect = ["AUS", "MSY"]
        session.post.return_value = make_response({"success": True, "data": []})
        provider = HttpQuoteProvider(QuoteConfig(), search=search, session=session)

        provider.fetch_quotes(itinerary)

        assert session.post.call_args.kwargs["json"]["departure_airport"] == "AUS"
        assert search.best_code.call_count == 2

    def test_http_error_status(self, provider, session, itinerary):
        session.post.return_value = make_response(status=503, reason="Service Unavailable")

        with pytest.raises(QuoteProviderError) as exc_info:
            provider.fetch_quotes(itinerary)

        assert exc_info.value.message == "API Error: 503 Service Unavailable"
        assert exc_info.value.provider == "http"

    def test_network_error(self, provider, session, itinerary):
        session.post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(QuoteProviderError):
            provider.fetch_quotes(itinerary)

    @pytest.mark.parametrize(
        "response",
        [
            make_response(invalid_json=True),
            make_response({"success": False, "error": "No aircraft available"}),
            make_response({"success": True, "data": {"quotes": None}}),
            make_response(["not", "an", "object"]),
        ],
    )
    def test_unusable_payloads(self, provider, session, itinerary, response):
        session.post.return_value = response
        with pytest.raises(QuoteProviderError):
            provider.fetch_quotes(itinerary)

    def test_reported_failure_message(self, provider, session, itinerary):
        session.post.return_value = make_response(
            {"success": False, "error": "No aircraft available"}
        )
        with pytest.raises(QuoteProviderError) as exc_info:
            provider.fetch_quotes(itinerary)
        assert exc_info.value.message == "No aircraft available"
