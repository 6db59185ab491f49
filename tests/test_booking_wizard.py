"""Tests for the booking wizard state machine."""

from unittest.mock import MagicMock

import pytest

from charter_funnel.adapters.quotes import SyntheticQuoteProvider
from charter_funnel.config import QuoteConfig, WizardConfig
from charter_funnel.domain.errors import ConfigurationError, QuoteProviderError
from charter_funnel.domain.models import (
    AircraftClass,
    CanonicalAirport,
    Itinerary,
    SubmissionResult,
    TripType,
    WizardField,
)
from charter_funnel.domain.steps import FlowVariant, Step, build_step_graph
from charter_funnel.services.booking_wizard import BookingWizard
from charter_funnel.services.suggestions import LocationSuggester

AUSTIN = CanonicalAirport(
    display_name="Austin-Bergstrom International Airport", iata_code="AUS", city="Austin"
)


def make_wizard(variant="standard", quote_provider=None, submission=None, **kwargs):
    if submission is None:
        submission = MagicMock()
        submission.submit.return_value = SubmissionResult(success=True)
    return BookingWizard(
        graph=build_step_graph(FlowVariant.named(variant)),
        quote_provider=quote_provider or SyntheticQuoteProvider(QuoteConfig(seed=7)),
        submission=submission,
        config=WizardConfig(min_passengers=1, max_passengers=20, default_passengers=1),
        **kwargs,
    )


def fill_to_trip_type(wizard):
    wizard.set_origin("Austin (AUS)")
    assert wizard.advance()
    wizard.set_destination("New Orleans (MSY)")
    assert wizard.advance()
    wizard.set_departure("03/14/2027", "9:30 AM")
    assert wizard.advance()
    assert wizard.advance()  # default passenger count
    assert wizard.step is Step.TRIP_TYPE


def fill_to_review(wizard, trip_type=TripType.ONE_WAY):
    fill_to_trip_type(wizard)
    wizard.set_trip_type(trip_type)
    assert wizard.advance()
    if trip_type is TripType.ROUND_TRIP:
        wizard.set_return("03/20/2027", "5:00 PM")
        assert wizard.advance()
    wizard.set_email("lead@example.com")
    assert wizard.advance()
    wizard.set_name("Sam Lead")
    assert wizard.advance()
    assert wizard.step is Step.REVIEW


class TestInitialState:
    def test_starts_at_origin(self):
        wizard = make_wizard()
        assert wizard.current_step == 1
        assert wizard.step is Step.ORIGIN
        assert wizard.trip_type is TripType.UNSET
        assert wizard.passenger_count == 1

    def test_default_passengers_outside_bounds(self):
        with pytest.raises(ConfigurationError) as exc_info:
            BookingWizard(
                graph=build_step_graph(FlowVariant.named("standard")),
                quote_provider=MagicMock(),
                submission=MagicMock(),
                config=WizardConfig(min_passengers=2, max_passengers=8, default_passengers=1),
            )
        assert exc_info.value.setting_name == "wizard.default_passengers"


class TestGates:
    def test_blank_origin_blocks_advance(self):
        wizard = make_wizard()
        assert not wizard.advance()

        wizard.set_origin("   ")
        assert not wizard.can_advance()
        assert not wizard.advance()
        assert wizard.current_step == 1

    def test_departure_needs_date_and_time(self):
        wizard = make_wizard()
        wizard.set_origin("Austin")
        wizard.advance()
        wizard.set_destination("Miami")
        wizard.advance()

        wizard.set_departure_date("03/14/2027")
        assert not wizard.advance()
        wizard.set_departure_time("9:30 AM")
        assert wizard.advance()
        assert wizard.step is Step.PASSENGERS

    def test_trip_type_must_be_chosen(self):
        wizard = make_wizard()
        fill_to_trip_type(wizard)
        assert not wizard.advance()
        assert wizard.step is Step.TRIP_TYPE

    def test_gate_open_for_review_needs_every_field(self):
        wizard = make_wizard()
        fill_to_review(wizard)
        assert wizard.gate_open(Step.REVIEW)

        wizard.set_email(" ")
        assert not wizard.gate_open(Step.REVIEW)
        assert not wizard.advance()
        assert wizard.step is Step.REVIEW


class TestBranching:
    def test_one_way_skips_return(self):
        wizard = make_wizard()
        fill_to_trip_type(wizard)
        wizard.set_trip_type(TripType.ONE_WAY)

        assert wizard.advance()
        assert wizard.step is Step.CONTACT_EMAIL
        assert wizard.retreat()
        assert wizard.step is Step.TRIP_TYPE

    def test_round_trip_enters_return(self):
        wizard = make_wizard()
        fill_to_trip_type(wizard)
        wizard.set_trip_type(TripType.ROUND_TRIP)

        assert wizard.advance()
        assert wizard.step is Step.RETURN

    def test_switching_to_one_way_leaves_return_step(self):
        wizard = make_wizard()
        fill_to_trip_type(wizard)
        wizard.set_trip_type(TripType.ROUND_TRIP)
        wizard.advance()

        wizard.set_trip_type(TripType.ONE_WAY)

        assert wizard.step is Step.TRIP_TYPE

    def test_retreat_at_start(self):
        assert not make_wizard().retreat()

    def test_split_variant_asks_date_then_time(self):
        wizard = make_wizard("split")
        wizard.preset_route("Austin", "AUS", "Miami", "MIA")
        wizard.advance()
        wizard.advance()

        assert wizard.step is Step.DEPARTURE_DATE
        wizard.set_departure_date("03/14/2027")
        assert wizard.advance()
        assert wizard.step is Step.DEPARTURE_TIME
        assert not wizard.advance()


class TestFields:
    def test_passenger_count_is_clamped(self):
        wizard = make_wizard()
        assert wizard.decrement_passengers() == 1
        assert wizard.set_passengers(25) == 20
        assert wizard.increment_passengers() == 20
        assert wizard.decrement_passengers() == 19

    def test_swap_locations(self):
        wizard = make_wizard()
        wizard.set_origin("Austin (AUS)")
        wizard.set_destination("Miami (MIA)")

        wizard.swap_locations()

        assert wizard.state.fields[WizardField.ORIGIN] == "Miami (MIA)"
        assert wizard.state.fields[WizardField.DESTINATION] == "Austin (AUS)"

    def test_preset_route(self):
        wizard = make_wizard()
        wizard.preset_route("Austin", "AUS", "New Orleans", "MSY")

        assert wizard.state.fields[WizardField.ORIGIN] == "Austin (AUS)"
        assert wizard.state.fields[WizardField.DESTINATION] == "New Orleans (MSY)"

    def test_choose_origin_without_suggester(self):
        wizard = make_wizard()
        label = wizard.choose_origin(AUSTIN)

        assert label == "Austin-Bergstrom International Airport (AUS)"
        assert wizard.state.fields[WizardField.ORIGIN] == label

    def test_location_typing_feeds_suggestions(self):
        suggest = MagicMock(return_value=[AUSTIN])
        wizard = make_wizard(origin_suggester=LocationSuggester(suggest=suggest))

        wizard.set_origin("Aus")
        assert wizard.origin_suggestions == (AUSTIN,)
        assert wizard.destination_suggestions == ()

        wizard.choose_origin(AUSTIN)
        assert wizard.origin_suggestions == ()
        suggest.assert_called_once_with("Aus")


class TestSubmission:
    def test_review_submits_and_shows_quotes(self):
        submission = MagicMock()
        submission.submit.return_value = SubmissionResult(success=True)
        wizard = make_wizard(submission=submission)
        fill_to_review(wizard)

        assert wizard.advance()

        assert wizard.step is Step.RESULTS
        submission.submit.assert_called_once()
        itinerary = submission.submit.call_args[0][0]
        assert isinstance(itinerary, Itinerary)
        assert itinerary.from_location == "Austin (AUS)"
        assert itinerary.trip_type is TripType.ONE_WAY
        assert itinerary.return_date is None
        assert itinerary.contact_phone is None
        assert wizard.itinerary == itinerary
        assert len(wizard.quote_result.quotes) == 4
        assert wizard.quote_result.quotes[0].flight_duration == "1h 45m"

    def test_round_trip_itinerary_carries_return(self):
        wizard = make_wizard()
        fill_to_review(wizard, TripType.ROUND_TRIP)
        wizard.advance()

        assert wizard.itinerary.return_date == "03/20/2027"
        assert wizard.itinerary.return_time == "5:00 PM"

    def test_failed_submission_still_reaches_results(self):
        submission = MagicMock()
        submission.submit.return_value = SubmissionResult(success=False, error="HTTP 502")
        wizard = make_wizard(submission=submission)
        fill_to_review(wizard)

        assert wizard.advance()

        assert wizard.step is Step.RESULTS
        assert not wizard.submission_result.success
        submission.submit.assert_called_once()

    def test_quote_failure_is_error_flagged(self):
        quotes = MagicMock()
        quotes.fetch_quotes.side_effect = QuoteProviderError(
            "API Error: 503 Service Unavailable", provider="http"
        )
        wizard = make_wizard(quote_provider=quotes)
        fill_to_review(wizard)

        wizard.advance()

        assert wizard.step is Step.RESULTS
        assert wizard.quote_result.is_error
        assert wizard.quote_result.error == "API Error: 503 Service Unavailable"
        assert wizard.quote_result.quotes == ()

    def test_unexpected_quote_error_is_error_flagged(self):
        quotes = MagicMock()
        quotes.fetch_quotes.side_effect = RuntimeError("boom")
        wizard = make_wizard(quote_provider=quotes)
        fill_to_review(wizard)

        wizard.advance()

        assert wizard.step is Step.RESULTS
        assert wizard.quote_result.error == "boom"

    def test_submit_outside_review_is_ignored(self):
        submission = MagicMock()
        wizard = make_wizard(submission=submission)

        assert not wizard.submit()
        submission.submit.assert_not_called()

    def test_extended_variant_collects_phone(self):
        wizard = make_wizard("extended")
        fill_to_trip_type(wizard)
        wizard.set_trip_type(TripType.ONE_WAY)
        wizard.advance()
        wizard.set_email("lead@example.com")
        wizard.advance()

        assert wizard.step is Step.CONTACT_PHONE
        assert not wizard.advance()
        wizard.set_phone("555-0100")
        wizard.advance()
        wizard.set_name("Sam Lead")
        wizard.advance()
        wizard.advance()

        assert wizard.step is Step.RESULTS
        assert wizard.itinerary.contact_phone == "555-0100"


class TestResults:
    @pytest.fixture
    def at_results(self):
        wizard = make_wizard()
        fill_to_review(wizard)
        wizard.advance()
        return wizard

    def test_results_need_a_selection(self, at_results):
        assert not at_results.advance()
        assert at_results.step is Step.RESULTS

    def test_select_quote_confirms(self, at_results):
        assert at_results.select_quote("2")

        assert at_results.step is Step.CONFIRMATION
        assert at_results.selected_quote.aircraft_class is AircraftClass.MIDSIZE

    def test_select_unknown_quote(self, at_results):
        assert not at_results.select_quote("99")
        assert at_results.selected_quote is None

    def test_confirmation_is_the_end(self, at_results):
        at_results.select_quote("1")
        assert not at_results.advance()

    def test_reset_returns_to_first_step(self, at_results):
        at_results.select_quote("1")

        at_results.reset()

        assert at_results.current_step == 1
        assert at_results.trip_type is TripType.UNSET
        assert at_results.state.fields == {WizardField.PASSENGERS: 1}
        assert at_results.quote_result is None
        assert at_results.selected_quote is None
        assert at_results.itinerary is None
