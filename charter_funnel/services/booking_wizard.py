"""Booking wizard state machine.

Drives one WizardState through the step graph of a flow variant. Field
setters mutate the collected values; advance() and retreat() move along
the graph edges for the current trip type. The review step assembles the
Itinerary, hands it to the submission collaborator, asks the quote
provider for quotes and always moves on to the results step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from ..config import WizardConfig, get_config
from ..domain.errors import ConfigurationError, QuoteProviderError
from ..domain.models import (
    CanonicalAirport,
    Itinerary,
    Quote,
    QuoteResult,
    SubmissionResult,
    TripType,
    WizardField,
    WizardState,
)
from ..domain.normalization import format_airport_label
from ..domain.steps import Step, StepGraph
from ..ports import QuoteProviderPort, SubmissionPort
from .suggestions import LocationSuggester

Gate = Callable[[WizardState, WizardConfig], bool]


def _filled(*keys: WizardField) -> Gate:
    def gate(state: WizardState, config: WizardConfig) -> bool:
        return all(state.has_text(key) for key in keys)

    return gate


def _passengers_in_range(state: WizardState, config: WizardConfig) -> bool:
    count = state.fields.get(WizardField.PASSENGERS)
    return isinstance(count, int) and config.min_passengers <= count <= config.max_passengers


def _trip_type_chosen(state: WizardState, config: WizardConfig) -> bool:
    return state.trip_type is not TripType.UNSET


# Continue-gates for the data-collecting steps. REVIEW and RESULTS are
# handled by the wizard itself; CONFIRMATION has no way forward.
STEP_GATES: Dict[Step, Gate] = {
    Step.ORIGIN: _filled(WizardField.ORIGIN),
    Step.DESTINATION: _filled(WizardField.DESTINATION),
    Step.DEPARTURE: _filled(WizardField.DEPART_DATE, WizardField.DEPART_TIME),
    Step.DEPARTURE_DATE: _filled(WizardField.DEPART_DATE),
    Step.DEPARTURE_TIME: _filled(WizardField.DEPART_TIME),
    Step.PASSENGERS: _passengers_in_range,
    Step.TRIP_TYPE: _trip_type_chosen,
    Step.RETURN: _filled(WizardField.RETURN_DATE, WizardField.RETURN_TIME),
    Step.RETURN_DATE: _filled(WizardField.RETURN_DATE),
    Step.RETURN_TIME: _filled(WizardField.RETURN_TIME),
    Step.CONTACT_EMAIL: _filled(WizardField.EMAIL),
    Step.CONTACT_PHONE: _filled(WizardField.PHONE),
    Step.CONTACT_NAME: _filled(WizardField.NAME),
}


@dataclass
class BookingWizard:
    """One booking session.

    Attributes:
        graph: Step graph of the flow variant
        quote_provider: Produces quotes for the submitted itinerary
        submission: Receives the itinerary lead
        config: Passenger bounds and defaults
        origin_suggester: Type-ahead for the origin field, if any
        destination_suggester: Type-ahead for the destination field, if any

    Example:
        wizard = container.resolve(BookingWizard)
        wizard.set_origin("Austin (AUS)")
        wizard.advance()
    """

    graph: StepGraph
    quote_provider: QuoteProviderPort
    submission: SubmissionPort
    config: WizardConfig = field(default_factory=lambda: get_config().wizard)
    origin_suggester: Optional[LocationSuggester] = None
    destination_suggester: Optional[LocationSuggester] = None

    state: WizardState = field(init=False)
    _itinerary: Optional[Itinerary] = field(default=None, init=False, repr=False)
    _submission_result: Optional[SubmissionResult] = field(default=None, init=False, repr=False)
    _quote_result: Optional[QuoteResult] = field(default=None, init=False, repr=False)
    _selected_quote: Optional[Quote] = field(default=None, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        config = self.config
        if not config.min_passengers <= config.default_passengers <= config.max_passengers:
            raise ConfigurationError(
                f"Passenger bounds [{config.min_passengers}, {config.max_passengers}] "
                f"must contain the default {config.default_passengers}",
                setting_name="wizard.default_passengers",
                expected_type="int",
            )
        self.state = self._initial_state()

    def _initial_state(self) -> WizardState:
        return WizardState(
            current_step=self.graph.first,
            trip_type=TripType.UNSET,
            fields={WizardField.PASSENGERS: self.config.default_passengers},
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def current_step(self) -> int:
        return self.state.current_step

    @property
    def step(self) -> Step:
        return self.graph.step_at(self.state.current_step)

    @property
    def trip_type(self) -> TripType:
        return self.state.trip_type

    @property
    def passenger_count(self) -> int:
        return self.state.fields[WizardField.PASSENGERS]

    @property
    def itinerary(self) -> Optional[Itinerary]:
        """Itinerary assembled by the last submission."""
        return self._itinerary

    @property
    def submission_result(self) -> Optional[SubmissionResult]:
        return self._submission_result

    @property
    def quote_result(self) -> Optional[QuoteResult]:
        return self._quote_result

    @property
    def selected_quote(self) -> Optional[Quote]:
        return self._selected_quote

    @property
    def origin_suggestions(self) -> Tuple[CanonicalAirport, ...]:
        return self.origin_suggester.suggestions if self.origin_suggester else ()

    @property
    def destination_suggestions(self) -> Tuple[CanonicalAirport, ...]:
        return self.destination_suggester.suggestions if self.destination_suggester else ()

    # ------------------------------------------------------------------
    # Field setters
    # ------------------------------------------------------------------

    def set_origin(self, text: str) -> None:
        """Set the origin text and refresh its suggestions."""
        self.state.fields[WizardField.ORIGIN] = text
        if self.origin_suggester is not None:
            self.origin_suggester.update(text)

    def set_destination(self, text: str) -> None:
        """Set the destination text and refresh its suggestions."""
        self.state.fields[WizardField.DESTINATION] = text
        if self.destination_suggester is not None:
            self.destination_suggester.update(text)

    def choose_origin(self, airport: CanonicalAirport) -> str:
        """Select a suggested airport as origin; returns the written label."""
        label = self._choose(self.origin_suggester, airport)
        self.state.fields[WizardField.ORIGIN] = label
        return label

    def choose_destination(self, airport: CanonicalAirport) -> str:
        """Select a suggested airport as destination; returns the written label."""
        label = self._choose(self.destination_suggester, airport)
        self.state.fields[WizardField.DESTINATION] = label
        return label

    def _choose(self, suggester: Optional[LocationSuggester], airport: CanonicalAirport) -> str:
        if suggester is not None:
            return suggester.choose(airport)
        return format_airport_label(airport)

    def swap_locations(self) -> None:
        fields = self.state.fields
        origin = fields.get(WizardField.ORIGIN, "")
        fields[WizardField.ORIGIN] = fields.get(WizardField.DESTINATION, "")
        fields[WizardField.DESTINATION] = origin
        for suggester in (self.origin_suggester, self.destination_suggester):
            if suggester is not None:
                suggester.clear()

    def preset_route(self, from_city: str, from_code: str, to_city: str, to_code: str) -> None:
        """Seed origin and destination as "City (CODE)" labels."""
        self.state.fields[WizardField.ORIGIN] = f"{from_city} ({from_code})"
        self.state.fields[WizardField.DESTINATION] = f"{to_city} ({to_code})"

    def set_departure(self, date: str, time: str) -> None:
        self.state.fields[WizardField.DEPART_DATE] = date
        self.state.fields[WizardField.DEPART_TIME] = time

    def set_departure_date(self, date: str) -> None:
        self.state.fields[WizardField.DEPART_DATE] = date

    def set_departure_time(self, time: str) -> None:
        self.state.fields[WizardField.DEPART_TIME] = time

    def set_return(self, date: str, time: str) -> None:
        self.state.fields[WizardField.RETURN_DATE] = date
        self.state.fields[WizardField.RETURN_TIME] = time

    def set_return_date(self, date: str) -> None:
        self.state.fields[WizardField.RETURN_DATE] = date

    def set_return_time(self, time: str) -> None:
        self.state.fields[WizardField.RETURN_TIME] = time

    def set_passengers(self, count: int) -> int:
        """Set the passenger count, clamped to the configured bounds."""
        clamped = max(self.config.min_passengers, min(self.config.max_passengers, count))
        self.state.fields[WizardField.PASSENGERS] = clamped
        return clamped

    def increment_passengers(self) -> int:
        return self.set_passengers(self.passenger_count + 1)

    def decrement_passengers(self) -> int:
        return self.set_passengers(self.passenger_count - 1)

    def set_trip_type(self, trip_type: TripType) -> None:
        """Choose the trip type.

        If the current step is not on the new path (e.g. a return step
        after switching to one-way), the wizard goes back to the
        trip-type step.
        """
        self.state.trip_type = trip_type
        if not self.graph.contains(self.state.current_step, trip_type):
            self.state.current_step = self.graph.number(Step.TRIP_TYPE)

    def set_email(self, email: str) -> None:
        self.state.fields[WizardField.EMAIL] = email

    def set_phone(self, phone: str) -> None:
        self.state.fields[WizardField.PHONE] = phone

    def set_name(self, name: str) -> None:
        self.state.fields[WizardField.NAME] = name

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def gate_open(self, step: Step) -> bool:
        """Continue-gate for a step."""
        if step is Step.REVIEW:
            return self._collection_complete()
        if step is Step.RESULTS:
            return self._selected_quote is not None
        gate = STEP_GATES.get(step)
        return gate is not None and gate(self.state, self.config)

    def can_advance(self) -> bool:
        return self.gate_open(self.step)

    def _collection_complete(self) -> bool:
        for step in self.graph.path(self.state.trip_type):
            if step is Step.REVIEW:
                return True
            if not self.gate_open(step):
                return False
        return False

    def advance(self) -> bool:
        """Move forward one edge.

        Returns:
            False (and nothing changes) if the current gate is closed or
            the path ends here.
        """
        step = self.step
        if not self.gate_open(step):
            self._logger.debug("Advance rejected by gate", extra={"step": step.name})
            return False
        if step is Step.REVIEW:
            return self.submit()

        target = self.graph.next(self.state.current_step, self.state.trip_type)
        if target is None:
            return False
        self.state.current_step = target
        return True

    def retreat(self) -> bool:
        """Move back one edge; False at the start of the path."""
        target = self.graph.prev(self.state.current_step, self.state.trip_type)
        if target is None:
            return False
        self.state.current_step = target
        return True

    def build_itinerary(self) -> Itinerary:
        """Snapshot the collected fields."""
        state = self.state
        round_trip = state.trip_type is TripType.ROUND_TRIP
        return Itinerary(
            from_location=state.text(WizardField.ORIGIN),
            to_location=state.text(WizardField.DESTINATION),
            depart_date=state.text(WizardField.DEPART_DATE),
            depart_time=state.text(WizardField.DEPART_TIME),
            passenger_count=self.passenger_count,
            trip_type=state.trip_type,
            contact_email=state.text(WizardField.EMAIL),
            contact_name=state.text(WizardField.NAME),
            return_date=state.text(WizardField.RETURN_DATE) if round_trip else None,
            return_time=state.text(WizardField.RETURN_TIME) if round_trip else None,
            contact_phone=(
                state.text(WizardField.PHONE) if self.graph.has_step(Step.CONTACT_PHONE) else None
            ),
        )

    def submit(self) -> bool:
        """Submit from the review step and move to results.

        The lead goes to the submission collaborator and the itinerary to
        the quote provider. Neither outcome blocks the move to results.

        Returns:
            False if not on a complete review step.
        """
        if self.step is not Step.REVIEW or not self._collection_complete():
            self._logger.warning("Submit ignored", extra={"step": self.step.name})
            return False

        itinerary = self.build_itinerary()
        self._itinerary = itinerary

        self._submission_result = self.submission.submit(itinerary)
        if not self._submission_result.success:
            self._logger.info(
                "Lead submission failed; continuing to results",
                extra={"error": self._submission_result.error},
            )

        self._quote_result = self._fetch_quotes(itinerary)
        self._selected_quote = None

        target = self.graph.next(self.state.current_step, self.state.trip_type)
        if target is not None:
            self.state.current_step = target
        return True

    def _fetch_quotes(self, itinerary: Itinerary) -> QuoteResult:
        try:
            quotes = self.quote_provider.fetch_quotes(itinerary)
        except QuoteProviderError as e:
            self._logger.warning(
                "Quote provider failed",
                extra={"error": e.message, "provider": e.provider},
            )
            return QuoteResult(error=e.message)
        except Exception as e:
            self._logger.exception("Unexpected quote provider error")
            return QuoteResult(error=str(e))

        self._logger.info("Quotes ready", extra={"count": len(quotes)})
        return QuoteResult(quotes=tuple(quotes))

    def select_quote(self, quote_id: str) -> bool:
        """Pick a quote on the results step and go to confirmation."""
        if self.step is not Step.RESULTS or self._quote_result is None:
            return False
        for quote in self._quote_result.quotes:
            if quote.quote_id == quote_id:
                self._selected_quote = quote
                return self.advance()
        self._logger.debug("Unknown quote selected", extra={"quote_id": quote_id})
        return False

    def reset(self) -> None:
        """New search: back to step 1 with every field cleared."""
        self.state = self._initial_state()
        self._itinerary = None
        self._submission_result = None
        self._quote_result = None
        self._selected_quote = None
        for suggester in (self.origin_suggester, self.destination_suggester):
            if suggester is not None:
                suggester.clear()
