"""Type-ahead airport suggestions with a freshness guard.

Every keystroke issues a ticket carrying the query and a sequence
number. Lookups may finish in any order; a result is applied only when
its query still equals the current input and it is newer than the last
applied result. Older responses are dropped, never cancelled.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from ..domain.models import CanonicalAirport
from ..domain.normalization import format_airport_label

SuggestFn = Callable[[str], List[CanonicalAirport]]
Listener = Callable[[Tuple[CanonicalAirport, ...]], None]


@dataclass(frozen=True, slots=True)
class SuggestionTicket:
    """Identity of one lookup request."""

    sequence: int
    query: str


@dataclass
class LocationSuggester:
    """Suggestion state for one location input field.

    Attributes:
        suggest: Query -> ranked airports (usually AirportSearchService.suggest)
        executor: Runs lookups off the caller's thread; None runs them inline
        min_query_length: Shorter inputs clear the suggestions without a lookup
        field_name: Used in log records
        listener: Called with the new suggestions whenever they change
    """

    suggest: SuggestFn
    executor: Optional[Executor] = None
    min_query_length: int = 2
    field_name: str = "location"
    listener: Optional[Listener] = None

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _sequence: int = field(default=0, repr=False)
    _applied_sequence: int = field(default=0, repr=False)
    _current_input: str = field(default="", repr=False)
    _suggestions: Tuple[CanonicalAirport, ...] = field(default=(), repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def suggestions(self) -> Tuple[CanonicalAirport, ...]:
        with self._lock:
            return self._suggestions

    @property
    def current_input(self) -> str:
        with self._lock:
            return self._current_input

    def update(self, text: str) -> Optional[Future]:
        """Record new input and start a lookup for it.

        Returns:
            The lookup future when an executor is used, else None.
        """
        query = text.strip()
        with self._lock:
            self._current_input = text
            if len(query) < self.min_query_length:
                ticket = None
                self._sequence += 1
                self._applied_sequence = self._sequence
                self._suggestions = ()
            else:
                self._sequence += 1
                ticket = SuggestionTicket(self._sequence, query)

        if ticket is None:
            self._notify(())
            return None

        if self.executor is None:
            self.deliver(ticket, self._run(ticket))
            return None

        future = self.executor.submit(self._run, ticket)
        future.add_done_callback(lambda f: self._on_done(ticket, f))
        return future

    def deliver(self, ticket: SuggestionTicket, results: Sequence[CanonicalAirport]) -> bool:
        """Apply results for a ticket if they are still fresh.

        Returns:
            True if the results replaced the current suggestions.
        """
        with self._lock:
            stale = (
                ticket.query != self._current_input.strip()
                or ticket.sequence <= self._applied_sequence
            )
            if not stale:
                self._applied_sequence = ticket.sequence
                self._suggestions = tuple(results)
                applied = self._suggestions

        if stale:
            self._logger.debug(
                "Discarded stale suggestions",
                extra={
                    "field": self.field_name,
                    "query": ticket.query,
                    "sequence": ticket.sequence,
                },
            )
            return False

        self._notify(applied)
        return True

    def choose(self, airport: CanonicalAirport) -> str:
        """Select a suggestion: the input becomes its label, suggestions clear."""
        label = format_airport_label(airport)
        with self._lock:
            self._current_input = label
            self._sequence += 1
            self._applied_sequence = self._sequence
            self._suggestions = ()
        self._notify(())
        return label

    def clear(self) -> None:
        """Forget input and suggestions; in-flight results will be dropped."""
        with self._lock:
            self._current_input = ""
            self._sequence += 1
            self._applied_sequence = self._sequence
            self._suggestions = ()
        self._notify(())

    def _run(self, ticket: SuggestionTicket) -> List[CanonicalAirport]:
        try:
            return list(self.suggest(ticket.query))
        except Exception as e:
            self._logger.error(
                "Suggestion lookup failed",
                extra={"field": self.field_name, "query": ticket.query, "error": str(e)},
            )
            return []

    def _on_done(self, ticket: SuggestionTicket, future: Future) -> None:
        if future.cancelled():
            return
        self.deliver(ticket, future.result())

    def _notify(self, suggestions: Tuple[CanonicalAirport, ...]) -> None:
        if self.listener is not None:
            self.listener(suggestions)
