"""Booking wizard step graph.

The wizard is a linear flow with one branch point: the trip-type
choice. Steps are numbered by their position in the full sequence of a
flow variant (return steps keep their numbers even when a one-way trip
skips them), and every transition is an explicit edge keyed by
(step, trip type). Back edges are derived from the forward path of the
same trip type, so retreat is always the inverse of advance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from .errors import StepGraphError
from .models import TripType


class Step(Enum):
    """Every step any flow variant may contain."""

    ORIGIN = auto()
    DESTINATION = auto()
    DEPARTURE = auto()
    DEPARTURE_DATE = auto()
    DEPARTURE_TIME = auto()
    PASSENGERS = auto()
    TRIP_TYPE = auto()
    RETURN = auto()
    RETURN_DATE = auto()
    RETURN_TIME = auto()
    CONTACT_EMAIL = auto()
    CONTACT_PHONE = auto()
    CONTACT_NAME = auto()
    REVIEW = auto()
    RESULTS = auto()
    CONFIRMATION = auto()


RETURN_STEPS = frozenset({Step.RETURN, Step.RETURN_DATE, Step.RETURN_TIME})


@dataclass(frozen=True, slots=True)
class FlowVariant:
    """Shape of one booking flow.

    Attributes:
        name: Variant identifier used in configuration
        split_datetime: Ask date and time on separate steps
        collect_phone: Ask for a phone number after the e-mail
    """

    name: str
    split_datetime: bool = False
    collect_phone: bool = False

    @classmethod
    def named(cls, name: str) -> FlowVariant:
        try:
            return FLOW_VARIANTS[name]
        except KeyError:
            raise StepGraphError(f"Unknown flow variant: {name!r}", variant=name)

    def sequence(self) -> Tuple[Step, ...]:
        """Full step sequence, return branch included."""
        if self.split_datetime:
            departure: Tuple[Step, ...] = (Step.DEPARTURE_DATE, Step.DEPARTURE_TIME)
            returning: Tuple[Step, ...] = (Step.RETURN_DATE, Step.RETURN_TIME)
        else:
            departure = (Step.DEPARTURE,)
            returning = (Step.RETURN,)
        contact: Tuple[Step, ...] = (Step.CONTACT_EMAIL,)
        if self.collect_phone:
            contact += (Step.CONTACT_PHONE,)
        return (
            (Step.ORIGIN, Step.DESTINATION)
            + departure
            + (Step.PASSENGERS, Step.TRIP_TYPE)
            + returning
            + contact
            + (Step.CONTACT_NAME, Step.REVIEW, Step.RESULTS, Step.CONFIRMATION)
        )


FLOW_VARIANTS: Dict[str, FlowVariant] = {
    "standard": FlowVariant("standard"),
    "extended": FlowVariant("extended", collect_phone=True),
    "split": FlowVariant("split", split_datetime=True),
}


@dataclass
class StepGraph:
    """Directed step graph with trip-type dependent edges.

    Example:
        graph = build_step_graph(FlowVariant.named("standard"))
        graph.next(graph.number(Step.TRIP_TYPE), TripType.ONE_WAY)
    """

    variant: FlowVariant
    steps: Tuple[Step, ...]

    _next: Dict[Tuple[Step, TripType], Step] = field(default_factory=dict, repr=False)
    _prev: Dict[Tuple[Step, TripType], Step] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for required in (Step.ORIGIN, Step.TRIP_TYPE, Step.CONTACT_EMAIL):
            if required not in self.steps:
                raise StepGraphError(
                    f"Flow is missing the {required.name} step",
                    variant=self.variant.name,
                )
        for trip_type in TripType:
            path = self.path(trip_type)
            for here, there in zip(path, path[1:]):
                self._next[(here, trip_type)] = there
                self._prev[(there, trip_type)] = here

    @property
    def first(self) -> int:
        return 1

    def number(self, step: Step) -> int:
        """1-based step id of a step in this variant."""
        return self.steps.index(step) + 1

    def step_at(self, number: int) -> Step:
        if not 1 <= number <= len(self.steps):
            raise StepGraphError(
                f"Step {number} is outside the flow", variant=self.variant.name
            )
        return self.steps[number - 1]

    def has_step(self, step: Step) -> bool:
        return step in self.steps

    def path(self, trip_type: TripType) -> Tuple[Step, ...]:
        """Steps visited, in order, for a given trip type.

        Before the trip type is chosen the flow ends at the choice itself.
        """
        branch = self.steps.index(Step.TRIP_TYPE) + 1
        head = self.steps[:branch]
        if trip_type is TripType.UNSET:
            return head
        rest = self.steps[branch:]
        if trip_type is TripType.ONE_WAY:
            rest = tuple(s for s in rest if s not in RETURN_STEPS)
        return head + rest

    def contains(self, number: int, trip_type: TripType) -> bool:
        if not 1 <= number <= len(self.steps):
            return False
        return self.steps[number - 1] in self.path(trip_type)

    def next(self, number: int, trip_type: TripType) -> Optional[int]:
        """Step id reached by advancing, or None at the end of the path."""
        target = self._next.get((self.step_at(number), trip_type))
        return self.number(target) if target is not None else None

    def prev(self, number: int, trip_type: TripType) -> Optional[int]:
        """Step id reached by retreating, or None at the start of the path."""
        target = self._prev.get((self.step_at(number), trip_type))
        return self.number(target) if target is not None else None


def build_step_graph(variant: FlowVariant) -> StepGraph:
    return StepGraph(variant=variant, steps=variant.sequence())
