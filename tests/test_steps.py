"""Tests for the booking step graph."""

import pytest

from charter_funnel.domain.errors import StepGraphError
from charter_funnel.domain.models import TripType
from charter_funnel.domain.steps import (
    FLOW_VARIANTS,
    FlowVariant,
    Step,
    StepGraph,
    build_step_graph,
)

CHOSEN_TRIP_TYPES = [TripType.ONE_WAY, TripType.ROUND_TRIP]


@pytest.fixture
def standard():
    return build_step_graph(FlowVariant.named("standard"))


class TestNumbering:
    def test_standard_sequence(self, standard):
        assert [standard.step_at(n) for n in range(1, 12)] == [
            Step.ORIGIN,
            Step.DESTINATION,
            Step.DEPARTURE,
            Step.PASSENGERS,
            Step.TRIP_TYPE,
            Step.RETURN,
            Step.CONTACT_EMAIL,
            Step.CONTACT_NAME,
            Step.REVIEW,
            Step.RESULTS,
            Step.CONFIRMATION,
        ]

    def test_split_variant_separates_date_and_time(self):
        graph = build_step_graph(FlowVariant.named("split"))
        assert graph.number(Step.DEPARTURE_DATE) == 3
        assert graph.number(Step.DEPARTURE_TIME) == 4
        assert graph.number(Step.RETURN_DATE) == 7
        assert graph.number(Step.RETURN_TIME) == 8
        assert not graph.has_step(Step.DEPARTURE)

    def test_extended_variant_adds_phone(self):
        graph = build_step_graph(FlowVariant.named("extended"))
        assert graph.number(Step.CONTACT_PHONE) == graph.number(Step.CONTACT_EMAIL) + 1

    def test_step_outside_flow(self, standard):
        with pytest.raises(StepGraphError):
            standard.step_at(0)
        with pytest.raises(StepGraphError):
            standard.step_at(12)

    def test_unknown_variant(self):
        with pytest.raises(StepGraphError) as exc_info:
            FlowVariant.named("express")
        assert exc_info.value.variant == "express"

    def test_flow_without_trip_type_is_rejected(self):
        with pytest.raises(StepGraphError):
            StepGraph(FlowVariant("broken"), (Step.ORIGIN, Step.CONTACT_EMAIL))


class TestBranching:
    def test_one_way_skips_return(self, standard):
        assert standard.next(5, TripType.ONE_WAY) == 7

    def test_round_trip_enters_return(self, standard):
        assert standard.next(5, TripType.ROUND_TRIP) == 6
        assert standard.next(6, TripType.ROUND_TRIP) == 7

    def test_retreat_from_email_depends_on_trip_type(self, standard):
        assert standard.prev(7, TripType.ONE_WAY) == 5
        assert standard.prev(7, TripType.ROUND_TRIP) == 6

    def test_unset_trip_type_stops_at_choice(self, standard):
        assert standard.next(4, TripType.UNSET) == 5
        assert standard.next(5, TripType.UNSET) is None

    def test_split_branch(self):
        graph = build_step_graph(FlowVariant.named("split"))
        assert graph.next(6, TripType.ONE_WAY) == 9
        assert graph.next(6, TripType.ROUND_TRIP) == 7
        assert graph.prev(9, TripType.ROUND_TRIP) == 8

    def test_ends(self, standard):
        assert standard.prev(1, TripType.ONE_WAY) is None
        assert standard.next(11, TripType.ROUND_TRIP) is None

    def test_contains(self, standard):
        assert standard.contains(6, TripType.ROUND_TRIP)
        assert not standard.contains(6, TripType.ONE_WAY)
        assert not standard.contains(7, TripType.UNSET)
        assert not standard.contains(99, TripType.ONE_WAY)


@pytest.mark.parametrize("variant", sorted(FLOW_VARIANTS))
@pytest.mark.parametrize("trip_type", CHOSEN_TRIP_TYPES)
def test_retreat_inverts_advance(variant, trip_type):
    """For every step on the path, prev(next(s)) == s and next(prev(s)) == s."""
    graph = build_step_graph(FlowVariant.named(variant))
    for step in graph.path(trip_type):
        number = graph.number(step)
        forward = graph.next(number, trip_type)
        if forward is not None:
            assert graph.prev(forward, trip_type) == number
        backward = graph.prev(number, trip_type)
        if backward is not None:
            assert graph.next(backward, trip_type) == number


@pytest.mark.parametrize("variant", sorted(FLOW_VARIANTS))
@pytest.mark.parametrize("trip_type", CHOSEN_TRIP_TYPES)
def test_walk_visits_whole_path(variant, trip_type):
    graph = build_step_graph(FlowVariant.named(variant))
    visited = [graph.first]
    while True:
        target = graph.next(visited[-1], trip_type)
        if target is None:
            break
        visited.append(target)

    assert [graph.step_at(n) for n in visited] == list(graph.path(trip_type))
    assert graph.step_at(visited[-1]) is Step.CONFIRMATION
