"""Tests for the segment chain engine."""

import random

import pytest

from subway_lines.domain.errors import (
    DisconnectedSegmentError,
    DistanceTooLongError,
    DuplicateSegmentError,
    InconsistentChainError,
    InvalidSegmentError,
    StationNotFoundError,
)
from subway_lines.domain.models import Chain, ChainChange, Segment, Station

A = Station("A")
B = Station("B")
C = Station("C")
D = Station("D")
E = Station("E")


@pytest.fixture
def two_segment_chain() -> Chain:
    """Chain A -> B (10) -> C (10)."""
    return Chain([Segment(A, B, 10), Segment(B, C, 10)])


def test_insert_into_empty_chain_creates_single_segment() -> None:
    """Given an empty chain, when inserting A->B, then it becomes the whole chain."""
    chain = Chain()

    change = chain.insert(A, B, 10)

    assert change == ChainChange(added=(Segment(A, B, 10),))
    assert chain.segments == {Segment(A, B, 10)}
    assert chain.ordered_stations() == [A, B]


def test_insert_after_tail_appends_segment() -> None:
    """Given A->B, when inserting B->C, then the segment is appended without a split."""
    chain = Chain([Segment(A, B, 10)])

    change = chain.insert(B, C, 10)

    assert change.removed == ()
    assert chain.segments == {Segment(A, B, 10), Segment(B, C, 10)}
    assert chain.ordered_stations() == [A, B, C]


def test_insert_before_head_prepends_segment() -> None:
    """Given A->B, when inserting D->A, then the segment is prepended with no distance limit."""
    chain = Chain([Segment(A, B, 10)])

    change = chain.insert(D, A, 50)

    assert change == ChainChange(added=(Segment(D, A, 50),))
    assert chain.ordered_stations() == [D, A, B]


def test_insert_downstream_of_interior_station_splits_segment() -> None:
    """Given A->B:10, when inserting A->D:4, then A->B is split into A->D:4 and D->B:6."""
    chain = Chain([Segment(A, B, 10)])

    change = chain.insert(A, D, 4)

    assert set(change.removed) == {Segment(A, B, 10)}
    assert set(change.added) == {Segment(A, D, 4), Segment(D, B, 6)}
    assert chain.segments == {Segment(A, D, 4), Segment(D, B, 6)}
    assert chain.ordered_stations() == [A, D, B]


def test_insert_upstream_of_interior_station_splits_segment() -> None:
    """Given A->B:10, when inserting D->B:3, then A->B is split into A->D:7 and D->B:3."""
    chain = Chain([Segment(A, B, 10)])

    chain.insert(D, B, 3)

    assert chain.segments == {Segment(A, D, 7), Segment(D, B, 3)}
    assert chain.ordered_stations() == [A, D, B]


def test_split_conserves_distance() -> None:
    """Given a segment of length D, when splitting it, then both parts sum to D."""
    chain = Chain([Segment(A, B, 10), Segment(B, C, 8)])

    change = chain.insert(B, D, 3)

    assert sum(segment.distance for segment in change.added) == 8
    assert chain.total_distance == 18


@pytest.mark.parametrize("distance", [10, 11, 100])
def test_split_rejects_distance_not_shorter_than_segment(distance: int) -> None:
    """Given A->B:10, when inserting A->D with distance >= 10, then DistanceTooLong is raised."""
    chain = Chain([Segment(A, B, 10)])

    with pytest.raises(DistanceTooLongError):
        chain.insert(A, D, distance)

    assert chain.segments == {Segment(A, B, 10)}


@pytest.mark.parametrize("distance", [10, 11])
def test_upstream_split_rejects_distance_not_shorter_than_segment(distance: int) -> None:
    """Given A->B:10, when inserting D->B with distance >= 10, then DistanceTooLong is raised."""
    chain = Chain([Segment(A, B, 10)])

    with pytest.raises(DistanceTooLongError):
        chain.insert(D, B, distance)

    assert chain.segments == {Segment(A, B, 10)}


def test_split_accepts_distance_one_shorter_than_segment() -> None:
    """Given A->B:10, when inserting A->D:9, then the split leaves a residual of 1."""
    chain = Chain([Segment(A, B, 10)])

    chain.insert(A, D, 9)

    assert chain.segments == {Segment(A, D, 9), Segment(D, B, 1)}


def test_insert_rejects_segment_with_both_stations_on_chain(two_segment_chain: Chain) -> None:
    """Given A->B->C, when inserting A->C, then DuplicateSegment is raised."""
    with pytest.raises(DuplicateSegmentError, match="already on the line"):
        two_segment_chain.insert(A, C, 5)

    assert two_segment_chain.ordered_stations() == [A, B, C]


def test_insert_rejects_segment_with_no_station_on_chain(two_segment_chain: Chain) -> None:
    """Given A->B->C, when inserting D->E, then DisconnectedSegment is raised."""
    with pytest.raises(DisconnectedSegmentError):
        two_segment_chain.insert(D, E, 5)

    assert len(two_segment_chain) == 2


@pytest.mark.parametrize("distance", [0, -3])
def test_insert_rejects_non_positive_distance(distance: int) -> None:
    """Given any chain, when inserting with non-positive distance, then InvalidSegment is raised."""
    chain = Chain([Segment(A, B, 10)])

    with pytest.raises(InvalidSegmentError):
        chain.insert(B, C, distance)

    assert chain.segments == {Segment(A, B, 10)}


def test_remove_interior_station_merges_segments(two_segment_chain: Chain) -> None:
    """Given A->B:10->C:10, when removing B, then A->C:20 remains."""
    change = two_segment_chain.remove(B)

    assert change.added == (Segment(A, C, 20),)
    assert set(change.removed) == {Segment(A, B, 10), Segment(B, C, 10)}
    assert two_segment_chain.segments == {Segment(A, C, 20)}


def test_remove_head_drops_first_segment(two_segment_chain: Chain) -> None:
    """Given A->B->C, when removing the head A, then only B->C remains."""
    change = two_segment_chain.remove(A)

    assert change == ChainChange(removed=(Segment(A, B, 10),))
    assert two_segment_chain.ordered_stations() == [B, C]


def test_remove_tail_drops_last_segment(two_segment_chain: Chain) -> None:
    """Given A->B->C, when removing the tail C, then only A->B remains."""
    two_segment_chain.remove(C)

    assert two_segment_chain.ordered_stations() == [A, B]


def test_remove_from_single_segment_clears_chain() -> None:
    """Given A->B, when removing A, then the chain is empty and removing A again fails."""
    chain = Chain([Segment(A, B, 10)])

    change = chain.remove(A)

    assert change.removed == (Segment(A, B, 10),)
    assert chain.is_empty()
    assert chain.ordered_stations() == []
    with pytest.raises(StationNotFoundError):
        chain.remove(A)


def test_remove_unknown_station_fails(two_segment_chain: Chain) -> None:
    """Given A->B->C, when removing D, then StationNotFound is raised and nothing changes."""
    with pytest.raises(StationNotFoundError):
        two_segment_chain.remove(D)

    assert len(two_segment_chain) == 2


def test_constructor_copies_snapshot() -> None:
    """Given a list of segments, when it changes after construction, then the chain does not."""
    segments = [Segment(A, B, 10)]
    chain = Chain(segments)

    segments.append(Segment(B, C, 5))

    assert chain.ordered_stations() == [A, B]


def test_ordered_stations_is_idempotent(two_segment_chain: Chain) -> None:
    """Given a chain, when querying the order twice, then both results are equal."""
    assert two_segment_chain.ordered_stations() == two_segment_chain.ordered_stations()


def test_ordered_stations_ignores_snapshot_order() -> None:
    """Given segments in arbitrary order, when ordering, then stations run head to tail."""
    chain = Chain([Segment(C, D, 1), Segment(A, B, 1), Segment(B, C, 1)])

    assert chain.ordered_stations() == [A, B, C, D]


@pytest.mark.parametrize(
    "segments",
    [
        pytest.param([Segment(A, B, 1), Segment(A, C, 1)], id="branching-source"),
        pytest.param([Segment(A, C, 1), Segment(B, C, 1)], id="branching-target"),
        pytest.param([Segment(A, B, 1), Segment(B, C, 1), Segment(C, A, 1)], id="cycle"),
        pytest.param(
            [Segment(A, B, 1), Segment(C, D, 1), Segment(D, C, 1)], id="head-plus-cycle"
        ),
        pytest.param([Segment(A, B, 1), Segment(C, D, 1)], id="two-fragments"),
    ],
)
def test_ordered_stations_rejects_malformed_chain(segments: list[Segment]) -> None:
    """Given segments that are not a single path, when ordering, then InconsistentChain is raised."""
    with pytest.raises(InconsistentChainError):
        Chain(segments).ordered_stations()


def test_chain_contains_and_stations(two_segment_chain: Chain) -> None:
    """Given A->B->C, when checking membership, then only those stations are contained."""
    assert A in two_segment_chain
    assert C in two_segment_chain
    assert D not in two_segment_chain
    assert two_segment_chain.stations == {A, B, C}


def test_random_mutations_keep_single_path() -> None:
    """Given random valid inserts and removes, when ordering after each, then the path holds."""
    rng = random.Random(20240501)
    chain = Chain()
    names = iter(f"S{i}" for i in range(10_000))

    for _ in range(500):
        stations = chain.ordered_stations()
        total_before = chain.total_distance
        if stations and rng.random() < 0.35:
            victim = rng.choice(stations)
            change = chain.remove(victim)
            if len(stations) > 2 and victim not in (stations[0], stations[-1]):
                assert chain.total_distance == total_before
            assert all(not segment.contains(victim) for segment in chain)
            assert len(change.removed) >= 1
        else:
            new = Station(next(names))
            if not stations:
                chain.insert(new, Station(next(names)), rng.randint(1, 20))
            else:
                anchor = rng.choice(stations)
                downstream = rng.random() < 0.5
                try:
                    if downstream:
                        chain.insert(anchor, new, rng.randint(1, 20))
                    else:
                        chain.insert(new, anchor, rng.randint(1, 20))
                except DistanceTooLongError:
                    assert chain.ordered_stations() == stations

        ordered = chain.ordered_stations()
        assert len(ordered) == len(set(ordered))
        assert len(ordered) == len(chain.stations)
        assert all(segment.distance > 0 for segment in chain)
