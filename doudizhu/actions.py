"""Legal play generation for Dou Dizhu hands."""

from __future__ import annotations

from itertools import chain, combinations
from typing import Iterable, Iterator, Mapping, Sequence

from . import encoding
from .cards import Card, group_by_rank
from .classify import consecutive_windows
from .plays import MIN_LENGTH, Play, PlayShape
from .rules import beats

__all__ = ["iter_plays", "enumerate_all", "enumerate_beating"]

Groups = Mapping[int, tuple[Card, ...]]


def _maximal_runs(groups: Groups, minimum: int) -> list[list[int]]:
    """Return maximal runs of straight-eligible ranks holding at least ``minimum`` cards."""

    runs: list[list[int]] = []
    for rank in sorted(groups):
        if not encoding.is_straight_rank(rank) or len(groups[rank]) < minimum:
            continue
        if runs and runs[-1][-1] == rank - 1:
            runs[-1].append(rank)
        else:
            runs.append([rank])
    return runs


def _sub_runs(groups: Groups, minimum: int, min_length: int) -> Iterator[tuple[int, ...]]:
    """Yield every contiguous window of every maximal run, shortest lengths first."""

    for run in _maximal_runs(groups, minimum):
        for length in range(min_length, len(run) + 1):
            yield from consecutive_windows(run, length)


def _singles(groups: Groups) -> Iterator[Play]:
    for rank, group in groups.items():
        yield Play(PlayShape.SINGLE, group[:1], rank)


def _pairs(groups: Groups) -> Iterator[Play]:
    for rank, group in groups.items():
        if len(group) >= 2:
            yield Play(PlayShape.PAIR, group[:2], rank)


def _triples(groups: Groups) -> Iterator[Play]:
    for rank, group in groups.items():
        if len(group) >= 3:
            yield Play(PlayShape.TRIPLE, group[:3], rank)


def _triples_with_single(groups: Groups) -> Iterator[Play]:
    for rank, group in groups.items():
        if len(group) < 3:
            continue
        for other_rank, other in groups.items():
            if other_rank != rank:
                yield Play(PlayShape.TRIPLE_WITH_SINGLE, group[:3] + other[:1], rank)


def _triples_with_pair(groups: Groups) -> Iterator[Play]:
    for rank, group in groups.items():
        if len(group) < 3:
            continue
        for other_rank, other in groups.items():
            if other_rank != rank and len(other) >= 2:
                yield Play(PlayShape.TRIPLE_WITH_PAIR, group[:3] + other[:2], rank)


def _bombs(groups: Groups) -> Iterator[Play]:
    for rank, group in groups.items():
        if len(group) == 4:
            yield Play(PlayShape.BOMB, group, rank)


def _rocket(groups: Groups) -> Iterator[Play]:
    small = groups.get(encoding.SMALL_JOKER)
    big = groups.get(encoding.BIG_JOKER)
    if small and big:
        yield Play(PlayShape.ROCKET, (small[0], big[0]), encoding.BIG_JOKER)


def _straights(groups: Groups, shape: PlayShape, per_rank: int) -> Iterator[Play]:
    for window in _sub_runs(groups, per_rank, MIN_LENGTH[shape]):
        cards = tuple(chain.from_iterable(groups[rank][:per_rank] for rank in window))
        yield Play(shape, cards, window[0], len(window))


def _plane_core(groups: Groups, window: Sequence[int]) -> tuple[Card, ...]:
    return tuple(chain.from_iterable(groups[rank][:3] for rank in window))


def _planes_with_singles(groups: Groups) -> Iterator[Play]:
    shape = PlayShape.PLANE_WITH_SINGLES
    for window in _sub_runs(groups, 3, MIN_LENGTH[shape]):
        core = _plane_core(groups, window)
        # One candidate per rank: a spare fourth copy of a core rank, or the first card elsewhere.
        wing_pool: list[Card] = []
        for rank, group in groups.items():
            if rank in window:
                if len(group) > 3:
                    wing_pool.append(group[3])
            else:
                wing_pool.append(group[0])
        for wings in combinations(wing_pool, len(window)):
            yield Play(shape, core + wings, window[0], len(window))


def _planes_with_pairs(groups: Groups) -> Iterator[Play]:
    shape = PlayShape.PLANE_WITH_PAIRS
    for window in _sub_runs(groups, 3, MIN_LENGTH[shape]):
        core = _plane_core(groups, window)
        pair_sources: list[tuple[Card, ...]] = []
        for rank, group in groups.items():
            if rank in window:
                if len(group) >= 5:
                    pair_sources.append(group[3:5])
            elif len(group) >= 2:
                pair_sources.append(group[:2])
        for wing_pairs in combinations(pair_sources, len(window)):
            wings = tuple(chain.from_iterable(wing_pairs))
            yield Play(shape, core + wings, window[0], len(window))


def _fours_with_two_singles(groups: Groups) -> Iterator[Play]:
    for rank, group in groups.items():
        if len(group) != 4:
            continue
        pool = [other[0] for other_rank, other in groups.items() if other_rank != rank]
        for wings in combinations(pool, 2):
            yield Play(PlayShape.FOUR_WITH_TWO_SINGLES, group + wings, rank)


def _fours_with_two_pairs(groups: Groups) -> Iterator[Play]:
    for rank, group in groups.items():
        if len(group) != 4:
            continue
        pool = [other[:2] for other_rank, other in groups.items() if other_rank != rank and len(other) >= 2]
        for first, second in combinations(pool, 2):
            yield Play(PlayShape.FOUR_WITH_TWO_PAIRS, group + first + second, rank)


def iter_plays(hand: Iterable[Card]) -> Iterator[Play]:
    """Lazily yield every legal play that can be extracted from ``hand``.

    The hand is read once into an immutable rank grouping; candidates never
    remove cards from it, so the same physical cards recur across plays.
    """

    groups = group_by_rank(hand)
    return chain(
        _singles(groups),
        _pairs(groups),
        _triples(groups),
        _triples_with_single(groups),
        _triples_with_pair(groups),
        _bombs(groups),
        _rocket(groups),
        _straights(groups, PlayShape.SEQUENCE, 1),
        _straights(groups, PlayShape.SEQUENCE_PAIR, 2),
        _straights(groups, PlayShape.SEQUENCE_TRIPLE, 3),
        _planes_with_singles(groups),
        _planes_with_pairs(groups),
        _fours_with_two_singles(groups),
        _fours_with_two_pairs(groups),
    )


def enumerate_all(hand: Iterable[Card]) -> list[Play]:
    """Return every legal play extractable from ``hand``."""

    return list(iter_plays(hand))


def enumerate_beating(hand: Iterable[Card], reference: Play | None) -> list[Play]:
    """Return the plays from ``hand`` that beat ``reference`` (all plays when it is ``None``)."""

    if reference is None:
        return enumerate_all(hand)
    return [play for play in iter_plays(hand) if beats(play, reference)]
