"""Greedy decomposition of a hand into a short sequence of plays."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from . import encoding
from .cards import Card, group_by_rank
from .plays import MIN_LENGTH, Play, PlayShape

__all__ = ["HandAnalysis", "decompose"]


@dataclass(frozen=True, slots=True)
class HandAnalysis:
    """Ordered play groups covering a hand exactly once."""

    groups: tuple[Play, ...]

    @property
    def total_moves(self) -> int:
        return len(self.groups)

    def of_shape(self, *shapes: PlayShape) -> list[Play]:
        return [group for group in self.groups if group.shape in shapes]


class _CardPool:
    """Cards still unassigned, indexed by rank, handed out from the lowest id."""

    __slots__ = ("_slots",)

    def __init__(self, cards: Iterable[Card]) -> None:
        self._slots: dict[int, list[Card]] = {rank: list(group) for rank, group in group_by_rank(cards).items()}

    def count(self, rank: int) -> int:
        return len(self._slots.get(rank, ()))

    def ranks(self, minimum: int = 1, exact: int | None = None) -> list[int]:
        """Return ranks in ascending order holding ``minimum`` (or exactly ``exact``) cards."""

        if exact is not None:
            return [rank for rank in sorted(self._slots) if len(self._slots[rank]) == exact]
        return [rank for rank in sorted(self._slots) if len(self._slots[rank]) >= minimum]

    def take(self, rank: int, count: int) -> tuple[Card, ...]:
        slot = self._slots[rank]
        if len(slot) < count:
            raise ValueError(f"rank {rank} holds {len(slot)} card(s), {count} requested")
        taken, self._slots[rank] = slot[:count], slot[count:]
        if not self._slots[rank]:
            del self._slots[rank]
        return tuple(taken)


def _longest_run(ranks: Iterable[int], min_length: int) -> list[int]:
    """Return the leftmost longest consecutive run within 3..A, or ``[]`` if too short."""

    best: list[int] = []
    current: list[int] = []
    for rank in ranks:
        if not encoding.is_straight_rank(rank):
            continue
        if current and rank == current[-1] + 1:
            current.append(rank)
        else:
            if len(current) > len(best):
                best = current
            current = [rank]
    if len(current) > len(best):
        best = current
    return best if len(best) >= min_length else []


def _take_planes(pool: _CardPool, reserved: set[int], groups: list[Play]) -> None:
    min_length = MIN_LENGTH[PlayShape.SEQUENCE_TRIPLE]
    while True:
        run = _longest_run((rank for rank in pool.ranks(3) if rank not in reserved), min_length)
        if not run:
            return
        core = tuple(card for rank in run for card in pool.take(rank, 3))
        length = len(run)

        pair_ranks = [rank for rank in pool.ranks(2) if rank not in reserved]
        if len(pair_ranks) >= length:
            wings = tuple(card for rank in pair_ranks[:length] for card in pool.take(rank, 2))
            groups.append(Play(PlayShape.PLANE_WITH_PAIRS, core + wings, run[0], length))
            continue

        single_ranks = [rank for rank in pool.ranks(1) if rank not in reserved]
        if len(single_ranks) >= length:
            wings = tuple(card for rank in single_ranks[:length] for card in pool.take(rank, 1))
            groups.append(Play(PlayShape.PLANE_WITH_SINGLES, core + wings, run[0], length))
            continue

        groups.append(Play(PlayShape.SEQUENCE_TRIPLE, core, run[0], length))


def _take_straights(
    pool: _CardPool,
    shape: PlayShape,
    per_rank: int,
    groups: list[Play],
) -> None:
    while True:
        run = _longest_run(pool.ranks(per_rank), MIN_LENGTH[shape])
        if not run:
            return
        cards = tuple(card for rank in run for card in pool.take(rank, per_rank))
        groups.append(Play(shape, cards, run[0], len(run)))


def _take_triples(pool: _CardPool, reserved: set[int], groups: list[Play]) -> None:
    for rank in pool.ranks(exact=3):
        if rank in reserved or pool.count(rank) < 3:
            continue
        core = pool.take(rank, 3)

        pair_rank = next((r for r in pool.ranks(exact=2) if r not in reserved), None)
        if pair_rank is not None:
            groups.append(Play(PlayShape.TRIPLE_WITH_PAIR, core + pool.take(pair_rank, 2), rank))
            continue

        single_rank = next((r for r in pool.ranks(1) if r not in reserved), None)
        if single_rank is not None:
            groups.append(Play(PlayShape.TRIPLE_WITH_SINGLE, core + pool.take(single_rank, 1), rank))
            continue

        groups.append(Play(PlayShape.TRIPLE, core, rank))


def decompose(hand: Iterable[Card]) -> HandAnalysis:
    """Greedily partition ``hand`` into play groups that keep the move count low.

    Extraction order: rocket, planes (bomb ranks held back), sequences,
    sequence pairs, triples with the first spare pair or single, intact bombs,
    pairs and finally singles. Every card lands in exactly one group.
    """

    pool = _CardPool(hand)
    groups: list[Play] = []

    if pool.count(encoding.SMALL_JOKER) and pool.count(encoding.BIG_JOKER):
        rocket = pool.take(encoding.SMALL_JOKER, 1) + pool.take(encoding.BIG_JOKER, 1)
        groups.append(Play(PlayShape.ROCKET, rocket, encoding.BIG_JOKER))

    reserved = set(pool.ranks(exact=4))

    _take_planes(pool, reserved, groups)
    _take_straights(pool, PlayShape.SEQUENCE, 1, groups)
    _take_straights(pool, PlayShape.SEQUENCE_PAIR, 2, groups)
    _take_triples(pool, reserved, groups)

    for rank in sorted(reserved):
        if pool.count(rank) == 4:
            groups.append(Play(PlayShape.BOMB, pool.take(rank, 4), rank))

    for rank in pool.ranks(exact=2):
        groups.append(Play(PlayShape.PAIR, pool.take(rank, 2), rank))

    for rank in pool.ranks(1):
        while pool.count(rank):
            groups.append(Play(PlayShape.SINGLE, pool.take(rank, 1), rank))

    return HandAnalysis(groups=tuple(groups))
