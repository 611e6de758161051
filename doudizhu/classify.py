"""Classification of an arbitrary card set into a single play shape."""

from __future__ import annotations

from typing import Iterable, Sequence

from . import encoding
from .cards import Card
from .plays import MIN_LENGTH, Play, PlayShape

__all__ = ["classify", "consecutive_windows", "is_consecutive_run"]


def is_consecutive_run(ranks: Sequence[int]) -> bool:
    """Return ``True`` when sorted ``ranks`` form a gap-free run within 3..A."""

    if not ranks:
        return False
    if not (encoding.is_straight_rank(ranks[0]) and encoding.is_straight_rank(ranks[-1])):
        return False
    return all(current == previous + 1 for previous, current in zip(ranks, ranks[1:]))


def consecutive_windows(sorted_ranks: Sequence[int], length: int) -> list[tuple[int, ...]]:
    """Return every run of ``length`` consecutive ranks found in ``sorted_ranks``."""

    windows: list[tuple[int, ...]] = []
    for start in range(len(sorted_ranks) - length + 1):
        window = tuple(sorted_ranks[start : start + length])
        if window[-1] - window[0] == length - 1:
            windows.append(window)
    return windows


def _ranks_by_count(counts) -> dict[int, list[int]]:
    by_count: dict[int, list[int]] = {}
    for rank in encoding.present_ranks(counts):
        by_count.setdefault(int(counts[rank]), []).append(rank)
    return by_count


def _uniform_straight(counts, n: int, per_rank: int, min_length: int) -> int | None:
    """Return the low rank if every present rank holds ``per_rank`` cards in a run."""

    if n % per_rank:
        return None
    units = n // per_rank
    if units < min_length:
        return None
    ranks = encoding.present_ranks(counts)
    if len(ranks) != units or any(int(counts[rank]) != per_rank for rank in ranks):
        return None
    if not is_consecutive_run(ranks):
        return None
    return ranks[0]


def _triple_ranks(counts) -> list[int]:
    return [rank for rank in encoding.present_ranks(counts, 3) if encoding.is_straight_rank(rank)]


def _plane_with_singles(counts, n: int, plane_length: int) -> int | None:
    # Wings are unconstrained: any window works once the card total leaves one wing per triple.
    if n - 3 * plane_length != plane_length:
        return None
    windows = consecutive_windows(_triple_ranks(counts), plane_length)
    return windows[0][0] if windows else None


def _plane_with_pairs(counts, plane_length: int) -> int | None:
    for window in consecutive_windows(_triple_ranks(counts), plane_length):
        remainder = counts.copy()
        for rank in window:
            remainder[rank] -= 3
        wing_ranks = encoding.present_ranks(remainder)
        if len(wing_ranks) == plane_length and all(int(remainder[rank]) == 2 for rank in wing_ranks):
            return window[0]
    return None


def classify(cards: Iterable[Card]) -> Play | None:
    """Return the play formed by ``cards`` or ``None`` if they form no legal shape.

    Shapes are tried in a fixed order; the first match wins. At four cards a
    bomb is recognised before a triple with a single, and at six or more cards
    the straight shapes are tried before the four-of-a-kind compounds.
    """

    hand = tuple(cards)
    n = len(hand)
    if n == 0:
        return None

    counts = encoding.rank_counts(hand)
    by_count = _ranks_by_count(counts)
    distinct = encoding.present_ranks(counts)

    if n == 1:
        return Play(PlayShape.SINGLE, hand, hand[0].rank)

    if n == 2:
        if distinct == [encoding.SMALL_JOKER, encoding.BIG_JOKER]:
            return Play(PlayShape.ROCKET, hand, encoding.BIG_JOKER)
        if len(distinct) == 1:
            return Play(PlayShape.PAIR, hand, distinct[0])
        return None

    if n == 3:
        if len(distinct) == 1:
            return Play(PlayShape.TRIPLE, hand, distinct[0])
        return None

    if n == 4:
        if len(distinct) == 1:
            return Play(PlayShape.BOMB, hand, distinct[0])
        if len(by_count.get(3, [])) == 1 and len(by_count.get(1, [])) == 1:
            return Play(PlayShape.TRIPLE_WITH_SINGLE, hand, by_count[3][0])
        return None

    if n == 5:
        if len(by_count.get(3, [])) == 1 and len(by_count.get(2, [])) == 1:
            return Play(PlayShape.TRIPLE_WITH_PAIR, hand, by_count[3][0])
        low = _uniform_straight(counts, n, 1, MIN_LENGTH[PlayShape.SEQUENCE])
        if low is not None:
            return Play(PlayShape.SEQUENCE, hand, low, n)
        return None

    low = _uniform_straight(counts, n, 1, MIN_LENGTH[PlayShape.SEQUENCE])
    if low is not None:
        return Play(PlayShape.SEQUENCE, hand, low, n)

    low = _uniform_straight(counts, n, 2, MIN_LENGTH[PlayShape.SEQUENCE_PAIR])
    if low is not None:
        return Play(PlayShape.SEQUENCE_PAIR, hand, low, n // 2)

    low = _uniform_straight(counts, n, 3, MIN_LENGTH[PlayShape.SEQUENCE_TRIPLE])
    if low is not None:
        return Play(PlayShape.SEQUENCE_TRIPLE, hand, low, n // 3)

    fours = by_count.get(4, [])
    if n == 6 and len(fours) == 1:
        return Play(PlayShape.FOUR_WITH_TWO_SINGLES, hand, fours[0])

    if n == 8 and len(fours) == 1:
        others = [rank for rank in distinct if rank != fours[0]]
        if len(others) == 2 and all(int(counts[rank]) == 2 for rank in others):
            return Play(PlayShape.FOUR_WITH_TWO_PAIRS, hand, fours[0])

    if n % 4 == 0 and n // 4 >= MIN_LENGTH[PlayShape.PLANE_WITH_SINGLES]:
        plane_length = n // 4
        low = _plane_with_singles(counts, n, plane_length)
        if low is not None:
            return Play(PlayShape.PLANE_WITH_SINGLES, hand, low, plane_length)

    if n % 5 == 0 and n // 5 >= MIN_LENGTH[PlayShape.PLANE_WITH_PAIRS]:
        plane_length = n // 5
        low = _plane_with_pairs(counts, plane_length)
        if low is not None:
            return Play(PlayShape.PLANE_WITH_PAIRS, hand, low, plane_length)

    return None
