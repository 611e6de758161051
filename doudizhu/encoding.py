"""Rank model and card identifier encoding for Dou Dizhu."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Iterable

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from numpy.typing import NDArray

    from .cards import Card

    RankVector = NDArray[np.int16]

MIN_RANK: Final[int] = 3
MAX_RANK: Final[int] = 17
STRAIGHT_MIN_RANK: Final[int] = 3
STRAIGHT_MAX_RANK: Final[int] = 14
ACE_RANK: Final[int] = 14
TWO_RANK: Final[int] = 15
SMALL_JOKER: Final[int] = 16
BIG_JOKER: Final[int] = 17
RANK_SLOTS: Final[int] = MAX_RANK + 1

SUITS: Final[list[str]] = ["S", "H", "C", "D"]
JOKER_SUIT: Final[str] = "J"
SUIT_TO_IDX: Final[dict[str, int]] = {suit: idx for idx, suit in enumerate(SUITS)}

RANK_LABELS: Final[dict[int, str]] = {
    3: "3",
    4: "4",
    5: "5",
    6: "6",
    7: "7",
    8: "8",
    9: "9",
    10: "10",
    11: "J",
    12: "Q",
    13: "K",
    14: "A",
    15: "2",
    16: "SJ",
    17: "BJ",
}
LABEL_TO_RANK: Final[dict[str, int]] = {label: rank for rank, label in RANK_LABELS.items()}

SUITED_RANKS: Final[range] = range(MIN_RANK, TWO_RANK + 1)
COPIES_PER_SUITED_RANK: Final[int] = 4
SMALL_JOKER_ID: Final[int] = 52
BIG_JOKER_ID: Final[int] = 53
DECK_CARD_COUNT: Final[int] = 54


def _deck_totals() -> "RankVector":
    totals = np.zeros(RANK_SLOTS, dtype=np.int16)
    totals[MIN_RANK : TWO_RANK + 1] = COPIES_PER_SUITED_RANK
    totals[SMALL_JOKER] = 1
    totals[BIG_JOKER] = 1
    totals.setflags(write=False)
    return totals


DECK_RANK_TOTALS: Final["RankVector"] = _deck_totals()


@dataclass(frozen=True, slots=True)
class CardDecoding:
    """Typed container describing a decoded card identifier."""

    is_joker: bool
    rank: int
    suit: str


def card_id(rank: int, suit: str) -> int:
    """Encode a rank and suit into a card identifier."""

    if suit == JOKER_SUIT:
        if rank == SMALL_JOKER:
            return SMALL_JOKER_ID
        if rank == BIG_JOKER:
            return BIG_JOKER_ID
        raise ValueError(f"rank {rank} is not a joker rank")
    if suit not in SUIT_TO_IDX:
        raise ValueError(f"unknown suit {suit!r}")
    if rank not in SUITED_RANKS:
        raise ValueError(f"rank {rank} out of range for a suited card")
    return SUIT_TO_IDX[suit] * 13 + (rank - MIN_RANK)


def decode_id(card_identifier: int) -> CardDecoding:
    """Decode a card identifier into its rank and suit."""

    if card_identifier == SMALL_JOKER_ID:
        return CardDecoding(True, SMALL_JOKER, JOKER_SUIT)
    if card_identifier == BIG_JOKER_ID:
        return CardDecoding(True, BIG_JOKER, JOKER_SUIT)
    if not 0 <= card_identifier < SMALL_JOKER_ID:
        raise ValueError(f"card identifier {card_identifier} out of range")
    suit_idx, offset = divmod(card_identifier, 13)
    return CardDecoding(False, offset + MIN_RANK, SUITS[suit_idx])


def is_straight_rank(rank: int) -> bool:
    """Return ``True`` if ``rank`` may take part in a straight or plane."""

    return STRAIGHT_MIN_RANK <= rank <= STRAIGHT_MAX_RANK


def rank_label(rank: int) -> str:
    return RANK_LABELS[rank]


def rank_counts(cards: Iterable["Card"]) -> "RankVector":
    """Return a rank-indexed frequency vector for ``cards``."""

    counts = np.zeros(RANK_SLOTS, dtype=np.int16)
    for card in cards:
        counts[card.rank] += 1
    return counts


def present_ranks(counts: "RankVector", minimum: int = 1) -> list[int]:
    """Return ranks whose count is at least ``minimum`` in ascending order."""

    return [int(rank) for rank in np.flatnonzero(counts >= minimum) if rank >= MIN_RANK]
