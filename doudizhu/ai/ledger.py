"""Running tally of cards already played in the current deal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

import numpy as np

from .. import encoding
from ..cards import Card

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..encoding import RankVector

__all__ = ["CardLedger"]


@dataclass(slots=True, eq=False)
class CardLedger:
    """Per-rank remaining counts, starting from a full deck and only ever decreasing.

    The orchestration layer records every executed play exactly once, in turn
    order, before the next decision reads the ledger.
    """

    _remaining: "RankVector" = field(init=False, repr=False)
    _played: list[Card] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Restore full-deck counts for a new deal."""

        self._remaining = encoding.DECK_RANK_TOTALS.copy()
        self._played = []

    def record(self, cards: Iterable[Card]) -> None:
        """Record ``cards`` as played."""

        batch = list(cards)
        updated = self._remaining - encoding.rank_counts(batch)
        if np.any(updated < 0):
            raise ValueError("recorded more cards of a rank than the deck holds")
        self._remaining = updated
        self._played.extend(batch)

    def remaining(self, rank: int) -> int:
        return int(self._remaining[rank])

    def total_remaining(self) -> int:
        return int(self._remaining.sum())

    def is_exhausted(self, rank: int) -> bool:
        return self.remaining(rank) == 0

    def played_cards(self) -> list[Card]:
        return list(self._played)

    def estimate_opponent_bombs(self, my_hand: Iterable[Card]) -> int:
        """Count ranks 3..2 whose four unplayed copies all sit outside ``my_hand``.

        Upper estimate: the ledger cannot tell which opponent holds the cards,
        and a rank split between opponents is not a bomb.
        """

        unseen = self._remaining - encoding.rank_counts(my_hand)
        suited = unseen[encoding.MIN_RANK : encoding.TWO_RANK + 1]
        return int(np.count_nonzero(suited == encoding.COPIES_PER_SUITED_RANK))
