"""Play shapes and the typed play descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from .cards import Card, format_cards


class PlayShape(str, Enum):
    """Closed set of legal play shapes."""

    SINGLE = "single"
    PAIR = "pair"
    TRIPLE = "triple"
    TRIPLE_WITH_SINGLE = "triple_with_single"
    TRIPLE_WITH_PAIR = "triple_with_pair"
    SEQUENCE = "sequence"
    SEQUENCE_PAIR = "sequence_pair"
    SEQUENCE_TRIPLE = "sequence_triple"
    PLANE_WITH_SINGLES = "plane_with_singles"
    PLANE_WITH_PAIRS = "plane_with_pairs"
    FOUR_WITH_TWO_SINGLES = "four_with_two_singles"
    FOUR_WITH_TWO_PAIRS = "four_with_two_pairs"
    BOMB = "bomb"
    ROCKET = "rocket"

    @property
    def has_length(self) -> bool:
        return self in VARIABLE_LENGTH_SHAPES

    @property
    def is_bomb_like(self) -> bool:
        return self in (PlayShape.BOMB, PlayShape.ROCKET)

    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


VARIABLE_LENGTH_SHAPES: Final[frozenset[PlayShape]] = frozenset(
    {
        PlayShape.SEQUENCE,
        PlayShape.SEQUENCE_PAIR,
        PlayShape.SEQUENCE_TRIPLE,
        PlayShape.PLANE_WITH_SINGLES,
        PlayShape.PLANE_WITH_PAIRS,
    }
)

# Minimum number of straight units for each variable-length shape.
MIN_LENGTH: Final[dict[PlayShape, int]] = {
    PlayShape.SEQUENCE: 5,
    PlayShape.SEQUENCE_PAIR: 3,
    PlayShape.SEQUENCE_TRIPLE: 2,
    PlayShape.PLANE_WITH_SINGLES: 2,
    PlayShape.PLANE_WITH_PAIRS: 2,
}


@dataclass(frozen=True, slots=True)
class Play:
    """A concrete play: its shape, the cards forming it and its comparison key."""

    shape: PlayShape
    cards: tuple[Card, ...]
    main_rank: int
    length: int | None = None

    def __post_init__(self) -> None:
        if self.shape.has_length and self.length is None:
            raise ValueError(f"{self.shape.value} requires a length")

    @property
    def size(self) -> int:
        return len(self.cards)

    @property
    def is_bomb_like(self) -> bool:
        return self.shape.is_bomb_like

    def card_ids(self) -> frozenset[int]:
        return frozenset(card.id for card in self.cards)

    def describe(self) -> str:
        return f"{self.shape.display_name()} [{format_cards(self.cards)}]"
