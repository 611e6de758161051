"""Card abstractions and helpers for Dou Dizhu."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Sequence

from . import encoding


class Suit(str, Enum):
    """The four suits plus the sentinel suit carried by both jokers."""

    SPADES = "S"
    HEARTS = "H"
    CLUBS = "C"
    DIAMONDS = "D"
    JOKER = "J"


@dataclass(frozen=True, slots=True, order=True)
class Card:
    """Value object describing a physical card of the 54-card deck.

    ``rank`` is the only gameplay key; ``id`` disambiguates equal ranks and
    stays stable for the life of a deal.
    """

    id: int
    suit: Suit
    rank: int

    @classmethod
    def from_id(cls, card_identifier: int) -> "Card":
        decoded = encoding.decode_id(card_identifier)
        return cls(id=card_identifier, suit=Suit(decoded.suit), rank=decoded.rank)

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Build a card from a code such as ``"10H"``, ``"AS"`` or ``"BJ"``."""

        code = code.strip().upper()
        if code in ("SJ", "BJ"):
            rank = encoding.LABEL_TO_RANK[code]
            return cls.from_id(encoding.card_id(rank, encoding.JOKER_SUIT))
        if len(code) < 2:
            raise ValueError(f"invalid card code {code!r}")
        label, suit = code[:-1], code[-1]
        if label not in encoding.LABEL_TO_RANK or suit not in encoding.SUIT_TO_IDX:
            raise ValueError(f"invalid card code {code!r}")
        return cls.from_id(encoding.card_id(encoding.LABEL_TO_RANK[label], suit))

    @property
    def is_joker(self) -> bool:
        return self.suit is Suit.JOKER

    @property
    def code(self) -> str:
        if self.is_joker:
            return encoding.rank_label(self.rank)
        return f"{encoding.rank_label(self.rank)}{self.suit.value}"

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        if self.rank == encoding.SMALL_JOKER:
            return "jk"
        if self.rank == encoding.BIG_JOKER:
            return "JK"
        return encoding.rank_label(self.rank)


def full_deck() -> list[Card]:
    """Return all 54 cards in identifier order."""

    return [Card.from_id(card_identifier) for card_identifier in range(encoding.DECK_CARD_COUNT)]


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    """Return ``cards`` ordered by ascending rank, then identifier."""

    return sorted(cards, key=lambda card: (card.rank, card.id))


def group_by_rank(cards: Iterable[Card]) -> Mapping[int, tuple[Card, ...]]:
    """Return an ascending rank -> cards snapshot; cards within a rank keep id order."""

    groups: dict[int, list[Card]] = {}
    for card in sort_cards(cards):
        groups.setdefault(card.rank, []).append(card)
    return {rank: tuple(group) for rank, group in groups.items()}


def cards_of_rank(cards: Iterable[Card], rank: int) -> int:
    return sum(1 for card in cards if card.rank == rank)


_SPLIT = re.compile(r"[\s,]+")


def parse_codes(text: str) -> list[str]:
    return [token for token in _SPLIT.split(text.strip()) if token]


def format_cards(cards: Sequence[Card]) -> str:
    return " ".join(card.code for card in cards)


def from_rank_labels(text: str) -> list[Card]:
    """Build cards from rank labels such as ``"3 3 3 4 4 SJ"``, taking suits in deck order."""

    used: dict[int, int] = {}
    cards: list[Card] = []
    for label in parse_codes(text):
        rank = encoding.LABEL_TO_RANK.get(label.upper())
        if rank is None:
            raise ValueError(f"unknown rank label {label!r}")
        is_joker = rank in (encoding.SMALL_JOKER, encoding.BIG_JOKER)
        copies = 1 if is_joker else encoding.COPIES_PER_SUITED_RANK
        copy = used.get(rank, 0)
        if copy >= copies:
            raise ValueError(f"more than {copies} card(s) of rank {label!r}")
        used[rank] = copy + 1
        suit = encoding.JOKER_SUIT if is_joker else encoding.SUITS[copy]
        cards.append(Card.from_id(encoding.card_id(rank, suit)))
    return cards
