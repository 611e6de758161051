"""Rule utilities and constants for Dou Dizhu."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Final, Iterable, Sequence

from . import encoding
from .cards import Card, full_deck, parse_codes, sort_cards
from .plays import Play, PlayShape

__all__ = [
    "DealPattern",
    "DEFAULT_DEAL_PATTERN",
    "Deal",
    "InvalidHand",
    "IllegalPlay",
    "beats",
    "deal",
    "validate_hand",
    "parse_cards",
    "hand_without",
]


@dataclass(frozen=True, slots=True)
class DealPattern:
    """Seat count and card split for a fresh deal."""

    num_seats: int = 3
    hand_size: int = 17
    landlord_cards: int = 3

    def __post_init__(self) -> None:
        if self.num_seats * self.hand_size + self.landlord_cards != encoding.DECK_CARD_COUNT:
            raise ValueError("deal pattern must account for every card in the deck")


DEFAULT_DEAL_PATTERN: Final[DealPattern] = DealPattern()


class InvalidHand(ValueError):
    """Raised when a card collection cannot come from a single 54-card deck."""


class IllegalPlay(RuntimeError):
    """Raised when a seat attempts a play it does not hold or that does not beat the table."""


@dataclass(frozen=True, slots=True)
class Deal:
    """Hands dealt to each seat plus the face-down landlord cards."""

    hands: tuple[tuple[Card, ...], ...]
    landlord_cards: tuple[Card, ...]


def beats(candidate: Play, reference: Play) -> bool:
    """Return ``True`` if ``candidate`` legally outranks ``reference``.

    The rocket beats everything. A bomb beats anything except the rocket and
    an equal-or-higher bomb. Every other shape only beats the same shape with
    the same length and card count, by a strictly higher main rank.
    """

    if candidate.shape is PlayShape.ROCKET:
        return True
    if reference.shape is PlayShape.ROCKET:
        return False
    if candidate.shape is PlayShape.BOMB:
        if reference.shape is PlayShape.BOMB:
            return candidate.main_rank > reference.main_rank
        return True
    if candidate.shape is not reference.shape:
        return False
    if candidate.length != reference.length:
        return False
    if candidate.size != reference.size:
        return False
    return candidate.main_rank > reference.main_rank


def deal(rng: random.Random, pattern: DealPattern = DEFAULT_DEAL_PATTERN) -> Deal:
    """Shuffle a full deck with ``rng`` and split it according to ``pattern``."""

    deck = full_deck()
    rng.shuffle(deck)
    hands = []
    for seat in range(pattern.num_seats):
        start = seat * pattern.hand_size
        hands.append(tuple(sort_cards(deck[start : start + pattern.hand_size])))
    kitty = tuple(deck[pattern.num_seats * pattern.hand_size :])
    return Deal(hands=tuple(hands), landlord_cards=kitty)


def validate_hand(cards: Iterable[Card]) -> list[Card]:
    """Return ``cards`` as a list, raising :class:`InvalidHand` on malformed input."""

    hand = list(cards)
    seen: set[int] = set()
    for card in hand:
        if card.id in seen:
            raise InvalidHand(f"card {card.code} appears more than once")
        seen.add(card.id)
        try:
            decoded = encoding.decode_id(card.id)
        except ValueError as exc:
            raise InvalidHand(str(exc)) from exc
        if decoded.rank != card.rank or decoded.suit != card.suit.value:
            raise InvalidHand(f"card id {card.id} does not match {card.code}")
    return hand


def parse_cards(text: str) -> list[Card]:
    """Parse codes such as ``"3S 3H AD BJ"`` into validated cards."""

    cards: list[Card] = []
    for code in parse_codes(text):
        try:
            cards.append(Card.from_code(code))
        except ValueError as exc:
            raise InvalidHand(str(exc)) from exc
    return validate_hand(cards)


def hand_without(hand: Sequence[Card], play: Play) -> list[Card]:
    """Return ``hand`` with the cards of ``play`` removed, raising if any are missing."""

    played = play.card_ids()
    held = {card.id for card in hand}
    if not played <= held:
        raise IllegalPlay(f"{play.describe()} uses cards that are not in hand")
    return [card for card in hand if card.id not in played]
