"""Hand strength evaluation used by the bidding heuristic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable

from . import encoding
from .cards import Card
from .decompose import HandAnalysis, decompose
from .plays import PlayShape


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    """Weights applied when scoring a hand."""

    base: int = 100
    per_move: int = 10
    rocket: int = 30
    bomb: int = 20
    big_joker: int = 10
    small_joker: int = 8
    per_two: int = 5


DEFAULT_SCORE_WEIGHTS: Final[ScoreWeights] = ScoreWeights()


@dataclass(slots=True)
class HandMetrics:
    """Structural signals behind a hand score."""

    analysis: HandAnalysis
    rockets: int
    bombs: int
    has_big_joker: bool
    has_small_joker: bool
    twos: int

    def score(self, weights: ScoreWeights = DEFAULT_SCORE_WEIGHTS) -> int:
        """Return a scalar that grows with hand strength."""

        value = weights.base
        value -= weights.per_move * self.analysis.total_moves
        value += weights.rocket * self.rockets
        value += weights.bomb * self.bombs
        if self.has_big_joker:
            value += weights.big_joker
        if self.has_small_joker:
            value += weights.small_joker
        value += weights.per_two * self.twos
        return value


def analyze_hand(hand: Iterable[Card]) -> HandMetrics:
    """Return the decomposition and premium-card holdings of ``hand``."""

    cards = list(hand)
    analysis = decompose(cards)
    counts = encoding.rank_counts(cards)
    return HandMetrics(
        analysis=analysis,
        rockets=len(analysis.of_shape(PlayShape.ROCKET)),
        bombs=len(analysis.of_shape(PlayShape.BOMB)),
        has_big_joker=bool(counts[encoding.BIG_JOKER]),
        has_small_joker=bool(counts[encoding.SMALL_JOKER]),
        twos=int(counts[encoding.TWO_RANK]),
    )


def score_hand(hand: Iterable[Card], weights: ScoreWeights = DEFAULT_SCORE_WEIGHTS) -> int:
    """Score ``hand``: fewer moves, bombs, rockets, jokers and twos all raise it."""

    return analyze_hand(hand).score(weights)
