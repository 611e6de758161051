"""Bidding and turn decisions for an automated seat."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterable, Sequence

from ..actions import enumerate_beating
from ..cards import Card
from ..decompose import HandAnalysis, decompose
from ..evaluation import DEFAULT_SCORE_WEIGHTS, ScoreWeights, score_hand
from ..plays import Play, PlayShape
from .ledger import CardLedger

__all__ = [
    "LEAD_PRIORITY",
    "PolicyConfig",
    "DEFAULT_POLICY_CONFIG",
    "Role",
    "role_of",
    "opponent_seats",
    "DecisionPolicy",
]

logger = logging.getLogger(__name__)

# Lower values are led first.
LEAD_PRIORITY: Final[dict[PlayShape, int]] = {
    PlayShape.SINGLE: 1,
    PlayShape.PAIR: 2,
    PlayShape.SEQUENCE: 3,
    PlayShape.SEQUENCE_PAIR: 4,
    PlayShape.TRIPLE: 5,
    PlayShape.TRIPLE_WITH_SINGLE: 6,
    PlayShape.TRIPLE_WITH_PAIR: 7,
    PlayShape.SEQUENCE_TRIPLE: 8,
    PlayShape.PLANE_WITH_SINGLES: 9,
    PlayShape.PLANE_WITH_PAIRS: 10,
    PlayShape.FOUR_WITH_TWO_SINGLES: 11,
    PlayShape.FOUR_WITH_TWO_PAIRS: 12,
    PlayShape.BOMB: 13,
    PlayShape.ROCKET: 14,
}


@dataclass(frozen=True, slots=True)
class PolicyConfig:
    """Thresholds that regulate bidding and play."""

    bid_threshold: int = 60
    lead_alarm_cards: int = 2
    follow_alarm_cards: int = 3
    bomb_hand_limit: int = 6
    score_weights: ScoreWeights = DEFAULT_SCORE_WEIGHTS


DEFAULT_POLICY_CONFIG: Final[PolicyConfig] = PolicyConfig()


class Role(str, Enum):
    """Team membership of a seat once the landlord is known."""

    LANDLORD = "landlord"
    FARMER = "farmer"


def role_of(seat: int, landlord_seat: int) -> Role:
    return Role.LANDLORD if seat == landlord_seat else Role.FARMER


def opponent_seats(my_seat: int, landlord_seat: int, num_seats: int) -> list[int]:
    """Return the seats on the other team: the farmers for the landlord, else the landlord."""

    my_role = role_of(my_seat, landlord_seat)
    return [seat for seat in range(num_seats) if role_of(seat, landlord_seat) is not my_role]


def _smallest(plays: Sequence[Play]) -> Play | None:
    if not plays:
        return None
    return min(plays, key=lambda play: play.main_rank)


@dataclass(slots=True)
class DecisionPolicy:
    """Heuristic opponent combining decomposition, enumeration and a card ledger.

    One instance is owned per automated seat; its ledger must be reset at the
    start of every deal and fed every executed play.
    """

    ledger: CardLedger = field(default_factory=CardLedger)
    config: PolicyConfig = DEFAULT_POLICY_CONFIG

    def decide_bid(self, hand: Iterable[Card]) -> bool:
        """Return ``True`` to bid for landlord."""

        score = score_hand(hand, self.config.score_weights)
        bid = score > self.config.bid_threshold
        logger.debug("bid score=%d threshold=%d bid=%s", score, self.config.bid_threshold, bid)
        return bid

    def decide(
        self,
        hand: Sequence[Card],
        last_play: Play | None,
        last_player_seat: int,
        my_seat: int,
        landlord_seat: int,
        hand_sizes: Sequence[int],
    ) -> Play | None:
        """Return the play to make, or ``None`` to pass."""

        if not hand:
            return None

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "seat %d deciding: %d card(s) held, %d unseen, %d possible opponent bomb(s)",
                my_seat,
                len(hand),
                self.ledger.total_remaining() - len(hand),
                self.ledger.estimate_opponent_bombs(hand),
            )

        if last_play is None or last_player_seat == my_seat:
            play = self._lead(hand, my_seat, landlord_seat, hand_sizes)
            logger.debug("seat %d leads %s", my_seat, play.describe() if play else "nothing")
            return play

        play = self._follow(hand, last_play, last_player_seat, my_seat, landlord_seat, hand_sizes)
        logger.debug("seat %d answers %s with %s", my_seat, last_play.describe(), play.describe() if play else "pass")
        return play

    def _opponent_close(self, my_seat: int, landlord_seat: int, hand_sizes: Sequence[int], threshold: int) -> bool:
        for seat in opponent_seats(my_seat, landlord_seat, len(hand_sizes)):
            if 0 < hand_sizes[seat] <= threshold:
                return True
        return False

    def _lead(self, hand: Sequence[Card], my_seat: int, landlord_seat: int, hand_sizes: Sequence[int]) -> Play | None:
        analysis: HandAnalysis = decompose(hand)
        if analysis.total_moves == 1:
            return analysis.groups[0]

        if self._opponent_close(my_seat, landlord_seat, hand_sizes, self.config.lead_alarm_cards):
            bombs = analysis.of_shape(PlayShape.BOMB, PlayShape.ROCKET)
            if bombs:
                return bombs[0]
            singles = analysis.of_shape(PlayShape.SINGLE)
            if singles:
                return max(singles, key=lambda play: play.main_rank)

        ordinary = [group for group in analysis.groups if not group.is_bomb_like]
        if not ordinary:
            return _smallest(analysis.groups)
        return min(ordinary, key=lambda play: (LEAD_PRIORITY[play.shape], play.main_rank))

    def _follow(
        self,
        hand: Sequence[Card],
        last_play: Play,
        last_player_seat: int,
        my_seat: int,
        landlord_seat: int,
        hand_sizes: Sequence[int],
    ) -> Play | None:
        my_role = role_of(my_seat, landlord_seat)
        if my_role is Role.FARMER and role_of(last_player_seat, landlord_seat) is Role.FARMER:
            logger.debug("seat %d lets teammate seat %d hold the trick", my_seat, last_player_seat)
            return None

        candidates = enumerate_beating(hand, last_play)
        if not candidates:
            return None

        ordinary = [play for play in candidates if not play.is_bomb_like]
        bombs = [play for play in candidates if play.is_bomb_like]

        if self._opponent_close(my_seat, landlord_seat, hand_sizes, self.config.follow_alarm_cards):
            return _smallest(ordinary) or _smallest(bombs)

        if ordinary:
            return _smallest(ordinary)
        if len(hand) <= self.config.bomb_hand_limit:
            return _smallest(bombs)
        logger.debug("seat %d holds back %d bomb(s)", my_seat, len(bombs))
        return None
