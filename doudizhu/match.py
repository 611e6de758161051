"""Self-play harness running full deals between automated seats."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Sequence

from . import rules
from .ai.policy import DecisionPolicy, Role, role_of
from .rules import DEFAULT_DEAL_PATTERN, DealPattern
from .state import TableState, TurnRecord, new_table

__all__ = ["DealResult", "TURN_LIMIT", "run_bidding", "play_deal"]

logger = logging.getLogger(__name__)

TURN_LIMIT = 400


@dataclass(frozen=True, slots=True)
class DealResult:
    """Outcome of a single completed deal."""

    winner_seat: int
    landlord_seat: int
    bomb_count: int
    history: tuple[TurnRecord, ...]

    @property
    def winning_role(self) -> Role:
        return role_of(self.winner_seat, self.landlord_seat)

    @property
    def landlord_won(self) -> bool:
        return self.winning_role is Role.LANDLORD

    @property
    def multiplier(self) -> int:
        return 2**self.bomb_count


def run_bidding(table: TableState, policies: Sequence[DecisionPolicy], first_bidder: int) -> int:
    """Ask seats in turn whether they bid; return the landlord seat.

    A seat that declines is skipped from then on, and the last seat still in
    the running takes the landlord role without being asked.
    """

    passed = [False] * table.num_seats
    bidder = first_bidder
    while True:
        while passed[bidder]:
            bidder = (bidder + 1) % table.num_seats
        if passed.count(False) == 1:
            logger.debug("seat %d is the last bidder standing", bidder)
            return bidder
        if policies[bidder].decide_bid(table.seats[bidder].hand):
            logger.debug("seat %d bids for landlord", bidder)
            return bidder
        logger.debug("seat %d declines to bid", bidder)
        passed[bidder] = True
        bidder = (bidder + 1) % table.num_seats


def _take_turn(table: TableState, policy: DecisionPolicy, landlord: int) -> None:
    seat = table.current_seat
    outstanding = table.outstanding_for(seat)
    last_player = table.last_player_seat if table.last_player_seat is not None else seat
    play = policy.decide(
        table.seats[seat].hand,
        outstanding,
        last_player,
        seat,
        landlord,
        table.hand_sizes(),
    )
    if play is None:
        table.apply_pass(seat)
    else:
        table.apply_play(seat, play)


def play_deal(
    rng: random.Random,
    policies: Sequence[DecisionPolicy] | None = None,
    pattern: DealPattern = DEFAULT_DEAL_PATTERN,
) -> DealResult:
    """Deal, bid and play one hand to completion with automated seats."""

    if policies is None:
        policies = [DecisionPolicy() for _ in range(pattern.num_seats)]
    if len(policies) != pattern.num_seats:
        raise ValueError("need exactly one policy per seat")

    for policy in policies:
        policy.ledger.reset()

    table = new_table(rules.deal(rng, pattern))
    landlord = run_bidding(table, policies, rng.randrange(pattern.num_seats))
    table.assign_landlord(landlord)

    for _ in range(TURN_LIMIT):
        turns_before = len(table.history)
        _take_turn(table, policies[table.current_seat], landlord)
        executed = table.history[turns_before]
        if executed.play is not None:
            for policy in policies:
                policy.ledger.record(executed.play.cards)
        if table.winner_seat is not None:
            break
    else:
        raise RuntimeError(f"deal did not finish within {TURN_LIMIT} turns")

    result = DealResult(
        winner_seat=table.winner_seat,
        landlord_seat=landlord,
        bomb_count=table.bomb_count,
        history=tuple(table.history),
    )
    logger.info(
        "deal finished: seat %d (%s) wins after %d turns, multiplier x%d",
        result.winner_seat,
        result.winning_role.value,
        len(result.history),
        result.multiplier,
    )
    return result
