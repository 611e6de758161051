from __future__ import annotations

import random

import pytest

from doudizhu import match, scoreboard
from doudizhu.match import DealResult


def _result(winner: int, landlord: int, bombs: int = 0) -> DealResult:
    return DealResult(winner_seat=winner, landlord_seat=landlord, bomb_count=bombs, history=())


def test_match_history_accumulates_totals() -> None:
    history = scoreboard.MatchHistory(num_seats=3)
    history.record(_result(winner=0, landlord=0, bombs=1))
    history.record(_result(winner=2, landlord=1))

    totals = history.totals()
    assert len(history.deals) == 2
    assert [total.landlord_deals for total in totals] == [1, 1, 0]
    assert [total.landlord_wins for total in totals] == [1, 0, 0]
    assert [total.farmer_wins for total in totals] == [1, 0, 1]
    assert [total.wins for total in totals] == [2, 0, 1]
    # Landlord seat 0 wins x2 from each farmer, then seat 1 loses x1 to each farmer.
    assert [total.points for total in totals] == [4 + 1, -2 - 2, -2 + 1]
    assert sum(total.points for total in totals) == 0
    assert history.total_multiplier() == 3
    assert history.landlord_win_rate() == pytest.approx(0.5)


def test_match_history_validates_seat_indices() -> None:
    history = scoreboard.MatchHistory(num_seats=3)

    with pytest.raises(ValueError):
        history.record(_result(winner=3, landlord=0))


def test_match_history_rejects_single_seat() -> None:
    with pytest.raises(ValueError):
        scoreboard.MatchHistory(num_seats=1)


def test_empty_history_has_zero_rate() -> None:
    assert scoreboard.MatchHistory(num_seats=3).landlord_win_rate() == 0.0


def test_self_play_results_balance() -> None:
    rng = random.Random(5)
    history = scoreboard.MatchHistory(num_seats=3)
    for _ in range(3):
        history.record(match.play_deal(rng))

    assert sum(total.points for total in history.totals()) == 0
    assert sum(total.landlord_deals for total in history.totals()) == 3
