from __future__ import annotations

import logging

from doudizhu.ai.ledger import CardLedger
from doudizhu.ai.policy import DecisionPolicy, PolicyConfig, Role, opponent_seats, role_of
from doudizhu.cards import Card, from_rank_labels
from doudizhu.classify import classify
from doudizhu.plays import Play, PlayShape

LANDLORD = 0


def _cards(text: str) -> list[Card]:
    return from_rank_labels(text)


def _play(text: str) -> Play:
    play = classify(_cards(text))
    assert play is not None
    return play


def _summary(play: Play | None) -> tuple[PlayShape, int] | None:
    if play is None:
        return None
    return play.shape, play.main_rank


def test_roles_and_opponents() -> None:
    assert role_of(0, LANDLORD) is Role.LANDLORD
    assert role_of(2, LANDLORD) is Role.FARMER
    assert opponent_seats(0, LANDLORD, 3) == [1, 2]
    assert opponent_seats(1, LANDLORD, 3) == [0]


def test_bid_threshold_is_strict() -> None:
    hand = _cards("3 5 7 9")

    assert not DecisionPolicy().decide_bid(hand)
    assert DecisionPolicy(config=PolicyConfig(bid_threshold=59)).decide_bid(hand)


def test_strong_hand_bids() -> None:
    assert DecisionPolicy().decide_bid(_cards("SJ BJ 2 2 2 2"))


def test_empty_hand_passes() -> None:
    assert DecisionPolicy().decide([], None, 0, 0, LANDLORD, [0, 17, 17]) is None


def test_single_card_hand_is_played() -> None:
    play = DecisionPolicy().decide(_cards("BJ"), None, 0, 0, LANDLORD, [1, 17, 17])

    assert _summary(play) == (PlayShape.SINGLE, 17)


def test_lead_prefers_low_priority_shapes() -> None:
    play = DecisionPolicy().decide(_cards("9 3 3 K"), None, 0, 0, LANDLORD, [4, 17, 17])

    assert _summary(play) == (PlayShape.SINGLE, 9)


def test_lead_after_own_play_is_treated_as_a_lead() -> None:
    own = _play("A")

    play = DecisionPolicy().decide(_cards("9 3 3 K"), own, 0, 0, LANDLORD, [4, 17, 17])

    assert _summary(play) == (PlayShape.SINGLE, 9)


def test_lead_plays_highest_single_when_opponent_is_nearly_out() -> None:
    play = DecisionPolicy().decide(_cards("3 5 9 K"), None, 1, 1, LANDLORD, [2, 4, 10])

    assert _summary(play) == (PlayShape.SINGLE, 13)


def test_lead_plays_bomb_when_opponent_is_nearly_out() -> None:
    play = DecisionPolicy().decide(_cards("3 7 7 7 7"), None, 1, 1, LANDLORD, [1, 5, 10])

    assert _summary(play) == (PlayShape.BOMB, 7)


def test_lead_with_only_bombs_plays_the_smallest() -> None:
    play = DecisionPolicy().decide(_cards("7 7 7 7 SJ BJ"), None, 0, 0, LANDLORD, [6, 17, 17])

    assert _summary(play) == (PlayShape.BOMB, 7)


def test_farmer_does_not_beat_teammate() -> None:
    teammate_play = _play("8")

    play = DecisionPolicy().decide(_cards("9 K 2"), teammate_play, 1, 2, LANDLORD, [15, 4, 3])

    assert play is None


def test_landlord_answers_a_farmer() -> None:
    farmer_play = _play("8")

    play = DecisionPolicy().decide(_cards("4 9 K 2"), farmer_play, 1, 0, LANDLORD, [4, 10, 17])

    assert _summary(play) == (PlayShape.SINGLE, 9)


def test_follow_uses_smallest_beating_play() -> None:
    landlord_play = _play("8")

    play = DecisionPolicy().decide(_cards("4 K 9 2"), landlord_play, 0, 1, LANDLORD, [15, 4, 17])

    assert _summary(play) == (PlayShape.SINGLE, 9)


def test_follow_passes_when_nothing_beats() -> None:
    landlord_play = _play("2 2")

    play = DecisionPolicy().decide(_cards("3 4 5"), landlord_play, 0, 1, LANDLORD, [15, 3, 17])

    assert play is None


def test_bombs_are_conserved_in_large_hands() -> None:
    landlord_play = _play("2 2")

    play = DecisionPolicy().decide(_cards("3 3 3 3 4 5 6"), landlord_play, 0, 1, LANDLORD, [10, 7, 17])

    assert play is None


def test_bombs_are_spent_in_small_hands() -> None:
    landlord_play = _play("2 2")

    play = DecisionPolicy().decide(_cards("3 3 3 3 4 5"), landlord_play, 0, 1, LANDLORD, [10, 6, 17])

    assert _summary(play) == (PlayShape.BOMB, 3)


def test_bombs_are_spent_when_opponent_is_nearly_out() -> None:
    landlord_play = _play("2 2")

    play = DecisionPolicy().decide(_cards("3 3 3 3 4 5 6"), landlord_play, 0, 1, LANDLORD, [3, 7, 17])

    assert _summary(play) == (PlayShape.BOMB, 3)


def test_decide_reads_the_ledger_without_mutating_it() -> None:
    policy = DecisionPolicy()
    policy.ledger.record(_cards("A"))

    policy.decide(_cards("9 3 3 K"), None, 0, 0, LANDLORD, [4, 17, 17])

    assert policy.ledger.total_remaining() == 53


def test_follow_prefers_an_ordinary_play_over_a_bomb_when_opponent_is_nearly_out() -> None:
    landlord_play = _play("8")

    play = DecisionPolicy().decide(_cards("3 3 3 3 9 K A"), landlord_play, 0, 1, LANDLORD, [2, 7, 17])

    assert _summary(play) == (PlayShape.SINGLE, 9)


def test_bomb_estimate_is_skipped_unless_debug_logging(monkeypatch, caplog) -> None:
    def _fail(self, my_hand):
        raise AssertionError("estimate_opponent_bombs called without debug logging")

    caplog.set_level(logging.INFO, logger="doudizhu.ai.policy")
    monkeypatch.setattr(CardLedger, "estimate_opponent_bombs", _fail)

    play = DecisionPolicy().decide(_cards("9 3 3 K"), None, 0, 0, LANDLORD, [4, 17, 17])

    assert _summary(play) == (PlayShape.SINGLE, 9)
