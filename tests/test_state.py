from __future__ import annotations

import pytest

from doudizhu.cards import Card, from_rank_labels
from doudizhu.classify import classify
from doudizhu.encoding import rank_label
from doudizhu.plays import Play, PlayShape
from doudizhu.rules import Deal, IllegalPlay
from doudizhu.state import Phase, TableState, new_table


def _table(*hands: str, kitty: str = "") -> TableState:
    labels = [hand.split() for hand in hands]
    pool = from_rank_labels(" ".join(" ".join(hand) for hand in labels) + " " + kitty)
    seats: list[tuple[Card, ...]] = []
    offset = 0
    for hand in labels:
        seats.append(tuple(pool[offset : offset + len(hand)]))
        offset += len(hand)
    return new_table(Deal(hands=tuple(seats), landlord_cards=tuple(pool[offset:])))


def _held(table: TableState, seat: int, labels: str) -> Play:
    hand = list(table.seats[seat].hand)
    cards: list[Card] = []
    for label in labels.split():
        card = next(card for card in hand if rank_label(card.rank) == label)
        hand.remove(card)
        cards.append(card)
    play = classify(cards)
    assert play is not None
    return play


def test_assign_landlord_merges_the_kitty() -> None:
    table = _table("3 4", "5 6", "7 8", kitty="9 10 J")

    table.assign_landlord(1)

    assert table.phase is Phase.PLAYING
    assert table.landlord_seat == 1
    assert table.current_seat == 1
    assert [card.rank for card in table.seats[1].hand] == [5, 6, 9, 10, 11]
    assert table.seats[1].is_landlord
    with pytest.raises(RuntimeError):
        table.assign_landlord(0)


def test_cannot_act_before_landlord_is_assigned() -> None:
    table = _table("3", "4", "5")

    with pytest.raises(IllegalPlay):
        table.apply_play(0, _held(table, 0, "3"))


def test_turns_rotate_and_two_passes_clear_the_table() -> None:
    table = _table("3 9", "5 6", "7 8")
    table.assign_landlord(0)

    table.apply_play(0, _held(table, 0, "3"))
    assert table.current_seat == 1
    assert table.outstanding_for(1) is not None

    table.apply_pass(1)
    table.apply_pass(2)

    assert table.last_play is None
    assert table.current_seat == 0
    assert table.outstanding_for(0) is None
    assert table.hand_sizes() == [1, 2, 2]


def test_leader_cannot_pass() -> None:
    table = _table("3", "4", "5")
    table.assign_landlord(0)

    with pytest.raises(IllegalPlay):
        table.apply_pass(0)


def test_play_must_beat_the_outstanding_play() -> None:
    table = _table("8 9", "5 6", "7 K")
    table.assign_landlord(0)
    table.apply_play(0, _held(table, 0, "8"))

    with pytest.raises(IllegalPlay):
        table.apply_play(1, _held(table, 1, "5"))
    with pytest.raises(IllegalPlay):
        table.apply_play(2, _held(table, 2, "K"))


def test_bombs_double_the_multiplier_and_emptying_a_hand_wins() -> None:
    table = _table("8 9", "5 5 5 5", "7 K")
    table.assign_landlord(0)
    table.apply_play(0, _held(table, 0, "8"))

    table.apply_play(1, _held(table, 1, "5 5 5 5"))

    assert table.bomb_count == 1
    assert table.multiplier == 2
    assert table.winner_seat == 1
    assert table.phase is Phase.COMPLETE
    assert [record.seat for record in table.history] == [0, 1]


def test_play_labelled_as_a_different_shape_is_rejected() -> None:
    table = _table("3 3 3 4 9", "2 2 2 2 5", "7 K")
    table.assign_landlord(1)
    table.apply_play(1, _held(table, 1, "2 2 2 2"))
    table.apply_pass(2)
    triple = _held(table, 0, "3 3 3 4")
    mislabelled = Play(PlayShape.BOMB, triple.cards, 16)

    with pytest.raises(IllegalPlay):
        table.apply_play(0, mislabelled)
    assert table.bomb_count == 1
    assert len(table.seats[0].hand) == 5
