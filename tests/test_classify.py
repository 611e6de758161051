from __future__ import annotations

import pytest

from doudizhu.cards import Card, from_rank_labels
from doudizhu.classify import classify, consecutive_windows, is_consecutive_run
from doudizhu.plays import Play, PlayShape


def _cards(text: str) -> list[Card]:
    return from_rank_labels(text)


@pytest.mark.parametrize(
    ("labels", "shape", "main_label_rank", "length"),
    [
        ("7", PlayShape.SINGLE, 7, None),
        ("BJ", PlayShape.SINGLE, 17, None),
        ("9 9", PlayShape.PAIR, 9, None),
        ("SJ BJ", PlayShape.ROCKET, 17, None),
        ("K K K", PlayShape.TRIPLE, 13, None),
        ("5 5 5 5", PlayShape.BOMB, 5, None),
        ("6 6 6 9", PlayShape.TRIPLE_WITH_SINGLE, 6, None),
        ("3 3 3 4 4", PlayShape.TRIPLE_WITH_PAIR, 3, None),
        ("3 4 5 6 7", PlayShape.SEQUENCE, 3, 5),
        ("10 J Q K A", PlayShape.SEQUENCE, 10, 5),
        ("3 4 5 6 7 8 9 10 J Q K A", PlayShape.SEQUENCE, 3, 12),
        ("3 3 4 4 5 5", PlayShape.SEQUENCE_PAIR, 3, 3),
        ("7 7 7 8 8 8", PlayShape.SEQUENCE_TRIPLE, 7, 2),
        ("9 9 9 9 3 4", PlayShape.FOUR_WITH_TWO_SINGLES, 9, None),
        ("9 9 9 9 3 3 4 4", PlayShape.FOUR_WITH_TWO_PAIRS, 9, None),
        ("3 3 3 4 4 4 7 9", PlayShape.PLANE_WITH_SINGLES, 3, 2),
        ("3 3 3 4 4 4 7 7 9 9", PlayShape.PLANE_WITH_PAIRS, 3, 2),
        ("8 8 8 9 9 9 10 10 10 3 4 5", PlayShape.PLANE_WITH_SINGLES, 8, 3),
    ],
)
def test_classify_recognises_shapes(
    labels: str,
    shape: PlayShape,
    main_label_rank: int,
    length: int | None,
) -> None:
    play = classify(_cards(labels))

    assert play is not None
    assert play.shape is shape
    assert play.main_rank == main_label_rank
    assert play.length == length


@pytest.mark.parametrize(
    "labels",
    [
        "",
        "3 4",
        "3 3 4",
        "A A K K",
        "J Q K A 2",
        "3 4 5 6",
        "K A 2 SJ BJ",
        "3 3 4 4",
        "3 3 3 5 5 5",
        "9 9 9 9 3 3 4",
        "3 3 3 4 4 4 5 5 6",
    ],
)
def test_classify_rejects_non_plays(labels: str) -> None:
    assert classify(_cards(labels)) is None


def test_bomb_is_recognised_before_triple_with_single() -> None:
    play = classify(_cards("4 4 4 4"))

    assert play is not None
    assert play.shape is PlayShape.BOMB


def test_six_card_run_is_a_sequence() -> None:
    play = classify(_cards("5 6 7 8 9 10"))

    assert play is not None
    assert play.shape is PlayShape.SEQUENCE
    assert play.length == 6


def test_plane_with_singles_accepts_a_wing_from_a_core_rank() -> None:
    play = classify(_cards("3 3 3 3 4 4 4 5"))

    assert play is not None
    assert play.shape is PlayShape.PLANE_WITH_SINGLES
    assert play.main_rank == 3


def test_plane_with_singles_accepts_paired_wings() -> None:
    play = classify(_cards("3 3 3 4 4 4 9 9"))

    assert play is not None
    assert play.shape is PlayShape.PLANE_WITH_SINGLES


def test_classify_keeps_the_given_cards() -> None:
    hand = _cards("6 6 6 9")
    play = classify(hand)

    assert isinstance(play, Play)
    assert sorted(play.cards) == sorted(hand)


@pytest.mark.parametrize(
    ("ranks", "expected"),
    [
        ([3, 4, 5, 6, 7], True),
        ([10, 11, 12, 13, 14], True),
        ([11, 12, 13, 14, 15], False),
        ([3, 5, 6], False),
        ([], False),
    ],
)
def test_is_consecutive_run(ranks: list[int], expected: bool) -> None:
    assert is_consecutive_run(ranks) is expected


def test_consecutive_windows_skip_gaps() -> None:
    assert consecutive_windows([3, 4, 5, 7, 8], 2) == [(3, 4), (4, 5), (7, 8)]
