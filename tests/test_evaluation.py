from __future__ import annotations

import pytest

from doudizhu.cards import from_rank_labels
from doudizhu.evaluation import ScoreWeights, analyze_hand, score_hand


@pytest.mark.parametrize(
    ("labels", "expected"),
    [
        ("3", 90),
        ("3 5 7 9", 60),
        ("3 4 5 6 7", 90),
        ("2", 95),
        ("SJ", 98),
        ("BJ", 100),
        ("SJ BJ", 138),
        ("SJ BJ 2 2 2 2", 168),
    ],
)
def test_score_hand(labels: str, expected: int) -> None:
    assert score_hand(from_rank_labels(labels)) == expected


def test_fewer_moves_score_higher() -> None:
    loose = from_rank_labels("3 5 7 9 J K")
    tight = from_rank_labels("3 4 5 6 7 8")

    assert score_hand(tight) > score_hand(loose)


def test_analyze_hand_reports_premium_cards() -> None:
    metrics = analyze_hand(from_rank_labels("SJ BJ 2 2 2 2 5"))

    assert metrics.rockets == 1
    assert metrics.bombs == 1
    assert metrics.has_big_joker
    assert metrics.has_small_joker
    assert metrics.twos == 4
    assert metrics.analysis.total_moves == 3


def test_custom_weights_change_the_score() -> None:
    weights = ScoreWeights(base=0, per_move=1, per_two=0)

    assert score_hand(from_rank_labels("3 5 2"), weights) == -3
