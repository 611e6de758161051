"""Top-level package for the Dou Dizhu rules engine and automated opponent."""

from . import actions, cards, classify, decompose, encoding, evaluation, plays, rules, state

__all__ = [
    "actions",
    "cards",
    "classify",
    "decompose",
    "encoding",
    "evaluation",
    "plays",
    "rules",
    "state",
]
