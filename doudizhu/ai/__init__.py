"""Automated opponent: card ledger and decision policy."""

from . import ledger, policy
from .ledger import CardLedger
from .policy import DecisionPolicy, PolicyConfig

__all__ = [
    "ledger",
    "policy",
    "CardLedger",
    "DecisionPolicy",
    "PolicyConfig",
]
