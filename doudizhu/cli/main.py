"""Typer entry-point wiring for the Dou Dizhu CLI."""

from __future__ import annotations

import logging
import random

import typer
from rich.console import Console
from rich.logging import RichHandler

from .. import actions, match, scoreboard
from ..ai.policy import DEFAULT_POLICY_CONFIG, DecisionPolicy, PolicyConfig
from ..cards import Card
from ..classify import classify
from ..evaluation import analyze_hand
from ..plays import Play
from ..rules import DEFAULT_DEAL_PATTERN, InvalidHand, parse_cards
from .render import render_analysis, render_history, render_plays

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _parse(text: str, param: str) -> list[Card]:
    try:
        cards = parse_cards(text)
    except InvalidHand as exc:
        raise typer.BadParameter(str(exc), param_hint=param) from exc
    if not cards:
        raise typer.BadParameter("no cards given", param_hint=param)
    return cards


def _reference_play(text: str) -> Play:
    cards = _parse(text, "--beat")
    reference = classify(cards)
    if reference is None:
        raise typer.BadParameter(f"{text!r} is not a legal play", param_hint="--beat")
    return reference


@app.command()
def analyze(
    cards: str = typer.Argument(..., help='Cards to inspect, e.g. "3S 3H 3D 4C 4S".'),
    bid_threshold: int = typer.Option(
        DEFAULT_POLICY_CONFIG.bid_threshold, help="Bid when the hand score is strictly above this."
    ),
) -> None:
    """Classify CARDS, decompose them and show the bidding verdict."""

    hand = _parse(cards, "CARDS")
    config = PolicyConfig(bid_threshold=bid_threshold)
    metrics = analyze_hand(hand)
    score = metrics.score(config.score_weights)
    bid = DecisionPolicy(config=config).decide_bid(hand)
    console.print(render_analysis(hand, classify(hand), metrics, score, bid))


@app.command()
def hints(
    cards: str = typer.Argument(..., help="Cards in hand."),
    beat: str | None = typer.Option(None, "--beat", help="Play on the table that must be beaten."),
) -> None:
    """List the legal plays for a hand, optionally only those beating ``--beat``."""

    hand = _parse(cards, "CARDS")
    if beat is None:
        plays = actions.enumerate_all(hand)
        title = "Legal Plays"
    else:
        reference = _reference_play(beat)
        plays = actions.enumerate_beating(hand, reference)
        title = f"Plays Beating {reference.describe()}"
    console.print(render_plays(plays, title=title))


@app.command()
def simulate(
    deals: int = typer.Option(10, min=1, help="Number of self-play deals."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible runs (omit for randomness)."),
    bid_threshold: int = typer.Option(
        DEFAULT_POLICY_CONFIG.bid_threshold, help="Bid threshold used by every automated seat."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every decision."),
) -> None:
    """Run automated self-play deals and print the per-seat results."""

    _configure_logging(verbose)
    rng = random.Random(seed)
    config = PolicyConfig(bid_threshold=bid_threshold)
    policies = [DecisionPolicy(config=config) for _ in range(DEFAULT_DEAL_PATTERN.num_seats)]
    history = scoreboard.MatchHistory(num_seats=DEFAULT_DEAL_PATTERN.num_seats)

    for _ in range(deals):
        history.record(match.play_deal(rng, policies))

    console.print(render_history(history))
    rate = history.landlord_win_rate()
    console.print(
        f"[cyan]{len(history.deals)} deal(s) simulated; landlord won {rate:.0%}, "
        f"total multiplier {history.total_multiplier()}.[/cyan]"
    )


def main() -> None:
    """Entry-point for ``python -m doudizhu.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
