"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Suit
from ..encoding import rank_label
from ..evaluation import HandMetrics
from ..plays import Play
from ..scoreboard import MatchHistory

_SUIT_SYMBOLS = {
    Suit.SPADES: ("♠", "cyan"),
    Suit.HEARTS: ("♥", "red"),
    Suit.DIAMONDS: ("♦", "magenta"),
    Suit.CLUBS: ("♣", "green"),
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card.is_joker:
        color = "bold red" if card.label() == "JK" else "bold white"
        return f"[{color}]{card.code}[/{color}]"
    symbol, color = _SUIT_SYMBOLS[card.suit]
    return f"[{color}]{card.label()}{symbol}[/{color}]"


def format_hand(cards: Iterable[Card]) -> str:
    markup = " ".join(format_card(card) for card in cards)
    return markup or "—"


def _plays_table(plays: Sequence[Play], title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right")
    table.add_column("Shape", justify="left")
    table.add_column("Cards", justify="left")
    table.add_column("Rank", justify="right")
    table.add_column("Length", justify="right")
    for idx, play in enumerate(plays, start=1):
        table.add_row(
            str(idx),
            play.shape.display_name(),
            format_hand(play.cards),
            rank_label(play.main_rank),
            "" if play.length is None else str(play.length),
        )
    return table


def render_plays(plays: Sequence[Play], *, title: str = "Plays") -> RenderableType:
    """Return a table listing ``plays`` in the given order."""

    if not plays:
        return Panel("[dim]No legal plays[/dim]", title=title, border_style="yellow", box=box.ROUNDED)
    return _plays_table(plays, title)


def render_analysis(
    hand: Sequence[Card],
    classified: Play | None,
    metrics: HandMetrics,
    score: int,
    bid: bool,
) -> RenderableType:
    """Return a panel summarising a hand: shape, decomposition, score and bid decision."""

    grid = Table.grid(expand=True)
    grid.add_column(justify="left")
    grid.add_row(f"[cyan]Hand[/cyan]: {format_hand(hand)} ({len(hand)} card(s))")
    shape = classified.describe() if classified is not None else "[dim]not a single play[/dim]"
    grid.add_row(f"[cyan]As one play[/cyan]: {shape}")
    grid.add_row(f"[cyan]Moves to empty[/cyan]: {metrics.analysis.total_moves}")
    grid.add_row(f"[cyan]Bombs / rockets[/cyan]: {metrics.bombs} / {metrics.rockets}")
    grid.add_row(f"[cyan]Score[/cyan]: {score}")
    verdict = "[green]bid[/green]" if bid else "[red]pass[/red]"
    grid.add_row(f"[cyan]Bid decision[/cyan]: {verdict}")
    groups = _plays_table(metrics.analysis.groups, "Decomposition")
    return Panel(Group(grid, groups), title="Hand Analysis", border_style="cyan", box=box.ROUNDED)


def render_history(history: MatchHistory) -> RenderableType:
    """Return a per-seat results table for a self-play run."""

    table = Table(title="Self-Play Results", box=box.SIMPLE_HEAVY)
    table.add_column("Seat", justify="center")
    table.add_column("Landlord", justify="right")
    table.add_column("Landlord wins", justify="right")
    table.add_column("Farmer wins", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Points", justify="right")
    for total in history.totals():
        table.add_row(
            f"P{total.seat}",
            str(total.landlord_deals),
            str(total.landlord_wins),
            str(total.farmer_wins),
            str(total.wins),
            str(total.points),
        )
    return table
