"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich import box
from rich.table import Table

from ..cards import Card
from ..scoreboard import StrategyStats
from ..scoring import RoundResolution
from ..state import PlayerState

_SUIT_SYMBOLS = {
    "S": ("♠", "cyan"),
    "H": ("♥", "red"),
    "D": ("♦", "magenta"),
    "C": ("♣", "green"),
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    symbol, color = _SUIT_SYMBOLS.get(card.suit.value, (card.suit.value, "white"))
    return f"[{color}]{card.rank.value}{symbol}[/{color}]"


def format_cards(cards: Iterable[Card]) -> str:
    rendered = [format_card(card) for card in cards]
    return " ".join(rendered) if rendered else "—"


def render_stats(stats: Sequence[StrategyStats], *, title: str) -> Table:
    """Return the per-strategy performance table."""

    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Strategy", justify="left")
    table.add_column("Games", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Losses", justify="right")
    table.add_column("Pushes", justify="right")
    table.add_column("Went out", justify="right")
    table.add_column("Win%", justify="right")
    table.add_column("Out%", justify="right")

    best = max((entry.win_rate for entry in stats), default=0.0)
    for entry in stats:
        name = entry.strategy_name
        win_rate = f"{entry.win_rate:.1f}%"
        if entry.games and entry.win_rate == best:
            name = f"[bold blue]{name}[/bold blue]"
            win_rate = f"[bold blue]{win_rate}[/bold blue]"
        table.add_row(
            name,
            str(entry.games),
            str(entry.wins),
            str(entry.losses),
            str(entry.pushes),
            str(entry.went_out),
            win_rate,
            f"{entry.go_out_rate:.1f}%",
        )
    return table


def render_round(players: Sequence[PlayerState], resolution: RoundResolution) -> Table:
    """Return a table describing every final hand of a resolved round."""

    table = Table(title="Round Summary", box=box.SIMPLE_HEAVY)
    table.add_column("Player", justify="left")
    table.add_column("Strategy", justify="left")
    table.add_column("Sets", justify="left")
    table.add_column("Runs", justify="left")
    table.add_column("Unmatched", justify="left")
    table.add_column("Points", justify="right")
    table.add_column("Result", justify="center")

    for player, entry in zip(players, resolution.results):
        analysis = player.analysis
        sets = "; ".join(format_cards(meld.cards) for meld in analysis.sets) or "—"
        runs = "; ".join(format_cards(meld.cards) for meld in analysis.runs) or "—"
        if entry.went_out:
            result = "[bold green]Went out[/bold green]"
        elif entry.is_winner:
            result = "[bold green]Win[/bold green]"
        else:
            result = "Loss"
        table.add_row(
            player.name,
            player.strategy_name,
            sets,
            runs,
            format_cards(analysis.unmatched_cards),
            str(entry.unmatched_points),
            result,
        )
    return table
