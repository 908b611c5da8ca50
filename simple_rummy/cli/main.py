"""Typer entry-point wiring for the Simple Rummy CLI."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .. import simulation, strategies
from ..game import RULES_TEXT, RummyRound, seat_players
from ..state import RummyConfig
from ..strategy import RummyStrategy
from .render import render_round, render_stats

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _resolve_strategies(names: Optional[List[str]]) -> list[RummyStrategy]:
    if not names:
        return strategies.default_strategies()
    resolved: list[RummyStrategy] = []
    for name in names:
        try:
            resolved.append(strategies.strategy_by_name(name))
        except KeyError as exc:
            raise typer.BadParameter(f"Unknown strategy '{name}'.", param_hint="--strategy") from exc
    return resolved


def _build_config(hand_size: int, max_turns: int, seats: int) -> RummyConfig:
    config = RummyConfig(hand_size=hand_size, max_turns=max_turns)
    if seats * hand_size + 1 > 52:
        raise typer.BadParameter("Not enough cards to deal that many hands.", param_hint="--hand-size")
    return config


@app.command()
def simulate(
    rounds: int = typer.Option(1000, min=1, help="Number of rounds to simulate."),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible runs (omit for randomness)."),
    hand_size: int = typer.Option(7, min=1, help="Cards dealt to each player."),
    max_turns: int = typer.Option(10, min=1, help="Turns played before the round is scored on points."),
    strategy: Optional[List[str]] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Strategy to seat (repeatable). Defaults to all stock strategies.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Narrate every turn."),
) -> None:
    """Run a batch simulation and print per-strategy statistics."""

    _configure_logging(verbose)
    seated = _resolve_strategies(strategy)
    config = _build_config(hand_size, max_turns, len(seated))

    checkpoint = max(1, rounds // 10)

    def _progress(done: int, total: int) -> None:
        if total >= 100 and done % checkpoint == 0:
            console.print(f"[dim]Progress: {done}/{total} rounds ({done / total * 100:.1f}%)[/dim]")

    report = simulation.run_simulation(rounds, seated, config=config, seed=seed, progress=_progress)

    console.print(render_stats(report.stats, title="Simple Rummy Simulation"))
    console.print("[bold]Strategy Rankings (by Win Rate):[/bold]")
    for position, entry in enumerate(report.ranked, start=1):
        console.print(f"{position}. {entry.strategy_name}: {entry.win_rate:.1f}% win rate")
    console.print(f"[cyan]{report.total_rounds} round(s) simulated.[/cyan]")
    console.print(f"Duration: {report.duration:.2f} seconds")


@app.command()
def deal(
    seed: Optional[int] = typer.Option(None, help="Random seed for the round."),
    hand_size: int = typer.Option(7, min=1, help="Cards dealt to each player."),
    max_turns: int = typer.Option(10, min=1, help="Turns played before the round is scored on points."),
    strategy: Optional[List[str]] = typer.Option(None, "--strategy", "-s", help="Strategy to seat (repeatable)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Narrate every turn."),
) -> None:
    """Play a single round and show every final hand."""

    _configure_logging(verbose)
    seated = _resolve_strategies(strategy)
    config = _build_config(hand_size, max_turns, len(seated))

    game = RummyRound(seat_players(seated), config=config, rng=random.Random(seed))
    resolution = game.play()
    console.print(render_round(game.players, resolution))
    console.print(
        f"[cyan]Round ended ({game.terminal_phase.value}) after {game.state.turn_number} turn(s); "
        f"{len(game.turns)} player turn(s) taken.[/cyan]"
    )


@app.command("rules")
def rules_cli(
    hand_size: int = typer.Option(7, min=1, help="Cards dealt to each player."),
    max_turns: int = typer.Option(10, min=1, help="Turn limit."),
) -> None:
    """Print the rules of Simple Rummy."""

    console.print(RULES_TEXT.format(hand_size=hand_size, max_turns=max_turns), markup=False)


def main() -> None:
    """Entry-point for ``python -m simple_rummy.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
