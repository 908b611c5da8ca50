"""Batch simulator replaying many rounds and tabulating strategy results."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence

from .game import RummyRound, seat_players
from .scoreboard import RoundResult, SimulationHistory, StrategyStats
from .state import DEFAULT_CONFIG, RummyConfig
from .strategy import RummyStrategy

__all__ = ["SimulationReport", "play_single_round", "run_simulation"]

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True, slots=True)
class SimulationReport:
    """Summary of a completed simulation."""

    history: SimulationHistory
    total_rounds: int
    seed: int | None
    started_at: datetime
    duration: float

    @property
    def stats(self) -> list[StrategyStats]:
        return self.history.stats()

    @property
    def ranked(self) -> list[StrategyStats]:
        return self.history.ranked()


def play_single_round(
    round_number: int,
    strategies: Sequence[RummyStrategy],
    rng: random.Random,
    config: RummyConfig = DEFAULT_CONFIG,
) -> RoundResult:
    """Deal and play one round with a fresh deck, returning its result."""

    game = RummyRound(seat_players(strategies), config=config, rng=rng)
    game.play()
    return game.get_round_result(round_number)


def run_simulation(
    rounds: int,
    strategies: Sequence[RummyStrategy],
    *,
    config: RummyConfig = DEFAULT_CONFIG,
    seed: int | None = None,
    progress: ProgressCallback | None = None,
) -> SimulationReport:
    """Play ``rounds`` rounds with one seat per entry of ``strategies``.

    Seats that share a strategy are tallied together under its name.
    """

    if rounds <= 0:
        raise ValueError("rounds must be positive")
    if not strategies:
        raise ValueError("at least one strategy is required")

    started_at = datetime.now()
    clock_start = time.perf_counter()
    rng = random.Random(seed)
    history = SimulationHistory(strategy_names=[strategy.name for strategy in strategies])
    logger.info(
        "Starting Simple Rummy simulation with %d round(s): %s",
        rounds,
        ", ".join(strategy.name for strategy in strategies),
    )

    for round_number in range(1, rounds + 1):
        round_rng = random.Random(rng.getrandbits(64))
        history.record(play_single_round(round_number, strategies, round_rng, config))
        if progress is not None:
            progress(round_number, rounds)

    duration = time.perf_counter() - clock_start
    logger.info("Simulation finished in %.2f second(s)", duration)
    return SimulationReport(
        history=history,
        total_rounds=rounds,
        seed=seed,
        started_at=started_at,
        duration=duration,
    )
