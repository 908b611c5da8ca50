"""Round-result contract and per-strategy aggregation across rounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

import numpy as np

__all__ = [
    "GameResult",
    "ParticipantOutcome",
    "RoundResult",
    "StrategyStats",
    "SimulationHistory",
]


class GameResult(str, Enum):
    """Outcome of a round from one participant's point of view."""

    WIN = "win"
    LOSS = "loss"
    PUSH = "push"


_RESULT_COLUMNS: dict[GameResult, int] = {result: idx for idx, result in enumerate(GameResult)}
_WENT_OUT_COLUMN = len(_RESULT_COLUMNS)


@dataclass(frozen=True, slots=True)
class ParticipantOutcome:
    """One participant's entry in a :class:`RoundResult`."""

    participant_name: str
    strategy_name: str
    result: GameResult
    unmatched_points: int
    went_out: bool
    combinations_count: int


@dataclass(frozen=True, slots=True)
class RoundResult:
    """Outcomes of every participant for a single round."""

    round_number: int
    outcomes: Sequence[ParticipantOutcome]


@dataclass(frozen=True, slots=True)
class StrategyStats:
    """Aggregate statistics collected for a single strategy."""

    strategy_name: str
    games: int
    wins: int
    losses: int
    pushes: int
    went_out: int

    @property
    def win_rate(self) -> float:
        return self.wins / self.games * 100 if self.games else 0.0

    @property
    def loss_rate(self) -> float:
        return self.losses / self.games * 100 if self.games else 0.0

    @property
    def go_out_rate(self) -> float:
        return self.went_out / self.games * 100 if self.games else 0.0


@dataclass(slots=True)
class SimulationHistory:
    """Mutable tracker that accumulates round results per strategy."""

    strategy_names: Sequence[str]
    rounds: list[RoundResult] = field(default_factory=list)
    _columns: dict[str, int] = field(init=False, repr=False)
    _counts: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.strategy_names:
            raise ValueError("at least one strategy is required")
        # seats sharing a strategy share its row
        self._columns = {}
        for name in self.strategy_names:
            self._columns.setdefault(name, len(self._columns))
        # rows: strategies; columns: win, loss, push, went out
        self._counts = np.zeros((len(self._columns), _WENT_OUT_COLUMN + 1), dtype=np.int64)

    def record(self, result: RoundResult) -> None:
        """Record ``result`` and update the per-strategy counters."""

        for outcome in result.outcomes:
            row = self._columns.get(outcome.strategy_name)
            if row is None:
                raise ValueError(f"unknown strategy '{outcome.strategy_name}'")
            self._counts[row, _RESULT_COLUMNS[outcome.result]] += 1
            if outcome.went_out:
                self._counts[row, _WENT_OUT_COLUMN] += 1
        self.rounds.append(result)

    def stats(self) -> list[StrategyStats]:
        """Return the cumulative statistics in registration order."""

        games = self._counts[:, :_WENT_OUT_COLUMN].sum(axis=1)
        return [
            StrategyStats(
                strategy_name=name,
                games=int(games[row]),
                wins=int(self._counts[row, _RESULT_COLUMNS[GameResult.WIN]]),
                losses=int(self._counts[row, _RESULT_COLUMNS[GameResult.LOSS]]),
                pushes=int(self._counts[row, _RESULT_COLUMNS[GameResult.PUSH]]),
                went_out=int(self._counts[row, _WENT_OUT_COLUMN]),
            )
            for name, row in self._columns.items()
        ]

    def ranked(self) -> list[StrategyStats]:
        """Return statistics ordered by descending win rate."""

        return sorted(self.stats(), key=lambda entry: entry.win_rate, reverse=True)
