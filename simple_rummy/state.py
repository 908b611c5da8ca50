"""Round state data structures for Simple Rummy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from .cards import Card
from .melds import EMPTY_ANALYSIS, HandAnalysis
from .strategy import RummyStrategy


class RoundPhase(str, Enum):
    """Phases of the round state machine."""

    DEALING = "dealing"
    TURN_LOOP = "turn_loop"
    DECLARED = "declared"
    MAX_TURNS_REACHED = "max_turns_reached"
    DECK_EXHAUSTED = "deck_exhausted"
    RESOLVED = "resolved"


@dataclass(frozen=True, slots=True)
class RummyConfig:
    """Runtime configuration for a single round."""

    hand_size: int = 7
    max_turns: int = 10

    def __post_init__(self) -> None:
        if self.hand_size <= 0:
            raise ValueError("hand_size must be positive")
        if self.max_turns <= 0:
            raise ValueError("max_turns must be positive")


DEFAULT_CONFIG: Final[RummyConfig] = RummyConfig()


@dataclass(slots=True)
class PlayerState:
    """A seated participant: its strategy, hand and cached analysis."""

    name: str
    strategy: RummyStrategy
    hand: list[Card] = field(default_factory=list)
    analysis: HandAnalysis = EMPTY_ANALYSIS

    @property
    def strategy_name(self) -> str:
        return self.strategy.name


@dataclass(slots=True)
class RoundState:
    """Mutable state tracked across the turns of one round."""

    players: list[PlayerState]
    max_turns: int
    turn_number: int = 0
    declared_index: int | None = None
    phase: RoundPhase = RoundPhase.DEALING

    def analyses(self) -> list[HandAnalysis]:
        """Return the cached analysis of every player in seating order."""

        return [player.analysis for player in self.players]
