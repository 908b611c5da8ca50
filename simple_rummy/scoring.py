"""Round resolution and tie-breaking."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .cards import Card
from .melds import HandAnalysis
from .state import RoundState

__all__ = ["PlayerRoundResult", "RoundResolution", "select_winner", "resolve_round"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlayerRoundResult:
    """Per-player outcome captured at the end of a round."""

    player_index: int
    name: str
    strategy_name: str
    went_out: bool
    is_winner: bool
    unmatched_points: int
    combinations_count: int
    hand: tuple[Card, ...] = ()


@dataclass(frozen=True, slots=True)
class RoundResolution:
    """Winner and per-player breakdown of a resolved round."""

    winner_index: int | None
    results: tuple[PlayerRoundResult, ...]

    @property
    def winner(self) -> PlayerRoundResult | None:
        if self.winner_index is None:
            return None
        return self.results[self.winner_index]


def select_winner(analyses: Sequence[HandAnalysis], declared_index: int | None = None) -> int | None:
    """Return the seat index of the round winner.

    A declared player always wins. Otherwise the lowest unmatched points
    win; ties go to the most combinations, then to the earliest seat.
    """

    if declared_index is not None:
        return declared_index
    if not analyses:
        return None

    lowest = min(analysis.unmatched_points for analysis in analyses)
    tied = [idx for idx, analysis in enumerate(analyses) if analysis.unmatched_points == lowest]
    if len(tied) == 1:
        return tied[0]

    # max() keeps the first maximal element, so remaining ties fall to seat order.
    winner = max(tied, key=lambda idx: analyses[idx].combinations_count)
    logger.debug(
        "Tie between %d players on %d points; seat %d wins with %d combination(s)",
        len(tied),
        lowest,
        winner,
        analyses[winner].combinations_count,
    )
    return winner


def resolve_round(state: RoundState) -> RoundResolution:
    """Resolve ``state`` into a winner and one result per player."""

    analyses = state.analyses()
    winner_index = select_winner(analyses, state.declared_index)

    results: list[PlayerRoundResult] = []
    for idx, (player, analysis) in enumerate(zip(state.players, analyses)):
        went_out = idx == state.declared_index
        results.append(
            PlayerRoundResult(
                player_index=idx,
                name=player.name,
                strategy_name=player.strategy_name,
                went_out=went_out,
                is_winner=idx == winner_index,
                unmatched_points=0 if went_out else analysis.unmatched_points,
                combinations_count=analysis.combinations_count,
                hand=tuple(player.hand),
            )
        )

    return RoundResolution(winner_index=winner_index, results=tuple(results))
