"""Decision-maker contract consumed by the turn engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from .cards import Card
from .melds import HandAnalysis


class DrawSourceDecision(Protocol):
    """Return ``True`` to draw from the deck, ``False`` to take the discard."""

    def __call__(self, hand: Sequence[Card], top_discard: Card | None) -> bool:  # pragma: no cover - protocol only
        ...


class DiscardDecision(Protocol):
    """Return the index of the card to discard from ``hand``."""

    def __call__(self, hand: Sequence[Card]) -> int:  # pragma: no cover - protocol only
        ...


class DeclareDecision(Protocol):
    """Return ``True`` to request going out with the current analysis."""

    def __call__(self, analysis: HandAnalysis) -> bool:  # pragma: no cover - protocol only
        ...


@dataclass(frozen=True, slots=True)
class RummyStrategy:
    """Named bundle of the three per-turn decisions.

    Each decision is an independent callable so strategies can be composed
    from plain functions or closures. The engine calls them once per
    relevant turn phase and lets any exception propagate.
    """

    name: str
    draw_from_deck: DrawSourceDecision
    select_discard_index: DiscardDecision
    should_declare: DeclareDecision
