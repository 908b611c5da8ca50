"""Stock heuristic strategies for Simple Rummy."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from .cards import Card
from .melds import HandAnalysis, analyze_hand
from .strategy import RummyStrategy

__all__ = [
    "SET_FOCUS",
    "RUN_FOCUS",
    "BALANCED",
    "LOW_POINT",
    "default_strategies",
    "strategy_by_name",
]


def _pairs_rank(hand: Sequence[Card], card: Card, *, upper: int | None = 3) -> bool:
    count = sum(1 for other in hand if other.rank == card.rank)
    if upper is None:
        return count >= 1
    return 1 <= count < upper


def _extends_run(hand: Sequence[Card], card: Card) -> bool:
    return any(
        other.suit == card.suit and abs(other.sequence_value - card.sequence_value) == 1
        for other in hand
    )


def _highest_unmatched_index(hand: Sequence[Card], analysis: HandAnalysis) -> int:
    target = max(analysis.unmatched_cards, key=lambda card: card.point_value)
    return list(hand).index(target)


def _declare_when_out(analysis: HandAnalysis) -> bool:
    return analysis.can_go_out


# Set focus


def _set_focus_draw(hand: Sequence[Card], top_discard: Card | None) -> bool:
    if top_discard is not None and _pairs_rank(hand, top_discard):
        return False
    return True


def _set_focus_discard(hand: Sequence[Card]) -> int:
    analysis = analyze_hand(hand)
    if not analysis.unmatched_cards:
        return 0
    counts = Counter(card.rank for card in hand)
    singles = [card for card in hand if counts[card.rank] == 1]
    pool = singles or list(hand)
    target = max(pool, key=lambda card: card.sequence_value)
    return list(hand).index(target)


# Run focus


def _run_focus_draw(hand: Sequence[Card], top_discard: Card | None) -> bool:
    if top_discard is not None and _extends_run(hand, top_discard):
        return False
    return True


def _run_focus_discard(hand: Sequence[Card]) -> int:
    analysis = analyze_hand(hand)
    if not analysis.unmatched_cards:
        return 0
    for idx, card in enumerate(hand):
        others = [other for pos, other in enumerate(hand) if pos != idx]
        if not _extends_run(others, card):
            return idx
    return _highest_unmatched_index(hand, analysis)


def _run_focus_declare(analysis: HandAnalysis) -> bool:
    return analysis.can_go_out and len(analysis.runs) > 0


# Balanced


def _balanced_draw(hand: Sequence[Card], top_discard: Card | None) -> bool:
    if top_discard is None:
        return True
    if _pairs_rank(hand, top_discard) or _extends_run(hand, top_discard):
        return False
    return True


def _discard_highest_unmatched(hand: Sequence[Card]) -> int:
    analysis = analyze_hand(hand)
    if not analysis.unmatched_cards:
        return 0
    return _highest_unmatched_index(hand, analysis)


# Low point

LOW_POINT_TAKE_LIMIT = 5
LOW_POINT_ALWAYS_TAKE = 3
LOW_POINT_DECLARE_LIMIT = 10


def _low_point_draw(hand: Sequence[Card], top_discard: Card | None) -> bool:
    if top_discard is None or top_discard.point_value > LOW_POINT_TAKE_LIMIT:
        return True
    if _pairs_rank(hand, top_discard, upper=None) or _extends_run(hand, top_discard):
        return False
    return top_discard.point_value > LOW_POINT_ALWAYS_TAKE


def _low_point_declare(analysis: HandAnalysis) -> bool:
    # The engine ignores the request unless the hand can actually go out.
    return analysis.can_go_out or analysis.unmatched_points <= LOW_POINT_DECLARE_LIMIT


SET_FOCUS = RummyStrategy(
    name="Set Focus",
    draw_from_deck=_set_focus_draw,
    select_discard_index=_set_focus_discard,
    should_declare=_declare_when_out,
)
RUN_FOCUS = RummyStrategy(
    name="Run Focus",
    draw_from_deck=_run_focus_draw,
    select_discard_index=_run_focus_discard,
    should_declare=_run_focus_declare,
)
BALANCED = RummyStrategy(
    name="Balanced",
    draw_from_deck=_balanced_draw,
    select_discard_index=_discard_highest_unmatched,
    should_declare=_declare_when_out,
)
LOW_POINT = RummyStrategy(
    name="Low Point",
    draw_from_deck=_low_point_draw,
    select_discard_index=_discard_highest_unmatched,
    should_declare=_low_point_declare,
)


def default_strategies() -> list[RummyStrategy]:
    """Return the stock strategies in their canonical order."""

    return [SET_FOCUS, RUN_FOCUS, BALANCED, LOW_POINT]


def strategy_by_name(name: str) -> RummyStrategy:
    """Look up a stock strategy by name, ignoring case."""

    wanted = name.strip().lower()
    for strategy in default_strategies():
        if strategy.name.lower() == wanted:
            return strategy
    raise KeyError(f"unknown strategy '{name}'")
