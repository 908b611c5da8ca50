"""Turn engine: draw, declare and discard for one participant."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from .cards import Card, Deck
from .melds import HandAnalysis, analyze_hand
from .state import RoundState

__all__ = [
    "IllegalDraw",
    "IllegalDiscard",
    "TurnOutcome",
    "TurnRecord",
    "top_of_discard",
    "recycle_discard_pile",
    "draw_from_deck",
    "draw_from_discard",
    "sanitize_discard_index",
    "discard_card",
    "play_turn",
]

logger = logging.getLogger(__name__)


class IllegalDraw(RuntimeError):
    """Raised when drawing from an empty discard pile."""


class IllegalDiscard(RuntimeError):
    """Raised when there is no card to discard."""


class TurnOutcome(str, Enum):
    """How a single turn ended."""

    DISCARDED = "discarded"
    DECLARED = "declared"
    DECK_EXHAUSTED = "deck_exhausted"


@dataclass(frozen=True, slots=True)
class TurnRecord:
    """Summary of one participant's turn."""

    player_index: int
    outcome: TurnOutcome
    drew_from_deck: bool
    drawn_card: Card | None = None
    discarded_card: Card | None = None
    recycled: bool = False
    analysis: HandAnalysis | None = None

    @property
    def declared(self) -> bool:
        return self.outcome is TurnOutcome.DECLARED


def top_of_discard(discard_pile: list[Card]) -> Card | None:
    return discard_pile[-1] if discard_pile else None


def recycle_discard_pile(deck: Deck, discard_pile: list[Card], rng: random.Random | None = None) -> bool:
    """Shuffle all but the top discard back into ``deck``.

    Returns ``False`` without touching either pile when the discard pile
    holds one card or fewer.
    """

    if len(discard_pile) <= 1:
        return False
    top_card = discard_pile.pop()
    deck.rebuild(discard_pile, rng)
    discard_pile[:] = [top_card]
    logger.debug("Deck was empty; reshuffled %d discard(s) into a new deck", deck.remaining)
    return True


def draw_from_deck(
    deck: Deck, discard_pile: list[Card], rng: random.Random | None = None
) -> tuple[Card | None, bool]:
    """Draw the front card, recycling the discard pile if the deck is empty.

    Returns ``(card, recycled)``; ``card`` is ``None`` when the deck is empty
    and the discard pile cannot be recycled.
    """

    recycled = False
    if deck.remaining == 0:
        recycled = recycle_discard_pile(deck, discard_pile, rng)
        if not recycled:
            return None, False
    return deck.draw(), recycled


def draw_from_discard(discard_pile: list[Card]) -> Card:
    """Remove and return the top discard."""

    if not discard_pile:
        raise IllegalDraw("discard pile is empty")
    return discard_pile.pop()


def sanitize_discard_index(index: int, hand_size: int) -> int:
    """Return ``index`` if it addresses a card, otherwise 0."""

    if index < 0 or index >= hand_size:
        return 0
    return index


def discard_card(hand: list[Card], index: int, discard_pile: list[Card]) -> Card:
    """Move the card at ``index`` (sanitised) from ``hand`` to the discard pile."""

    if not hand:
        raise IllegalDiscard("hand is empty")
    card = hand.pop(sanitize_discard_index(index, len(hand)))
    discard_pile.append(card)
    return card


def play_turn(
    state: RoundState,
    player_index: int,
    deck: Deck,
    discard_pile: list[Card],
    rng: random.Random | None = None,
) -> TurnRecord:
    """Play one full turn for ``player_index``.

    The declaring branch ends the turn without a discard and records the
    player on ``state``. A declare request is only honoured when the
    post-draw analysis can go out. An unrecyclable empty deck ends the turn
    before anything is drawn.
    """

    player = state.players[player_index]
    strategy = player.strategy
    top_card = top_of_discard(discard_pile)

    wants_deck = strategy.draw_from_deck(tuple(player.hand), top_card)
    use_deck = wants_deck or top_card is None

    recycled = False
    if use_deck:
        drawn, recycled = draw_from_deck(deck, discard_pile, rng)
        if drawn is None:
            logger.info("Not enough cards to continue; %s cannot draw", player.name)
            return TurnRecord(
                player_index=player_index,
                outcome=TurnOutcome.DECK_EXHAUSTED,
                drew_from_deck=True,
                analysis=player.analysis,
            )
        logger.debug("%s draws from deck: %s", player.name, drawn)
    else:
        drawn = draw_from_discard(discard_pile)
        logger.debug("%s takes %s from discard pile", player.name, drawn)

    player.hand.append(drawn)
    analysis = analyze_hand(player.hand)
    player.analysis = analysis

    if strategy.should_declare(analysis) and analysis.can_go_out:
        state.declared_index = player_index
        logger.debug("%s declares and goes out", player.name)
        return TurnRecord(
            player_index=player_index,
            outcome=TurnOutcome.DECLARED,
            drew_from_deck=use_deck,
            drawn_card=drawn,
            recycled=recycled,
            analysis=analysis,
        )

    requested = strategy.select_discard_index(tuple(player.hand))
    discarded = discard_card(player.hand, requested, discard_pile)
    player.analysis = analyze_hand(player.hand)
    logger.debug("%s discards %s", player.name, discarded)

    return TurnRecord(
        player_index=player_index,
        outcome=TurnOutcome.DISCARDED,
        drew_from_deck=use_deck,
        drawn_card=drawn,
        discarded_card=discarded,
        recycled=recycled,
        analysis=player.analysis,
    )
