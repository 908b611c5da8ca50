"""Round controller driving the turn loop through its terminal phases."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from . import rules
from .cards import Card, Deck
from .melds import analyze_hand
from .scoreboard import GameResult, ParticipantOutcome, RoundResult
from .scoring import RoundResolution, resolve_round
from .state import DEFAULT_CONFIG, PlayerState, RoundPhase, RoundState, RummyConfig
from .strategy import RummyStrategy

__all__ = ["RoundAlreadyPlayed", "RummyRound", "seat_players", "RULES_TEXT"]

logger = logging.getLogger(__name__)

RULES_TEXT = (
    "Simple Rummy Rules:\n"
    "1. Each player is dealt {hand_size} cards and one card is turned up to start the discard pile.\n"
    "2. On each turn, players draw a card (from deck or discard pile) and then discard one card.\n"
    "3. Sets are 3-4 cards of the same rank; runs are 3+ consecutive cards of the same suit.\n"
    "4. A player goes out by declaring when every card sits in a set or run; no discard is made.\n"
    "5. If no player goes out after {max_turns} turns, the lowest unmatched points win.\n"
    "6. Ties in points go to the player with more sets and runs, then to the earlier seat.\n"
    "7. Face cards (J, Q, K) are worth 10 points, Ace is 1, number cards their face value.\n"
    "8. When the deck runs out the discard pile, except its top card, is reshuffled;\n"
    "   if that is impossible the round ends immediately."
)


class RoundAlreadyPlayed(RuntimeError):
    """Raised when :meth:`RummyRound.play` is called twice."""


def seat_players(strategies: Sequence[RummyStrategy]) -> list[PlayerState]:
    """Return one player per strategy named ``Player 1``, ``Player 2``, ..."""

    return [
        PlayerState(name=f"Player {idx}", strategy=strategy)
        for idx, strategy in enumerate(strategies, start=1)
    ]


class RummyRound:
    """A single round of Simple Rummy.

    The round owns its deck, discard pile and random source for its whole
    lifetime. Construction deals the opening hands; :meth:`play` runs the
    turn loop until a player declares, the turn cap is reached or the deck
    cannot be replenished, then resolves the winner.
    """

    def __init__(
        self,
        players: Sequence[PlayerState],
        *,
        config: RummyConfig = DEFAULT_CONFIG,
        deck: Deck | None = None,
        discard_pile: list[Card] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if not players:
            raise ValueError("at least one player is required")
        self.config = config
        self.rng = rng or random.Random()
        self.deck = deck if deck is not None else Deck.standard(self.rng)
        self.discard_pile: list[Card] = discard_pile if discard_pile is not None else []
        self.state = RoundState(players=list(players), max_turns=config.max_turns)
        self.turns: list[rules.TurnRecord] = []
        self.resolution: RoundResolution | None = None
        self.terminal_phase: RoundPhase | None = None
        self._deal()

    @property
    def players(self) -> list[PlayerState]:
        return self.state.players

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    def _deal(self) -> None:
        needed = len(self.players) * self.config.hand_size + 1
        if needed > self.deck.remaining:
            raise ValueError("insufficient cards in deck for requested hand size")

        for player in self.players:
            player.hand.clear()
            for _ in range(self.config.hand_size):
                player.hand.append(self.deck.draw())
            player.analysis = analyze_hand(player.hand)

        self.discard_pile.append(self.deck.draw())
        logger.debug("Round dealt; top of discard pile: %s", self.discard_pile[-1])
        self.state.phase = RoundPhase.TURN_LOOP

    def cards_in_play(self) -> int:
        """Return the number of cards across deck, discard pile and hands."""

        return self.deck.remaining + len(self.discard_pile) + sum(len(p.hand) for p in self.players)

    def _play_pass(self) -> RoundPhase | None:
        for idx in range(len(self.players)):
            record = rules.play_turn(self.state, idx, self.deck, self.discard_pile, self.rng)
            self.turns.append(record)
            if record.outcome is rules.TurnOutcome.DECK_EXHAUSTED:
                return RoundPhase.DECK_EXHAUSTED
            if record.declared:
                return RoundPhase.DECLARED
        return None

    def play(self) -> RoundResolution:
        """Run the turn loop to a terminal phase and resolve the round."""

        if self.state.phase is not RoundPhase.TURN_LOOP:
            raise RoundAlreadyPlayed("round has already been played")

        terminal: RoundPhase | None = None
        while terminal is None:
            self.state.turn_number += 1
            logger.debug("Turn %d of %d", self.state.turn_number, self.state.max_turns)
            terminal = self._play_pass()
            if terminal is None and self.state.turn_number >= self.state.max_turns:
                terminal = RoundPhase.MAX_TURNS_REACHED

        self.state.phase = terminal
        self.terminal_phase = terminal
        logger.debug("Round ended in phase %s after %d turn(s)", terminal.value, self.state.turn_number)

        self.resolution = resolve_round(self.state)
        self.state.phase = RoundPhase.RESOLVED
        return self.resolution

    def get_round_result(self, round_number: int) -> RoundResult:
        """Return the round outcome in the simulation result contract.

        Every player is analysed when dealt, so a player who never got a
        turn still reports the analysis of the dealt hand.
        """

        if self.resolution is None:
            raise RuntimeError("round has not been resolved; call play() first")

        winner_index = self.resolution.winner_index
        outcomes: list[ParticipantOutcome] = []
        for player, entry in zip(self.players, self.resolution.results):
            if winner_index is None:
                result = GameResult.PUSH
            elif entry.is_winner:
                result = GameResult.WIN
            else:
                result = GameResult.LOSS
            outcomes.append(
                ParticipantOutcome(
                    participant_name=player.name,
                    strategy_name=player.strategy_name,
                    result=result,
                    unmatched_points=entry.unmatched_points,
                    went_out=entry.went_out,
                    combinations_count=entry.combinations_count,
                )
            )
        return RoundResult(round_number=round_number, outcomes=outcomes)
