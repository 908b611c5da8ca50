"""Top-level package for the Simple Rummy round engine and simulator."""

from . import cards, game, melds, rules, scoreboard, scoring, simulation, state, strategies, strategy

__all__ = [
    "cards",
    "game",
    "melds",
    "rules",
    "scoreboard",
    "scoring",
    "simulation",
    "state",
    "strategies",
    "strategy",
]
