"""Card abstractions and the draw pile used by Simple Rummy."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterable, Iterator


class Suit(str, Enum):
    """Enumeration of the four suits in a standard deck."""

    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"
    SPADES = "S"


class Rank(str, Enum):
    """Enumeration of the thirteen ranks in deal order."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def sequence_value(self) -> int:
        """Return the value used for run detection (Ace low, King 13)."""

        return SEQUENCE_VALUES[self]

    @property
    def point_value(self) -> int:
        """Return the scoring value (Ace 1, face cards 10)."""

        return POINT_VALUES[self]


SEQUENCE_VALUES: Final[dict[Rank, int]] = {
    Rank.ACE: 1,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 11,
    Rank.QUEEN: 12,
    Rank.KING: 13,
}
POINT_VALUES: Final[dict[Rank, int]] = {
    rank: min(value, 10) for rank, value in SEQUENCE_VALUES.items()
}
DECK_CARD_COUNT: Final[int] = 52


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical playing card."""

    rank: Rank
    suit: Suit

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Build a card from a short code such as ``"10H"`` or ``"QS"``."""

        if len(code) < 2:
            raise ValueError(f"invalid card code '{code}'")
        rank_code, suit_code = code[:-1].upper(), code[-1].upper()
        try:
            return cls(rank=Rank(rank_code), suit=Suit(suit_code))
        except ValueError as exc:
            raise ValueError(f"invalid card code '{code}'") from exc

    @property
    def sequence_value(self) -> int:
        return self.rank.sequence_value

    @property
    def point_value(self) -> int:
        return self.rank.point_value

    @property
    def code(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return self.code


def iter_full_deck() -> Iterator[Card]:
    """Yield all 52 cards of a fresh deck in a fixed order."""

    for suit in Suit:
        for rank in Rank:
            yield Card(rank=rank, suit=suit)


def cards_from_codes(codes: Iterable[str]) -> list[Card]:
    """Return cards parsed from ``codes`` preserving their order."""

    return [Card.from_code(code) for code in codes]


class EmptyDeck(RuntimeError):
    """Raised when drawing from a deck that has no cards left."""


@dataclass(slots=True)
class Deck:
    """Draw pile supporting shuffle, draw-from-front and rebuilding."""

    cards: list[Card] = field(default_factory=list)

    @classmethod
    def standard(cls, rng: random.Random | None = None) -> "Deck":
        """Return a shuffled single 52-card deck."""

        deck = cls(cards=list(iter_full_deck()))
        deck.shuffle(rng)
        return deck

    def shuffle(self, rng: random.Random | None = None) -> None:
        (rng or random).shuffle(self.cards)

    def draw(self) -> Card:
        """Remove and return the front card."""

        if not self.cards:
            raise EmptyDeck("deck is empty")
        return self.cards.pop(0)

    def rebuild(self, cards: Iterable[Card], rng: random.Random | None = None) -> None:
        """Replace the deck contents with ``cards`` and shuffle them."""

        self.cards = list(cards)
        self.shuffle(rng)

    @property
    def remaining(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)
