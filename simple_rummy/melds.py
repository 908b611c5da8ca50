"""Hand analysis: greedy detection of sets and runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Sequence

from .cards import Card, Rank, Suit

MIN_MELD_SIZE: Final[int] = 3
MAX_SET_SIZE: Final[int] = 4


@dataclass(frozen=True, slots=True)
class CombinationSet:
    """Three or four cards sharing a rank."""

    cards: tuple[Card, ...]

    @property
    def rank(self) -> Rank | None:
        return self.cards[0].rank if self.cards else None

    @property
    def is_valid(self) -> bool:
        return MIN_MELD_SIZE <= len(self.cards) <= MAX_SET_SIZE and all(
            card.rank == self.rank for card in self.cards
        )

    def __str__(self) -> str:
        return f"Set of {self.rank.value if self.rank else '?'}: " + ", ".join(
            card.code for card in self.cards
        )


@dataclass(frozen=True, slots=True)
class CombinationRun:
    """Three or more same-suit cards with consecutive sequence values."""

    cards: tuple[Card, ...]

    @property
    def suit(self) -> Suit | None:
        return self.cards[0].suit if self.cards else None

    @property
    def is_valid(self) -> bool:
        if len(self.cards) < MIN_MELD_SIZE:
            return False
        if any(card.suit != self.suit for card in self.cards):
            return False
        values = sorted(card.sequence_value for card in self.cards)
        return all(current == previous + 1 for previous, current in zip(values, values[1:]))

    def __str__(self) -> str:
        ordered = sorted(self.cards, key=lambda card: card.sequence_value)
        return f"Run of {self.suit.value if self.suit else '?'}: " + ", ".join(
            card.code for card in ordered
        )


@dataclass(frozen=True, slots=True)
class HandAnalysis:
    """Partition of a hand into sets, runs and unmatched cards."""

    sets: tuple[CombinationSet, ...] = ()
    runs: tuple[CombinationRun, ...] = ()
    unmatched_cards: tuple[Card, ...] = ()

    @property
    def unmatched_points(self) -> int:
        return sum(card.point_value for card in self.unmatched_cards)

    @property
    def combinations_count(self) -> int:
        return len(self.sets) + len(self.runs)

    @property
    def can_go_out(self) -> bool:
        """Return ``True`` when every card sits in a meld and one meld exists."""

        return not self.unmatched_cards and self.combinations_count > 0

    def melded_cards(self) -> list[Card]:
        cards: list[Card] = []
        for meld in (*self.sets, *self.runs):
            cards.extend(meld.cards)
        return cards


EMPTY_ANALYSIS: Final[HandAnalysis] = HandAnalysis()


def _find_sets(hand: Sequence[Card], consumed: list[bool]) -> list[CombinationSet]:
    rank_groups: dict[Rank, list[int]] = {}
    for index, card in enumerate(hand):
        rank_groups.setdefault(card.rank, []).append(index)

    # sorted() is stable, so equal-size groups keep first-appearance order.
    ordered = sorted(rank_groups.values(), key=len, reverse=True)
    sets: list[CombinationSet] = []
    for indices in ordered:
        if len(indices) < MIN_MELD_SIZE:
            continue
        taken = indices[:MAX_SET_SIZE]
        for index in taken:
            consumed[index] = True
        sets.append(CombinationSet(cards=tuple(hand[index] for index in taken)))
    return sets


def _find_runs(hand: Sequence[Card], consumed: list[bool]) -> list[CombinationRun]:
    suit_groups: dict[Suit, list[int]] = {}
    for index, card in enumerate(hand):
        if consumed[index]:
            continue
        suit_groups.setdefault(card.suit, []).append(index)

    runs: list[CombinationRun] = []
    for indices in suit_groups.values():
        ordered = sorted(indices, key=lambda index: hand[index].sequence_value)
        start = 0
        while start < len(ordered):
            span = [ordered[start]]
            current = hand[ordered[start]].sequence_value
            stop = start + 1
            while stop < len(ordered):
                value = hand[ordered[stop]].sequence_value
                if value == current + 1:
                    span.append(ordered[stop])
                    current = value
                elif value > current + 1:
                    break
                stop += 1
            if len(span) >= MIN_MELD_SIZE:
                for index in span:
                    consumed[index] = True
                runs.append(CombinationRun(cards=tuple(hand[index] for index in span)))
                start = stop
            else:
                start += 1
    return runs


def analyze_hand(hand: Sequence[Card]) -> HandAnalysis:
    """Return the greedy set-then-run partition of ``hand``.

    Rank groups of three or more become sets first (largest groups first),
    then each suit is scanned in sequence order for runs of three or more.
    The greedy order is fixed and can miss a better decomposition; callers
    rely on that exact order for reproducible results.
    """

    consumed = [False] * len(hand)
    sets = _find_sets(hand, consumed)
    runs = _find_runs(hand, consumed)
    unmatched = tuple(card for index, card in enumerate(hand) if not consumed[index])
    return HandAnalysis(sets=tuple(sets), runs=tuple(runs), unmatched_cards=unmatched)
