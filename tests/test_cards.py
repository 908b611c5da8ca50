from __future__ import annotations

import random

import pytest

from simple_rummy.cards import DECK_CARD_COUNT, Card, Deck, EmptyDeck, Rank, Suit, iter_full_deck


@pytest.mark.parametrize(
    ("rank", "sequence", "points"),
    [
        (Rank.ACE, 1, 1),
        (Rank.TWO, 2, 2),
        (Rank.NINE, 9, 9),
        (Rank.TEN, 10, 10),
        (Rank.JACK, 11, 10),
        (Rank.QUEEN, 12, 10),
        (Rank.KING, 13, 10),
    ],
)
def test_rank_value_scales(rank: Rank, sequence: int, points: int) -> None:
    card = Card(rank=rank, suit=Suit.CLUBS)
    assert card.sequence_value == sequence
    assert card.point_value == points


def test_card_from_code_round_trips_labels() -> None:
    assert Card.from_code("10H") == Card(Rank.TEN, Suit.HEARTS)
    assert Card.from_code("qs") == Card(Rank.QUEEN, Suit.SPADES)
    assert str(Card(Rank.ACE, Suit.DIAMONDS)) == "AD"


@pytest.mark.parametrize("code", ["", "H", "1H", "10X", "ZZ"])
def test_card_from_code_rejects_garbage(code: str) -> None:
    with pytest.raises(ValueError):
        Card.from_code(code)


def test_full_deck_is_unique() -> None:
    cards = list(iter_full_deck())
    assert len(cards) == DECK_CARD_COUNT
    assert len(set(cards)) == DECK_CARD_COUNT


def test_standard_deck_is_shuffled_with_rng() -> None:
    first = Deck.standard(random.Random(5))
    second = Deck.standard(random.Random(5))
    assert first.cards == second.cards
    assert first.cards != list(iter_full_deck())
    assert first.remaining == DECK_CARD_COUNT


def test_deck_draws_from_front() -> None:
    cards = [Card.from_code(code) for code in ("2H", "3H", "4H")]
    deck = Deck(cards=list(cards))

    assert deck.draw() == cards[0]
    assert deck.draw() == cards[1]
    assert len(deck) == 1


def test_empty_deck_raises() -> None:
    deck = Deck()
    with pytest.raises(EmptyDeck):
        deck.draw()


def test_rebuild_replaces_contents() -> None:
    deck = Deck(cards=[Card.from_code("KS")])
    replacement = [Card.from_code(code) for code in ("2C", "3C", "4C", "5C")]

    deck.rebuild(replacement, random.Random(1))

    assert sorted(deck.cards, key=lambda card: card.sequence_value) == replacement
    assert deck.remaining == 4
