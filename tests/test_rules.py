from __future__ import annotations

import random
from typing import Sequence

import pytest

from simple_rummy import rules
from simple_rummy.cards import Card, Deck, cards_from_codes
from simple_rummy.melds import HandAnalysis, analyze_hand
from simple_rummy.state import PlayerState, RoundState
from simple_rummy.strategy import RummyStrategy


def _scripted(*, from_deck: bool = True, discard_index: int = 0, declare: bool = False) -> RummyStrategy:
    return RummyStrategy(
        name="Scripted",
        draw_from_deck=lambda hand, top: from_deck,
        select_discard_index=lambda hand: discard_index,
        should_declare=lambda analysis: declare,
    )


def _state(hand_codes: Sequence[str], strategy: RummyStrategy) -> RoundState:
    hand = cards_from_codes(hand_codes)
    player = PlayerState(name="Player 1", strategy=strategy, hand=hand, analysis=analyze_hand(hand))
    return RoundState(players=[player], max_turns=10)


def test_out_of_range_negative_index_discards_first_card() -> None:
    state = _state(["2H", "9S", "KD", "4C"], _scripted(discard_index=-1))
    deck = Deck(cards=cards_from_codes(["6H", "7H"]))
    discard_pile = cards_from_codes(["QC"])

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert record.outcome is rules.TurnOutcome.DISCARDED
    assert record.discarded_card == Card.from_code("2H")
    assert discard_pile[-1] == Card.from_code("2H")
    assert state.players[0].hand == cards_from_codes(["9S", "KD", "4C", "6H"])


def test_out_of_range_high_index_discards_first_card() -> None:
    state = _state(["2H", "9S"], _scripted(discard_index=99))
    deck = Deck(cards=cards_from_codes(["6H"]))
    discard_pile = cards_from_codes(["QC"])

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert record.discarded_card == Card.from_code("2H")


def test_valid_index_is_respected_and_analysis_refreshed() -> None:
    state = _state(["5S", "5H", "5D", "KC"], _scripted(discard_index=3))
    deck = Deck(cards=cards_from_codes(["2C"]))
    discard_pile = cards_from_codes(["QC"])

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert record.discarded_card == Card.from_code("KC")
    assert state.players[0].analysis == analyze_hand(cards_from_codes(["5S", "5H", "5D", "2C"]))
    assert record.analysis == state.players[0].analysis


def test_take_from_discard_pile() -> None:
    state = _state(["8H", "9H", "2S"], _scripted(from_deck=False, discard_index=2))
    deck = Deck(cards=cards_from_codes(["AC"]))
    discard_pile = cards_from_codes(["3D", "10H"])

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert not record.drew_from_deck
    assert record.drawn_card == Card.from_code("10H")
    assert deck.remaining == 1
    assert discard_pile == cards_from_codes(["3D", "2S"])
    assert state.players[0].analysis.runs


def test_empty_discard_pile_falls_back_to_deck() -> None:
    state = _state(["8H"], _scripted(from_deck=False))
    deck = Deck(cards=cards_from_codes(["AC"]))
    discard_pile: list[Card] = []

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert record.drew_from_deck
    assert record.drawn_card == Card.from_code("AC")


def test_declare_honoured_when_hand_goes_out() -> None:
    state = _state(["4D", "5D", "6D"], _scripted(declare=True))
    deck = Deck(cards=cards_from_codes(["7D"]))
    discard_pile = cards_from_codes(["QC"])

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert record.declared
    assert record.discarded_card is None
    assert state.declared_index == 0
    assert len(state.players[0].hand) == 4
    assert discard_pile == cards_from_codes(["QC"])


def test_declare_ignored_without_go_out() -> None:
    state = _state(["4D", "5D", "9S"], _scripted(declare=True, discard_index=2))
    deck = Deck(cards=cards_from_codes(["2C"]))
    discard_pile = cards_from_codes(["QC"])

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert record.outcome is rules.TurnOutcome.DISCARDED
    assert state.declared_index is None
    assert discard_pile[-1] == Card.from_code("9S")


def test_declare_not_requested_keeps_playing() -> None:
    state = _state(["4D", "5D", "6D"], _scripted(declare=False))
    deck = Deck(cards=cards_from_codes(["7D"]))
    discard_pile = cards_from_codes(["QC"])

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert record.outcome is rules.TurnOutcome.DISCARDED
    assert state.declared_index is None


def test_empty_deck_recycles_discard_pile() -> None:
    state = _state(["KS"], _scripted())
    deck = Deck()
    discard_pile = cards_from_codes(["AH", "2H", "3H"])

    record = rules.play_turn(state, 0, deck, discard_pile, random.Random(3))

    assert record.recycled
    assert record.drawn_card in cards_from_codes(["AH", "2H"])
    assert deck.remaining == 1
    assert discard_pile == [Card.from_code("3H"), Card.from_code("KS")]


def test_unrecyclable_deck_signals_exhaustion() -> None:
    state = _state(["KS", "2D"], _scripted())
    deck = Deck()
    discard_pile = cards_from_codes(["AH"])

    record = rules.play_turn(state, 0, deck, discard_pile)

    assert record.outcome is rules.TurnOutcome.DECK_EXHAUSTED
    assert record.drawn_card is None
    assert state.players[0].hand == cards_from_codes(["KS", "2D"])
    assert discard_pile == cards_from_codes(["AH"])


def test_turn_conserves_cards() -> None:
    state = _state(["KS", "2D", "5C"], _scripted(discard_index=1))
    deck = Deck(cards=cards_from_codes(["6C", "7C"]))
    discard_pile = cards_from_codes(["AH", "9D"])
    before = deck.remaining + len(discard_pile) + len(state.players[0].hand)

    rules.play_turn(state, 0, deck, discard_pile)

    assert deck.remaining + len(discard_pile) + len(state.players[0].hand) == before


def test_strategy_receives_hand_and_top_discard() -> None:
    seen: list[tuple[tuple[Card, ...], Card | None]] = []

    def draw(hand: Sequence[Card], top: Card | None) -> bool:
        seen.append((tuple(hand), top))
        return True

    strategy = RummyStrategy(
        name="Recorder",
        draw_from_deck=draw,
        select_discard_index=lambda hand: 0,
        should_declare=lambda analysis: False,
    )
    state = _state(["KS"], strategy)

    rules.play_turn(state, 0, Deck(cards=cards_from_codes(["2C"])), cards_from_codes(["9H"]))

    assert seen == [((Card.from_code("KS"),), Card.from_code("9H"))]


def test_strategy_errors_propagate() -> None:
    def broken(analysis: HandAnalysis) -> bool:
        raise RuntimeError("strategy failure")

    strategy = RummyStrategy(
        name="Broken",
        draw_from_deck=lambda hand, top: True,
        select_discard_index=lambda hand: 0,
        should_declare=broken,
    )
    state = _state(["KS"], strategy)

    with pytest.raises(RuntimeError, match="strategy failure"):
        rules.play_turn(state, 0, Deck(cards=cards_from_codes(["2C"])), cards_from_codes(["9H"]))


@pytest.mark.parametrize(
    ("index", "hand_size", "expected"),
    [
        (-1, 5, 0),
        (0, 5, 0),
        (4, 5, 4),
        (5, 5, 0),
        (2, 1, 0),
    ],
)
def test_sanitize_discard_index(index: int, hand_size: int, expected: int) -> None:
    assert rules.sanitize_discard_index(index, hand_size) == expected


def test_recycle_requires_more_than_one_discard() -> None:
    deck = Deck()
    discard_pile = cards_from_codes(["AH"])

    assert not rules.recycle_discard_pile(deck, discard_pile)
    assert deck.remaining == 0
    assert discard_pile == cards_from_codes(["AH"])


def test_draw_from_empty_discard_raises() -> None:
    with pytest.raises(rules.IllegalDraw):
        rules.draw_from_discard([])


def test_discard_from_empty_hand_raises() -> None:
    with pytest.raises(rules.IllegalDiscard):
        rules.discard_card([], 0, [])


def test_non_integer_discard_index_is_not_truncated() -> None:
    strategy = RummyStrategy(
        name="Fractional",
        draw_from_deck=lambda hand, top: True,
        select_discard_index=lambda hand: 2.7,
        should_declare=lambda analysis: False,
    )
    state = _state(["2H", "9S", "KD", "4C"], strategy)
    deck = Deck(cards=cards_from_codes(["6H"]))
    discard_pile = cards_from_codes(["QC"])

    with pytest.raises(TypeError):
        rules.play_turn(state, 0, deck, discard_pile)

    assert discard_pile == cards_from_codes(["QC"])
