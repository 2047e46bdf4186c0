import logging

import pytest

from holdem.cards import Hand, full_deck
from holdem.deck import Deck
from holdem.errors import EmptyDeck, HoldemError, NoWinnerDetermined, ZeroChipBlindPoster
from holdem.game import RoundContext
from holdem.models import RoundResult, RoundState
from holdem.pot import Pot

from .helpers import cards, create_engine, unshuffled_deck


def test_zero_chip_blind_poster_aborts_the_round():
    engine, (_, _, p3) = create_engine()
    p3.chips = 0

    with pytest.raises(ZeroChipBlindPoster):
        engine.play_round()

    assert engine.state == RoundState.POST_SMALL_BLIND


def test_running_out_of_cards_aborts_the_round():
    engine, _ = create_engine(deck=Deck(cards=cards("2c", "3d", "4h"), seed=1))

    with pytest.raises(EmptyDeck):
        engine.play_round()

    assert engine.state == RoundState.DEAL_HOLE_CARDS
    assert len(engine.deck) == 0
    engine.reset_round()
    assert len(engine.deck) == 3


def test_missing_player_is_skipped(caplog):
    engine, (p1, p2, p3) = create_engine(deck=unshuffled_deck())
    engine.seats.append("ghost")

    with caplog.at_level(logging.WARNING, logger="holdem"):
        result = engine.play_round()

    assert result.big_blind is None
    assert result.skipped == ["ghost"]
    assert "ghost" not in result.hole_cards
    assert result.payouts == {p3.identifier: 2}
    assert "Skipping seat 3" in caplog.text


def test_pot_without_contenders_has_no_winner():
    engine, (p1, _, _) = create_engine()
    engine.main_pot = Pot(["ghost"], amount=10)
    ctx = RoundContext(
        result=RoundResult(round_number=1),
        hole_cards={p1.identifier: Hand(cards("Ah", "Kd"))},
        community=Hand(cards("2c", "7d", "9h", "Js", "3c")),
    )

    with pytest.raises(NoWinnerDetermined):
        engine._settle(ctx)


def test_round_needs_two_players():
    engine, _ = create_engine(players=1)
    with pytest.raises(RuntimeError, match="Not enough players"):
        engine.play_round()


def test_errors_share_a_base_class():
    for error in (EmptyDeck, NoWinnerDetermined, ZeroChipBlindPoster):
        assert issubclass(error, HoldemError)
        assert issubclass(error, RuntimeError)


def test_reset_after_abort_refunds_posted_blinds():
    engine, (p1, _, p3) = create_engine()
    p1.chips = 0
    starting = engine.total_chips()

    with pytest.raises(ZeroChipBlindPoster):
        engine.play_round()
    assert p3.chips == 98

    engine.reset_round()

    assert p3.chips == 100
    assert engine.total_chips() == starting


def test_next_round_recovers_an_aborted_round():
    engine, _ = create_engine(deck=Deck(cards=full_deck()[:5], seed=1))
    starting = engine.total_chips()

    with pytest.raises(EmptyDeck):
        engine.play_round()
    for card in full_deck()[5:22]:
        engine.deck.insert(card, 0)
    assert len(engine.deck) == 17

    engine.play_round()

    assert len(engine.deck) == 22
    assert engine.state == RoundState.IDLE
    assert engine.total_chips() == starting


def test_missing_winner_share_goes_to_the_other_winners():
    engine, (p1, p2) = create_engine(players=2)
    engine.main_pot = Pot([p1.identifier, p2.identifier], amount=7)
    ctx = RoundContext(
        result=RoundResult(round_number=1),
        hole_cards={p1.identifier: Hand(cards("2c", "3c")), p2.identifier: Hand(cards("4c", "5c"))},
        community=Hand(cards("Td", "Jc", "Qs", "Kd", "Ah")),
    )
    engine.players.pop(p2.identifier)

    engine._settle(ctx)

    assert p1.chips == 107
    assert ctx.result.payouts == {p1.identifier: 7}
    assert ctx.result.skipped == [p2.identifier]
