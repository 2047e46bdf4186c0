import itertools

import pytest
from hypothesis import given, strategies as st

from holdem.cards import full_deck
from holdem.errors import InvalidHandSize
from holdem.evaluator import Category, HandRank, highest_card, rank_hand

from .helpers import cards


def labels(hand_rank):
    return [card.label for card in hand_rank.cards]


@pytest.mark.parametrize(
    "hand, category",
    [
        (["2c", "5d", "9h", "Js", "Kd", "3c", "7h"], Category.HIGH_CARD),
        (["2c", "2d", "9h", "Js", "Kd", "3c", "7h"], Category.PAIR),
        (["2c", "2d", "9h", "9s", "Kd", "3c", "7h"], Category.TWO_PAIR),
        (["2c", "2d", "2h", "9s", "Kd", "3c", "7h"], Category.THREE_OF_A_KIND),
        (["4c", "5d", "6h", "7s", "8d", "Kc", "2h"], Category.STRAIGHT),
        (["2h", "5h", "9h", "Jh", "Kh", "3c", "7d"], Category.FLUSH),
        (["2c", "2d", "2h", "9s", "9d", "3c", "7h"], Category.FULL_HOUSE),
        (["2c", "2d", "2h", "2s", "9d", "3c", "7h"], Category.FOUR_OF_A_KIND),
        (["4h", "5h", "6h", "7h", "8h", "Kc", "2d"], Category.STRAIGHT_FLUSH),
    ],
)
def test_rank_hand_detects_each_category(hand, category):
    assert rank_hand(cards(*hand)).category == category


def test_two_card_hands():
    assert rank_hand(cards("Ah", "As")).category == Category.PAIR
    hand_rank = rank_hand(cards("Ah", "Ks"))
    assert hand_rank.category == Category.HIGH_CARD
    assert labels(hand_rank) == ["Ah"]


@pytest.mark.parametrize("count", [0, 1, 3, 4, 8])
def test_invalid_hand_sizes_are_rejected(count):
    with pytest.raises(InvalidHandSize) as excinfo:
        rank_hand(full_deck()[:count])
    assert excinfo.value.count == count
    assert isinstance(excinfo.value, ValueError)


def test_wheel_is_the_lowest_straight():
    wheel = rank_hand(cards("Ah", "2c", "3d", "4s", "5h", "9c", "Kd"))
    six_high = rank_hand(cards("2c", "3d", "4s", "5h", "6c", "9c", "Kd"))
    broadway = rank_hand(cards("Tc", "Jd", "Qs", "Kh", "Ac", "2c", "3d"))
    assert wheel.category == Category.STRAIGHT
    assert labels(wheel) == ["Ah", "2c", "3d", "4s", "5h"]
    assert wheel < six_high < broadway


def test_straight_prefers_the_highest_run():
    hand_rank = rank_hand(cards("Ah", "2c", "3d", "4s", "5h", "6c", "7d"))
    assert labels(hand_rank) == ["3d", "4s", "5h", "6c", "7d"]


def test_straight_skips_duplicate_ranks():
    hand_rank = rank_hand(cards("5c", "6d", "7s", "7h", "8c", "9d", "2s"))
    assert hand_rank.category == Category.STRAIGHT
    assert [card.rank.label for card in hand_rank.cards] == ["5", "6", "7", "8", "9"]


def test_steel_wheel_is_the_lowest_straight_flush():
    steel_wheel = rank_hand(cards("Ah", "2h", "3h", "4h", "5h", "9c", "Kd"))
    six_high = rank_hand(cards("2d", "3d", "4d", "5d", "6d", "9c", "Kh"))
    assert steel_wheel.category == Category.STRAIGHT_FLUSH
    assert steel_wheel < six_high


def test_straight_flushes_order_like_straights():
    six_high = rank_hand(cards("2d", "3d", "4d", "5d", "6d", "9c", "Kh"))
    king_high = rank_hand(cards("9s", "Ts", "Js", "Qs", "Ks", "2c", "3d"))
    royal = rank_hand(cards("Th", "Jh", "Qh", "Kh", "Ah", "2c", "3d"))
    assert six_high < king_high < royal
    assert not king_high.is_royal


def test_royal_flushes_tie_across_suits():
    hearts = rank_hand(cards("Th", "Jh", "Qh", "Kh", "Ah", "2c", "3d"))
    spades = rank_hand(cards("Ts", "Js", "Qs", "Ks", "As", "2c", "3d"))
    assert hearts.is_royal and spades.is_royal
    assert hearts == spades
    assert hash(hearts) == hash(spades)
    assert str(hearts).startswith("a Royal Flush")


def test_straight_flush_must_be_suited_run():
    # Seven cards with a straight and a flush that do not overlap.
    hand_rank = rank_hand(cards("4h", "5c", "6h", "7h", "8d", "Kh", "2h"))
    assert hand_rank.category == Category.FLUSH


def test_off_suit_five_leaves_a_flush_over_the_wheel():
    hand_rank = rank_hand(cards("Ac", "2c", "3c", "4c", "9c", "5d", "Kh"))
    assert hand_rank.category == Category.FLUSH
    assert labels(hand_rank) == ["2c", "3c", "4c", "9c", "Ac"]


def test_flush_ranks_ignore_suit():
    clubs = rank_hand(cards("2c", "5c", "9c", "Jc", "Kc", "3d", "7h"))
    hearts = rank_hand(cards("2h", "5h", "9h", "Jh", "Kh", "3d", "7c"))
    assert clubs == hearts
    ace_high = rank_hand(cards("2d", "5d", "9d", "Jd", "Ad", "3c", "7h"))
    assert ace_high > clubs


def test_flush_takes_the_top_five_suited_cards():
    hand_rank = rank_hand(cards("2h", "5h", "9h", "Jh", "Kh", "Ah", "7d"))
    assert labels(hand_rank) == ["5h", "9h", "Jh", "Kh", "Ah"]


def test_two_pair_orders_high_pair_first():
    hand_rank = rank_hand(cards("2c", "2d", "9h", "9s", "5d", "5c", "7h"))
    assert hand_rank.category == Category.TWO_PAIR
    assert [card.rank.label for card in hand_rank.cards] == ["9", "9", "5", "5"]


def test_two_pair_compares_high_then_low_pair():
    nines_and_twos = HandRank.two_pair(cards("9c", "9d", "2c", "2d"))
    nines_and_fives = HandRank.two_pair(cards("9h", "9s", "5c", "5d"))
    tens_and_twos = HandRank.two_pair(cards("Tc", "Td", "2h", "2s"))
    assert nines_and_twos < nines_and_fives < tens_and_twos


def test_full_house_from_two_sets_of_trips():
    hand_rank = rank_hand(cards("2c", "2d", "2h", "9s", "9d", "9c", "7h"))
    assert hand_rank.category == Category.FULL_HOUSE
    assert [card.rank.label for card in hand_rank.cards] == ["9", "9", "9", "2", "2"]


def test_full_house_compares_trips_before_pair():
    threes_full = HandRank.full_house(cards("3c", "3d", "3h", "Ac", "Ad"))
    fours_full = HandRank.full_house(cards("4c", "4d", "4h", "2c", "2d"))
    assert threes_full < fours_full


def test_categories_are_totally_ordered():
    examples = [
        HandRank.high_card(cards("Ah")[0]),
        HandRank.pair(cards("2c", "2d")),
        HandRank.two_pair(cards("3c", "3d", "2c", "2d")),
        HandRank.three_of_a_kind(cards("2c", "2d", "2h")),
        HandRank.straight(cards("Ah", "2c", "3d", "4s", "5h")),
        HandRank.flush(cards("2c", "3c", "4c", "5c", "7c")),
        HandRank.full_house(cards("2c", "2d", "2h", "3c", "3d")),
        HandRank.four_of_a_kind(cards("2c", "2d", "2h", "2s")),
        HandRank.straight_flush(cards("Ah", "2h", "3h", "4h", "5h")),
    ]
    for low, high in itertools.combinations(examples, 2):
        assert low < high
        assert not high < low
        assert low != high


def test_hand_rank_checks_card_count():
    with pytest.raises(ValueError, match="takes 2 cards"):
        HandRank.pair(cards("2c"))


def test_highest_card():
    assert highest_card([]) is None
    assert highest_card(cards("9c", "Kd", "3h")).label == "Kd"


@given(
    st.sampled_from([2, 5, 6, 7]).flatmap(
        lambda size: st.lists(st.sampled_from(full_deck()), min_size=size, max_size=size, unique=True)
    )
)
def test_ranked_cards_come_from_the_input(hand):
    hand_rank = rank_hand(hand)
    assert len(hand_rank) == hand_rank.category.arity
    assert set(hand_rank.cards) <= set(hand)
