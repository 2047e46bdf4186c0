from __future__ import annotations

import functools
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .cards import Card, Rank, Suit
from .errors import InvalidHandSize

VALID_HAND_SIZES = (2, 5, 6, 7)
ACE_LOW_RUN = (Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE)


class Category(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8

    @property
    def arity(self) -> int:
        return _ARITY[self]

    @property
    def label(self) -> str:
        return self.name.lower()


_ARITY = {
    Category.HIGH_CARD: 1,
    Category.PAIR: 2,
    Category.TWO_PAIR: 4,
    Category.THREE_OF_A_KIND: 3,
    Category.STRAIGHT: 5,
    Category.FLUSH: 5,
    Category.FULL_HOUSE: 5,
    Category.FOUR_OF_A_KIND: 4,
    Category.STRAIGHT_FLUSH: 5,
}

_TITLES = {
    Category.HIGH_CARD: "a High Card",
    Category.PAIR: "a Pair",
    Category.TWO_PAIR: "Two Pairs",
    Category.THREE_OF_A_KIND: "Three of a Kind",
    Category.STRAIGHT: "a Straight",
    Category.FLUSH: "a Flush",
    Category.FULL_HOUSE: "a Full House",
    Category.FOUR_OF_A_KIND: "Four of a Kind",
    Category.STRAIGHT_FLUSH: "a Straight Flush",
}


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class HandRank:
    """A poker category together with the exact cards that make it.

    Ordering and equality only look at the category and the ranks of the
    cards; two hands that differ by suit alone are equal.
    """

    category: Category
    cards: Tuple[Card, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cards", tuple(self.cards))
        if len(self.cards) != self.category.arity:
            raise ValueError(
                f"{self.category.label} takes {self.category.arity} cards, got {len(self.cards)}"
            )

    @classmethod
    def high_card(cls, card: Card) -> "HandRank":
        return cls(Category.HIGH_CARD, (card,))

    @classmethod
    def pair(cls, cards: Iterable[Card]) -> "HandRank":
        return cls(Category.PAIR, tuple(cards))

    @classmethod
    def two_pair(cls, cards: Iterable[Card]) -> "HandRank":
        return cls(Category.TWO_PAIR, tuple(cards))

    @classmethod
    def three_of_a_kind(cls, cards: Iterable[Card]) -> "HandRank":
        return cls(Category.THREE_OF_A_KIND, tuple(cards))

    @classmethod
    def straight(cls, cards: Iterable[Card]) -> "HandRank":
        return cls(Category.STRAIGHT, tuple(cards))

    @classmethod
    def flush(cls, cards: Iterable[Card]) -> "HandRank":
        return cls(Category.FLUSH, tuple(cards))

    @classmethod
    def full_house(cls, cards: Iterable[Card]) -> "HandRank":
        return cls(Category.FULL_HOUSE, tuple(cards))

    @classmethod
    def four_of_a_kind(cls, cards: Iterable[Card]) -> "HandRank":
        return cls(Category.FOUR_OF_A_KIND, tuple(cards))

    @classmethod
    def straight_flush(cls, cards: Iterable[Card]) -> "HandRank":
        return cls(Category.STRAIGHT_FLUSH, tuple(cards))

    @property
    def name(self) -> str:
        return self.category.label

    @property
    def is_royal(self) -> bool:
        return self.category == Category.STRAIGHT_FLUSH and all(card.rank >= Rank.TEN for card in self.cards)

    def contains(self, card: Card) -> bool:
        return card in self.cards

    def strength(self) -> Tuple[int, Tuple[int, ...]]:
        """Comparison key: category first, then the ranks that matter for it."""
        ranks = [card.rank for card in self.cards]
        if self.category in (Category.STRAIGHT, Category.STRAIGHT_FLUSH):
            # The wheel tops out at the five, not the ace.
            top = Rank.FIVE if set(ranks) == set(ACE_LOW_RUN) else max(ranks)
            key: Tuple[int, ...] = (int(top),)
        elif self.category == Category.TWO_PAIR:
            key = (int(max(ranks)), int(min(ranks)))
        elif self.category == Category.FULL_HOUSE:
            (trips, _), (pair, _) = Counter(ranks).most_common(2)
            key = (int(trips), int(pair))
        elif self.category == Category.FLUSH:
            key = tuple(int(rank) for rank in sorted(ranks, reverse=True))
        else:
            key = (int(max(ranks)),)
        return int(self.category), key

    def __len__(self) -> int:
        return len(self.cards)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandRank):
            return NotImplemented
        return self.strength() == other.strength()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HandRank):
            return NotImplemented
        return self.strength() < other.strength()

    def __hash__(self) -> int:
        return hash(self.strength())

    def __str__(self) -> str:
        title = "a Royal Flush" if self.is_royal else _TITLES[self.category]
        return f"{title}: {' '.join(str(card) for card in self.cards)}"


def rank_hand(cards: Sequence[Card]) -> HandRank:
    """Return the best hand that can be made from 2, 5, 6 or 7 cards.

    Categories are tried from strongest to weakest because the stronger
    ones always contain a weaker one (a straight flush is also a straight
    and a flush).
    """
    if len(cards) not in VALID_HAND_SIZES:
        raise InvalidHandSize(len(cards))

    ordered = sorted(cards)

    found = _find_straight_flush(ordered)
    if found:
        return HandRank.straight_flush(found)

    found = _find_four_of_a_kind(ordered)
    if found:
        return HandRank.four_of_a_kind(found)

    found = _find_full_house(ordered)
    if found:
        return HandRank.full_house(found)

    found = _find_flush(ordered)
    if found:
        return HandRank.flush(found)

    found = _find_straight(ordered)
    if found:
        return HandRank.straight(found)

    found = _find_three_of_a_kind(ordered)
    if found:
        return HandRank.three_of_a_kind(found)

    found = _find_two_pair(ordered)
    if found:
        return HandRank.two_pair(found)

    found = _find_pair(ordered)
    if found:
        return HandRank.pair(found)

    card = highest_card(ordered)
    if card is None:
        raise RuntimeError("Ranking produced no high card")
    return HandRank.high_card(card)


def highest_card(cards: Iterable[Card]) -> Optional[Card]:
    """Highest-ranked card, or None for no cards."""
    return max(cards, default=None)


def _group_by_rank(cards: Sequence[Card]) -> Dict[Rank, List[Card]]:
    groups: Dict[Rank, List[Card]] = {}
    for card in cards:
        groups.setdefault(card.rank, []).append(card)
    return groups


def _group_by_suit(cards: Sequence[Card]) -> Dict[Suit, List[Card]]:
    groups: Dict[Suit, List[Card]] = {}
    for card in cards:
        groups.setdefault(card.suit, []).append(card)
    return groups


def _find_pair(cards: Sequence[Card], allow_larger: bool = False) -> Optional[List[Card]]:
    best: Optional[List[Card]] = None
    for members in _group_by_rank(cards).values():
        if len(members) == 2 or (allow_larger and len(members) > 2):
            best = members[-2:]
    return best


def _find_three_of_a_kind(cards: Sequence[Card]) -> Optional[List[Card]]:
    best: Optional[List[Card]] = None
    for members in _group_by_rank(cards).values():
        if len(members) == 3:
            best = members
    return best


def _find_four_of_a_kind(cards: Sequence[Card]) -> Optional[List[Card]]:
    best: Optional[List[Card]] = None
    for members in _group_by_rank(cards).values():
        if len(members) == 4:
            best = members
    return best


def _find_two_pair(cards: Sequence[Card]) -> Optional[List[Card]]:
    high = _find_pair(cards)
    if high is None:
        return None
    remainder = [card for card in cards if card not in high]
    low = _find_pair(remainder)
    if low is None:
        return None
    return high + low


def _find_full_house(cards: Sequence[Card]) -> Optional[List[Card]]:
    trips = _find_three_of_a_kind(cards)
    if trips is None:
        return None
    remainder = [card for card in cards if card not in trips]
    # A second set of trips also fills the house.
    pair = _find_pair(remainder, allow_larger=True)
    if pair is None:
        return None
    return trips + pair


def _find_ace_low_run(cards: Sequence[Card]) -> Optional[List[Card]]:
    by_rank = _group_by_rank(cards)
    if not all(rank in by_rank for rank in ACE_LOW_RUN):
        return None
    return [by_rank[rank][0] for rank in ACE_LOW_RUN]


def _find_straight(cards: Sequence[Card]) -> Optional[List[Card]]:
    longest: List[Card] = []
    run: List[Card] = []
    for card in cards:
        if run and card.rank == run[-1].rank:
            continue
        if run and card.rank == run[-1].rank + 1:
            run.append(card)
            continue
        if len(run) >= len(longest):
            longest = run
        run = [card]
    if len(run) >= len(longest):
        longest = run

    if len(longest) >= 5:
        return longest[-5:]
    return _find_ace_low_run(cards)


def _find_flush(cards: Sequence[Card]) -> Optional[List[Card]]:
    for members in _group_by_suit(cards).values():
        if len(members) >= 5:
            wheel = _find_ace_low_run(members)
            if wheel:
                return wheel
            return members[-5:]
    return None


def _find_straight_flush(cards: Sequence[Card]) -> Optional[List[Card]]:
    for members in _group_by_suit(cards).values():
        if len(members) >= 5:
            return _find_straight(members)
    return None
