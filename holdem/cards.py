from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, List, Optional, Sequence

RANKS = "23456789TJQKA"
SUITS = "cdhs"
SUIT_SYMBOLS = "♣♦♥♠"


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def label(self) -> str:
        return RANKS[self.value - 2]


class Suit(IntEnum):
    # Bridge order; only ever used as the last sort key.
    CLUB = 0
    DIAMOND = 1
    HEART = 2
    SPADE = 3

    @property
    def label(self) -> str:
        return SUITS[self.value]

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self.value]


@dataclass(frozen=True, order=True)
class Card:
    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{self.rank.label}{self.suit.label}"

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.symbol}"


def full_deck() -> List[Card]:
    """All 52 cards, suit by suit, Two to Ace."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank_char, suit_char = label[0].upper(), label[1].lower()
    if rank_char not in RANKS:
        raise ValueError(f"Invalid rank: {label[0]}")
    if suit_char not in SUITS:
        raise ValueError(f"Invalid suit: {label[1]}")
    return Card(Rank(RANKS.index(rank_char) + 2), Suit(SUITS.index(suit_char)))


def parse_cards(labels: Iterable[str]) -> List[Card]:
    return [parse_label(label) for label in labels]


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]


class Hand:
    """Ordered cards held by a player, the table or the burn pile."""

    def __init__(self, cards: Optional[Sequence[Card]] = None) -> None:
        self.cards: List[Card] = list(cards or [])

    def push(self, card: Card) -> None:
        self.cards.append(card)

    def pop(self) -> Optional[Card]:
        return self.cards.pop() if self.cards else None

    def labels(self) -> List[str]:
        return cards_to_labels(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.cards == other.cards

    def __repr__(self) -> str:
        return f"Hand({self.labels()!r})"

    def __str__(self) -> str:
        return " ".join(str(card) for card in self.cards)
