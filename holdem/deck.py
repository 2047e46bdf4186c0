from __future__ import annotations

import random
from typing import Iterable, List, Optional

from .cards import Card, full_deck
from .errors import EmptyDeck


class Deck:
    """Stack of cards; the top of the deck is the end of the list."""

    def __init__(
        self,
        cards: Optional[Iterable[Card]] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.cards: List[Card] = list(cards) if cards is not None else full_deck()
        self.rng = rng if rng is not None else random.Random(seed)

    def shuffle(self) -> None:
        self.rng.shuffle(self.cards)

    def draw(self) -> Card:
        if not self.cards:
            raise EmptyDeck("Not enough cards left in deck")
        return self.cards.pop()

    def insert(self, card: Card, position: int) -> None:
        if position < 0 or position > len(self.cards):
            raise IndexError(f"Invalid deck position: {position}")
        if card in self.cards:
            raise ValueError(f"Card already in deck: {card.label}")
        self.cards.insert(position, card)

    def insert_at_top(self, card: Card) -> None:
        self.insert(card, len(self.cards))

    def remove(self, card: Card) -> None:
        self.cards.remove(card)

    def is_empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards
