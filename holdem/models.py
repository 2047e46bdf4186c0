from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .cards import Card
from .evaluator import HandRank


class RoundState(str, Enum):
    IDLE = "IDLE"
    ROTATE_DEALER = "ROTATE_DEALER"
    SHUFFLE_DECK = "SHUFFLE_DECK"
    POST_SMALL_BLIND = "POST_SMALL_BLIND"
    POST_BIG_BLIND = "POST_BIG_BLIND"
    DEAL_HOLE_CARDS = "DEAL_HOLE_CARDS"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"
    SETTLEMENT = "SETTLEMENT"
    CLEANUP = "CLEANUP"


@dataclass
class TableConfig:
    max_players: int = 10
    min_buy_in: int = 100
    sb: int = 2
    bb: int = 5
    currency: str = "USD"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # 10 seats x 2 hole cards + 5 community + 3 burns must fit in one deck.
        if not 2 <= self.max_players <= 10:
            raise ValueError("max_players must be between 2 and 10")
        if self.sb <= 0 or self.bb < self.sb:
            raise ValueError("Blinds must satisfy 0 < sb <= bb")
        if self.min_buy_in < 0:
            raise ValueError("min_buy_in cannot be negative")


@dataclass
class Player:
    name: str
    chips: int = 0
    identifier: str = field(default_factory=lambda: uuid.uuid4().hex)
    active: bool = True

    def add_chips(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot add a negative amount of chips")
        self.chips += amount

    def subtract_chips(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot subtract a negative amount of chips")
        if amount > self.chips:
            raise ValueError("Insufficient chips")
        self.chips -= amount


@dataclass
class RoundResult:
    # Everything that happened in one round, kept after the cards go back to the deck.
    round_number: int
    dealer: Optional[str] = None
    small_blind: Optional[str] = None
    big_blind: Optional[str] = None
    hole_cards: Dict[str, List[Card]] = field(default_factory=dict)
    community: List[Card] = field(default_factory=list)
    burned: List[Card] = field(default_factory=list)
    hand_ranks: Dict[str, HandRank] = field(default_factory=dict)
    winners: Dict[str, List[HandRank]] = field(default_factory=dict)
    payouts: Dict[str, int] = field(default_factory=dict)
    side_pots: List[Tuple[int, List[str]]] = field(default_factory=list)
    eliminated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    events: List[Dict[str, object]] = field(default_factory=list)
