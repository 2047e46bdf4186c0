from __future__ import annotations

import random
from typing import List, Tuple

from holdem.cards import Card, parse_cards
from holdem.deck import Deck
from holdem.game import GameEngine
from holdem.models import Player, TableConfig


class FixedOrder(random.Random):
    """Random source whose shuffle leaves the deck as it was stacked."""

    def shuffle(self, x, *args, **kwargs) -> None:  # type: ignore[override]
        return None


def cards(*labels: str) -> List[Card]:
    return parse_cards(labels)


def stacked_deck(*labels: str) -> Deck:
    """Deck that deals ``labels`` in the given order and never shuffles."""
    return Deck(cards=list(reversed(cards(*labels))), rng=FixedOrder())


def unshuffled_deck() -> Deck:
    # Draws come off the end: A♠ K♠ Q♠ ... 2♠ A♥ K♥ ...
    return Deck(rng=FixedOrder())


def create_engine(
    *,
    players: int = 3,
    chips: int = 100,
    sb: int = 2,
    bb: int = 5,
    min_buy_in: int = 0,
    max_players: int = 10,
    deck: Deck | None = None,
    seed: int | None = 42,
) -> Tuple[GameEngine, List[Player]]:
    """Instantiate an engine with ``players`` seated in order."""
    config = TableConfig(max_players=max_players, min_buy_in=min_buy_in, sb=sb, bb=bb, seed=seed)
    engine = GameEngine(config, deck=deck)
    seated = [engine.buy_in(f"Player{idx + 1}", chips) for idx in range(players)]
    return engine, seated
