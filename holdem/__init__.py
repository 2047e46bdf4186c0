"""Texas Hold'em hand ranking, showdown and blinds-only round engine."""

from .cards import Card, Hand, Rank, Suit, full_deck, parse_cards, parse_label
from .deck import Deck
from .errors import (
    EmptyDeck,
    HoldemError,
    InvalidHandSize,
    NoWinnerDetermined,
    PlayerOrSeatNotFound,
    ZeroChipBlindPoster,
)
from .evaluator import Category, HandRank, highest_card, rank_hand
from .game import GameEngine, RoundContext
from .models import Player, RoundResult, RoundState, TableConfig
from .pot import Pot, split_pot
from .showdown import determine_winners, evaluate_players, kicker

__all__ = [
    "Card",
    "Hand",
    "Rank",
    "Suit",
    "full_deck",
    "parse_cards",
    "parse_label",
    "Deck",
    "EmptyDeck",
    "HoldemError",
    "InvalidHandSize",
    "NoWinnerDetermined",
    "PlayerOrSeatNotFound",
    "ZeroChipBlindPoster",
    "Category",
    "HandRank",
    "highest_card",
    "rank_hand",
    "GameEngine",
    "RoundContext",
    "Player",
    "RoundResult",
    "RoundState",
    "TableConfig",
    "Pot",
    "split_pot",
    "determine_winners",
    "evaluate_players",
    "kicker",
]
