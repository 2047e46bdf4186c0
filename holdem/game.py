from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .cards import Hand
from .deck import Deck
from .errors import NoWinnerDetermined, PlayerOrSeatNotFound, ZeroChipBlindPoster
from .models import Player, RoundResult, RoundState, TableConfig
from .pot import Pot
from .showdown import determine_winners, evaluate_players

LOGGER = logging.getLogger("holdem")

# GameEngine keeps the whole table in memory: seats, chips, deck and pots.
# Nothing here prompts or prints; callers read RoundResult.events or the log.

STREETS = ((RoundState.FLOP, 3), (RoundState.TURN, 1), (RoundState.RIVER, 1))


@dataclass
class RoundContext:
    # Cards out of the deck for the current round; all of it goes back at cleanup.
    result: RoundResult
    hole_cards: Dict[str, Hand] = field(default_factory=dict)
    community: Hand = field(default_factory=Hand)
    burned: Hand = field(default_factory=Hand)
    # Chips each player put into the pots, refunded if the round never settles.
    posted: Dict[str, int] = field(default_factory=dict)


class GameEngine:
    """Texas Hold'em table that plays blinds-only rounds through to settlement."""

    def __init__(self, config: TableConfig, deck: Optional[Deck] = None) -> None:
        self.config = config
        self.deck = deck if deck is not None else Deck(seed=config.seed)
        self.players: Dict[str, Player] = {}
        self.seats: List[str] = []
        self.dealer_seat = 0
        self.main_pot = Pot()
        self.side_pots: List[Pot] = []
        self.round_counter = 0
        self.state = RoundState.IDLE
        self.round: Optional[RoundContext] = None

    # Seat management -------------------------------------------------

    def buy_in(self, name: str, chips: int) -> Player:
        player = Player(name=name, chips=chips)
        self.add_player(player)
        return player

    def add_player(self, player: Player) -> None:
        if player.identifier in self.players:
            raise ValueError("ALREADY_SEATED")
        if len(self.seats) >= self.config.max_players:
            raise RuntimeError("Table is full")
        if player.chips < self.config.min_buy_in:
            raise ValueError("BUY_IN_TOO_LOW")

        player.active = True
        self.seats.append(player.identifier)
        self.players[player.identifier] = player
        LOGGER.info("%s bought in with %s %s of chips", player.name, player.chips, self.config.currency)

    def add_chips(self, identifier: str, amount: int) -> Player:
        player = self.get_player(identifier)
        player.add_chips(amount)
        return player

    def remove_player(self, identifier: str) -> Player:
        player = self.players.pop(identifier, None)
        if player is None:
            raise PlayerOrSeatNotFound(f"Player {identifier} is not at the table")
        player.active = False

        if identifier in self.seats:
            seat_idx = self.seats.index(identifier)
            del self.seats[seat_idx]
            # Keep the button with the same player; if the dealer left, the
            # next rotation lands on whoever sat to their left.
            if seat_idx <= self.dealer_seat:
                self.dealer_seat -= 1
        return player

    def remove_losers(self) -> List[Player]:
        removed = []
        for identifier in list(self.seats):
            player = self.players.get(identifier)
            if player is not None and player.chips == 0:
                LOGGER.warning("%s is out of chips and was removed from the game", player.name)
                removed.append(self.remove_player(identifier))
        return removed

    def is_game_over(self) -> bool:
        return len(self.players) < 2

    def leaderboard(self) -> List[Player]:
        seated = [self.players[identifier] for identifier in self.seats if identifier in self.players]
        return sorted(seated, key=lambda player: player.chips, reverse=True)

    def total_chips(self) -> int:
        in_pots = self.main_pot.amount + sum(pot.amount for pot in self.side_pots)
        return sum(player.chips for player in self.players.values()) + in_pots

    # Seat lookups ----------------------------------------------------

    def get_player(self, identifier: str) -> Player:
        player = self.players.get(identifier)
        if player is None:
            raise PlayerOrSeatNotFound(f"Unable to find player with the id {identifier}")
        return player

    def player_at(self, seat_idx: int) -> Player:
        if not 0 <= seat_idx < len(self.seats):
            raise PlayerOrSeatNotFound(f"Unable to find player at seat {seat_idx}")
        return self.get_player(self.seats[seat_idx])

    def small_blind_seat(self) -> int:
        return (self.dealer_seat + 1) % len(self.seats)

    def big_blind_seat(self) -> int:
        return (self.dealer_seat + 2) % len(self.seats)

    def seats_from_left_of_dealer(self) -> List[int]:
        count = len(self.seats)
        return [(self.dealer_seat + offset) % count for offset in range(1, count + 1)]

    def rotate_dealer(self) -> int:
        self.dealer_seat = (self.dealer_seat + 1) % len(self.seats)
        return self.dealer_seat

    def _lookup(self, seat_idx: int, result: RoundResult) -> Optional[Player]:
        # Lookup misses are reported and the seat is skipped for this round.
        try:
            return self.player_at(seat_idx)
        except PlayerOrSeatNotFound as exc:
            LOGGER.warning("Skipping seat %s: %s", seat_idx, exc)
            label = self.seats[seat_idx] if 0 <= seat_idx < len(self.seats) else f"seat:{seat_idx}"
            if label not in result.skipped:
                result.skipped.append(label)
            return None

    # Round lifecycle -------------------------------------------------

    def can_start_round(self) -> bool:
        return len(self.seats) >= 2

    def play_round(self) -> RoundResult:
        """Play one round from the dealer rotation to cleanup.

        Fatal errors (EmptyDeck, ZeroChipBlindPoster, NoWinnerDetermined)
        propagate and leave ``state`` where the round stopped. ``reset_round``
        puts the cards and blinds back; the next ``play_round`` calls it for
        a round that never finished.
        """
        if not self.can_start_round():
            raise RuntimeError("Not enough players to start a round")

        if self.round is not None:
            LOGGER.warning("Round %s never finished; returning its cards and blinds", self.round.result.round_number)
            self.reset_round()

        self.round_counter += 1
        ctx = RoundContext(result=RoundResult(round_number=self.round_counter))
        self.round = ctx
        result = ctx.result

        self.state = RoundState.ROTATE_DEALER
        self.rotate_dealer()
        dealer = self._lookup(self.dealer_seat, result)
        result.dealer = dealer.identifier if dealer else None
        result.events.append({"ev": "DEALER", "seat": self.dealer_seat, "player": result.dealer})
        if dealer:
            LOGGER.info("Round %s: %s is the dealer", self.round_counter, dealer.name)

        self.state = RoundState.SHUFFLE_DECK
        self.deck.shuffle()
        self.main_pot = Pot(self.seats)
        self.side_pots = []

        self.state = RoundState.POST_SMALL_BLIND
        result.small_blind = self._post_blind(self.small_blind_seat(), self.config.sb, "small", result)
        self.state = RoundState.POST_BIG_BLIND
        result.big_blind = self._post_blind(self.big_blind_seat(), self.config.bb, "big", result)

        self.state = RoundState.DEAL_HOLE_CARDS
        self._deal_hole_cards(ctx)

        for street, count in STREETS:
            self.state = street
            self._deal_street(ctx, street, count)

        self.state = RoundState.SHOWDOWN
        self._showdown(ctx)

        self.state = RoundState.SETTLEMENT
        self._settle(ctx)

        self.state = RoundState.CLEANUP
        self.reset_round()
        result.eliminated = [player.identifier for player in self.remove_losers()]
        for identifier in result.eliminated:
            result.events.append({"ev": "ELIMINATED", "player": identifier})

        self.state = RoundState.IDLE
        return result

    def play_tournament(self, max_rounds: Optional[int] = None) -> List[RoundResult]:
        results: List[RoundResult] = []
        while not self.is_game_over():
            if max_rounds is not None and len(results) >= max_rounds:
                break
            results.append(self.play_round())

        if self.is_game_over() and self.players:
            winner = next(iter(self.players.values()))
            LOGGER.info("One player remaining. %s wins the game", winner.name)
        return results

    def reset_round(self) -> None:
        """Return every dealt card to the deck and clear the pots.

        Blinds are handed back to their posters when the main pot was never
        settled, which only happens after a round was aborted.
        """
        ctx = self.round
        if ctx is not None:
            if not self.main_pot.settled:
                for identifier, chips in ctx.posted.items():
                    player = self.players.get(identifier)
                    if player is not None:
                        player.add_chips(chips)
            for hand in ctx.hole_cards.values():
                for card in hand:
                    self.deck.insert_at_top(card)
            for card in ctx.community:
                self.deck.insert_at_top(card)
            for card in ctx.burned:
                self.deck.insert_at_top(card)
        self.round = None
        self.main_pot = Pot()
        self.side_pots = []

    def _post_blind(self, seat_idx: int, amount: int, blind: str, result: RoundResult) -> Optional[str]:
        player = self._lookup(seat_idx, result)
        if player is None:
            return None
        if player.chips == 0:
            raise ZeroChipBlindPoster(f"{player.name} has no chips and should not be playing this round")

        if player.chips >= amount:
            self._collect(player, amount)
            LOGGER.info("%s posted the %s blind with %s chips", player.name, blind, amount)
            result.events.append({"ev": "POST_BLIND", "blind": blind, "player": player.identifier, "amount": amount})
            return player.identifier

        partial = player.chips
        self._collect(player, partial)
        shortfall = amount - partial
        side_pot = Pot(self.main_pot.eligible - {player.identifier}, amount=shortfall)
        self.side_pots.append(side_pot)

        eligible = [identifier for identifier in self.seats if identifier in side_pot.eligible]
        result.side_pots.append((shortfall, eligible))
        LOGGER.info(
            "%s posted %s to cover part of the %s blind; the remaining %s went into a side pot",
            player.name,
            partial,
            blind,
            shortfall,
        )
        result.events.append({"ev": "POST_BLIND", "blind": blind, "player": player.identifier, "amount": partial})
        result.events.append({"ev": "SIDE_POT", "amount": shortfall, "eligible": eligible})
        return player.identifier

    def _collect(self, player: Player, amount: int) -> None:
        player.subtract_chips(amount)
        self.main_pot.deposit(amount)
        if self.round is not None:
            self.round.posted[player.identifier] = self.round.posted.get(player.identifier, 0) + amount

    def _deal_hole_cards(self, ctx: RoundContext) -> None:
        ordered: List[str] = []
        for seat_idx in self.seats_from_left_of_dealer():
            player = self._lookup(seat_idx, ctx.result)
            if player is not None:
                ordered.append(player.identifier)

        for _ in range(2):
            for identifier in ordered:
                ctx.hole_cards.setdefault(identifier, Hand()).push(self.deck.draw())

        ctx.result.hole_cards = {identifier: list(hand) for identifier, hand in ctx.hole_cards.items()}
        ctx.result.events.append({"ev": "DEAL", "players": ordered})

    def _deal_street(self, ctx: RoundContext, street: RoundState, count: int) -> None:
        ctx.burned.push(self.deck.draw())
        cards = [self.deck.draw() for _ in range(count)]
        for card in cards:
            ctx.community.push(card)
        ctx.result.burned = list(ctx.burned)
        ctx.result.community = list(ctx.community)
        ctx.result.events.append({"ev": street.value, "cards": [card.label for card in cards]})

    def _showdown(self, ctx: RoundContext) -> None:
        result = ctx.result
        result.hand_ranks = evaluate_players(ctx.hole_cards, ctx.community)
        board = ctx.community.labels()
        for identifier, hand_rank in result.hand_ranks.items():
            LOGGER.debug("%s has %s", self.players[identifier].name, hand_rank)
            result.events.append(
                {
                    "ev": "SHOWDOWN",
                    "player": identifier,
                    "hand": ctx.hole_cards[identifier].labels(),
                    "board": board,
                    "rank": hand_rank.name,
                }
            )
        result.winners = determine_winners(ctx.hole_cards, ctx.community)

    def _settle(self, ctx: RoundContext) -> None:
        result = ctx.result
        clockwise = [self.seats[seat_idx] for seat_idx in self.seats_from_left_of_dealer()]

        # Side pots first, newest first, then the main pot.
        for pot in list(reversed(self.side_pots)) + [self.main_pot]:
            contenders = {
                identifier: hand for identifier, hand in ctx.hole_cards.items() if identifier in pot.eligible
            }
            if not contenders:
                raise NoWinnerDetermined(f"No eligible player holds cards for {pot!r}")
            leaders = determine_winners(contenders, ctx.community)

            # A winner who left the table forfeits their share to the others.
            ordered: List[str] = []
            for identifier in clockwise:
                if identifier not in leaders:
                    continue
                if identifier in self.players:
                    ordered.append(identifier)
                    continue
                LOGGER.warning("Unable to credit missing player %s; their share goes to the other winners", identifier)
                if identifier not in result.skipped:
                    result.skipped.append(identifier)
            if not ordered:
                raise NoWinnerDetermined(f"No winner of {pot!r} is still at the table")

            for identifier, chips in pot.settle(ordered).items():
                player = self.players[identifier]
                player.add_chips(chips)
                result.payouts[identifier] = result.payouts.get(identifier, 0) + chips
                verb = "wins" if len(ordered) == 1 else "pushes and wins"
                LOGGER.info("%s %s %s chips with %s", player.name, verb, chips, leaders[identifier][0])
                result.events.append({"ev": "POT_AWARD", "player": identifier, "amount": chips})
