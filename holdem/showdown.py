from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .cards import Card
from .errors import NoWinnerDetermined
from .evaluator import HandRank, highest_card, rank_hand

# Hands built from fewer than five cards leave room for a kicker.
KICKER_LIMIT = 5


def evaluate_players(
    player_hands: Mapping[str, Iterable[Card]], community: Iterable[Card]
) -> Dict[str, HandRank]:
    board = list(community)
    return {player_id: rank_hand(list(hole) + board) for player_id, hole in player_hands.items()}


def kicker(hand_rank: HandRank, cards: Iterable[Card]) -> Optional[Card]:
    """Highest card outside the ranked hand, if any card is left over."""
    return highest_card(card for card in cards if not hand_rank.contains(card))


def _compare_kickers(challenger: Optional[Card], leader: Optional[Card]) -> int:
    challenger_rank = challenger.rank if challenger else 0
    leader_rank = leader.rank if leader else 0
    return (challenger_rank > leader_rank) - (challenger_rank < leader_rank)


def _with_kicker(hand_rank: HandRank, card: Optional[Card]) -> List[HandRank]:
    return [hand_rank] if card is None else [hand_rank, HandRank.high_card(card)]


def determine_winners(
    player_hands: Mapping[str, Iterable[Card]], community: Iterable[Card]
) -> Dict[str, List[HandRank]]:
    """Reduce every player's best hand to the set of leaders.

    Returns ``{player_id: [hand_rank]}`` for each leader, with a second
    HighCard entry holding the kicker whenever a kicker decided or tied
    the pot. Leaders keep the iteration order of ``player_hands``.
    """
    board = list(community)
    winners: Dict[str, List[HandRank]] = {}
    # Leader bookkeeping: their ranked hand and the cards it came from.
    leaders: Dict[str, Tuple[HandRank, List[Card]]] = {}
    leading: Optional[HandRank] = None

    for player_id, hole in player_hands.items():
        cards = list(hole) + board
        hand_rank = rank_hand(cards)

        if leading is None or hand_rank > leading:
            leading = hand_rank
            leaders = {player_id: (hand_rank, cards)}
            winners = {player_id: [hand_rank]}
            continue
        if hand_rank < leading:
            continue

        if len(hand_rank) >= KICKER_LIMIT:
            leaders[player_id] = (hand_rank, cards)
            winners[player_id] = [hand_rank]
            continue

        leader_rank, leader_cards = next(iter(leaders.values()))
        challenger_kicker = kicker(hand_rank, cards)
        leader_kicker = kicker(leader_rank, leader_cards)
        outcome = _compare_kickers(challenger_kicker, leader_kicker)

        # Once a kicker has been looked at, every leader carries theirs.
        for leader_id, (rank, leader_hand) in leaders.items():
            marker = kicker(rank, leader_hand)
            if len(winners[leader_id]) < 2 and marker is not None:
                winners[leader_id].append(HandRank.high_card(marker))

        if outcome > 0:
            leading = hand_rank
            leaders = {player_id: (hand_rank, cards)}
            winners = {player_id: _with_kicker(hand_rank, challenger_kicker)}
        elif outcome == 0:
            leaders[player_id] = (hand_rank, cards)
            winners[player_id] = _with_kicker(hand_rank, challenger_kicker)

    if player_hands and not winners:
        raise NoWinnerDetermined("No winning player was determined")
    return winners
