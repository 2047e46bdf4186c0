from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Set


def split_pot(amount: int, winners: int) -> List[int]:
    """Shares for ``winners`` players in seating order; the odd chips go to the first seats."""
    if winners < 1:
        raise ValueError("At least one winner is required")
    if amount < 0:
        raise ValueError("Pot amount cannot be negative")
    share, remainder = divmod(amount, winners)
    return [share + (1 if idx < remainder else 0) for idx in range(winners)]


class Pot:
    """Chips held for the players eligible to win them.

    The amount only grows until the pot is settled, and a pot is paid out
    once per round: later withdrawals return nothing.
    """

    def __init__(self, eligible: Optional[Iterable[str]] = None, amount: int = 0) -> None:
        if amount < 0:
            raise ValueError("Pot amount cannot be negative")
        self.amount = amount
        self.eligible: Set[str] = set(eligible or ())
        self.settled = False

    def add_player(self, identifier: str) -> None:
        self.eligible.add(identifier)

    def deposit(self, amount: int) -> None:
        if self.settled:
            raise ValueError("Pot already settled")
        if amount < 0:
            raise ValueError("Cannot deposit a negative amount")
        self.amount += amount

    def withdraw_all(self) -> int:
        if self.settled:
            return 0
        chips = self.amount
        self.amount = 0
        self.settled = True
        return chips

    def settle(self, winners: Sequence[str]) -> Dict[str, int]:
        """Withdraw everything and split it across ``winners`` (already in seating order)."""
        if not winners:
            raise ValueError("At least one winner is required")
        chips = self.withdraw_all()
        return dict(zip(winners, split_pot(chips, len(winners))))

    def __repr__(self) -> str:
        return f"Pot(amount={self.amount}, eligible={sorted(self.eligible)})"
