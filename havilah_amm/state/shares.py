"""
LP share balance tracking for a single pool.

Shares are tracked separately from token balances; ``total`` of the table is
what the reserve ledger reports as ``total_shares``.
"""

from __future__ import annotations

from typing import Dict

from ..errors import AmmError, ErrorKind
from .balances import Address, Amount


class ShareTable:
    """
    Share table mapping holder -> share amount.

    Notes:
    - Share balances are always non-negative.
    - Zero balances are omitted; a missing holder reads as 0.
    """

    def __init__(self) -> None:
        self._balances: Dict[Address, Amount] = {}

    def get(self, holder: Address) -> Amount:
        """Get share balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def set(self, holder: Address, amount: Amount) -> None:
        if amount < 0:
            raise AmmError(ErrorKind.UNDERFLOW, f"share balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def total(self) -> Amount:
        return sum(self._balances.values())

    def holders(self) -> Dict[Address, Amount]:
        """Return a copy of all non-zero share balances."""
        return dict(self._balances)

    def restore(self, balances: Dict[Address, Amount]) -> None:
        self._balances = dict(balances)

    def __repr__(self) -> str:
        return f"ShareTable({len(self._balances)} holders)"
