"""
Single-asset balance tracking.

Implements BalanceTable[Address] -> Amount for one fungible token.
"""

from typing import Dict

from ..errors import AmmError, ErrorKind


# Type aliases
Address = str  # hex string (0x...)
Amount = int  # Non-negative integer, bounded by u256 at the call sites

ZERO_ADDRESS = "0x" + "00" * 32


def is_zero_address(address: Address) -> bool:
    """True for the empty string and any all-zero hex string ("0x0", "0x00..00")."""
    s = address[2:] if address.startswith("0x") else address
    return not s or set(s) == {"0"}


class BalanceTable:
    """
    Balance table mapping account -> amount.

    Zero balances are omitted to keep the table sparse. Do not rely on dict
    iteration order; sort keys explicitly where ordering matters.
    """

    def __init__(self) -> None:
        self._balances: Dict[Address, Amount] = {}

    def get(self, account: Address) -> Amount:
        """Get balance for account. Returns 0 if not found."""
        return self._balances.get(account, 0)

    def set(self, account: Address, amount: Amount) -> None:
        """
        Set balance for account.

        Raises:
            AmmError(Underflow): If amount is negative
        """
        if amount < 0:
            raise AmmError(ErrorKind.UNDERFLOW, f"balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = amount

    def add(self, account: Address, delta: Amount) -> None:
        """Credit a non-negative amount."""
        if delta < 0:
            raise AmmError(ErrorKind.UNDERFLOW, f"delta must be non-negative: {delta}")
        self.set(account, self.get(account) + delta)

    def subtract(self, account: Address, delta: Amount) -> None:
        """
        Debit a non-negative amount.

        Raises:
            AmmError(InsufficientBalance): If the account holds less than delta
        """
        if delta < 0:
            raise AmmError(ErrorKind.UNDERFLOW, f"delta must be non-negative: {delta}")
        current = self.get(account)
        if current < delta:
            raise AmmError(
                ErrorKind.INSUFFICIENT_BALANCE,
                f"{account} holds {current}, needs {delta}",
            )
        self.set(account, current - delta)

    def get_all_balances(self) -> Dict[Address, Amount]:
        return dict(self._balances)

    def restore(self, balances: Dict[Address, Amount]) -> None:
        """Replace the table contents with a copy previously taken by get_all_balances()."""
        self._balances = dict(balances)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
