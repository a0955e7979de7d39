"""
Token-transfer collaborator.

The pool only consumes the narrow ``TokenLedger`` capability set. There is no
ambient transaction sender in Python, so the acting account is passed
explicitly. ``MockERC20`` is the in-memory reference token used by tests and
local simulations.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, NamedTuple, Optional, Protocol, Tuple, runtime_checkable

from ..errors import AmmError, ErrorKind
from ..kernels.u256 import checked_add, require_u256
from .balances import Address, Amount, BalanceTable, is_zero_address


class TokenLedger(Protocol):
    address: Address

    def transfer(self, sender: Address, recipient: Address, amount: Amount) -> bool: ...

    def transfer_from(self, spender: Address, owner: Address, recipient: Address, amount: Amount) -> bool: ...

    def balance_of(self, account: Address) -> Amount: ...


@runtime_checkable
class SupportsSnapshot(Protocol):
    """Tokens implementing this take part in the pool's rollback on abort."""

    def snapshot(self) -> Any: ...

    def restore(self, snap: Any) -> None: ...


# Called after balances move: (sender, recipient, amount).
TransferHook = Callable[[Address, Address, Amount], None]


class _TokenSnapshot(NamedTuple):
    balances: Dict[Address, Amount]
    allowances: Dict[Tuple[Address, Address], Amount]
    total_supply: Amount


class MockERC20:
    """Minimal ERC20-style ledger with mint, allowances and post-transfer hooks."""

    def __init__(self, name: str, symbol: str, address: Address, decimals: int = 18) -> None:
        if is_zero_address(address):
            raise AmmError(ErrorKind.ZERO_ADDRESS, "token address")
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.address = address
        self._balances = BalanceTable()
        self._allowances: Dict[Tuple[Address, Address], Amount] = {}
        self._total_supply: Amount = 0
        self._hooks: List[TransferHook] = []

    def add_transfer_hook(self, hook: TransferHook) -> None:
        self._hooks.append(hook)

    def total_supply(self) -> Amount:
        return self._total_supply

    def balance_of(self, account: Address) -> Amount:
        return self._balances.get(account)

    def allowance(self, owner: Address, spender: Address) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def mint(self, recipient: Address, amount: Amount) -> None:
        if is_zero_address(recipient):
            raise AmmError(ErrorKind.ZERO_ADDRESS, "mint recipient")
        require_u256("amount", amount)
        self._total_supply = checked_add(self._total_supply, amount)
        self._balances.add(recipient, amount)

    def approve(self, owner: Address, spender: Address, amount: Amount) -> bool:
        if is_zero_address(spender):
            raise AmmError(ErrorKind.ZERO_ADDRESS, "spender")
        self._allowances[(owner, spender)] = require_u256("amount", amount)
        return True

    def transfer(self, sender: Address, recipient: Address, amount: Amount) -> bool:
        self._move(sender, recipient, amount)
        return True

    def transfer_from(self, spender: Address, owner: Address, recipient: Address, amount: Amount) -> bool:
        require_u256("amount", amount)
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise AmmError(ErrorKind.INSUFFICIENT_ALLOWANCE, f"{spender} may move {allowed} of {owner}'s tokens, needs {amount}")
        # Balance is checked before the allowance is spent.
        if self._balances.get(owner) < amount:
            raise AmmError(ErrorKind.INSUFFICIENT_BALANCE, f"{owner} holds {self._balances.get(owner)}, needs {amount}")
        self._allowances[(owner, spender)] = allowed - amount
        self._move(owner, recipient, amount)
        return True

    def _move(self, sender: Address, recipient: Address, amount: Amount) -> None:
        require_u256("amount", amount)
        if is_zero_address(recipient):
            raise AmmError(ErrorKind.ZERO_ADDRESS, "transfer recipient")
        self._balances.subtract(sender, amount)
        self._balances.add(recipient, amount)
        for hook in list(self._hooks):
            hook(sender, recipient, amount)

    def snapshot(self) -> _TokenSnapshot:
        return _TokenSnapshot(self._balances.get_all_balances(), dict(self._allowances), self._total_supply)

    def restore(self, snap: _TokenSnapshot) -> None:
        self._balances.restore(snap.balances)
        self._allowances = dict(snap.allowances)
        self._total_supply = snap.total_supply

    def __repr__(self) -> str:
        return f"MockERC20({self.symbol}, {self.address})"


def require_transfer(ok: Optional[bool], what: str) -> None:
    """Treat a falsy transfer result as a fatal abort."""
    if not ok:
        raise AmmError(ErrorKind.TRANSFER_FAILED, what)
