"""
Reserve ledger: canonical pool state and its low-level mutators.

No business rules live here beyond bookkeeping arithmetic. Callers enforce
their own preconditions (e.g. rejecting zero-share mints).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple

from ..errors import AmmError, ErrorKind
from ..events import EventBus, ReservesSyncedEvent
from ..kernels.u256 import checked_add, checked_sub, require_u256
from .balances import Address, Amount
from .shares import ShareTable


# Shares permanently withheld on the first deposit.
MINIMUM_LIQUIDITY = 1000


@dataclass
class PoolState:
    """
    The single long-lived pool entity.

    ``token0``/``token1``/``fee_bps`` are fixed at construction. Reserves are
    only written by ``ReserveLedger.sync_reserves``; ``total_shares`` only by
    ``mint_shares``/``burn_shares``.
    """

    token0: Address
    token1: Address
    fee_bps: int
    reserve0: Amount = 0
    reserve1: Amount = 0
    total_shares: Amount = 0
    shares: ShareTable = field(default_factory=ShareTable)


class PoolSnapshot(NamedTuple):
    reserve0: Amount
    reserve1: Amount
    total_shares: Amount
    shares: Dict[Address, Amount]


class ReserveLedger:
    """Owns a ``PoolState`` and performs every write to it."""

    def __init__(self, state: PoolState, events: EventBus) -> None:
        self.state = state
        self._events = events

    def sync_reserves(self, new_reserve0: Amount, new_reserve1: Amount) -> None:
        """Overwrite both reserves with the pool's observed token balances."""
        self.state.reserve0 = require_u256("reserve0", new_reserve0)
        self.state.reserve1 = require_u256("reserve1", new_reserve1)
        self._events.emit(ReservesSyncedEvent(reserve0=new_reserve0, reserve1=new_reserve1))

    def mint_shares(self, holder: Address, amount: Amount) -> None:
        require_u256("amount", amount)
        new_total = checked_add(self.state.total_shares, amount)
        new_balance = checked_add(self.state.shares.get(holder), amount)
        self.state.shares.set(holder, new_balance)
        self.state.total_shares = new_total

    def burn_shares(self, holder: Address, amount: Amount) -> None:
        require_u256("amount", amount)
        balance = self.state.shares.get(holder)
        if balance < amount:
            raise AmmError(ErrorKind.INSUFFICIENT_BALANCE, f"{holder} holds {balance} shares, burning {amount}")
        self.state.shares.set(holder, balance - amount)
        self.state.total_shares = checked_sub(self.state.total_shares, amount)

    def snapshot(self) -> PoolSnapshot:
        s = self.state
        return PoolSnapshot(s.reserve0, s.reserve1, s.total_shares, s.shares.holders())

    def restore(self, snap: PoolSnapshot) -> None:
        self.state.reserve0 = snap.reserve0
        self.state.reserve1 = snap.reserve1
        self.state.total_shares = snap.total_shares
        self.state.shares.restore(snap.shares)

    def check_invariants(self) -> List[str]:
        """Return the names of violated bookkeeping invariants (empty if none)."""
        violations: List[str] = []
        s = self.state
        if s.total_shares != s.shares.total():
            violations.append("total_shares_matches_holders")
        for name, value in (("reserve0", s.reserve0), ("reserve1", s.reserve1), ("total_shares", s.total_shares)):
            try:
                require_u256(name, value)
            except AmmError:
                violations.append(f"{name}_in_range")
        return violations
