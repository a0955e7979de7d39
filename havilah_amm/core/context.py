"""
Explicitly owned pool context handed to the orchestrators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..errors import AmmError, ErrorKind
from ..events import EventBus
from ..state.balances import Address
from ..state.reserves import PoolState, ReserveLedger
from ..state.token import TokenLedger


@dataclass(frozen=True)
class PoolContext:
    address: Address
    ledger: ReserveLedger
    token0: TokenLedger
    token1: TokenLedger
    events: EventBus

    @property
    def state(self) -> PoolState:
        return self.ledger.state

    def legs(self, token_in: Address) -> Tuple[TokenLedger, TokenLedger, bool]:
        """
        Resolve (token_in, token_out, zero_for_one) for a swap input.

        Raises:
            AmmError(InvalidToken): If token_in is neither pool token
        """
        if token_in == self.state.token0:
            return self.token0, self.token1, True
        if token_in == self.state.token1:
            return self.token1, self.token0, False
        raise AmmError(ErrorKind.INVALID_TOKEN, str(token_in))

    def sync_from_balances(self) -> None:
        """Set reserves to the pool's actual token balances."""
        self.ledger.sync_reserves(
            self.token0.balance_of(self.address),
            self.token1.balance_of(self.address),
        )
