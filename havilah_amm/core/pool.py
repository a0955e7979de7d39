"""
Pool facade: construction checks, transaction scope and the public surface.

Every state-changing call runs inside ``_atomic``: on any exception the pool
state, the state of snapshot-capable tokens and the buffered events are all
rolled back, so a failed call leaves no observable trace. Scopes nest, which
keeps re-entrant calls from token hooks atomic as well.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Iterator, List, Optional, Tuple

from ..config import AmmConfig
from ..errors import AmmError, ErrorKind
from ..events import EventBus, Listener, PoolEvent
from ..state.balances import Address, Amount, is_zero_address
from ..state.reserves import PoolState, ReserveLedger
from ..state.token import SupportsSnapshot, TokenLedger
from . import liquidity, pricing
from . import swap as swap_ops
from .context import PoolContext

logger = logging.getLogger(__name__)


class Pool:
    """Constant product pool over two tokens with a fixed fee."""

    def __init__(
        self,
        address: Address,
        token0: TokenLedger,
        token1: TokenLedger,
        fee_bps: int,
        *,
        config: Optional[AmmConfig] = None,
    ) -> None:
        pricing.require_fee(fee_bps)
        if is_zero_address(token0.address) or is_zero_address(token1.address):
            raise AmmError(ErrorKind.ZERO_ADDRESS, "token address")
        if token0.address == token1.address:
            raise AmmError(ErrorKind.IDENTICAL_TOKENS, token0.address)
        if is_zero_address(address):
            raise AmmError(ErrorKind.ZERO_ADDRESS, "pool address")

        # The pool fee is authoritative; the config carries it for readers.
        self.config = replace(config, fee_bps=fee_bps) if config is not None else AmmConfig(fee_bps=fee_bps)
        self._events = EventBus()
        state = PoolState(token0=token0.address, token1=token1.address, fee_bps=fee_bps)
        self._ctx = PoolContext(
            address=address,
            ledger=ReserveLedger(state, self._events),
            token0=token0,
            token1=token1,
            events=self._events,
        )
        logger.info("pool %s created: %s/%s fee=%d", address, token0.address, token1.address, fee_bps)

    @classmethod
    def from_config(cls, address: Address, token0: TokenLedger, token1: TokenLedger, config: AmmConfig) -> "Pool":
        return cls(address, token0, token1, config.fee_bps, config=config)

    @property
    def address(self) -> Address:
        return self._ctx.address

    @property
    def state(self) -> PoolState:
        return self._ctx.state

    @property
    def events(self) -> List[PoolEvent]:
        """Committed events, oldest first."""
        return list(self._events.history)

    def subscribe(self, listener: Listener) -> None:
        self._events.subscribe(listener)

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        ledger_snap = self._ctx.ledger.snapshot()
        token_snaps: List[Tuple[SupportsSnapshot, Any]] = []
        for token in (self._ctx.token0, self._ctx.token1):
            if isinstance(token, SupportsSnapshot):
                token_snaps.append((token, token.snapshot()))
        self._events.begin()
        try:
            yield
        except BaseException:
            self._ctx.ledger.restore(ledger_snap)
            for token, snap in token_snaps:
                token.restore(snap)
            self._events.rollback()
            raise
        self._events.commit()

    def _require_caller(self, caller: Address) -> None:
        if is_zero_address(caller):
            raise AmmError(ErrorKind.ZERO_ADDRESS, "caller")

    # State-changing operations

    def swap(self, caller: Address, token_in: Address, amount_in: Amount) -> Amount:
        self._require_caller(caller)
        with self._atomic():
            return swap_ops.swap(self._ctx, caller, token_in, amount_in)

    def add_liquidity(self, caller: Address, amount0: Amount, amount1: Amount) -> Amount:
        self._require_caller(caller)
        with self._atomic():
            return liquidity.add_liquidity(self._ctx, caller, amount0, amount1)

    def remove_liquidity(self, caller: Address, shares: Amount) -> Tuple[Amount, Amount]:
        self._require_caller(caller)
        with self._atomic():
            return liquidity.remove_liquidity(self._ctx, caller, shares)

    # Views

    def get_reserves(self) -> Tuple[Amount, Amount]:
        return self.state.reserve0, self.state.reserve1

    def get_total_supply(self) -> Amount:
        return self.state.total_shares

    def get_balance_of(self, account: Address) -> Amount:
        return self.state.shares.get(account)

    def get_amount_out(self, token_in: Address, amount_in: Amount) -> Amount:
        return swap_ops.preview_swap(self._ctx, token_in, amount_in)

    def get_price(self, precision: Optional[int] = None) -> Amount:
        p = self.config.price_precision if precision is None else precision
        return pricing.spot_price(self.state.reserve0, self.state.reserve1, p)

    def get_token0(self) -> Address:
        return self.state.token0

    def get_token1(self) -> Address:
        return self.state.token1

    def get_fee(self) -> int:
        return self.state.fee_bps

    def quote(self, token_in: Address, amount: Amount) -> Amount:
        """Amount of the other token that matches ``amount`` of ``token_in`` at the current ratio."""
        _, _, zero_for_one = self._ctx.legs(token_in)
        s = self.state
        if zero_for_one:
            return pricing.quote(amount, s.reserve0, s.reserve1)
        return pricing.quote(amount, s.reserve1, s.reserve0)

    def check_invariants(self) -> List[str]:
        return self._ctx.ledger.check_invariants()

    def __repr__(self) -> str:
        s = self.state
        return f"Pool({self.address}, reserves=({s.reserve0}, {s.reserve1}), shares={s.total_shares})"
