"""
Records emitted by the pool and the bus that delivers them.

Emission is transactional: events raised inside a scope are buffered and only
reach listeners once the outermost scope commits. A rolled-back scope discards
its events, so listeners never observe an aborted operation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Union

from .state.balances import Address, Amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapEvent:
    initiator: Address
    token_in: Address
    amount_in: Amount
    amount_out: Amount


@dataclass(frozen=True)
class DepositEvent:
    provider: Address
    amount0: Amount
    amount1: Amount
    shares: Amount


@dataclass(frozen=True)
class WithdrawalEvent:
    provider: Address
    amount0: Amount
    amount1: Amount
    shares: Amount


@dataclass(frozen=True)
class ReservesSyncedEvent:
    reserve0: Amount
    reserve1: Amount


PoolEvent = Union[SwapEvent, DepositEvent, WithdrawalEvent, ReservesSyncedEvent]
Listener = Callable[[PoolEvent], None]


class EventBus:
    """Buffers events per open scope and publishes them on outermost commit."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._scopes: List[List[PoolEvent]] = []
        self.history: List[PoolEvent] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def emit(self, event: PoolEvent) -> None:
        if self._scopes:
            self._scopes[-1].append(event)
        else:
            self._publish([event])

    def begin(self) -> None:
        self._scopes.append([])

    def commit(self) -> None:
        pending = self._scopes.pop()
        if self._scopes:
            self._scopes[-1].extend(pending)
        else:
            self._publish(pending)

    def rollback(self) -> None:
        dropped = self._scopes.pop()
        if dropped:
            logger.debug("discarding %d event(s) from aborted operation", len(dropped))

    def _publish(self, events: List[PoolEvent]) -> None:
        for event in events:
            self.history.append(event)
            logger.debug("event %r", event)
            for listener in list(self._listeners):
                listener(event)
