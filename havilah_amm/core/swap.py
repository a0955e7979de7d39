"""
Swap orchestration.

One atomic transition:
    pull amount_in -> price against the cached reserves -> commit the pull
    and the owed output to the reserves -> push amount_out
    -> sync reserves from actual balances -> emit SwapEvent

Reserves are committed before the push, so a swap re-entered from the
outgoing transfer prices against the post-trade state.
"""

from __future__ import annotations

import logging

from ..errors import AmmError, ErrorKind
from ..events import SwapEvent
from ..kernels.u256 import checked_sub, require_u256
from ..state.balances import Address, Amount
from ..state.token import require_transfer
from . import pricing
from .context import PoolContext

logger = logging.getLogger(__name__)


def preview_swap(ctx: PoolContext, token_in: Address, amount_in: Amount) -> Amount:
    """Output ``swap`` would return right now; 0 for a zero input."""
    require_u256("amount_in", amount_in)
    _, _, zero_for_one = ctx.legs(token_in)
    s = ctx.state
    reserve_in, reserve_out = (s.reserve0, s.reserve1) if zero_for_one else (s.reserve1, s.reserve0)
    return pricing.amount_out(amount_in, reserve_in, reserve_out, s.fee_bps)


def swap(ctx: PoolContext, caller: Address, token_in: Address, amount_in: Amount) -> Amount:
    """
    Swap an exact ``amount_in`` of ``token_in`` for the other pool token.

    The caller must have approved the pool for ``amount_in``.

    Raises:
        AmmError: ZeroAmount, InvalidToken, InsufficientOutput, TransferFailed,
            or any error raised by the token collaborator
    """
    require_u256("amount_in", amount_in)
    if amount_in == 0:
        raise AmmError(ErrorKind.ZERO_AMOUNT)
    leg_in, leg_out, zero_for_one = ctx.legs(token_in)

    require_transfer(leg_in.transfer_from(ctx.address, caller, ctx.address, amount_in), "pull token_in")

    # Read after the pull: a call re-entered from the pull has already synced.
    s = ctx.state
    reserve_in, reserve_out = (s.reserve0, s.reserve1) if zero_for_one else (s.reserve1, s.reserve0)

    out = pricing.amount_out(amount_in, reserve_in, reserve_out, s.fee_bps)
    if out == 0:
        raise AmmError(ErrorKind.INSUFFICIENT_OUTPUT, f"amount_in {amount_in} prices to zero output")

    # Commit the pull and the owed output before any token leaves the pool.
    committed_in = leg_in.balance_of(ctx.address)
    committed_out = checked_sub(reserve_out, out)
    if zero_for_one:
        ctx.ledger.sync_reserves(committed_in, committed_out)
    else:
        ctx.ledger.sync_reserves(committed_out, committed_in)

    require_transfer(leg_out.transfer(ctx.address, caller, out), "push token_out")

    ctx.sync_from_balances()
    ctx.events.emit(SwapEvent(initiator=caller, token_in=token_in, amount_in=amount_in, amount_out=out))
    logger.debug("swap %s: %d %s -> %d", caller, amount_in, token_in, out)
    return out
