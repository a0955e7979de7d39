"""
Liquidity management: deposit (mint shares) and withdraw (burn shares).
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..errors import AmmError, ErrorKind
from ..events import DepositEvent, WithdrawalEvent
from ..kernels.u256 import checked_mul, checked_sub, floor_div, isqrt, require_u256
from ..state.balances import ZERO_ADDRESS, Address, Amount
from ..state.reserves import MINIMUM_LIQUIDITY
from ..state.token import require_transfer
from .context import PoolContext

logger = logging.getLogger(__name__)

# Holder of the permanently locked MINIMUM_LIQUIDITY shares. The zero address
# can never act as a caller, so these shares are unredeemable.
LOCKED_SHARES_HOLDER = ZERO_ADDRESS


def compute_shares_minted(
    reserve0: Amount,
    reserve1: Amount,
    amount0: Amount,
    amount1: Amount,
    total_shares: Amount,
) -> Amount:
    """
    Compute shares to mint for a deposit.

    For first deposit (total_shares == 0):
        shares = floor(sqrt(amount0 * amount1)) - MINIMUM_LIQUIDITY

    For subsequent deposits:
        shares = min(floor(amount0 * total_shares / reserve0),
                     floor(amount1 * total_shares / reserve1))

    Taking the minimum under-mints rather than over-mints, protecting existing
    holders.

    Raises:
        AmmError(ZeroShares): If the result would be zero (or the first deposit
            does not clear the minimum liquidity lock)
        AmmError(InvalidRatio): If shares exist but a reserve is empty
    """
    if total_shares == 0:
        root = isqrt(checked_mul(amount0, amount1))
        if root <= MINIMUM_LIQUIDITY:
            raise AmmError(
                ErrorKind.ZERO_SHARES,
                f"sqrt(amount0*amount1)={root} does not exceed MINIMUM_LIQUIDITY",
            )
        shares = root - MINIMUM_LIQUIDITY
    else:
        if reserve0 == 0 or reserve1 == 0:
            raise AmmError(ErrorKind.INVALID_RATIO, "shares outstanding against an empty reserve")
        shares0 = floor_div(checked_mul(amount0, total_shares), reserve0)
        shares1 = floor_div(checked_mul(amount1, total_shares), reserve1)
        shares = min(shares0, shares1)

    if shares == 0:
        raise AmmError(ErrorKind.ZERO_SHARES)
    return shares


def compute_redemption(
    shares: Amount,
    balance0: Amount,
    balance1: Amount,
    total_shares: Amount,
) -> Tuple[Amount, Amount]:
    """
    Proportional redemption, rounded down in favour of remaining holders.

        amount0 = floor(shares * balance0 / total_shares)
        amount1 = floor(shares * balance1 / total_shares)
    """
    amount0 = floor_div(checked_mul(shares, balance0), total_shares)
    amount1 = floor_div(checked_mul(shares, balance1), total_shares)
    return amount0, amount1


def add_liquidity(ctx: PoolContext, caller: Address, amount0: Amount, amount1: Amount) -> Amount:
    """
    Deposit both tokens at the current price and mint shares to ``caller``.

    Non-empty pools require reserve0 * amount1 == reserve1 * amount0 exactly
    (integer cross-multiplication, no rounding tolerance).

    Returns:
        Shares minted to the caller (excluding the locked minimum on first deposit)
    """
    require_u256("amount0", amount0)
    require_u256("amount1", amount1)
    if amount0 == 0 or amount1 == 0:
        raise AmmError(ErrorKind.ZERO_AMOUNT, f"({amount0}, {amount1})")

    s = ctx.state
    reserve0, reserve1, total_shares = s.reserve0, s.reserve1, s.total_shares

    require_transfer(ctx.token0.transfer_from(ctx.address, caller, ctx.address, amount0), "pull token0")
    require_transfer(ctx.token1.transfer_from(ctx.address, caller, ctx.address, amount1), "pull token1")

    if reserve0 != 0 or reserve1 != 0:
        if checked_mul(reserve0, amount1) != checked_mul(reserve1, amount0):
            raise AmmError(
                ErrorKind.INVALID_RATIO,
                f"deposit {amount0}:{amount1} does not match reserves {reserve0}:{reserve1}",
            )

    shares = compute_shares_minted(reserve0, reserve1, amount0, amount1, total_shares)

    if total_shares == 0:
        ctx.ledger.mint_shares(LOCKED_SHARES_HOLDER, MINIMUM_LIQUIDITY)
    ctx.ledger.mint_shares(caller, shares)

    ctx.sync_from_balances()
    ctx.events.emit(DepositEvent(provider=caller, amount0=amount0, amount1=amount1, shares=shares))
    logger.debug("deposit %s: (%d, %d) -> %d shares", caller, amount0, amount1, shares)
    return shares


def remove_liquidity(ctx: PoolContext, caller: Address, shares: Amount) -> Tuple[Amount, Amount]:
    """
    Burn ``shares`` and pay out the proportional slice of the pool's actual balances.

    Shares are burned and reserves synced before any token leaves the pool, so
    a re-entrant call from the outgoing transfer already sees the reduced
    share balance.

    Returns:
        (amount0, amount1) paid to the caller
    """
    require_u256("shares", shares)
    if shares == 0:
        raise AmmError(ErrorKind.ZERO_SHARES)
    held = ctx.state.shares.get(caller)
    if shares > held:
        raise AmmError(ErrorKind.INSUFFICIENT_BALANCE, f"{caller} holds {held} shares, redeeming {shares}")

    balance0 = ctx.token0.balance_of(ctx.address)
    balance1 = ctx.token1.balance_of(ctx.address)
    amount0, amount1 = compute_redemption(shares, balance0, balance1, ctx.state.total_shares)
    if amount0 == 0 or amount1 == 0:
        raise AmmError(ErrorKind.ZERO_AMOUNT, f"redemption rounds to ({amount0}, {amount1})")

    ctx.ledger.burn_shares(caller, shares)
    ctx.ledger.sync_reserves(checked_sub(balance0, amount0), checked_sub(balance1, amount1))

    require_transfer(ctx.token0.transfer(ctx.address, caller, amount0), "push token0")
    require_transfer(ctx.token1.transfer(ctx.address, caller, amount1), "push token1")

    ctx.events.emit(WithdrawalEvent(provider=caller, amount0=amount0, amount1=amount1, shares=shares))
    logger.debug("withdraw %s: %d shares -> (%d, %d)", caller, shares, amount0, amount1)
    return amount0, amount1
