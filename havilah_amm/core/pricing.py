"""
Constant product pricing.

Pure functions over reserve quantities and a fee rate; nothing here mutates
pool state, so the same code serves previews and the swap path.

Rounding:
- Both divisions in ``amount_out`` truncate. Each rounding loss stays in the
  pool, which is what keeps reserve0 * reserve1 non-decreasing across swaps.
- Do not switch to round-to-nearest without re-deriving that property.
"""

from __future__ import annotations

from ..errors import AmmError, ErrorKind
from ..kernels.u256 import checked_add, checked_mul, floor_div, require_u256
from ..state.balances import Amount

# Fee is expressed in thousandths: fee_bps=3 is 0.3%.
FEE_DENOMINATOR = 1000
MAX_FEE_BPS = 1000
PRICE_PRECISION = 10**18


def require_fee(fee_bps: int) -> int:
    if not isinstance(fee_bps, int) or isinstance(fee_bps, bool):
        raise TypeError("fee_bps must be an int")
    if not (0 <= fee_bps <= MAX_FEE_BPS):
        raise AmmError(ErrorKind.FEE_TOO_HIGH, f"fee_bps must be in [0, {MAX_FEE_BPS}]: {fee_bps}")
    return fee_bps


def amount_out(amount_in: Amount, reserve_in: Amount, reserve_out: Amount, fee_bps: int) -> Amount:
    """
    Output of an exact-in swap.

        amount_in_net = floor(amount_in * (1000 - fee_bps) / 1000)
        amount_out    = floor(reserve_out * amount_in_net / (reserve_in + amount_in_net))

    ``amount_in == 0`` yields 0. An empty input side with a zero net input also
    yields 0 rather than dividing by zero.
    """
    require_u256("amount_in", amount_in)
    require_u256("reserve_in", reserve_in)
    require_u256("reserve_out", reserve_out)
    require_fee(fee_bps)

    if amount_in == 0:
        return 0
    amount_in_net = floor_div(checked_mul(amount_in, FEE_DENOMINATOR - fee_bps), FEE_DENOMINATOR)
    denominator = checked_add(reserve_in, amount_in_net)
    if denominator == 0:
        return 0
    return floor_div(checked_mul(reserve_out, amount_in_net), denominator)


def spot_price(reserve0: Amount, reserve1: Amount, precision: int = PRICE_PRECISION) -> Amount:
    """Price of token0 in token1, scaled by ``precision``; 0 for an empty pool."""
    require_u256("reserve0", reserve0)
    require_u256("reserve1", reserve1)
    require_u256("precision", precision)
    if reserve0 == 0:
        return 0
    return floor_div(checked_mul(reserve1, precision), reserve0)


def quote(amount_a: Amount, reserve_a: Amount, reserve_b: Amount) -> Amount:
    """
    Counterpart amount matching the current ratio: floor(amount_a * reserve_b / reserve_a).

    A deposit of (amount_a, quote(...)) passes the ratio check whenever the
    division is exact.
    """
    require_u256("amount_a", amount_a)
    require_u256("reserve_a", reserve_a)
    require_u256("reserve_b", reserve_b)
    if amount_a == 0:
        raise AmmError(ErrorKind.ZERO_AMOUNT)
    if reserve_a == 0 or reserve_b == 0:
        raise AmmError(ErrorKind.INVALID_RATIO, "pool has no reserves to quote against")
    return floor_div(checked_mul(amount_a, reserve_b), reserve_a)
