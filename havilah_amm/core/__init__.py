"""
Core pool algorithms
"""

from .pricing import amount_out, spot_price, quote, FEE_DENOMINATOR, MAX_FEE_BPS, PRICE_PRECISION
from .liquidity import compute_shares_minted, compute_redemption, LOCKED_SHARES_HOLDER
from .context import PoolContext

__all__ = [
    "amount_out",
    "spot_price",
    "quote",
    "FEE_DENOMINATOR",
    "MAX_FEE_BPS",
    "PRICE_PRECISION",
    "compute_shares_minted",
    "compute_redemption",
    "LOCKED_SHARES_HOLDER",
    "PoolContext",
]
