"""
State management for the pool
"""

from .balances import BalanceTable, ZERO_ADDRESS, is_zero_address
from .shares import ShareTable
from .reserves import MINIMUM_LIQUIDITY, PoolState, ReserveLedger
from .token import MockERC20, TokenLedger

__all__ = [
    "BalanceTable",
    "ZERO_ADDRESS",
    "is_zero_address",
    "ShareTable",
    "MINIMUM_LIQUIDITY",
    "PoolState",
    "ReserveLedger",
    "MockERC20",
    "TokenLedger",
]
