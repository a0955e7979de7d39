"""
Havilah AMM: constant product pool core.
"""

from .config import AmmConfig, configure_logging
from .errors import AmmError, ErrorKind
from .events import DepositEvent, ReservesSyncedEvent, SwapEvent, WithdrawalEvent
from .core.pool import Pool
from .state.reserves import MINIMUM_LIQUIDITY
from .state.token import MockERC20

__all__ = [
    "AmmConfig",
    "configure_logging",
    "AmmError",
    "ErrorKind",
    "DepositEvent",
    "ReservesSyncedEvent",
    "SwapEvent",
    "WithdrawalEvent",
    "Pool",
    "MINIMUM_LIQUIDITY",
    "MockERC20",
]
