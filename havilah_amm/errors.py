"""Error taxonomy for the pool core.

Every failure is an ``AmmError`` carrying an ``ErrorKind``. Callers branch on
``kind``; the message is presentation only.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    ZERO_AMOUNT = "ZeroAmount"
    ZERO_SHARES = "ZeroShares"
    INVALID_TOKEN = "InvalidToken"
    INVALID_RATIO = "InvalidRatio"
    INSUFFICIENT_OUTPUT = "InsufficientOutput"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    INSUFFICIENT_ALLOWANCE = "InsufficientAllowance"
    FEE_TOO_HIGH = "FeeTooHigh"
    IDENTICAL_TOKENS = "IdenticalTokens"
    ZERO_ADDRESS = "ZeroAddress"
    OVERFLOW = "Overflow"
    UNDERFLOW = "Underflow"
    DIVISION_BY_ZERO = "DivisionByZero"
    TRANSFER_FAILED = "TransferFailed"


class AmmError(Exception):
    """Raised when an operation is rejected. The enclosing operation has no effect."""

    def __init__(self, kind: ErrorKind, detail: Optional[str] = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(kind.value if not detail else f"{kind.value}: {detail}")
