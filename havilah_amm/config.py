"""
Pool configuration.

Sources, in the order callers usually layer them:
- dataclass defaults
- a YAML mapping (``AmmConfig.from_yaml``)
- ``HAVILAH_*`` environment variables (``AmmConfig.from_env``)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .core.pricing import MAX_FEE_BPS, PRICE_PRECISION, require_fee

DEFAULT_FEE_BPS = 3  # 0.3%

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(environ: Mapping[str, str], name: str, default: int, *, lo: int, hi: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


@dataclass(frozen=True)
class AmmConfig:
    fee_bps: int = DEFAULT_FEE_BPS
    price_precision: int = PRICE_PRECISION
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        require_fee(self.fee_bps)
        if not isinstance(self.price_precision, int) or isinstance(self.price_precision, bool):
            raise TypeError("price_precision must be an int")
        if self.price_precision <= 0:
            raise ValueError(f"price_precision must be positive: {self.price_precision}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}: {self.log_level}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, *, base: Optional["AmmConfig"] = None) -> "AmmConfig":
        """Overlay HAVILAH_FEE_BPS / HAVILAH_PRICE_PRECISION / HAVILAH_LOG_LEVEL on ``base``."""
        env = os.environ if environ is None else environ
        b = base or cls()
        return cls(
            fee_bps=_env_int(env, "HAVILAH_FEE_BPS", b.fee_bps, lo=0, hi=MAX_FEE_BPS),
            price_precision=_env_int(env, "HAVILAH_PRICE_PRECISION", b.price_precision, lo=1, hi=10**36),
            log_level=_env_str(env, "HAVILAH_LOG_LEVEL", b.log_level).upper(),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AmmConfig":
        unknown = set(data) - {"fee_bps", "price_precision", "log_level"}
        if unknown:
            raise ValueError(f"unknown config keys: {sorted(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "AmmConfig":
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"{path}: config must be a YAML mapping")
        return cls.from_mapping(data)


def configure_logging(config: AmmConfig) -> logging.Logger:
    """Apply ``config.log_level`` to the package logger hierarchy."""
    log = logging.getLogger("havilah_amm")
    log.setLevel(config.log_level.upper())
    return log
