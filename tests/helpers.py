# [TESTER] v1

from __future__ import annotations

from typing import Tuple

from havilah_amm import MockERC20, Pool

POOL = "0x" + "99" * 32
ALICE = "0x" + "aa" * 32
BOB = "0x" + "bb" * 32
TOKEN_A = "0x" + "11" * 32
TOKEN_B = "0x" + "22" * 32

FUNDING = 10**30


def make_pool(fee_bps: int = 3) -> Tuple[Pool, MockERC20, MockERC20]:
    token0 = MockERC20("Havilah Token A", "HTA", TOKEN_A)
    token1 = MockERC20("Havilah Token B", "HTB", TOKEN_B)
    for who in (ALICE, BOB):
        for token in (token0, token1):
            token.mint(who, FUNDING)
            token.approve(who, POOL, FUNDING)
    return Pool(POOL, token0, token1, fee_bps), token0, token1


def seeded_pool(amount0: int = 100_000, amount1: int = 100_000, fee_bps: int = 3) -> Tuple[Pool, MockERC20, MockERC20]:
    pool, token0, token1 = make_pool(fee_bps)
    pool.add_liquidity(ALICE, amount0, amount1)
    return pool, token0, token1
