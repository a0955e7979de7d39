# [TESTER] v1
"""Property tests over random operation sequences (Hypothesis)."""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from havilah_amm import MINIMUM_LIQUIDITY, AmmError
from tests.helpers import ALICE, BOB, TOKEN_A, TOKEN_B, make_pool

_amount = st.integers(min_value=1_001, max_value=10**24)
_trade = st.tuples(st.sampled_from([TOKEN_A, TOKEN_B]), st.integers(min_value=1, max_value=10**22))


@settings(max_examples=150, deadline=None)
@given(a0=_amount, a1=_amount, fee=st.integers(min_value=1, max_value=1000), trades=st.lists(_trade, max_size=12))
def test_k_never_decreases_across_swaps(a0: int, a1: int, fee: int, trades: list) -> None:
    pool, _, _ = make_pool(fee)
    try:
        pool.add_liquidity(ALICE, a0, a1)
    except AmmError:
        return
    for token, amount in trades:
        r0, r1 = pool.get_reserves()
        preview = pool.get_amount_out(token, amount)
        try:
            out = pool.swap(BOB, token, amount)
        except AmmError:
            assert pool.get_reserves() == (r0, r1)
            continue
        assert out == preview
        n0, n1 = pool.get_reserves()
        assert n0 * n1 >= r0 * r1
        assert pool.check_invariants() == []


@settings(max_examples=150, deadline=None)
@given(a=st.integers(min_value=MINIMUM_LIQUIDITY + 1, max_value=10**30))
def test_deposit_withdraw_round_trip(a: int) -> None:
    pool, _, _ = make_pool()
    shares = pool.add_liquidity(ALICE, a, a)
    assert shares > 0
    assert pool.get_balance_of(ALICE) == shares

    out0, out1 = pool.remove_liquidity(ALICE, shares)
    assert out0 == out1
    assert 0 <= a - out0 < 2 * MINIMUM_LIQUIDITY
    assert pool.get_balance_of(ALICE) == 0


@settings(max_examples=100, deadline=None)
@given(base=st.integers(min_value=2_000, max_value=10**12), k=st.integers(min_value=1, max_value=10**6))
def test_matched_deposit_mints_positive_shares(base: int, k: int) -> None:
    pool, _, _ = make_pool()
    pool.add_liquidity(ALICE, base, 2 * base)
    before = pool.get_balance_of(BOB)
    minted = pool.add_liquidity(BOB, k, 2 * k)
    assert minted > 0
    assert pool.get_balance_of(BOB) == before + minted
