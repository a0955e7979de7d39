# [TESTER] v1

from __future__ import annotations

import pytest

from havilah_amm.errors import AmmError, ErrorKind
from havilah_amm.events import EventBus, ReservesSyncedEvent
from havilah_amm.kernels.u256 import U256_MAX
from havilah_amm.state.reserves import PoolState, ReserveLedger
from havilah_amm.state.shares import ShareTable

ALICE = "0x" + "aa" * 32
BOB = "0x" + "bb" * 32


def _ledger() -> tuple[ReserveLedger, EventBus]:
    bus = EventBus()
    state = PoolState(token0="0x" + "11" * 32, token1="0x" + "22" * 32, fee_bps=3)
    return ReserveLedger(state, bus), bus


def test_sync_reserves_overwrites_and_notifies() -> None:
    ledger, bus = _ledger()
    ledger.sync_reserves(10, 20)
    ledger.sync_reserves(7, 3)
    assert (ledger.state.reserve0, ledger.state.reserve1) == (7, 3)
    assert bus.history == [ReservesSyncedEvent(10, 20), ReservesSyncedEvent(7, 3)]


def test_sync_reserves_rejects_out_of_range() -> None:
    ledger, _ = _ledger()
    with pytest.raises(AmmError) as exc:
        ledger.sync_reserves(U256_MAX + 1, 0)
    assert exc.value.kind is ErrorKind.OVERFLOW


def test_mint_and_burn_keep_total_equal_to_sum() -> None:
    ledger, _ = _ledger()
    ledger.mint_shares(ALICE, 500)
    ledger.mint_shares(BOB, 250)
    ledger.mint_shares(BOB, 0)  # callers reject zero; the ledger itself does not
    ledger.burn_shares(ALICE, 200)

    assert ledger.state.shares.get(ALICE) == 300
    assert ledger.state.shares.get(BOB) == 250
    assert ledger.state.total_shares == 550
    assert ledger.check_invariants() == []


def test_burn_more_than_balance_fails() -> None:
    ledger, _ = _ledger()
    ledger.mint_shares(ALICE, 10)
    with pytest.raises(AmmError) as exc:
        ledger.burn_shares(ALICE, 11)
    assert exc.value.kind is ErrorKind.INSUFFICIENT_BALANCE
    assert ledger.state.total_shares == 10


def test_snapshot_restore_round_trip() -> None:
    ledger, _ = _ledger()
    ledger.mint_shares(ALICE, 10)
    ledger.sync_reserves(1, 2)
    snap = ledger.snapshot()

    ledger.mint_shares(BOB, 5)
    ledger.sync_reserves(9, 9)
    ledger.restore(snap)

    assert ledger.state.shares.holders() == {ALICE: 10}
    assert (ledger.state.reserve0, ledger.state.reserve1, ledger.state.total_shares) == (1, 2, 10)


def test_check_invariants_reports_drift() -> None:
    ledger, _ = _ledger()
    ledger.mint_shares(ALICE, 10)
    ledger.state.total_shares = 11
    assert ledger.check_invariants() == ["total_shares_matches_holders"]


def test_share_table_rejects_negative_balance() -> None:
    table = ShareTable()
    with pytest.raises(AmmError) as exc:
        table.set(ALICE, -1)
    assert exc.value.kind is ErrorKind.UNDERFLOW
