"""
Service facade: name dispatch, envelopes and serialized concurrent access.
"""
from __future__ import annotations

import threading

import pytest

from lottery import Lottery, LotteryConfig, LotteryService, Ok
from lottery.errors import ChainError, UnknownCall
from lottery.service import CALLS
from tests.conftest import ALICE, BOB, NO_WINNER, OWNER, TICKET_PRICE


def test_dispatch_covers_every_contract_call() -> None:
    assert set(CALLS) == {
        "startLottery",
        "buyTicket",
        "endLottery",
        "getTicketPrice",
        "getTicketOwner",
        "getLotteryBalance",
        "getLotteryStatus",
        "getWinner",
        "getLotteryId",
    }
    for method_name, _ in CALLS.values():
        assert callable(getattr(LotteryService, method_name))


def test_full_scenario_through_envelopes(service: LotteryService) -> None:
    env = service.call_envelope
    assert env("startLottery", 100, caller=OWNER) == {"type": "ok", "value": 1}
    assert env("buyTicket", caller=ALICE) == {"type": "ok", "value": 1}
    assert env("buyTicket", caller=BOB) == {"type": "ok", "value": 2}

    service.set_block_height(50)
    assert env("getLotteryStatus") == {
        "type": "ok",
        "value": {"inProgress": True, "endBlock": 100, "currentBlock": 50, "totalTickets": 2},
    }
    assert env("endLottery", caller=OWNER) == {"type": "err", "value": 102}

    service.advance_blocks(51)
    assert service.block_height == 101
    assert env("endLottery", caller=OWNER) == {"type": "ok", "value": 2 * TICKET_PRICE}
    assert env("getWinner") == {"type": "ok", "value": BOB}
    assert env("getLotteryBalance") == {"type": "ok", "value": 0}


def test_read_only_envelopes(service: LotteryService) -> None:
    assert service.call_envelope("getTicketPrice") == {"type": "ok", "value": TICKET_PRICE}
    assert service.call_envelope("getWinner") == {"type": "ok", "value": NO_WINNER}
    assert service.call_envelope("getTicketOwner", 1) == {"type": "ok", "value": None}
    assert service.call_envelope("getLotteryId") == {"type": "ok", "value": 0}

    service.start_lottery(OWNER, 10)
    service.buy_ticket(ALICE)
    assert service.call_envelope("getTicketOwner", 1) == {"type": "ok", "value": {"owner": ALICE}}


def test_error_envelopes(service: LotteryService) -> None:
    assert service.call_envelope("startLottery", 10, caller=ALICE) == {"type": "err", "value": 100}
    assert service.call_envelope("buyTicket", caller=ALICE) == {"type": "err", "value": 103}
    assert service.call_envelope("endLottery", caller=OWNER) == {"type": "err", "value": 103}


def test_call_returns_result_values(service: LotteryService) -> None:
    assert service.call("startLottery", 5, caller=OWNER) == Ok(1)
    assert service.call("getLotteryBalance", caller=ALICE) == Ok(0)


def test_unknown_call(service: LotteryService) -> None:
    with pytest.raises(UnknownCall):
        service.call("drawWinner", caller=OWNER)


def test_mutating_call_requires_caller(service: LotteryService) -> None:
    with pytest.raises(TypeError):
        service.call("buyTicket")


def test_non_str_caller_is_rejected_before_state_changes(service: LotteryService) -> None:
    service.call("startLottery", 10, caller=OWNER)
    with pytest.raises(ChainError):
        service.call("buyTicket", caller=ALICE.encode())
    assert service.call("getLotteryBalance") == Ok(0)
    assert service.call("getTicketOwner", 1) == Ok(None)


def test_clock_regression_propagates(service: LotteryService) -> None:
    service.set_block_height(10)
    with pytest.raises(ChainError):
        service.set_block_height(9)


def test_wraps_existing_lottery_or_config() -> None:
    lot = Lottery()
    assert LotteryService(lot).lottery is lot
    assert LotteryService(config=LotteryConfig(ticket_price=7)).get_ticket_price() == Ok(7)
    with pytest.raises(ValueError):
        LotteryService(lot, config=LotteryConfig())


def test_concurrent_buyers_are_serialized(service: LotteryService) -> None:
    service.start_lottery(OWNER, 1_000)
    threads_n, per_thread = 8, 50
    numbers: list[int] = []
    numbers_lock = threading.Lock()
    barrier = threading.Barrier(threads_n)

    def buyer(idx: int) -> None:
        who = f"ST-BUYER-{idx}"
        barrier.wait()
        for _ in range(per_thread):
            n = service.buy_ticket(who).unwrap()
            with numbers_lock:
                numbers.append(n)

    threads = [threading.Thread(target=buyer, args=(i,)) for i in range(threads_n)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    total = threads_n * per_thread
    assert sorted(numbers) == list(range(1, total + 1))
    status = service.get_lottery_status().unwrap()
    assert status.total_tickets == total
    assert service.get_lottery_balance() == Ok(total * TICKET_PRICE)
    assert len(service.lottery.state.tickets) == total
