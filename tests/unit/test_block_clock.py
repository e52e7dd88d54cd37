from __future__ import annotations

import pytest

from lottery import BlockClock, Lottery, LotteryConfig
from lottery.errors import ChainError


def test_starts_at_zero_by_default() -> None:
    assert BlockClock().height == 0


def test_advance_and_advance_to() -> None:
    clock = BlockClock(5)
    assert clock.advance() == 6
    assert clock.advance(10) == 16
    assert clock.advance(0) == 16
    assert clock.advance_to(16) == 16
    assert clock.advance_to(101) == 101
    assert clock.height == 101


def test_height_never_decreases() -> None:
    clock = BlockClock(50)
    with pytest.raises(ChainError) as ei:
        clock.advance_to(49)
    assert ei.value.data == {"current": 50, "requested": 49}
    assert clock.height == 50


@pytest.mark.parametrize("bad", [-1, 1.5, "3", True, None])
def test_rejects_bad_values(bad) -> None:
    with pytest.raises(ChainError):
        BlockClock(bad)
    with pytest.raises(ChainError):
        BlockClock().advance(bad)


def test_lottery_uses_config_start_height() -> None:
    lot = Lottery(LotteryConfig(start_height=10))
    assert lot.clock.height == 10
    assert lot.get_lottery_status().value.current_block == 10


def test_contracts_can_share_one_clock() -> None:
    clock = BlockClock(3)
    a, b = Lottery(clock=clock), Lottery(clock=clock)
    clock.advance_to(20)
    assert a.get_lottery_status().value.current_block == 20
    assert b.get_lottery_status().value.current_block == 20
