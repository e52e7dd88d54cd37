"""
Shared pytest fixtures:
- Stable caller identities (owner + two buyers, as in the contract's own tests)
- A fresh ``Lottery`` / ``LotteryService`` per test (no shared state)
- Environment isolation for LOTTERY_* variables
"""
from __future__ import annotations

import logging
import os
import typing as t

import pytest

from lottery import Lottery, LotteryService
from lottery.config import DEFAULT_NO_WINNER, DEFAULT_OWNER, LotteryConfig, default_config

# Keep dict/set iteration stable across runs.
os.environ.setdefault("PYTHONHASHSEED", "0")

OWNER = DEFAULT_OWNER
NO_WINNER = DEFAULT_NO_WINNER
ALICE = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
BOB = "ST3AM1A56AK2C1XAFJ4115ZSV26EB49BVQ10MGCS0"

TICKET_PRICE = 1_000_000


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("LOTTERY_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_lottery_logger() -> t.Iterator[None]:
    logger = logging.getLogger("lottery")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def accounts() -> t.Dict[str, str]:
    return {"owner": OWNER, "alice": ALICE, "bob": BOB}


@pytest.fixture
def config() -> LotteryConfig:
    return default_config()


@pytest.fixture
def lottery(config: LotteryConfig) -> Lottery:
    return Lottery(config)


@pytest.fixture
def service(config: LotteryConfig) -> LotteryService:
    return LotteryService(config=config)


@pytest.fixture
def started(lottery: Lottery) -> Lottery:
    """A lottery with a round of duration 100 started at height 0."""
    assert lottery.start_lottery(OWNER, 100).is_ok
    return lottery
