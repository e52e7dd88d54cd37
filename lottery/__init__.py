"""
Lottery contract simulator.

An in-memory model of an on-chain lottery: the owner starts a round, anyone
buys tickets, and once the chain reaches the round's end block the owner
settles it and the whole pot goes to a ticket chosen by block height.

    from lottery import Lottery

    lot = Lottery()
    owner = lot.config.owner
    lot.start_lottery(owner, 100)
    lot.buy_ticket("ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG")
    lot.clock.advance_to(101)
    prize = lot.end_lottery(owner).unwrap()

Every contract call returns ``Ok(value)`` or ``Err(code)``; see
``lottery.errors.LotteryErrorCode`` for the codes.
"""

from __future__ import annotations

from .chain import BlockClock
from .config import LotteryConfig, default_config, load_config
from .contract import Lottery, select_winning_ticket
from .errors import LotteryError, LotteryErrorCode
from .events import Event, EventLog
from .result import Err, Ok, Result
from .service import LotteryService
from .state import LotteryState, LotteryStatus, Ticket
from .version import __version__


def get_version() -> str:
    """Return the semantic version string for this package."""
    return __version__


__all__ = [
    "__version__",
    "get_version",
    "BlockClock",
    "LotteryConfig",
    "default_config",
    "load_config",
    "Lottery",
    "select_winning_ticket",
    "LotteryError",
    "LotteryErrorCode",
    "Event",
    "EventLog",
    "Ok",
    "Err",
    "Result",
    "LotteryService",
    "LotteryState",
    "LotteryStatus",
    "Ticket",
]
