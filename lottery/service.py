"""
lottery.service — a thread-safe facade over one ``Lottery``.

The contract assumes calls never interleave (a chain executes transactions
one at a time). ``LotteryService`` keeps that true when the simulator is
shared between threads: every call, including clock movement, runs under a
single re-entrant lock.

It also exposes contract-style dispatch by name, returning either a
``Result`` or the JSON-friendly envelope ``{"type": ..., "value": ...}``:

    svc = LotteryService()
    svc.call("startLottery", 100, caller=owner)
    svc.call_envelope("getLotteryStatus")
    # {"type": "ok", "value": {"inProgress": True, "endBlock": 100, ...}}
"""

from __future__ import annotations

import threading
from dataclasses import asdict, is_dataclass
from typing import Any, Callable, Dict, Optional

from .config import LotteryConfig
from .contract import Lottery
from .errors import UnknownCall
from .logging import get_logger
from .result import Result

log = get_logger(__name__)

# contract name -> (method name, takes caller)
CALLS: Dict[str, tuple[str, bool]] = {
    "startLottery": ("start_lottery", True),
    "buyTicket": ("buy_ticket", True),
    "endLottery": ("end_lottery", True),
    "getTicketPrice": ("get_ticket_price", False),
    "getTicketOwner": ("get_ticket_owner", False),
    "getLotteryBalance": ("get_lottery_balance", False),
    "getLotteryStatus": ("get_lottery_status", False),
    "getWinner": ("get_winner", False),
    "getLotteryId": ("get_lottery_id", False),
}


def to_plain(value: Any) -> Any:
    """Render a call value for an envelope: dataclasses with ``to_dict`` use it."""
    if value is None or isinstance(value, (bool, int, str)):
        return value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value


class LotteryService:
    def __init__(
        self,
        lottery: Optional[Lottery] = None,
        *,
        config: Optional[LotteryConfig] = None,
    ) -> None:
        if lottery is not None and config is not None:
            raise ValueError("pass either lottery or config, not both")
        self.lottery = lottery if lottery is not None else Lottery(config)
        self._lock = threading.RLock()

    def _locked(self, fn: Callable[..., Any], *args: Any) -> Any:
        with self._lock:
            return fn(*args)

    # ---- contract calls -----------------------------------------------------

    def start_lottery(self, caller: str, duration: int) -> Result[int]:
        return self._locked(self.lottery.start_lottery, caller, duration)

    def buy_ticket(self, caller: str) -> Result[int]:
        return self._locked(self.lottery.buy_ticket, caller)

    def end_lottery(self, caller: str) -> Result[int]:
        return self._locked(self.lottery.end_lottery, caller)

    def get_ticket_price(self) -> Result[int]:
        return self._locked(self.lottery.get_ticket_price)

    def get_ticket_owner(self, ticket_number: int) -> Result[Any]:
        return self._locked(self.lottery.get_ticket_owner, ticket_number)

    def get_lottery_balance(self) -> Result[int]:
        return self._locked(self.lottery.get_lottery_balance)

    def get_lottery_status(self) -> Result[Any]:
        return self._locked(self.lottery.get_lottery_status)

    def get_winner(self) -> Result[str]:
        return self._locked(self.lottery.get_winner)

    def get_lottery_id(self) -> Result[int]:
        return self._locked(self.lottery.get_lottery_id)

    # ---- block clock --------------------------------------------------------

    @property
    def block_height(self) -> int:
        with self._lock:
            return self.lottery.clock.height

    def advance_blocks(self, blocks: int = 1) -> int:
        return self._locked(self.lottery.clock.advance, blocks)

    def set_block_height(self, height: int) -> int:
        return self._locked(self.lottery.clock.advance_to, height)

    # ---- dispatch -----------------------------------------------------------

    def call(self, name: str, *args: Any, caller: Optional[str] = None) -> Result[Any]:
        """
        Invoke a contract call by its contract name. State-changing calls
        need ``caller``; read-only calls ignore it.
        """
        try:
            method_name, needs_caller = CALLS[name]
        except KeyError:
            raise UnknownCall(name) from None
        if needs_caller and caller is None:
            raise TypeError(f"{name} requires a caller")
        method = getattr(self, method_name)
        with self._lock:
            result = method(caller, *args) if needs_caller else method(*args)
        log.debug("call %s -> %s", name, result.type, extra={"caller": caller})
        return result

    def call_envelope(self, name: str, *args: Any, caller: Optional[str] = None) -> Dict[str, Any]:
        result = self.call(name, *args, caller=caller)
        return {"type": result.type, "value": to_plain(result.value)}


__all__ = ["CALLS", "LotteryService", "to_plain"]
