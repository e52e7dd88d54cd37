"""
lottery.contract — the lottery contract state machine.

Interface (contract name in brackets):
  start_lottery(caller, duration)  [startLottery]   -> Ok(lottery_id)
  buy_ticket(caller)               [buyTicket]      -> Ok(ticket_number)
  end_lottery(caller)              [endLottery]     -> Ok(prize)
  get_ticket_price()               [getTicketPrice]
  get_ticket_owner(n)              [getTicketOwner] -> Ok(Ticket | None)
  get_lottery_balance()            [getLotteryBalance]
  get_lottery_status()             [getLotteryStatus] -> Ok(LotteryStatus)
  get_winner()                     [getWinner]
  get_lottery_id()                 [getLotteryId]

Rounds move Idle -> InProgress -> (height >= end_block) -> Idle. Rule
violations come back as ``Err(code)``; nothing here raises for them.

The winner is not random: the winning ticket number is
``(height % total_tickets) + 1``, a pure function of chain state.
"""

from __future__ import annotations

from typing import Optional

from .chain import BlockClock, require_identity, require_non_negative_int
from .config import LotteryConfig, default_config
from .errors import LotteryErrorCode
from .events import EV_ENDED, EV_STARTED, EV_TICKET_PURCHASED, EventLog
from .logging import get_logger
from .result import Err, Ok, Result
from .state import LotteryState, LotteryStatus, Ticket

log = get_logger(__name__)


def select_winning_ticket(block_height: int, total_tickets: int) -> Optional[int]:
    """
    1-based winning ticket number for ``block_height``, or None when no
    tickets were sold.
    """
    if total_tickets <= 0:
        return None
    return (block_height % total_tickets) + 1


class Lottery:
    """
    One lottery contract instance with its own state, clock and event log.

    ``clock`` may be shared with other contracts simulated on the same chain;
    by default a fresh one starts at ``config.start_height``.
    """

    def __init__(
        self,
        config: Optional[LotteryConfig] = None,
        *,
        clock: Optional[BlockClock] = None,
        events: Optional[EventLog] = None,
    ) -> None:
        self.config = config or default_config()
        self.clock = clock if clock is not None else BlockClock(self.config.start_height)
        self.events = events if events is not None else EventLog()
        self.state = LotteryState(winner=self.config.no_winner)

    # ---- guards -------------------------------------------------------------

    def _is_owner(self, caller: str) -> bool:
        return caller == self.config.owner

    def _reject(self, op: str, code: LotteryErrorCode, caller: str) -> Err:
        log.debug(
            "%s rejected: %s",
            op,
            code.name,
            extra={"caller": caller, "code": int(code), "height": self.clock.height},
        )
        return Err(code)

    # ---- public entrypoints -------------------------------------------------

    def start_lottery(self, caller: str, duration: int) -> Result[int]:
        if not self._is_owner(caller):
            return self._reject("start_lottery", LotteryErrorCode.OWNER_ONLY, caller)
        if self.state.in_progress:
            return self._reject("start_lottery", LotteryErrorCode.ALREADY_IN_PROGRESS, caller)
        duration = require_non_negative_int("duration", duration)

        st = self.state
        st.lottery_id += 1
        st.in_progress = True
        st.end_block = self.clock.height + duration
        st.reset_round()

        self.events.emit(
            EV_STARTED,
            {"lottery_id": st.lottery_id, "end_block": st.end_block, "duration": duration},
            block_height=self.clock.height,
        )
        log.info(
            "lottery started",
            extra={"lottery_id": st.lottery_id, "end_block": st.end_block, "height": self.clock.height},
        )
        return Ok(st.lottery_id)

    def buy_ticket(self, caller: str) -> Result[int]:
        st = self.state
        if not st.in_progress:
            return self._reject("buy_ticket", LotteryErrorCode.NOT_IN_PROGRESS, caller)
        if self.config.ticket_price > self.config.funds_cap:
            return self._reject("buy_ticket", LotteryErrorCode.INSUFFICIENT_FUNDS, caller)
        caller = require_identity("caller", caller)

        st.total_tickets += 1
        st.balance += self.config.ticket_price
        st.tickets[st.total_tickets] = Ticket(owner=caller)

        self.events.emit(
            EV_TICKET_PURCHASED,
            {
                "lottery_id": st.lottery_id,
                "ticket": st.total_tickets,
                "buyer": caller,
                "price": self.config.ticket_price,
            },
            block_height=self.clock.height,
        )
        log.info(
            "ticket purchased",
            extra={"lottery_id": st.lottery_id, "ticket": st.total_tickets, "buyer": caller},
        )
        return Ok(st.total_tickets)

    def end_lottery(self, caller: str) -> Result[int]:
        st = self.state
        height = self.clock.height
        if not self._is_owner(caller):
            return self._reject("end_lottery", LotteryErrorCode.OWNER_ONLY, caller)
        if not st.in_progress:
            return self._reject("end_lottery", LotteryErrorCode.NOT_IN_PROGRESS, caller)
        if height < st.end_block:
            return self._reject("end_lottery", LotteryErrorCode.STILL_IN_PROGRESS, caller)

        number = select_winning_ticket(height, st.total_tickets)
        ticket = st.tickets.get(number) if number is not None else None
        if ticket is None:
            # Only reachable when the round sold no tickets.
            log.warning(
                "no winning ticket found",
                extra={"lottery_id": st.lottery_id, "total_tickets": st.total_tickets, "height": height},
            )
            return Err(LotteryErrorCode.NOT_FOUND)

        prize = st.balance
        self.events.emit(
            EV_ENDED,
            {"lottery_id": st.lottery_id, "winner": ticket.owner, "ticket": number, "prize": prize},
            block_height=height,
        )
        st.in_progress = False
        st.winner = ticket.owner
        st.balance = 0

        log.info(
            "lottery ended",
            extra={"lottery_id": st.lottery_id, "winner": ticket.owner, "ticket": number, "prize": prize},
        )
        return Ok(prize)

    # ---- read-only ----------------------------------------------------------

    def get_ticket_price(self) -> Result[int]:
        return Ok(self.config.ticket_price)

    def get_ticket_owner(self, ticket_number: int) -> Result[Optional[Ticket]]:
        return Ok(self.state.tickets.get(ticket_number))

    def get_lottery_balance(self) -> Result[int]:
        return Ok(self.state.balance)

    def get_lottery_status(self) -> Result[LotteryStatus]:
        st = self.state
        return Ok(
            LotteryStatus(
                in_progress=st.in_progress,
                end_block=st.end_block,
                current_block=self.clock.height,
                total_tickets=st.total_tickets,
            )
        )

    def get_winner(self) -> Result[str]:
        return Ok(self.state.winner)

    def get_lottery_id(self) -> Result[int]:
        return Ok(self.state.lottery_id)

    def __repr__(self) -> str:
        st = self.state
        return (
            f"Lottery(id={st.lottery_id}, in_progress={st.in_progress}, "
            f"tickets={st.total_tickets}, height={self.clock.height})"
        )


__all__ = ["Lottery", "select_winning_ticket"]
