"""
lottery.state — data model for one lottery contract instance.

``LotteryState`` is a plain mutable record owned by a single ``Lottery``;
there is no process-wide copy. ``Ticket`` and ``LotteryStatus`` are the
immutable shapes handed back by the read-only queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Ticket:
    owner: str

    def to_dict(self) -> Dict[str, Any]:
        return {"owner": self.owner}


@dataclass(frozen=True)
class LotteryStatus:
    in_progress: bool
    end_block: int
    current_block: int
    total_tickets: int

    def to_dict(self) -> Dict[str, Any]:
        """Contract-style camelCase view."""
        return {
            "inProgress": self.in_progress,
            "endBlock": self.end_block,
            "currentBlock": self.current_block,
            "totalTickets": self.total_tickets,
        }


@dataclass
class LotteryState:
    winner: str
    lottery_id: int = 0
    balance: int = 0
    in_progress: bool = False
    end_block: int = 0
    total_tickets: int = 0
    tickets: Dict[int, Ticket] = field(default_factory=dict)

    def reset_round(self) -> None:
        """Clear per-round data. ``lottery_id`` and ``winner`` survive."""
        self.balance = 0
        self.total_tickets = 0
        self.tickets.clear()

    def owners(self) -> list[str]:
        """Ticket owners in ticket-number order."""
        return [self.tickets[n].owner for n in sorted(self.tickets)]


__all__ = ["Ticket", "LotteryStatus", "LotteryState"]
