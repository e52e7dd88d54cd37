"""
lottery.events — in-memory log of contract events.

Each ``Lottery`` owns one ``EventLog``; successful state transitions append
an ``Event`` and failed calls append nothing. Names are namespaced as
``"lottery.<Event>"``. Arg keys are identifier-like strings and values are
restricted to str/int/bool so a log snapshot is always JSON-serializable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import EventError

EV_STARTED = "lottery.Started"
EV_TICKET_PURCHASED = "lottery.TicketPurchased"
EV_ENDED = "lottery.Ended"

MAX_EVENT_NAME_LEN = 64
MAX_KEY_LEN = 64

_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Event:
    name: str
    args: Mapping[str, Any]
    block_height: int

    def __post_init__(self) -> None:
        # read-only view over a private copy
        object.__setattr__(self, "args", MappingProxyType(dict(self.args)))

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "args": dict(self.args), "blockHeight": self.block_height}


class EventLog:
    def __init__(self) -> None:
        self._events: List[Event] = []

    # --- Validation helpers -------------------------------------------------

    def _check_name(self, name: Any) -> str:
        if not isinstance(name, str) or not name:
            raise EventError("event name must be a non-empty str", where="name")
        if len(name) > MAX_EVENT_NAME_LEN:
            raise EventError("event name too long", where="name_length", len=len(name))
        return name

    def _check_key(self, key: Any) -> str:
        if not isinstance(key, str) or not key:
            raise EventError("event key must be a non-empty str", where="key")
        if len(key) > MAX_KEY_LEN or not _KEY_RE.match(key):
            raise EventError("event key has invalid characters", where="key_grammar", key=key)
        return key

    def _check_value(self, value: Any) -> Any:
        # bool before int: bool is a subclass of int
        if isinstance(value, (bool, str)):
            return value
        if isinstance(value, int):
            return int(value)
        raise EventError(
            "unsupported event arg type",
            where="value_type",
            py_type=type(value).__name__,
        )

    # --- Core operations ----------------------------------------------------

    def emit(self, name: str, args: Mapping[str, Any], *, block_height: int) -> Event:
        checked = {self._check_key(k): self._check_value(v) for k, v in args.items()}
        ev = Event(self._check_name(name), checked, int(block_height))
        self._events.append(ev)
        return ev

    def snapshot(self, name: Optional[str] = None) -> Tuple[Event, ...]:
        if name is None:
            return tuple(self._events)
        return tuple(e for e in self._events if e.name == name)

    def names(self) -> List[str]:
        return [e.name for e in self._events]

    def last(self) -> Optional[Event]:
        return self._events[-1] if self._events else None

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(tuple(self._events))


__all__ = [
    "EV_STARTED",
    "EV_TICKET_PURCHASED",
    "EV_ENDED",
    "Event",
    "EventLog",
]
