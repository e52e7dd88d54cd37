"""
lottery.result — tagged ok/err values returned by every contract call.

    r = lottery.buy_ticket(alice)
    if r.is_ok:
        ticket_no = r.value
    else:
        assert r.code is LotteryErrorCode.NOT_IN_PROGRESS

``Result.to_dict()`` gives the ``{"type": "ok"|"err", "value": ...}`` envelope
used by the service layer; for errors ``value`` is the numeric code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, TypeVar, Union

from .errors import LotteryErrorCode, ResultError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    type = "ok"
    is_ok = True
    is_err = False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass(frozen=True)
class Err:
    code: LotteryErrorCode

    type = "err"
    is_ok = False
    is_err = True

    def __post_init__(self) -> None:
        # Accept raw ints (100..104) as well as enum members.
        object.__setattr__(self, "code", LotteryErrorCode(self.code))

    @property
    def value(self) -> int:
        return int(self.code)

    def unwrap(self) -> Any:
        raise ResultError(self.code)

    def unwrap_or(self, default: Any) -> Any:
        return default

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value}


Result = Union[Ok[T], Err]

__all__ = ["Ok", "Err", "Result"]
