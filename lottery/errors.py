"""
lottery.errors
--------------

Error codes and exception types for the lottery simulator.

Two separate channels
---------------------
- Business-rule violations (caller is not the owner, no round running, ...)
  are *values*: contract calls return ``Err(LotteryErrorCode.X)`` and never
  raise. The numeric codes match the on-chain contract's ``err-*`` constants.
- Misuse of the simulator itself (bad config, block height going backwards,
  unknown call names, unwrapping an ``Err``) raises a ``LotteryError``
  subclass carrying a machine-friendly ``code`` and optional ``data``.

This module uses only the stdlib.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Mapping


class LotteryErrorCode(IntEnum):
    OWNER_ONLY = 100
    NOT_FOUND = 101
    IN_PROGRESS = 102
    NOT_IN_PROGRESS = 103
    INSUFFICIENT_FUNDS = 104

    # start_lottery uses 102 for "a round is already running" and end_lottery
    # uses it for "the end block has not been reached yet".
    ALREADY_IN_PROGRESS = 102
    STILL_IN_PROGRESS = 102


@dataclass(eq=False)
class LotteryError(Exception):
    """
    Root exception for simulator misuse.

    Attributes
    ----------
    code: str
        Stable machine code, e.g. ``"LOTTERY/CONFIG"``.
    message: str
        Human hint for logs.
    data: dict
        Optional JSON-friendly fields (heights, names, values).
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(f"{self.code}: {self.message}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "data": _jsonmap(self.data),
        }

    def __str__(self) -> str:
        parts = [f"{self.code}: {self.message}"]
        if self.data:
            parts.append("[" + ", ".join(f"{k}={v!r}" for k, v in self.data.items()) + "]")
        return " ".join(parts)


class ConfigError(LotteryError):
    def __init__(self, message: str, **data: Any) -> None:
        super().__init__(code="LOTTERY/CONFIG", message=message, data=_jsonmap(data))


class ChainError(LotteryError):
    """Invalid block-height movement or height/duration value."""

    def __init__(self, message: str, **data: Any) -> None:
        super().__init__(code="LOTTERY/CHAIN", message=message, data=_jsonmap(data))


class UnknownCall(LotteryError):
    def __init__(self, name: str) -> None:
        super().__init__(
            code="LOTTERY/UNKNOWN_CALL",
            message=f"unknown contract call: {name}",
            data={"name": name},
        )


class ResultError(LotteryError):
    """Raised by ``Err.unwrap()``; carries the contract error code."""

    def __init__(self, error_code: LotteryErrorCode) -> None:
        super().__init__(
            code="LOTTERY/RESULT",
            message=f"called unwrap() on Err({error_code.name})",
            data={"error_code": int(error_code)},
        )
        self.error_code = error_code


class EventError(LotteryError):
    def __init__(self, message: str, **data: Any) -> None:
        super().__init__(code="LOTTERY/EVENT", message=message, data=_jsonmap(data))


def _jsonmap(m: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in m.items():
        if v is None or isinstance(v, (bool, int, float, str)):
            out[k] = v
        elif isinstance(v, (bytes, bytearray)):
            out[k] = "0x" + bytes(v).hex()
        else:
            out[k] = str(v)
    return out


__all__ = [
    "LotteryErrorCode",
    "LotteryError",
    "ConfigError",
    "ChainError",
    "UnknownCall",
    "ResultError",
    "EventError",
]
