"""
lottery.chain — the simulated block-height clock.

Block height is the only notion of time a contract sees. The caller drives it
explicitly: heights never go backwards, and nothing here reads wall-clock
time.
"""

from __future__ import annotations

from typing import Any

from .errors import ChainError


def require_non_negative_int(name: str, v: Any) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ChainError(f"{name} must be int, got {type(v).__name__}", field=name)
    if v < 0:
        raise ChainError(f"{name} must be non-negative, got {v}", field=name, value=v)
    return v


def require_identity(name: str, v: Any) -> str:
    if not isinstance(v, str):
        raise ChainError(f"{name} must be str, got {type(v).__name__}", field=name)
    if not v.strip():
        raise ChainError(f"{name} must be a non-empty identity", field=name)
    return v


class BlockClock:
    """Caller-controlled, non-decreasing block height."""

    def __init__(self, height: int = 0) -> None:
        self._height = require_non_negative_int("height", height)

    @property
    def height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move forward by ``blocks`` (0 is allowed). Returns the new height."""
        blocks = require_non_negative_int("blocks", blocks)
        self._height += blocks
        return self._height

    def advance_to(self, height: int) -> int:
        """Jump to an absolute ``height``; staying put is fine, going back is not."""
        height = require_non_negative_int("height", height)
        if height < self._height:
            raise ChainError(
                "block height cannot decrease",
                current=self._height,
                requested=height,
            )
        self._height = height
        return self._height

    def __repr__(self) -> str:
        return f"BlockClock(height={self._height})"


__all__ = ["BlockClock", "require_identity", "require_non_negative_int"]
