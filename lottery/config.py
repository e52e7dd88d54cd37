"""
lottery.config — identities, ticket price and caps for a simulated lottery.

Configuration precedence (highest first):
  1) Explicit overrides passed to ``load_config()``
  2) Environment variables (LOTTERY_*)
  3) Config file (TOML or JSON)
  4) Built-in defaults below

Key env vars:
  - LOTTERY_OWNER         (str)  default: ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM
  - LOTTERY_NO_WINNER     (str)  default: SP000000000000000000002Q6VF78
  - LOTTERY_TICKET_PRICE  (int)  default: 1_000_000      (1 STX in micro-STX)
  - LOTTERY_FUNDS_CAP     (int)  default: 1_000_000_000  (assumed per-caller balance)
  - LOTTERY_START_HEIGHT  (int)  default: 0

A config file holds the same fields as top-level keys, optionally nested
under a ``[lottery]`` table:

    [lottery]
    owner = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
    ticket_price = 2_000_000

Usage:
    from lottery.config import load_config
    cfg = load_config("lottery.toml", ticket_price=5)

Everything here is standard-library so it is safe to import very early.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

try:  # py311+
    import tomllib as _toml  # type: ignore[attr-defined]
except Exception:  # py310 or missing
    _toml = None  # type: ignore[assignment]


# ------------------------------
# Defaults & helpers
# ------------------------------

DEFAULT_OWNER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
DEFAULT_NO_WINNER = "SP000000000000000000002Q6VF78"
DEFAULT_TICKET_PRICE = 1_000_000
DEFAULT_FUNDS_CAP = 1_000_000_000
DEFAULT_START_HEIGHT = 0

_ENV_KEYS = {
    "owner": "LOTTERY_OWNER",
    "no_winner": "LOTTERY_NO_WINNER",
    "ticket_price": "LOTTERY_TICKET_PRICE",
    "funds_cap": "LOTTERY_FUNDS_CAP",
    "start_height": "LOTTERY_START_HEIGHT",
}
_INT_FIELDS = ("ticket_price", "funds_cap", "start_height")


def _expand(p: str | Path) -> Path:
    return Path(p).expanduser().resolve()


def _coerce_int(name: str, v: Any) -> int:
    if isinstance(v, bool):
        raise ConfigError(f"{name} must be int, got bool", field=name)
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        try:
            return int(v.strip(), 0)
        except ValueError as e:
            raise ConfigError(f"{name} must be int, got {v!r}", field=name) from e
    raise ConfigError(f"{name} must be int, got {type(v).__name__}", field=name)


# ------------------------------
# Typed configuration model
# ------------------------------


@dataclass(frozen=True)
class LotteryConfig:
    owner: str = DEFAULT_OWNER
    no_winner: str = DEFAULT_NO_WINNER
    ticket_price: int = DEFAULT_TICKET_PRICE
    funds_cap: int = DEFAULT_FUNDS_CAP
    start_height: int = DEFAULT_START_HEIGHT

    def __post_init__(self) -> None:
        for name in _INT_FIELDS:
            object.__setattr__(self, name, _coerce_int(name, getattr(self, name)))
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.owner, str) or not self.owner.strip():
            raise ConfigError("owner must be a non-empty identity", field="owner")
        if not isinstance(self.no_winner, str) or not self.no_winner.strip():
            raise ConfigError("no_winner must be a non-empty identity", field="no_winner")
        if self.owner == self.no_winner:
            raise ConfigError("owner and no_winner sentinel must differ", owner=self.owner)
        if self.ticket_price <= 0:
            raise ConfigError("ticket_price must be positive", ticket_price=self.ticket_price)
        if self.funds_cap < 0:
            raise ConfigError("funds_cap must be non-negative", funds_cap=self.funds_cap)
        if self.start_height < 0:
            raise ConfigError("start_height must be non-negative", start_height=self.start_height)

    def with_overrides(self, **overrides: Any) -> "LotteryConfig":
        unknown = set(overrides) - set(_ENV_KEYS)
        if unknown:
            raise ConfigError(f"unknown config keys: {sorted(unknown)}")
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ------------------------------
# File loader (TOML / JSON)
# ------------------------------


def _load_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}", path=str(path))
    suffix = path.suffix.lower()
    with path.open("rb") as f:
        if suffix in {".toml", ".tml"}:
            if not _toml:
                raise ConfigError("tomllib is unavailable (Python < 3.11); use a JSON config file")
            data = _toml.load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ConfigError(f"unsupported config format: {suffix}; use .toml or .json", path=str(path))
    if not isinstance(data, dict):
        raise ConfigError("config file must hold a table/object", path=str(path))
    section = data.get("lottery", data)
    if not isinstance(section, dict):
        raise ConfigError("[lottery] must be a table", path=str(path))
    unknown = set(section) - set(_ENV_KEYS)
    if unknown:
        raise ConfigError(f"unknown config keys: {sorted(unknown)}", path=str(path))
    return dict(section)


def _load_env() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, env in _ENV_KEYS.items():
        raw = os.environ.get(env)
        if raw is None or raw.strip() == "":
            continue
        out[key] = raw.strip()
    return out


# ------------------------------
# Main loader
# ------------------------------


def load_config(config_file: Optional[str | Path] = None, **overrides: Any) -> LotteryConfig:
    """
    Build a ``LotteryConfig``.

    Precedence: overrides > env > file > defaults. Integer fields accept
    ``int(x, 0)`` syntax from env/file strings (``"0x10"``, ``"1_000"``).
    Raises ``ConfigError`` on unknown keys or invalid values.
    """
    merged: Dict[str, Any] = {}
    if config_file:
        merged.update(_load_file(_expand(config_file)))
    merged.update(_load_env())
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return default_config().with_overrides(**merged)


@lru_cache(maxsize=1)
def default_config() -> LotteryConfig:
    """All-defaults config, ignoring the environment. Cached."""
    return LotteryConfig()


__all__ = [
    "DEFAULT_OWNER",
    "DEFAULT_NO_WINNER",
    "DEFAULT_TICKET_PRICE",
    "DEFAULT_FUNDS_CAP",
    "DEFAULT_START_HEIGHT",
    "LotteryConfig",
    "load_config",
    "default_config",
]
