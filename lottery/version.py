"""lottery.version — package version.

Resolution order:
  1) LOTTERY_VERSION env var (verbatim)
  2) installed distribution metadata for ``lottery-sim``
  3) BASE_VERSION + '+dev'
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import metadata as importlib_metadata
from typing import Optional

BASE_VERSION = "0.1.0"
DIST_NAME = "lottery-sim"


def _pkg_metadata_version(dist_name: str = DIST_NAME) -> Optional[str]:
    try:
        v = importlib_metadata.version(dist_name)
    except importlib_metadata.PackageNotFoundError:
        return None
    return v if v and v != "0.0.0" else None


@lru_cache(maxsize=1)
def compute_version() -> str:
    env = os.getenv("LOTTERY_VERSION")
    if env:
        return env.strip()
    return _pkg_metadata_version() or f"{BASE_VERSION}+dev"


__version__ = compute_version()

__all__ = ["__version__", "BASE_VERSION", "compute_version"]
