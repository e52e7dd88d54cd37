"""
tests.property package bootstrap.

Shared Hypothesis configuration for the property suites:
- Registers named profiles (dev/ci/fast) with defaults for this repo.
- Selects the active profile from HYPOTHESIS_PROFILE, otherwise "ci" when the
  CI env var is truthy and "dev" locally.
- Exports strategies for caller identities shared across suites.

Usage in tests:
    from tests.property import given, st, identities
"""
from __future__ import annotations

import os
from typing import Final, Tuple

from hypothesis import HealthCheck, Verbosity, given, settings
from hypothesis import strategies as st

from lottery.config import DEFAULT_OWNER


def _hc(*items: HealthCheck) -> Tuple[HealthCheck, ...]:
    return items


# Deadlines off everywhere: the suites build many small lotteries per example.
settings.register_profile(
    "dev",
    settings(
        max_examples=100,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow, HealthCheck.filter_too_much),
        verbosity=Verbosity.normal,
        derandomize=False,
    ),
)

settings.register_profile(
    "ci",
    settings(
        max_examples=200,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow, HealthCheck.filter_too_much),
        verbosity=Verbosity.verbose,
        derandomize=True,
    ),
)

settings.register_profile(
    "fast",
    settings(
        max_examples=25,
        deadline=None,
        suppress_health_check=_hc(HealthCheck.too_slow),
        derandomize=False,
    ),
)


def _env_truthy(name: str) -> bool:
    v = os.getenv(name)
    return (v or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)


def active_profile() -> str:
    return _active


# ---- shared strategies -------------------------------------------------------

identities = st.text(
    alphabet="ABCDEFGHJKMNPQRSTVWXYZ0123456789",
    min_size=2,
    max_size=41,
).map(lambda s: "ST" + s)

non_owners = identities.filter(lambda s: s != DEFAULT_OWNER)

heights = st.integers(min_value=0, max_value=1_000_000)
durations = st.integers(min_value=0, max_value=10_000)


__all__ = [
    "st",
    "given",
    "active_profile",
    "identities",
    "non_owners",
    "heights",
    "durations",
]
