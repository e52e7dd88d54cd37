"""
tests.unit
==========

Small shared helpers for unit-test modules:

    from tests.unit import FIXTURES, fixture_path, read_json_fixture

Common fixtures live under ``tests/fixtures/``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# tests/unit/__init__.py -> tests -> <root>
ROOT: Path = Path(__file__).resolve().parents[2]
FIXTURES: Path = ROOT / "tests" / "fixtures"

__all__ = ["ROOT", "FIXTURES", "fixture_path", "read_json_fixture"]


def fixture_path(relpath: str) -> Path:
    """Absolute path of ``tests/fixtures/<relpath>``; raises if missing."""
    path = (FIXTURES / relpath).resolve()
    if not path.is_file():
        raise FileNotFoundError(str(path))
    return path


def read_json_fixture(relpath: str) -> Any:
    with open(fixture_path(relpath), "r", encoding="utf-8") as f:
        return json.load(f)
