"""Shared fixtures for the tch1 test suite."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

import pytest

from tch1.core.config import reset_defaults

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def _restore_hash_defaults() -> Iterator[None]:
    """Tests may mutate the process-wide defaults; put them back afterwards."""
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture(scope="session")
def golden() -> dict[str, Any]:
    """Reference outputs recorded from the JavaScript tch1.js release."""
    return json.loads((FIXTURES_DIR / "golden.json").read_text("utf-8"))


@pytest.fixture(autouse=True)
def _restore_tch1_log_level() -> Iterator[None]:
    """CLI runs set the ``tch1`` logger level; undo it between tests."""
    tch1_logger = logging.getLogger("tch1")
    level = tch1_logger.level
    yield
    tch1_logger.setLevel(level)
