"""Boundary conversion for loosely typed hashing arguments.

The hashing routines accept whatever a caller hands them and never fail.
These helpers turn arbitrary values into the ``str`` / ``int`` the engine
works on, once, at the edge.
"""

from __future__ import annotations

import logging
import math
from typing import Any

logger = logging.getLogger(__name__)


def to_text(value: Any) -> str:
    """Convert *value* to the string the transform operates on.

    Strings pass through; everything else uses ``str()``, so ``None``
    hashes as ``"None"`` and ``b"ab"`` as ``"b'ab'"``.
    """
    if isinstance(value, str):
        return value
    return str(value)


def _float_rounds(value: float) -> int | None:
    if math.isnan(value) or math.isinf(value):
        return None
    # a ``while i < rounds`` loop runs ceil(rounds) times for fractional counts
    return math.ceil(value)


def to_rounds(value: Any) -> int | None:
    """Convert *value* to an iteration count, or ``None`` if it has none.

    Args:
        value: ``None``, a number, or a numeric string.

    Returns:
        The integer round count, or ``None`` when *value* is absent or
        cannot be read as a finite number.
    """
    if value is None:
        return None
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return _float_rounds(value)

    text = to_text(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return _float_rounds(float(text))
    except ValueError:
        logger.debug("Ignoring non-numeric rounds value of type %s", type(value).__name__)
        return None
