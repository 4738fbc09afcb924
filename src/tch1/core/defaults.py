"""Centralised default constants for tch1.

Every project-wide magic number / string lives here.
Import these instead of hard-coding values in function signatures or CLI options.
"""

from __future__ import annotations

from typing import Final

# ── Hashing ──
DEFAULT_ROUNDS: Final[int] = 1000
DEFAULT_SALT: Final[str] = "FixedDefaultSalt123"
HASH_LENGTH: Final[int] = 32
PAD_CHAR: Final[str] = "0"

# ── Transform ──
ROTATE_BY: Final[int] = 5
ROTATE_MODULUS: Final[int] = 256
XOR_MASK: Final[int] = 0x55

# ── Paths ──
DEFAULT_CONFIG_PATH: Final[str] = "configs/tch1.yaml"
