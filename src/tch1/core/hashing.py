"""TCH1 transform-and-stretch hashing.

The hash prepends a salt to the input, runs the whole string through
:func:`transform` for a configured number of rounds, and pads or
truncates the result to a fixed length.

This is an obfuscation routine, not a cryptographic hash.  Each character
is mapped independently through a fixed, small function, so outputs are
trivially reversible per character and collide freely.  Never use it for
password storage or integrity checks.
"""

from __future__ import annotations

import hmac
import logging
from types import MappingProxyType
from typing import Any, Final, Mapping

from tch1.core.coerce import to_rounds, to_text
from tch1.core.config import HashConfig, get_defaults
from tch1.core.defaults import PAD_CHAR, ROTATE_BY, ROTATE_MODULUS, XOR_MASK
from tch1.core.logging import install_sanitizing_filter

logger = logging.getLogger(__name__)
install_sanitizing_filter(logger)

SUBSTITUTION_TABLE: Final[Mapping[str, str]] = MappingProxyType({
    "a": "@", "e": "3", "i": "1", "o": "0", "u": "µ",
    "A": "4", "E": "€", "I": "!", "O": "Ø", "U": "Û",
})


def _build_rotated_table() -> tuple[str, ...]:
    """Output character for every rotated byte value 0..255."""
    table = []
    for code in range(ROTATE_MODULUS):
        char = chr(code)
        char = SUBSTITUTION_TABLE.get(char, char)
        table.append(chr(ord(char) ^ XOR_MASK))
    return tuple(table)


# Indexed by (ord(c) + ROTATE_BY) % ROTATE_MODULUS.
_ROTATED_TABLE: Final[tuple[str, ...]] = _build_rotated_table()


def transform(text: Any) -> str:
    """Apply one TCH1 round to every character of *text*.

    Each character is rotated by 5 modulo 256, substituted if it lands on a
    vowel in :data:`SUBSTITUTION_TABLE`, and XOR-ed with ``0x55``.  The
    rotation wraps on 8 bits for every code point, so characters at or
    above U+0100 alias onto the Latin-1 range.

    Args:
        text: String to transform.  Other values are converted with
            :func:`~tch1.core.coerce.to_text`.

    Returns:
        A string with the same number of characters as *text*.
    """
    text = to_text(text)
    return "".join(
        _ROTATED_TABLE[(ord(char) + ROTATE_BY) % ROTATE_MODULUS] for char in text
    )


def pad(text: Any, length: int) -> str:
    """Right-pad *text* with ``'0'`` to *length*, or truncate it to *length*.

    >>> pad("ab", 5)
    'ab000'
    >>> pad("abcdefghij", 5)
    'abcde'
    """
    text = to_text(text)
    if len(text) < length:
        text += PAD_CHAR * (length - len(text))
    return text[:length]


pad_hash = pad


def hash(
    text: Any,
    salt: Any = None,
    rounds: Any = None,
    *,
    config: HashConfig | None = None,
) -> str:
    """Hash *text* with TCH1.

    *salt* and *rounds* fall back to the configured defaults whenever the
    values passed are falsy, so ``rounds=0`` and ``salt=""`` behave exactly
    like omitting them.  A truthy *rounds* that reads as zero, negative or
    not a number at all (``"0"``, ``-1``, ``"abc"``) runs no rounds and
    returns the padded ``salt + text``.

    Args:
        text: Input to hash.  Non-strings are converted with
            :func:`~tch1.core.coerce.to_text`.
        salt: Prepended to *text* before the first round.
        rounds: Number of :func:`transform` passes.  Numeric strings and
            floats are converted with :func:`~tch1.core.coerce.to_rounds`.
        config: Explicit defaults.  When ``None`` the current process-wide
            defaults (:func:`~tch1.core.config.get_defaults`) are used.

    Returns:
        A string of exactly ``config.hash_length`` characters.
    """
    cfg = config if config is not None else get_defaults()

    resolved_salt = to_text(salt) if salt else cfg.default_salt
    if rounds:
        resolved_rounds = to_rounds(rounds) or 0
    else:
        resolved_rounds = cfg.default_rounds

    plaintext = to_text(text)
    combined = resolved_salt + plaintext
    logger.debug(
        "Hashing %d chars over %d rounds (length=%d)",
        len(combined), resolved_rounds, cfg.hash_length,
        extra={"hash_input": plaintext, "hash_salt": resolved_salt},
    )

    for _ in range(resolved_rounds):
        combined = transform(combined)

    return pad(combined, cfg.hash_length)


def verify(
    text: Any,
    expected: str,
    salt: Any = None,
    rounds: Any = None,
    *,
    config: HashConfig | None = None,
) -> bool:
    """Return ``True`` if hashing *text* reproduces *expected*.

    Uses a constant-time comparison.  Arguments are resolved exactly as in
    :func:`hash`.
    """
    actual = hash(text, salt, rounds, config=config)
    return hmac.compare_digest(
        actual.encode("utf-8", errors="surrogatepass"),
        to_text(expected).encode("utf-8", errors="surrogatepass"),
    )
