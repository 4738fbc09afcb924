"""Hashing configuration and the process-wide defaults surface.

A :class:`HashConfig` bundles the three tunables of the hash: the round
count and salt used when a caller omits them, and the output length.

The process keeps one shared instance that any caller may read or
replace.  Replacement is copy-on-write under a lock, so an in-flight
hash always sees one consistent snapshot.

Usage::

    from tch1.core.config import get_defaults, override_defaults, set_defaults

    get_defaults().default_rounds   # 1000
    set_defaults(default_rounds=10) # affects every later call without rounds

    with override_defaults(hash_length=16):
        ...                         # restored on exit

Configs can also be persisted as YAML (``configs/tch1.yaml``)::

    default_rounds: 1000
    default_salt: FixedDefaultSalt123
    hash_length: 32
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import yaml
from pydantic import BaseModel, ConfigDict, Field

from tch1.core.defaults import DEFAULT_ROUNDS, DEFAULT_SALT, HASH_LENGTH

logger = logging.getLogger(__name__)


class HashConfig(BaseModel):
    """Defaults applied by :func:`tch1.core.hashing.hash`.

    ``default_rounds`` may be zero or negative; the hash then skips the
    transform entirely.  ``hash_length`` must be non-negative.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_rounds: int = DEFAULT_ROUNDS
    default_salt: str = DEFAULT_SALT
    hash_length: int = Field(default=HASH_LENGTH, ge=0)


_lock = threading.Lock()
_current: HashConfig = HashConfig()


def get_defaults() -> HashConfig:
    """Return the current process-wide :class:`HashConfig` snapshot."""
    return _current


def _apply(changes: dict[str, Any]) -> tuple[HashConfig, HashConfig]:
    """Validate *changes* against the current defaults and install them atomically."""
    global _current
    with _lock:
        previous = _current
        updated = HashConfig.model_validate({**previous.model_dump(), **changes})
        _current = updated
    return previous, updated


def set_defaults(**changes: Any) -> HashConfig:
    """Replace the process-wide defaults with *changes* applied.

    Args:
        **changes: Field names of :class:`HashConfig` and their new values.

    Returns:
        The new defaults.

    Raises:
        pydantic.ValidationError: If a value is invalid or a key is unknown.
    """
    _previous, updated = _apply(changes)
    logger.debug("Hash defaults updated: fields=%s", sorted(changes))
    return updated


def replace_defaults(config: HashConfig) -> HashConfig:
    """Install *config* as the process-wide defaults.  Returns the previous one."""
    global _current
    with _lock:
        previous, _current = _current, config
    return previous


def reset_defaults() -> HashConfig:
    """Restore the built-in defaults from :mod:`tch1.core.defaults`."""
    config = HashConfig()
    replace_defaults(config)
    return config


@contextmanager
def override_defaults(**changes: Any) -> Iterator[HashConfig]:
    """Temporarily apply *changes* to the process-wide defaults.

    The snapshot restored on exit is the one *changes* were applied to.
    Nested overrides unwind in order; overlapping overrides from different
    threads restore in exit order, so keep them to one thread (tests,
    CLI setup).
    """
    previous, updated = _apply(changes)
    try:
        yield updated
    finally:
        replace_defaults(previous)


# ---------------------------------------------------------------------------
# YAML I/O
# ---------------------------------------------------------------------------


def load_hash_config(path: Path) -> HashConfig:
    """Load and validate a :class:`HashConfig` from a YAML file.

    Missing keys keep their built-in defaults; an empty file yields the
    built-in config.

    Args:
        path: Path to a YAML file whose keys match :class:`HashConfig` fields.

    Returns:
        Validated ``HashConfig``.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError / ValidationError: If the YAML is malformed or invalid.
    """
    raw = yaml.safe_load(Path(path).read_text("utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(raw).__name__}")
    return HashConfig.model_validate(raw)


def save_hash_config(config: HashConfig, path: Path) -> Path:
    """Serialize *config* to YAML.

    Args:
        config: Config to write.
        path: Destination file path.

    Returns:
        The *path* that was written.
    """
    path = Path(path)
    data = config.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True),
        "utf-8",
    )
    return path
