"""Log scrubbing for hash inputs and salts.

:func:`tch1.core.hashing.hash` attaches the exact input and salt it hashes
to its DEBUG record as ``extra`` attributes (see :data:`SECRET_ATTRS`).
:class:`SanitizingFilter` runs before any handler sees the record and:

* replaces each of those attributes with a length-only marker,
* masks any string argument that contains one of those values,
* redacts ``input=...`` / ``salt=...`` pairs left in the message text.

The hashing logger carries the filter from import time.  The CLI also
installs it on the root handlers so records from embedding code get the
same treatment.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Final

SECRET_ATTRS: Final[tuple[str, ...]] = ("hash_input", "hash_salt")

_REDACTED: Final[str] = "[REDACTED]"
_SANITIZED_MARK: Final[str] = "tch1_sanitized"

_KEYED_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\b(?P<key>input|plaintext|salt)\s*[=:]\s*(?P<value>\"[^\"]*\"|'[^']*'|\S+)",
    re.IGNORECASE,
)


def mask(value: Any) -> str:
    """Length-only stand-in for a secret value, e.g. ``[REDACTED len=11]``."""
    return f"[REDACTED len={len(str(value))}]"


def redact_message(message: str) -> str:
    """Replace ``input=``/``salt=`` style pairs in *message* with ``[REDACTED]``."""
    return _KEYED_PATTERN.sub(lambda m: f"{m.group('key')}={_REDACTED}", message)


def _scrub_arg(arg: Any, secrets: list[str]) -> Any:
    if isinstance(arg, str) and any(s in arg for s in secrets):
        return mask(arg)
    return arg


class SanitizingFilter(logging.Filter):
    """Strip hash inputs and salts from a record before it is emitted.

    Idempotent: a record already processed by any instance is passed
    through untouched, so stacking the filter on a logger and its
    handlers is harmless.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, _SANITIZED_MARK, False):
            return True

        secrets: list[str] = []
        for attr in SECRET_ATTRS:
            if hasattr(record, attr):
                value = str(getattr(record, attr))
                if value:
                    secrets.append(value)
                setattr(record, attr, mask(value))

        if record.args:
            args = record.args
            if isinstance(args, tuple) and secrets:
                args = tuple(_scrub_arg(a, secrets) for a in args)
            record.msg = redact_message(str(record.msg) % args)
            record.args = None
        else:
            record.msg = redact_message(str(record.msg))

        setattr(record, _SANITIZED_MARK, True)
        return True


def _existing(filterer: logging.Filterer) -> SanitizingFilter | None:
    for filt in filterer.filters:
        if isinstance(filt, SanitizingFilter):
            return filt
    return None


def install_sanitizing_filter(
    logger: logging.Logger | None = None,
    *,
    handler_level: bool = False,
) -> SanitizingFilter:
    """Attach a :class:`SanitizingFilter` to *logger* (or the root logger).

    Targets that already carry one are left alone, so repeated calls
    (e.g. one per CLI invocation) never stack filters.

    Args:
        logger: Target logger.  Defaults to the root logger if ``None``.
        handler_level: If ``True``, install on each handler of *logger*
            instead of the logger itself.  Logger-level filters do not see
            records propagated from child loggers.

    Returns:
        The filter now guarding *logger* (or its handlers).
    """
    target = logger or logging.getLogger()
    filt = SanitizingFilter()

    targets: list[logging.Filterer] = list(target.handlers) if handler_level else [target]
    for t in targets:
        current = _existing(t)
        if current is None:
            t.addFilter(filt)
        elif not handler_level:
            return current

    return filt
