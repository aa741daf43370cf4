"""Domain value object for decoded list elements.

Purpose
-------
Anchor the immutable :class:`ConfigEntry` produced by the indexed list decoder.
The module holds no I/O and no coercion logic.

Contents
--------
* :class:`ConfigEntry` – ``(full_key, short_key, value)`` triple validated at
  construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import InvalidArgument


@dataclass(frozen=True, slots=True)
class ConfigEntry:
    """Like a mapping item, with the list prefix and index already stripped.

    Why
    ----
    Callers iterating an indexed list need both the original key (for error
    messages) and the residual sub-path (to look up fields of the element).

    What
    ----
    ``short_key`` is stripped of surrounding whitespace (``None`` becomes the
    empty string). Construction fails when ``full_key`` is blank or does not end
    with ``short_key``, so an instance can never exist in an invalid state.

    Parameters
    ----------
    full_key:
        Original store key, e.g. ``"queue.workers[1].host"``.
    short_key:
        Remainder after the prefix and bracketed index, e.g. ``"host"``. Empty
        when the element itself carries the value (``"queue.workers[1]"``).
    value:
        Raw stored value; never coerced.

    Examples
    --------
    >>> entry = ConfigEntry("a.b[0].c.d", " c.d ", "foo")
    >>> entry.short_key
    'c.d'
    >>> ConfigEntry("a.b[0]", None, 1).short_key
    ''
    >>> ConfigEntry("a.b[0].c", "x", 1)
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.InvalidArgument: fullKey ('a.b[0].c') must end with shortKey ('x')
    """

    full_key: str
    short_key: str = ""
    value: Any = None

    def __post_init__(self) -> None:
        short_key = "" if self.short_key is None else self.short_key.strip()
        object.__setattr__(self, "short_key", short_key)

        if not self.full_key or not self.full_key.strip():
            raise InvalidArgument("fullKey is required")
        if not self.full_key.endswith(short_key):
            raise InvalidArgument(f"fullKey ('{self.full_key}') must end with shortKey ('{short_key}')")
