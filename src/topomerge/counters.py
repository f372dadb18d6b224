"""Merging of optional counters.

A counter is ``None`` when the probe did not measure it, which is not the
same as measuring zero. An absent source never changes the destination, and
an absent destination takes the source value as-is.
"""

from typing import Callable

Reducer = Callable[[int, int], int]


def summed(dst: int, src: int) -> int:
    """Combine two traffic counts."""
    return dst + src


def maximum(dst: int, src: int) -> int:
    """Combine two high-water marks."""
    return dst if dst > src else src


def merge_counter(dst: int | None, src: int | None, reducer: Reducer) -> int | None:
    """Merge ``src`` into ``dst`` with ``reducer``.

    Args:
        dst: Accumulated value, or None if never measured
        src: Incoming value, or None if not measured
        reducer: Combines two present values (``summed`` or ``maximum``)

    Returns:
        ``dst`` if ``src`` is absent, ``src`` if only ``dst`` is absent,
        otherwise ``reducer(dst, src)``.
    """
    if src is None:
        return dst
    if dst is None:
        return src
    return reducer(dst, src)
