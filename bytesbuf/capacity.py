"""Original-capacity encoding and the reference-counted vector behind mutable buffers."""

from __future__ import annotations

import sys
from typing import Any

__all__ = [
    "MAX_ORIGINAL_CAPACITY_WIDTH",
    "MIN_ORIGINAL_CAPACITY_WIDTH",
    "SharedVec",
    "original_capacity_from_repr",
    "original_capacity_to_repr",
]

MAX_ORIGINAL_CAPACITY_WIDTH = 17
"""Capacities at or above ``2 ** (this - 1)`` are all recorded as the largest class."""

MIN_ORIGINAL_CAPACITY_WIDTH = 10
"""Capacities below ``2 ** this`` bytes are not remembered at all."""

_MAX_REPR = MAX_ORIGINAL_CAPACITY_WIDTH - MIN_ORIGINAL_CAPACITY_WIDTH


def original_capacity_to_repr(cap: int) -> int:
    """Encode an allocation size as a small power-of-two class, 0 to 7."""
    if cap < 0:
        raise ValueError(f"capacity must not be negative: {cap}")
    width = (cap >> MIN_ORIGINAL_CAPACITY_WIDTH).bit_length()
    return min(width, _MAX_REPR)


def original_capacity_from_repr(repr_value: int) -> int:
    """Decode a capacity class back into a byte count; class 0 means none."""
    if not 0 <= repr_value <= _MAX_REPR:
        raise ValueError(f"capacity class out of range: {repr_value}")
    if repr_value == 0:
        return 0
    return 1 << (repr_value + (MIN_ORIGINAL_CAPACITY_WIDTH - 1))


class SharedVec:
    """A growable byte vector shared by several mutable handles, with a use count."""

    __slots__ = ("vec", "original_capacity_repr", "ref_count")

    def __init__(
        self, vec: Any = b"", original_capacity_repr: int = 0, ref_count: int = 1
    ) -> None:
        if isinstance(vec, (int, str)):
            raise TypeError(f"expected a bytes-like object, got {type(vec).__name__}")
        if not 0 <= original_capacity_repr <= _MAX_REPR:
            raise ValueError(f"capacity class out of range: {original_capacity_repr}")
        if ref_count < 1:
            raise ValueError(f"reference count must be at least 1: {ref_count}")
        self.vec: bytearray | None = vec if isinstance(vec, bytearray) else bytearray(vec)
        self.original_capacity_repr = original_capacity_repr
        self.ref_count = ref_count

    def __repr__(self) -> str:
        size = None if self.vec is None else len(self.vec)
        return (
            f"SharedVec(size={size}, original_capacity_repr={self.original_capacity_repr}, "
            f"ref_count={self.ref_count})"
        )

    @property
    def released(self) -> bool:
        """True once the last handle has let go of the vector."""
        return self.vec is None

    def is_unique(self) -> bool:
        """True if exactly one handle refers to the vector."""
        return self.ref_count == 1

    def increment(self) -> None:
        """Register one more handle."""
        if self.vec is None:
            raise RuntimeError("shared vector has been released")
        if self.ref_count > sys.maxsize:
            raise OverflowError("reference count overflow")
        self.ref_count += 1

    def release(self) -> bool:
        """Drop one handle; return True if that freed the vector."""
        if self.vec is None:
            raise RuntimeError("shared vector has already been released")
        self.ref_count -= 1
        if self.ref_count != 0:
            return False
        self.vec = None
        return True