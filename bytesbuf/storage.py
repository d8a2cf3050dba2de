"""Backing storage shared between immutable byte views."""

from __future__ import annotations

import enum
from typing import Any

__all__ = ["StorageKind", "Storage"]


class StorageKind(enum.Enum):
    """How a buffer is owned."""

    STATIC = "static"
    """Constant memory: never freed, never unique, sharing costs nothing."""
    VEC = "vec"
    """Owned by a single handle; promoted to shared on the first clone."""
    SHARED = "shared"
    """Reference counted among any number of handles."""


class Storage:
    """A byte buffer plus the bookkeeping that decides who owns it."""

    __slots__ = ("_buffer", "kind", "ref_count")

    def __init__(self, buffer: Any, kind: StorageKind = StorageKind.VEC) -> None:
        if isinstance(buffer, (int, str)):
            raise TypeError(f"expected a bytes-like object, got {type(buffer).__name__}")
        self._buffer: bytes | None = buffer if type(buffer) is bytes else bytes(buffer)
        self.kind = StorageKind(kind)
        self.ref_count = 0 if self.kind is StorageKind.STATIC else 1

    def __len__(self) -> int:
        return len(self._live_buffer())

    def __repr__(self) -> str:
        return f"Storage(kind={self.kind.name}, ref_count={self.ref_count}, size={len(self._buffer or b'')})"

    @property
    def released(self) -> bool:
        """True once the last owning handle has let go."""
        return self._buffer is None

    def _live_buffer(self) -> bytes:
        if self._buffer is None:
            raise RuntimeError("storage has been released")
        return self._buffer

    def promote(self) -> None:
        """Turn single-owner storage into reference-counted storage."""
        self._live_buffer()
        if self.kind is StorageKind.VEC:
            self.kind = StorageKind.SHARED

    def retain(self) -> "Storage":
        """Register one more handle on this storage and return it."""
        self._live_buffer()
        if self.kind is StorageKind.STATIC:
            return self
        self.promote()
        self.ref_count += 1
        return self

    def release(self) -> None:
        """Drop one handle; the buffer is freed when the last one goes."""
        if self.kind is StorageKind.STATIC:
            return
        if self._buffer is None:
            raise RuntimeError("storage has already been released")
        self.ref_count -= 1
        if self.ref_count == 0:
            self._buffer = None

    def is_unique(self) -> bool:
        """True if exactly one handle refers to this storage."""
        if self.kind is StorageKind.STATIC:
            return False
        if self.kind is StorageKind.VEC:
            return True
        return self.ref_count == 1

    def view(self, offset: int, length: int) -> memoryview:
        """Return a read-only, zero-copy window of the buffer."""
        buffer = self._live_buffer()
        if offset < 0 or length < 0:
            raise IndexError(f"negative view bounds: offset={offset}, length={length}")
        if offset + length > len(buffer):
            raise IndexError(
                f"view out of bounds: {offset} + {length} > {len(buffer)}"
            )
        return memoryview(buffer)[offset : offset + length]