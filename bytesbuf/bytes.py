"""Cheaply cloneable, sliceable views of immutable byte storage."""

from __future__ import annotations

import functools
import operator
from typing import Any, Iterator

from .fmt import debug_repr, lower_hex, upper_hex
from .storage import Storage, StorageKind

__all__ = ["Bytes"]

_EMPTY = Storage(b"", StorageKind.STATIC)


def _coerce(other: Any) -> bytes | None:
    if isinstance(other, Bytes):
        return other.to_bytes()
    if isinstance(other, str):
        return other.encode("utf-8")
    if isinstance(other, (bytes, bytearray, memoryview)):
        return bytes(other)
    if hasattr(type(other), "__bytes__"):
        return bytes(other)
    return None


@functools.total_ordering
class Bytes:
    """A shared, zero-copy view into a region of immutable bytes.

    Clones and slices refer to the same storage; the storage is released
    when the last handle referring to it goes away.
    """

    __slots__ = ("_storage", "_offset", "_len")

    def __init__(self, data: Any = b"") -> None:
        if isinstance(data, str):
            storage = Storage(data.encode("utf-8"), StorageKind.STATIC)
        else:
            storage = Storage(data, StorageKind.VEC)
        if len(storage) == 0:
            storage = _EMPTY
        self._storage = storage
        self._offset = 0
        self._len = len(storage)

    # construction helpers

    @classmethod
    def _from_parts(cls, storage: Storage, offset: int, length: int) -> "Bytes":
        obj = object.__new__(cls)
        obj._storage = storage
        obj._offset = offset
        obj._len = length
        return obj

    @classmethod
    def from_static(cls, data: Any) -> "Bytes":
        """Create a handle over constant memory that is never counted or freed."""
        storage = Storage(data, StorageKind.STATIC)
        return cls._from_parts(storage, 0, len(storage))

    @classmethod
    def copy_from_slice(cls, data: Any) -> "Bytes":
        """Create a handle owning a copy of ``data``."""
        storage = Storage(data, StorageKind.VEC)
        if len(storage) == 0:
            return cls()
        return cls._from_parts(storage, 0, len(storage))

    # ownership bookkeeping

    def _reset(self) -> None:
        self._storage = _EMPTY
        self._offset = 0
        self._len = 0

    def _take(self) -> "Bytes":
        taken = Bytes._from_parts(self._storage, self._offset, self._len)
        self._reset()
        return taken

    def _drop(self) -> None:
        storage = self._storage
        self._reset()
        if not storage.released:
            storage.release()

    def _share(self, offset: int, length: int) -> "Bytes":
        self._storage.retain()
        return Bytes._from_parts(self._storage, offset, length)

    def __del__(self) -> None:
        storage = getattr(self, "_storage", None)
        if storage is not None and not storage.released:
            storage.release()

    def __reduce__(self) -> tuple:
        return (Bytes, (self.to_bytes(),))

    # queries

    def is_empty(self) -> bool:
        """True if the view holds no bytes."""
        return self._len == 0

    def is_unique(self) -> bool:
        """True if this is the only handle to the storage; always False for static data."""
        return self._storage.is_unique()

    def clone(self) -> "Bytes":
        """Return another handle on the same bytes, sharing the storage."""
        return self._share(self._offset, self._len)

    def __copy__(self) -> "Bytes":
        return self.clone()

    # slicing and splitting

    def slice(self, start: int | None = None, end: int | None = None) -> "Bytes":
        """Return a shared view of ``[start, end)``; bounds default to the whole view."""
        begin = 0 if start is None else operator.index(start)
        stop = self._len if end is None else operator.index(end)
        if begin < 0 or stop < 0:
            raise IndexError(f"range bounds must not be negative: {begin}..{stop}")
        if begin > stop:
            raise ValueError(
                f"range start must not be greater than end: {begin} <= {stop}"
            )
        if stop > self._len:
            raise IndexError(f"range end out of bounds: {stop} <= {self._len}")
        if begin == stop:
            return Bytes()
        return self._share(self._offset + begin, stop - begin)

    def slice_ref(self, subset: "Bytes") -> "Bytes":
        """Return a view of ``self`` covering the same region as ``subset``.

        ``subset`` must be a view of the same storage lying within ``self``.
        """
        if not isinstance(subset, Bytes):
            raise TypeError(f"expected Bytes, got {type(subset).__name__}")
        if subset.is_empty():
            return Bytes()
        if subset._storage is not self._storage:
            raise ValueError("subset does not share storage with self")
        if subset._offset < self._offset:
            raise ValueError(
                f"subset offset ({subset._offset}) is smaller than self offset ({self._offset})"
            )
        if subset._offset + subset._len > self._offset + self._len:
            raise ValueError(
                f"subset is out of bounds: self = ({self._offset}, {self._len}), "
                f"subset = ({subset._offset}, {subset._len})"
            )
        begin = subset._offset - self._offset
        return self.slice(begin, begin + subset._len)

    def split_off(self, at: int) -> "Bytes":
        """Keep ``[0, at)`` in ``self`` and return ``[at, len)``."""
        at = operator.index(at)
        if at < 0 or at > self._len:
            raise IndexError(f"split_off out of bounds: {at} <= {self._len}")
        if at == self._len:
            return Bytes()
        if at == 0:
            return self._take()
        ret = self.clone()
        self._len = at
        ret._offset += at
        ret._len -= at
        return ret

    def split_to(self, at: int) -> "Bytes":
        """Keep ``[at, len)`` in ``self`` and return ``[0, at)``."""
        at = operator.index(at)
        if at < 0 or at > self._len:
            raise IndexError(f"split_to out of bounds: {at} <= {self._len}")
        if at == self._len:
            return self._take()
        if at == 0:
            return Bytes()
        ret = self.clone()
        self._offset += at
        self._len -= at
        ret._len = at
        return ret

    def truncate(self, length: int) -> None:
        """Keep the first ``length`` bytes; no effect if ``length`` is not smaller."""
        length = operator.index(length)
        if length < 0:
            raise ValueError(f"length must not be negative: {length}")
        if length < self._len:
            if self._storage.kind is StorageKind.VEC:
                self.split_off(length)._drop()
            else:
                self._len = length

    def clear(self) -> None:
        """Remove all bytes from the view."""
        self.truncate(0)

    # reading cursor

    def remaining(self) -> int:
        """Number of bytes left to read."""
        return self._len

    def chunk(self) -> memoryview:
        """A read-only, zero-copy window over the remaining bytes."""
        return self._storage.view(self._offset, self._len)

    def advance(self, cnt: int) -> None:
        """Skip ``cnt`` bytes from the front."""
        cnt = operator.index(cnt)
        if cnt < 0 or cnt > self._len:
            raise IndexError(f"cannot advance past `remaining`: {cnt} <= {self._len}")
        self._offset += cnt
        self._len -= cnt

    def copy_to_bytes(self, length: int) -> "Bytes":
        """Remove the first ``length`` bytes and return them as a shared view."""
        length = operator.index(length)
        if length == self._len:
            return self._take()
        ret = self.slice(0, length)
        self.advance(length)
        return ret

    def to_bytes(self) -> bytes:
        """Copy the viewed bytes into a new ``bytes`` object."""
        return bytes(self.chunk())

    # Python protocols

    def __len__(self) -> int:
        return self._len

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            start, stop, step = index.indices(self._len)
            if step == 1:
                return self.slice(start, max(start, stop))
            return Bytes(self.to_bytes()[index])
        return self.chunk()[operator.index(index)]

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_bytes())

    def __eq__(self, other: Any) -> bool:
        data = _coerce(other)
        if data is None:
            return NotImplemented
        return self.to_bytes() == data

    def __lt__(self, other: Any) -> bool:
        data = _coerce(other)
        if data is None:
            return NotImplemented
        return self.to_bytes() < data

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return debug_repr(self.chunk())

    def __format__(self, spec: str) -> str:
        if spec == "":
            return repr(self)
        if spec == "x":
            return lower_hex(self.chunk())
        if spec == "X":
            return upper_hex(self.chunk())
        raise ValueError(f"unsupported format specifier for Bytes: {spec!r}")