# bytesbuf

Immutable byte views for protocol and networking code that share memory
instead of copying it.

`Bytes` is a view into a region of shared storage. Cloning it and slicing it
do not copy data. Many `Bytes` values can point into the same underlying
buffer. The buffer is freed when the last handle on it goes away.

## Installation

```
pip install bytesbuf
```

## Bytes

```python
from bytesbuf.bytes import Bytes

mem = Bytes(b"Hello world")
a = mem.slice(0, 5)
assert a == b"Hello"

b = mem.split_to(6)
assert mem == b"world"
assert b == b"Hello "

c = a.clone()
assert not a.is_unique()
```

Ways to construct a `Bytes`:

- `Bytes(data)` takes any bytes-like object and gives it a single owner. The
  storage becomes reference counted the first time the handle is cloned or
  sliced. When `data` is a `str`, it is encoded as UTF-8 and stored as
  constant data.
- `Bytes.from_static(data)` wraps constant data. Nothing counts references to
  it and nothing frees it, and `is_unique()` is always `False` for it.
- `Bytes.copy_from_slice(data)` makes a single-owner copy.

Operations:

- `slice(start, end)` returns a shared view of `[start, end)`. Either bound
  may be left out. `view[i:j]` does the same thing. A slice with a step other
  than 1 is returned as a copy.
- `slice_ref(subset)` takes a `Bytes` that views a part of the same storage
  and returns the matching view of `self`.
- `split_off(at)` keeps `[0, at)` and returns `[at, len)`. `split_to(at)`
  keeps `[at, len)` and returns `[0, at)`.
- `truncate(n)` keeps the first `n` bytes. `clear()` empties the view.
- `remaining()`, `chunk()`, `advance(n)` and `copy_to_bytes(n)` treat the
  view as a read cursor. `chunk()` returns a read-only `memoryview` over the
  bytes that are left.
- `to_bytes()` and `bytes(view)` copy the viewed data out.

A `Bytes` compares equal to, and orders against, `bytes`, `bytearray`,
`memoryview`, `str` (as UTF-8) and other `Bytes` by content. Its hash is the
hash of its content. Iterating over it yields integers.

Indices out of range raise `IndexError`. A range whose start is after its end
raises `ValueError`. `slice_ref` raises `ValueError` when the subset does not
lie inside `self`. Nothing is silently clamped.

## Formatting

`repr()` shows the data as a byte string literal, for example
`b"GET / HTTP/1.1\r\n"`. `format(view, "x")` and `format(view, "X")` give
lower- and upper-case hex. Any other non-empty format spec raises
`ValueError`. The same helpers work on plain bytes-like data:

```python
from bytesbuf.fmt import debug_repr, lower_hex, upper_hex

assert debug_repr(b"a\n\x00\xff") == 'b"a\\n\\0\\xff"'
assert lower_hex(b"\x01\xab") == "01ab"
assert upper_hex(b"\x01\xab") == "01AB"
```

## Lower-level pieces

`bytesbuf.storage` has the `Storage` object that sits behind `Bytes`, and a
`StorageKind` enum with the values `STATIC`, `VEC` and `SHARED`:

```python
from bytesbuf.storage import Storage, StorageKind

s = Storage(b"hello")
assert s.kind is StorageKind.VEC and s.is_unique()
s.retain()
assert s.kind is StorageKind.SHARED and s.ref_count == 2
assert bytes(s.view(1, 3)) == b"ell"
```

`bytesbuf.capacity` records an allocation size as one of eight power-of-two
classes. It also has `SharedVec`, a `bytearray` with a use count:

```python
from bytesbuf.capacity import (
    SharedVec,
    original_capacity_from_repr,
    original_capacity_to_repr,
)

assert original_capacity_to_repr(0) == 0
assert original_capacity_to_repr(1024) == 1
assert original_capacity_from_repr(1) == 1024
assert original_capacity_to_repr(1 << 20) == 7
assert original_capacity_from_repr(7) == 65536

shared = SharedVec(b"abc")
shared.increment()
assert not shared.is_unique()
assert shared.release() is False
assert shared.release() is True and shared.released
```

## What this package does not do

There is no growable, writable buffer type. You cannot write into a
`Bytes`, reserve space for it, or freeze a mutable buffer into it. The
capacity classes and `SharedVec` are provided as building blocks only.
Nothing in the package uses them yet. There are no typed integer readers or
writers, and there is no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```