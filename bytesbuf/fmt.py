"""Text renderings of byte sequences: an escaped literal form and hex digests."""

from __future__ import annotations

from typing import Any

__all__ = ["debug_repr", "lower_hex", "upper_hex"]

_NAMED_ESCAPES = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord("\\"): "\\\\",
    ord('"'): '\\"',
    0: "\\0",
}


def _as_bytes(data: Any) -> bytes:
    if isinstance(data, (int, str)):
        raise TypeError(f"expected a bytes-like object, got {type(data).__name__}")
    return bytes(data)


def _escape(byte: int) -> str:
    named = _NAMED_ESCAPES.get(byte)
    if named is not None:
        return named
    if 0x20 <= byte < 0x7F:
        return chr(byte)
    return f"\\x{byte:02x}"


def debug_repr(data: Any) -> str:
    """Render bytes as a ``b"..."`` literal, printable ASCII kept as is."""
    body = "".join(_escape(byte) for byte in _as_bytes(data))
    return f'b"{body}"'


def lower_hex(data: Any) -> str:
    """Render bytes as lowercase hex, two digits per byte."""
    return "".join(f"{byte:02x}" for byte in _as_bytes(data))


def upper_hex(data: Any) -> str:
    """Render bytes as uppercase hex, two digits per byte."""
    return "".join(f"{byte:02X}" for byte in _as_bytes(data))