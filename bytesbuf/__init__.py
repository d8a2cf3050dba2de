"""Cheaply cloneable, sliceable immutable byte views over shared reference-counted storage."""

__version__ = "0.1.0"

__all__ = ["bytes", "capacity", "fmt", "storage"]