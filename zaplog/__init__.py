"""Typed, structured log fields and constructors for scalars, sequences and errors."""

__version__ = "0.1.0"
__all__ = ["anyfield", "array", "error", "field", "objects"]