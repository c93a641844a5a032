"""Error types for tonelab."""
from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a caller passes parameters outside an operation's domain."""
