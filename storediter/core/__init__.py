"""Core abstractions for storediter.

This module contains the cursor token and the container base class that
owns the ambient cursor.
"""

from .token import IteratorToken, UNINITIALIZED
from .container import CursorContainer, CursorDict

__all__ = [
    "IteratorToken",
    "UNINITIALIZED",
    "CursorContainer",
    "CursorDict",
]
