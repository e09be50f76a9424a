"""storediter - Nesting-safe traversal over containers with a shared cursor.

A CursorContainer carries one ambient iteration cursor that its native
``each()`` step advances. Anything that iterates the container with
``each()`` shares that cursor, so nested or interleaved traversals corrupt
each other. storediter gives you the tools to keep them apart:

Cursor store:
    get_iterator / set_iterator / init_iterator, IteratorGuard

Safe traversal:
    step + StoredIterator   (explicit, caller-owned cursor)
    for_each                (callback traversal, save/restore built in)
    iter_items              (lazy, suspend-safe)
    safe_keys / safe_values / safe_items
"""

__version__ = "0.1.0"

from .config import CursorConfig
from .errors import (
    StoredIteratorError,
    InvalidTokenError,
    InvalidContainerError,
    ForeignTokenError,
    StructureChangedError,
)
from .core.token import IteratorToken, UNINITIALIZED
from .core.container import CursorContainer, CursorDict
from .store import get_iterator, set_iterator, init_iterator, IteratorGuard
from .traversal import (
    StopTraversal,
    StoredIterator,
    step,
    for_each,
    iter_items,
    safe_items,
    safe_keys,
    safe_values,
)

__all__ = [
    "__version__",
    # Config
    "CursorConfig",
    # Errors
    "StoredIteratorError",
    "InvalidTokenError",
    "InvalidContainerError",
    "ForeignTokenError",
    "StructureChangedError",
    # Core
    "IteratorToken",
    "UNINITIALIZED",
    "CursorContainer",
    "CursorDict",
    # Store
    "get_iterator",
    "set_iterator",
    "init_iterator",
    "IteratorGuard",
    # Traversal
    "StopTraversal",
    "StoredIterator",
    "step",
    "for_each",
    "iter_items",
    "safe_items",
    "safe_keys",
    "safe_values",
]
