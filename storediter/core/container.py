"""Containers that carry an ambient iteration cursor.

CursorContainer is the abstraction the rest of storediter works against: a
mutable mapping that owns exactly one cursor slot and offers a native
``each()`` step driven by that slot. Every caller of ``each()`` on the same
container shares the slot, which is what makes nested traversals interfere
and what the store and traversal layers exist to manage.

CursorDict is the ready-to-use implementation backed by a plain dict.
"""

import itertools
import logging
from collections.abc import MutableMapping
from typing import Any, Hashable, Iterator, Optional, Tuple

from ..config import CursorConfig
from ..errors import StructureChangedError
from .token import IteratorToken, UNINITIALIZED, _mint_token

logger = logging.getLogger(__name__)

_serials = itertools.count(1)


class CursorContainer(MutableMapping):
    """Abstract mapping with one ambient cursor slot.

    Subclasses implement the MutableMapping protocol and must call
    ``_structure_changed()`` whenever a key is inserted or removed.
    Overwriting the value of an existing key is not a structural change.

    Plain Python iteration (``for key in container``, ``keys()``,
    ``values()``, ``items()``) never touches the cursor. Only ``each()`` and
    the store operations do.
    """

    def __init__(self, config: Optional[CursorConfig] = None):
        """Initialize the cursor slot.

        Args:
            config: Cursor behaviour (defaults to CursorConfig())
        """
        self._config = config or CursorConfig()
        self._serial = next(_serials)
        self._version = 0
        self._iterator: IteratorToken = UNINITIALIZED

    @property
    def config(self) -> CursorConfig:
        """Cursor behaviour for this container."""
        return self._config

    # Hooks used by each(). Defaults go through the mapping protocol;
    # subclasses can override with faster direct access.

    def _entry_keys(self) -> Tuple[Hashable, ...]:
        """Snapshot of the keys in native traversal order."""
        return tuple(self)

    def _has_entry(self, key: Hashable) -> bool:
        return key in self

    def _entry_value(self, key: Hashable) -> Any:
        return self[key]

    def _structure_changed(self) -> None:
        self._version += 1

    def each(self) -> Optional[Tuple[Hashable, Any]]:
        """Take one step using the ambient cursor.

        Starts a new pass when the cursor is uninitialized. Keys deleted
        since the pass started are skipped, so deleting the entry that was
        just returned is safe. Keys inserted mid-pass are not visited until
        the next pass.

        Returns:
            (key, value) for the next entry, or None when the pass is
            exhausted. Exhaustion resets the cursor, so the following call
            starts over from the first entry.

        Raises:
            StructureChangedError: If detect_modification is on and the key
                set changed since this pass started
        """
        token = self._iterator
        if not token.initialized:
            token = _mint_token(self._entry_keys(), 0, self._serial, self._version)
            logger.debug("container %d: new pass over %d keys",
                         self._serial, len(token._keys))
        elif (self._config.detect_modification
              and token._owner == self._serial
              and token._version != self._version):
            raise StructureChangedError(
                f"keys of container {self._serial} changed during traversal"
            )

        keys = token._keys
        index = token._index
        while index < len(keys):
            key = keys[index]
            index += 1
            if self._has_entry(key):
                self._iterator = _mint_token(keys, index, token._owner, token._version)
                return key, self._entry_value(key)

        logger.debug("container %d: pass exhausted", self._serial)
        self._iterator = UNINITIALIZED
        return None


class CursorDict(CursorContainer):
    """Dict-backed cursor container.

    Accepts the same arguments as ``dict`` plus an optional ``config``.
    Native traversal order is insertion order.

    Example:
        >>> d = CursorDict(a=1, b=2)
        >>> d.each()
        ('a', 1)
        >>> d.each()
        ('b', 2)
        >>> d.each() is None
        True
    """

    def __init__(self, *args: Any, config: Optional[CursorConfig] = None, **kwargs: Any):
        super().__init__(config)
        self._data = dict(*args, **kwargs)

    def __getitem__(self, key: Hashable) -> Any:
        return self._data[key]

    def __setitem__(self, key: Hashable, value: Any) -> None:
        if key not in self._data:
            self._structure_changed()
        self._data[key] = value

    def __delitem__(self, key: Hashable) -> None:
        del self._data[key]
        self._structure_changed()

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def _entry_keys(self) -> Tuple[Hashable, ...]:
        return tuple(self._data)

    def _has_entry(self, key: Hashable) -> bool:
        return key in self._data

    def _entry_value(self, key: Hashable) -> Any:
        return self._data[key]

    def clear(self) -> None:
        """Remove all entries and reset the cursor."""
        self._data.clear()
        self._structure_changed()
        self._iterator = UNINITIALIZED

    def copy(self) -> 'CursorDict':
        """Shallow copy with the same config and a fresh cursor."""
        return CursorDict(self._data, config=self._config)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data!r})"
