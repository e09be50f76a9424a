"""Opaque cursor tokens.

An IteratorToken is the value held in a container's cursor slot. Callers
never build one: they receive tokens from get_iterator() and hand them back to
set_iterator(). Construction is locked behind a module-private mint key.
"""

from typing import Any, Hashable, Optional, Tuple

from ..errors import InvalidTokenError

_MINT = object()


class IteratorToken:
    """Immutable position of a traversal over one container.

    An active token carries the snapshot of the key order taken when its pass
    started, the index of the next key to try, the serial of the container
    that minted it and that container's structure version at pass start.
    Because tokens are immutable, a saved token always describes the position
    it was saved at, no matter how many steps happen afterwards.
    """

    __slots__ = ('_keys', '_index', '_owner', '_version')

    def __init__(self, mint: object = None,
                 keys: Optional[Tuple[Hashable, ...]] = None,
                 index: int = 0,
                 owner: Optional[int] = None,
                 version: int = 0):
        if mint is not _MINT:
            raise InvalidTokenError(
                "IteratorToken cannot be constructed directly; "
                "obtain one from get_iterator()"
            )
        object.__setattr__(self, '_keys', keys)
        object.__setattr__(self, '_index', index)
        object.__setattr__(self, '_owner', owner)
        object.__setattr__(self, '_version', version)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("IteratorToken is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("IteratorToken is immutable")

    def __reduce__(self):
        if self._keys is None:
            # Module attribute lookup keeps the sentinel a singleton
            return 'UNINITIALIZED'
        return (_mint_token, (self._keys, self._index, self._owner, self._version))

    def __copy__(self) -> 'IteratorToken':
        return self

    def __deepcopy__(self, memo) -> 'IteratorToken':
        return self

    @property
    def initialized(self) -> bool:
        """True once a pass has started, False for the uninitialized token."""
        return self._keys is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IteratorToken):
            return NotImplemented
        return (self._owner == other._owner
                and self._index == other._index
                and self._version == other._version
                and self._keys == other._keys)

    def __hash__(self) -> int:
        return hash((self._owner, self._index, self._version, self._keys))

    def __repr__(self) -> str:
        if self._keys is None:
            return "<IteratorToken uninitialized>"
        return f"<IteratorToken {self._index}/{len(self._keys)}>"


def _mint_token(keys: Tuple[Hashable, ...], index: int,
                owner: Optional[int], version: int) -> IteratorToken:
    """Create an active token. Only containers call this."""
    return IteratorToken(_MINT, keys, index, owner, version)


# The one uninitialized value; a slot holding it has never been stepped,
# was reset, or finished a full pass.
UNINITIALIZED = IteratorToken(_MINT)
