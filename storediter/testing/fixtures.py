"""Test fixtures for storediter consumers.

These fixtures provide read-only access to a container's cursor state for
testing purposes without exposing token internals as part of the public API.
"""

from typing import Any, Dict, Hashable, List, Optional

from ..core.container import CursorContainer


class CursorTestHelper:
    """Public test fixture for cursor verification.

    Inspects the ambient cursor of a container without stepping it, so
    assertions never change the behaviour under test.

    Example:
        helper = CursorTestHelper(container)
        container.each()
        assert helper.state() == "active"
        assert helper.remaining_keys() == ["b", "c"]
    """

    def __init__(self, container: CursorContainer):
        """Initialize with the container to observe.

        Args:
            container: Any CursorContainer
        """
        self._container = container

    def state(self) -> str:
        """Return "uninitialized" or "active"."""
        if self._container._iterator.initialized:
            return "active"
        return "uninitialized"

    def position(self) -> Optional[int]:
        """Index into the current pass, or None when uninitialized."""
        token = self._container._iterator
        if not token.initialized:
            return None
        return token._index

    def remaining_keys(self) -> List[Hashable]:
        """Keys the next native steps would return before exhaustion.

        For an uninitialized cursor this is a full pass.
        """
        token = self._container._iterator
        if not token.initialized:
            return list(self._container._entry_keys())
        return [key for key in token._keys[token._index:]
                if self._container._has_entry(key)]

    def get_summary(self) -> Dict[str, Any]:
        """Returns high-level cursor state for testing.

        Returns:
            Dictionary containing:
            - state: "uninitialized" or "active"
            - position: index into the current pass (None if uninitialized)
            - remaining: number of entries left in the current pass
            - size: number of entries in the container
        """
        return {
            'state': self.state(),
            'position': self.position(),
            'remaining': len(self.remaining_keys()),
            'size': len(self._container),
        }
