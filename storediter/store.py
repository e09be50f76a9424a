"""Cursor store: read, write and reset a container's ambient cursor.

None of these operations take a traversal step. They exist so callers can
save the cursor before handing the container to code that iterates it, and
put it back afterwards. IteratorGuard packages that save/restore pair as a
context manager.
"""

import logging
from typing import Optional

from .core.container import CursorContainer
from .core.token import IteratorToken, UNINITIALIZED
from .errors import ForeignTokenError, InvalidContainerError, InvalidTokenError

logger = logging.getLogger(__name__)


def _require_container(container: CursorContainer) -> CursorContainer:
    if not isinstance(container, CursorContainer):
        raise InvalidContainerError(
            f"expected a CursorContainer, got {type(container).__name__}"
        )
    return container


def get_iterator(container: CursorContainer) -> IteratorToken:
    """Return the container's current cursor verbatim.

    The token may be the uninitialized one. Reading has no side effect.

    Args:
        container: Container whose cursor to read

    Returns:
        The opaque token currently held in the cursor slot
    """
    return _require_container(container)._iterator


def set_iterator(container: CursorContainer, token: IteratorToken) -> None:
    """Overwrite the container's cursor with a previously saved token.

    Args:
        container: Container whose cursor to overwrite
        token: Token obtained from get_iterator()

    Raises:
        InvalidTokenError: If token is not an IteratorToken
        ForeignTokenError: If the container is configured with
            strict_tokens and the token was minted by another container
    """
    _require_container(container)
    if not isinstance(token, IteratorToken):
        raise InvalidTokenError(
            f"expected an IteratorToken from get_iterator(), got {type(token).__name__}"
        )
    if (container.config.strict_tokens
            and token._owner is not None
            and token._owner != container._serial):
        raise ForeignTokenError(
            f"token belongs to container {token._owner}, not {container._serial}"
        )
    container._iterator = token


def init_iterator(container: CursorContainer) -> None:
    """Reset the container's cursor as if it had never been iterated."""
    _require_container(container)._iterator = UNINITIALIZED


class IteratorGuard:
    """Save a container's cursor on entry and restore it on exit.

    The restore always runs, including when the body raises, and exceptions
    are never suppressed. Each guard keeps its own saved token, so separate
    guards on the same container nest: the innermost guard restores first.
    A single guard instance covers one with block at a time.

    Example:
        with IteratorGuard(container):
            while container.each() is not None:
                ...
        # container's cursor is back where it was
    """

    def __init__(self, container: CursorContainer, reset: bool = True):
        """Prepare a guard.

        Args:
            container: Container whose cursor to protect
            reset: Initialize the cursor after saving it, giving the body a
                fresh pass
        """
        self._container = _require_container(container)
        self._reset = reset
        self._saved: Optional[IteratorToken] = None

    def __enter__(self) -> 'IteratorGuard':
        if self._saved is not None:
            raise RuntimeError("IteratorGuard is not reentrant; create a new guard per block")
        self._saved = get_iterator(self._container)
        logger.debug("saved cursor %r of container %d",
                     self._saved, self._container._serial)
        if self._reset:
            init_iterator(self._container)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        # Saved token came from this slot; no strict check
        self._container._iterator = self._saved
        logger.debug("restored cursor %r of container %d",
                     self._saved, self._container._serial)
        self._saved = None
        return False

    @property
    def saved(self) -> Optional[IteratorToken]:
        """Token saved on entry, or None outside the with block."""
        return self._saved
