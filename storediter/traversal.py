"""Nesting-safe traversal helpers.

Two primitives sit on top of the cursor store:

- ``step()`` advances a caller-owned StoredIterator by one entry. It swaps
  the caller's token into the container's cursor slot, takes one native
  step and copies the new position back out. It does not restore the
  ambient cursor afterwards.
- ``for_each()`` runs a callback over every entry inside an IteratorGuard,
  so it neither disturbs nor is disturbed by any other traversal of the same
  container, including one started from inside the callback.

``safe_keys()``, ``safe_values()`` and ``safe_items()`` collect a full pass
under the same guard. ``iter_items()`` is the lazy form, safe to suspend.
"""

import logging
from typing import Any, Callable, Hashable, Iterator, List, Optional, Tuple

from .core.container import CursorContainer
from .core.token import IteratorToken, UNINITIALIZED
from .store import IteratorGuard, get_iterator, init_iterator, set_iterator, _require_container

logger = logging.getLogger(__name__)


class StopTraversal(Exception):
    """Raise from a for_each() callback to end the traversal early.

    for_each() catches it, restores the cursor and returns normally.
    """
    pass


class StoredIterator:
    """Caller-owned cursor for step().

    Each StoredIterator tracks its own position, so any number of them can
    walk the same container, interleaved in any order, without skipping or
    repeating entries.

    Example:
        >>> position = StoredIterator()
        >>> while (pair := step(container, position)) is not None:
        ...     key, value = pair
    """

    def __init__(self):
        self._token: IteratorToken = UNINITIALIZED

    @property
    def token(self) -> IteratorToken:
        """Opaque position; uninitialized before the first step and after exhaustion."""
        return self._token

    @property
    def started(self) -> bool:
        """True while a pass is in progress."""
        return self._token.initialized

    def reset(self) -> None:
        """Forget the position; the next step() starts from the first entry."""
        self._token = UNINITIALIZED

    def __repr__(self) -> str:
        return f"StoredIterator({self._token!r})"


def step(container: CursorContainer,
         position: StoredIterator) -> Optional[Tuple[Hashable, Any]]:
    """Return the next entry for ``position`` and advance it.

    If ``position`` has not started, the container's cursor is reset first;
    otherwise the container's cursor is set to ``position``'s token. One
    native step is taken and the resulting cursor is stored back into
    ``position``. The ambient cursor is left at that new position.

    Args:
        container: Container to step through
        position: Caller-owned cursor, updated in place

    Returns:
        (key, value), or None once every entry has been returned. After
        None, ``position`` is uninitialized and the next call restarts.
    """
    if position.started:
        set_iterator(container, position.token)
    else:
        init_iterator(container)
    pair = container.each()
    position._token = get_iterator(container)
    return pair


def for_each(container: CursorContainer,
             callback: Callable[[Hashable, Any], Any]) -> None:
    """Call ``callback(key, value)`` once per entry.

    The ambient cursor is saved, reset for a private pass and restored when
    the pass ends, whether it ends by exhaustion, by StopTraversal or by an
    exception from the callback. Exceptions other than StopTraversal
    propagate after the restore.

    The callback may traverse the same container again, with for_each(),
    step() or even a bare each() loop; the outer pass resumes where it was.
    While the callback runs, the ambient cursor sits at this traversal's
    current position.

    Args:
        container: Container to traverse
        callback: Function taking (key, value); its return value is ignored
    """
    with IteratorGuard(container):
        # Own position is put back before every step, so whatever the
        # callback does to the ambient cursor cannot skip or repeat entries
        position = StoredIterator()
        pair = step(container, position)
        while pair is not None:
            try:
                callback(*pair)
            except StopTraversal:
                logger.debug("traversal stopped early at key %r", pair[0])
                break
            pair = step(container, position)


def iter_items(container: CursorContainer) -> Iterator[Tuple[Hashable, Any]]:
    """Lazily yield (key, value) pairs without holding the ambient cursor.

    Every step runs inside its own IteratorGuard, so between yields the
    container's cursor is exactly what it would be without this generator.
    Callers may run native each() loops or other traversals while the
    generator is suspended, and may abandon it at any point.

    Returns:
        Iterator of (key, value) in native traversal order

    Raises:
        InvalidContainerError: Immediately, not on first next()
    """
    return _iter_items(_require_container(container))


def _iter_items(container: CursorContainer) -> Iterator[Tuple[Hashable, Any]]:
    position = StoredIterator()
    while True:
        with IteratorGuard(container, reset=False):
            pair = step(container, position)
        if pair is None:
            return
        yield pair


def safe_items(container: CursorContainer) -> List[Tuple[Hashable, Any]]:
    """Return every (key, value) pair in traversal order, cursor preserved."""
    items = []
    with IteratorGuard(container):
        pair = container.each()
        while pair is not None:
            items.append(pair)
            pair = container.each()
    return items


def safe_keys(container: CursorContainer) -> List[Hashable]:
    """Return every key in traversal order without disturbing the cursor.

    Nesting-safe counterpart to listing the keys with native steps; the
    order matches safe_values() position by position.
    """
    return [key for key, _ in safe_items(container)]


def safe_values(container: CursorContainer) -> List[Any]:
    """Return every value in traversal order without disturbing the cursor."""
    return [value for _, value in safe_items(container)]
