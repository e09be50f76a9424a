"""Exceptions raised by storediter.

Exhaustion is never an error: the native step and ``step()`` return None
when no entries remain.
"""


class StoredIteratorError(Exception):
    """Base class for all storediter errors."""
    pass


class InvalidTokenError(StoredIteratorError, TypeError):
    """Raised when a value that is not an IteratorToken is used as one.

    Also raised when code tries to construct an IteratorToken directly.
    Tokens only come from get_iterator() or from a container's native step.
    """
    pass


class InvalidContainerError(StoredIteratorError, TypeError):
    """Raised when an operation receives something that is not a CursorContainer."""
    pass


class ForeignTokenError(StoredIteratorError, ValueError):
    """Raised in strict mode when a token minted by another container is restored."""
    pass


class StructureChangedError(StoredIteratorError, RuntimeError):
    """Raised when the key set changed between two steps of the same pass.

    Only raised for containers configured with ``detect_modification``.
    """
    pass
