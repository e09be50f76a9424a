"""Public testing utilities for storediter consumers."""

from .fixtures import CursorTestHelper

__all__ = ['CursorTestHelper']
