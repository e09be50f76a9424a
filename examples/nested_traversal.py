#!/usr/bin/env python3
"""
Nested traversal example for storediter.

This example demonstrates:
- How two native each() loops over one container interfere
- for_each() nesting safely inside itself
- Explicit cursors with step() and StoredIterator
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from storediter import CursorDict, StoredIterator, for_each, init_iterator, safe_keys, step


def main():
    """Show broken and safe nested traversals side by side."""
    scores = CursorDict(alice=3, bob=5, carol=4)

    print("Native each() nested inside native each():")
    print(f"  outer step -> {scores.each()}")
    inner = []
    inner_pair = scores.each()
    while inner_pair is not None:
        inner.append(inner_pair[0])
        inner_pair = scores.each()
    print(f"  inner loop saw {inner}")
    print(f"  outer step -> {scores.each()}  (restarted from the top)")
    init_iterator(scores)

    print("-" * 50)
    print("for_each() nested inside for_each():")

    def compare(name, score):
        beaten = []
        for_each(scores, lambda other, s: beaten.append(other) if s < score else None)
        print(f"  {name} ({score}) beats {beaten}")

    for_each(scores, compare)

    print("-" * 50)
    print("Two explicit cursors interleaved:")
    first, second = StoredIterator(), StoredIterator()
    print(f"  first  -> {step(scores, first)}")
    print(f"  second -> {step(scores, second)}")
    print(f"  first  -> {step(scores, first)}")
    print(f"  second -> {step(scores, second)}")

    print("-" * 50)
    print(f"safe_keys: {safe_keys(scores)}")


if __name__ == "__main__":
    main()
