"""Tests for the explicit-cursor step() and StoredIterator."""

import itertools

import pytest

from storediter import (
    CursorDict,
    ForeignTokenError,
    StoredIterator,
    UNINITIALIZED,
    get_iterator,
    step,
)


def walk(container, position):
    """Step ``position`` to exhaustion and return the pairs seen."""
    pairs = []
    pair = step(container, position)
    while pair is not None:
        pairs.append(pair)
        pair = step(container, position)
    return pairs


class TestStoredIterator:
    """The caller-owned cursor variable."""

    def test_starts_uninitialized(self):
        position = StoredIterator()
        assert position.token is UNINITIALIZED
        assert not position.started

    def test_started_after_step(self, abc):
        position = StoredIterator()
        step(abc, position)
        assert position.started

    def test_reset(self, abc):
        position = StoredIterator()
        step(abc, position)
        step(abc, position)
        position.reset()
        assert step(abc, position) == ('a', 1)

    def test_token_is_read_only(self):
        position = StoredIterator()
        with pytest.raises(AttributeError):
            position.token = UNINITIALIZED


class TestStep:
    """step() advances only the caller's position."""

    def test_full_pass(self, abc):
        assert walk(abc, StoredIterator()) == [('a', 1), ('b', 2), ('c', 3)]

    def test_empty_container(self, empty):
        position = StoredIterator()
        assert step(empty, position) is None
        assert not position.started

    def test_exhaustion_then_restart(self, abc):
        position = StoredIterator()
        walk(abc, position)
        assert not position.started
        assert step(abc, position) == ('a', 1)

    def test_uninitialized_position_resets_ambient(self, abc):
        abc.each()
        abc.each()
        assert step(abc, StoredIterator()) == ('a', 1)

    def test_leaves_ambient_at_new_position(self, abc):
        position = StoredIterator()
        step(abc, position)
        assert get_iterator(abc) == position.token
        assert abc.each() == ('b', 2)

    def test_interleaved_positions_are_isolated(self, abc):
        first, second = StoredIterator(), StoredIterator()
        seen_first, seen_second = [], []
        seen_first.append(step(abc, first))
        seen_second.append(step(abc, second))
        seen_second.append(step(abc, second))
        seen_first.append(step(abc, first))
        seen_second.append(step(abc, second))
        seen_first.append(step(abc, first))
        assert seen_first == [('a', 1), ('b', 2), ('c', 3)]
        assert seen_second == seen_first
        assert step(abc, first) is None
        assert step(abc, second) is None

    @pytest.mark.parametrize("schedule", [
        "".join(p) for p in sorted(set(itertools.permutations("AAAABBBB")))
    ])
    def test_any_interleaving_visits_each_entry_once(self, schedule):
        container = CursorDict((f"k{i}", i) for i in range(3))
        positions = {'A': StoredIterator(), 'B': StoredIterator()}
        seen = {'A': [], 'B': []}
        for name in schedule:
            pair = step(container, positions[name])
            if pair is not None:
                seen[name].append(pair)
        expected = [('k0', 0), ('k1', 1), ('k2', 2)]
        assert seen['A'] == expected
        assert seen['B'] == expected

    def test_ambient_each_between_steps_does_not_disturb(self, abc):
        position = StoredIterator()
        step(abc, position)
        ambient = [abc.each(), abc.each(), abc.each()]
        assert ambient[0] == ('b', 2)
        assert step(abc, position) == ('b', 2)

    def test_position_from_other_container_in_strict_mode(self, strict_abc):
        position = StoredIterator()
        step(CursorDict(a=1, b=2), position)
        with pytest.raises(ForeignTokenError):
            step(strict_abc, position)

    def test_positions_on_different_containers(self, abc):
        other = CursorDict(x=1, y=2)
        p, q = StoredIterator(), StoredIterator()
        assert step(abc, p) == ('a', 1)
        assert step(other, q) == ('x', 1)
        assert step(abc, p) == ('b', 2)
        assert step(other, q) == ('y', 2)
