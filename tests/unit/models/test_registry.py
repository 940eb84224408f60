"""Tests for the test registry."""

import pytest

from cute.errors import DuplicateTestError
from cute.models.registry import TestCase, TestRegistry


def _body() -> None:
    pass


def test_from_pairs_keeps_registration_order() -> None:
    """Tests are kept in the order they were registered."""
    registry = TestRegistry.from_pairs([("b", _body), ("a", _body), ("c", _body)])

    assert registry.names == ["b", "a", "c"]
    assert len(registry) == 3
    assert registry[1].name == "a"


def test_from_pairs_stops_at_none_sentinel() -> None:
    """Entries after a None sentinel are ignored."""
    registry = TestRegistry.from_pairs([("a", _body), None, ("b", _body)])

    assert registry.names == ["a"]


def test_from_pairs_stops_at_pair_sentinel() -> None:
    """Entries after a (None, None) sentinel are ignored."""
    registry = TestRegistry.from_pairs([("a", _body), (None, None), ("b", _body)])

    assert registry.names == ["a"]


def test_rejects_duplicate_names() -> None:
    """Two tests with the same name are rejected."""
    with pytest.raises(DuplicateTestError) as exc_info:
        TestRegistry.from_pairs([("a", _body), ("a", _body)])

    assert exc_info.value.name == "a"
    assert "'a'" in str(exc_info.value)


def test_tests_are_immutable() -> None:
    """A list passed in is copied into a tuple."""
    tests = [TestCase(name="a", entry=_body)]
    registry = TestRegistry(tests=tests)
    tests.append(TestCase(name="b", entry=_body))

    assert registry.names == ["a"]
    assert isinstance(registry.tests, tuple)


def test_hooks_are_stored() -> None:
    """Setup and teardown hooks are attached to the registry."""

    def setup(name: str) -> None:
        pass

    registry = TestRegistry.from_pairs([("a", _body)], setup=setup)

    assert registry.setup is setup
    assert registry.teardown is None
