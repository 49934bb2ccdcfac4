"""Tests for NamespaceScopeTracker."""

import pytest

from waxwriter.exceptions import InvalidArgumentError, InvalidStateError
from waxwriter.xml.namespaces import NamespaceScopeTracker


@pytest.fixture
def tracker() -> NamespaceScopeTracker:
    tracker = NamespaceScopeTracker()
    tracker.push_scope()
    return tracker


class TestNamespaceScopeTracker:
    def test_declared_prefix_is_in_scope(self, tracker):
        tracker.declare("c")
        assert tracker.is_in_scope("c")
        assert not tracker.is_in_scope("m")

    def test_default_prefix_is_empty_string(self, tracker):
        tracker.declare(None)
        assert tracker.is_in_scope("")
        assert tracker.is_in_scope(None)

    def test_prefix_visible_from_nested_scope(self, tracker):
        tracker.declare("c")
        tracker.push_scope()
        assert tracker.is_in_scope("c")
        assert tracker.depth == 2

    def test_prefix_leaves_scope_with_its_element(self, tracker):
        tracker.push_scope()
        tracker.declare("c")
        tracker.pop_scope()
        assert not tracker.is_in_scope("c")

    def test_duplicate_on_same_element(self, tracker):
        tracker.declare("")
        with pytest.raises(InvalidArgumentError, match='prefix "" is already in scope'):
            tracker.declare("")

    def test_duplicate_on_ancestor(self, tracker):
        tracker.declare("c")
        tracker.push_scope()
        with pytest.raises(InvalidArgumentError, match='prefix "c" is already in scope'):
            tracker.declare("c")

    def test_siblings_may_declare_the_same_prefix(self, tracker):
        tracker.push_scope()
        tracker.declare("c")
        tracker.pop_scope()
        tracker.push_scope()
        tracker.declare("c")
        assert tracker.is_in_scope("c")

    def test_unchecked_declaration_allows_duplicates(self, tracker):
        tracker.declare("c")
        tracker.declare("c", check=False)
        assert tracker.is_in_scope("c")

    def test_verify_pending_accepts_declared_prefixes(self, tracker):
        tracker.reference("c")
        tracker.declare("c")
        tracker.verify_pending()
        assert tracker.pending == ()

    def test_verify_pending_rejects_unknown_prefix(self, tracker):
        tracker.reference("m")
        with pytest.raises(InvalidArgumentError, match='prefix "m" isn\'t in scope'):
            tracker.verify_pending()
        assert tracker.pending == ("m",)

    def test_failed_verification_fails_again(self, tracker):
        tracker.reference("m")
        with pytest.raises(InvalidArgumentError):
            tracker.verify_pending()
        with pytest.raises(InvalidArgumentError):
            tracker.verify_pending()

    def test_pending_prefix_passes_once_declared(self, tracker):
        tracker.reference("m")
        with pytest.raises(InvalidArgumentError):
            tracker.verify_pending()
        tracker.declare("m")
        tracker.verify_pending()
        assert tracker.pending == ()

    def test_discard_pending(self, tracker):
        tracker.reference("m")
        tracker.discard_pending()
        tracker.verify_pending()
        assert tracker.pending == ()

    def test_declare_outside_element(self):
        with pytest.raises(InvalidStateError):
            NamespaceScopeTracker().declare("c")

    def test_pop_without_scope(self):
        with pytest.raises(InvalidStateError):
            NamespaceScopeTracker().pop_scope()
