"""
Unit tests for the /set, /get and help handlers.
"""

from kvserver.store import Store
from kvserver.handlers import (
    handle_set,
    handle_get,
    handle_help,
    HELP_TEXT,
    NO_PAIRS_MESSAGE,
    NO_KEYS_MESSAGE,
)


class TestSetHandler:
    """Tests for handle_set()."""

    def test_sets_each_pair_in_order(self, store: Store):
        response = handle_set(store, "?a=1?b=2")

        assert response.body == (
            'The value of the key "a" has been set to "1".\n'
            'The value of the key "b" has been set to "2".\n'
        )
        assert store.get("a") == "1"
        assert store.get("b") == "2"

    def test_no_pairs(self, store: Store):
        response = handle_set(store, "")

        assert response.body == "No correct key-value pairs have been provided."
        assert response.body == NO_PAIRS_MESSAGE
        assert len(store) == 0

    def test_invalid_pairs_skipped(self, store: Store):
        """Pairs without a value are skipped but don't hide valid ones."""
        response = handle_set(store, "?novalue?a=1?=x")

        assert response.body == 'The value of the key "a" has been set to "1".\n'
        assert list(store.items()) == [("a", "1")]

    def test_only_invalid_pairs(self, store: Store):
        response = handle_set(store, "?a?b=")

        assert response.body == NO_PAIRS_MESSAGE
        assert len(store) == 0

    def test_overwrite(self, store: Store):
        store.set("a", "old")

        response = handle_set(store, "?a=new")

        assert response.body == 'The value of the key "a" has been set to "new".\n'
        assert store.get("a") == "new"

    def test_same_key_twice_last_wins(self, store: Store):
        response = handle_set(store, "?a=1?a=2")

        assert response.body.count("\n") == 2
        assert store.get("a") == "2"

    def test_suffix_from_longer_prefix(self, store: Store):
        """'/settings' routes here with suffix 'tings', which has no value."""
        assert handle_set(store, "tings").body == NO_PAIRS_MESSAGE


class TestGetHandler:
    """Tests for handle_get()."""

    def test_found_and_missing(self, store: Store):
        store.set("a", "1")

        response = handle_get(store, "?key=a?key=missing")

        assert response.body == (
            'The key "a" has the value "1".\n'
            'The key "missing" doesn\'t have any value.\n'
        )

    def test_no_keys_requested(self, store: Store):
        assert handle_get(store, "").body == "No keys have been requested."
        assert handle_get(store, "").body == NO_KEYS_MESSAGE

    def test_other_options_ignored(self, store: Store):
        store.set("a", "1")

        response = handle_get(store, "?name=a?key=a?Key=a")

        assert response.body == 'The key "a" has the value "1".\n'

    def test_only_other_options(self, store: Store):
        store.set("a", "1")

        assert handle_get(store, "?a=1?keys=a").body == NO_KEYS_MESSAGE

    def test_key_option_without_name(self, store: Store):
        assert handle_get(store, "?key").body == NO_KEYS_MESSAGE

    def test_does_not_modify_store(self, store: Store):
        store.set("a", "1")

        handle_get(store, "?key=a?key=b")

        assert list(store.items()) == [("a", "1")]

    def test_key_named_key(self, store: Store):
        store.set("key", "meta")

        assert handle_get(store, "?key=key").body == 'The key "key" has the value "meta".\n'


class TestHelpHandler:
    """Tests for handle_help()."""

    def test_help_text(self, store: Store):
        response = handle_help(store, "ignored?a=1")

        assert response.body == HELP_TEXT
        assert response.body.startswith("Hello there!\n")
        assert "`/set?somekey=somevalue`" in response.body
        assert "`/get?key=somekey`" in response.body
        assert response.body.endswith("For any other route you will see this message.\n")

    def test_help_leaves_store_alone(self, store: Store):
        handle_help(store, "?a=1")

        assert len(store) == 0
