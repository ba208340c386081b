"""Unit tests for version pruning.

The store renumbers the remaining history after every deletion of version
1, so pruning issues the same request repeatedly and counts down on its
own. These tests pin that loop against the in-memory store.
"""

import logging

import pytest

from src.content_lifecycle.client import ContentLifecycleClient
from src.content_lifecycle.errors import InvalidPruneRequestError, PageNotFoundError
from tests.helpers import FakeContentStore


@pytest.fixture
def store():
    return FakeContentStore()


@pytest.fixture
def client(store):
    return ContentLifecycleClient(api=store)


class TestPrune:
    """Test cases for ContentLifecycleClient.prune."""

    def test_prune_to_single_version(self, client, store):
        store.add_page(100, version=5)

        result = client.prune(100, keep=1)

        assert result.requested == 4
        assert result.deleted == 4
        assert result.complete
        assert store.version_count(100) == 1
        assert store.calls_of("delete_oldest_version") == [("delete_oldest_version", 100)] * 4

    def test_prune_keeps_requested_number(self, client, store):
        store.add_page(100, version=5)

        result = client.prune(100, keep=3)

        assert result.deleted == 2
        assert store.version_count(100) == 3

    def test_prune_reads_current_version_when_not_given(self, client, store):
        store.add_page(100, version=2)

        client.prune(100, keep=1)

        assert store.calls == [("get_page", 100), ("delete_oldest_version", 100)]

    def test_prune_uses_given_version_without_reading(self, client, store):
        store.add_page(100, version=3)

        client.prune(100, keep=1, current_version=3)

        assert store.calls_of("get_page") == []
        assert len(store.calls_of("delete_oldest_version")) == 2

    def test_prune_again_issues_no_deletes(self, client, store):
        """Once pruned, the next pass has nothing left to delete."""
        store.add_page(100, version=3)
        client.prune(100, keep=1)
        store.calls.clear()

        result = client.prune(100, keep=1, current_version=1)

        assert result.requested == 0
        assert store.calls == []

    @pytest.mark.parametrize("version,keep", [(1, 1), (2, 2), (2, 5)])
    def test_nothing_to_delete(self, client, store, version, keep):
        store.add_page(100, version=version)

        result = client.prune(100, keep=keep)

        assert result.requested == 0
        assert result.deleted == 0
        assert store.calls_of("delete_oldest_version") == []

    @pytest.mark.parametrize("keep", [0, -1])
    def test_keep_below_one_is_refused(self, client, store, keep):
        """No deletion is issued and the caller gets an error, not an exit."""
        store.add_page(100, version=5)

        with pytest.raises(InvalidPruneRequestError) as exc_info:
            client.prune(100, keep=keep)

        assert exc_info.value.keep == keep
        assert "Must keep at least 1 version" in str(exc_info.value)
        assert store.calls == []
        assert store.version_count(100) == 5

    def test_keep_below_one_is_a_value_error(self, client):
        with pytest.raises(ValueError):
            client.prune(100, keep=0)

    def test_refused_deletion_is_logged_and_skipped(self, client, store, caplog):
        """A non-204 deletion is recorded and the loop carries on."""
        store.add_page(100, version=4)
        store.version_delete_statuses = [204, 403, 204]

        with caplog.at_level(logging.WARNING, logger="src.content_lifecycle.client"):
            result = client.prune(100, keep=1)

        assert result.requested == 3
        assert result.deleted == 2
        assert result.failed_statuses == [403]
        assert not result.complete
        assert "Unable to delete version of page 100" in caplog.text
        assert "Code: 403" in caplog.text

    def test_counts_down_without_rereading_history(self, client, store):
        """Every pass of the loop targets version 1 again."""
        store.add_page(100, version=3)
        store.version_delete_statuses = [500, 500]

        result = client.prune(100, keep=1)

        assert result.failed_statuses == [500, 500]
        assert len(store.calls_of("get_page")) == 1
        assert store.version_count(100) == 3

    def test_prune_missing_page(self, client, store):
        with pytest.raises(PageNotFoundError):
            client.prune(100, keep=1)

        assert store.calls_of("delete_oldest_version") == []
