"""Tests for list name and short task ID resolution."""

import pytest

from gtask_cli.models.exceptions import AmbiguousIdError, NotFoundError, TransportError
from gtask_cli.models.task import MirrorSnapshot, Task, TaskList
from gtask_cli.services.resolver import IdentityResolver
from gtask_cli.utils.id_utils import short_id


def _seed_mirror(store, tasks, task_lists=None):
    store.save(
        MirrorSnapshot(
            task_lists=task_lists
            or [TaskList(id="L1", title="My Tasks"), TaskList(id="L2", title="Work")],
            tasks=tasks,
        )
    )


def _mirror_task(id_: str, list_id: str = "L1", title: str = "Cached") -> Task:
    return Task(id=id_, title=title, task_list_id=list_id, task_list_name="My Tasks")


# ---------------------------------------------------------------------------
# Task lists
# ---------------------------------------------------------------------------


class TestResolveListId:
    def test_default_sentinel_needs_no_lookup(self, resolver, fake_api):
        assert resolver.resolve_list_id("@default") == "@default"
        assert resolver.resolve_list_id("") == "@default"
        assert resolver.resolve_list_id(None) == "@default"
        assert fake_api.calls == []

    def test_exact_title_match(self, resolver):
        assert resolver.resolve_list_id("Work") == "L2"

    def test_match_is_case_sensitive(self, resolver):
        with pytest.raises(NotFoundError, match="work"):
            resolver.resolve_list_id("work")

    def test_first_list_with_title_wins(self, resolver, fake_api):
        fake_api.task_lists.append({"id": "L3", "title": "Work"})
        assert resolver.resolve_list_id("Work") == "L2"

    def test_unknown_title(self, resolver):
        with pytest.raises(NotFoundError, match="Task list 'Nope' not found"):
            resolver.resolve_list_id("Nope")

    def test_lists_come_from_mirror(self, resolver, store, fake_api):
        _seed_mirror(store, [], task_lists=[TaskList(id="C1", title="Cached list")])

        assert resolver.resolve_list_id("Cached list") == "C1"
        assert fake_api.calls_to("list_task_lists") == []


class TestTaskListName:
    def test_from_mirror(self, resolver, store, fake_api):
        _seed_mirror(store, [])
        assert resolver.get_task_list_name("L2") == "Work"
        assert fake_api.calls == []

    def test_from_remote(self, resolver):
        assert resolver.get_task_list_name("L2") == "Work"

    def test_default_list_title_from_remote(self, resolver):
        assert resolver.get_task_list_name("@default") == "My Tasks"

    def test_default_list_falls_back_to_sentinel(self, resolver, fake_api):
        fake_api.task_lists = []
        assert resolver.get_task_list_name("@default") == "@default"

    def test_unknown_list_raises(self, resolver):
        with pytest.raises(NotFoundError):
            resolver.get_task_list_name("L9")


# ---------------------------------------------------------------------------
# Task IDs within one list
# ---------------------------------------------------------------------------


class TestResolveTaskId:
    def test_full_id_returned_unchanged(self, resolver):
        assert resolver.resolve_task_id("L1", "abcdef1234567890") == "abcdef1234567890"

    def test_full_id_returned_unchanged_with_mirror(self, resolver, store):
        _seed_mirror(store, [_mirror_task("abcdef1234567890")])
        assert resolver.resolve_task_id("L1", "abcdef1234567890") == "abcdef1234567890"

    def test_unique_prefix(self, resolver, fake_api):
        assert resolver.resolve_task_id("L1", "abcdef12") == "abcdef1234567890"
        # Exact lookup first, then the full listing including completed/hidden
        assert fake_api.calls_to("get_task") == [("get_task", "L1", "abcdef12")]
        assert fake_api.calls_to("list_tasks") == [("list_tasks", "L1", True, True)]

    def test_prefix_search_includes_completed_tasks(self, resolver, fake_api):
        fake_api.tasks["L1"].append(
            {"id": "9999000011112222", "title": "Done", "status": "completed"}
        )
        assert resolver.resolve_task_id("L1", "9999") == "9999000011112222"

    def test_ambiguous_prefix(self, resolver, fake_api):
        fake_api.tasks["L1"] = [
            {"id": "aa111111", "title": "One", "status": "needsAction"},
            {"id": "aa222222", "title": "Two", "status": "needsAction"},
        ]

        assert resolver.resolve_task_id("L1", "aa1") == "aa111111"
        with pytest.raises(AmbiguousIdError) as exc_info:
            resolver.resolve_task_id("L1", "aa")

        err = exc_info.value
        assert err.short_id == "aa"
        assert err.scope == "L1"
        assert err.matches == ["aa111111", "aa222222"]
        assert "L1" in str(err)
        assert "longer ID" in str(err)

    def test_not_found(self, resolver):
        with pytest.raises(NotFoundError, match="Task 'zzz' not found"):
            resolver.resolve_task_id("L1", "zzz")

    def test_prefix_is_scoped_to_list(self, resolver):
        with pytest.raises(NotFoundError):
            resolver.resolve_task_id("L1", "ffee")

    def test_mirror_hit_skips_remote(self, resolver, store, fake_api):
        _seed_mirror(store, [_mirror_task("abcdef1234567890")])

        assert resolver.resolve_task_id("L1", "abc") == "abcdef1234567890"
        assert fake_api.calls == []

    def test_mirror_ignores_other_lists(self, resolver, store, fake_api):
        _seed_mirror(store, [_mirror_task("abcdef1234567890", list_id="L2")])

        assert resolver.resolve_task_id("L1", "abc") == "abcdef1234567890"
        assert fake_api.calls_to("list_tasks")

    def test_mirror_returns_first_match_without_ambiguity_check(
        self, resolver, store, fake_api
    ):
        """The mirror path and the remote path can disagree.

        With two cached tasks sharing a prefix the mirror answers with the
        first one, where the remote prefix search would report ambiguity.
        """
        fake_api.tasks["L1"] = [
            {"id": "aa111111", "title": "One", "status": "needsAction"},
            {"id": "aa222222", "title": "Two", "status": "needsAction"},
        ]
        _seed_mirror(store, [_mirror_task("aa111111"), _mirror_task("aa222222")])

        assert resolver.resolve_task_id("L1", "aa") == "aa111111"

        store.invalidate()
        with pytest.raises(AmbiguousIdError):
            resolver.resolve_task_id("L1", "aa")

    def test_partial_mirror_can_hide_remote_ambiguity(self, resolver, store, fake_api):
        """A mirror missing a remote task resolves what the remote calls ambiguous."""
        fake_api.tasks["L1"] = [
            {"id": "aa111111", "title": "One", "status": "needsAction"},
            {"id": "aa222222", "title": "Two", "status": "completed"},
        ]
        _seed_mirror(store, [_mirror_task("aa111111")])

        assert resolver.resolve_task_id("L1", "aa") == "aa111111"

    def test_expired_mirror_is_ignored(self, resolver, store, fake_api, clock):
        _seed_mirror(store, [_mirror_task("abc0000000000000")])
        clock.advance(301)

        with pytest.raises(NotFoundError):
            resolver.resolve_task_id("L1", "abc0")

    def test_bad_request_on_exact_lookup_falls_through(self, resolver, fake_api):
        def reject(task_list_id, task_id):
            raise TransportError("Invalid task ID", status_code=400)

        fake_api.get_task = reject
        assert resolver.resolve_task_id("L1", "abcdef") == "abcdef1234567890"

    def test_transport_error_on_exact_lookup_propagates(self, resolver, fake_api):
        def fail(task_list_id, task_id):
            raise TransportError("Backend error", status_code=503)

        fake_api.get_task = fail
        with pytest.raises(TransportError, match="Backend error"):
            resolver.resolve_task_id("L1", "abcdef")

    def test_short_id_round_trip(self, resolver, fake_api):
        for item in fake_api.tasks["L1"]:
            assert resolver.resolve_task_id("L1", short_id(item["id"])) == item["id"]

    def test_get_task_fetches_full_task(self, resolver):
        task = resolver.get_task("L2", "ffee")

        assert task.id == "ffee001122334455"
        assert task.notes == "Q1 numbers"
        assert task.task_list_id == "L2"
        assert task.task_list_name == "Work"


# ---------------------------------------------------------------------------
# Task IDs across lists
# ---------------------------------------------------------------------------


class TestFindTask:
    def test_found_in_second_list(self, resolver):
        task = resolver.find_task("ffee")

        assert task.id == "ffee001122334455"
        assert task.task_list_id == "L2"
        assert task.task_list_name == "Work"

    def test_first_list_wins_across_lists(self, resolver, fake_api):
        """A prefix matching in two lists returns the first list's task."""
        fake_api.tasks["L2"].append(
            {"id": "abcdef9999999999", "title": "Twin", "status": "needsAction"}
        )

        task = resolver.find_task("abcdef")
        assert task.id == "abcdef1234567890"
        assert task.task_list_id == "L1"

    def test_mirror_hit(self, resolver, store, fake_api):
        _seed_mirror(store, [_mirror_task("ffee001122334455", list_id="L2", title="Cached")])

        task = resolver.find_task("ffee")
        assert task.title == "Cached"
        assert fake_api.calls == []

    def test_mirror_exact_id(self, resolver, store):
        _seed_mirror(store, [_mirror_task("abc"), _mirror_task("abcdef")])
        assert resolver.find_task("abcdef").id == "abcdef"

    def test_not_found_anywhere(self, resolver):
        with pytest.raises(NotFoundError, match="Task 'zzz' not found"):
            resolver.find_task("zzz")

    def test_ambiguity_within_a_list_propagates(self, resolver, fake_api):
        fake_api.tasks["L1"] = [
            {"id": "aa111111", "title": "One", "status": "needsAction"},
            {"id": "aa222222", "title": "Two", "status": "needsAction"},
        ]
        with pytest.raises(AmbiguousIdError):
            resolver.find_task("aa")


def test_resolver_without_store(fake_api):
    """With caching disabled every lookup goes to the API."""
    resolver = IdentityResolver(fake_api, store=None)

    assert resolver.resolve_list_id("Work") == "L2"
    assert resolver.resolve_task_id("L1", "abcdef") == "abcdef1234567890"
    assert resolver.find_task("ffee").id == "ffee001122334455"
