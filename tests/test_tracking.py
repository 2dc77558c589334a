"""Tests for the project tracker, the progress rule and the stores."""

import json

import pytest

from contracts import ProjectIdea, ProjectStatus, SearchQuery, UserIdentity
from errors import CollaboratorError, NotSignedInError, ProjectNotFoundError
from tracking import (
    InMemoryProjectStore,
    JsonFileProjectStore,
    ProjectTracker,
    StaticIdentityProvider,
    next_step,
    normalize_steps,
    percent_complete,
    progress_update,
    status_for,
    toggle_step,
)

USER = UserIdentity(uid="user-1", email="learner@example.com")


def _idea(steps=3):
    return ProjectIdea(
        title="Fractal Tree",
        description="Draw a tree recursively.",
        tools=["Recursion"],
        steps=[f"Step {i}" for i in range(1, steps + 1)],
    )


@pytest.fixture
def identity():
    return StaticIdentityProvider(USER)


@pytest.fixture
def store():
    return InMemoryProjectStore()


@pytest.fixture
def tracker(identity, store):
    return ProjectTracker(identity, store)


class TestProgressRule:
    """Test the pure progress functions."""

    def test_normalize(self):
        assert normalize_steps([2, 0, 2, 7, -1], 3) == [0, 2]

    def test_status_for(self):
        assert status_for([0, 1, 2], 3) is ProjectStatus.COMPLETED
        assert status_for([0, 1], 3) is ProjectStatus.ACTIVE
        assert status_for([], 0) is ProjectStatus.ACTIVE

    def test_next_step(self):
        assert next_step([]) == 0
        assert next_step([0, 1]) == 2

    def test_toggle_step(self):
        assert toggle_step([0, 2], 1, True) == [0, 1, 2]
        assert toggle_step([0, 1, 2], 1, False) == [0, 2]
        assert toggle_step([0], 3, False) == [0]

    def test_percent_complete(self):
        assert percent_complete([0], 3) == 33
        assert percent_complete([], 0) == 0

    def test_completion_stamps_completed_at(self):
        fields = progress_update(3, [0, 1, 2], 3, now="t1")
        assert fields["status"] == "completed"
        assert fields["completed_at"] == "t1"
        assert fields["progress.completed_steps"] == [0, 1, 2]

    def test_already_completed_keeps_timestamp(self):
        fields = progress_update(3, [0, 1, 2], 3, previous_status=ProjectStatus.COMPLETED, now="t2")
        assert fields["status"] == "completed"
        assert "completed_at" not in fields

    def test_reopen_clears_completed_at(self):
        fields = progress_update(3, [0, 1], 2, previous_status=ProjectStatus.COMPLETED, now="t3")
        assert fields["status"] == "active"
        assert fields["completed_at"] is None

    def test_notes_only_when_given(self):
        assert "user_notes" not in progress_update(3, [], 0)
        assert progress_update(3, [], 0, user_notes="hi")["user_notes"] == "hi"


class TestSavedProjects:
    """Test bookmarks."""

    def test_save_and_list(self, tracker):
        project_id = tracker.save_project(_idea(), SearchQuery(concept="Recursion", skill_level="Beginner", domain="Coding"))
        saved = tracker.list_saved()
        assert [p.id for p in saved] == [project_id]
        assert saved[0].user_id == "user-1"
        assert saved[0].search_query.concept == "Recursion"
        assert not saved[0].is_favorite

    def test_default_search_query(self, tracker):
        tracker.save_project(_idea())
        assert tracker.list_saved()[0].search_query.concept == "Unknown"

    def test_favorite(self, tracker):
        project_id = tracker.save_project(_idea())
        tracker.toggle_favorite(project_id, True)
        assert tracker.list_saved()[0].is_favorite

    def test_delete(self, tracker):
        project_id = tracker.save_project(_idea())
        tracker.delete_saved(project_id)
        assert tracker.list_saved() == []

    def test_delete_missing(self, tracker):
        with pytest.raises(ProjectNotFoundError):
            tracker.delete_saved("nope")


class TestActiveProjects:
    """Test starting projects and tracking progress."""

    def test_start(self, tracker):
        project_id = tracker.start_project(_idea())
        project = tracker.get_active(project_id)
        assert project.status is ProjectStatus.ACTIVE
        assert project.progress.completed_steps == []
        assert project.progress.current_step == 0
        assert project.completed_at is None

    def test_move_to_active_keeps_bookmark(self, tracker):
        saved_id = tracker.save_project(_idea(), SearchQuery(concept="Recursion"))
        active_id = tracker.move_to_active(saved_id)
        project = tracker.get_active(active_id)
        assert project.source_saved_id == saved_id
        assert project.search_query.concept == "Recursion"
        assert len(tracker.list_saved()) == 1

    def test_move_missing_saved(self, tracker):
        with pytest.raises(ProjectNotFoundError):
            tracker.move_to_active("nope")

    def test_all_steps_complete(self, tracker):
        project_id = tracker.start_project(_idea(3))
        project = tracker.update_progress(project_id, [0, 1, 2], 3)
        assert project.status is ProjectStatus.COMPLETED
        assert project.completed_at is not None

    def test_partial_progress(self, tracker):
        project_id = tracker.start_project(_idea(3))
        project = tracker.update_progress(project_id, [0], 1, user_notes="Trunk drawn")
        assert project.status is ProjectStatus.ACTIVE
        assert project.progress.current_step == 1
        assert project.user_notes == "Trunk drawn"

    def test_update_is_idempotent(self, tracker):
        project_id = tracker.start_project(_idea(3))
        first = tracker.update_progress(project_id, [0, 1, 2], 3)
        second = tracker.update_progress(project_id, [0, 1, 2], 3)
        assert second.status is ProjectStatus.COMPLETED
        assert second.completed_at == first.completed_at
        assert second.progress.completed_steps == first.progress.completed_steps

    def test_reopen(self, tracker):
        project_id = tracker.start_project(_idea(3))
        tracker.update_progress(project_id, [0, 1, 2], 3)
        project = tracker.update_progress(project_id, [0, 1], 2)
        assert project.status is ProjectStatus.ACTIVE
        assert project.completed_at is None

    def test_duplicate_and_out_of_range_steps(self, tracker):
        project_id = tracker.start_project(_idea(3))
        project = tracker.update_progress(project_id, [2, 2, 0, 9], 1)
        assert project.progress.completed_steps == [0, 2]
        assert project.status is ProjectStatus.ACTIVE

    def test_pause_and_resume(self, tracker):
        project_id = tracker.start_project(_idea(3))
        tracker.pause_project(project_id)
        assert tracker.get_active(project_id).status is ProjectStatus.PAUSED
        assert tracker.list_active(ProjectStatus.PAUSED)[0].id == project_id
        assert tracker.resume_project(project_id) is ProjectStatus.ACTIVE

    def test_progress_while_paused_recomputes_status(self, tracker):
        project_id = tracker.start_project(_idea(2))
        tracker.pause_project(project_id)
        assert tracker.update_progress(project_id, [0], 1).status is ProjectStatus.ACTIVE

    def test_update_missing(self, tracker):
        with pytest.raises(ProjectNotFoundError):
            tracker.update_progress("nope", [0], 1)

    def test_stats(self, tracker):
        tracker.save_project(_idea())
        done = tracker.start_project(_idea(1))
        tracker.update_progress(done, [0], 1)
        paused = tracker.start_project(_idea())
        tracker.pause_project(paused)
        tracker.start_project(_idea())

        stats = tracker.get_stats()
        assert stats.total_saved == 1
        assert stats.total_active == 3
        assert stats.completed == 1
        assert stats.paused == 1
        assert stats.in_progress == 1
        assert stats.completion_rate == 33.3


class TestSignedOut:
    """Operations without a signed-in user."""

    def test_writes_require_user(self, identity, tracker):
        identity.sign_out()
        with pytest.raises(NotSignedInError, match="Must be logged in to save projects"):
            tracker.save_project(_idea())
        with pytest.raises(NotSignedInError):
            tracker.update_progress("any", [0], 1)

    def test_reads_are_empty(self, identity, tracker):
        tracker.save_project(_idea())
        identity.sign_out()
        assert tracker.list_saved() == []
        assert tracker.list_active() == []
        assert tracker.get_stats() is None

    def test_users_are_isolated(self, identity, tracker):
        tracker.save_project(_idea())
        identity.sign_in(UserIdentity(uid="user-2"))
        assert tracker.list_saved() == []


class TestStores:
    """Test the store implementations directly."""

    def test_dotted_update(self, store):
        doc_id = store.create("u", "active", {"progress": {"current_step": 0}, "started_at": "t0"})
        store.update("u", "active", doc_id, {"progress.current_step": 2})
        assert store.get("u", "active", doc_id)["progress"]["current_step"] == 2

    def test_returns_copies(self, store):
        doc_id = store.create("u", "saved", {"saved_at": "t0", "tools": ["a"]})
        store.get("u", "saved", doc_id)["tools"].append("b")
        assert store.get("u", "saved", doc_id)["tools"] == ["a"]

    def test_newest_first(self, store):
        store.create("u", "saved", {"saved_at": "2024-01-01", "title": "old"})
        store.create("u", "saved", {"saved_at": "2024-06-01", "title": "new"})
        assert [d["title"] for d in store.list("u", "saved")] == ["new", "old"]

    def test_unknown_collection(self, store):
        with pytest.raises(ValueError):
            store.list("u", "archived")

    def test_json_store_round_trip(self, tmp_path):
        path = tmp_path / "store" / "projects.json"
        tracker = ProjectTracker(StaticIdentityProvider(USER), JsonFileProjectStore(path))
        project_id = tracker.start_project(_idea(2))
        tracker.update_progress(project_id, [0, 1], 2)

        reopened = ProjectTracker(StaticIdentityProvider(USER), JsonFileProjectStore(path))
        project = reopened.get_active(project_id)
        assert project.status is ProjectStatus.COMPLETED
        assert json.loads(path.read_text())["user-1"]["active"][project_id]["status"] == "completed"

    def test_failed_write_leaves_memory_unchanged(self, tmp_path):
        store = JsonFileProjectStore(tmp_path / "projects.json")
        doc_id = store.create("u", "active", {"started_at": "t0", "status": "active"})

        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store.path = blocker / "projects.json"

        with pytest.raises(CollaboratorError):
            store.update("u", "active", doc_id, {"status": "paused"})
        with pytest.raises(CollaboratorError):
            store.delete("u", "active", doc_id)
        with pytest.raises(CollaboratorError):
            store.create("u", "active", {"started_at": "t1"})

        assert [d["id"] for d in store.list("u", "active")] == [doc_id]
        assert store.get("u", "active", doc_id)["status"] == "active"

    def test_json_store_invalid_file(self, tmp_path):
        path = tmp_path / "projects.json"
        path.write_text("{not json")
        with pytest.raises(CollaboratorError):
            JsonFileProjectStore(path)
