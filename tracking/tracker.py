"""Project tracker - saved bookmarks and active projects for one user.

All operations go through the injected IdentityProvider and ProjectStore,
and each issues at most one store write.
"""

import logging
from typing import List, Optional

from contracts import (
    ActiveProject,
    ProjectIdea,
    ProjectProgress,
    ProjectStats,
    ProjectStatus,
    SavedProject,
    SearchQuery,
    UserIdentity,
)
from errors import NotSignedInError, ProjectNotFoundError

from .collaborators import IdentityProvider, ProjectStore
from .progress import progress_update, status_for, utc_now

logger = logging.getLogger(__name__)

SAVED = "saved"
ACTIVE = "active"

_IDEA_FIELDS = set(ProjectIdea.model_fields)


class ProjectTracker:
    """Saves, starts and tracks progress on projects for the signed-in user."""

    def __init__(self, identity: IdentityProvider, store: ProjectStore):
        self.identity = identity
        self.store = store

    def _require_user(self, action: str) -> UserIdentity:
        user = self.identity.current_user()
        if user is None:
            raise NotSignedInError(action)
        return user

    def _get_active(self, user: UserIdentity, project_id: str) -> ActiveProject:
        doc = self.store.get(user.uid, ACTIVE, project_id)
        if doc is None:
            raise ProjectNotFoundError(ACTIVE, project_id)
        return ActiveProject.model_validate(doc)

    # Saved projects (bookmarks)

    def save_project(self, project: ProjectIdea, search_query: Optional[SearchQuery] = None) -> str:
        """Bookmark a project idea. Returns the new saved project id."""
        user = self._require_user("save projects")
        saved = SavedProject(
            **project.model_dump(include=_IDEA_FIELDS),
            search_query=search_query or SearchQuery(),
            saved_at=utc_now(),
            user_id=user.uid,
        )
        project_id = self.store.create(user.uid, SAVED, saved.model_dump(mode="json", exclude={"id"}))
        logger.info("Saved project %s for %s", project_id, user.uid)
        return project_id

    def list_saved(self) -> List[SavedProject]:
        """Saved projects, newest first. Empty when signed out."""
        user = self.identity.current_user()
        if user is None:
            return []
        return [SavedProject.model_validate(doc) for doc in self.store.list(user.uid, SAVED)]

    def toggle_favorite(self, project_id: str, is_favorite: bool) -> None:
        user = self._require_user("favorite projects")
        self.store.update(user.uid, SAVED, project_id, {"is_favorite": is_favorite})

    def delete_saved(self, project_id: str) -> None:
        user = self._require_user("delete projects")
        self.store.delete(user.uid, SAVED, project_id)

    # Active projects

    def _new_active(
        self,
        user: UserIdentity,
        project: ProjectIdea,
        search_query: SearchQuery,
        source_saved_id: Optional[str] = None,
    ) -> str:
        now = utc_now()
        active = ActiveProject(
            **project.model_dump(include=_IDEA_FIELDS),
            search_query=search_query,
            progress=ProjectProgress(started_at=now, last_updated=now),
            started_at=now,
            user_id=user.uid,
            status=ProjectStatus.ACTIVE,
            source_saved_id=source_saved_id,
        )
        return self.store.create(user.uid, ACTIVE, active.model_dump(mode="json", exclude={"id"}))

    def start_project(self, project: ProjectIdea, search_query: Optional[SearchQuery] = None) -> str:
        """Start tracking progress on a project idea. Returns the active project id."""
        user = self._require_user("start projects")
        project_id = self._new_active(user, project, search_query or SearchQuery())
        logger.info("Started project %s for %s", project_id, user.uid)
        return project_id

    def move_to_active(self, saved_project_id: str) -> str:
        """Start a saved project. The bookmark is kept and referenced."""
        user = self._require_user("start projects")
        doc = self.store.get(user.uid, SAVED, saved_project_id)
        if doc is None:
            raise ProjectNotFoundError(SAVED, saved_project_id)
        saved = SavedProject.model_validate(doc)
        return self._new_active(user, saved, saved.search_query, source_saved_id=saved_project_id)

    def list_active(self, status: Optional[ProjectStatus] = None) -> List[ActiveProject]:
        """Active projects, newest first, optionally filtered by status."""
        user = self.identity.current_user()
        if user is None:
            return []
        projects = [ActiveProject.model_validate(doc) for doc in self.store.list(user.uid, ACTIVE)]
        if status is not None:
            projects = [p for p in projects if p.status is status]
        return projects

    def get_active(self, project_id: str) -> ActiveProject:
        user = self._require_user("view projects")
        return self._get_active(user, project_id)

    def update_progress(
        self,
        project_id: str,
        completed_steps: List[int],
        current_step: int,
        user_notes: Optional[str] = None,
    ) -> ActiveProject:
        """Record step completion and recompute the project's status.

        Returns the project as it is after the update.
        """
        user = self._require_user("update progress")
        project = self._get_active(user, project_id)
        fields = progress_update(
            total_steps=len(project.steps),
            completed_steps=completed_steps,
            current_step=current_step,
            previous_status=project.status,
            user_notes=user_notes,
        )
        self.store.update(user.uid, ACTIVE, project_id, fields)
        return self._get_active(user, project_id)

    def pause_project(self, project_id: str) -> None:
        user = self._require_user("pause projects")
        self._get_active(user, project_id)
        self.store.update(user.uid, ACTIVE, project_id, {"status": ProjectStatus.PAUSED.value})

    def resume_project(self, project_id: str) -> ProjectStatus:
        """Leave `paused` for whatever status the progress rule gives."""
        user = self._require_user("resume projects")
        project = self._get_active(user, project_id)
        status = status_for(project.progress.completed_steps, len(project.steps))
        self.store.update(user.uid, ACTIVE, project_id, {"status": status.value})
        return status

    def delete_active(self, project_id: str) -> None:
        user = self._require_user("delete projects")
        self.store.delete(user.uid, ACTIVE, project_id)

    def get_stats(self) -> Optional[ProjectStats]:
        """Counts across both collections, or None when signed out."""
        if self.identity.current_user() is None:
            return None
        saved = self.list_saved()
        active = self.list_active()
        completed = sum(1 for p in active if p.status is ProjectStatus.COMPLETED)
        return ProjectStats(
            total_saved=len(saved),
            total_active=len(active),
            completed=completed,
            in_progress=sum(1 for p in active if p.status is ProjectStatus.ACTIVE),
            paused=sum(1 for p in active if p.status is ProjectStatus.PAUSED),
            completion_rate=round(completed / len(active) * 100, 1) if active else 0.0,
        )
