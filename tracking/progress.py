"""Progress rule for active projects.

After any update the status is `completed` exactly when every step is
checked off, and `active` otherwise. `paused` is never computed here; it is
only set by an explicit pause action.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from contracts import ProjectStatus


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_steps(completed_steps: Iterable[int], total_steps: int) -> List[int]:
    """Deduplicate, sort and drop indices outside the project's steps."""
    return sorted({i for i in completed_steps if 0 <= i < total_steps})


def status_for(completed_steps: List[int], total_steps: int) -> ProjectStatus:
    if total_steps > 0 and len(completed_steps) == total_steps:
        return ProjectStatus.COMPLETED
    return ProjectStatus.ACTIVE


def next_step(completed_steps: List[int]) -> int:
    """The step after the furthest completed one (0 when none are done)."""
    return max(completed_steps) + 1 if completed_steps else 0


def progress_update(
    total_steps: int,
    completed_steps: Iterable[int],
    current_step: int,
    previous_status: ProjectStatus = ProjectStatus.ACTIVE,
    user_notes: Optional[str] = None,
    now: Optional[str] = None,
) -> Dict[str, Any]:
    """Field updates (dotted paths) for one progress change.

    `completed_at` is stamped only on the transition into `completed`, so
    re-applying the same update keeps the original completion time.
    """
    now = now or utc_now()
    steps = normalize_steps(completed_steps, total_steps)
    status = status_for(steps, total_steps)

    fields: Dict[str, Any] = {
        "progress.completed_steps": steps,
        "progress.current_step": max(0, current_step),
        "progress.last_updated": now,
        "status": status.value,
    }
    if status is ProjectStatus.COMPLETED and previous_status is not ProjectStatus.COMPLETED:
        fields["completed_at"] = now
    elif status is ProjectStatus.ACTIVE:
        fields["completed_at"] = None
    if user_notes is not None:
        fields["user_notes"] = user_notes
    return fields


def toggle_step(completed_steps: Iterable[int], step_index: int, done: bool) -> List[int]:
    """Check or uncheck one step."""
    steps = set(completed_steps)
    if done:
        steps.add(step_index)
    else:
        steps.discard(step_index)
    return sorted(steps)


def percent_complete(completed_steps: List[int], total_steps: int) -> int:
    if total_steps <= 0:
        return 0
    return round(len(completed_steps) / total_steps * 100)
