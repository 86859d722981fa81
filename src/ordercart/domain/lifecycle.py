"""Catalog and submission lifecycle models.

Both lifecycles are small explicit state machines. Transition maps list
the allowed targets per state; anything else is rejected.

- Catalog: loading -> ready | error; ready/error -> loading (manual reload).
- Submission: idle -> submitting -> idle. A submit while ``submitting``
  is rejected, so at most one order is in flight per session.
"""

from __future__ import annotations

from ordercart.domain.types import CatalogStatus, SubmissionState

# --- Transition maps ---

CATALOG_TRANSITIONS: dict[str, list[str]] = {
    "loading": ["ready", "error"],
    "ready": ["loading"],
    "error": ["loading"],
}

SUBMISSION_TRANSITIONS: dict[str, list[str]] = {
    "idle": ["submitting"],
    "submitting": ["idle"],
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


class InvalidTransition(RuntimeError):
    """Raised when a lifecycle is driven through a disallowed edge."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Invalid transition {current} -> {target}")
        self.current = current
        self.target = target


class SubmissionMachine:
    """Two-state gate for order submission.

    ``try_begin()`` is the only way into ``submitting`` and refuses when a
    submission is already in flight. ``finish()`` returns to ``idle`` on
    both success and failure.
    """

    def __init__(self) -> None:
        self._state = SubmissionState.IDLE

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state is SubmissionState.IDLE

    def try_begin(self) -> bool:
        """Enter ``submitting``. Returns False (no change) if not idle."""
        if not is_valid_transition(
            self._state, SubmissionState.SUBMITTING, SUBMISSION_TRANSITIONS
        ):
            return False
        self._state = SubmissionState.SUBMITTING
        return True

    def finish(self) -> None:
        """Return to ``idle`` after the persistence call resolves."""
        if not is_valid_transition(self._state, SubmissionState.IDLE, SUBMISSION_TRANSITIONS):
            raise InvalidTransition(self._state, SubmissionState.IDLE)
        self._state = SubmissionState.IDLE


class CatalogLifecycle:
    """Tracks catalog load status. Starts in ``loading``."""

    def __init__(self) -> None:
        self._status = CatalogStatus.LOADING

    @property
    def status(self) -> CatalogStatus:
        return self._status

    def transition(self, target: CatalogStatus) -> None:
        """Move to *target*; re-entering the current state is allowed."""
        if target is self._status:
            return
        if not is_valid_transition(self._status, target, CATALOG_TRANSITIONS):
            raise InvalidTransition(self._status, target)
        self._status = target
