"""Status enums for the catalog, submission, and order lifecycles."""

from __future__ import annotations

from enum import StrEnum


class CatalogStatus(StrEnum):
    """Load state of the menu catalog."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class SubmissionState(StrEnum):
    """Single-flight gate for order submission."""

    IDLE = "idle"
    SUBMITTING = "submitting"


class OrderStatus(StrEnum):
    """Status stamped on a freshly constructed order."""

    PENDING = "pending"


class ErrorKind(StrEnum):
    """Which state-visible error slot a notice belongs to."""

    LOAD = "load"
    SUBMISSION = "submission"
