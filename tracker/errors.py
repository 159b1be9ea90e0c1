from __future__ import annotations


class TrackerError(Exception):
    """Base exception for tracker service errors."""


class DecisionNotFoundError(TrackerError):
    """No decision with the given id exists in the log."""

    def __init__(self, decision_id: str):
        super().__init__(f"Decision not found: {decision_id}")
        self.decision_id = decision_id


class ChecklistUnavailableError(TrackerError):
    """The review checklist is only persisted in live mode."""
