"""
Enumerations and constants for the assignment tracker.
"""

from enum import Enum
from typing import FrozenSet


PASS_THRESHOLD = 50


class AssignmentStatus(Enum):
    """Lifecycle stage of an assignment."""
    RELEASED = "released"
    WORKING = "working"
    SUBMITTED = "submitted"
    FINAL_REMINDER = "final_reminder"
    PASS = "pass"
    FAIL = "fail"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def is_submitted(self) -> bool:
        return self in SUBMITTED_STATUSES


class ReportFormat(Enum):
    """Supported roster report formats."""
    JSON = "json"
    CSV = "csv"


# Graded statuses; work, submission and reminders leave them alone.
TERMINAL_STATUSES: FrozenSet[AssignmentStatus] = frozenset({
    AssignmentStatus.PASS,
    AssignmentStatus.FAIL,
})

SUBMITTED_STATUSES: FrozenSet[AssignmentStatus] = frozenset({
    AssignmentStatus.SUBMITTED,
    AssignmentStatus.PASS,
    AssignmentStatus.FAIL,
})

OUTSTANDING_STATUSES: FrozenSet[AssignmentStatus] = frozenset({
    AssignmentStatus.RELEASED,
    AssignmentStatus.WORKING,
    AssignmentStatus.FINAL_REMINDER,
})
