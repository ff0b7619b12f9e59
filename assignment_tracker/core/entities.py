"""
Core entities: assignments and the students who work on them.
"""

import math
import numbers
import random
import re
import uuid
from abc import ABC
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Union

from .enums import AssignmentStatus, PASS_THRESHOLD
from .interfaces import DeferredScheduler, Observer
from .exceptions import ValidationError
from ..config import TrackerSettings
from ..services.scheduler_service import AsyncioScheduler, TaskHandle


NOT_ASSIGNED = "Hasn't been assigned"

_EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def is_numeric_grade(value: Any) -> bool:
    """True for real numbers other than booleans and NaN."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


class AbstractEntity(ABC):
    """Base entity with universal ID, timestamps and versioning."""

    def __init__(self, entity_id: Optional[str] = None):
        self._id = entity_id or str(uuid.uuid4())
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1

    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    def touch(self) -> None:
        """Record a modification."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'id': self._id,
            'created_at': self._created_at.isoformat(),
            'updated_at': self._updated_at.isoformat(),
            'version': self._version,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"


class Assignment(AbstractEntity):
    """A named piece of coursework and where it stands."""

    def __init__(self, name: str, pass_threshold: float = PASS_THRESHOLD, **kwargs):
        super().__init__(**kwargs)
        self._name = name
        self._status = AssignmentStatus.RELEASED
        self._grade: Optional[float] = None
        self._pass_threshold = pass_threshold

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> AssignmentStatus:
        return self._status

    @property
    def grade(self) -> Optional[float]:
        return self._grade

    @property
    def pass_threshold(self) -> float:
        return self._pass_threshold

    @property
    def is_complete(self) -> bool:
        return self._status.is_terminal

    @property
    def has_submitted(self) -> bool:
        return self._status.is_submitted

    def set_status(self, status: AssignmentStatus) -> None:
        """Move to a non-graded status; pass and fail are reached via set_grade."""
        if status.is_terminal:
            raise ValidationError(
                f"Status {status.value} is only reachable by grading",
                details={'assignment': self._name, 'status': status.value}
            )
        self._status = status
        self._grade = None
        self.touch()

    def set_grade(self, grade: float) -> None:
        """Record a grade; strictly above the threshold passes."""
        self._grade = grade
        self._status = AssignmentStatus.PASS if grade > self._pass_threshold else AssignmentStatus.FAIL
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'status': self._status.value,
            'grade': self._grade,
        })
        return base_dict

    def __repr__(self) -> str:
        return f"Assignment(name={self._name!r}, status={self._status.value}, grade={self._grade})"


class Student(AbstractEntity):
    """Student who receives, works on and submits assignments.

    Every status change is reported synchronously to the observer, if one
    was given. Automatic submission and grading run as deferred tasks on the
    scheduler; the student owns the handles so they can be cancelled.
    """

    def __init__(self, full_name: str, email: str, observer: Optional[Observer] = None,
                 scheduler: Optional[DeferredScheduler] = None,
                 settings: Optional[TrackerSettings] = None,
                 rng: Optional[random.Random] = None, **kwargs):
        super().__init__(**kwargs)
        self._full_name = self._validate_full_name(full_name)
        self._email = self._validate_email(email)
        self._observer = observer
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._settings = settings or TrackerSettings()
        self._rng = rng or random.Random(self._settings.random_seed)
        self._assignments: Dict[str, Assignment] = {}
        self._overall_grade: float = 0
        self._working_timers: Dict[str, TaskHandle] = {}
        self._grading_timers: Set[TaskHandle] = set()

    @staticmethod
    def _validate_full_name(full_name: str) -> str:
        if not isinstance(full_name, str) or not full_name.strip():
            raise ValidationError("Full name must be a non-empty string")
        return full_name

    @staticmethod
    def _validate_email(email: str) -> str:
        if not isinstance(email, str) or not _EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email address: {email!r}")
        return email

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def email(self) -> str:
        return self._email

    @property
    def overall_grade(self) -> float:
        return self._overall_grade

    @property
    def assignments(self) -> Dict[str, Assignment]:
        return dict(self._assignments)

    @property
    def observer(self) -> Optional[Observer]:
        return self._observer

    def set_full_name(self, full_name: str) -> None:
        """Rename the student."""
        self._full_name = self._validate_full_name(full_name)
        self.touch()

    def set_email(self, email: str) -> None:
        """Change the contact email."""
        self._email = self._validate_email(email)
        self.touch()

    def get_assignment(self, name: str) -> Optional[Assignment]:
        """Get an assignment by name, or None if it was never released."""
        return self._assignments.get(name)

    def _ensure_assignment(self, name: str) -> Assignment:
        assignment = self._assignments.get(name)
        if assignment is None:
            assignment = Assignment(name, pass_threshold=self._settings.pass_threshold)
            self._assignments[name] = assignment
            self.touch()
            self._notify(assignment)
        return assignment

    def _notify(self, assignment: Assignment) -> None:
        if self._observer is not None:
            self._observer.notify(self, assignment.name, assignment.status)

    def _update_overall_grade(self) -> None:
        self._overall_grade = self.get_grade()
        self.touch()

    def update_assignment_status(self, name: str, grade: Union[float, None] = None) -> Assignment:
        """Make sure the assignment exists and, given a numeric grade, grade it."""
        assignment = self._ensure_assignment(name)

        if is_numeric_grade(grade):
            assignment.set_grade(grade)
            self._update_overall_grade()
            self._notify(assignment)

        return assignment

    def get_assignment_status(self, name: str) -> str:
        """Get the display status: "Pass", "Fail", a raw label, or not assigned."""
        assignment = self._assignments.get(name)
        if assignment is None:
            return NOT_ASSIGNED
        if assignment.status is AssignmentStatus.PASS:
            return "Pass"
        if assignment.status is AssignmentStatus.FAIL:
            return "Fail"
        return assignment.status.value

    def get_grade(self) -> float:
        """Mean over graded assignments, 0 when nothing is graded."""
        graded = [a.grade for a in self._assignments.values() if a.grade is not None]
        if not graded:
            return 0
        return sum(graded) / len(graded)

    def start_working(self, name: str) -> None:
        """Start working; auto-submit after the work delay unless restarted."""
        existing = self._assignments.get(name)
        if existing is not None and existing.has_submitted:
            return

        # Schedule first; a scheduling failure must leave the assignment untouched.
        handle = self._scheduler.schedule(self._settings.work_delay, self._auto_submit, name)
        self._cancel_working_timer(name)
        self._working_timers[name] = handle

        assignment = self._ensure_assignment(name)
        assignment.set_status(AssignmentStatus.WORKING)
        self._notify(assignment)

    def _auto_submit(self, name: str) -> None:
        self._working_timers.pop(name, None)
        self.submit_assignment(name)

    def _cancel_working_timer(self, name: str) -> None:
        handle = self._working_timers.pop(name, None)
        if handle is not None:
            handle.cancel()

    def _schedule_grading(self, name: str) -> TaskHandle:
        handle = self._scheduler.schedule(self._settings.grading_delay, self._grade_submission, name)
        self._grading_timers.add(handle)
        return handle

    def _mark_submitted(self, assignment: Assignment) -> None:
        self._cancel_working_timer(assignment.name)
        assignment.set_status(AssignmentStatus.SUBMITTED)
        self._notify(assignment)

    def submit_assignment(self, name: str) -> None:
        """Submit the assignment and queue automatic grading."""
        existing = self._assignments.get(name)
        if existing is not None and existing.has_submitted:
            return

        self._schedule_grading(name)
        self._mark_submitted(self._ensure_assignment(name))

    def _grade_submission(self, name: str) -> None:
        self._grading_timers = {h for h in self._grading_timers if h.pending}
        assignment = self._assignments[name]
        grade = self._rng.randint(self._settings.min_grade, self._settings.max_grade)
        assignment.set_grade(grade)
        self._update_overall_grade()
        self._notify(assignment)

    def receive_reminder(self, name: str) -> None:
        """Final reminder: flag the assignment, then submit it straight away."""
        existing = self._assignments.get(name)
        if existing is not None and existing.is_complete:
            return

        self._schedule_grading(name)
        assignment = self._ensure_assignment(name)
        assignment.set_status(AssignmentStatus.FINAL_REMINDER)
        self._notify(assignment)
        self._mark_submitted(assignment)

    def is_assignment_complete(self, name: str) -> bool:
        """Check whether the assignment has been graded."""
        assignment = self._assignments.get(name)
        return assignment is not None and assignment.is_complete

    def has_submitted_assignment(self, name: str) -> bool:
        """Check whether the assignment was at least submitted."""
        assignment = self._assignments.get(name)
        return assignment is not None and assignment.has_submitted

    @property
    def pending_tasks(self) -> List[TaskHandle]:
        """Scheduled work that has not yet run."""
        handles = list(self._working_timers.values()) + list(self._grading_timers)
        return [h for h in handles if h.pending]

    def cancel_pending_tasks(self) -> int:
        """Cancel every outstanding timer owned by this student."""
        cancelled = sum(1 for h in self.pending_tasks if h.cancel())
        self._working_timers.clear()
        self._grading_timers.clear()
        return cancelled

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'full_name': self._full_name,
            'email': self._email,
            'overall_grade': self._overall_grade,
            'assignments': [a.to_dict() for a in self._assignments.values()],
        })
        return base_dict

    def __repr__(self) -> str:
        return f"Student(full_name={self._full_name!r}, email={self._email!r})"
