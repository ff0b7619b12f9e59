"""
Observers that turn assignment status changes into messages and records.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Union, TYPE_CHECKING

from ..core.enums import AssignmentStatus
from ..core.interfaces import Observer

if TYPE_CHECKING:
    from ..core.entities import Student


MESSAGE_PREFIX = "Observer → "

_TEMPLATES: Dict[AssignmentStatus, str] = {
    AssignmentStatus.RELEASED: "{student}, {assignment} has been released.",
    AssignmentStatus.WORKING: "{student} is working on {assignment}.",
    AssignmentStatus.SUBMITTED: "{student} has submitted {assignment}.",
    AssignmentStatus.FINAL_REMINDER: "{student}, final reminder for {assignment}.",
    AssignmentStatus.PASS: "{student} has passed {assignment}",
    AssignmentStatus.FAIL: "{student} has failed {assignment}",
}

_FALLBACK_TEMPLATE = "{student}, {assignment} is now {status}."


def status_label(status: Union[AssignmentStatus, str]) -> str:
    """Plain string label for a status given as enum or string."""
    return status.value if isinstance(status, AssignmentStatus) else str(status)


def format_status_message(student_name: str, assignment_name: str,
                          status: Union[AssignmentStatus, str]) -> str:
    """Render a status change, falling back to a generic sentence for unknown statuses."""
    try:
        template = _TEMPLATES[AssignmentStatus(status_label(status))]
    except ValueError:
        template = _FALLBACK_TEMPLATE
    return template.format(student=student_name, assignment=assignment_name,
                           status=status_label(status))


class ConsoleObserver(Observer):
    """Writes one ``Observer → ...`` line per status change."""

    def __init__(self, sink: Callable[[str], None] = print):
        self._sink = sink

    def notify(self, student: 'Student', assignment_name: str,
               status: Union[AssignmentStatus, str]) -> None:
        message = format_status_message(student.full_name, assignment_name, status)
        self._sink(f"{MESSAGE_PREFIX}{message}")


@dataclass
class StatusChange:
    """A single recorded status change."""
    student_name: str
    assignment_name: str
    status: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RecordingObserver(Observer):
    """Keeps every status change in memory, in arrival order."""

    def __init__(self):
        self._changes: List[StatusChange] = []

    def notify(self, student: 'Student', assignment_name: str,
               status: Union[AssignmentStatus, str]) -> None:
        self._changes.append(StatusChange(
            student_name=student.full_name,
            assignment_name=assignment_name,
            status=status_label(status)
        ))

    @property
    def changes(self) -> List[StatusChange]:
        return self._changes.copy()

    def get_changes(self, student_name: Optional[str] = None,
                    assignment_name: Optional[str] = None) -> List[StatusChange]:
        """Get recorded changes, optionally narrowed to a student and/or assignment."""
        return [
            change for change in self._changes
            if (student_name is None or change.student_name == student_name)
            and (assignment_name is None or change.assignment_name == assignment_name)
        ]

    def statuses(self, student_name: Optional[str] = None,
                 assignment_name: Optional[str] = None) -> List[str]:
        """Status labels of the matching changes."""
        return [c.status for c in self.get_changes(student_name, assignment_name)]

    def clear(self) -> None:
        self._changes.clear()

    def __len__(self) -> int:
        return len(self._changes)


class CompositeObserver(Observer):
    """Fans each notification out to several observers in registration order."""

    def __init__(self, observers: Optional[List[Observer]] = None):
        self._observers: List[Observer] = list(observers or [])

    def add_observer(self, observer: Observer) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    @property
    def observers(self) -> List[Observer]:
        return self._observers.copy()

    def notify(self, student: 'Student', assignment_name: str,
               status: Union[AssignmentStatus, str]) -> None:
        for observer in self._observers:
            observer.notify(student, assignment_name, status)
