"""
Class roster: roster-wide queries and batch operations over students.
"""

import asyncio
import csv
import io
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from .entities import Student
from .enums import AssignmentStatus, OUTSTANDING_STATUSES, ReportFormat
from .interfaces import Observer, Reportable
from .exceptions import ValidationError
from ..schemas import AssignmentSummary, RosterReport, StudentSummary


class ClassList(Reportable):
    """Ordered roster of students sharing one observer."""

    def __init__(self, observer: Optional[Observer] = None, sink: Callable[[str], None] = print):
        self._students: List[Student] = []
        self._observer = observer
        self._sink = sink

    @property
    def students(self) -> List[Student]:
        return self._students.copy()

    @property
    def observer(self) -> Optional[Observer]:
        return self._observer

    def __len__(self) -> int:
        return len(self._students)

    def __iter__(self) -> Iterator[Student]:
        return iter(self._students.copy())

    def add_student(self, student: Student) -> None:
        """Append a student to the roster."""
        self._students.append(student)
        self._sink(f"{student.full_name} has been added to the classlist.")

    def remove_student(self, student_or_name: Union[Student, str]) -> List[Student]:
        """Remove by exact full name or by reference, cancelling their pending work."""
        if isinstance(student_or_name, str):
            removed = [s for s in self._students if s.full_name == student_or_name]
        else:
            removed = [s for s in self._students if s is student_or_name]

        if not removed:
            return []

        self._students = [s for s in self._students if all(s is not r for r in removed)]
        for student in removed:
            student.cancel_pending_tasks()
            self._sink(f"{student.full_name} has been removed from the classlist.")
        return removed

    def find_student_by_name(self, full_name: str) -> Optional[Student]:
        """First student with exactly this full name, or None."""
        return next((s for s in self._students if s.full_name == full_name), None)

    def find_outstanding_assignments(self, assignment_name: Optional[str] = None) -> List[str]:
        """Names of students with unfinished work.

        With an assignment name: students who never received it or have not
        submitted it. Without one: students with anything still released,
        being worked on, or under final reminder.
        """
        if assignment_name:
            return [
                s.full_name for s in self._students
                if not s.has_submitted_assignment(assignment_name)
            ]

        return [
            s.full_name for s in self._students
            if any(a.status in OUTSTANDING_STATUSES for a in s.assignments.values())
        ]

    async def release_assignments_parallel(self, assignment_names: Iterable[str]) -> None:
        """Release each assignment to the whole roster concurrently."""
        await asyncio.gather(*(self._release_assignment(name) for name in assignment_names))

    async def _release_assignment(self, assignment_name: str) -> None:
        # Yield once so the releases interleave on the loop.
        await asyncio.sleep(0)
        for student in self._students.copy():
            student.update_assignment_status(assignment_name)

    def send_reminder(self, assignment_name: str) -> None:
        """Remind every student who has not completed the assignment."""
        for student in self._students.copy():
            if not student.is_assignment_complete(assignment_name):
                student.receive_reminder(assignment_name)

    def cancel_all_pending(self) -> int:
        """Cancel the pending timers of every student on the roster."""
        return sum(s.cancel_pending_tasks() for s in self._students)

    def get_status_summary(self) -> Dict[str, int]:
        """Count assignments per status across the roster."""
        counts = {status.value: 0 for status in AssignmentStatus}
        for student in self._students:
            for assignment in student.assignments.values():
                counts[assignment.status.value] += 1
        return counts

    def build_report(self) -> RosterReport:
        """Snapshot the roster into a report model."""
        return RosterReport(
            generated_at=datetime.now(timezone.utc),
            student_count=len(self._students),
            status_counts=self.get_status_summary(),
            outstanding=self.find_outstanding_assignments(),
            students=[
                StudentSummary(
                    full_name=s.full_name,
                    email=s.email,
                    overall_grade=s.overall_grade,
                    assignments=[
                        AssignmentSummary(name=a.name, status=a.status.value, grade=a.grade)
                        for a in s.assignments.values()
                    ]
                )
                for s in self._students
            ]
        )

    def generate_report(self, format: ReportFormat) -> str:
        """Render the roster as JSON or CSV."""
        if format == ReportFormat.JSON:
            return self.build_report().model_dump_json(indent=2)
        if format == ReportFormat.CSV:
            return self._generate_csv()
        raise ValidationError(f"Unsupported report format: {format}",
                              details={'format': str(format)})

    def _generate_csv(self) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(['full_name', 'email', 'assignment', 'status', 'grade', 'overall_grade'])
        for student in self._students:
            for assignment in student.assignments.values():
                writer.writerow([
                    student.full_name,
                    student.email,
                    assignment.name,
                    assignment.status.value,
                    '' if assignment.grade is None else assignment.grade,
                    student.overall_grade,
                ])
        return output.getvalue()
