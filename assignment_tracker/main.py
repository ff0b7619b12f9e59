"""
Main entry point for the assignment tracker.
"""

import asyncio
import random
from typing import Any, Callable, Dict, Optional

from .config import TrackerSettings, load_config_file, load_settings
from .core.entities import Student
from .core.enums import ReportFormat
from .core.exceptions import ResourceNotFoundError
from .core.interfaces import DeferredScheduler, Observer
from .core.roster import ClassList
from .services import AsyncioScheduler, ConsoleObserver, ManualScheduler


class AssignmentTracker:
    """Wires settings, scheduler, observer and roster together."""

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 scheduler: Optional[DeferredScheduler] = None,
                 observer: Optional[Observer] = None,
                 sink: Callable[[str], None] = print):
        self._sink = sink
        self._settings: TrackerSettings = load_settings(config)
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._observer = observer if observer is not None else ConsoleObserver(sink)
        self._rng = random.Random(self._settings.random_seed)
        self._class_list = ClassList(self._observer, sink=sink)
        self._running = True

        self._sink(f"✓ Settings loaded: work_delay={self._settings.work_delay}s, "
                   f"grading_delay={self._settings.grading_delay}s")
        self._sink("✓ Assignment tracker initialized")

    @property
    def settings(self) -> TrackerSettings:
        return self._settings

    @property
    def scheduler(self) -> DeferredScheduler:
        return self._scheduler

    @property
    def observer(self) -> Observer:
        return self._observer

    @property
    def class_list(self) -> ClassList:
        return self._class_list

    @property
    def sink(self) -> Callable[[str], None]:
        return self._sink

    def enroll(self, full_name: str, email: str) -> Student:
        """Create a student wired to the shared observer and scheduler and add them."""
        student = Student(
            full_name, email,
            observer=self._observer,
            scheduler=self._scheduler,
            settings=self._settings,
            rng=self._rng
        )
        self._class_list.add_student(student)
        return student

    def withdraw(self, full_name: str) -> Student:
        """Remove a student by name, cancelling their pending work."""
        removed = self._class_list.remove_student(full_name)
        if not removed:
            raise ResourceNotFoundError(f"No student named {full_name!r}",
                                        details={'full_name': full_name})
        return removed[0]

    async def wait_idle(self, timeout: Optional[float] = None) -> None:
        """Wait for every scheduled submission and grading to settle.

        A ManualScheduler is drained immediately by running its queue; any
        other scheduler is polled on the event loop.
        """
        if isinstance(self._scheduler, ManualScheduler):
            self._scheduler.run_until_idle()
        elif isinstance(self._scheduler, AsyncioScheduler):
            await self._scheduler.wait_idle(timeout=timeout)

    async def run_demo(self) -> None:
        """Two students, two assignments, one reminder."""
        alice = self.enroll("Alice Smith", "alice@example.com")
        bob = self.enroll("Bob Jones", "bob@example.com")

        await self._class_list.release_assignments_parallel(["A1", "A2"])
        alice.start_working("A1")
        bob.start_working("A2")

        # Remind before the automatic submission would happen.
        await asyncio.sleep(self._settings.work_delay * 0.4)
        self._class_list.send_reminder("A1")

        await self.wait_idle()

    def get_statistics(self) -> Dict[str, Any]:
        """Get roster and scheduler statistics."""
        students = self._class_list.students
        return {
            'student_count': len(students),
            'status_counts': self._class_list.get_status_summary(),
            'outstanding': self._class_list.find_outstanding_assignments(),
            'average_grades': {s.full_name: s.get_grade() for s in students},
            'pending_tasks': self._scheduler.pending_count,
        }

    def generate_report(self, format: ReportFormat) -> str:
        return self._class_list.generate_report(format)

    def shutdown(self) -> int:
        """Cancel all outstanding work."""
        if not self._running:
            return 0

        cancelled = self._class_list.cancel_all_pending()
        cancelled += self._scheduler.cancel_all()
        self._running = False
        self._sink(f"✓ Assignment tracker stopped ({cancelled} pending task(s) cancelled)")
        return cancelled


async def _run(tracker: AssignmentTracker, report: Optional[ReportFormat]) -> None:
    emit = tracker.sink
    try:
        await tracker.run_demo()
        emit("\n=== Statistics ===")
        for key, value in tracker.get_statistics().items():
            emit(f"{key}: {value}")
        if report is not None:
            emit(f"\n=== Report ({report.value}) ===")
            emit(tracker.generate_report(report))
    finally:
        tracker.shutdown()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Classroom assignment lifecycle simulator")
    parser.add_argument("--config", type=str, help="Configuration file path (JSON)")
    parser.add_argument("--seed", type=int, help="Random seed for automatic grading")
    parser.add_argument("--report", choices=[f.value for f in ReportFormat],
                        help="Print a roster report after the run")

    args = parser.parse_args()

    # Load configuration
    config: Dict[str, Any] = {}
    if args.config:
        config = load_config_file(args.config)
    if args.seed is not None:
        config['random_seed'] = args.seed

    report = ReportFormat(args.report) if args.report else None

    tracker = AssignmentTracker(config)
    try:
        asyncio.run(_run(tracker, report))
    except KeyboardInterrupt:
        tracker.sink("\nShutting down...")
        tracker.shutdown()


if __name__ == "__main__":
    main()
