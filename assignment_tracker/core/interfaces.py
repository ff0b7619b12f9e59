"""
Core interfaces and abstract base classes for the assignment tracker.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Union, TYPE_CHECKING

from .enums import AssignmentStatus, ReportFormat

if TYPE_CHECKING:
    from .entities import Student
    from ..services.scheduler_service import TaskHandle


class Observer(ABC):
    """Sink for assignment status changes."""
    
    @abstractmethod
    def notify(self, student: 'Student', assignment_name: str,
               status: Union[AssignmentStatus, str]) -> None:
        """Handle a status change of one student's assignment."""
        pass


class DeferredScheduler(ABC):
    """Schedules callbacks to run after a delay, cancellable before they fire."""
    
    @abstractmethod
    def schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> 'TaskHandle':
        """Run ``callback(*args)`` after ``delay`` seconds."""
        pass
    
    @abstractmethod
    def cancel_all(self) -> int:
        """Cancel every pending task and return how many were cancelled."""
        pass
    
    @property
    @abstractmethod
    def pending_count(self) -> int:
        """Number of tasks that have neither run nor been cancelled."""
        pass


class Reportable(ABC):
    """Interface for objects that can generate reports."""
    
    @abstractmethod
    def generate_report(self, format: ReportFormat) -> str:
        """Generate a report in the specified format."""
        pass
