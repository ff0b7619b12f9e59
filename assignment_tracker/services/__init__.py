"""
Services module containing scheduling and notification components.
"""

from .scheduler_service import TaskHandle, AsyncioScheduler, ManualScheduler
from .notification_service import (
    StatusChange, ConsoleObserver, RecordingObserver, CompositeObserver
)

__all__ = [
    "TaskHandle",
    "AsyncioScheduler",
    "ManualScheduler",
    "StatusChange",
    "ConsoleObserver",
    "RecordingObserver",
    "CompositeObserver",
]
