"""
Core module containing the assignment model, roster and base classes.

Entities and the roster are imported from their own modules
(``core.entities``, ``core.roster``) since they depend on the services layer.
"""

from .enums import *
from .exceptions import *
from .interfaces import *

__all__ = [
    # Enums
    "AssignmentStatus",
    "ReportFormat",
    "PASS_THRESHOLD",
    "TERMINAL_STATUSES",
    "SUBMITTED_STATUSES",
    "OUTSTANDING_STATUSES",
    
    # Interfaces
    "Observer",
    "DeferredScheduler",
    "Reportable",
    
    # Exceptions
    "TrackerException",
    "ValidationError",
    "ConfigurationError",
    "SchedulingError",
    "ResourceNotFoundError",
]
