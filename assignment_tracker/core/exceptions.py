"""
Custom exceptions for the assignment tracker.
"""

from typing import Optional, Any, Dict


class TrackerException(Exception):
    """Base exception for all assignment tracker errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(TrackerException):
    """Raised when data validation fails."""
    pass


class ConfigurationError(TrackerException):
    """Raised when configuration is invalid."""
    pass


class SchedulingError(TrackerException):
    """Raised when a deferred task cannot be scheduled or awaited."""
    pass


class ResourceNotFoundError(TrackerException):
    """Raised when a requested resource is not found."""
    pass
