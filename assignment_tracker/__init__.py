"""
Assignment Tracker: a classroom assignment lifecycle simulator

Tracks students' assignments through release, work, submission and grading,
driving the timed transitions on a cancellable deferred-task scheduler and
reporting every status change to an observer.
"""

__version__ = "1.0.0"
__author__ = "Assignment Tracker Development Team"
__description__ = "Classroom assignment lifecycle simulator"
