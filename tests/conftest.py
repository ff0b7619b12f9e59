import random

import pytest

from assignment_tracker.config import TrackerSettings
from assignment_tracker.core.entities import Student
from assignment_tracker.core.roster import ClassList
from assignment_tracker.services import ManualScheduler, RecordingObserver


@pytest.fixture()
def observer():
    return RecordingObserver()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def settings():
    return TrackerSettings(work_delay=0.5, grading_delay=0.5, random_seed=1234)


@pytest.fixture()
def make_student(observer, scheduler, settings):
    """Factory for students sharing the recording observer and manual clock."""
    def factory(full_name="Alice Smith", email=None, rng=None):
        email = email or f"{full_name.split()[0].lower()}@example.com"
        return Student(
            full_name, email,
            observer=observer,
            scheduler=scheduler,
            settings=settings,
            rng=rng or random.Random(settings.random_seed)
        )
    return factory


@pytest.fixture()
def student(make_student):
    return make_student()


@pytest.fixture()
def messages():
    return []


@pytest.fixture()
def class_list(observer, messages):
    return ClassList(observer, sink=messages.append)
