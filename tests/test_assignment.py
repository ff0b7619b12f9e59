import pytest

from assignment_tracker.core.entities import Assignment, is_numeric_grade
from assignment_tracker.core.enums import AssignmentStatus
from assignment_tracker.core.exceptions import ValidationError


def test_new_assignment_is_released_without_grade():
    assignment = Assignment("A1")
    assert assignment.name == "A1"
    assert assignment.status is AssignmentStatus.RELEASED
    assert assignment.grade is None
    assert not assignment.is_complete
    assert not assignment.has_submitted


@pytest.mark.parametrize("grade, expected", [
    (0, AssignmentStatus.FAIL),
    (50, AssignmentStatus.FAIL),
    (50.5, AssignmentStatus.PASS),
    (51, AssignmentStatus.PASS),
    (100, AssignmentStatus.PASS),
])
def test_set_grade_passes_strictly_above_fifty(grade, expected):
    assignment = Assignment("A1")
    assignment.set_grade(grade)
    assert assignment.status is expected
    assert assignment.grade == grade
    assert assignment.is_complete


def test_custom_pass_threshold():
    assignment = Assignment("A1", pass_threshold=70)
    assignment.set_grade(70)
    assert assignment.status is AssignmentStatus.FAIL
    assignment.set_grade(71)
    assert assignment.status is AssignmentStatus.PASS


def test_set_status_rejects_graded_statuses():
    assignment = Assignment("A1")
    with pytest.raises(ValidationError):
        assignment.set_status(AssignmentStatus.PASS)
    assert assignment.status is AssignmentStatus.RELEASED


def test_set_status_clears_grade():
    assignment = Assignment("A1")
    assignment.set_grade(80)
    assignment.set_status(AssignmentStatus.SUBMITTED)
    assert assignment.grade is None
    assert assignment.has_submitted
    assert not assignment.is_complete


def test_mutations_bump_version():
    assignment = Assignment("A1")
    assert assignment.version == 1
    assignment.set_status(AssignmentStatus.WORKING)
    assignment.set_grade(10)
    assert assignment.version == 3


def test_to_dict():
    assignment = Assignment("A1")
    assignment.set_grade(42)
    data = assignment.to_dict()
    assert data['name'] == "A1"
    assert data['status'] == "fail"
    assert data['grade'] == 42
    assert data['id'] == assignment.id


@pytest.mark.parametrize("value, expected", [
    (10, True),
    (10.5, True),
    (0, True),
    (True, False),
    (None, False),
    ("80", False),
    (float("nan"), False),
])
def test_is_numeric_grade(value, expected):
    assert is_numeric_grade(value) is expected
