"""
Pydantic models for roster reports.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AssignmentSummary(BaseModel):
    name: str
    status: str
    grade: Optional[float] = None


class StudentSummary(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: str
    overall_grade: float
    assignments: List[AssignmentSummary] = []


class RosterReport(BaseModel):
    generated_at: datetime
    student_count: int = Field(..., ge=0)
    status_counts: Dict[str, int] = {}
    outstanding: List[str] = []
    students: List[StudentSummary] = []
