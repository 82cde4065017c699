"""
Result schemas: a submission and its grading fields.
"""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class GradeRequest(BaseModel):
    total_marks: Decimal = Field(ge=0, lt=Decimal("10000"))
    percentage: Decimal = Field(ge=0, le=100)
    grade: str = Field(min_length=1, max_length=1)


class ResultResponse(BaseModel):
    id: int
    student_id: int
    exam_id: int
    answers: dict | None = None
    total_marks: float | None = None
    percentage: float | None = None
    grade: str | None = None
    graded_by: int | None = None
    graded_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
