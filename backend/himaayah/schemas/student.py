"""
Student profile responses (student row joined with its user's name and email) and the export report.
"""
from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from himaayah.schemas.result import ResultResponse


class StudentResponse(BaseModel):
    id: int
    user_id: int
    student_number: str
    class_level: str = Field(alias="class")
    phone: str | None = None
    address: str | None = None
    created_at: datetime | None = None
    name: str
    email: str

    class Config:
        populate_by_name = True


class SemesterResultCreate(BaseModel):
    semester: Literal["1", "2"]
    gpa: Decimal = Field(ge=0, le=Decimal("9.99"))


class SemesterResultResponse(BaseModel):
    id: int
    student_id: int
    semester: str
    gpa: float
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ReportResultResponse(ResultResponse):
    exam_title: str | None = None


class StudentReportResponse(BaseModel):
    student: StudentResponse
    results: list[ReportResultResponse]
    semester_results: list[SemesterResultResponse]


class StudentUpdate(BaseModel):
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = None
    # Only teachers and admins may move a student between class levels.
    class_level: Literal["awwal", "thaaniy", "thaalith_ibtidaaiyyah", "awwal_idaadiyyah"] | None = Field(
        default=None, validation_alias=AliasChoices("class", "class_level")
    )
