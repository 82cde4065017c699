"""
Export API: JSON report of one student (profile, exam results with titles, semester GPAs).
Rendering to PDF is left to the client.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from himaayah.database import get_db
from himaayah.models.exam import Exam
from himaayah.models.result import Result, SemesterResult
from himaayah.schemas.student import ReportResultResponse, StudentReportResponse
from himaayah.services.policy import TEACHER_ONLY, Caller
from himaayah.api.deps import guard
from himaayah.api.results import result_to_response
from himaayah.api.students import load_student, semester_result_to_response, student_to_response

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/student/{student_id}/report", response_model=StudentReportResponse)
def student_report(
    student_id: int,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    student, user = load_student(db, student_id)
    rows = (
        db.query(Result, Exam.title)
        .outerjoin(Exam, Result.exam_id == Exam.id)
        .filter(Result.student_id == student_id)
        .order_by(Result.id)
        .all()
    )
    semesters = (
        db.query(SemesterResult)
        .filter(SemesterResult.student_id == student_id)
        .order_by(SemesterResult.id)
        .all()
    )
    return StudentReportResponse(
        student=student_to_response(student, user),
        results=[
            ReportResultResponse(**result_to_response(r).model_dump(), exam_title=title) for r, title in rows
        ],
        semester_results=[semester_result_to_response(s) for s in semesters],
    )
