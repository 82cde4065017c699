"""
Results API: grade a submission (teacher/admin). Grading overwrites any earlier grade; no history is kept.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from himaayah.database import get_db
from himaayah.errors import NotFoundError
from himaayah.models.result import Result
from himaayah.schemas.result import GradeRequest, ResultResponse
from himaayah.services.policy import TEACHER_ONLY, Caller
from himaayah.api.deps import guard

router = APIRouter(prefix="/results", tags=["results"])
logger = logging.getLogger(__name__)


def _as_float(v) -> float | None:
    return float(v) if v is not None else None


def result_to_response(r: Result) -> ResultResponse:
    return ResultResponse(
        id=r.id,
        student_id=r.student_id,
        exam_id=r.exam_id,
        answers=r.answers,
        total_marks=_as_float(r.total_marks),
        percentage=_as_float(r.percentage),
        grade=r.grade,
        graded_by=r.graded_by,
        graded_at=r.graded_at,
        created_at=r.created_at,
    )


def grade_result(db: Session, result_id: int, data: GradeRequest, grader_id: int) -> Result:
    """Set grading fields and graded_at=now unconditionally."""
    result = db.query(Result).filter(Result.id == result_id).first()
    if not result:
        raise NotFoundError("Result not found")
    if result.graded_at is not None:
        logger.info("Result id=%s regraded; previous grade %s by user_id=%s is overwritten",
                    result.id, result.grade, result.graded_by)
    result.total_marks = data.total_marks
    result.percentage = data.percentage
    result.grade = data.grade
    result.graded_by = grader_id
    result.graded_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(result)
    return result


@router.post("/{result_id}/grade", response_model=ResultResponse)
def grade(
    result_id: int,
    data: GradeRequest,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    """Grade a result: total_marks, percentage, grade letter."""
    result = grade_result(db, result_id, data, caller.id)
    logger.info("Result id=%s graded %s by user_id=%s", result.id, result.grade, caller.id)
    return result_to_response(result)
