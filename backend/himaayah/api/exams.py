"""
Exams API: list exams, create exam and questions (teacher/admin), list questions for takers
(canonical answers withheld), submit answers (caller must have a student profile).
Submissions are stored as sent: question ids in answers are not checked against the exam.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from himaayah.database import get_db
from himaayah.errors import NotFoundError, StoreError
from himaayah.models.catalog import SchoolClass, Subject
from himaayah.models.exam import Exam
from himaayah.models.question import Question
from himaayah.models.result import Result
from himaayah.models.student import Student
from himaayah.schemas.exam import (
    ExamCreate,
    ExamListItem,
    ExamResponse,
    ExamSubmitRequest,
    QuestionCreate,
    QuestionDetailResponse,
    QuestionResponse,
)
from himaayah.schemas.result import ResultResponse
from himaayah.services.policy import AUTHENTICATED, TEACHER_ONLY, Caller
from himaayah.api.deps import get_current_student, guard
from himaayah.api.results import result_to_response

router = APIRouter(prefix="/exams", tags=["exams"])
logger = logging.getLogger(__name__)


def _question_to_response(q: Question) -> QuestionResponse:
    return QuestionResponse(
        id=q.id,
        exam_id=q.exam_id,
        question_text=q.question_text,
        question_text_ar=q.question_text_ar,
        q_type=q.q_type,
        options=q.options,
        marks=q.marks,
    )


@router.get("", response_model=list[ExamListItem])
def list_exams(caller: Caller = Depends(guard(AUTHENTICATED)), db: Session = Depends(get_db)):
    """All exams with subject and class names joined."""
    rows = (
        db.query(Exam, Subject.name_en, SchoolClass.name)
        .outerjoin(Subject, Exam.subject_id == Subject.id)
        .outerjoin(SchoolClass, Exam.class_id == SchoolClass.id)
        .order_by(Exam.id)
        .all()
    )
    return [
        ExamListItem(
            id=e.id,
            title=e.title,
            subject_id=e.subject_id,
            class_id=e.class_id,
            duration_minutes=e.duration_minutes,
            created_at=e.created_at,
            subject_name=subject_name,
            class_name=class_name,
        )
        for e, subject_name, class_name in rows
    ]


@router.post("", response_model=ExamResponse, status_code=status.HTTP_201_CREATED)
def create_exam(
    data: ExamCreate,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    """Create an exam for a subject and class."""
    exam = Exam(
        title=data.title,
        subject_id=data.subject_id,
        class_id=data.class_id,
        duration_minutes=data.duration_minutes,
    )
    db.add(exam)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Create exam IntegrityError: %s", e.orig)
        raise NotFoundError("Subject or class not found") from e
    db.refresh(exam)
    logger.info("Exam id=%s created by user_id=%s", exam.id, caller.id)
    return exam


@router.get("/{exam_id}/questions", response_model=list[QuestionResponse])
def list_questions(
    exam_id: int,
    caller: Caller = Depends(guard(AUTHENTICATED)),
    db: Session = Depends(get_db),
):
    """Questions of an exam without their canonical answers."""
    questions = db.query(Question).filter(Question.exam_id == exam_id).order_by(Question.id).all()
    return [_question_to_response(q) for q in questions]


@router.post("/{exam_id}/questions", response_model=QuestionDetailResponse, status_code=status.HTTP_201_CREATED)
def add_question(
    exam_id: int,
    data: QuestionCreate,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    """Add a question to an exam; the response includes the canonical answer for the author."""
    if not db.query(Exam.id).filter(Exam.id == exam_id).first():
        raise NotFoundError("Exam not found")
    q = Question(
        exam_id=exam_id,
        question_text=data.question_text,
        question_text_ar=data.question_text_ar,
        q_type=data.q_type,
        options=[o.model_dump() for o in data.options] if data.options else None,
        answer=data.answer,
        marks=data.marks,
    )
    db.add(q)
    db.commit()
    db.refresh(q)
    return QuestionDetailResponse(**_question_to_response(q).model_dump(), answer=q.answer)


@router.post("/{exam_id}/submit", response_model=ResultResponse, status_code=status.HTTP_201_CREATED)
def submit_exam(
    exam_id: int,
    data: ExamSubmitRequest,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Store one attempt with grading fields unset. Every call creates a new result."""
    result = Result(
        student_id=student.id,
        exam_id=exam_id,
        answers={qid: a.model_dump() for qid, a in data.answers.items()},
    )
    db.add(result)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error("Submit failed for student_id=%s exam_id=%s: %s", student.id, exam_id, e.orig)
        raise StoreError() from e
    db.refresh(result)
    logger.info("Result id=%s submitted by student_id=%s for exam_id=%s", result.id, student.id, exam_id)
    return result_to_response(result)
