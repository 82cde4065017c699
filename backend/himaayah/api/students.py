"""
Students API: list (teacher/admin), get one (self, teacher or admin), update contact fields,
record semester GPA. Student rows are always returned joined with the owning user's name and email.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from himaayah.database import get_db
from himaayah.errors import ForbiddenError, NotFoundError
from himaayah.models.student import Student
from himaayah.models.result import SemesterResult
from himaayah.models.user import User
from himaayah.schemas.student import (
    SemesterResultCreate,
    SemesterResultResponse,
    StudentResponse,
    StudentUpdate,
)
from himaayah.services.policy import SELF_OR_STAFF, STUDENT, TEACHER_ONLY, Caller, authorize
from himaayah.api.deps import get_current_caller, guard

router = APIRouter(prefix="/students", tags=["students"])
logger = logging.getLogger(__name__)


def student_to_response(s: Student, u: User) -> StudentResponse:
    return StudentResponse(
        id=s.id,
        user_id=s.user_id,
        student_number=s.student_number,
        class_level=s.class_level,
        phone=s.phone,
        address=s.address,
        created_at=s.created_at,
        name=u.name,
        email=u.email,
    )


def load_student(db: Session, student_id: int) -> tuple[Student, User]:
    """Student joined with its user; NotFoundError if absent."""
    row = (
        db.query(Student, User)
        .join(User, Student.user_id == User.id)
        .filter(Student.id == student_id)
        .first()
    )
    if not row:
        raise NotFoundError("Not found")
    return row[0], row[1]


def semester_result_to_response(r: SemesterResult) -> SemesterResultResponse:
    return SemesterResultResponse(
        id=r.id,
        student_id=r.student_id,
        semester=r.semester,
        gpa=float(r.gpa),
        created_at=r.created_at,
    )


@router.get("", response_model=list[StudentResponse])
def list_students(
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    """All students with user name and email."""
    rows = db.query(Student, User).join(User, Student.user_id == User.id).order_by(Student.id).all()
    return [student_to_response(s, u) for s, u in rows]


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: int,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """One student. Students may only read their own profile."""
    student, user = load_student(db, student_id)
    authorize(caller, SELF_OR_STAFF, owner_user_id=student.user_id)
    return student_to_response(student, user)


@router.patch("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: int,
    data: StudentUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """Update phone/address (self, teacher or admin); class level only by teacher or admin."""
    student, user = load_student(db, student_id)
    authorize(caller, SELF_OR_STAFF, owner_user_id=student.user_id)
    if data.class_level is not None and caller.role == STUDENT:
        raise ForbiddenError("Only teachers can change a student's class")
    if data.phone is not None:
        student.phone = data.phone
    if data.address is not None:
        student.address = data.address
    if data.class_level is not None:
        student.class_level = data.class_level
    db.commit()
    db.refresh(student)
    return student_to_response(student, user)


@router.post(
    "/{student_id}/semester-results",
    response_model=SemesterResultResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_semester_result(
    student_id: int,
    data: SemesterResultCreate,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    """Record a semester GPA for a student."""
    load_student(db, student_id)
    row = SemesterResult(student_id=student_id, semester=data.semester, gpa=data.gpa)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Semester %s GPA recorded for student_id=%s by user_id=%s", row.semester, student_id, caller.id)
    return semester_result_to_response(row)
