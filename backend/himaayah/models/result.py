"""
Result: one student's attempt at one exam. Grading fields stay null until a teacher or admin
grades it; grading again overwrites them (no history kept).
SemesterResult: per-semester GPA for a student.
"""
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Integer, String, DateTime, ForeignKey, Numeric, CheckConstraint
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from himaayah.database import Base


class Result(Base):
    __tablename__ = "results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exam_id: Mapped[int] = mapped_column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    answers: Mapped[dict | None] = mapped_column(JSON, nullable=True)  # {"<question_id>": {"kind": "choice"|"text", ...}}
    total_marks: Mapped[Decimal | None] = mapped_column(Numeric(6, 2), nullable=True)
    percentage: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    grade: Mapped[str | None] = mapped_column(String(1), nullable=True)
    graded_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    graded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="results")
    exam = relationship("Exam", back_populates="results")


class SemesterResult(Base):
    __tablename__ = "semester_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    semester: Mapped[str] = mapped_column(String(1), nullable=False)  # "1" | "2"
    gpa: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (CheckConstraint("semester IN ('1', '2')", name="semester_results_semester_check"),)

    student = relationship("Student", back_populates="semester_results")
