"""
Exam: one sitting for a subject and class. Questions are deleted with their exam.
"""
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from himaayah.database import Base


class Exam(Base):
    __tablename__ = "exams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    subject_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("subjects.id"), nullable=True, index=True)
    class_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("classes.id"), nullable=True, index=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    subject = relationship("Subject", back_populates="exams")
    school_class = relationship("SchoolClass", back_populates="exams")
    questions = relationship(
        "Question", back_populates="exam", cascade="all, delete-orphan", passive_deletes=True, order_by="Question.id"
    )
    results = relationship("Result", back_populates="exam")
