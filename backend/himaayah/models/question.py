"""
Question: belongs to one Exam. q_type mcq carries options [{"label":"A","text":"..."}, ...];
essay has none. answer is the canonical answer and is never sent to exam takers.
"""
from sqlalchemy import Integer, String, Text, ForeignKey, CheckConstraint
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from himaayah.database import Base

QUESTION_TYPES = ("mcq", "essay")


class Question(Base):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    exam_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("exams.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    question_text_ar: Mapped[str | None] = mapped_column(Text, nullable=True)
    q_type: Mapped[str] = mapped_column(String(10), nullable=False, default="essay")
    options: Mapped[list | None] = mapped_column(JSON, nullable=True)
    answer: Mapped[str | None] = mapped_column(Text, nullable=True)
    marks: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (CheckConstraint("q_type IN ('mcq', 'essay')", name="questions_q_type_check"),)

    exam = relationship("Exam", back_populates="questions")
