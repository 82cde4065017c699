"""
Student: profile attached 1:1 to a student-role User. Cascade-deleted with its user;
results, semester results, journals and pod memberships go with it.
"""
from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from himaayah.database import Base

CLASS_LEVELS = ("awwal", "thaaniy", "thaalith_ibtidaaiyyah", "awwal_idaadiyyah")


class Student(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    student_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    class_level: Mapped[str] = mapped_column("class", String(40), nullable=False, default="awwal")
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "class IN ('awwal', 'thaaniy', 'thaalith_ibtidaaiyyah', 'awwal_idaadiyyah')",
            name="students_class_check",
        ),
    )

    user = relationship("User", back_populates="student")
    results = relationship("Result", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)
    semester_results = relationship(
        "SemesterResult", back_populates="student", cascade="all, delete-orphan", passive_deletes=True
    )
    journals = relationship("Journal", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)
