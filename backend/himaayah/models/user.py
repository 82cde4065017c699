"""
User model: auth (email + password), role (admin | teacher | student).
A student-role user owns exactly one Student profile, created at registration.
"""
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from himaayah.database import Base

ROLES = ("admin", "teacher", "student")


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="student")  # admin | teacher | student
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (CheckConstraint("role IN ('admin', 'teacher', 'student')", name="users_role_check"),)

    student = relationship(
        "Student", back_populates="user", uselist=False, cascade="all, delete-orphan", passive_deletes=True
    )
