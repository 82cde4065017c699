"""
SQLAlchemy models. Import here so init_db and the app see every table.
"""
from himaayah.models.user import User
from himaayah.models.student import Student
from himaayah.models.catalog import SchoolClass, Subject
from himaayah.models.exam import Exam
from himaayah.models.question import Question
from himaayah.models.result import Result, SemesterResult
from himaayah.models.payment import Payment
from himaayah.models.community import Journal, Pod, PodMember, PodPost, Post

__all__ = [
    "User", "Student", "SchoolClass", "Subject", "Exam", "Question", "Result", "SemesterResult",
    "Payment", "Journal", "Pod", "PodMember", "PodPost", "Post",
]
