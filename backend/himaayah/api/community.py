"""
Community API: student journals, accountability pods and blog posts.
Journals belong to the calling student; staff see only journals marked shareable.
Pod posts are readable by members and staff, writable by members.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from himaayah.database import get_db
from himaayah.errors import ConflictError, ForbiddenError, NotFoundError
from himaayah.models.community import Journal, Pod, PodMember, PodPost, Post
from himaayah.models.student import Student
from himaayah.schemas.community import (
    JournalCreate,
    JournalResponse,
    PodCreate,
    PodMemberCreate,
    PodMemberResponse,
    PodPostCreate,
    PodPostResponse,
    PodResponse,
    PostCreate,
    PostResponse,
)
from himaayah.services.policy import AUTHENTICATED, STUDENT, TEACHER_ONLY, Caller
from himaayah.api.deps import get_current_caller, get_current_student, guard

router = APIRouter(tags=["community"])
logger = logging.getLogger(__name__)


def _split_tags(tags: str | None) -> list[str]:
    return [t for t in (tags or "").split(",") if t]


def _journal_to_response(j: Journal) -> JournalResponse:
    return JournalResponse(
        id=j.id,
        student_id=j.student_id,
        title=j.title,
        content=j.content,
        tags=_split_tags(j.tags),
        is_shareable=j.is_shareable,
        created_at=j.created_at,
    )


def _load_pod(db: Session, pod_id: int) -> Pod:
    pod = db.query(Pod).filter(Pod.id == pod_id).first()
    if not pod:
        raise NotFoundError("Pod not found")
    return pod


def _membership(db: Session, pod_id: int, caller: Caller) -> PodMember | None:
    return (
        db.query(PodMember)
        .join(Student, PodMember.student_id == Student.id)
        .filter(PodMember.pod_id == pod_id, Student.user_id == caller.id)
        .first()
    )


# Journals

@router.post("/journals", response_model=JournalResponse, status_code=status.HTTP_201_CREATED)
def create_journal(
    data: JournalCreate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    tags = ",".join(t.strip() for t in data.tags if t.strip())
    journal = Journal(
        student_id=student.id,
        title=data.title,
        content=data.content,
        tags=tags or None,
        is_shareable=data.is_shareable,
    )
    db.add(journal)
    db.commit()
    db.refresh(journal)
    return _journal_to_response(journal)


@router.get("/journals", response_model=list[JournalResponse])
def list_own_journals(
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """The calling student's journals, newest first."""
    journals = db.query(Journal).filter(Journal.student_id == student.id).order_by(Journal.id.desc()).all()
    return [_journal_to_response(j) for j in journals]


@router.get("/students/{student_id}/journals", response_model=list[JournalResponse])
def list_shared_journals(
    student_id: int,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    """Shareable journals of one student."""
    if not db.query(Student.id).filter(Student.id == student_id).first():
        raise NotFoundError("Not found")
    journals = (
        db.query(Journal)
        .filter(Journal.student_id == student_id, Journal.is_shareable.is_(True))
        .order_by(Journal.id.desc())
        .all()
    )
    return [_journal_to_response(j) for j in journals]


# Pods

@router.post("/pods", response_model=PodResponse, status_code=status.HTTP_201_CREATED)
def create_pod(
    data: PodCreate,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    pod = Pod(name=data.name, description=data.description, created_by=caller.id)
    db.add(pod)
    db.commit()
    db.refresh(pod)
    logger.info("Pod id=%s created by user_id=%s", pod.id, caller.id)
    return pod


@router.post("/pods/{pod_id}/members", response_model=PodMemberResponse, status_code=status.HTTP_201_CREATED)
def add_pod_member(
    pod_id: int,
    data: PodMemberCreate,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    _load_pod(db, pod_id)
    if not db.query(Student.id).filter(Student.id == data.student_id).first():
        raise NotFoundError("Student not found")
    existing = (
        db.query(PodMember.id)
        .filter(PodMember.pod_id == pod_id, PodMember.student_id == data.student_id)
        .first()
    )
    if existing:
        raise ConflictError("Student is already a member of this pod")
    member = PodMember(pod_id=pod_id, student_id=data.student_id, role=data.role)
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@router.get("/pods/{pod_id}/posts", response_model=list[PodPostResponse])
def list_pod_posts(
    pod_id: int,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    """Posts of a pod, oldest first. Students must be members."""
    pod = _load_pod(db, pod_id)
    if caller.role == STUDENT and not _membership(db, pod_id, caller):
        raise ForbiddenError("Pod members only")
    return pod.posts


@router.post("/pods/{pod_id}/posts", response_model=PodPostResponse, status_code=status.HTTP_201_CREATED)
def create_pod_post(
    pod_id: int,
    data: PodPostCreate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    _load_pod(db, pod_id)
    is_member = (
        db.query(PodMember.id)
        .filter(PodMember.pod_id == pod_id, PodMember.student_id == student.id)
        .first()
    )
    if not is_member:
        raise ForbiddenError("Pod members only")
    post = PodPost(pod_id=pod_id, student_id=student.id, message=data.message, reactions={}, flagged=False)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


# Blog posts

@router.get("/posts", response_model=list[PostResponse])
def list_posts(caller: Caller = Depends(guard(AUTHENTICATED)), db: Session = Depends(get_db)):
    """Published posts, newest first."""
    return (
        db.query(Post)
        .filter(Post.published_at.is_not(None))
        .order_by(Post.published_at.desc(), Post.id.desc())
        .all()
    )


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    data: PostCreate,
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    if db.query(Post.id).filter(Post.slug == data.slug).first():
        raise ConflictError("Slug already in use")
    post = Post(
        title=data.title,
        slug=data.slug,
        excerpt=data.excerpt,
        content=data.content,
        author_id=caller.id,
        published_at=datetime.now(timezone.utc) if data.publish else None,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post
