"""
Catalog API: GET /subjects, GET /classes (any signed-in user); POST for both is admin only.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from himaayah.database import get_db
from himaayah.errors import ConflictError
from himaayah.models.catalog import SchoolClass, Subject
from himaayah.schemas.catalog import ClassCreate, ClassResponse, SubjectCreate, SubjectResponse
from himaayah.services.policy import ADMIN_ONLY, AUTHENTICATED, Caller
from himaayah.api.deps import guard

router = APIRouter(tags=["catalog"])


@router.get("/subjects", response_model=list[SubjectResponse])
def list_subjects(caller: Caller = Depends(guard(AUTHENTICATED)), db: Session = Depends(get_db)):
    return db.query(Subject).order_by(Subject.id).all()


@router.post("/subjects", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
def create_subject(
    data: SubjectCreate,
    caller: Caller = Depends(guard(ADMIN_ONLY)),
    db: Session = Depends(get_db),
):
    if db.query(Subject.id).filter(Subject.code == data.code).first():
        raise ConflictError("Subject code already exists")
    subject = Subject(code=data.code, name_en=data.name_en, name_ar=data.name_ar)
    db.add(subject)
    db.commit()
    db.refresh(subject)
    return subject


@router.get("/classes", response_model=list[ClassResponse])
def list_classes(caller: Caller = Depends(guard(AUTHENTICATED)), db: Session = Depends(get_db)):
    return db.query(SchoolClass).order_by(SchoolClass.id).all()


@router.post("/classes", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
def create_class(
    data: ClassCreate,
    caller: Caller = Depends(guard(ADMIN_ONLY)),
    db: Session = Depends(get_db),
):
    if db.query(SchoolClass.id).filter(SchoolClass.code == data.code).first():
        raise ConflictError("Class code already exists")
    school_class = SchoolClass(code=data.code, name=data.name, description=data.description)
    db.add(school_class)
    db.commit()
    db.refresh(school_class)
    return school_class
