"""
Payments API: record a payment (any signed-in user), list payments (teacher/admin).
There is no gateway: every recorded payment is stored as settled (status "success").
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, aliased

from himaayah.database import get_db
from himaayah.errors import NotFoundError
from himaayah.models.payment import Payment
from himaayah.models.student import Student
from himaayah.models.user import User
from himaayah.schemas.payment import PaymentCreate, PaymentListItem, PaymentResponse
from himaayah.services.policy import AUTHENTICATED, TEACHER_ONLY, Caller
from himaayah.api.deps import guard

router = APIRouter(prefix="/payments", tags=["payments"])
logger = logging.getLogger(__name__)

RECORDED_STATUS = "success"


def _payment_fields(p: Payment) -> dict:
    return {
        "id": p.id,
        "student_id": p.student_id,
        "user_email": p.user_email,
        "purpose": p.purpose,
        "method": p.method,
        "amount": float(p.amount or 0),
        "reference": p.reference or "",
        "status": p.status,
        "meta": p.meta or {},
        "created_at": p.created_at,
    }


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def record_payment(
    data: PaymentCreate,
    caller: Caller = Depends(guard(AUTHENTICATED)),
    db: Session = Depends(get_db),
):
    """Record a payment; user_email defaults to the caller's email."""
    if data.student_id is not None and not db.query(Student.id).filter(Student.id == data.student_id).first():
        raise NotFoundError("Student not found")
    payment = Payment(
        student_id=data.student_id,
        user_email=data.user_email or caller.email,
        purpose=data.purpose,
        method=data.method,
        amount=data.amount,
        reference=data.reference or "",
        status=RECORDED_STATUS,
        meta=data.meta or {},
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)
    logger.info("Payment id=%s recorded: %s %s via %s", payment.id, payment.amount, payment.purpose, payment.method)
    return PaymentResponse(**_payment_fields(payment))


@router.get("", response_model=list[PaymentListItem])
def list_payments(
    caller: Caller = Depends(guard(TEACHER_ONLY)),
    db: Session = Depends(get_db),
):
    """All payments, newest first, with the linked student's number and email when present."""
    student_user = aliased(User)
    rows = (
        db.query(Payment, Student.student_number, student_user.email)
        .outerjoin(Student, Payment.student_id == Student.id)
        .outerjoin(student_user, Student.user_id == student_user.id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .all()
    )
    return [
        PaymentListItem(**_payment_fields(p), student_number=number, student_email=email)
        for p, number, email in rows
    ]
