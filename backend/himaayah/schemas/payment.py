"""
Payment schemas. meta is an opaque document: any JSON object, stored and returned untouched.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

OpaqueDocument = dict[str, Any]


class PaymentCreate(BaseModel):
    student_id: int | None = None
    user_email: str | None = None
    purpose: str = Field(min_length=1, max_length=100)
    method: str = Field(min_length=1, max_length=50)
    amount: Decimal = Field(default=Decimal("0"), ge=0, lt=Decimal("100000000"))
    reference: str | None = None
    meta: OpaqueDocument | None = None


class PaymentResponse(BaseModel):
    id: int
    student_id: int | None = None
    user_email: str | None = None
    purpose: str | None = None
    method: str | None = None
    amount: float
    reference: str
    status: str
    meta: OpaqueDocument
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class PaymentListItem(PaymentResponse):
    student_number: str | None = None
    student_email: str | None = None
