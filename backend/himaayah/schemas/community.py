"""
Journal, pod and blog post schemas.
"""
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class JournalCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    is_shareable: bool = False


class JournalResponse(BaseModel):
    id: int
    student_id: int
    title: str
    content: str
    tags: list[str]
    is_shareable: bool
    created_at: datetime | None = None


class PodCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None


class PodResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_by: int | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class PodMemberCreate(BaseModel):
    student_id: int
    role: Literal["member", "lead"] = "member"


class PodMemberResponse(BaseModel):
    id: int
    pod_id: int
    student_id: int
    role: str

    class Config:
        from_attributes = True


class PodPostCreate(BaseModel):
    message: str = Field(min_length=1)


class PodPostResponse(BaseModel):
    id: int
    pod_id: int
    student_id: int | None = None
    message: str
    reactions: dict[str, Any]
    flagged: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    slug: str = Field(min_length=1, max_length=300, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    excerpt: str | None = None
    content: str = Field(min_length=1)
    publish: bool = True


class PostResponse(BaseModel):
    id: int
    title: str
    slug: str
    excerpt: str | None = None
    content: str
    author_id: int | None = None
    published_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
