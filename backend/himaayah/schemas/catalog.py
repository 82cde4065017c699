"""
Subject and class catalog schemas.
"""
from pydantic import BaseModel, Field


class SubjectCreate(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    name_en: str = Field(min_length=1, max_length=200)
    name_ar: str | None = None


class SubjectResponse(BaseModel):
    id: int
    code: str
    name_en: str
    name_ar: str | None = None

    class Config:
        from_attributes = True


class ClassCreate(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None


class ClassResponse(BaseModel):
    id: int
    code: str
    name: str
    description: str | None = None

    class Config:
        from_attributes = True
