"""
Exam and question schemas.
Options are an explicit list of labelled choices and only exist on mcq questions.
Submitted answers are a tagged variant per question id: {"kind": "choice", "option": "B"}
or {"kind": "text", "text": "..."}; a bare string is read as a text answer.
"""
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator


class ExamCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    subject_id: int | None = None
    class_id: int | None = None
    duration_minutes: int = Field(default=60, ge=1)


class ExamResponse(BaseModel):
    id: int
    title: str
    subject_id: int | None = None
    class_id: int | None = None
    duration_minutes: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ExamListItem(ExamResponse):
    subject_name: str | None = None
    class_name: str | None = None


class ChoiceOption(BaseModel):
    label: str = Field(min_length=1, max_length=5)
    text: str


class QuestionCreate(BaseModel):
    question_text: str = Field(min_length=1)
    question_text_ar: str | None = None
    q_type: Literal["mcq", "essay"] = "essay"
    options: list[ChoiceOption] | None = None
    answer: str | None = None
    marks: int = Field(default=1, ge=0)

    @model_validator(mode="after")
    def options_match_type(self) -> "QuestionCreate":
        if self.q_type == "mcq":
            if not self.options or len(self.options) < 2:
                raise ValueError("mcq questions need at least two options")
            labels = [o.label.strip().upper() for o in self.options]
            if len(set(labels)) != len(labels):
                raise ValueError("option labels must be unique")
        elif self.options:
            raise ValueError("essay questions cannot have options")
        return self


class QuestionResponse(BaseModel):
    """Question as shown to exam takers; the canonical answer is never included."""
    id: int
    exam_id: int
    question_text: str
    question_text_ar: str | None = None
    q_type: str
    options: list[ChoiceOption] | None = None
    marks: int

    class Config:
        from_attributes = True


class QuestionDetailResponse(QuestionResponse):
    """Returned to the teacher or admin who created the question."""
    answer: str | None = None


class ChoiceAnswer(BaseModel):
    kind: Literal["choice"] = "choice"
    option: str


class TextAnswer(BaseModel):
    kind: Literal["text"] = "text"
    text: str


SubmittedAnswer = Annotated[Union[ChoiceAnswer, TextAnswer], Field(discriminator="kind")]


class ExamSubmitRequest(BaseModel):
    # Keys are question ids as sent; they are not checked against the exam.
    answers: dict[str, SubmittedAnswer] = Field(default_factory=dict)

    @field_validator("answers", mode="before")
    @classmethod
    def bare_strings_are_text(cls, v):
        if isinstance(v, dict):
            return {str(k): ({"kind": "text", "text": a} if isinstance(a, str) else a) for k, a in v.items()}
        return v
