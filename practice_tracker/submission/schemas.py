import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from practice_tracker.schemas import CamelModel

from .assembler import parse_problem_count
from .model import SolvedStatus


class ProblemRecord(CamelModel):
    """A validated problem as stored inside a submission."""

    title: str = Field(..., min_length=1)
    link: str = Field(..., min_length=1)
    tags: str = ""
    source_code: str = Field(..., min_length=1)
    how_solved: str = ""
    rating: float = Field(0, allow_inf_nan=False)

    @field_validator("rating", mode="before")
    @classmethod
    def blank_rating_is_zero(cls, value):
        if isinstance(value, bool):
            raise ValueError("rating must be a number")
        if value is None:
            return 0
        if isinstance(value, str) and not value.strip():
            return 0
        return value


class SubmissionForm(CamelModel):
    """The fixed fields of a submit request; indexed problem keys ride along as extras."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    solved_status: SolvedStatus
    problem_count: int = 0
    why_not: Optional[str] = None

    @field_validator("problem_count", mode="before")
    @classmethod
    def coerce_problem_count(cls, value):
        return parse_problem_count(value)


class SubmissionResponse(CamelModel):
    id: uuid.UUID
    name: str
    date: str
    solved_status: SolvedStatus
    problem_count: int
    problems: List[ProblemRecord]
    why_not: str
    created_at: datetime
    updated_at: datetime
