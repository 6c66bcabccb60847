from enum import Enum
from typing import Any, Dict, List

from sqlalchemy import JSON, Column, String
from sqlalchemy import Enum as SQLEnum
from sqlmodel import Field

from practice_tracker.db.model import BaseModel


class SolvedStatus(str, Enum):
    YES = "yes"
    NO = "no"


class Submission(BaseModel, table=True):
    """
    One daily practice record. Solved problems are embedded in the row as a
    JSON list and have no identity of their own.
    """

    __tablename__ = "submissions"

    name: str = Field(sa_column=Column(String(255), nullable=False))
    date: str = Field(sa_column=Column(String(64), nullable=False))
    solved_status: SolvedStatus = Field(
        sa_column=Column(
            SQLEnum(
                SolvedStatus,
                values_callable=lambda statuses: [s.value for s in statuses],
            ),
            nullable=False,
        )
    )
    problem_count: int = Field(default=0, nullable=False)
    problems: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    why_not: str = Field(default="", nullable=False)

    def __repr__(self):
        return f"<Submission {self.name} {self.date} ({self.solved_status})>"
