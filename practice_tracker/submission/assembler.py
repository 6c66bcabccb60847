"""
Decoding of the flat submit form into a list of problems.

The submit form carries a variable number of problems as flat, indexed keys.
Field ``f`` of the i-th problem (1-based) is sent under ``f"{prefix}_{i}"``,
where ``prefix`` comes from PROBLEM_KEY_PREFIXES. For example a form with
``problemCount=2`` holds ``problem_title_1``, ``problem_link_1``, ...,
``problem_title_2``, ``problem_link_2``, ... .
"""

import math
import re
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from pydantic import BaseModel, field_validator

from .model import SolvedStatus

PROBLEM_KEY_PREFIXES: Dict[str, str] = {
    "title": "problem_title",
    "link": "problem_link",
    "tags": "tags",
    "source_code": "source_code",
    "how_solved": "how_solved",
    "rating": "problem_rating",
}

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class ProblemDraft(BaseModel):
    """A problem as decoded from indexed form keys, before validation."""

    title: Optional[str] = None
    link: Optional[str] = None
    tags: Optional[str] = None
    source_code: Optional[str] = None
    how_solved: Optional[str] = None
    rating: Optional[Union[float, str]] = None

    @field_validator("rating", mode="before")
    @classmethod
    def reject_boolean_rating(cls, value):
        if isinstance(value, bool):
            raise ValueError("rating must be a number")
        return value


def indexed_key(prefix: str, index: int) -> str:
    return f"{prefix}_{index}"


def parse_problem_count(value: Any) -> int:
    """
    Coerce a caller-supplied problem count to a non-negative integer.

    Integers and floats are truncated, strings are read up to the first
    non-digit (so ``"3"`` and ``"3 problems"`` both give 3). Negative
    numbers clamp to 0 and anything non-numeric gives 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return max(int(match.group()), 0)
    return 0


def decode_problem(form: Mapping[str, Any], index: int) -> ProblemDraft:
    return ProblemDraft(
        **{
            field: form.get(indexed_key(prefix, index))
            for field, prefix in PROBLEM_KEY_PREFIXES.items()
        }
    )


def iter_problems(
    form: Mapping[str, Any],
    problem_count: int,
    solved_status: Union[SolvedStatus, str],
) -> Iterator[ProblemDraft]:
    """
    Yield the problems of a submission in index order, one at a time.

    Only a solved submission carries problems; for any other status nothing
    is yielded whatever ``problem_count`` says. Keys missing from the form
    leave the matching draft field as None.
    """
    if solved_status != SolvedStatus.YES:
        return

    for index in range(1, problem_count + 1):
        yield decode_problem(form, index)


def assemble_problems(
    form: Mapping[str, Any],
    problem_count: int,
    solved_status: Union[SolvedStatus, str],
) -> List[ProblemDraft]:
    return list(iter_problems(form, problem_count, solved_status))
