from typing import Any, List, Mapping

from pydantic import ValidationError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from practice_tracker.config import Config
from practice_tracker.errors import ValidationException

from .assembler import iter_problems
from .model import SolvedStatus, Submission
from .schemas import ProblemRecord, SubmissionForm

REQUIRED_FIELDS = ("name", "date", "solvedStatus")


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"]) or "body"
    return f"{location}: {error['msg']}"


class SubmissionService:
    @staticmethod
    def build_submission(
        payload: Mapping[str, Any],
        max_problems: int = Config.MAX_PROBLEMS_PER_SUBMISSION,
    ) -> Submission:
        """
        Turn a flat submit payload into an unsaved Submission.

        Raises ValidationException when a required field is missing, a field
        has the wrong type, ``problemCount`` exceeds ``max_problems``, or an
        embedded problem is incomplete. Problems are decoded one at a time and
        decoding stops at the first invalid one.
        """
        if any(not payload.get(field) for field in REQUIRED_FIELDS):
            raise ValidationException(detail="Required fields are missing")

        try:
            form = SubmissionForm.model_validate(payload)
        except ValidationError as exc:
            raise ValidationException(detail=f"Invalid submission: {_first_error(exc)}")

        if form.problem_count > max_problems:
            raise ValidationException(
                detail=f"problemCount must not exceed {max_problems}"
            )

        problems: List[ProblemRecord] = []
        try:
            for draft in iter_problems(
                payload, form.problem_count, form.solved_status
            ):
                problems.append(
                    ProblemRecord.model_validate(draft.model_dump(exclude_none=True))
                )
        except ValidationError as exc:
            raise ValidationException(
                detail=f"Invalid problem {len(problems) + 1}: {_first_error(exc)}"
            )

        if form.solved_status == SolvedStatus.NO:
            why_not = form.why_not or ""
        else:
            why_not = ""

        return Submission(
            name=form.name,
            date=form.date,
            solved_status=form.solved_status,
            problem_count=form.problem_count,
            problems=[problem.model_dump() for problem in problems],
            why_not=why_not,
        )

    @staticmethod
    async def create_submission(
        payload: Mapping[str, Any], session: AsyncSession
    ) -> Submission:
        submission = SubmissionService.build_submission(payload)

        session.add(submission)
        await session.commit()
        await session.refresh(submission)

        return submission

    @staticmethod
    async def list_submissions(session: AsyncSession) -> List[Submission]:
        statement = select(Submission).order_by(Submission.created_at)
        result = await session.exec(statement)
        return list(result.all())
