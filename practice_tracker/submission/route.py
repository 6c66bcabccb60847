from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from practice_tracker.config import logger
from practice_tracker.db.main import get_session
from practice_tracker.errors import DatabaseException, ValidationException
from practice_tracker.schemas import MessageResponse

from .schemas import SubmissionResponse
from .service import SubmissionService

# Create a module-specific logger
submission_logger = logger.getChild("submission")

submission_router = APIRouter(tags=["submissions"])


def get_submission_service() -> SubmissionService:
    return SubmissionService()


@submission_router.post(
    "/submit", response_model=MessageResponse, status_code=status.HTTP_201_CREATED
)
async def submit(
    payload: Dict[str, Any] = Body(...),
    submission_service: SubmissionService = Depends(get_submission_service),
    session: AsyncSession = Depends(get_session),
):
    """
    Store one daily practice record.

    Problems are sent as flat indexed keys (``problem_title_1``,
    ``problem_link_1``, ...) next to ``problemCount``.
    """
    submission_logger.info(
        f"Submission received: name={payload.get('name')}, date={payload.get('date')}, "
        f"solvedStatus={payload.get('solvedStatus')}"
    )

    try:
        submission = await submission_service.create_submission(payload, session)
    except ValidationException as exc:
        submission_logger.warning(f"Submission rejected: {exc.detail}")
        raise
    except SQLAlchemyError as db_error:
        submission_logger.error(f"Database error saving submission: {str(db_error)}")
        raise DatabaseException(detail="Server error while saving submission")

    submission_logger.info(
        f"Submission stored: ID {submission.id} with {len(submission.problems)} problems"
    )
    return {"message": "Submission stored successfully"}


@submission_router.get("/submissions", response_model=List[SubmissionResponse])
async def list_submissions(
    submission_service: SubmissionService = Depends(get_submission_service),
    session: AsyncSession = Depends(get_session),
):
    try:
        submissions = await submission_service.list_submissions(session)
    except SQLAlchemyError as db_error:
        submission_logger.error(f"Database error fetching submissions: {str(db_error)}")
        raise DatabaseException(detail="Failed to fetch submissions")

    submission_logger.info(f"Retrieved {len(submissions)} submissions")
    return submissions
