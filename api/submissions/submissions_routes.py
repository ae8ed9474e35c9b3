from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.role_middleware import role_middleware
from api.roles.roles_model import RoleName
from api.submissions.submissions_schema import (
    SubmissionCreate, SubmissionAck, SubmissionWithReviews
)
from api.submissions.submissions_controller import SubmissionController

router = APIRouter(prefix="/text_msgs", tags=["Submissions"])

reviewee_only = role_middleware([RoleName.REVIEWEE])


@router.post(
    "/submit",
    response_model=SubmissionAck,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a chat screenshot or dating profile for review"
)
def submit_text_msg(
    payload: SubmissionCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(reviewee_only)
) -> SubmissionAck:
    return SubmissionController.submit(payload, db, current_user["id"])


@router.get(
    "/mine",
    response_model=List[SubmissionWithReviews],
    summary="List my past submissions with the reviews they received"
)
def list_my_text_msgs(
    db: Session = Depends(get_db),
    current_user: dict = Depends(reviewee_only)
) -> List[SubmissionWithReviews]:
    return SubmissionController.list_mine(db, current_user["id"])


@router.delete(
    "/{submission_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one of my submissions (and every review of it)"
)
def delete_text_msg(
    submission_id: UUID,
    db: Session = Depends(get_db),
    current_user: dict = Depends(reviewee_only)
):
    SubmissionController.delete(submission_id, db, current_user["id"])
    return None
