from uuid import UUID
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.role_middleware import role_middleware
from api.roles.roles_model import RoleName
from api.moderation.moderation_schema import ReviewCreate, FlagCreate, ModerationResult
from api.moderation.moderation_controller import ModerationController

router = APIRouter(prefix="/text_msgs", tags=["Moderation"])

reviewer_only = role_middleware([RoleName.REVIEWER])


@router.post(
    "/{submission_id}/review",
    response_model=ModerationResult,
    summary="Record a review for a submission handed out by /next"
)
def review_text_msg(
    submission_id: UUID,
    payload: ReviewCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: dict = Depends(reviewer_only)
) -> ModerationResult:
    return ModerationController.review(submission_id, payload, background_tasks, db, current_user["id"])


@router.post(
    "/{submission_id}/flag",
    response_model=ModerationResult,
    summary="Flag a submission as inappropriate, needing more context, or skip it"
)
def flag_text_msg(
    submission_id: UUID,
    payload: FlagCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: dict = Depends(reviewer_only)
) -> ModerationResult:
    return ModerationController.flag(submission_id, payload, background_tasks, db, current_user["id"])
