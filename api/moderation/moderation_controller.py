from typing import Optional
from uuid import UUID
from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from api.moderation.moderation_schema import (
    ReviewCreate, FlagCreate, ModerationResult
)
from api.moderation.moderation_service import ModerationService
from api.interactions.interactions_schema import InteractionView
from api.notifications.notifications_service import (
    notify, review_submitted, submission_status_changed
)


class ModerationController:
    @staticmethod
    def _result(
        interaction,
        submission,
        previous,
        background_tasks: Optional[BackgroundTasks] = None
    ) -> ModerationResult:
        # signals go out after commit; listeners never fail the request
        if submission.status != previous:
            notify(
                submission_status_changed,
                ModerationController,
                submission_id=submission.id,
                previous=previous,
                current=submission.status,
                background_tasks=background_tasks,
            )
        return ModerationResult(
            interaction=InteractionView.model_validate(interaction),
            submission_status=submission.status,
        )

    @staticmethod
    def review(
        submission_id: UUID,
        payload: ReviewCreate,
        background_tasks: Optional[BackgroundTasks],
        db: Session,
        current_user_id: int
    ) -> ModerationResult:
        interaction, submission, previous = ModerationService(db).review_submission(
            reviewer_id=current_user_id,
            submission_id=submission_id,
            content=payload.content,
        )
        notify(
            review_submitted,
            ModerationController,
            submission_id=submission.id,
            reviewer_id=current_user_id,
            background_tasks=background_tasks,
        )
        return ModerationController._result(interaction, submission, previous, background_tasks)

    @staticmethod
    def flag(
        submission_id: UUID,
        payload: FlagCreate,
        background_tasks: Optional[BackgroundTasks],
        db: Session,
        current_user_id: int
    ) -> ModerationResult:
        interaction, submission, previous = ModerationService(db).flag_submission(
            reviewer_id=current_user_id,
            submission_id=submission_id,
            category=payload.category,
        )
        return ModerationController._result(interaction, submission, previous, background_tasks)
