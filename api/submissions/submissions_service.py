# api/submissions/submissions_service.py

import logging
from typing import List, Optional, Sequence
from uuid import UUID
from sqlalchemy.orm import Session, selectinload

from api.submissions.submissions_model import Submission, SubmissionType, SubmissionStatus
from utils.exceptions import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)


def _coerce_type(value) -> SubmissionType:
    if isinstance(value, SubmissionType):
        return value
    try:
        return SubmissionType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in SubmissionType)
        raise InvalidRequestError(f"type must be one of: {allowed}")


class SubmissionService:
    """
    Durable store for reviewee submissions. Status is only changed through
    update_status, which the moderation service calls after recomputing.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_submission(
        self,
        owner_id: int,
        title: str,
        type,
        additional_info: Optional[str],
        image_urls: Sequence[str],
    ) -> Submission:
        submission_type = _coerce_type(type)
        urls = [u.strip() for u in (image_urls or []) if u and u.strip()]
        if not urls:
            raise InvalidRequestError("image_urls must contain at least one URL")
        if not title or not title.strip():
            raise InvalidRequestError("title must not be empty")

        submission = Submission(
            owner_id=owner_id,
            title=title.strip(),
            type=submission_type,
            additional_info=additional_info or "",
            image_urls=urls,
            status=SubmissionStatus.PENDING,
        )
        self.db.add(submission)
        self.db.commit()
        self.db.refresh(submission)
        logger.info("submission %s created by user %s", submission.id, owner_id)
        return submission

    def get_submission(self, submission_id: UUID, for_update: bool = False) -> Submission:
        submission = self.db.get(Submission, submission_id, with_for_update=for_update)
        if not submission:
            raise NotFoundError(f"Submission {submission_id} not found")
        return submission

    def list_by_owner(self, owner_id: int) -> List[Submission]:
        return (
            self.db.query(Submission)
            .options(selectinload(Submission.interactions))
            .filter(Submission.owner_id == owner_id)
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .all()
        )

    def lock_many(self, submission_ids: Sequence[UUID]) -> List[Submission]:
        """
        Load and row-lock several submissions in id order, so concurrent
        lockers always queue in the same sequence.
        """
        if not submission_ids:
            return []
        return (
            self.db.query(Submission)
            .filter(Submission.id.in_(list(submission_ids)))
            .order_by(Submission.id)
            .with_for_update()
            .all()
        )

    def update_status(self, submission_id: UUID, new_status: SubmissionStatus) -> None:
        submission = self.get_submission(submission_id)
        submission.status = new_status
        self.db.flush()

    def delete_submission(self, submission_id: UUID, owner_id: int) -> None:
        """
        Owner-only delete. Interactions go with it (ORM cascade + FK ON DELETE CASCADE).
        Someone else's submission is reported as not found.
        """
        submission = self.db.get(Submission, submission_id)
        if not submission or submission.owner_id != owner_id:
            raise NotFoundError(f"Submission {submission_id} not found")
        self.db.delete(submission)
        self.db.commit()
        logger.info("submission %s deleted by owner %s", submission_id, owner_id)
