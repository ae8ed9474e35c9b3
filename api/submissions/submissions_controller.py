from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from api.submissions.submissions_schema import (
    SubmissionCreate, SubmissionAck, SubmissionWithReviews, ReviewRead
)
from api.submissions.submissions_service import SubmissionService


class SubmissionController:
    @staticmethod
    def submit(
        payload: SubmissionCreate,
        db: Session,
        current_user_id: int
    ) -> SubmissionAck:
        svc = SubmissionService(db)
        submission = svc.create_submission(
            owner_id=current_user_id,
            title=payload.title,
            type=payload.type,
            additional_info=payload.additional_info,
            image_urls=payload.image_urls,
        )
        return SubmissionAck.model_validate(submission)

    @staticmethod
    def list_mine(
        db: Session,
        current_user_id: int
    ) -> List[SubmissionWithReviews]:
        svc = SubmissionService(db)
        out = []
        for s in svc.list_by_owner(current_user_id):
            # only review text goes back to the owner; reviewer ids and flags stay private
            reviews = sorted(
                (i for i in s.interactions if i.review is not None),
                key=lambda i: (i.reviewed_at is None, i.reviewed_at),
            )
            item = SubmissionWithReviews.model_validate(s)
            item.reviews = [ReviewRead(content=i.review, reviewed_at=i.reviewed_at) for i in reviews]
            out.append(item)
        return out

    @staticmethod
    def delete(
        submission_id: UUID,
        db: Session,
        current_user_id: int
    ) -> None:
        SubmissionService(db).delete_submission(submission_id, current_user_id)
