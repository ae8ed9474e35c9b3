from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from api.assignments.assignments_schema import NextSubmissionResponse
from api.assignments.assignments_service import AssignmentService
from api.submissions.submissions_schema import SubmissionProjection


class AssignmentController:
    @staticmethod
    def get_next(
        db: Session,
        current_user_id: int,
        last_submission_id: Optional[UUID] = None
    ) -> NextSubmissionResponse:
        submission = AssignmentService(db).get_next(current_user_id, last_submission_id)
        if submission is None:
            return NextSubmissionResponse(available=False)
        return NextSubmissionResponse(
            available=True,
            submission=SubmissionProjection.model_validate(submission),
        )
