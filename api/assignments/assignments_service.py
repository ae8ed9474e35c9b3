# api/assignments/assignments_service.py

import logging
from typing import Optional
from uuid import UUID
from sqlalchemy import and_, or_, exists
from sqlalchemy.orm import Session, joinedload

from api.submissions.submissions_model import Submission, SubmissionStatus
from api.interactions.interactions_model import ReviewerInteraction
from api.interactions.interactions_service import InteractionLedger
from utils.exceptions import InvalidRequestError

logger = logging.getLogger(__name__)


class AssignmentService:
    """
    Hands a reviewer the oldest submission they have not been given yet.

    Order is (created_at, id) ascending. Selection and the seen-marking are
    separate statements; the upsert in InteractionLedger.mark_seen is the
    compare-and-set that decides which concurrent request gets a candidate.
    A request that loses simply moves to the next candidate.
    """

    def __init__(self, db: Session):
        self.db = db
        self.ledger = InteractionLedger(db)

    def _eligible_query(self, reviewer_id: int, cursor: Optional[Submission]):
        already_handled = exists().where(
            ReviewerInteraction.submission_id == Submission.id,
            ReviewerInteraction.reviewer_id == reviewer_id,
            or_(
                ReviewerInteraction.seen == True,  # noqa: E712
                ReviewerInteraction.flag.isnot(None),
            ),
        )
        query = (
            self.db.query(Submission)
            .options(joinedload(Submission.owner))
            .filter(
                Submission.owner_id != reviewer_id,
                Submission.status != SubmissionStatus.REJECTED,
                ~already_handled,
            )
        )
        if cursor is not None:
            query = query.filter(
                or_(
                    Submission.created_at > cursor.created_at,
                    and_(
                        Submission.created_at == cursor.created_at,
                        Submission.id > cursor.id,
                    ),
                )
            )
        return query.order_by(Submission.created_at.asc(), Submission.id.asc())

    def get_next(self, reviewer_id: int, cursor_id: Optional[UUID] = None) -> Optional[Submission]:
        """
        Returns the assigned submission, or None when nothing is left for
        this reviewer (past the cursor, if one was given).
        """
        cursor = None
        if cursor_id is not None:
            cursor = self.db.get(Submission, cursor_id)
            if cursor is None:
                raise InvalidRequestError(f"Unknown cursor submission {cursor_id}")

        query = self._eligible_query(reviewer_id, cursor)
        lost = []
        try:
            while True:
                candidates = query
                if lost:
                    candidates = candidates.filter(Submission.id.notin_(lost))
                candidate = candidates.first()
                if candidate is None:
                    self.db.commit()
                    logger.info("reviewer %s: no submissions available", reviewer_id)
                    return None

                if self.ledger.mark_seen(candidate.id, reviewer_id):
                    self.db.commit()
                    logger.info("reviewer %s assigned submission %s", reviewer_id, candidate.id)
                    return candidate

                # another request for this reviewer marked it first
                logger.debug("reviewer %s lost race for submission %s", reviewer_id, candidate.id)
                lost.append(candidate.id)
        except Exception:
            self.db.rollback()
            raise
