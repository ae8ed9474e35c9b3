# api/admin/admin_service.py

import logging
from sqlalchemy.orm import Session

from api.submissions.submissions_service import SubmissionService
from api.interactions.interactions_schema import ClearFilters, ClearSummary
from api.interactions.interactions_service import InteractionLedger
from api.moderation.moderation_service import ModerationService

logger = logging.getLogger(__name__)


class AdminResetService:
    def __init__(self, db: Session):
        self.db = db
        self.ledger = InteractionLedger(db)
        self.submissions = SubmissionService(db)
        self.moderation = ModerationService(db)

    def clear_reviewer_from_all(
        self,
        reviewer_id: int,
        seen: bool = False,
        review: bool = False,
        inappropriate_flag: bool = False,
        needs_more_context_flag: bool = False,
        skipped_flag: bool = False,
    ) -> ClearSummary:
        """
        Wipe the selected facts from every interaction of one reviewer, then
        bring the touched submissions' counters and status back in line.
        Other reviewers' rows are never matched.
        """
        filters = ClearFilters(
            seen=seen,
            review=review,
            inappropriate_flag=inappropriate_flag,
            needs_more_context_flag=needs_more_context_flag,
            skipped_flag=skipped_flag,
        )
        # only outcome changes can move counters or status
        recompute = review or inappropriate_flag or needs_more_context_flag or skipped_flag
        try:
            submissions = []
            if recompute:
                touched = self.ledger.submission_ids_for_reviewer(reviewer_id)
                # submission rows before ledger rows, same order as moderation
                submissions = self.submissions.lock_many(touched)

            summary = self.ledger.clear_for_reviewer(reviewer_id, filters)

            if submissions:
                self.moderation.recompute_many(submissions)
                summary.submissions_recomputed = len(submissions)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "cleared reviewer %s: seen=%s review=%s inappropriate=%s needs_context=%s skipped=%s removed=%s",
            reviewer_id, summary.seen, summary.review, summary.inappropriate_flag,
            summary.needs_more_context_flag, summary.skipped_flag, summary.removed,
        )
        return summary
