# api/moderation/moderation_service.py

import logging
from typing import Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session

from api.submissions.submissions_model import Submission, SubmissionStatus
from api.submissions.submissions_service import SubmissionService
from api.interactions.interactions_model import ReviewerInteraction
from api.interactions.interactions_service import InteractionLedger
from api.moderation.status_policy import ModerationThresholds, derive_status

logger = logging.getLogger(__name__)


class ModerationService:
    """
    Review and flag actions. Each call is one transaction: ledger write,
    counter/status recomputation, commit. A second outcome for the same
    reviewer/submission pair raises ConflictError from the ledger.
    """

    def __init__(self, db: Session, thresholds: Optional[ModerationThresholds] = None):
        self.db = db
        self.ledger = InteractionLedger(db)
        self.submissions = SubmissionService(db)
        self.thresholds = thresholds or ModerationThresholds.from_settings()

    def recompute_status(self, submission: Submission) -> Tuple[SubmissionStatus, SubmissionStatus]:
        """
        Refresh the aggregate counters from the ledger and apply the status
        reducer. Returns (previous, current). Does not commit.
        """
        stats = self.ledger.stats_for([submission.id])[submission.id]
        return self._apply_stats(submission, stats)

    def recompute_many(self, submissions) -> int:
        """
        Batch form of recompute_status: one grouped ledger query for all of
        them. Returns how many changed status. Does not commit.
        """
        stats = self.ledger.stats_for([s.id for s in submissions])
        changed = 0
        for submission in submissions:
            previous, current = self._apply_stats(submission, stats[submission.id])
            changed += previous != current
        return changed

    def _apply_stats(self, submission: Submission, stats) -> Tuple[SubmissionStatus, SubmissionStatus]:
        previous = submission.status
        current = derive_status(stats, self.thresholds)

        submission.review_count = stats.reviews
        submission.inappropriate_count = stats.inappropriate
        submission.needs_context_count = stats.needs_more_context
        if current != previous:
            self.submissions.update_status(submission.id, current)
        self.db.flush()
        return previous, current

    def _apply(self, submission_id: UUID, record) -> Tuple[ReviewerInteraction, Submission, SubmissionStatus]:
        try:
            # row lock serialises counter recomputation per submission (no-op on sqlite)
            submission = self.submissions.get_submission(submission_id, for_update=True)
            interaction = record()
            previous, _ = self.recompute_status(submission)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(interaction)
        return interaction, submission, previous

    def review_submission(
        self, reviewer_id: int, submission_id: UUID, content: str
    ) -> Tuple[ReviewerInteraction, Submission, SubmissionStatus]:
        interaction, submission, previous = self._apply(
            submission_id,
            lambda: self.ledger.record_review(submission_id, reviewer_id, content),
        )
        # review text stays out of the logs
        logger.info(
            "reviewer %s reviewed submission %s (status %s -> %s)",
            reviewer_id, submission_id, previous.value, submission.status.value,
        )
        return interaction, submission, previous

    def flag_submission(
        self, reviewer_id: int, submission_id: UUID, category
    ) -> Tuple[ReviewerInteraction, Submission, SubmissionStatus]:
        interaction, submission, previous = self._apply(
            submission_id,
            lambda: self.ledger.record_flag(submission_id, reviewer_id, category),
        )
        logger.info(
            "reviewer %s flagged submission %s as %s (status %s -> %s)",
            reviewer_id, submission_id, interaction.flag.value,
            previous.value, submission.status.value,
        )
        return interaction, submission, previous
