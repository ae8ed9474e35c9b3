# api/interactions/interactions_service.py
"""
Reviewer interaction ledger.

Every write here is a single statement keyed by (submission_id, reviewer_id)
or by reviewer_id, so concurrent requests are arbitrated by the database
rather than by read-then-write in python. Methods flush but never commit:
the calling service owns the transaction.
"""

import logging
from typing import Dict, Iterable, Optional
from uuid import UUID
from sqlalchemy import update, delete, func, case
from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite

from api.interactions.interactions_model import ReviewerInteraction, FlagCategory
from api.interactions.interactions_schema import ClearFilters, ClearSummary
from api.moderation.status_policy import InteractionStats
from api.submissions.submissions_model import utcnow
from utils.exceptions import NotFoundError, ConflictError, InvalidRequestError

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

# admin switch name -> flag value it clears
_FLAG_SWITCHES = {
    "inappropriate_flag": FlagCategory.inappropriate,
    "needs_more_context_flag": FlagCategory.needs_more_context,
    "skipped_flag": FlagCategory.skip,
}


def _coerce_flag(value) -> FlagCategory:
    if isinstance(value, FlagCategory):
        return value
    try:
        return FlagCategory(value)
    except ValueError:
        allowed = ", ".join(c.value for c in FlagCategory)
        raise InvalidRequestError(f"category must be one of: {allowed}")


class InteractionLedger:
    def __init__(self, db: Session):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise RuntimeError(f"No atomic upsert available for dialect {dialect!r}")

    def get_interaction(self, submission_id: UUID, reviewer_id: int) -> Optional[ReviewerInteraction]:
        return (
            self.db.query(ReviewerInteraction)
            .filter_by(submission_id=submission_id, reviewer_id=reviewer_id)
            .one_or_none()
        )

    def mark_seen(self, submission_id: UUID, reviewer_id: int) -> bool:
        """
        Insert-or-flip the seen bit for this pair.

        Returns True only when this call is the one that moved the pair to
        seen=True; False means it was already seen (possibly by a concurrent
        request for the same reviewer).
        """
        now = utcnow()
        stmt = self._insert()(ReviewerInteraction).values(
            submission_id=submission_id,
            reviewer_id=reviewer_id,
            seen=True,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["submission_id", "reviewer_id"],
            set_={"seen": True, "updated_at": now},
            where=ReviewerInteraction.seen == False,  # noqa: E712
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1

    def _record_outcome(self, submission_id: UUID, reviewer_id: int, values: dict) -> ReviewerInteraction:
        interaction = self.get_interaction(submission_id, reviewer_id)
        if interaction is None or not interaction.seen:
            raise NotFoundError(
                f"Submission {submission_id} has not been assigned to reviewer {reviewer_id}"
            )
        if interaction.has_outcome:
            raise ConflictError(
                f"Reviewer {reviewer_id} already reviewed or flagged submission {submission_id}"
            )

        # conditional update: only the first writer for the pair matches
        result = self.db.execute(
            update(ReviewerInteraction)
            .where(
                ReviewerInteraction.id == interaction.id,
                ReviewerInteraction.review.is_(None),
                ReviewerInteraction.flag.is_(None),
            )
            .values(updated_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ConflictError(
                f"Reviewer {reviewer_id} already reviewed or flagged submission {submission_id}"
            )
        self.db.refresh(interaction)
        return interaction

    def record_review(self, submission_id: UUID, reviewer_id: int, content: str) -> ReviewerInteraction:
        if not content or not content.strip():
            raise InvalidRequestError("review content must not be empty")
        return self._record_outcome(
            submission_id,
            reviewer_id,
            {"review": content.strip(), "reviewed_at": utcnow()},
        )

    def record_flag(self, submission_id: UUID, reviewer_id: int, category) -> ReviewerInteraction:
        flag = _coerce_flag(category)
        return self._record_outcome(
            submission_id,
            reviewer_id,
            {"flag": flag, "flagged_at": utcnow()},
        )

    def submission_ids_for_reviewer(self, reviewer_id: int) -> list:
        rows = (
            self.db.query(ReviewerInteraction.submission_id)
            .filter(ReviewerInteraction.reviewer_id == reviewer_id)
            .all()
        )
        return [sid for (sid,) in rows]

    def clear_for_reviewer(self, reviewer_id: int, filters: ClearFilters) -> ClearSummary:
        """
        One bulk UPDATE per selected switch, each scoped to reviewer_id.
        Rows left with nothing recorded afterwards are deleted.
        """
        summary = ClearSummary(reviewer_id=reviewer_id)
        scoped = ReviewerInteraction.reviewer_id == reviewer_id
        now = utcnow()

        def _bulk(where, values) -> int:
            result = self.db.execute(
                update(ReviewerInteraction)
                .where(scoped, where)
                .values(updated_at=now, **values)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        if filters.seen:
            summary.seen = _bulk(ReviewerInteraction.seen == True, {"seen": False})  # noqa: E712
        if filters.review:
            summary.review = _bulk(
                ReviewerInteraction.review.isnot(None),
                {"review": None, "reviewed_at": None},
            )
        for switch, flag in _FLAG_SWITCHES.items():
            if getattr(filters, switch):
                setattr(summary, switch, _bulk(
                    ReviewerInteraction.flag == flag,
                    {"flag": None, "flagged_at": None},
                ))

        if filters.any_selected():
            result = self.db.execute(
                delete(ReviewerInteraction)
                .where(
                    scoped,
                    ReviewerInteraction.seen == False,  # noqa: E712
                    ReviewerInteraction.review.is_(None),
                    ReviewerInteraction.flag.is_(None),
                )
                .execution_options(synchronize_session=False)
            )
            summary.removed = result.rowcount
        self.db.expire_all()
        return summary

    def stats_for(self, submission_ids: Iterable[UUID]) -> Dict[UUID, InteractionStats]:
        """
        Aggregate review/flag counts per submission in one grouped query.
        Submissions without interactions map to empty stats.
        """
        ids = list(submission_ids)
        if not ids:
            return {}

        def _count_flag(flag):
            return func.coalesce(func.sum(case((ReviewerInteraction.flag == flag, 1), else_=0)), 0)

        rows = (
            self.db.query(
                ReviewerInteraction.submission_id,
                func.count(ReviewerInteraction.review),
                _count_flag(FlagCategory.inappropriate),
                _count_flag(FlagCategory.needs_more_context),
                _count_flag(FlagCategory.skip),
            )
            .filter(ReviewerInteraction.submission_id.in_(ids))
            .group_by(ReviewerInteraction.submission_id)
            .all()
        )
        stats = {sid: InteractionStats() for sid in ids}
        for sid, reviews, inappropriate, needs_context, skipped in rows:
            stats[sid] = InteractionStats(
                reviews=int(reviews),
                inappropriate=int(inappropriate),
                needs_more_context=int(needs_context),
                skipped=int(skipped),
            )
        return stats
