# api/moderation/status_policy.py
"""
Submission lifecycle as a pure function of its aggregated interactions.

    PENDING ──(any review / non-skip flag)──▶ IN_REVIEW
    IN_REVIEW ──(reviews >= publish threshold)──▶ PUBLISHED
    any ──(inappropriate flags >= reject threshold)──▶ REJECTED

Rejection wins over publication. Skip flags never move the status.
Nothing in here touches the database.
"""
from dataclasses import dataclass

from api.submissions.submissions_model import SubmissionStatus


@dataclass(frozen=True)
class InteractionStats:
    reviews: int = 0
    inappropriate: int = 0
    needs_more_context: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class ModerationThresholds:
    publish_reviews: int = 3
    reject_flags: int = 3

    @classmethod
    def from_settings(cls, settings=None) -> "ModerationThresholds":
        if settings is None:
            from config.settings import settings
        return cls(
            publish_reviews=settings.PUBLISH_REVIEW_THRESHOLD,
            reject_flags=settings.REJECT_FLAG_THRESHOLD,
        )


def derive_status(stats: InteractionStats, thresholds: ModerationThresholds) -> SubmissionStatus:
    if stats.inappropriate >= thresholds.reject_flags:
        return SubmissionStatus.REJECTED
    if stats.reviews >= thresholds.publish_reviews:
        return SubmissionStatus.PUBLISHED
    if stats.reviews or stats.inappropriate or stats.needs_more_context:
        return SubmissionStatus.IN_REVIEW
    return SubmissionStatus.PENDING
