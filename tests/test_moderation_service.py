"""Review and flag actions move counters and status through the thresholds."""

from __future__ import annotations

import pytest

from api.assignments.assignments_service import AssignmentService
from api.moderation.moderation_service import ModerationService
from api.moderation.status_policy import ModerationThresholds
from api.submissions.submissions_model import SubmissionStatus
from utils.exceptions import ConflictError, NotFoundError

THRESHOLDS = ModerationThresholds(publish_reviews=2, reject_flags=2)


@pytest.fixture
def assigned(db, make_user):
    """Reviewers that have each been handed the given submission."""

    def _assigned(submission, count: int):
        reviewers = [make_user() for _ in range(count)]
        for r in reviewers:
            assert AssignmentService(db).get_next(r.id).id == submission.id
        return reviewers

    return _assigned


def test_reviews_publish_at_threshold(db, make_user, make_submission, assigned) -> None:
    submission = make_submission(make_user())
    first, second = assigned(submission, 2)
    svc = ModerationService(db, THRESHOLDS)

    interaction, updated, previous = svc.review_submission(first.id, submission.id, "good opener")
    assert previous is SubmissionStatus.PENDING
    assert updated.status is SubmissionStatus.IN_REVIEW
    assert updated.review_count == 1
    assert interaction.review == "good opener"

    _, updated, previous = svc.review_submission(second.id, submission.id, "agree")
    assert previous is SubmissionStatus.IN_REVIEW
    assert updated.status is SubmissionStatus.PUBLISHED
    assert updated.review_count == 2


def test_inappropriate_flags_reject(db, make_user, make_submission, assigned) -> None:
    submission = make_submission(make_user())
    first, second = assigned(submission, 2)
    svc = ModerationService(db, THRESHOLDS)

    svc.flag_submission(first.id, submission.id, "inappropriate")
    _, updated, _ = svc.flag_submission(second.id, submission.id, "inappropriate")

    assert updated.inappropriate_count == 2
    assert updated.status is SubmissionStatus.REJECTED


def test_skip_leaves_status_alone(db, make_user, make_submission, assigned) -> None:
    submission = make_submission(make_user())
    (reviewer,) = assigned(submission, 1)

    interaction, updated, previous = ModerationService(db, THRESHOLDS).flag_submission(
        reviewer.id, submission.id, "skip"
    )

    assert interaction.flag.value == "skip"
    assert previous is updated.status is SubmissionStatus.PENDING
    assert updated.review_count == updated.inappropriate_count == updated.needs_context_count == 0


def test_needs_context_moves_to_in_review(db, make_user, make_submission, assigned) -> None:
    submission = make_submission(make_user())
    (reviewer,) = assigned(submission, 1)

    _, updated, _ = ModerationService(db, THRESHOLDS).flag_submission(
        reviewer.id, submission.id, "needs-more-context"
    )

    assert updated.needs_context_count == 1
    assert updated.status is SubmissionStatus.IN_REVIEW


def test_repeat_outcome_conflicts_and_keeps_counters(db, make_user, make_submission, assigned) -> None:
    submission = make_submission(make_user())
    (reviewer,) = assigned(submission, 1)
    svc = ModerationService(db, THRESHOLDS)
    svc.review_submission(reviewer.id, submission.id, "first")

    with pytest.raises(ConflictError):
        svc.review_submission(reviewer.id, submission.id, "second")
    with pytest.raises(ConflictError):
        svc.flag_submission(reviewer.id, submission.id, "inappropriate")

    db.expire_all()
    refreshed = svc.submissions.get_submission(submission.id)
    assert refreshed.review_count == 1
    assert refreshed.inappropriate_count == 0


def test_unassigned_reviewer_cannot_review(db, make_user, make_submission) -> None:
    submission = make_submission(make_user())
    stranger = make_user()

    with pytest.raises(NotFoundError):
        ModerationService(db, THRESHOLDS).review_submission(stranger.id, submission.id, "hi")


def test_recompute_many_reports_changes(db, make_user, make_submission, assigned) -> None:
    owner = make_user()
    touched, quiet = make_submission(owner), make_submission(owner)
    (reviewer,) = assigned(touched, 1)
    svc = ModerationService(db, THRESHOLDS)
    svc.ledger.record_review(touched.id, reviewer.id, "raw ledger write")

    changed = svc.recompute_many([touched, quiet])
    db.commit()

    assert changed == 1
    assert touched.status is SubmissionStatus.IN_REVIEW
    assert quiet.status is SubmissionStatus.PENDING
