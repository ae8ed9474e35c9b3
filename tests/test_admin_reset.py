"""Admin reset of one reviewer's interactions across every submission."""

from __future__ import annotations

from api.admin.admin_service import AdminResetService
from api.assignments.assignments_service import AssignmentService
from api.interactions.interactions_service import InteractionLedger
from api.moderation.moderation_service import ModerationService
from api.submissions.submissions_model import Submission, SubmissionStatus
from api.submissions.submissions_service import SubmissionService


def test_clearing_seen_refills_the_queue(db, make_user, make_submission) -> None:
    owner, reviewer = make_user(), make_user()
    ids = [make_submission(owner).id for _ in range(2)]
    assignments = AssignmentService(db)
    assignments.get_next(reviewer.id)
    assignments.get_next(reviewer.id)
    assert assignments.get_next(reviewer.id) is None

    summary = AdminResetService(db).clear_reviewer_from_all(reviewer.id, seen=True)

    assert summary.seen == 2
    assert summary.removed == 2
    assert summary.submissions_recomputed == 0
    assert [assignments.get_next(reviewer.id).id for _ in range(2)] == ids


def test_clearing_reviews_keeps_seen_and_recomputes(db, make_user, make_submission) -> None:
    owner, alice, bob = make_user(), make_user(), make_user()
    submission = make_submission(owner)
    for r in (alice, bob):
        AssignmentService(db).get_next(r.id)
        ModerationService(db).review_submission(r.id, submission.id, f"by {r.username}")

    summary = AdminResetService(db).clear_reviewer_from_all(alice.id, review=True)

    assert summary.review == 1
    assert summary.submissions_recomputed == 1
    ledger = InteractionLedger(db)
    alice_row = ledger.get_interaction(submission.id, alice.id)
    assert alice_row.seen is True
    assert alice_row.review is None
    assert ledger.get_interaction(submission.id, bob.id).review == f"by {bob.username}"
    refreshed = db.get(Submission, submission.id)
    assert refreshed.review_count == 1
    assert refreshed.status is SubmissionStatus.IN_REVIEW
    # seen is still set, so nothing new to hand out
    assert AssignmentService(db).get_next(alice.id) is None


def test_clearing_inappropriate_flag_lifts_rejection(db, make_user, make_submission) -> None:
    owner = make_user()
    submission = make_submission(owner)
    reviewers = [make_user() for _ in range(3)]
    for r in reviewers:
        AssignmentService(db).get_next(r.id)
        ModerationService(db).flag_submission(r.id, submission.id, "inappropriate")
    assert db.get(Submission, submission.id).status is SubmissionStatus.REJECTED

    AdminResetService(db).clear_reviewer_from_all(reviewers[0].id, inappropriate_flag=True)

    refreshed = db.get(Submission, submission.id)
    assert refreshed.inappropriate_count == 2
    assert refreshed.status is SubmissionStatus.IN_REVIEW


def test_unknown_reviewer_is_a_no_op(db, make_user, make_submission) -> None:
    make_submission(make_user())

    summary = AdminResetService(db).clear_reviewer_from_all(
        9999, seen=True, review=True, skipped_flag=True
    )

    assert summary.seen == summary.review == summary.skipped_flag == summary.removed == 0
    assert summary.submissions_recomputed == 0


def test_outcome_clear_locks_submissions_before_ledger(db, make_user, make_submission, monkeypatch) -> None:
    owner, reviewer = make_user(), make_user()
    first, second = make_submission(owner), make_submission(owner)
    for s in (first, second):
        AssignmentService(db).get_next(reviewer.id)
        ModerationService(db).review_submission(reviewer.id, s.id, "noted")

    calls = []
    lock_many = SubmissionService.lock_many
    clear_for_reviewer = InteractionLedger.clear_for_reviewer

    def spy_lock(self, ids):
        locked = lock_many(self, ids)
        calls.append(("lock", sorted(s.id for s in locked)))
        return locked

    def spy_clear(self, reviewer_id, filters):
        calls.append(("clear", reviewer_id))
        return clear_for_reviewer(self, reviewer_id, filters)

    monkeypatch.setattr(SubmissionService, "lock_many", spy_lock)
    monkeypatch.setattr(InteractionLedger, "clear_for_reviewer", spy_clear)

    summary = AdminResetService(db).clear_reviewer_from_all(reviewer.id, review=True)

    assert calls == [("lock", sorted([first.id, second.id])), ("clear", reviewer.id)]
    assert summary.submissions_recomputed == 2
    assert db.get(Submission, first.id).review_count == 0
    assert db.get(Submission, first.id).status is SubmissionStatus.PENDING


def test_seen_only_clear_takes_no_submission_locks(db, make_user, make_submission, monkeypatch) -> None:
    reviewer = make_user()
    make_submission(make_user())
    AssignmentService(db).get_next(reviewer.id)

    def fail_lock(self, ids):
        raise AssertionError("seen-only clear must not lock submissions")

    monkeypatch.setattr(SubmissionService, "lock_many", fail_lock)

    assert AdminResetService(db).clear_reviewer_from_all(reviewer.id, seen=True).seen == 1
