"""Interaction ledger: seen-marking, at-most-once outcomes, per-reviewer clearing."""

from __future__ import annotations

import pytest

from api.interactions.interactions_model import FlagCategory, ReviewerInteraction
from api.interactions.interactions_schema import ClearFilters
from api.interactions.interactions_service import InteractionLedger
from utils.exceptions import ConflictError, InvalidRequestError, NotFoundError


def test_mark_seen_only_first_call_wins(db, make_user, make_submission) -> None:
    reviewer = make_user()
    submission = make_submission(make_user())
    ledger = InteractionLedger(db)

    assert ledger.mark_seen(submission.id, reviewer.id) is True
    assert ledger.mark_seen(submission.id, reviewer.id) is False
    db.commit()

    assert db.query(ReviewerInteraction).count() == 1
    assert ledger.get_interaction(submission.id, reviewer.id).seen is True


def test_mark_seen_flips_a_cleared_row(db, make_user, make_submission) -> None:
    reviewer = make_user()
    submission = make_submission(make_user())
    ledger = InteractionLedger(db)
    ledger.mark_seen(submission.id, reviewer.id)
    ledger.record_review(submission.id, reviewer.id, "nice")
    ledger.clear_for_reviewer(reviewer.id, ClearFilters(seen=True))
    db.commit()

    assert ledger.mark_seen(submission.id, reviewer.id) is True


def test_outcome_requires_assignment(db, make_user, make_submission) -> None:
    reviewer = make_user()
    submission = make_submission(make_user())

    with pytest.raises(NotFoundError):
        InteractionLedger(db).record_review(submission.id, reviewer.id, "never assigned")


def test_second_outcome_conflicts(db, make_user, make_submission) -> None:
    reviewer = make_user()
    submission = make_submission(make_user())
    ledger = InteractionLedger(db)
    ledger.mark_seen(submission.id, reviewer.id)

    interaction = ledger.record_review(submission.id, reviewer.id, "  keep it short  ")
    assert interaction.review == "keep it short"
    assert interaction.has_outcome is True
    assert interaction.reviewed_at is not None

    with pytest.raises(ConflictError):
        ledger.record_review(submission.id, reviewer.id, "again")
    with pytest.raises(ConflictError):
        ledger.record_flag(submission.id, reviewer.id, "skip")


def test_record_flag_accepts_wire_values(db, make_user, make_submission) -> None:
    reviewer = make_user()
    submission = make_submission(make_user())
    ledger = InteractionLedger(db)
    ledger.mark_seen(submission.id, reviewer.id)

    interaction = ledger.record_flag(submission.id, reviewer.id, "needs-more-context")

    assert interaction.flag is FlagCategory.needs_more_context
    assert interaction.review is None


@pytest.mark.parametrize("category", ["spam", "", None])
def test_record_flag_rejects_unknown_category(db, make_user, make_submission, category) -> None:
    reviewer = make_user()
    submission = make_submission(make_user())
    ledger = InteractionLedger(db)
    ledger.mark_seen(submission.id, reviewer.id)

    with pytest.raises(InvalidRequestError, match="category must be one of"):
        ledger.record_flag(submission.id, reviewer.id, category)


def test_record_review_rejects_blank_content(db, make_user, make_submission) -> None:
    reviewer = make_user()
    submission = make_submission(make_user())
    ledger = InteractionLedger(db)
    ledger.mark_seen(submission.id, reviewer.id)

    with pytest.raises(InvalidRequestError):
        ledger.record_review(submission.id, reviewer.id, "   ")


def test_clear_only_touches_selected_reviewer(db, make_user, make_submission) -> None:
    owner, alice, bob = make_user(), make_user(), make_user()
    first, second = make_submission(owner), make_submission(owner)
    ledger = InteractionLedger(db)
    for reviewer in (alice, bob):
        ledger.mark_seen(first.id, reviewer.id)
        ledger.record_review(first.id, reviewer.id, f"from {reviewer.username}")
        ledger.mark_seen(second.id, reviewer.id)
    db.commit()

    summary = ledger.clear_for_reviewer(alice.id, ClearFilters(review=True))
    db.commit()

    assert summary.review == 1
    assert summary.seen == 0
    assert summary.removed == 0
    alice_first = ledger.get_interaction(first.id, alice.id)
    assert alice_first.review is None
    assert alice_first.seen is True
    assert ledger.get_interaction(first.id, bob.id).review == f"from {bob.username}"


def test_clear_removes_rows_left_empty(db, make_user, make_submission) -> None:
    owner, reviewer = make_user(), make_user()
    reviewed, skipped, flagged = (make_submission(owner) for _ in range(3))
    ledger = InteractionLedger(db)
    for s in (reviewed, skipped, flagged):
        ledger.mark_seen(s.id, reviewer.id)
    ledger.record_review(reviewed.id, reviewer.id, "ok")
    ledger.record_flag(skipped.id, reviewer.id, FlagCategory.skip)
    ledger.record_flag(flagged.id, reviewer.id, FlagCategory.inappropriate)
    db.commit()

    summary = ledger.clear_for_reviewer(reviewer.id, ClearFilters(seen=True, skipped_flag=True))
    db.commit()

    assert summary.seen == 3
    assert summary.skipped_flag == 1
    assert summary.inappropriate_flag == 0
    assert summary.removed == 1
    assert ledger.get_interaction(skipped.id, reviewer.id) is None
    assert ledger.get_interaction(flagged.id, reviewer.id).flag is FlagCategory.inappropriate
    assert ledger.get_interaction(reviewed.id, reviewer.id).review == "ok"


def test_clear_with_nothing_selected_is_a_no_op(db, make_user, make_submission) -> None:
    reviewer = make_user()
    submission = make_submission(make_user())
    ledger = InteractionLedger(db)
    ledger.mark_seen(submission.id, reviewer.id)
    db.commit()

    summary = ledger.clear_for_reviewer(reviewer.id, ClearFilters())

    assert summary.model_dump() == {
        "reviewer_id": reviewer.id,
        "seen": 0,
        "review": 0,
        "inappropriate_flag": 0,
        "needs_more_context_flag": 0,
        "skipped_flag": 0,
        "removed": 0,
        "submissions_recomputed": 0,
    }
    assert ledger.get_interaction(submission.id, reviewer.id).seen is True


def test_stats_for_counts_outcomes(db, make_user, make_submission) -> None:
    owner = make_user()
    reviewers = [make_user() for _ in range(4)]
    submission, untouched = make_submission(owner), make_submission(owner)
    ledger = InteractionLedger(db)
    for r in reviewers:
        ledger.mark_seen(submission.id, r.id)
    ledger.record_review(submission.id, reviewers[0].id, "one")
    ledger.record_review(submission.id, reviewers[1].id, "two")
    ledger.record_flag(submission.id, reviewers[2].id, "inappropriate")
    ledger.record_flag(submission.id, reviewers[3].id, "skip")

    stats = ledger.stats_for([submission.id, untouched.id])

    assert stats[submission.id].reviews == 2
    assert stats[submission.id].inappropriate == 1
    assert stats[submission.id].needs_more_context == 0
    assert stats[submission.id].skipped == 1
    assert stats[untouched.id].reviews == 0
    assert ledger.stats_for([]) == {}
