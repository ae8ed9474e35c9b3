import logging
from blinker import signal
from sqlalchemy.orm import Session
from config.database import get_db
from config.settings import settings

from api.user.user_model import User
from api.submissions.submissions_model import Submission, SubmissionStatus
from api.notifications.notifications_model import Notification

from helpers.mail_helper import (
    send_review_received_email,
    send_submission_published_email,
    send_submission_rejected_email,
)

logger = logging.getLogger(__name__)

# ------------------------------------------
# Define signals
# ------------------------------------------
review_submitted          = signal("review_submitted")
submission_status_changed = signal("submission_status_changed")


def notify(sig, sender, **kwargs) -> None:
    """
    Fire a signal without letting a listener failure reach the caller.
    The moderation action that triggered it has already been committed.
    """
    try:
        sig.send(sender, **kwargs)
    except Exception:
        logger.exception("notification listener for %r failed", sig.name)


def _send_quietly(send, *args) -> None:
    try:
        send(*args)
    except Exception:
        logger.exception("outbound email via %s failed", send.__name__)


def _maybe_email(background_tasks, send, *args) -> None:
    """
    Queue the email to go out after the response when a request supplied
    BackgroundTasks; callers outside a request send it inline.
    """
    if not settings.EMAIL_ENABLED:
        return
    if background_tasks is not None:
        background_tasks.add_task(_send_quietly, send, *args)
    else:
        _send_quietly(send, *args)


# ------------------------------------------
# Listener: Review Submitted
# ------------------------------------------
@review_submitted.connect
def on_review_submitted(sender, **kwargs):
    submission_id = kwargs.get("submission_id")
    logger.debug("review_submitted received for %s", submission_id)

    db: Session = next(get_db())
    try:
        submission = db.get(Submission, submission_id)
        if not submission:
            return

        owner = db.get(User, submission.owner_id)
        db.add(Notification(
            user_id=submission.owner_id,
            message=f"Your submission '{submission.title}' received a new review.",
            type="info",
            read_status=False,
            link="/text_msgs/mine"
        ))
        db.commit()

        if owner and owner.email:
            reviews = [i.review for i in submission.interactions if i.review]
            _maybe_email(
                kwargs.get("background_tasks"),
                send_review_received_email,
                owner.email,
                owner.username,
                submission.title,
                submission.image_urls[0],
                reviews,
            )
    except Exception:
        db.rollback()
        logger.exception("failed to record review notification for %s", submission_id)
    finally:
        db.close()


# ------------------------------------------
# Listener: Submission Status Changed
# ------------------------------------------
@submission_status_changed.connect
def on_submission_status_changed(sender, **kwargs):
    submission_id = kwargs.get("submission_id")
    current: SubmissionStatus = kwargs.get("current")
    logger.debug("submission_status_changed for %s -> %s", submission_id, current)

    if current not in (SubmissionStatus.PUBLISHED, SubmissionStatus.REJECTED):
        return

    db: Session = next(get_db())
    try:
        submission = db.get(Submission, submission_id)
        if not submission:
            return

        owner = db.get(User, submission.owner_id)
        if current == SubmissionStatus.PUBLISHED:
            message = f"Your submission '{submission.title}' has been published."
            mailer = send_submission_published_email
        else:
            message = f"Your submission '{submission.title}' was removed after being flagged."
            mailer = send_submission_rejected_email

        db.add(Notification(
            user_id=submission.owner_id,
            message=message,
            type="alert",
            read_status=False,
            link="/text_msgs/mine"
        ))
        db.commit()

        if owner and owner.email:
            _maybe_email(kwargs.get("background_tasks"), mailer, owner.email, owner.username, submission.title)
    except Exception:
        db.rollback()
        logger.exception("failed to record status notification for %s", submission_id)
    finally:
        db.close()


def fetch_notifications(db: Session, user_id: int, page: int = 1, limit: int = 10):
    offset = (page - 1) * limit
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
