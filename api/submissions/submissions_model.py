from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Enum,
    ForeignKey,
    JSON,
    Uuid,
    Index,
)
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum
import uuid
from config.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionType(enum.Enum):
    TEXT_MSG       = "TEXT_MSG"
    DATING_PROFILE = "DATING_PROFILE"


class SubmissionStatus(enum.Enum):
    PENDING   = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    PUBLISHED = "PUBLISHED"
    REJECTED  = "REJECTED"


class Submission(Base):
    __tablename__ = "submissions"
    __table_args__ = (
        # assignment order and cursor continuation
        Index("ix_submissions_created_at_id", "created_at", "id"),
    )

    id              = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id        = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title           = Column(String(255), nullable=False)
    type            = Column(Enum(SubmissionType, name="submission_type"), nullable=False)
    additional_info = Column(Text, nullable=False, default="")
    image_urls      = Column(JSON, nullable=False)
    status          = Column(
        Enum(SubmissionStatus, name="submission_status"),
        nullable=False,
        default=SubmissionStatus.PENDING,
    )

    # aggregate counters, recomputed from the ledger on every moderation action
    review_count        = Column(Integer, nullable=False, default=0)
    inappropriate_count = Column(Integer, nullable=False, default=0)
    needs_context_count = Column(Integer, nullable=False, default=0)

    # set in python (microsecond precision) so ordering is stable on every backend
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="submissions")
    interactions = relationship(
        "ReviewerInteraction",
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="ReviewerInteraction.id",
    )

    def __repr__(self):
        return f"<Submission(id={self.id}, owner_id={self.owner_id}, status={self.status.value})>"
