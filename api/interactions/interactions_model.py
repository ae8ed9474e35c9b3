from sqlalchemy import (
    Column,
    Integer,
    Boolean,
    Text,
    DateTime,
    Enum,
    ForeignKey,
    Uuid,
    UniqueConstraint,
    false,
)
from sqlalchemy.orm import relationship
import enum
from config.database import Base
from api.submissions.submissions_model import utcnow


class FlagCategory(enum.Enum):
    inappropriate      = "inappropriate"
    needs_more_context = "needs-more-context"
    skip               = "skip"


class ReviewerInteraction(Base):
    """
    One row per (submission, reviewer) pair, created the first time the
    submission is handed to that reviewer. The unique constraint backs the
    atomic "mark seen only if not already seen" upsert.
    """
    __tablename__ = "reviewer_interactions"
    __table_args__ = (
        UniqueConstraint("submission_id", "reviewer_id", name="uq_interaction_submission_reviewer"),
    )

    id            = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(Uuid(as_uuid=True), ForeignKey("submissions.id", ondelete="CASCADE"), nullable=False, index=True)
    reviewer_id   = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    seen        = Column(Boolean, nullable=False, default=False, server_default=false())
    review      = Column(Text, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    flag        = Column(Enum(FlagCategory, name="flag_category"), nullable=True)
    flagged_at  = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    submission = relationship("Submission", back_populates="interactions")
    reviewer = relationship("User", foreign_keys=[reviewer_id])

    @property
    def has_outcome(self) -> bool:
        return self.review is not None or self.flag is not None

    def __repr__(self):
        return (
            f"<ReviewerInteraction(submission_id={self.submission_id}, "
            f"reviewer_id={self.reviewer_id}, seen={self.seen})>"
        )
