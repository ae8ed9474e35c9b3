from sqlalchemy import Column, Integer, Enum, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
import enum
from config.database import Base


class RoleName(enum.Enum):
    REVIEWEE = "REVIEWEE"   # may submit and list own submissions
    REVIEWER = "REVIEWER"   # may pull, review and flag others' submissions
    ADMIN    = "ADMIN"      # may reset reviewer state


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_user_role"),
    )

    id         = Column(Integer, primary_key=True, index=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role       = Column(Enum(RoleName, name="role_name"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="roles")

    def __repr__(self):
        return f"<UserRole(user_id={self.user_id}, role={self.role.value})>"
