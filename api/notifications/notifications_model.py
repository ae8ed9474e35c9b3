# api/notifications/notifications_model.py

from sqlalchemy import (
    Column,
    Integer,
    Text,
    String,
    Boolean,
    Enum,
    ForeignKey,
    DateTime,
    func,
)
from sqlalchemy.orm import relationship
from config.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    type = Column(
        Enum("info", "alert", name="notification_type"),
        nullable=False,
        server_default="info",
    )
    read_status = Column(Boolean, nullable=False, default=False)
    link = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="notifications")
