# api/user/user_model.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from config.database import Base
from api.roles.roles_model import RoleName, UserRole


class User(Base):
    __tablename__ = 'users'

    id          = Column(Integer, primary_key=True, index=True)
    username    = Column(String(50), nullable=False, unique=True, index=True)
    email       = Column(String(255), nullable=False, unique=True, index=True)
    created_at  = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at  = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    roles = relationship(
        UserRole,
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    # content this user submitted as a reviewee
    submissions = relationship(
        "Submission",
        back_populates="owner",
        cascade="all, delete-orphan"
    )

    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

    @property
    def role_names(self):
        return [r.role.value for r in self.roles]

    def has_role(self, role: RoleName) -> bool:
        return any(r.role == role for r in self.roles)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
