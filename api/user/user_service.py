from typing import Iterable
from sqlalchemy.orm import Session
from api.user.user_model import User
from api.roles.roles_model import RoleName, UserRole


def create_user(
    db: Session,
    username: str,
    email: str,
    roles: Iterable[RoleName] = (RoleName.REVIEWEE, RoleName.REVIEWER),
) -> User:
    """
    Create a user with the given roles. Most people both submit and review,
    so the default grants both.
    """
    user = User(username=username, email=email)
    user.roles = [UserRole(role=RoleName(r)) for r in dict.fromkeys(roles)]
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

