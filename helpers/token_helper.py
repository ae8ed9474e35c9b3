import jwt
import datetime
from typing import Any, Dict, List

from config.settings import settings
from api.user.user_model import User

def create_access_token(
    payload: Dict[str, Any],
    expires_minutes: int = None,
) -> str:
    """
    Generate a JWT access token with the given payload and expiration.
    """
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(minutes=minutes)
    to_encode = payload.copy()
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user: User, expires_minutes: int = None) -> str:
    """
    Generate a JWT for a User instance, embedding:
      - id
      - username
      - roles (informational; auth_middleware re-reads roles from the db)
      - exp (handled by create_access_token)
    """
    roles: List[str] = user.role_names

    token_payload: Dict[str, Any] = {
        "id":       user.id,
        "username": user.username,
        "roles":    roles,
    }
    return create_access_token(token_payload, expires_minutes)
