from fastapi import HTTPException, Depends
from typing import List, Dict, Any
from middlewares.auth_middleware import auth_middleware
from api.roles.roles_model import RoleName

def role_middleware(required_roles: List[RoleName] = None):
    # avoid mutable default args
    required = [r.value if isinstance(r, RoleName) else r for r in (required_roles or [])]

    def dependency(user: Dict[str, Any] = Depends(auth_middleware)):
        # auth_middleware already raises 401 for bad tokens, so user is guaranteed
        user_roles = user.get("roles", [])

        if required and not any(r in user_roles for r in required):
            raise HTTPException(
                status_code=403,
                detail=f"Forbidden: requires one of roles {required}"
            )

        return user

    return dependency
