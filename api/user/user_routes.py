from fastapi import APIRouter, Depends
from middlewares.auth_middleware import auth_middleware
from api.user.user_schema import UserMe

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserMe, summary="Who the bearer token resolves to")
def read_me(current_user: dict = Depends(auth_middleware)) -> UserMe:
    return UserMe(**current_user)
