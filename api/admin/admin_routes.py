from typing import Optional
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.role_middleware import role_middleware
from api.roles.roles_model import RoleName
from api.interactions.interactions_schema import ClearFilters, ClearSummary
from api.admin.admin_controller import clear_reviewer_controller

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(role_middleware([RoleName.ADMIN]))],
)


@router.post(
    "/reviewers/{reviewer_id}/clear",
    response_model=ClearSummary,
    summary="Wipe selected interaction facts for one reviewer across all submissions"
)
def clear_reviewer(
    reviewer_id: int,
    filters: Optional[ClearFilters] = Body(None),
    db: Session = Depends(get_db),
) -> ClearSummary:
    """
    Each switch in the body independently selects what to reset
    (seen, review, inappropriate_flag, needs_more_context_flag, skipped_flag).
    Used to re-run an exhausted queue in test or ops recovery.
    """
    return clear_reviewer_controller(reviewer_id, filters or ClearFilters(), db)
