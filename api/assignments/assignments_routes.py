from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.role_middleware import role_middleware
from api.roles.roles_model import RoleName
from api.assignments.assignments_schema import NextSubmissionResponse
from api.assignments.assignments_controller import AssignmentController

router = APIRouter(prefix="/text_msgs", tags=["Assignments"])


@router.get(
    "/next",
    response_model=NextSubmissionResponse,
    summary="Hand the reviewer the next submission they have not seen"
)
def get_next_text_msg(
    last_submission_id: Optional[UUID] = Query(
        None, description="Id of a submission already handed out; continue after it"
    ),
    db: Session = Depends(get_db),
    current_user: dict = Depends(role_middleware([RoleName.REVIEWER]))
) -> NextSubmissionResponse:
    return AssignmentController.get_next(db, current_user["id"], last_submission_id)
