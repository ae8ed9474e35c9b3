from sqlalchemy.orm import Session

from api.admin.admin_service import AdminResetService
from api.interactions.interactions_schema import ClearFilters, ClearSummary


def clear_reviewer_controller(
    reviewer_id: int,
    filters: ClearFilters,
    db: Session
) -> ClearSummary:
    """
    Controller for the administrative reviewer reset.
    An empty filter set is accepted and reports zero affected rows.
    """
    return AdminResetService(db).clear_reviewer_from_all(
        reviewer_id,
        **filters.model_dump()
    )
