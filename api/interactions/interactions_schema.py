from pydantic import BaseModel, ConfigDict
from typing import Optional
from uuid import UUID
from datetime import datetime
from api.interactions.interactions_model import FlagCategory


class InteractionView(BaseModel):
    submission_id: UUID
    reviewer_id: int
    seen: bool
    review: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    flag: Optional[FlagCategory] = None
    flagged_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClearFilters(BaseModel):
    """
    Which stored facts to wipe for a reviewer. Anything left False is untouched.
    """
    seen: bool = False
    review: bool = False
    inappropriate_flag: bool = False
    needs_more_context_flag: bool = False
    skipped_flag: bool = False

    def any_selected(self) -> bool:
        return any(self.model_dump().values())


class ClearSummary(BaseModel):
    reviewer_id: int
    seen: int = 0
    review: int = 0
    inappropriate_flag: int = 0
    needs_more_context_flag: int = 0
    skipped_flag: int = 0
    removed: int = 0
    submissions_recomputed: int = 0
