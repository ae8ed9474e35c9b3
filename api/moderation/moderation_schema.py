from pydantic import BaseModel, Field
from api.interactions.interactions_model import FlagCategory
from api.interactions.interactions_schema import InteractionView
from api.submissions.submissions_model import SubmissionStatus


class ReviewCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class FlagCreate(BaseModel):
    category: FlagCategory


class ModerationResult(BaseModel):
    interaction: InteractionView
    submission_status: SubmissionStatus
