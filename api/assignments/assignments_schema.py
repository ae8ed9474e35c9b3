from pydantic import BaseModel
from typing import Optional
from api.submissions.submissions_schema import SubmissionProjection


class NextSubmissionResponse(BaseModel):
    """
    available=False means the reviewer's queue is exhausted; that is a normal
    answer, not an error.
    """
    available: bool
    submission: Optional[SubmissionProjection] = None
