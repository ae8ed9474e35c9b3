# api/submissions/submissions_schema.py

from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from api.submissions.submissions_model import SubmissionType, SubmissionStatus


class SubmissionCreate(BaseModel):
    """
    Payload a reviewee sends to /text_msgs/submit.
    """
    title: str = Field(..., min_length=1, max_length=255)
    type: SubmissionType
    additional_info: str = Field("", max_length=5000)
    image_urls: List[str] = Field(..., description="Ordered list of uploaded image URLs")


class SubmissionAck(BaseModel):
    id: UUID
    status: SubmissionStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OwnerPublic(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class SubmissionProjection(BaseModel):
    """
    What a reviewer is allowed to see of someone else's submission.
    """
    id: UUID
    title: str
    type: SubmissionType
    additional_info: str
    image_urls: List[str]
    owner: OwnerPublic
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewRead(BaseModel):
    content: str
    reviewed_at: Optional[datetime] = None


class SubmissionWithReviews(BaseModel):
    id: UUID
    title: str
    type: SubmissionType
    additional_info: str
    image_urls: List[str]
    status: SubmissionStatus
    review_count: int
    inappropriate_count: int
    needs_context_count: int
    created_at: datetime
    reviews: List[ReviewRead] = []

    model_config = ConfigDict(from_attributes=True)
