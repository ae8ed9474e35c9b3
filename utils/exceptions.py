"""
Typed errors raised by the review engine services.

Routes never see raw database errors; main.py maps each of these to a
status code and a plain {"detail": ...} body.
"""
from fastapi import status


class ReviewEngineError(Exception):
    """Base class for errors the engine reports back to its caller"""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRequestError(ReviewEngineError):
    """Malformed input (bad enum value, empty image list, unknown cursor)"""

    status_code = 422


class NotFoundError(ReviewEngineError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ReviewEngineError):
    """An outcome was already recorded for this reviewer/submission pair"""

    status_code = status.HTTP_409_CONFLICT
