from sqlalchemy.orm import Session
from typing import List

from api.notifications.notifications_schema import NotificationRead
from api.notifications.notifications_service import fetch_notifications


def fetch_notifications_controller(
    db: Session,
    user_id: int,
    page: int = 1,
    limit: int = 10
) -> List[NotificationRead]:
    rows = fetch_notifications(db, user_id=user_id, page=page, limit=limit)
    return [NotificationRead.model_validate(n) for n in rows]
