# models/index.py
"""
Single place that imports every model module so Base.metadata knows all
tables (and relationship() string targets resolve) before create_all or
alembic autogenerate runs.
"""
from config.database import engine, Base

from api.roles.roles_model import UserRole
from api.user.user_model import User
from api.submissions.submissions_model import Submission
from api.interactions.interactions_model import ReviewerInteraction
from api.notifications.notifications_model import Notification

models = {
    m.__tablename__: m
    for m in (User, UserRole, Submission, ReviewerInteraction, Notification)
}


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def drop_db(bind=None):
    Base.metadata.drop_all(bind=bind or engine)
