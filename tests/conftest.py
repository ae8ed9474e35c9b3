"""Shared fixtures: a throwaway sqlite database, user factories and bearer tokens."""

from __future__ import annotations

import itertools
import os
import tempfile

# settings are read at import time, so the environment has to be ready first
_DB_DIR = tempfile.mkdtemp(prefix="ghost_texts_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-chars"
os.environ["ENVIRONMENT"] = "test"
os.environ["EMAIL_ENABLED"] = "false"
os.environ["PUBLISH_REVIEW_THRESHOLD"] = "3"
os.environ["REJECT_FLAG_THRESHOLD"] = "3"

import pytest
from fastapi.testclient import TestClient

from config.database import SessionLocal
from models.index import init_db, drop_db
from api.roles.roles_model import RoleName
from api.submissions.submissions_service import SubmissionService
from api.user.user_service import create_user
from helpers.token_helper import create_user_token


@pytest.fixture(autouse=True)
def _fresh_schema():
    drop_db()
    init_db()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(username: str | None = None, roles=(RoleName.REVIEWEE, RoleName.REVIEWER)):
        n = next(counter)
        name = username or f"user{n}"
        return create_user(db, name, f"{name}@example.com", roles)

    return _make


@pytest.fixture
def make_submission(db):
    counter = itertools.count(1)

    def _make(owner, title: str | None = None, type: str = "TEXT_MSG", images=None):
        n = next(counter)
        return SubmissionService(db).create_submission(
            owner_id=owner.id,
            title=title or f"submission {n}",
            type=type,
            additional_info=f"context {n}",
            image_urls=images or [f"https://cdn.example.com/{n}.jpg"],
        )

    return _make


@pytest.fixture
def headers_for():
    def _headers(user) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _headers
