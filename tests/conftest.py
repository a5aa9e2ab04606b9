# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shutter_stage.core.security import create_access_token
from shutter_stage.db.session import Base, enable_sqlite_savepoints
from shutter_stage.db.session import get_db as app_get_session
from shutter_stage.main import app as fastapi_app
from shutter_stage.models import (
    AuditLog,
    AuditLogStatus,
    Comment,
    File,
    Post,
    PostStatus,
    PostTag,
    Tag,
    User,
    UserLikePost,
)
from shutter_stage.models.audit_log import RESOURCE_TYPE_POST
from shutter_stage.services.identity import Principal, principal_for

TEST_DB_URL = "sqlite://"

_FILE_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _create_user(db_session: Session, name: str, *, is_admin: bool = False) -> User:
    user = User(name=name, is_admin=is_admin)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return the primary test user."""
    return _create_user(db_session, "alice")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second, unrelated user."""
    return _create_user(db_session, "bob")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    """Create and return an administrator."""
    return _create_user(db_session, "root", is_admin=True)


def _auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _auth_headers(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    """Return authorization headers for the administrator."""
    return _auth_headers(admin_user)


@pytest.fixture()
def principal_of() -> Callable[[User | None], Principal]:
    return principal_for


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts with an optional primary file, tags and verdicts."""

    def _make_post(
        owner: User,
        *,
        title: str = "A photo",
        status: PostStatus = PostStatus.PUBLISHED,
        with_file: bool = True,
        exif: dict[str, Any] | None = None,
        tags: list[str] | None = None,
        audits: list[AuditLogStatus] | None = None,
    ) -> Post:
        post = Post(title=title, content="Body", status=status.value, user_id=owner.id)
        db_session.add(post)
        db_session.flush()

        if with_file:
            number = next(_FILE_COUNTER)
            db_session.add(
                File(
                    original_name=f"IMG_{number}.jpg",
                    filename=f"file-{number}",
                    mimetype="image/jpeg",
                    size=1024,
                    width=1200,
                    height=800,
                    exif=exif or {},
                    post_id=post.id,
                    user_id=owner.id,
                )
            )

        for name in tags or []:
            tag = db_session.query(Tag).filter(Tag.name == name).first()
            if tag is None:
                tag = Tag(name=name)
                db_session.add(tag)
                db_session.flush()
            db_session.add(PostTag(post_id=post.id, tag_id=tag.id))

        for verdict in audits or []:
            db_session.add(
                AuditLog(
                    resource_type=RESOURCE_TYPE_POST,
                    resource_id=post.id,
                    status=verdict.value,
                )
            )
            db_session.flush()

        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def add_comment(db_session: Session) -> Callable[[Post, User], Comment]:
    def _add_comment(post: Post, author: User) -> Comment:
        comment = Comment(content="Nice shot", post_id=post.id, user_id=author.id)
        db_session.add(comment)
        db_session.commit()
        return comment

    return _add_comment


@pytest.fixture()
def add_like(db_session: Session) -> Callable[[Post, User], UserLikePost]:
    def _add_like(post: Post, user: User) -> UserLikePost:
        like = UserLikePost(post_id=post.id, user_id=user.id)
        db_session.add(like)
        db_session.commit()
        return like

    return _add_like
