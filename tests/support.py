"""Shared builders for API tests: in-memory database, users and clients."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import briklyst.models  # noqa: F401
from briklyst.core.database import Base, get_db, get_session_factory
from briklyst.core.errors import register_exception_handlers
from briklyst.deps import get_current_user, get_optional_user
from briklyst.mailer.mock_provider import MockEmailProvider
from briklyst.mailer.service import EmailService, get_email_service
from briklyst.models.user import User


def make_session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_session() -> Session:
    return make_session_factory()()


def create_user(db: Session, name: str = "ava", **fields) -> User:
    user = User(
        name=name,
        email=fields.pop("email", f"{name}@example.com"),
        password_hash=fields.pop("password_hash", "not-a-real-hash"),
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def build_client(
    db: Session,
    *routers,
    user: User | None = None,
    email_service: EmailService | None = None,
    session_factory=None,
) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)
    for router in routers:
        app.include_router(router)

    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_email_service] = lambda: email_service or EmailService(MockEmailProvider())
    if session_factory is not None:
        app.dependency_overrides[get_session_factory] = lambda: session_factory
    if user is not None:
        set_session_user(app, user)
    return TestClient(app)


def set_session_user(app: FastAPI, user: User | None) -> None:
    if user is None:
        app.dependency_overrides.pop(get_current_user, None)
        app.dependency_overrides.pop(get_optional_user, None)
        return
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_optional_user] = lambda: user
