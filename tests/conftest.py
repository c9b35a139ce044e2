from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from profile_service.config import Settings
from profile_service.main import create_app
from profile_service.models import Post, User
from profile_service.security import create_access_token
from shared.database import init_db, make_engine, make_session_factory


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret="test-secret",
        github_client_id="client-id",
        github_secret="client-secret",
        github_api_url="https://github.test",
    )


@pytest.fixture
def session_factory() -> Iterator[sessionmaker]:
    """Fresh in-memory database per test."""
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def client(settings, session_factory) -> Iterator[TestClient]:
    app = create_app(settings, session_factory)
    # unhandled errors come back as 500 responses instead of raising
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def make_user(session_factory) -> Callable[..., str]:
    def _make(name: str = "Ada Lovelace", email: str | None = None) -> str:
        session = session_factory()
        try:
            user = User(
                name=name,
                email=email or f"{name.split()[0].lower()}@example.com",
                avatar="http://example.com/avatar.png",
            )
            session.add(user)
            session.commit()
            return user.id
        finally:
            session.close()

    return _make


@pytest.fixture
def make_post(session_factory) -> Callable[[str, str], str]:
    def _make(user_id: str, text: str = "hello") -> str:
        session = session_factory()
        try:
            post = Post(user_id=user_id, text=text)
            session.add(post)
            session.commit()
            return post.id
        finally:
            session.close()

    return _make


@pytest.fixture
def auth_headers(settings) -> Callable[[str], dict[str, str]]:
    def _headers(user_id: str) -> dict[str, str]:
        return {"x-auth-token": create_access_token(user_id, settings)}

    return _headers


@pytest.fixture
def user_with_profile(client, make_user, auth_headers) -> tuple[str, dict[str, str]]:
    uid = make_user()
    headers = auth_headers(uid)
    resp = client.post(
        "/api/profile",
        json={"status": "Developer", "skills": "python, sql"},
        headers=headers,
    )
    assert resp.status_code == 200
    return uid, headers
