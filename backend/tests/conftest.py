import os

# Must be set before vidtube is imported so the app never touches a file database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_ANON_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vidtube.core.auth import get_token_verifier
from vidtube.core.database import enable_sqlite_foreign_keys, get_db
from vidtube.main import app
from vidtube.models import Base, Comment, Tweet, User, Video

# In-memory SQLite shared across threads for TestClient
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
event.listen(engine, "connect", enable_sqlite_foreign_keys)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TOKEN_PREFIX = "token-"


def fake_verify(token: str):
    """Tokens in tests are 'token-<user id>'."""
    if token.startswith(TOKEN_PREFIX):
        return token[len(TOKEN_PREFIX):]
    return None


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {TOKEN_PREFIX}{user_id}"}


@pytest.fixture
def auth():
    return auth_headers


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    # Fresh session per request, like the real get_db; fake token verification
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_verifier] = lambda: fake_verify
    yield TestClient(app)
    app.dependency_overrides.clear()


def _add(obj):
    db = TestingSessionLocal()
    try:
        db.add(obj)
        db.commit()
        return obj.id
    finally:
        db.close()


@pytest.fixture
def make_user():
    counter = {"n": 0}

    def _make(username: str = None) -> str:
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        return _add(User(username=username, email=f"{username}@example.com", full_name=username.title()))

    return _make


@pytest.fixture
def make_video():
    def _make(owner_id: str, title: str = "A video", is_published: bool = True, **kwargs) -> str:
        return _add(Video(
            owner_id=owner_id,
            title=title,
            video_file=f"https://cdn.example.com/{title.replace(' ', '-')}.mp4",
            is_published=is_published,
            **kwargs,
        ))

    return _make


@pytest.fixture
def make_comment():
    def _make(video_id: str, owner_id: str, content: str = "Nice video", **kwargs) -> str:
        return _add(Comment(video_id=video_id, owner_id=owner_id, content=content, **kwargs))

    return _make


@pytest.fixture
def make_tweet():
    def _make(owner_id: str, content: str = "hello", **kwargs) -> str:
        return _add(Tweet(owner_id=owner_id, content=content, **kwargs))

    return _make
