"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlmodel import SQLModel, Session

from mdblog.crud.database import init_db


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


def _make_raw(
    title: str = "Hello",
    slug: str = "hello",
    status: str = None,
    published_at: str = None,
    description: str = None,
    body: str = "Body text.",
    ) -> str:
    """Build a raw post document with a frontmatter block."""
    lines = ["---", f'title: "{title}"', f'slug: "{slug}"']
    if description is not None:
        lines.append(f'description: "{description}"')
    if status:
        lines.append(f"status: {status}")
    if published_at:
        lines.append(f'publishedAt: "{published_at}"')
    lines += ["---", "", body]
    return "\n".join(lines)


@pytest.fixture(name="make_raw")
def make_raw_fixture():
    """Factory for raw post documents."""
    return _make_raw
