"""
Shared fixtures: settings bound to a throwaway SQLite file, the app, and
HTTP clients with and without admin credentials.

Run with: pytest -v   (install with: pip install -e ".[test]")
"""

import base64

import pytest
from fastapi.testclient import TestClient

from newsdesk.core.config import Settings
from newsdesk.main import create_app


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'news.db'}",
        basic_user="admin",
        basic_pass="password",
        default_timezone="UTC",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Client carrying the configured admin credentials."""
    with TestClient(app, headers=basic_auth("admin", "password")) as c:
        yield c


@pytest.fixture
def anon_client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def article_fields():
    return {
        "title": "Launch",
        "body_html": "<p>Hi</p><script>alert(1)</script>",
        "target_site": "BOTH",
        "status": "draft",
        "published_at": "2025-01-01T10:00",
    }
