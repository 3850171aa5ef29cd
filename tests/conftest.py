"""
Shared fixtures for the pr_fetcher tests.

HTTP traffic is faked at the session level: the client's ``requests.Session``
is replaced with a Mock whose ``request`` returns real ``requests.Response``
objects, so ``raise_for_status``, headers and ``.json()`` behave as in
production.
"""

import json
import time
from unittest.mock import Mock

import pytest
import requests

from ingest.pr_fetcher.config import Settings
from ingest.pr_fetcher.github import GitHubClient


def _response(status=200, payload=None, headers=None, text=None):
    resp = requests.Response()
    resp.status_code = status
    body = json.dumps(payload) if payload is not None else (text or "")
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    resp.headers.update(headers or {})
    resp.url = "https://api.github.test/"
    return resp


def _item(number, state="open", closed_at=None, login="octocat", pull=True,
          created_at="2024-03-05T00:00:00Z", title=None):
    item = {
        "number": number,
        "title": title or f"Change #{number}",
        "user": {"login": login} if login else None,
        "created_at": created_at,
        "closed_at": closed_at,
        "state": state,
        "html_url": f"https://github.com/octo/hello/pull/{number}",
    }
    if pull:
        item["pull_request"] = {"url": f"https://api.github.com/repos/octo/hello/pulls/{number}"}
    return item


@pytest.fixture
def make_response():
    return _response


@pytest.fixture
def make_item():
    return _item


@pytest.fixture
def search_page():
    def build(items, total_count=None, headers=None):
        payload = {"items": items, "incomplete_results": False}
        if total_count is not None:
            payload["total_count"] = total_count
        return _response(200, payload, headers=headers)
    return build


@pytest.fixture
def rate_limit_response():
    def build(limit=5000, used=10, remaining=4990, reset=None):
        reset = int(time.time()) + 3600 if reset is None else reset
        core = {"limit": limit, "used": used, "remaining": remaining, "reset": reset}
        return _response(200, {"resources": {"core": core}, "rate": core})
    return build


@pytest.fixture
def settings():
    return Settings(
        token="",
        api_base="https://api.github.test",
        per_page=100,
        timeout=5,
        sleep_between_pages=0,
    )


@pytest.fixture
def client(settings):
    """GitHubClient whose session is a Mock; set ``client.s.request.side_effect``."""
    c = GitHubClient(settings)
    c.s = Mock()
    return c
