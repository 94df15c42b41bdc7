"""
Shared fixtures: realistic Bugzilla payloads and a recording mock transport.
"""
import copy
import json

import httpx
import pytest

HOST = "https://bugzilla.example.com"


def _user(login: str, user_id: int, real_name: str) -> dict:
    return {"email": login, "id": user_id, "name": login, "real_name": real_name}


BASE_BUG = {
    "id": 123,
    "summary": "Crash when opening preferences",
    "url": "",
    "classification": "Red Hat",
    "product": "Red Hat Enterprise Linux 9",
    "component": ["kernel"],
    "version": ["9.2"],
    "target_release": ["---"],
    "target_milestone": "rc",
    "platform": "x86_64",
    "op_sys": "Linux",
    "status": "NEW",
    "resolution": "",
    "severity": "high",
    "priority": "medium",
    "whiteboard": "",
    "keywords": ["Triaged"],
    "groups": [],
    "is_open": True,
    "is_confirmed": True,
    "is_creator_accessible": True,
    "is_cc_accessible": True,
    "creation_time": "2023-03-01T09:15:00Z",
    "last_change_time": "2023-03-04T17:40:12Z",
    "creator": "reporter@example.com",
    "creator_detail": _user("reporter@example.com", 11, "Rita Reporter"),
    "assigned_to": "dev@example.com",
    "assigned_to_detail": _user("dev@example.com", 12, "Dev Eloper"),
    "qa_contact": "qa@example.com",
    "qa_contact_detail": _user("qa@example.com", 13, "Quinn Assurance"),
    "docs_contact": "",
    "cc": ["dev@example.com", "watcher@example.com"],
    "cc_detail": [
        _user("dev@example.com", 12, "Dev Eloper"),
        _user("watcher@example.com", 14, "Wanda Watcher"),
    ],
    "depends_on": [100],
    "blocks": [200, 201],
    "see_also": ["https://issues.example.com/browse/RHEL-1"],
    "estimated_time": 0,
    "remaining_time": 0,
    "actual_time": 0,
    "dupe_of": None,
    "deadline": None,
}

FLAG = {
    "id": 5001,
    "type_id": 7,
    "creation_date": "2023-03-02T10:00:00Z",
    "modification_date": "2023-03-03T11:00:00Z",
    "name": "needinfo",
    "status": "?",
    "setter": "dev@example.com",
    "requestee": "reporter@example.com",
}


@pytest.fixture
def make_bug():
    """Factory: a full bug payload, with keyword overrides applied on top."""
    def _make(**overrides) -> dict:
        bug = copy.deepcopy(BASE_BUG)
        bug.update(overrides)
        return bug
    return _make


@pytest.fixture
def make_flag():
    def _make(**overrides) -> dict:
        flag = copy.deepcopy(FLAG)
        flag.update(overrides)
        return flag
    return _make


@pytest.fixture
def make_list_response():
    """Factory: the `GET /rest/bug` envelope around the given bug payloads."""
    def _make(bugs, **overrides) -> dict:
        body = {"offset": 0, "limit": "0", "total_matches": len(bugs), "bugs": bugs}
        body.update(overrides)
        return body
    return _make


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers with a fixed response and keeps every request."""

    def __init__(self, status_code: int = 200, body=None, content: bytes = None):
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"),
                                  headers={"Content-Type": "application/json"})

        super().__init__(handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def transport_for():
    """Factory: a RecordingTransport returning `body` with `status_code`."""
    def _make(body=None, status_code: int = 200, content: bytes = None) -> RecordingTransport:
        return RecordingTransport(status_code=status_code, body=body, content=content)
    return _make
