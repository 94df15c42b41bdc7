"""
Response Envelopes
==================
Outer JSON objects returned by the Bugzilla REST API.

BugListResponse - success body of `GET /rest/bug`:
    offset          - index of the first returned bug
    limit           - page cap as the server sent it; Bugzilla sends it as text
    total_matches   - number of bugs matching the query
    bugs            - the bug records, one per matching ID

ApiErrorResponse - failure body:
    {"error": true, "message": "...", "code": 101, ...}
"""
from typing import Any, List

from pydantic import field_validator, model_validator

from .bug import Bug
from .record import BugzillaRecord


class BugListResponse(BugzillaRecord):
    offset: int
    limit: str
    total_matches: int
    bugs: List[Bug]

    @field_validator("limit", mode="before")
    @classmethod
    def _limit_as_text(cls, value: Any) -> Any:
        # Some instances send the number itself; keep the textual form either way
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _unique_bug_ids(self) -> "BugListResponse":
        seen: set[int] = set()
        for bug in self.bugs:
            if bug.id in seen:
                raise ValueError(f"duplicate bug id {bug.id} in response")
            seen.add(bug.id)
        return self

    @property
    def page_limit(self) -> int:
        """The server's page cap as an integer (0 means unlimited)."""
        return int(self.limit)


class ApiErrorResponse(BugzillaRecord):
    error: bool
    message: str
    code: int
