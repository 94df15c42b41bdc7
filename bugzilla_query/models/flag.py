"""
Flag Model
==========
Review/approval flag attached to a bug.

Only returned when `flags` is part of the requested fields, e.g.
`include_fields=_default,flags`.

Fields:
    status      - "+" granted, "-" denied, "?" requested
    setter      - login of the user who set the flag
    requestee   - login of the user asked to answer a "?" flag (None otherwise)
"""
from datetime import datetime
from typing import Optional

from .record import BugzillaRecord

GRANTED = "+"
DENIED = "-"
REQUESTED = "?"


class Flag(BugzillaRecord):
    id: int
    type_id: int
    creation_date: datetime
    modification_date: datetime
    name: str
    status: str
    setter: str
    requestee: Optional[str] = None

    @property
    def is_granted(self) -> bool:
        return self.status == GRANTED

    @property
    def is_pending(self) -> bool:
        return self.status == REQUESTED
