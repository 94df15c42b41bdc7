"""
Bug Model
=========
Pydantic model for a single bug as returned by `GET /rest/bug`.

Required fields are part of Bugzilla's `_default` field set. The optional
fields at the bottom are only present when the server includes them, either
because the instance does not always populate them (dupe_of, deadline, ...)
or because the caller asked for them explicitly (flags, tags,
dependent_products).

Plural fields:
    target_release, component and version hold one or more values each.

Person references:
    Each login field (creator, assigned_to, qa_contact, docs_contact, cc)
    has a *_detail counterpart with the resolved User record. cc and
    cc_detail are parallel lists and must have the same length.

Time tracking:
    estimated_time, remaining_time, actual_time and work_time are hours and
    may be fractional.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import Field, model_validator

from .flag import Flag
from .record import BugzillaRecord
from .user import User


class Bug(BugzillaRecord):
    # --- Identity ---
    id: int = Field(gt=0)
    summary: str
    url: str
    classification: str
    product: str
    component: List[str]
    version: List[str]
    target_release: List[str]
    target_milestone: str
    platform: str
    op_sys: str

    # --- State ---
    status: str
    resolution: str
    severity: str
    priority: str
    whiteboard: str
    keywords: List[str]
    groups: List[str]
    is_open: bool
    is_confirmed: bool
    is_creator_accessible: bool
    is_cc_accessible: bool
    creation_time: datetime
    last_change_time: datetime

    # --- People ---
    creator: str
    creator_detail: User
    assigned_to: str
    assigned_to_detail: User
    qa_contact: str
    docs_contact: str
    cc: List[str]
    cc_detail: List[User]

    # --- Relationships ---
    depends_on: List[int]
    blocks: List[int]
    see_also: List[str]

    # --- Time tracking ---
    estimated_time: float
    remaining_time: float
    actual_time: float

    # --- Optional / on request ---
    qa_contact_detail: Optional[User] = None
    docs_contact_detail: Optional[User] = None
    dupe_of: Optional[int] = None
    deadline: Optional[date] = None
    update_token: Optional[str] = None
    work_time: Optional[float] = None
    flags: Optional[List[Flag]] = None
    tags: Optional[List[str]] = None
    dependent_products: Optional[List[str]] = None

    @model_validator(mode="after")
    def _cc_lists_are_parallel(self) -> "Bug":
        if len(self.cc) != len(self.cc_detail):
            raise ValueError(
                f"cc has {len(self.cc)} entries but cc_detail has {len(self.cc_detail)}"
            )
        return self

    @property
    def is_duplicate(self) -> bool:
        return self.dupe_of is not None

    def flag(self, name: str) -> Optional[Flag]:
        """
        Return the first flag called `name`, or None.

        Returns None as well when flags were not requested.
        """
        for flag in self.flags or []:
            if flag.name == name:
                return flag
        return None
