"""
User Model
Resolved identity that Bugzilla embeds wherever it references a person
(creator_detail, assigned_to_detail, qa_contact_detail, cc_detail, ...).
"""
from .record import BugzillaRecord


class User(BugzillaRecord):
    email: str
    id: int
    name: str
    real_name: str
