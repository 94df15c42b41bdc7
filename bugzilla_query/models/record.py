"""
Bugzilla Record Base
====================
Shared pydantic configuration for every record parsed from a Bugzilla payload.

Unknown keys:
    Bugzilla instances add custom fields (cf_*) and newer releases add new
    attributes. Records keep any key without a named field in the pydantic
    extra map instead of dropping it. Read them through `record.extra[key]`
    or as plain attributes.

Types:
    Validation is strict. A JSON value of the wrong type ("123" for an int,
    "false" for a bool) is rejected, not coerced. Validate raw bodies with
    `model_validate_json` so ISO timestamps and dates parse from strings.

Immutability:
    Records are frozen after validation. The client never sends them back.
"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class BugzillaRecord(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, strict=True)

    @property
    def extra(self) -> Dict[str, Any]:
        """Fields the server sent that have no named attribute on this record."""
        return dict(self.model_extra or {})
