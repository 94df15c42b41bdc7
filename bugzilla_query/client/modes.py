"""
Session Modes
=============
Value types that decide how a BugzillaSession authenticates and paginates.

Authentication:
    - anonymous  - no Authorization header (default)
    - api_key    - every request carries "Authorization: Bearer <key>"

Pagination (the `limit` query parameter):
    - default    - no `limit` sent; the instance applies its own page cap
    - limit(n)   - `&limit=n`; n is passed through unchecked, the server decides
    - unlimited  - `&limit=0`; disables the page cap and returns every match
"""
from dataclasses import dataclass
from typing import Dict, Optional

from bugzilla_query.core.constants import AUTH_HEADER, BEARER_PREFIX, UNLIMITED_PAGE


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Auth:
    """Authentication method used for every request of a session."""
    api_key_value: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "Auth":
        return cls()

    @classmethod
    def api_key(cls, key: str) -> "Auth":
        return cls(api_key_value=key)

    @property
    def is_anonymous(self) -> bool:
        return self.api_key_value is None

    def headers(self) -> Dict[str, str]:
        """Request headers implied by this mode."""
        if self.api_key_value is None:
            return {}
        return {AUTH_HEADER: f"{BEARER_PREFIX} {self.api_key_value}"}

    def __repr__(self) -> str:
        # Never leak the key into logs or tracebacks
        return "Auth.anonymous()" if self.is_anonymous else "Auth.api_key(***)"


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Pagination:
    """
    Upper bound on the number of bugs a single response may contain.

    `cap` is None for the server default, 0 for unlimited, otherwise the limit.
    """
    cap: Optional[int] = None

    @classmethod
    def default(cls) -> "Pagination":
        return cls()

    @classmethod
    def limit(cls, n: int) -> "Pagination":
        return cls(cap=n)

    @classmethod
    def unlimited(cls) -> "Pagination":
        return cls(cap=UNLIMITED_PAGE)

    def as_query(self) -> str:
        """Format as a URL query fragment such as `&limit=20`, or "" for the default."""
        if self.cap is None:
            return ""
        return f"&limit={self.cap}"
