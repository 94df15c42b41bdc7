"""
Bugzilla Session
================
Configured, blocking client for `GET <host>/rest/bug`.

Building a session:
    session = (
        BugzillaSession.create("https://bugzilla.example.com")
        .with_auth(Auth.api_key(key))
        .with_pagination(Pagination.limit(50))
        .with_fields(["_default", "flags"])
    )

    Each `with_*` call returns a NEW session. A built session is never
    mutated, so one instance can be shared between threads. The underlying
    httpx.Client is created on the first request and closed by `close()`
    (or by leaving a `with` block).

Query construction (fixed order, fragments omitted when empty):
    rest/bug?id=<id1,id2,...>[&include_fields=<f1,f2,...>][&limit=<n>]

Failure modes:
    - bad host / header value   → ConfigurationError (at build time)
    - network / non-2xx status  → TransportError
    - {"error": true} envelope  → BugzillaApiError
    - body does not match schema → DeserializationError
    - get_bug() with zero bugs  → BugNotFoundError

No retries, no caching. A partial result from get_bugs() is a success.
"""
import logging
import threading
from typing import Any, Iterable, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from bugzilla_query.client.modes import Auth, Pagination
from bugzilla_query.core import config
from bugzilla_query.core.constants import BUG_ENDPOINT, DEFAULT_FIELDS, FIELD_SEPARATOR
from bugzilla_query.core.errors import (
    BugNotFoundError,
    BugzillaApiError,
    ConfigurationError,
    DeserializationError,
    TransportError,
)
from bugzilla_query.models.bug import Bug
from bugzilla_query.models.response import ApiErrorResponse, BugListResponse

logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = ("http", "https")


def _validate_host(host: str) -> httpx.URL:
    """Parse `host` and require an absolute http(s) URL."""
    try:
        url = httpx.URL(host)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(f"Invalid Bugzilla host {host!r}: {e}") from e
    if url.scheme not in _ALLOWED_SCHEMES or not url.host:
        raise ConfigurationError(
            f"Invalid Bugzilla host {host!r}: expected an absolute http(s) URL"
        )
    return url


def _validate_headers(auth: Auth) -> None:
    """Fail early if the auth header cannot be sent over HTTP."""
    headers = auth.headers()
    for value in headers.values():
        if "\r" in value or "\n" in value:
            raise ConfigurationError("API key must not contain line breaks")
    try:
        httpx.Headers(headers)
    except (UnicodeEncodeError, TypeError) as e:
        raise ConfigurationError(f"API key cannot be sent as a header: {e}") from e


def _error_envelope(data: Any) -> Optional[ApiErrorResponse]:
    """Return the Bugzilla error envelope in `data`, if it is one."""
    if not isinstance(data, dict) or data.get("error") is not True:
        return None
    try:
        return ApiErrorResponse.model_validate(data)
    except ValidationError:
        return None


class BugzillaSession:
    """
    Connection settings and query operations for one Bugzilla instance.

    Parameters
    ----------
    host : str
        Base URL of the instance, e.g. "https://bugzilla.example.com".
    auth : Auth
        Authentication mode (anonymous by default).
    pagination : Pagination
        Page cap sent as `limit` (server default by default).
    fields : Sequence[str]
        Fields requested through `include_fields` (["_default"] by default).
    timeout : float, optional
        Per-request timeout in seconds (BUGZILLA_TIMEOUT by default).
    transport : httpx.BaseTransport, optional
        Custom httpx transport, e.g. httpx.MockTransport in tests.

    Raises
    ------
    ConfigurationError
        If the host is not an absolute http(s) URL or the auth header is invalid.
    """

    def __init__(
        self,
        host: str,
        auth: Optional[Auth] = None,
        pagination: Optional[Pagination] = None,
        fields: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._url = _validate_host(host)
        self._host = host
        self._auth = auth or Auth.anonymous()
        _validate_headers(self._auth)
        self._pagination = pagination or Pagination.default()
        if isinstance(fields, str):
            raise TypeError("fields must be a list of field names, not a string")
        self._fields = tuple(fields) if fields is not None else (DEFAULT_FIELDS,)
        self._timeout = config.BUGZILLA_TIMEOUT if timeout is None else timeout
        self._transport = transport
        self._http: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------
    @classmethod
    def create(cls, host: str, **kwargs: Any) -> "BugzillaSession":
        """Session for `host` with anonymous auth, default pagination and `_default` fields."""
        return cls(host, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "BugzillaSession":
        """
        Session configured from BUGZILLA_HOST and BUGZILLA_API_KEY.

        An explicit `auth` argument takes precedence over BUGZILLA_API_KEY.

        Raises
        ------
        ConfigurationError
            If BUGZILLA_HOST is not set.
        """
        if not config.BUGZILLA_HOST:
            raise ConfigurationError("BUGZILLA_HOST is not set")
        session = cls(config.BUGZILLA_HOST, **kwargs)
        if "auth" not in kwargs and config.BUGZILLA_API_KEY:
            session = session.with_auth(Auth.api_key(config.BUGZILLA_API_KEY))
        return session

    def _replace(self, **changes: Any) -> "BugzillaSession":
        settings = {
            "host": self._host,
            "auth": self._auth,
            "pagination": self._pagination,
            "fields": self._fields,
            "timeout": self._timeout,
            "transport": self._transport,
        }
        settings.update(changes)
        return BugzillaSession(**settings)

    def with_auth(self, auth: Auth) -> "BugzillaSession":
        """Return a session that authenticates with `auth`."""
        return self._replace(auth=auth)

    def with_pagination(self, pagination: Pagination) -> "BugzillaSession":
        """Return a session that sends `pagination` as the `limit` parameter."""
        return self._replace(pagination=pagination)

    def with_fields(self, fields: Iterable[str]) -> "BugzillaSession":
        """
        Return a session that requests exactly `fields`.

        This replaces the current list; it does not extend it. Include
        "_default" yourself to keep the default fields. An empty list sends
        no `include_fields` parameter and lets the server choose.
        """
        if isinstance(fields, str):
            raise TypeError("fields must be a list of field names, not a string")
        return self._replace(fields=tuple(fields))

    # -----------------------------------------------------------------------
    # Read-only settings
    # -----------------------------------------------------------------------
    @property
    def host(self) -> str:
        return self._host

    @property
    def auth(self) -> Auth:
        return self._auth

    @property
    def pagination(self) -> Pagination:
        return self._pagination

    @property
    def included_fields(self) -> List[str]:
        return list(self._fields)

    @property
    def timeout(self) -> float:
        return self._timeout

    def __repr__(self) -> str:
        return (
            f"BugzillaSession(host={self._host!r}, auth={self._auth!r}, "
            f"pagination={self._pagination!r}, fields={list(self._fields)!r})"
        )

    # -----------------------------------------------------------------------
    # HTTP client lifecycle
    # -----------------------------------------------------------------------
    def _get_http(self) -> httpx.Client:
        """Lazy-initialise the HTTP client."""
        with self._lock:
            if self._http is None or self._http.is_closed:
                headers = {
                    "Accept": "application/json",
                    "User-Agent": config.BUGZILLA_USER_AGENT,
                }
                headers.update(self._auth.headers())
                self._http = httpx.Client(
                    base_url=self._url,
                    headers=headers,
                    timeout=httpx.Timeout(self._timeout),
                    transport=self._transport,
                )
            return self._http

    def close(self) -> None:
        """Close the HTTP client."""
        with self._lock:
            if self._http and not self._http.is_closed:
                self._http.close()
            self._http = None

    def __enter__(self) -> "BugzillaSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -----------------------------------------------------------------------
    # Query construction
    # -----------------------------------------------------------------------
    def fields_as_query(self) -> str:
        """Format the included fields as `&include_fields=a,b`, or "" when empty."""
        if not self._fields:
            return ""
        return f"&include_fields={FIELD_SEPARATOR.join(self._fields)}"

    def build_query_path(self, ids: Iterable[Any]) -> str:
        """
        Build the request path for `ids`, relative to the host.

        Parameters
        ----------
        ids : Iterable
            Bug IDs or aliases, in the order they should appear.

        Returns
        -------
        str
            e.g. "rest/bug?id=1,2&include_fields=_default,flags&limit=10".

        Raises
        ------
        TypeError
            If `ids` is a single string instead of a list of IDs.
        ValueError
            If `ids` is empty.
        """
        if isinstance(ids, (str, bytes)):
            raise TypeError("ids must be a list of bug IDs, not a string")
        id_list = [str(bug_id) for bug_id in ids]
        if not id_list:
            raise ValueError("At least one bug ID is required")
        return (
            f"{BUG_ENDPOINT}?id={FIELD_SEPARATOR.join(id_list)}"
            f"{self.fields_as_query()}"
            f"{self._pagination.as_query()}"
        )

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------
    def _request(self, path: str) -> httpx.Response:
        """GET `path` and return the response once it is known not to be an error."""
        logger.info("GET %s", path)
        try:
            response = self._get_http().get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            try:
                envelope = _error_envelope(e.response.json())
            except ValueError:
                envelope = None
            if envelope is not None:
                raise BugzillaApiError(envelope.code, envelope.message, status_code=status) from e
            raise TransportError(f"HTTP {status} for {path}", status_code=status) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request for {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DeserializationError(f"Response for {path} is not valid JSON: {e}") from e

        envelope = _error_envelope(data)
        if envelope is not None:
            raise BugzillaApiError(
                envelope.code, envelope.message, status_code=response.status_code
            )
        return response

    def get_bugs(self, ids: Iterable[Any]) -> List[Bug]:
        """
        Fetch several bugs by ID.

        The result may hold fewer bugs than requested IDs (or none). That is
        not an error; compare against your IDs if you need every one.

        Raises
        ------
        TransportError, BugzillaApiError, DeserializationError
        """
        path = self.build_query_path(ids)
        raw = self._request(path)
        try:
            response = BugListResponse.model_validate_json(raw.content)
        except ValidationError as e:
            raise DeserializationError(f"Unexpected response schema for {path}: {e}") from e

        logger.debug(
            "Received %d bug(s) (total_matches=%d, offset=%d, limit=%s)",
            len(response.bugs), response.total_matches, response.offset, response.limit,
        )
        return list(response.bugs)

    def get_bug(self, bug_id: Any) -> Bug:
        """
        Fetch a single bug by ID.

        Raises
        ------
        BugNotFoundError
            If the server returned no bug for `bug_id`.
        TransportError, BugzillaApiError, DeserializationError
        """
        bugs = self.get_bugs([bug_id])
        if not bugs:
            raise BugNotFoundError(str(bug_id))
        return bugs[0]
