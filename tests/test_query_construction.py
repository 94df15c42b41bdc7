"""
Query Construction Tests
========================
The request path must match exactly:
    rest/bug?id=<ids>[&include_fields=<fields>][&limit=<n>]
"""
import pytest

from bugzilla_query.client.modes import Pagination
from bugzilla_query.client.session import BugzillaSession

HOST = "https://bugzilla.example.com"


@pytest.fixture
def session():
    return BugzillaSession.create(HOST)


def test_default_session_requests_default_fields(session):
    assert session.included_fields == ["_default"]
    assert session.build_query_path(["123"]) == "rest/bug?id=123&include_fields=_default"


def test_ids_joined_in_given_order(session):
    path = session.with_fields([]).build_query_path(["30", "4", "1001", "7"])
    assert path == "rest/bug?id=30,4,1001,7"


def test_numeric_ids_are_accepted(session):
    assert session.with_fields([]).build_query_path([1, 2]) == "rest/bug?id=1,2"


def test_empty_field_list_omits_include_fields(session):
    path = session.with_fields([]).build_query_path(["123"])
    assert "include_fields" not in path
    assert path == "rest/bug?id=123"


def test_fields_joined_in_given_order(session):
    path = session.with_fields(["flags", "_default", "tags"]).build_query_path(["9"])
    assert path == "rest/bug?id=9&include_fields=flags,_default,tags"


def test_with_fields_replaces_rather_than_extends(session):
    narrowed = session.with_fields(["flags"])
    assert narrowed.included_fields == ["flags"]
    assert "_default" not in narrowed.build_query_path(["1"])


@pytest.mark.parametrize("pagination, expected", [
    (Pagination.default(), "rest/bug?id=5"),
    (Pagination.limit(25), "rest/bug?id=5&limit=25"),
    (Pagination.unlimited(), "rest/bug?id=5&limit=0"),
])
def test_pagination_fragment(session, pagination, expected):
    assert session.with_fields([]).with_pagination(pagination).build_query_path(["5"]) == expected


def test_fields_fragment_precedes_limit(session):
    path = (
        session.with_fields(["_default", "flags"])
        .with_pagination(Pagination.limit(10))
        .build_query_path(["1", "2"])
    )
    assert path == "rest/bug?id=1,2&include_fields=_default,flags&limit=10"


def test_empty_id_list_rejected(session):
    with pytest.raises(ValueError):
        session.build_query_path([])


def test_with_fields_rejects_bare_string(session):
    with pytest.raises(TypeError):
        session.with_fields("flags")


def test_bare_string_ids_rejected(session):
    with pytest.raises(TypeError):
        session.build_query_path("123")
