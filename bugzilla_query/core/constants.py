"""
Constants
Centralised storage for REST endpoint paths, header names and field sets.
"""
BUG_ENDPOINT = "rest/bug"
AUTH_HEADER = "Authorization"
BEARER_PREFIX = "Bearer"
DEFAULT_FIELDS = "_default"
UNLIMITED_PAGE = 0
FIELD_SEPARATOR = ","
