"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    BUGZILLA_HOST        - Base URL of the Bugzilla instance used by BugzillaSession.from_env()
    BUGZILLA_API_KEY     - API key sent as a bearer token (anonymous access when unset)
    BUGZILLA_TIMEOUT     - Request timeout in seconds (default: 30)
    BUGZILLA_USER_AGENT  - User-Agent header sent with every request (default: bugzilla-query)

Timeout:
    BUGZILLA_TIMEOUT bounds connect, read and write for a single GET.
    A request that exceeds it surfaces as a TransportError and is never retried.
"""
import os
from dotenv import load_dotenv

load_dotenv()

BUGZILLA_HOST = os.getenv("BUGZILLA_HOST")
BUGZILLA_API_KEY = os.getenv("BUGZILLA_API_KEY")
BUGZILLA_TIMEOUT = float(os.getenv("BUGZILLA_TIMEOUT", 30.0))
BUGZILLA_USER_AGENT = os.getenv("BUGZILLA_USER_AGENT", "bugzilla-query")
