"""
Flash attributes - one-shot values carried across a redirect.

Stored in the signed session cookie managed by Starlette's
SessionMiddleware and removed the first time they are read.
"""

from typing import Any

from starlette.requests import Request

_PREFIX = "flash."


def flash(request: Request, key: str, value: Any) -> None:
    """Store a value for the next request only. Value must be JSON-serializable."""
    request.session[_PREFIX + key] = value


def pop_flashes(request: Request) -> dict[str, Any]:
    """Return and discard every pending flash value."""
    keys = [key for key in request.session if key.startswith(_PREFIX)]
    return {key[len(_PREFIX) :]: request.session.pop(key) for key in keys}
