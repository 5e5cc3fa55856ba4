# jira_bridge/errors.py
from __future__ import annotations

from typing import Any, Optional


class JiraBridgeError(Exception):
    """Base class for everything raised by jira_bridge."""
    pass


class InvalidTemplate(JiraBridgeError, ValueError):
    """Route template slots and supplied values do not line up."""
    pass


class UnsafeRouteValue(JiraBridgeError, ValueError):
    """A path value would change the resolved path (``.`` or ``..``)."""
    pass


class InvalidIssueReference(JiraBridgeError, ValueError):
    pass


class ParseError(JiraBridgeError, ValueError):
    """Response body is not valid JSON."""
    pass


class MalformedResponse(JiraBridgeError):
    """Response JSON lacks the field we were asked to extract."""
    pass


class UpstreamError(JiraBridgeError):
    """Jira answered with a non-success status."""

    def __init__(self, status: int, detail: Any = None, route: Optional[str] = None):
        self.status = status
        self.detail = detail
        self.route = route
        msg = f"Jira request failed: {status}"
        if route:
            msg += f" {route}"
        if detail:
            msg += f" | details: {detail}"
        super().__init__(msg)
