# jira_bridge/compose.py
"""
Request descriptors for the Jira issue endpoints we use.

Every dynamic value reaches a route through a template slot
(``jira_bridge.utils.templating.route``); bodies are built as structures and
serialized with ``json.dumps``. URL escaping and JSON escaping never mix.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from requests.structures import CaseInsensitiveDict

from jira_bridge.adf import comment_document
from jira_bridge.errors import InvalidIssueReference
from jira_bridge.permissions import required_scopes
from jira_bridge.utils.templating import route

ISSUE_ROUTE = "/rest/api/3/issue/{}"
ISSUE_SUMMARY_ROUTE = "/rest/api/3/issue/{}?fields=summary"
ISSUE_FIELDS_ROUTE = "/rest/api/3/issue/{}?fields={}"
ISSUE_COMMENT_ROUTE = "/rest/api/3/issue/{}/comment"

JSON_ACCEPT = {"Accept": "application/json"}
JSON_SEND = {"Accept": "application/json", "Content-Type": "application/json"}


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    route: str
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    body: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", MappingProxyType(CaseInsensitiveDict(self.headers)))

    @property
    def required_scopes(self) -> Tuple[str, ...]:
        return required_scopes(self.method, self.route)


def validate_issue_reference(issue: Any) -> str:
    if not isinstance(issue, str) or not issue:
        raise InvalidIssueReference(f"Issue id or key must be a non-empty string, got {issue!r}")
    if "/" in issue:
        raise InvalidIssueReference(f"Issue id or key must not contain '/': {issue!r}")
    if issue in (".", ".."):
        raise InvalidIssueReference(f"Issue id or key must not be a dot segment: {issue!r}")
    return issue


def compose_fetch_summary(issue: str) -> RequestDescriptor:
    issue = validate_issue_reference(issue)
    return RequestDescriptor("GET", route(ISSUE_SUMMARY_ROUTE, issue), JSON_ACCEPT)


def compose_fetch_issue(issue: str, fields: Iterable[str] = ()) -> RequestDescriptor:
    """GET an issue, optionally limited to ``fields`` (sent as one comma-joined value)."""
    issue = validate_issue_reference(issue)
    wanted = [f for f in fields if f]
    if wanted:
        built = route(ISSUE_FIELDS_ROUTE, issue, ",".join(wanted))
    else:
        built = route(ISSUE_ROUTE, issue)
    return RequestDescriptor("GET", built, JSON_ACCEPT)


def compose_write_comment(issue: str, comment_text: str) -> RequestDescriptor:
    issue = validate_issue_reference(issue)
    payload = {"body": comment_document(comment_text)}
    return RequestDescriptor(
        "POST",
        route(ISSUE_COMMENT_ROUTE, issue),
        JSON_SEND,
        json.dumps(payload),
    )
