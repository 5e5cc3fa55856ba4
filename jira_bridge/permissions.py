# jira_bridge/permissions.py
"""
OAuth scope lookup for Jira REST endpoints.

Endpoint keys use the Jira REST docs' placeholder form (``{issueIdOrKey}``);
a placeholder matches exactly one path segment. When several patterns match a
route, the longest one wins.
"""
from __future__ import annotations

import re
from typing import Dict, List, Tuple

READ_JIRA_WORK = "read:jira-work"
WRITE_JIRA_WORK = "write:jira-work"

JIRA_ENDPOINT_SCOPES: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("GET", "/rest/api/3/issue/{issueIdOrKey}"): (READ_JIRA_WORK,),
    ("POST", "/rest/api/3/issue/{issueIdOrKey}/comment"): (WRITE_JIRA_WORK,),
    ("GET", "/rest/api/3/issue/{issueIdOrKey}/comment"): (READ_JIRA_WORK,),
}

_PLACEHOLDER = re.compile(r"\{[^/{}]+\}")


def endpoint_regex(endpoint: str) -> re.Pattern:
    parts: List[str] = []
    last = 0
    for m in _PLACEHOLDER.finditer(endpoint):
        parts.append(re.escape(endpoint[last:m.start()]))
        parts.append(r"[^/]+")
        last = m.end()
    parts.append(re.escape(endpoint[last:]))
    return re.compile("^" + "".join(parts) + "$")


_COMPILED = sorted(
    ((method, endpoint, endpoint_regex(endpoint)) for method, endpoint in JIRA_ENDPOINT_SCOPES),
    key=lambda item: len(item[1]),
    reverse=True,
)


def required_scopes(method: str, route: str) -> Tuple[str, ...]:
    path = route.split("?", 1)[0].split("#", 1)[0]
    method = method.upper()
    for m, endpoint, rx in _COMPILED:
        if m == method and rx.match(path):
            return JIRA_ENDPOINT_SCOPES[(m, endpoint)]
    return ()
