# jira_bridge/client.py
from __future__ import annotations

import logging
from typing import Any, Optional

from jira_bridge.compose import compose_fetch_summary, compose_write_comment
from jira_bridge.errors import MalformedResponse, ParseError, UpstreamError
from jira_bridge.settings import JiraSettings
from jira_bridge.transport import JiraResponse, RequestsTransport, Transport

logger = logging.getLogger(__name__)


def _error_detail(resp: JiraResponse) -> Any:
    try:
        j = resp.json()
    except ParseError:
        return resp.text[:300]
    if isinstance(j, dict):
        # common Jira error fields
        return j.get("errorMessages") or j.get("errors") or j.get("message") or j
    return j


class JiraClient:
    """
    One outbound request per call, no retries, no caching.
    Transport failures (network errors, ``ParseError``) reach the caller as-is.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Optional[JiraSettings] = None) -> "JiraClient":
        return cls(RequestsTransport.from_settings(settings))

    def fetch_issue_summary(self, issue: str) -> str:
        desc = compose_fetch_summary(issue)
        resp = self.transport.execute(desc)
        if not resp.ok:
            detail = _error_detail(resp)
            logger.warning("Jira fetch summary for %s failed: %s %s", issue, resp.status, detail)
            raise UpstreamError(resp.status, detail, desc.route)

        data = resp.json()
        fields = data.get("fields") if isinstance(data, dict) else None
        if not isinstance(fields, dict) or "summary" not in fields:
            raise MalformedResponse(f"Jira issue {issue} response has no fields.summary")
        summary = fields["summary"]
        if not isinstance(summary, str):
            raise MalformedResponse(f"Jira issue {issue} summary is not a string: {summary!r}")
        return summary

    def write_comment(self, issue: str, comment_text: str, *, strict: bool = False) -> JiraResponse:
        """
        Append a single-paragraph ADF comment to ``issue``.

        Returns the response so callers can check ``status``. Non-2xx statuses
        are only logged unless ``strict`` is set, in which case they raise
        ``UpstreamError``.
        """
        desc = compose_write_comment(issue, comment_text)
        resp = self.transport.execute(desc)
        logger.info("Jira comment on %s: %s %s", issue, resp.status, resp.reason)
        logger.debug("Jira comment response body: %s", resp.text)
        if not resp.ok:
            detail = _error_detail(resp)
            logger.warning("Jira comment on %s failed: %s %s", issue, resp.status, detail)
            if strict:
                raise UpstreamError(resp.status, detail, desc.route)
        return resp
