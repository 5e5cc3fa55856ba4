# jira_bridge/transport.py
"""
The network edge. ``Transport.execute`` performs one authenticated request for a
``RequestDescriptor`` and hands back a ``JiraResponse``. Retries, backoff and
timeouts live here (or with the caller), never in the composer or client.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol
from urllib.parse import urlparse

import requests

from jira_bridge.compose import RequestDescriptor
from jira_bridge.errors import ParseError
from jira_bridge.settings import JiraSettings, get_settings

logger = logging.getLogger(__name__)


class JiraResponse:
    def __init__(self, status: int, text: str = "", reason: str = ""):
        self.status = status
        self.text = text
        self.reason = reason

    @classmethod
    def from_requests(cls, r: requests.Response) -> "JiraResponse":
        return cls(r.status_code, r.text, r.reason or "")

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        try:
            return json.loads(self.text)
        except ValueError as e:
            raise ParseError(f"Response body is not valid JSON: {self.text[:300]!r}") from e

    def __repr__(self) -> str:
        return f"<JiraResponse [{self.status}]>"


class Transport(Protocol):
    def execute(self, descriptor: RequestDescriptor) -> JiraResponse:
        ...


class RequestsTransport:
    """Basic-auth (email + API token) transport on a ``requests.Session``."""

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        missing = [
            k
            for k, v in {
                "JIRA_BASE_URL": base_url,
                "JIRA_EMAIL": email,
                "JIRA_API_TOKEN": api_token,
            }.items()
            if not v
        ]
        if missing:
            raise RuntimeError(f"Jira env vars missing: {', '.join(missing)}")
        parsed = urlparse(base_url)
        if not (parsed.scheme and parsed.netloc):
            raise RuntimeError(f"Invalid JIRA_BASE_URL: {base_url!r}")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.sess = session or requests.Session()
        self.sess.auth = (email, api_token)

    @classmethod
    def from_settings(cls, settings: Optional[JiraSettings] = None, **kwargs) -> "RequestsTransport":
        s = settings or get_settings()
        return cls(s.base_url, s.email, s.api_token, timeout=s.http_timeout, **kwargs)

    def execute(self, descriptor: RequestDescriptor) -> JiraResponse:
        logger.debug("Jira %s %s", descriptor.method, descriptor.route)
        data = descriptor.body.encode("utf-8") if descriptor.body is not None else None
        r = self.sess.request(
            descriptor.method,
            self.base_url + descriptor.route,
            headers=dict(descriptor.headers),
            data=data,
            timeout=self.timeout,
        )
        return JiraResponse.from_requests(r)
