import json
import logging

import pytest

from jira_bridge.client import JiraClient
from jira_bridge.errors import MalformedResponse, ParseError, UpstreamError
from jira_bridge.transport import JiraResponse


class StubTransport:
    def __init__(self, status=200, payload=None, text=None):
        self.status = status
        self.text = text if text is not None else json.dumps(payload)
        self.calls = []

    def execute(self, descriptor):
        self.calls.append(descriptor)
        return JiraResponse(self.status, self.text)


def test_fetch_issue_summary():
    t = StubTransport(200, {"fields": {"summary": "S"}})
    assert JiraClient(t).fetch_issue_summary("ABC-1") == "S"
    assert len(t.calls) == 1
    assert t.calls[0].route == "/rest/api/3/issue/ABC-1?fields=summary"
    assert t.calls[0].method == "GET"


@pytest.mark.parametrize("payload", [{"fields": {}}, {}, {"fields": None}, [], {"fields": {"summary": None}}])
def test_fetch_issue_summary_malformed(payload):
    with pytest.raises(MalformedResponse):
        JiraClient(StubTransport(200, payload)).fetch_issue_summary("ABC-1")


def test_fetch_issue_summary_upstream_error():
    t = StubTransport(404, {"errorMessages": ["Issue does not exist"], "errors": {}})
    with pytest.raises(UpstreamError) as exc:
        JiraClient(t).fetch_issue_summary("ABC-1")
    assert exc.value.status == 404
    assert exc.value.detail == ["Issue does not exist"]
    assert "Issue does not exist" in str(exc.value)


def test_fetch_issue_summary_upstream_error_non_json_body():
    t = StubTransport(502, text="<html>Bad Gateway</html>")
    with pytest.raises(UpstreamError) as exc:
        JiraClient(t).fetch_issue_summary("ABC-1")
    assert exc.value.detail == "<html>Bad Gateway</html>"


def test_fetch_issue_summary_parse_error():
    with pytest.raises(ParseError):
        JiraClient(StubTransport(200, text="not json")).fetch_issue_summary("ABC-1")


def test_write_comment_returns_response(caplog):
    t = StubTransport(201, {"id": "10000"})
    with caplog.at_level(logging.DEBUG, logger="jira_bridge.client"):
        resp = JiraClient(t).write_comment("ABC-1", 'he said "hi"')
    assert resp.status == 201
    assert len(t.calls) == 1
    body = json.loads(t.calls[0].body)
    assert body["body"]["content"][0]["content"][0]["text"] == 'he said "hi"'
    assert "201" in caplog.text
    assert "10000" in caplog.text


def test_write_comment_lenient_on_failure(caplog):
    t = StubTransport(403, {"errorMessages": ["No permission"]})
    with caplog.at_level(logging.WARNING, logger="jira_bridge.client"):
        resp = JiraClient(t).write_comment("ABC-1", "hello")
    assert resp.status == 403
    assert not resp.ok
    assert "No permission" in caplog.text


def test_write_comment_strict_raises():
    t = StubTransport(403, {"errorMessages": ["No permission"]})
    with pytest.raises(UpstreamError) as exc:
        JiraClient(t).write_comment("ABC-1", "hello", strict=True)
    assert exc.value.status == 403
    assert exc.value.route == "/rest/api/3/issue/ABC-1/comment"


def test_invalid_issue_never_reaches_transport():
    t = StubTransport(200, {})
    with pytest.raises(ValueError):
        JiraClient(t).write_comment("a/b", "x")
    assert t.calls == []
