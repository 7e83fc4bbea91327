"""Tests for the header emission boundary."""

from __future__ import annotations

from starlette.responses import Response

from cspolicy.policy import Policy
from cspolicy.sink import DictHeaderSink, HeaderSink, ResponseHeaderSink


class TestSubmit:
    def test_submit_matches_header_string(self, policy):
        sink = DictHeaderSink()
        policy.submit(sink)
        [(name, value)] = sink.headers.items()
        assert f"{name}: {value}" == policy.get_header_string()

    def test_submit_report_only(self):
        sink = DictHeaderSink()
        Policy({"default-src": []}, report_only=True).submit(sink)
        assert sink.headers == {"Content-Security-Policy-Report-Only": "default-src 'self'"}

    def test_submit_to_response(self, policy):
        response = Response(content="ok")
        policy.submit(ResponseHeaderSink(response))
        assert response.headers["content-security-policy"] == policy.get_all_header_lines()

    def test_response_sink_replaces_existing(self):
        response = Response(content="ok", headers={"Content-Security-Policy": "default-src *"})
        Policy({"default-src": []}).submit(ResponseHeaderSink(response))
        assert response.headers.getlist("content-security-policy") == ["default-src 'self'"]

    def test_sinks_satisfy_protocol(self):
        assert isinstance(DictHeaderSink(), HeaderSink)
        assert isinstance(ResponseHeaderSink(Response()), HeaderSink)

    def test_custom_sink(self, policy):
        calls = []

        class RecordingSink:
            def set(self, name: str, value: str) -> None:
                calls.append((name, value))

        policy.submit(RecordingSink())
        assert calls == [("Content-Security-Policy", policy.get_all_header_lines())]
