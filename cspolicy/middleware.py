"""Starlette middleware that emits a Content-Security-Policy header."""

from __future__ import annotations

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from cspolicy.config.presets import build_policy
from cspolicy.policy import Policy
from cspolicy.sink import ResponseHeaderSink

logger = structlog.get_logger()


def set_request_policy(request: Request, policy: Policy) -> None:
    """Replace the application policy for this request only."""
    request.state.csp_policy = policy


def get_request_policy(request: Request) -> Policy | None:
    return getattr(request.state, "csp_policy", None)


class ContentSecurityPolicyMiddleware(BaseHTTPMiddleware):
    """Submit a CSP header onto every response.

    - Uses the policy given at construction, or the configured preset
    - A handler can derive a per-request policy via ``set_request_policy``
    - Responses that already carry the header are left untouched
    """

    def __init__(self, app: ASGIApp, policy: Policy | None = None) -> None:
        super().__init__(app)
        self._policy = policy

    @property
    def policy(self) -> Policy:
        if self._policy is None:
            self._policy = build_policy()
        return self._policy

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        try:
            return self._apply_header(response, get_request_policy(request) or self.policy)
        except Exception as exc:
            logger.error("csp_header_error", error=str(exc), path=request.url.path)
            return response

    def _apply_header(self, response: Response, policy: Policy) -> Response:
        if policy.header_name in response.headers:
            logger.debug("csp_header_present", header=policy.header_name)
            return response
        if not policy.get_all_header_lines():
            return response
        policy.submit(ResponseHeaderSink(response))
        return response
