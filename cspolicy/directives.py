"""CSP fetch-directive vocabulary and header names."""

from __future__ import annotations

FETCH_DIRECTIVES: tuple[str, ...] = (
    "default-src",
    "script-src",
    "style-src",
    "img-src",
    "font-src",
    "media-src",
    "object-src",
    "form-action",
    "connect-src",
    "frame-src",
    "child-src",
    "worker-src",
    "manifest-src",
)

# Restricted vocabulary for callers that only manage the core three
MINIMAL_DIRECTIVES: tuple[str, ...] = ("default-src", "script-src", "style-src")

HEADER_NAME = "Content-Security-Policy"
REPORT_ONLY_HEADER_NAME = "Content-Security-Policy-Report-Only"

SELF = "'self'"
UNSAFE_INLINE = "'unsafe-inline'"


def header_name(report_only: bool) -> str:
    """Return the header name for enforced or report-only mode."""
    return REPORT_ONLY_HEADER_NAME if report_only else HEADER_NAME
