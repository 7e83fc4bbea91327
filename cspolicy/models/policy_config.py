"""Pydantic model for a policy declared in configuration."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field, field_validator

from cspolicy.directives import FETCH_DIRECTIVES
from cspolicy.policy import Policy

_MAX_SOURCE_LENGTH = 2048


class PolicyConfig(BaseModel):
    """A CSP policy as written in YAML presets or settings.

    Directive names are not checked here; ones outside the vocabulary are
    dropped when the Policy is built.
    """

    directives: dict[str, str | list[str]] = Field(default_factory=dict)
    auto_self: bool | None = None
    report_only: bool | None = None

    @field_validator("directives")
    @classmethod
    def validate_source_lengths(cls, v: dict[str, str | list[str]]) -> dict[str, str | list[str]]:
        for directive, sources in v.items():
            items = sources.split() if isinstance(sources, str) else sources
            for item in items:
                if len(item) > _MAX_SOURCE_LENGTH:
                    raise ValueError(
                        f"Source for {directive} too long ({len(item)} chars, max {_MAX_SOURCE_LENGTH})"
                    )
        return v

    def to_policy(
        self,
        auto_self: bool = True,
        report_only: bool = False,
        vocabulary: Iterable[str] = FETCH_DIRECTIVES,
    ) -> Policy:
        """Build a Policy; flags pinned in this config win over the arguments."""
        return Policy(
            self.directives,
            auto_self=auto_self if self.auto_self is None else self.auto_self,
            report_only=report_only if self.report_only is None else self.report_only,
            vocabulary=vocabulary,
        )
