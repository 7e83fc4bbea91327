"""Immutable Content-Security-Policy value type."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

import structlog

from cspolicy.directives import FETCH_DIRECTIVES, SELF, UNSAFE_INLINE, header_name
from cspolicy.source_list import SourceList

if TYPE_CHECKING:
    from cspolicy.sink import HeaderSink

logger = structlog.get_logger()

# A directive's sources: "'self' https:", ["'self'", "https:"] or a SourceList
SourceInput = Union[str, Iterable[str], SourceList]


def _to_items(value: SourceInput) -> Iterable[str]:
    """Resolve a SourceInput into an iterable of source expressions."""
    if isinstance(value, str):
        return value.split()
    return value


def _seed(auto_self: bool) -> SourceList:
    return SourceList([SELF]) if auto_self else SourceList()


class Policy:
    """An immutable mapping of fetch directives to source lists.

    - Only directives in ``vocabulary`` are ever stored; anything else is
      dropped without error
    - Directives are absent until referenced, and each referenced directive
      is seeded with ``'self'`` while ``auto_self`` is on
    - Every ``add_*``/``remove_*`` call returns a new Policy carrying the
      same flags; the receiver is never modified
    """

    __slots__ = ("_directives", "_auto_self", "_report_only", "_vocabulary")

    def __init__(
        self,
        directives: Mapping[str, SourceInput] | None = None,
        *,
        auto_self: bool = True,
        report_only: bool = False,
        vocabulary: Iterable[str] = FETCH_DIRECTIVES,
    ) -> None:
        self._auto_self = auto_self
        self._report_only = report_only
        self._vocabulary = frozenset(vocabulary)

        seed = _seed(auto_self)
        settings: dict[str, SourceList] = {}
        for directive, value in (directives or {}).items():
            if directive not in self._vocabulary:
                logger.debug("csp_directive_ignored", directive=directive)
                continue
            settings[directive] = seed.add_list(_to_items(value))
        self._directives = settings

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def directives(self) -> Mapping[str, SourceList]:
        return MappingProxyType(self._directives)

    @property
    def auto_self(self) -> bool:
        return self._auto_self

    @property
    def report_only(self) -> bool:
        return self._report_only

    @property
    def vocabulary(self) -> frozenset[str]:
        return self._vocabulary

    @property
    def header_name(self) -> str:
        return header_name(self._report_only)

    # ── Derivation ───────────────────────────────────────────────────────

    def add_item_to_src(self, directive: str, item: str, auto_self: bool | None = None) -> Policy:
        return self._change(directive, lambda sources: sources.add(item), self._seed_for(auto_self))

    def remove_item_to_src(self, directive: str, item: str) -> Policy:
        return self._change(directive, lambda sources: sources.remove(item), None)

    def add_list_to_src(
        self, directive: str, items: SourceInput, auto_self: bool | None = None
    ) -> Policy:
        items = list(_to_items(items))
        return self._change(directive, lambda sources: sources.add_list(items), self._seed_for(auto_self))

    def remove_list_to_src(self, directive: str, items: SourceInput) -> Policy:
        items = list(_to_items(items))
        return self._change(directive, lambda sources: sources.remove_list(items), None)

    def add_map(self, changes: Mapping[str, SourceInput], auto_self: bool | None = None) -> Policy:
        """Merge several directives at once.

        With auto-self active, ``'self'`` is put back at the front of every
        directive the map touches, even one it was previously removed from.
        """
        force_self = self._auto_self if auto_self is None else auto_self

        def _merge(sources: SourceList, items: Iterable[str]) -> SourceList:
            sources = sources.add_list(items)
            if force_self and SELF not in sources:
                sources = SourceList((SELF, *sources))
            return sources

        return self._change_map(changes, _merge, _seed(force_self))

    def remove_map(self, changes: Mapping[str, SourceInput]) -> Policy:
        """Remove several directives' items at once. Never re-asserts ``'self'``."""
        return self._change_map(
            changes, lambda sources, items: sources.remove_list(items), None
        )

    def add_unsafe_inline(self, directive: str) -> Policy:
        return self.add_item_to_src(directive, UNSAFE_INLINE)

    def remove_unsafe_inline(self, directive: str) -> Policy:
        return self.remove_item_to_src(directive, UNSAFE_INLINE)

    def with_report_only(self, report_only: bool = True) -> Policy:
        """Return a copy of this policy in report-only (or enforced) mode."""
        return self._replace(dict(self._directives), report_only=report_only)

    def _seed_for(self, auto_self: bool | None) -> SourceList:
        return _seed(self._auto_self if auto_self is None else auto_self)

    def _change(
        self,
        directive: str,
        change: Callable[[SourceList], SourceList],
        initial: SourceList | None,
    ) -> Policy:
        # initial=None: the change only applies to directives already set
        if directive not in self._vocabulary:
            logger.debug("csp_directive_ignored", directive=directive)
            return self
        if initial is None and directive not in self._directives:
            return self
        settings = dict(self._directives)
        settings[directive] = change(settings.get(directive, initial))
        return self._replace(settings)

    def _change_map(
        self,
        changes: Mapping[str, SourceInput],
        change: Callable[[SourceList, Iterable[str]], SourceList],
        initial: SourceList | None,
    ) -> Policy:
        settings = dict(self._directives)
        for directive, value in changes.items():
            if directive not in self._vocabulary:
                logger.debug("csp_directive_ignored", directive=directive)
                continue
            if initial is None and directive not in settings:
                continue
            settings[directive] = change(settings.get(directive, initial), list(_to_items(value)))
        return self._replace(settings)

    def _replace(self, settings: dict[str, SourceList], report_only: bool | None = None) -> Policy:
        # Bypass __init__ so carried-over lists are not re-seeded
        policy = object.__new__(type(self))
        policy._auto_self = self._auto_self
        policy._report_only = self._report_only if report_only is None else report_only
        policy._vocabulary = self._vocabulary
        policy._directives = settings
        return policy

    # ── Serialization ────────────────────────────────────────────────────

    def get_string(self, directive: str) -> str:
        """Space-joined sources of ``directive``, or ``""`` if it is not set."""
        return " ".join(self._directives.get(directive, ()))

    def get_header_line(self, directive: str) -> str:
        sources = self._directives.get(directive)
        if not sources:
            return ""
        return " ".join((directive, *sources))

    def get_all_header_lines(self) -> str:
        lines = []
        for directive in self._directives:
            line = self.get_header_line(directive)
            if line:
                lines.append(line)
        return "; ".join(lines)

    def get_header_string(self) -> str:
        """Render the full header, e.g. ``Content-Security-Policy: default-src 'self'``."""
        return f"{self.header_name}: {self.get_all_header_lines()}"

    def submit(self, sink: HeaderSink) -> None:
        """Hand the header name and value to ``sink`` for emission."""
        value = self.get_all_header_lines()
        logger.debug("csp_header_submitted", header=self.header_name, value=value)
        sink.set(self.header_name, value)

    def to_dict(self) -> dict[str, list[str]]:
        return {directive: list(sources) for directive, sources in self._directives.items()}

    # ── Value semantics ──────────────────────────────────────────────────

    def _key(self) -> tuple:
        return (
            tuple(self._directives.items()),
            self._auto_self,
            self._report_only,
            self._vocabulary,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Policy):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"Policy({self.to_dict()!r}, auto_self={self._auto_self!r}, "
            f"report_only={self._report_only!r})"
        )
