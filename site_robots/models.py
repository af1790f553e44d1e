# site_robots/models.py
"""
Data models for parsed robots.txt documents.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Tuple, Union


class Directive(NamedTuple):
    """One recognised ``key: value`` line with its 1-based physical line number."""

    key: str
    value: str
    line_number: int


class PatternKind(enum.Enum):
    LITERAL = "literal"
    WILDCARD = "wildcard"


@dataclass(frozen=True, slots=True)
class LiteralPrefix:
    """Pattern without ``*`` or ``$``; matches any subject starting with it."""

    text: str
    kind: PatternKind = PatternKind.LITERAL

    def matches(self, subject: str) -> bool:
        return subject.startswith(self.text)


@dataclass(frozen=True, slots=True)
class WildcardPattern:
    """Pattern with ``*`` wildcards and/or a trailing ``$`` anchor.

    ``segments`` are the literal pieces between wildcards, so a pattern with
    ``n`` wildcards has ``n + 1`` segments (possibly empty).
    """

    source: str
    segments: Tuple[str, ...]
    anchor_start: bool
    anchor_end: bool
    kind: PatternKind = PatternKind.WILDCARD

    def matches(self, subject: str) -> bool:
        """Greedy leftmost scan; each segment is searched once, so no backtracking."""
        segments = self.segments
        first = segments[0]

        if len(segments) == 1:
            if self.anchor_start and self.anchor_end:
                return subject == first
            if self.anchor_start:
                return subject.startswith(first)
            if self.anchor_end:
                return subject.endswith(first)
            return first in subject

        if self.anchor_start:
            if not subject.startswith(first):
                return False
            pos = len(first)
        else:
            found = subject.find(first)
            if found < 0:
                return False
            pos = found + len(first)

        for segment in segments[1:-1]:
            found = subject.find(segment, pos)
            if found < 0:
                return False
            pos = found + len(segment)

        last = segments[-1]
        if self.anchor_end:
            return subject.endswith(last) and len(subject) - len(last) >= pos
        return subject.find(last, pos) >= 0


Pattern = Union[LiteralPrefix, WildcardPattern]


@dataclass(frozen=True, slots=True)
class Rule:
    """An allow/disallow rule bound to its source line."""

    pattern: Pattern
    allow: bool
    line_number: int


@dataclass(frozen=True, slots=True)
class Origin:
    """Scheme, hostname and port that a robots.txt file governs."""

    scheme: str
    hostname: str
    port: str


@dataclass(frozen=True, slots=True)
class RuleStore:
    """Frozen tables produced by one parse: rules and delays per agent, sitemaps, host."""

    rules: Mapping[str, Tuple[Rule, ...]] = field(default_factory=lambda: MappingProxyType({}))
    crawl_delays: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    sitemaps: Tuple[str, ...] = ()
    preferred_host: Optional[str] = None


__all__ = (
    "Directive",
    "PatternKind",
    "LiteralPrefix",
    "WildcardPattern",
    "Pattern",
    "Rule",
    "Origin",
    "RuleStore",
)
