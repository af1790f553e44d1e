# File: site_robots/document.py
"""site_robots.document: Разобранный robots.txt и запросы краулера к нему.

Пример::

    robots = RobotsDocument.parse("http://www.example.com/robots.txt", text)
    robots.is_allowed("http://www.example.com/fish/", "MyBot/1.0")
    robots.get_crawl_delay("MyBot")

Запросы по URL возвращают ``None``, если документ не относится к URL (другой
origin или некорректный URL): вызывающий код должен отличать ``None`` от ``False``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from site_robots.config import DEFAULT_CONFIG, RobotsConfig
from site_robots.logger import logger
from site_robots.models import Origin, PatternKind, Rule, RuleStore
from site_robots.parser.groups import build_rule_store, normalize_agent
from site_robots.urls import parse_origin, parse_url

__all__ = ("RobotsDocument", "find_rule", "parse_robots")

# Returned by get_matching_line_number when the URL is governed but no rule applies.
NO_MATCH = -1


def find_rule(subject: str, rules: Iterable[Rule]) -> Optional[Rule]:
    """Pick the rule deciding *subject*.

    The first wildcard rule that matches wins outright. Literal rules compete
    by length: the longest matching prefix wins, the earliest on ties.
    """
    best: Optional[Rule] = None
    for rule in rules:
        pattern = rule.pattern
        if pattern.kind is PatternKind.WILDCARD:
            if pattern.matches(subject):
                return rule
        elif pattern.matches(subject):
            if best is None or len(pattern.text) > len(best.pattern.text):
                best = rule
    return best


class RobotsDocument:
    """Неизменяемый результат разбора одного robots.txt для одного origin."""

    __slots__ = ("_origin", "_store", "_config")

    def __init__(self, origin: Optional[Origin], store: RuleStore, config: RobotsConfig = DEFAULT_CONFIG) -> None:
        object.__setattr__(self, "_origin", origin)
        object.__setattr__(self, "_store", store)
        object.__setattr__(self, "_config", config)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(origin={self._origin!r}, agents={len(self._store.rules)}, "
            f"sitemaps={len(self._store.sitemaps)})"
        )

    @classmethod
    def parse(
        cls,
        base_url: Optional[str],
        text: Optional[str],
        config: Optional[RobotsConfig] = None,
    ) -> RobotsDocument:
        """Разбирает *text* как robots.txt, полученный по адресу *base_url*.

        При некорректном *base_url* документ всё равно создаётся (sitemap и host
        доступны), но любой запрос по URL возвращает None.
        """
        config = config or DEFAULT_CONFIG
        origin = parse_origin(base_url, config.default_port)
        if origin is None:
            logger.debug("Base URL %r is not usable; URL queries will be indeterminate", base_url)
        store = build_rule_store(text)
        logger.debug(
            "Parsed robots.txt for %s: %d agent(s), %d sitemap(s)",
            base_url, len(store.rules), len(store.sitemaps),
        )
        return cls(origin, store, config)

    # ------------------------------------------------------------------ #
    # Introspection                                                      #
    # ------------------------------------------------------------------ #

    @property
    def origin(self) -> Optional[Origin]:
        return self._origin

    @property
    def agents(self) -> Tuple[str, ...]:
        """Agent tokens that appeared in some group, in order of first appearance."""
        return tuple(self._store.rules)

    def rules_for(self, agent: Optional[str] = None) -> Tuple[Rule, ...]:
        """Rules a URL query for *agent* scans, after falling back to ``*``."""
        token = self._agent(agent)
        rules = self._store.rules
        if token in rules:
            return rules[token]
        return rules.get("*", ())

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #

    def is_allowed(self, url: str, agent: Optional[str] = None) -> Optional[bool]:
        """True/False для URL этого origin, None для любых других URL."""
        governed, rule = self._match(url, agent)
        if not governed:
            return None
        return rule is None or rule.allow

    def is_disallowed(self, url: str, agent: Optional[str] = None) -> Optional[bool]:
        allowed = self.is_allowed(url, agent)
        return None if allowed is None else not allowed

    def get_matching_line_number(self, url: str, agent: Optional[str] = None) -> Optional[int]:
        """1-based line of the deciding rule, -1 if none applies, None for other origins."""
        governed, rule = self._match(url, agent)
        if not governed:
            return None
        return rule.line_number if rule is not None else NO_MATCH

    def get_crawl_delay(self, agent: Optional[str] = None) -> Optional[float]:
        """Seconds to wait between requests, or None if no delay applies.

        An agent that appeared in any group never inherits the ``*`` delay,
        even when its own crawl-delay was missing or invalid.
        """
        token = self._agent(agent)
        delays = self._store.crawl_delays
        if token in self._store.rules:
            return delays.get(token)
        return delays.get("*")

    def get_preferred_host(self) -> Optional[str]:
        return self._store.preferred_host

    def get_sitemaps(self) -> List[str]:
        return list(self._store.sitemaps)

    # ------------------------------------------------------------------ #
    # Helpers                                                            #
    # ------------------------------------------------------------------ #

    def _agent(self, agent: Optional[str]) -> str:
        return normalize_agent(agent, self._config.default_agent)

    def _match(self, url: str, agent: Optional[str]) -> Tuple[bool, Optional[Rule]]:
        if self._origin is None:
            return False, None
        target = parse_url(url, self._config.default_port)
        if target is None or target.origin != self._origin:
            logger.debug("URL %r is not governed by robots.txt of %s", url, self._origin)
            return False, None
        return True, find_rule(target.subject, self.rules_for(agent))


def parse_robots(base_url: Optional[str], text: Optional[str], config: Optional[RobotsConfig] = None) -> RobotsDocument:
    """Сокращение для :meth:`RobotsDocument.parse`."""
    return RobotsDocument.parse(base_url, text, config)
