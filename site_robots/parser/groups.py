"""site_robots.parser.groups: Однопроходная группировка директив в таблицы правил."""

from __future__ import annotations

import math
import re
from types import MappingProxyType
from typing import Dict, List, Optional

from site_robots.logger import logger
from site_robots.models import Directive, Rule, RuleStore
from site_robots.parser.lines import iter_directives
from site_robots.parser.patterns import compile_pattern

__all__ = ("normalize_agent", "parse_crawl_delay", "RulesBuilder", "build_rule_store")

_DELAY_RE = re.compile(r"^\+?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def normalize_agent(agent: Optional[str], default: str = "*") -> str:
    """Приводит *agent* к нижнему регистру и отбрасывает суффикс ``/версия``: ``"Bot/2.1"`` -> ``"bot"``."""
    token = (agent or default).lower()
    return token.split("/", 1)[0].strip()


def parse_crawl_delay(value: str) -> Optional[float]:
    """Задержка в секундах (десятичное число); None для всего остального (``"10a"``, ``"inf"``, ``"1e999"``)."""
    if not _DELAY_RE.match(value):
        return None
    delay = float(value)
    return delay if math.isfinite(delay) else None


class RulesBuilder:
    """Накапливает директивы одного документа; :meth:`build` фиксирует результат.

    Подряд идущие строки ``User-agent`` образуют одну группу. Любая другая
    директива завершает её, следующая строка ``User-agent`` начинает новую.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, List[Rule]] = {}
        self._crawl_delays: Dict[str, float] = {}
        self._sitemaps: List[str] = []
        self._preferred_host: Optional[str] = None
        self._active_agents: List[str] = []
        self._previous_was_agent = False

    def feed(self, directive: Directive) -> None:
        key, value, lineno = directive
        if key == "user-agent":
            self._handle_user_agent(value)
        elif key in ("allow", "disallow"):
            self._handle_rule(value, key == "allow", lineno)
        elif key == "crawl-delay":
            self._handle_crawl_delay(value, lineno)
        elif key == "sitemap":
            if value:
                self._sitemaps.append(value)
        elif key == "host":
            if value:
                self._preferred_host = value.lower()
        self._previous_was_agent = key == "user-agent"

    def build(self) -> RuleStore:
        return RuleStore(
            rules=MappingProxyType({agent: tuple(rules) for agent, rules in self._rules.items()}),
            crawl_delays=MappingProxyType(dict(self._crawl_delays)),
            sitemaps=tuple(self._sitemaps),
            preferred_host=self._preferred_host,
        )

    def _handle_user_agent(self, value: str) -> None:
        if not self._previous_was_agent:
            self._active_agents = []
        # an empty User-agent still counts as an agent line for grouping
        if value:
            token = normalize_agent(value)
            if token not in self._active_agents:
                self._active_agents.append(token)

    def _handle_rule(self, value: str, allow: bool, lineno: int) -> None:
        if not self._active_agents:
            logger.debug("Line %d: rule outside of a user-agent group ignored", lineno)
            return
        rule = Rule(compile_pattern(value), allow, lineno) if value else None
        for agent in self._active_agents:
            rules = self._rules.setdefault(agent, [])
            if rule is not None:
                rules.append(rule)

    def _handle_crawl_delay(self, value: str, lineno: int) -> None:
        delay = parse_crawl_delay(value)
        if delay is None:
            logger.debug("Line %d: invalid crawl-delay %r ignored", lineno, value)
        for agent in self._active_agents:
            self._rules.setdefault(agent, [])
            if delay is not None:
                self._crawl_delays[agent] = delay


def build_rule_store(text: Optional[str]) -> RuleStore:
    """Разбирает текст robots.txt в неизменяемые таблицы правил."""
    builder = RulesBuilder()
    for directive in iter_directives(text):
        builder.feed(directive)
    return builder.build()
