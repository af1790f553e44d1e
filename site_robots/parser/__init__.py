"""Разбор текста robots.txt: строки, шаблоны и группы агентов."""

from site_robots.parser.groups import build_rule_store, normalize_agent, parse_crawl_delay
from site_robots.parser.lines import iter_directives
from site_robots.parser.patterns import compile_pattern, normalize_encoding

__all__ = [
    "build_rule_store",
    "compile_pattern",
    "iter_directives",
    "normalize_agent",
    "normalize_encoding",
    "parse_crawl_delay",
]
