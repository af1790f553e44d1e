"""site_robots.parser.lines: Разбиение текста robots.txt на пронумерованные директивы."""

from __future__ import annotations

import re
from typing import FrozenSet, Iterator, Optional

from site_robots.logger import logger
from site_robots.models import Directive

__all__ = ("DIRECTIVE_KEYS", "iter_directives")

DIRECTIVE_KEYS: FrozenSet[str] = frozenset(
    {"user-agent", "disallow", "allow", "crawl-delay", "sitemap", "host"}
)

# str.splitlines() also breaks on \v, \f, \x1c and \u2028, which would shift line numbers.
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
# Whitespace plus the byte-order mark, which str.strip() keeps.
_TRIM_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def _trim(text: str) -> str:
    return _TRIM_RE.sub("", text)


def _split_line(line: str) -> Optional[tuple[str, str]]:
    """Убирает комментарий и делит строку по первому ``:``; None для строк без ключа."""
    line = line.split("#", 1)[0]
    key, sep, value = line.partition(":")
    key = _trim(key)
    if not sep or not key:
        return None
    return key.lower(), _trim(value)


def iter_directives(text: Optional[str]) -> Iterator[Directive]:
    """Возвращает известные директивы в порядке документа с исходными номерами строк."""
    if not text:
        return
    for lineno, raw in enumerate(_NEWLINE_RE.split(text), start=1):
        parts = _split_line(raw)
        if parts is None:
            continue
        key, value = parts
        if key not in DIRECTIVE_KEYS:
            logger.debug("Ignoring unknown directive %r on line %d", key, lineno)
            continue
        yield Directive(key, value, lineno)
