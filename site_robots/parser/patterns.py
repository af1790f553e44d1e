"""site_robots.parser.patterns: Нормализация percent-кодирования и компиляция шаблонов правил."""

from __future__ import annotations

import re
from urllib.parse import quote

from site_robots.logger import logger
from site_robots.models import LiteralPrefix, Pattern, WildcardPattern

__all__ = ("normalize_encoding", "upper_escapes", "compile_pattern")

# Characters a URI may contain unescaped (letters, digits and "_.-~" are always safe for quote).
_URI_SAFE = ";,/?:@&=+$!*'()#"
_ESCAPE_RE = re.compile(r"%[0-9a-fA-F]{2}")
_WILDCARD_RUN_RE = re.compile(r"\*+")


def upper_escapes(text: str) -> str:
    """Переводит hex-цифры каждого ``%XX`` в верхний регистр: ``%2a%ef`` -> ``%2A%EF``."""
    return _ESCAPE_RE.sub(lambda m: m.group(0).upper(), text)


def normalize_encoding(text: str) -> str:
    """Percent-кодирует *text*, не кодируя повторно существующие escape-последовательности.

    Unicode кодируется как UTF-8, ``%`` не трогается, регистр escape-последовательностей
    нормализуется. Текст, который нельзя закодировать (одиночные суррогаты), возвращается как есть.
    """
    try:
        encoded = quote(text, safe=_URI_SAFE)
    except UnicodeEncodeError:
        logger.debug("Cannot percent-encode %r, keeping it unnormalised", text)
        return text
    return upper_escapes(encoded.replace("%25", "%"))


def compile_pattern(raw: str) -> Pattern:
    """Превращает значение Disallow/Allow в литеральный префикс или шаблон с wildcard.

    Серия ``*`` соответствует любой последовательности символов, завершающий ``$``
    привязывает совпадение к концу строки (прочие ``$`` буквальные). Шаблоны,
    начинающиеся с ``/``, привязаны к началу строки, остальные ищутся в любом месте.
    """
    pattern = normalize_encoding(raw)
    if "*" not in pattern and "$" not in pattern:
        return LiteralPrefix(pattern)

    anchor_end = pattern.endswith("$")
    body = pattern[:-1] if anchor_end else pattern
    return WildcardPattern(
        source=pattern,
        segments=tuple(_WILDCARD_RUN_RE.split(body)),
        anchor_start=pattern.startswith("/"),
        anchor_end=anchor_end,
    )
