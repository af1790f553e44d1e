"""site_robots.urls: the minimal URL handling needed to match robots.txt rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence
from urllib.parse import quote, unquote, urlsplit

from site_robots.logger import logger
from site_robots.models import Origin
from site_robots.parser.patterns import upper_escapes

__all__: Sequence[str] = (
    "ParsedUrl",
    "parse_url",
    "parse_origin",
    "remove_dot_segments",
)

_DEFAULT_PORTS: Dict[str, str] = {"http": "80", "https": "443", "ftp": "21", "ws": "80", "wss": "443"}

# Printable ASCII left unescaped in paths and queries, following the WHATWG URL standard.
_PATH_SAFE = "!$%&'()*+,/:;=@[]^|"
_QUERY_SAFE = "!$%&()*+,/:;=?@[\\]^`{|}"


@dataclass(frozen=True, slots=True)
class ParsedUrl:
    """Origin plus the escaped path and query of a target URL."""

    origin: Origin
    path: str
    query: str

    @property
    def subject(self) -> str:
        """Path and query as compared against rule patterns."""
        target = self.path + ("?" + self.query if self.query else "")
        return upper_escapes(target)


def _scrub_surrogates(text: str) -> str:
    """Replace lone surrogates with U+FFFD so the text can be UTF-8 encoded."""
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def _canonical_host(hostname: str) -> str:
    host = unquote(hostname).lower()
    if host.isascii():
        return host
    return host.encode("idna").decode("ascii")


def remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments of an absolute path."""
    output: List[str] = []
    segments = path.split("/")[1:]
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == "..":
            if output:
                output.pop()
            if last:
                output.append("")
        elif segment == ".":
            if last:
                output.append("")
        else:
            output.append(segment)
    return "/" + "/".join(output)


def parse_url(url: Optional[str], default_port: str = "80") -> Optional[ParsedUrl]:
    """Split *url* into origin, path and query; None if it is not an absolute URL."""
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        port = parts.port
        hostname = _canonical_host(parts.hostname or "")
    except ValueError as exc:
        logger.debug("Unparsable URL %r: %s", url, exc)
        return None

    scheme = parts.scheme.lower()
    if not scheme or not hostname:
        logger.debug("URL %r has no scheme or host", url)
        return None

    port_str = str(port) if port is not None else None
    if port_str is None or port_str == _DEFAULT_PORTS.get(scheme):
        port_str = default_port

    raw_path = parts.path
    if scheme in _DEFAULT_PORTS:
        # special schemes treat a backslash as a path separator
        raw_path = raw_path.replace("\\", "/")
    path = remove_dot_segments(raw_path) if raw_path.startswith("/") else "/" + raw_path
    path = quote(_scrub_surrogates(path), safe=_PATH_SAFE)
    query = quote(_scrub_surrogates(parts.query), safe=_QUERY_SAFE)
    return ParsedUrl(Origin(scheme, hostname, port_str), path, query)


def parse_origin(url: Optional[str], default_port: str = "80") -> Optional[Origin]:
    """Origin of *url*, or None if it cannot be parsed."""
    parsed = parse_url(url, default_port)
    return parsed.origin if parsed is not None else None
