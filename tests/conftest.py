# File: tests/conftest.py
from typing import Callable, List

import pytest

from site_robots.document import RobotsDocument

BASE_URL = "http://www.example.com/robots.txt"


@pytest.fixture()
def base_url() -> str:
    """Location of the robots.txt used by most tests."""
    return BASE_URL


@pytest.fixture()
def make_robots() -> Callable[..., RobotsDocument]:
    """
    Return a factory building a RobotsDocument from a list of lines.
    """

    def _make(lines: List[str], url: str = BASE_URL, **kwargs) -> RobotsDocument:
        return RobotsDocument.parse(url, "\n".join(lines), **kwargs)

    return _make


@pytest.fixture()
def precedence_robots(make_robots) -> RobotsDocument:
    """
    Wildcard rule before a more specific literal one, then two literal rules.
    """
    return make_robots(
        [
            "User-agent: *",
            "Disallow: /fish*.php",
            "Allow: /fish/index.php",
            "Disallow: /test",
            "Allow: /test/",
        ]
    )
