import pytest

from site_robots.models import Origin
from site_robots.urls import parse_origin, parse_url, remove_dot_segments


@pytest.mark.parametrize(
    "url,origin",
    [
        ("http://www.example.com/fish", Origin("http", "www.example.com", "80")),
        ("http://www.example.com:80/", Origin("http", "www.example.com", "80")),
        ("http://www.example.com:8080/", Origin("http", "www.example.com", "8080")),
        ("https://www.example.com/", Origin("https", "www.example.com", "80")),
        ("https://www.example.com:443/", Origin("https", "www.example.com", "80")),
        ("HTTP://www.ExAmPlE.com/", Origin("http", "www.example.com", "80")),
        ("http://www.münich.com/", Origin("http", "www.xn--mnich-kva.com", "80")),
        ("http://www.m%C3%BCnich.com/", Origin("http", "www.xn--mnich-kva.com", "80")),
        ("http://www.xn--mnich-kva.com/", Origin("http", "www.xn--mnich-kva.com", "80")),
    ],
)
def test_parse_origin(url, origin):
    assert parse_origin(url) == origin


def test_default_port_is_configurable():
    assert parse_origin("http://www.example.com/", default_port="8000").port == "8000"


@pytest.mark.parametrize(
    "url",
    [
        None,
        "",
        "null",
        "example.com/test/",
        ":/wom/test/",
        ":::::;;`\\|/.example.com/test/",
        "http://[::1",
        "http://www.example.com:abc/",
        "http:///path-only",
    ],
)
def test_unparsable_urls(url):
    assert parse_url(url) is None


@pytest.mark.parametrize(
    "url,subject",
    [
        ("http://x.com", "/"),
        ("http://x.com/p?q=1", "/p?q=1"),
        ("http://x.com/p?", "/p"),
        ("http://x.com/p#frag", "/p"),
        ("http://x.com/π", "/%CF%80"),
        ("http://x.com/%e2%9d%83", "/%E2%9D%83"),
        ("http://x.com/a b", "/a%20b"),
        ("http://x.com/a`b", "/a%60b"),
        ("http://x.com/a/../b/./c", "/b/c"),
        ("http://x.com/http://example.org", "/http://example.org"),
        ("http://x.com/\ud800", "/%EF%BF%BD"),
        ("http://x.com/p?a=ü", "/p?a=%C3%BC"),
        ("http://x.com/a\\b", "/a/b"),
        ("http://x.com/a\\..\\c", "/c"),
        ("foo://x.com/a\\b", "/a%5Cb"),
    ],
)
def test_match_subject(url, subject):
    assert parse_url(url).subject == subject


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/", "/"),
        ("/a/b/../c", "/a/c"),
        ("/a/..", "/"),
        ("/a/.", "/a/"),
        ("/../a", "/a"),
        ("//a", "//a"),
    ],
)
def test_remove_dot_segments(path, expected):
    assert remove_dot_segments(path) == expected
