# File: tests/test_config.py
import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_robots import RobotsDocument
from site_robots.config import DEFAULT_CONFIG, RobotsConfig, apply_logging, load_config
from site_robots.logger import configure


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("default_agent: mybot\ndefault_port: '8080'", ".yaml", None),
        (json.dumps({"default_agent": "mybot", "default_port": "8080"}), ".json", None),
        ("unknown_key: 1", ".yml", ValidationError),
        ("default_port: abc", ".yaml", ValidationError),
        ("log_level: LOUD", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("{not json", ".json", ValueError),
        ("[1, 2]", ".json", TypeError),
        ("default_agent = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, RobotsConfig)
        assert cfg.default_agent == "mybot"
        assert cfg.default_port == "8080"


def test_load_config_none_returns_defaults():
    assert load_config(None) is DEFAULT_CONFIG
    assert DEFAULT_CONFIG.default_agent == "*"
    assert DEFAULT_CONFIG.default_port == "80"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_log_level_is_upper_cased():
    assert RobotsConfig(log_level="debug").log_level == "DEBUG"


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.default_agent = "other"


def test_default_agent_from_config():
    text = "User-agent: mybot\nDisallow: /private\nCrawl-delay: 3"
    robots = RobotsDocument.parse("http://www.example.com/robots.txt", text, RobotsConfig(default_agent="MyBot"))
    assert robots.is_allowed("http://www.example.com/private") is False
    assert robots.is_allowed("http://www.example.com/private", "otherbot") is True
    assert robots.get_crawl_delay() == 3


def test_default_port_from_config():
    config = RobotsConfig(default_port="8080")
    robots = RobotsDocument.parse("http://www.example.com/robots.txt", "User-agent: *\nDisallow: /", config)
    assert robots.is_allowed("http://www.example.com:8080/page") is False
    assert robots.is_allowed("http://www.example.com:9090/page") is None


def test_apply_logging_with_file(tmp_path):
    log_file = tmp_path / "robots.log"
    try:
        lg = apply_logging(RobotsConfig(log_level="DEBUG", log_file=log_file))
        assert lg.level == logging.DEBUG
        assert len(lg.handlers) == 2
        RobotsDocument.parse("http://www.example.com/robots.txt", "User-agent: *\nFoo: bar")
        for handler in lg.handlers:
            handler.flush()
        assert "Ignoring unknown directive 'foo' on line 2" in log_file.read_text(encoding="utf-8")
    finally:
        configure()
