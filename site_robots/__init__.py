# site_robots/__init__.py
"""
site_robots package initializer.
Defines package version and exposes the parsing entry points.
"""
__version__ = "0.1.0"

from site_robots.config import RobotsConfig, load_config
from site_robots.document import RobotsDocument, parse_robots

__all__ = ["RobotsConfig", "RobotsDocument", "load_config", "parse_robots", "__version__"]
