"""Resolve the documentation guides of every version of a documentation site."""

from .catalog import GuideCatalog, GuideDirectoryError, iter_guides
from .config import ConfigError, GuideIndexConfig, load_config
from .models import Guide, VersionedLocation

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Guide",
    "GuideCatalog",
    "GuideDirectoryError",
    "GuideIndexConfig",
    "VersionedLocation",
    "iter_guides",
    "load_config",
]
