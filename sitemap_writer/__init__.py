# Sitemap writer package
from sitemap_writer.exceptions import SitemapError, ConfigError, ValidationError, StateError
from sitemap_writer.config import WriterConfig, get_config, reload_config
from sitemap_writer.sitemap import SitemapWriter, SitemapItem, ChangeFrequency

__version__ = "1.0.0"

__all__ = [
    "SitemapWriter",
    "SitemapItem",
    "ChangeFrequency",
    "WriterConfig",
    "get_config",
    "reload_config",
    "SitemapError",
    "ConfigError",
    "ValidationError",
    "StateError",
]
