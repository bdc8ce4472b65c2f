# Sitemap module
from sitemap_writer.sitemap.item import SitemapItem, ChangeFrequency
from sitemap_writer.sitemap.session import WriterSession
from sitemap_writer.sitemap.writer import SitemapWriter

__all__ = ["SitemapWriter", "SitemapItem", "ChangeFrequency", "WriterSession"]
