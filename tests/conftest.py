"""
Shared fixtures for sitemap writer tests.
"""

from pathlib import Path
from typing import List

import pytest
from lxml import etree

import sitemap_writer.config as config_module
from sitemap_writer.config import WriterConfig
from sitemap_writer.sitemap.session import SITEMAP_NS, XHTML_NS

NS = {"sm": SITEMAP_NS, "xhtml": XHTML_NS}


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    """Keep the process-wide config from leaking between tests."""
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def config() -> WriterConfig:
    return WriterConfig()


@pytest.fixture
def sitemap_path(tmp_path: Path) -> Path:
    return tmp_path / "site.xml"


def parse_urls(path: Path) -> List[etree._Element]:
    """Parse a written sitemap and return its <url> elements."""
    root = etree.parse(str(path)).getroot()
    assert root.tag == f"{{{SITEMAP_NS}}}urlset"
    return root.findall("sm:url", NS)


def child_text(url: etree._Element, tag: str):
    element = url.find(f"sm:{tag}", NS)
    return element.text if element is not None else None
