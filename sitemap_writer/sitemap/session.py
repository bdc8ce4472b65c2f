"""
Output file session.
Streams one <urlset> document through an in-memory buffer into its file.
"""

import re
from contextlib import ExitStack
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from lxml import etree

from sitemap_writer.exceptions import ValidationError
from sitemap_writer.logging_config import get_logger

logger = get_logger("sitemap.session")

# XML namespaces
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NS = "http://www.w3.org/1999/xhtml"
NSMAP = {None: SITEMAP_NS, "xhtml": XHTML_NS}

XML_DECLARATION = b'<?xml version="1.0" encoding="UTF-8"?>\n'
INDENT = "  "

# Characters not allowed anywhere in an XML 1.0 document, plus lone surrogates
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _sm(tag: str) -> str:
    return f"{{{SITEMAP_NS}}}{tag}"


LINK_TAG = f"{{{XHTML_NS}}}link"


def prepare_links(
    children: List[Tuple[str, str]],
    alternate_languages: Optional[Dict[str, str]] = None,
) -> List[Tuple[str, str]]:
    """
    Turn the alternate-language map into (hreflang, href) pairs and check
    that nothing about to be written would break the document.
    """
    links = [(str(lang), str(href)) for lang, href in (alternate_languages or {}).items()]
    for value in [text for _, text in children] + [v for pair in links for v in pair]:
        if _INVALID_XML_CHARS.search(value):
            raise ValidationError(
                f"Value contains characters not allowed in XML: {value!r}",
                context={"value": value},
            )
    return links


class WriterSession:
    """
    One open sitemap file.

    Elements are serialized with lxml's incremental writer into a BytesIO
    buffer; flush() appends the buffered bytes to the file on disk.
    """

    def __init__(self, file_path: Path, index: int, use_indentation: bool = True):
        self.file_path = file_path
        self.index = index
        self.use_indentation = use_indentation
        self.urls_count = 0
        self.closed = False

        self._buffer = BytesIO()
        self._stack = ExitStack()
        self._handle = None
        self._xf = None

    def open(self) -> "WriterSession":
        """Create the file (truncating it) and start the <urlset> root."""
        self._handle = open(self.file_path, "wb")
        try:
            with ExitStack() as stack:
                self._buffer.write(XML_DECLARATION)
                self._xf = stack.enter_context(
                    etree.xmlfile(self._buffer, encoding="UTF-8", buffered=False)
                )
                stack.enter_context(self._xf.element(_sm("urlset"), nsmap=NSMAP))
                # kept open until close()
                self._stack = stack.pop_all()
        except Exception:
            self._handle.close()
            self.closed = True
            raise
        return self

    def _indent(self, depth: int):
        if self.use_indentation:
            self._xf.write("\n" + INDENT * depth)

    def write_item(self, children: List[Tuple[str, str]], links: List[Tuple[str, str]]):
        """
        Write one <url> element into the buffer.

        Args:
            children: (tag, text) pairs for the sitemap namespace children
            links: (hreflang, href) pairs, written as xhtml:link alternates

        A value the serializer rejects leaves the buffer as it was.
        """
        xf = self._xf
        mark = self._buffer.tell()
        try:
            self._indent(1)
            with xf.element(_sm("url")):
                for tag, text in children:
                    self._indent(2)
                    with xf.element(_sm(tag)):
                        xf.write(text)
                for lang, href in links:
                    self._indent(2)
                    with xf.element(LINK_TAG, {"rel": "alternate", "hreflang": lang, "href": href}):
                        pass
                if children or links:
                    self._indent(1)
        except ValueError as e:
            # UnicodeEncodeError is a ValueError too
            self._buffer.seek(mark)
            self._buffer.truncate()
            raise ValidationError(
                f"Item could not be serialized: {e}",
                context={"file_path": str(self.file_path)},
            ) from e

        self.urls_count += 1

    def flush(self):
        """Append buffered content to the file on disk."""
        data = self._buffer.getvalue()
        if data:
            self._handle.write(data)
            self._handle.flush()
            self._buffer.seek(0)
            self._buffer.truncate()
        logger.debug(
            f"Flushed {len(data)} bytes",
            extra={"file_path": self.file_path, "urls_in_file": self.urls_count}
        )

    def close(self):
        """Close </urlset>, flush what is left and release the file handle."""
        if self.closed:
            return
        try:
            self._indent(0)
            self._stack.close()
            self._buffer.write(b"\n")
            self.flush()
        finally:
            self._handle.close()
            self.closed = True
