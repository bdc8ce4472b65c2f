"""
Sitemap writer.
Writes <url> entries incrementally, rotating to a new file once the
per-file URL limit is reached.
"""

import os
from pathlib import Path
from typing import Any, List, Optional, Union

from sitemap_writer.config import WriterConfig, get_config, positive_int
from sitemap_writer.exceptions import ConfigError, StateError
from sitemap_writer.logging_config import get_logger
from sitemap_writer.sitemap.item import (
    SitemapItem,
    validate_frequency,
    validate_last_modified,
    validate_location,
    validate_priority,
)
from sitemap_writer.sitemap.session import WriterSession, prepare_links

logger = get_logger("sitemap.writer")


class SitemapWriter:
    """
    Generates sitemaps (https://www.sitemaps.org/).

    Item attributes are set through chainable setters and written by
    add_item(), which clears them afterwards. Output is split into
    ``name.xml``, ``name_2.xml``, ``name_3.xml``... once a file holds
    max_urls_per_file URLs. Call write() after the last item.

        writer = SitemapWriter("public/sitemap.xml")
        writer.set_location("https://example.com/").set_priority(0.8).add_item()
        writer.write()
    """

    def __init__(
        self,
        file_path: Union[str, os.PathLike],
        max_urls_per_file: Optional[int] = None,
        buffer_size: Optional[int] = None,
        use_indentation: Optional[bool] = None,
        config: Optional[WriterConfig] = None,
    ):
        self.file_path = Path(file_path)
        directory = self.file_path.parent
        if not directory.is_dir():
            raise ConfigError(
                f"Please specify valid file path. Directory not exists. You have specified: {directory}.",
                context={"file_path": str(file_path)},
            )

        self.config = config or get_config()
        self.max_urls_per_file = positive_int(
            max_urls_per_file if max_urls_per_file is not None else self.config.max_urls_per_file,
            "max_urls_per_file",
        )
        self.buffer_size = positive_int(
            buffer_size if buffer_size is not None else self.config.buffer_size,
            "buffer_size",
        )
        self.use_indentation = bool(
            use_indentation if use_indentation is not None else self.config.use_indentation
        )
        self._tz = self.config.tzinfo

        self._pending = SitemapItem()
        self._session: Optional[WriterSession] = None
        self._written_file_paths: List[Path] = []
        self._file_count = 0
        self._urls_count = 0
        self._finished = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.write()

    # Options

    def set_max_urls(self, number: int) -> "SitemapWriter":
        """Maximum number of URLs in a single file. Default is 50000."""
        self.max_urls_per_file = positive_int(number, "max_urls_per_file")
        return self

    def set_buffer_size(self, number: int) -> "SitemapWriter":
        """Number of URLs kept in memory before writing to file. Default is 1000."""
        self.buffer_size = positive_int(number, "buffer_size")
        return self

    def set_use_indent(self, value: bool) -> "SitemapWriter":
        """Whether XML should be indented. Applies to files opened afterwards."""
        self.use_indentation = bool(value)
        return self

    # Item builder

    def _ensure_open(self):
        if self._finished:
            raise StateError(
                "Sitemap writer is already finished",
                context={"file_path": str(self.file_path)},
            )

    def set_location(self, location: str) -> "SitemapWriter":
        self._ensure_open()
        self._pending.location = validate_location(location)
        return self

    def set_last_modified(self, last_modified: Any) -> "SitemapWriter":
        """Unix timestamp (or datetime) of the last modification."""
        self._ensure_open()
        self._pending.last_modified = validate_last_modified(last_modified, self._tz)
        return self

    def set_frequency(self, frequency: Any) -> "SitemapWriter":
        self._ensure_open()
        self._pending.frequency = validate_frequency(frequency)
        return self

    def set_priority(self, priority: Any) -> "SitemapWriter":
        """Item priority, 0.0 to 1.0."""
        self._ensure_open()
        self._pending.priority = validate_priority(priority)
        return self

    def set_alternate_language(self, language: str, href: str) -> "SitemapWriter":
        """Add an xhtml:link alternate for the next item. Values are not validated."""
        self._ensure_open()
        self._pending.alternate_languages[language] = href
        return self

    # Writing

    def add_item(self, item: Optional[SitemapItem] = None) -> "SitemapWriter":
        """
        Add a new item to the sitemap.

        Args:
            item: Explicit item to write. When omitted, the values given to
                the setters since the previous call are used.

        The setter values are cleared in both cases.
        """
        self._ensure_open()
        item = item.validated(self._tz) if item is not None else self._pending
        children = item.child_elements(self._tz)
        links = prepare_links(children, item.alternate_languages)

        if self._urls_count == 0:
            self._create_new_file()
        elif self._session.urls_count >= self.max_urls_per_file:
            self._finish_file()
            self._create_new_file()

        if self._session.urls_count % self.buffer_size == 0:
            self._flush()

        self._session.write_item(children, links)
        self._pending = SitemapItem()
        self._urls_count += 1
        return self

    def _create_new_file(self):
        """Open the next file and register it."""
        index = self._file_count + 1
        file_path = self._file_path_for(index)
        session = WriterSession(file_path, index, use_indentation=self.use_indentation)
        try:
            session.open()
        except OSError:
            logger.error(
                "Failed to create sitemap file",
                extra={"file_path": file_path, "file_index": index},
                exc_info=True,
            )
            raise

        self._file_count = index
        self._session = session
        self._written_file_paths.append(file_path)
        logger.info(
            "Started sitemap file",
            extra={"file_path": file_path, "file_index": index}
        )

    def _flush(self):
        try:
            self._session.flush()
        except OSError:
            logger.error(
                "Failed to flush sitemap buffer",
                extra={"file_path": self._session.file_path},
                exc_info=True,
            )
            raise

    def _finish_file(self):
        """Write closing tags to the current file. No-op without an open file."""
        session = self._session
        if session is None or session.closed:
            return
        try:
            session.close()
        except OSError:
            logger.error(
                "Failed to finish sitemap file",
                extra={"file_path": session.file_path, "urls_in_file": session.urls_count},
                exc_info=True,
            )
            raise
        logger.info(
            "Finished sitemap file",
            extra={
                "file_path": session.file_path,
                "file_index": session.index,
                "urls_in_file": session.urls_count,
                "urls_total": self._urls_count,
            }
        )

    def write(self):
        """Finish writing. Safe to call more than once."""
        if self._finished:
            return
        self._finished = True
        self._finish_file()

    finish = write

    # Queries

    @property
    def urls_count(self) -> int:
        """Number of URLs added over the writer's lifetime."""
        return self._urls_count

    @property
    def file_count(self) -> int:
        """Number of files opened so far."""
        return self._file_count

    def _file_path_for(self, index: int) -> Path:
        if index < 2:
            return self.file_path
        return self.file_path.with_name(f"{self.file_path.stem}_{index}{self.file_path.suffix}")

    def get_current_file_path(self) -> Path:
        """Path of the file currently being written."""
        return self._file_path_for(self._file_count)

    def get_written_file_paths(self) -> List[Path]:
        """Paths of all files opened, in order."""
        return list(self._written_file_paths)

    def get_sitemap_urls(self, base_url: str) -> List[str]:
        """
        URLs of the written sitemaps.

        Args:
            base_url: Base URL of all the sitemaps written, e.g.
                ``https://example.com/sitemaps/``

        Returns:
            ``base_url`` followed by each file name, in order written
        """
        return [base_url + path.name for path in self._written_file_paths]
