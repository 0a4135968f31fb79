"""
WebDAV response interpretation bundled with its options.

This class provides a high-level interface to the parsers while
remaining completely I/O-free.  The HTTP request is made by someone
else, only the response body is handed over.
"""

import logging
from collections.abc import Iterable
from typing import Optional

from .types import DAVResult, DiskQuota, DiskQuotaAvailable, FileStat, SearchResult
from .xml_parsers import (
    parse_quota,
    parse_search,
    parse_stat,
    parse_xml,
    translate_disk_space,
)
from .xml_tree import TEXT_PROPERTIES

log = logging.getLogger(__name__)


class DAVResultParser:
    """
    Sans-I/O WebDAV response interpreter.

    Example:
        parser = DAVResultParser(strict=True)

        # Execute the PROPFIND with your I/O (not shown)
        body = io.propfind("/files/report.pdf", depth=0)

        result = parser.parse_xml(body)
        stat = parser.parse_stat(result, "/files/report.pdf", details=True)
    """

    def __init__(
        self,
        huge_tree: bool = False,
        strict: bool = False,
        text_properties: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            huge_tree: Allow parsing very large XML documents
            strict: Raise on content lengths and status lines that can't be parsed,
                instead of falling back to defaults
            text_properties: Properties whose text is never coerced into numbers.
                displayname is always included.
        """
        self.huge_tree = huge_tree
        self.strict = strict
        props = list(TEXT_PROPERTIES)
        for prop in text_properties or []:
            if prop not in props:
                props.append(prop)
        self.text_properties = tuple(props)

    @classmethod
    def from_config(
        cls, fn: Optional[str] = None, section: str = "default"
    ) -> "DAVResultParser":
        """
        Instantiate a parser from a config file section, see
        davstat.config.  Without a config file, defaults are used.
        """
        from davstat.config import parser_options, read_config

        config = read_config(fn) or {}
        options = parser_options(config, section)
        log.debug(f"parser options from config section {section}: {options}")
        return cls(**options)

    def parse_xml(self, xml: str | bytes) -> DAVResult:
        return parse_xml(xml, huge_tree=self.huge_tree, text_properties=self.text_properties)

    def parse_stat(self, result: DAVResult, filename: str, details: bool = False) -> FileStat:
        return parse_stat(result, filename, is_detailed=details, strict=self.strict)

    def parse_search(
        self, result: DAVResult, search_arbiter: str, details: bool = False
    ) -> SearchResult:
        return parse_search(result, search_arbiter, is_detailed=details)

    def parse_quota(self, result: DAVResult) -> DiskQuota | None:
        return parse_quota(result)

    def translate_disk_space(self, value: str | int | float) -> DiskQuotaAvailable:
        return translate_disk_space(value)

    def stat(self, xml: str | bytes, filename: str, details: bool = False) -> FileStat:
        """Parse a PROPFIND body and interpret it as the stat of filename"""
        return self.parse_stat(self.parse_xml(xml), filename, details=details)

    def search(
        self, xml: str | bytes, search_arbiter: str, details: bool = False
    ) -> SearchResult:
        """Parse a SEARCH body scoped to search_arbiter"""
        return self.parse_search(self.parse_xml(xml), search_arbiter, details=details)
