"""
Sans-I/O interpretation of WebDAV multistatus responses.

This module turns the XML body of a PROPFIND or SEARCH response into
canonical python objects, without doing any I/O itself.

The protocol layer is organized into:
- types: Core data structures (DAVResult, FileStat, SearchResult, ...)
- xml_tree: Conversion of raw XML into an (ambiguous) tree of python values
- xml_parsers: Pure functions normalising the tree and extracting results
- operations: DAVResultParser class bundling the parsers with their options

Example usage:

    from davstat.protocol import parse_xml, parse_stat

    # Execute the PROPFIND via your preferred I/O
    body = your_http_client.propfind("/files/report.pdf", depth=0)

    # Parse response (no I/O)
    stat = parse_stat(parse_xml(body), "/files/report.pdf")
"""

from .types import (
    # Property bag and quota values
    DiskQuotaAvailable,
    PropertyBag,
    PropertyValue,
    # Normalised result
    DAVResult,
    Multistatus,
    Propstat,
    PropstatResponse,
    StatusResponse,
    # Extracted results
    DiskQuota,
    FileStat,
    SearchResult,
)
from .xml_tree import element_to_tree, parse_tree
from .xml_parsers import (
    normalise_result,
    parse_quota,
    parse_search,
    parse_stat,
    parse_xml,
    prepare_file_from_props,
    translate_disk_space,
)
from .operations import DAVResultParser

__all__ = [
    # Types
    "DiskQuotaAvailable",
    "PropertyBag",
    "PropertyValue",
    "DAVResult",
    "Multistatus",
    "Propstat",
    "PropstatResponse",
    "StatusResponse",
    "DiskQuota",
    "FileStat",
    "SearchResult",
    # XML tree
    "element_to_tree",
    "parse_tree",
    # Parsers
    "normalise_result",
    "parse_quota",
    "parse_search",
    "parse_stat",
    "parse_xml",
    "prepare_file_from_props",
    "translate_disk_space",
    # Facade
    "DAVResultParser",
]
