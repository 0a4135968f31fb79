#!/usr/bin/env python
import logging

__version__ = "0.1.0"

from .protocol import (
    DAVResultParser,
    parse_quota,
    parse_search,
    parse_stat,
    parse_xml,
    translate_disk_space,
)

## Silence notification of no default logging handler
log = logging.getLogger("davstat")
log.addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "DAVResultParser",
    "parse_quota",
    "parse_search",
    "parse_stat",
    "parse_xml",
    "translate_disk_space",
]
