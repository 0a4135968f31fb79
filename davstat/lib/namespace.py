#!/usr/bin/env python
from lxml import etree

## Servers pick arbitrary prefixes for the DAV: namespace and for vendor
## namespaces (owncloud, nextcloud, sabredav, seafile), so properties are
## looked up by their local name only.


def localname(tag: str) -> str:
    """Strip the namespace part from a clark-notation ("{ns}tag") name"""
    return etree.QName(tag).localname
