#!/usr/bin/env python
from urllib.parse import quote
from urllib.parse import unquote

## Characters left alone when encoding a single path segment.  This is
## the same set browsers leave alone in encodeURIComponent, which is what
## most servers compare hrefs against.
SEGMENT_SAFE = "!'()*~"


def normalise_path(path: str) -> str:
    """
    The canonical form of a request path: always a leading slash, never a
    trailing slash (except for the root itself).
    """
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return path


def encode_path(path: str) -> str:
    """
    Percent-encode every segment of a path, keeping the slashes.  An
    already encoded path will be double encoded, as the server would
    do it.
    """
    return "/".join(quote(segment, safe=SEGMENT_SAFE) for segment in path.split("/"))


def decode_href(href: str) -> str:
    """
    Decode an href as delivered in a multistatus response.  Each segment
    is decoded by itself, so the path is split on the separators as the
    server delivered them, not on whatever shows up after decoding.
    """
    return "/".join(unquote(segment) for segment in href.split("/"))


def basename(path: str) -> str:
    """Last segment of a path, ignoring a trailing slash.  Empty for the root."""
    return path.rstrip("/").rsplit("/", 1)[-1]
