"""
Core result types for the WebDAV response normalization.

These dataclasses are the canonical shape of a parsed multistatus
response and of the file metadata extracted from it.  They are built
fresh for every parse and never shared.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Union

PropertyValue = Union[str, int, float, bool, dict[str, Any], list[Any]]
PropertyBag = dict[str, PropertyValue]

DiskQuotaAvailable = Union[Literal["unlimited", "unknown"], int]

FILE = "file"
DIRECTORY = "directory"


def status_code(status: str) -> int | None:
    """
    Extract the status code from a status line like "HTTP/1.1 200 OK".

    Returns None if there is no numeric code in the second position.
    """
    parts = split_status_line(status)
    if len(parts) < 2:
        return None
    try:
        return int(parts[1])
    except ValueError:
        return None


def split_status_line(status: str) -> list[str]:
    """
    Split a status line into protocol version, status code and reason
    phrase (ref https://tools.ietf.org/html/rfc2068#section-6.1).  The
    reason phrase may contain spaces.
    """
    return status.split(" ", 2)


@dataclass(frozen=True)
class StatusResponse:
    """
    A response carrying a status for the whole resource and no properties,
    i.e. a 404 for a deleted resource or a 507 marking a truncated search.

    Attributes:
        href: href as delivered by the server (not decoded)
        status: status line, i.e. "HTTP/1.1 507 Insufficient Storage"
    """

    href: str
    status: str

    @property
    def effective_status(self) -> str:
        return self.status

    def to_dict(self) -> dict[str, Any]:
        return {"href": self.href, "status": self.status}


@dataclass(frozen=True)
class Propstat:
    """
    Properties of a resource together with the status line describing
    the outcome of fetching them.
    """

    prop: PropertyBag = field(default_factory=dict)
    status: str = ""


@dataclass(frozen=True)
class PropstatResponse:
    """
    A response carrying properties for a resource.

    Attributes:
        href: href as delivered by the server (not decoded)
        propstat: the (single) propstat block
    """

    href: str
    propstat: Propstat

    @property
    def effective_status(self) -> str:
        return self.propstat.status

    def to_dict(self) -> dict[str, Any]:
        return {
            "href": self.href,
            "propstat": {"prop": self.propstat.prop, "status": self.propstat.status},
        }


DAVResultResponse = Union[StatusResponse, PropstatResponse]


@dataclass(frozen=True)
class Multistatus:
    response: list[DAVResultResponse] = field(default_factory=list)


@dataclass(frozen=True)
class DAVResult:
    """
    Canonical form of a multistatus document.  multistatus.response is
    always a list, possibly empty.
    """

    multistatus: Multistatus = field(default_factory=Multistatus)

    @property
    def responses(self) -> list[DAVResultResponse]:
        return self.multistatus.response

    def to_dict(self) -> dict[str, Any]:
        """The logical shape, suitable for feeding back into normalise_result"""
        return {
            "multistatus": {"response": [r.to_dict() for r in self.multistatus.response]}
        }


@dataclass(frozen=True)
class FileStat:
    """
    Metadata of one file or directory.

    Attributes:
        filename: full (decoded) path
        basename: last path segment, empty for the root
        lastmod: last modified date as delivered by the server
        size: content length in bytes, 0 for directories
        type: "file" or "directory"
        etag: etag without quotes
        mime: media type without parameters, only set for files
        props: all properties of the resource, only set on detailed requests
    """

    filename: str
    basename: str
    lastmod: str | None
    size: int
    type: str
    etag: str | None
    mime: str | None = None
    props: PropertyBag | None = None

    @property
    def is_directory(self) -> bool:
        return self.type == DIRECTORY

    def to_dict(self) -> dict[str, Any]:
        ret: dict[str, Any] = {
            "filename": self.filename,
            "basename": self.basename,
            "lastmod": self.lastmod,
            "size": self.size,
            "type": self.type,
            "etag": self.etag,
        }
        if self.mime is not None:
            ret["mime"] = self.mime
        if self.props is not None:
            ret["props"] = self.props
        return ret


@dataclass(frozen=True)
class SearchResult:
    """
    Parsed result of a SEARCH request.

    Attributes:
        truncated: True if the server signaled that not all matches were returned
        results: matches, in the order delivered by the server
    """

    truncated: bool = False
    results: list[FileStat] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "truncated": self.truncated,
            "results": [r.to_dict() for r in self.results],
        }


@dataclass(frozen=True)
class DiskQuota:
    """
    Quota of the resource.

    Attributes:
        used: bytes used
        available: bytes available, or "unlimited"/"unknown"
    """

    used: int
    available: DiskQuotaAvailable
