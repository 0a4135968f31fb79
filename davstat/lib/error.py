#!/usr/bin/env python
import logging
import os
from typing import Optional

from davstat import __version__

## Environmental variables prepended with "PYTHON_DAVSTAT" are used for debug purposes.
## one of DEBUG_PDB, DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("PYTHON_DAVSTAT_DEBUGMODE")
if not debugmode:
    if "dev" in __version__ or __version__ == "(unknown)":
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("davstat")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


def weirdness(*reasons) -> None:
    from davstat.lib.debug import xmlstring

    reason = " : ".join([xmlstring(x) for x in reasons])
    log.warning(f"Deviation from expectations found: {reason}")
    if debugmode == "DEBUG_PDB":
        log.error(f"Dropping into debugger due to {reason}")
        import pdb

        pdb.set_trace()


class DAVError(Exception):
    url: Optional[str] = None
    reason: str = "no reason"

    def __init__(self, url: Optional[str] = None, reason: Optional[str] = None) -> None:
        if url:
            self.url = url
        if reason:
            self.reason = reason
        super().__init__(self.reason)

    def __str__(self) -> str:
        if self.url is None:
            return "%s: %s" % (self.__class__.__name__, self.reason)
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.url,
            self.reason,
        )


class ResponseError(DAVError):
    """
    The XML delivered by the server could not be interpreted.
    """

    pass


class MalformedResponseError(ResponseError):
    """
    No multistatus root was found, or the body was not XML at all.
    """

    reason = "Invalid response: No root multistatus found"


class BadStatResponseError(ResponseError):
    """
    A single resource was stat'ed, but the first response in the
    multistatus carries no property data.
    """

    reason = "Failed getting item stat: bad response"


class RemoteStatusError(ResponseError):
    """
    The server reported an HTTP-style status code >= 400 for the resource
    itself.  The numeric code is available as the status property, so
    callers may tell i.e. 404 Not Found from 423 Locked without parsing
    the message.
    """

    status: int = 0
    status_text: str = ""

    def __init__(
        self, url: Optional[str] = None, status: int = 0, status_text: str = ""
    ) -> None:
        self.status = status
        self.status_text = status_text
        super().__init__(url, "Invalid response: %s %s" % (status, status_text))

    def __str__(self) -> str:
        return self.reason
