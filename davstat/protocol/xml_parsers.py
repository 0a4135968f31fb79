"""
Pure functions for interpreting WebDAV multistatus responses.

All functions in this module are pure - they take XML (or an already
parsed result) in and return structured data out, with no side effects
or I/O.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

from davstat.lib import error
from davstat.lib.url import basename
from davstat.lib.url import decode_href
from davstat.lib.url import encode_path
from davstat.lib.url import normalise_path

from .types import (
    DIRECTORY,
    FILE,
    DAVResult,
    DAVResultResponse,
    DiskQuota,
    DiskQuotaAvailable,
    FileStat,
    Multistatus,
    Propstat,
    PropstatResponse,
    PropertyBag,
    SearchResult,
    StatusResponse,
    split_status_line,
    status_code,
)
from .xml_tree import TEXT_PROPERTIES, parse_tree

log = logging.getLogger(__name__)

## A 507 Insufficient Storage on the search scope itself means the
## server stopped collecting matches
TRUNCATED_STATUS = 507

_leading_int_re = re.compile(r"^\s*([-+]?[0-9]+)")


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _as_single(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _as_str(value: Any) -> str:
    ## i.e. <status/> or <href/> gives an empty string, while an href
    ## like "123" may have been coerced into a number
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def parse_int(value: Any) -> int | None:
    """
    Base 10 integer parsing in the lenient sense: numbers are truncated,
    strings give their leading integer ("52130", "12 bytes").  Returns
    None if there is no integer to be found.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    match = _leading_int_re.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def _normalise_response(response: Any) -> DAVResultResponse:
    """
    One response should contain an href and either one status or one or
    more propstats.  Only the first propstat is considered.
    """
    if not isinstance(response, dict):
        error.weirdness("response element without any content", response)
        return StatusResponse(href="", status="")

    href = _as_str(_as_single(response.get("href")))
    if not href:
        error.weirdness("response without href", response)

    ## <status/> gives an empty string, which counts as no status
    status = _as_str(_as_single(response.get("status")))
    if status:
        if response.get("propstat") is not None:
            error.weirdness("response with both status and propstat", response)
        return StatusResponse(href=href, status=status)

    propstat = _as_single(response.get("propstat"))
    if propstat is None:
        error.weirdness("response without status and propstat", response)
        return StatusResponse(href=href, status="")
    if not isinstance(propstat, dict):
        ## <propstat/> - nothing in it
        propstat = {}

    prop = _as_single(propstat.get("prop"))
    if not isinstance(prop, dict):
        ## <prop/> gives an empty string
        prop = {}
    return PropstatResponse(
        href=href,
        propstat=Propstat(prop=prop, status=_as_str(_as_single(propstat.get("status")))),
    )


def normalise_result(result: dict[str, Any]) -> DAVResult:
    """
    Turn a raw tree (see xml_tree) into a DAVResult.

    The raw tree is ambiguous, a single response gives a dict and several
    responses give a list, a propstat may be wrapped in a list, etc.  After
    this step, multistatus.response is always a list and every response is
    either a StatusResponse or a PropstatResponse.

    Raises:
        MalformedResponseError: If there is no multistatus root
    """
    multistatus = result.get("multistatus")
    if isinstance(multistatus, list):
        multistatus = multistatus[0] if multistatus else None
    if multistatus == "":
        ## <multistatus/> - no responses at all
        return DAVResult(multistatus=Multistatus(response=[]))
    if not multistatus:
        raise error.MalformedResponseError()
    if not isinstance(multistatus, dict):
        error.weirdness("multistatus with text content only", multistatus)
        return DAVResult(multistatus=Multistatus(response=[]))

    responses = [_normalise_response(r) for r in _as_list(multistatus.get("response"))]
    log.debug(f"normalised multistatus with {len(responses)} responses")
    return DAVResult(multistatus=Multistatus(response=responses))


def parse_xml(
    xml: str | bytes,
    huge_tree: bool = False,
    text_properties: Iterable[str] = TEXT_PROPERTIES,
) -> DAVResult:
    """
    Parse an XML response from a WebDAV service into a DAVResult.

    Args:
        xml: Raw XML response
        huge_tree: Allow parsing very large XML documents
        text_properties: Properties whose text is never coerced to numbers

    Raises:
        MalformedResponseError: If the body is not XML or has no multistatus root
    """
    return normalise_result(parse_tree(xml, huge_tree=huge_tree, text_properties=text_properties))


def prepare_file_from_props(
    props: PropertyBag,
    filename: str,
    is_detailed: bool = False,
    strict: bool = False,
) -> FileStat:
    """
    Build a FileStat from the properties of a resource.

    Missing properties give defaults (size 0, no lastmod, no etag), a
    sparse property bag is not an error.

    Args:
        props: Property bag of the resource
        filename: The (normalised) path of the resource
        is_detailed: Attach all the properties to the result
        strict: Raise ResponseError on a content length that is not a number
    """
    lastmod = props.get("getlastmodified")
    raw_size = props.get("getcontentlength", "0")
    resource_type = props.get("resourcetype")
    mime_type = props.get("getcontenttype")
    etag = props.get("getetag")

    ## <resourcetype><collection/></resourcetype> - the collection
    ## element is empty, so only its presence counts
    if isinstance(resource_type, dict) and "collection" in resource_type:
        type_ = DIRECTORY
    else:
        type_ = FILE

    size = parse_int(raw_size)
    if size is None:
        if strict:
            raise error.ResponseError(filename, f"Invalid content length: {raw_size!r}")
        size = 0

    mime = None
    if type_ == FILE:
        mime = mime_type.split(";")[0] if isinstance(mime_type, str) else ""

    detailed_props = None
    if is_detailed:
        detailed_props = dict(props)
        ## The tree adapter leaves displayname alone, but a property bag
        ## may come from elsewhere
        if "displayname" in detailed_props:
            detailed_props["displayname"] = _as_str(detailed_props["displayname"])

    return FileStat(
        filename=filename,
        basename=basename(filename),
        lastmod=_as_str(lastmod) if lastmod is not None else None,
        size=size,
        type=type_,
        etag=etag.replace('"', "") if isinstance(etag, str) else None,
        mime=mime,
        props=detailed_props,
    )


def parse_stat(
    result: DAVResult,
    filename: str,
    is_detailed: bool = False,
    strict: bool = False,
) -> FileStat:
    """
    Interpret the result of a depth 0 PROPFIND on a single resource.

    Args:
        result: The normalised result
        filename: The path that was stat'ed
        is_detailed: Attach all the properties to the result
        strict: Raise on status lines and content lengths that can't be parsed

    Raises:
        BadStatResponseError: If the first response carries neither properties nor a status
        RemoteStatusError: If the server reports a status >= 400 for the resource
    """
    responses = result.multistatus.response
    if not responses or not isinstance(responses[0], PropstatResponse):
        raise error.BadStatResponseError(filename)
    response_item = responses[0]
    status_line = response_item.propstat.status
    if not response_item.propstat.prop and not status_line:
        ## <propstat/>
        raise error.BadStatResponseError(filename)

    code = status_code(status_line)
    if code is None:
        if strict:
            raise error.ResponseError(filename, f"Invalid status line: {status_line!r}")
        log.debug(f"could not find a status code in {status_line!r} for {filename}")
    elif code >= 400:
        parts = split_status_line(status_line)
        status_text = parts[2] if len(parts) > 2 else ""
        raise error.RemoteStatusError(filename, status=code, status_text=status_text)

    return prepare_file_from_props(
        response_item.propstat.prop,
        normalise_path(filename),
        is_detailed=is_detailed,
        strict=strict,
    )


def _is_truncation_marker(response: DAVResultResponse, arbiter: str) -> bool:
    if status_code(response.effective_status) != TRUNCATED_STATUS:
        return False
    return response.href.rstrip("/").endswith(arbiter)


def parse_search(
    result: DAVResult,
    search_arbiter: str,
    is_detailed: bool = False,
) -> SearchResult:
    """
    Interpret the result of a SEARCH request.

    Responses without properties are skipped.  The result is marked as
    truncated if the server delivered a 507 status for the searched
    collection itself.

    Args:
        result: The normalised result
        search_arbiter: The collection path that was searched
        is_detailed: Attach all the properties to each result
    """
    responses = result.multistatus.response
    arbiter = encode_path(search_arbiter).rstrip("/")
    truncated = any(_is_truncation_marker(r, arbiter) for r in responses)
    if truncated:
        log.info(f"search in {search_arbiter} was truncated by the server")

    results = [
        prepare_file_from_props(r.propstat.prop, decode_href(r.href), is_detailed)
        for r in responses
        if isinstance(r, PropstatResponse)
    ]
    return SearchResult(truncated=truncated, results=results)


def translate_disk_space(value: str | int | float) -> DiskQuotaAvailable:
    """
    Translate a quota value to bytes, "unlimited" or "unknown".

    -3 means unlimited, -2 and -1 mean the server has not computed it.
    """
    if isinstance(value, float) and value.is_integer():
        ## -3.0 is the same sentinel as -3
        value = int(value)
    raw = str(value).strip()
    if raw == "-3":
        return "unlimited"
    if raw in ("-2", "-1"):
        return "unknown"
    ret = parse_int(value)
    if ret is None:
        log.warning(f"unexpected quota value {value!r}")
        return "unknown"
    return ret


def parse_quota(result: DAVResult) -> DiskQuota | None:
    """
    Find the quota of a resource in the result of a PROPFIND asking for
    quota-used-bytes and quota-available-bytes.

    Returns None if the server does not deliver both.
    """
    responses = result.multistatus.response
    if not responses or not isinstance(responses[0], PropstatResponse):
        return None
    props = responses[0].propstat.prop
    used = props.get("quota-used-bytes")
    available = props.get("quota-available-bytes")
    if used is None or available is None:
        return None
    return DiskQuota(used=parse_int(used) or 0, available=translate_disk_space(available))
