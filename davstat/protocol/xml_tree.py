"""
Conversion of multistatus XML into a plain tree of dicts, lists and scalars.

The tree is ambiguous by nature: an element occurring once gives a scalar
or a dict, while the very same element occurring twice gives a list.  The
normalizer in xml_parsers takes care of that; this module only turns the
lxml element tree into python values.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

from lxml import etree
from lxml.etree import _Element

from davstat.lib import error
from davstat.lib.namespace import localname
from davstat.lib.python_utilities import to_wire

log = logging.getLogger(__name__)

## Key used for text content in elements that also have attributes or children
TEXT_KEY = "text"

## Properties whose text content is never turned into a number.  A
## displayname like "2024.10" would otherwise become the float 2024.1
TEXT_PROPERTIES = ("displayname",)

_hex_re = re.compile(r"^[-+]?0x[a-fA-F0-9]+$")
_num_re = re.compile(r"^([-+])?(0*)(\.[0-9]+|[0-9]+(\.[0-9]+)?)$")

## Start tags, and the attributes inside them.  Some servers emit
## attributes without a value (<nc:system-tag nc:checked>), which lxml
## refuses to parse
_start_tag_re = re.compile(
    rb"<([A-Za-z_][^\s/>]*)"
    rb"((?:\s+[^\s=/>\"']+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'))?)*)"
    rb"(\s*/?>)"
)
_attribute_re = re.compile(rb"(\s+)([^\s=/>\"']+)(\s*=\s*(?:\"[^\"]*\"|'[^']*'))?")


def _trim_zeros(number: str) -> str:
    if "." not in number:
        return number
    number = number.rstrip("0")
    if number == ".":
        return "0"
    if number.startswith("."):
        number = "0" + number
    return number.rstrip(".")


def _float_str(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_number(text: str) -> Any:
    """
    Coerce a numeric-looking string into an int or float, else return
    the string untouched.

    * Hexadecimal numbers ("0x1F") are recognized.
    * Numbers with leading zeros ("0123") are not numbers, they are
      typically identifiers.  "0.5" is a number.
    * Decimals are only coerced if the float represents them exactly,
      "3.14159265358979323846" stays a string.
    * Exponent notation is left alone.
    """
    trimmed = text.strip()
    if _hex_re.match(trimmed):
        return int(trimmed, 16)
    match = _num_re.match(trimmed)
    if not match:
        return text
    zeros, body = match.group(2), match.group(3)
    if zeros and not body.startswith("."):
        return text
    if "." not in body:
        return int(trimmed)
    value = float(trimmed)
    if _float_str(abs(value)) != _trim_zeros(body):
        return text
    return value


def _attribute_value(value: str) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def _text_content(elem: _Element) -> str:
    parts = [elem.text or ""]
    parts.extend(child.tail or "" for child in elem)
    return "".join(parts).strip()


def _convert(
    elem: _Element, text_properties: Iterable[str]
) -> tuple[str, Any]:
    name = localname(elem.tag)
    ## comments and processing instructions have a non-string tag
    children = [child for child in elem if isinstance(child.tag, str)]
    attributes = {
        localname(key): _attribute_value(value) for key, value in elem.attrib.items()
    }
    text: Any = _text_content(elem)
    if text and name not in text_properties:
        text = to_number(text)

    if not children and not attributes:
        return name, text

    value: dict[str, Any] = dict(attributes)
    grouped: dict[str, list[Any]] = {}
    for child in children:
        child_name, child_value = _convert(child, text_properties)
        grouped.setdefault(child_name, []).append(child_value)
    for child_name, values in grouped.items():
        value[child_name] = values[0] if len(values) == 1 else values
    if text != "":
        value[TEXT_KEY] = text
    return name, value


def element_to_tree(
    elem: _Element, text_properties: Iterable[str] = TEXT_PROPERTIES
) -> dict[str, Any]:
    """
    Convert an lxml element into a tree, keyed by the (namespace
    stripped) name of the element.

    * Attributes are merged into the same dict as child elements.
    * Attribute values "true" and "false" become booleans.
    * Repeated child elements become lists, in document order.
    * Text next to attributes or children ends up under the "text" key.
    """
    name, value = _convert(elem, tuple(text_properties))
    return {name: value}


def fill_boolean_attributes(xml: bytes) -> bytes:
    """
    Give every attribute without a value the value "true", so that
    <tag checked> reads like <tag checked="true">.
    """

    def fill_attribute(match):
        if match.group(3) is not None:
            return match.group(0)
        return match.group(1) + match.group(2) + b'="true"'

    def fill_tag(match):
        attributes = _attribute_re.sub(fill_attribute, match.group(2))
        return b"<" + match.group(1) + attributes + match.group(3)

    return _start_tag_re.sub(fill_tag, xml)


def _fromstring(xml: bytes, parser: etree.XMLParser) -> _Element:
    try:
        return etree.fromstring(xml, parser)
    except etree.XMLSyntaxError as err:
        filled = fill_boolean_attributes(xml)
        if filled == xml:
            raise error.MalformedResponseError(
                reason=f"Invalid response: {err}"
            ) from err
    log.debug("attributes without value found, parsing them as true")
    try:
        return etree.fromstring(filled, parser)
    except etree.XMLSyntaxError as err:
        raise error.MalformedResponseError(reason=f"Invalid response: {err}") from err


def parse_tree(
    xml: str | bytes,
    huge_tree: bool = False,
    text_properties: Iterable[str] = TEXT_PROPERTIES,
) -> dict[str, Any]:
    """
    Parse an XML document into a tree.

    Args:
        xml: Raw XML, as str or bytes
        huge_tree: Allow parsing very large XML documents
        text_properties: Element names whose text is never coerced to numbers

    Attributes without a value are accepted and read as true.

    Raises:
        MalformedResponseError: If the document is not well-formed XML
    """
    parser = etree.XMLParser(remove_blank_text=True, huge_tree=huge_tree)
    root = _fromstring(to_wire(xml), parser)
    if log.isEnabledFor(logging.DEBUG):
        log.debug(etree.tostring(root, pretty_print=True))
    return element_to_tree(root, text_properties)
