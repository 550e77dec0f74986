"""Parsing of OCA XML responses.

Four of the five operations answer with a .NET DataSet serialized as a
diffgram, where the rows sit several wrappers deep::

    <DataSet xmlns="#Oca_e_Pak">
      <xs:schema id="NewDataSet">...</xs:schema>
      <diffgr:diffgram>
        <NewDataSet xmlns="">
          <Table diffgr:id="Table1">
            <NroProducto>1</NroProducto>
            ...

Elements are matched by local name so the namespaces the service mixes in
do not affect lookups.
"""

import logging

import httpx
from lxml import etree

from ocaepak.errors import ParseError, ShapeError, UpstreamError

logger = logging.getLogger(__name__)

DATASET_ROOT = "DataSet"
DATASET_PATH = ("diffgram", "NewDataSet")
DATASET_ROW = "Table"

_parser = etree.XMLParser(resolve_entities=False, no_network=True)


def local_name(element: etree._Element) -> str:
    """Return the tag of an element without its namespace."""
    return etree.QName(element).localname


def children(element: etree._Element, name: str) -> list[etree._Element]:
    """Return the child elements with the given local name, in document order."""
    # Comments and processing instructions have a non-string tag
    return [
        child
        for child in element
        if isinstance(child.tag, str) and local_name(child) == name
    ]


def find_path(element: etree._Element, *names: str) -> etree._Element | None:
    """Follow the first matching child at each step.

    Returns None as soon as a step is missing.
    """
    current = element
    for name in names:
        matches = children(current, name)
        if not matches:
            return None
        current = matches[0]
    return current


def _has_declaration(content: bytes) -> bool:
    """Check whether a body starts with an XML declaration."""
    return content.removeprefix(b"\xef\xbb\xbf").lstrip().startswith(b"<?xml")


def parse_response(response: httpx.Response) -> etree._Element:
    """Parse an HTTP response into an XML document.

    Args:
        response: A fully read httpx response.

    Returns:
        The root element of the parsed document.

    Raises:
        UpstreamError: If the status is not 2xx. The message is the body text.
        ParseError: If the body is not well-formed XML.
    """
    if not response.is_success:
        logger.warning("Upstream error %s: %.200s", response.status_code, response.text)
        raise UpstreamError(response.text, response.status_code)

    try:
        # A declared encoding wins; otherwise the Content-Type charset does
        if response.charset_encoding and not _has_declaration(response.content):
            return etree.fromstring(response.text.lstrip("\ufeff"), _parser)
        return etree.fromstring(response.content, _parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise ParseError(f"Invalid XML in response: {e}") from e


def dataset_rows(document: etree._Element) -> list[etree._Element]:
    """Return the row elements of a diffgram document.

    A document without the DataSet/diffgram/NewDataSet/Table structure has
    no rows; this is not an error.
    """
    if local_name(document) != DATASET_ROOT:
        return []

    table = find_path(document, *DATASET_PATH)
    if table is None:
        return []

    return children(table, DATASET_ROW)


def first_value(element: etree._Element, name: str) -> str:
    """Return the text of the first child named ``name``.

    Raises:
        ShapeError: If there is no such child.
    """
    match = find_path(element, name)
    if match is None:
        raise ShapeError(f"<{local_name(element)}> has no <{name}> element")
    return match.text or ""


def map_row(
    row: etree._Element,
    fields: dict[str, str],
    strip: list[str] | None = None,
) -> dict[str, str]:
    """Flatten a row into a record.

    Args:
        row: A row element.
        fields: Record keys mapped to the row elements they are read from.
        strip: Record keys whose values get surrounding whitespace removed.

    Returns:
        A dict with one string value per key in ``fields``.
    """
    record = {key: first_value(row, source) for key, source in fields.items()}
    for key in strip or []:
        record[key] = record[key].strip()
    return record
