#!/usr/bin/env python3
"""
Summoner Preferences Envelope Scanner
=====================================

Finds and parses the item set JSON document embedded in a binary summoner
preferences (.properties) file.

Envelope structure around the document:
--------------------------------------
    ... [06] [header 2 or 3 bytes] [{ ... JSON document ... }] ...

    06      - marker byte
    header  - checksum of the document (see itemset_checksum.py)
    {...}   - UTF-8 JSON, starts with 0x7B and ends on its balancing 0x7D

The start is the first 0x06 marker with 0x7B three or four bytes later.

The end is found by counting braces over the WHOLE file, not just from the
start: the first point where opens == closes ends the document, and a second
balancing point anywhere is rejected as ambiguous. Closing braces seen before
any opening brace are ignored. Braces inside JSON strings are counted too.
The client's own reader behaves the same way, so this is kept as is.
"""

import json
from dataclasses import dataclass

from itemset_errors import (
    AmbiguousError,
    InvalidInputError,
    MalformedDocumentError,
    NotFoundError,
)
from itemset_model import Document


# =============================================================================
# CONSTANTS
# =============================================================================

MARKER = 0x06
OPEN_BRACE = 0x7B
CLOSE_BRACE = 0x7D

# Possible distances from the marker to the opening brace (2 or 3 byte header)
START_OFFSETS = (3, 4)


@dataclass
class DocumentSpan:
    """Location of the item set document inside the properties data"""
    marker: int     # Offset of the 0x06 marker
    start: int      # Offset of the opening brace
    end: int        # Offset just past the closing brace

    @property
    def header_width(self) -> int:
        """Number of checksum bytes between the marker and the document"""
        return self.start - self.marker - 1

    def __str__(self):
        return (f"DocumentSpan(marker=0x{self.marker:04X}, start=0x{self.start:04X}, "
                f"end=0x{self.end:04X}, header={self.header_width} bytes)")


# =============================================================================
# SCANNING
# =============================================================================

def require_bytes(properties) -> bytes:
    if isinstance(properties, memoryview):
        return properties.tobytes()
    if not isinstance(properties, (bytes, bytearray)):
        raise InvalidInputError(
            f"Parsing the properties file requires bytes, got {type(properties).__name__}")
    return properties


def _find_marker(properties: bytes) -> tuple:
    """Returns (marker_offset, start_offset)"""
    size = len(properties)
    for i in range(size):
        if properties[i] != MARKER:
            continue
        for distance in START_OFFSETS:
            if i + distance < size and properties[i + distance] == OPEN_BRACE:
                return i, i + distance

    raise NotFoundError("Could not find any item sets (no document start found)")


def find_starting_position(properties) -> int:
    """
    Find the offset of the opening brace of the item set document.

    Raises:
        NotFoundError: no 0x06 marker is followed by 0x7B at +3 or +4
    """
    return _find_marker(require_bytes(properties))[1]


def find_ending_position(properties):
    """
    Find the offset just past the closing brace of the item set document.

    Scans the whole data from offset 0.

    Returns:
        End offset, or None if the braces never balance

    Raises:
        AmbiguousError: more than one balanced top-level region
    """
    properties = require_bytes(properties)
    ending_position = None
    open_count = 0
    close_count = 0

    for i, byte in enumerate(properties):
        if byte == OPEN_BRACE:
            open_count += 1
        elif byte == CLOSE_BRACE and open_count > 0:
            close_count += 1

            if open_count == close_count:
                if ending_position is not None:
                    raise AmbiguousError(
                        "Found an unexpected number of custom item sets "
                        "(more than one balanced top-level document found)")
                ending_position = i + 1

    return ending_position


def locate_document(properties) -> DocumentSpan:
    """
    Locate the item set document.

    Raises:
        InvalidInputError: properties is not bytes
        NotFoundError: no start marker, or the braces never balance
        AmbiguousError: more than one balanced region
    """
    properties = require_bytes(properties)
    marker, start = _find_marker(properties)
    end = find_ending_position(properties)

    if end is None:
        raise NotFoundError("Could not find the end of the item sets (unbalanced braces)")

    return DocumentSpan(marker=marker, start=start, end=end)


def extract_document_bytes(properties) -> bytes:
    """Return the raw JSON bytes of the item set document"""
    properties = require_bytes(properties)
    span = locate_document(properties)
    return bytes(properties[span.start:span.end])


def parse_document(raw: bytes) -> Document:
    """
    Parse raw JSON bytes into a Document.

    Raises:
        MalformedDocumentError: not UTF-8, not JSON, or not an item set object
    """
    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(f"Item sets are not valid UTF-8: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"Item sets are not valid JSON: {e}") from e

    return Document.from_dict(data)


def get_item_sets(properties) -> Document:
    """
    Search the properties data for the item sets and return them as a Document.

    Args:
        properties: Raw contents of the preferences file

    Returns:
        Parsed Document
    """
    return parse_document(extract_document_bytes(properties))
