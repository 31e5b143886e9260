#!/usr/bin/env python3
"""
Summoner Preferences Envelope Writer
====================================

Puts a (possibly rewritten) item set document back into a preferences file,
together with a freshly calculated checksum header.

Header:
------
The checksum is 1, 2 or 3 bytes but the client only reads a 2 or 3 byte
header, so a 1 byte checksum (empty document) is padded with a leading 0x00.

Usage:
    from envelope_writer import replace_item_sets
    new_data = replace_item_sets(old_data, document)
"""

import json

from envelope_scanner import MARKER, require_bytes, locate_document, parse_document
from itemset_checksum import calculate_checksum
from itemset_model import Document

MIN_HEADER_WIDTH = 2


def encode_document(document: Document) -> bytes:
    """Serialize a Document as compact UTF-8 JSON, the way the client writes it"""
    return json.dumps(document.to_dict(), separators=(',', ':'),
                      ensure_ascii=False).encode('utf-8')


def build_header(document: Document) -> bytes:
    """Checksum bytes as stored between the marker and the document"""
    checksum = calculate_checksum(document)
    return checksum.rjust(MIN_HEADER_WIDTH, b'\x00')


def build_envelope(document: Document, prefix: bytes = b'', suffix: bytes = b'') -> bytes:
    """
    Build a minimal envelope: prefix + marker + header + document + suffix.

    Args:
        document: Item set document
        prefix: Bytes placed before the marker
        suffix: Bytes placed after the document
    """
    return b''.join([
        bytes(prefix),
        bytes([MARKER]),
        build_header(document),
        encode_document(document),
        bytes(suffix),
    ])


def replace_item_sets(properties, document: Document) -> bytes:
    """
    Replace the item set document and its checksum header in existing data.

    Everything before the marker and after the document is kept byte for byte.

    Args:
        properties: Raw contents of the preferences file
        document: New item set document

    Returns:
        New file contents
    """
    properties = require_bytes(properties)
    span = locate_document(properties)

    result = bytearray()
    result.extend(properties[:span.marker + 1])     # Everything up to and including the marker
    result.extend(build_header(document))           # New checksum
    result.extend(encode_document(document))        # New document
    result.extend(properties[span.end:])            # Everything after the document
    return bytes(result)


def verify_checksum(properties) -> tuple:
    """
    Compare the stored checksum header with a recalculated one.

    Returns:
        (stored_header, calculated_header)
    """
    properties = require_bytes(properties)
    span = locate_document(properties)
    document = parse_document(bytes(properties[span.start:span.end]))

    stored = bytes(properties[span.marker + 1:span.start])
    calculated = build_header(document).rjust(span.header_width, b'\x00')
    return stored, calculated


def checksum_matches(properties) -> bool:
    """True if the stored checksum header matches the document"""
    stored, calculated = verify_checksum(properties)
    return stored == calculated


def replace_checksum(properties) -> bytes:
    """
    Rewrite only the checksum header; the document bytes are kept as they are.

    Args:
        properties: Raw contents of the preferences file

    Returns:
        New file contents
    """
    properties = require_bytes(properties)
    span = locate_document(properties)
    document = parse_document(bytes(properties[span.start:span.end]))

    result = bytearray()
    result.extend(properties[:span.marker + 1])
    result.extend(build_header(document))
    result.extend(properties[span.start:])
    return bytes(result)
