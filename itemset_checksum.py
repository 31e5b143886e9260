#!/usr/bin/env python3
"""
Item Set Checksum
=================

Recomputes the checksum the client stores in front of the item set document.
Without a matching value the client treats the preferences file as corrupt and
discards the item sets.

The checksum is not a hash of the bytes. It is a running total driven only by
the document's shape: how many item sets, blocks, items, map and champion ids
there are, plus title/block type lengths and id digit counts.

Accumulator:
-----------
    total    starts at 83
    baseline starts at 0x8080 (32896)

Every value is added through accumulate():
  1. If total is still a single byte (< 128) and the add would push it to
     128 or more, 0x8000 is added first.
  2. The value is added.
  3. Each time total passes baseline, baseline moves up by 256 and total
     gains another 128 (band crossing).

Per element costs:
-----------------
| Element                     | Cost                               |
|-----------------------------|------------------------------------|
| item set                    | -128, then 608                     |
| item set title              | 2 per UTF-16 code unit             |
| item set after the first    | 2                                  |
| map / champion id           | 2, then 2 per decimal digit        |
| block                       | 44                                 |
| block type                  | 2 per UTF-16 code unit             |
| block after the first       | 2                                  |
| item                        | 46                                 |
| item after the first        | 2                                  |

Encoding:
--------
    total > 0xFFFF : total += floor((total - 0xFFFF) / 0x8000) * 0x8000
                     total += 0x808000
                     low 3 bytes of the 32-bit big-endian value
    total > 128    : 2 bytes big-endian
    otherwise      : 1 byte

Usage:
    from itemset_checksum import calculate_checksum
    checksum = calculate_checksum(document)
"""

import struct
from dataclasses import dataclass

from itemset_errors import InvalidInputError
from itemset_model import Document, utf16_length


# =============================================================================
# CONSTANTS
# =============================================================================

INITIAL_TOTAL = 83
INITIAL_BASELINE = 0x8080
BAND_WIDTH = 256
BAND_PADDING = 128
SINGLE_BYTE_LIMIT = 128
HIGH_BYTE_CARRY = 0x8000

ITEM_SET_RESET = 128
ITEM_SET_COST = 608
BLOCK_COST = 44
ITEM_COST = 46
ID_COST = 2
SEPARATOR_COST = 2
CHAR_COST = 2

TWO_BYTE_LIMIT = 0xFFFF
THREE_BYTE_STEP = 0x8000
THREE_BYTE_OFFSET = 0x808000


# =============================================================================
# ACCUMULATOR
# =============================================================================

def accumulate(value: int, total: int, baseline: int) -> tuple:
    """
    Add one value to the running total.

    Args:
        value: Amount to add
        total: Current total
        baseline: Current band boundary

    Returns:
        (total, baseline) after the add and any band crossings
    """
    if total < SINGLE_BYTE_LIMIT and value + total >= SINGLE_BYTE_LIMIT:
        total += HIGH_BYTE_CARRY

    total += value
    while total > baseline:
        baseline += BAND_WIDTH
        total += BAND_PADDING

    return total, baseline


@dataclass
class ChecksumAccumulator:
    """The (total, baseline) pair for a single checksum calculation"""
    total: int = INITIAL_TOTAL
    baseline: int = INITIAL_BASELINE

    def add(self, value: int):
        self.total, self.baseline = accumulate(value, self.total, self.baseline)

    def add_text(self, text: str):
        self.add(utf16_length(text) * CHAR_COST)

    def add_id(self, identifier):
        # Only the number of decimal digits counts, not the value
        if isinstance(identifier, float) and identifier.is_integer():
            identifier = int(identifier)
        self.add(ID_COST)
        self.add(len(str(identifier)) * CHAR_COST)


# =============================================================================
# CHECKSUM
# =============================================================================

def _as_document(document) -> Document:
    if isinstance(document, Document):
        return document
    if isinstance(document, dict):
        return Document.from_dict(document)
    raise InvalidInputError(
        f"Checksum requires an item set Document, got {type(document).__name__}")


def calculate_total(document) -> int:
    """
    Run the accumulator over the whole document.

    Args:
        document: Document (or the equivalent JSON dictionary)

    Returns:
        Raw total before encoding
    """
    document = _as_document(document)
    acc = ChecksumAccumulator()

    # The order of these steps is significant
    for set_index, item_set in enumerate(document.item_sets):
        acc.total -= ITEM_SET_RESET
        acc.add(ITEM_SET_COST)
        acc.add_text(item_set.title)

        if set_index > 0:
            acc.add(SEPARATOR_COST)

        for map_id in item_set.associated_maps:
            acc.add_id(map_id)

        for champion_id in item_set.associated_champions:
            acc.add_id(champion_id)

        for block_index, block in enumerate(item_set.blocks):
            acc.add(BLOCK_COST)
            acc.add_text(block.type)

            if block_index > 0:
                acc.add(SEPARATOR_COST)

            for item_index, _item in enumerate(block.items):
                acc.add(ITEM_COST)

                if item_index > 0:
                    acc.add(SEPARATOR_COST)

    return acc.total


def encode_total(total: int) -> bytes:
    """
    Encode a raw total as the 1, 2 or 3 byte checksum stored in the file.

    Args:
        total: Value returned by calculate_total()

    Returns:
        Big-endian checksum bytes
    """
    if total > TWO_BYTE_LIMIT:
        max_increases = (total - TWO_BYTE_LIMIT) // THREE_BYTE_STEP
        total += max_increases * THREE_BYTE_STEP
        total += THREE_BYTE_OFFSET
        return struct.pack('>I', total & 0xFFFFFFFF)[1:]
    elif total > SINGLE_BYTE_LIMIT:
        return struct.pack('>H', total)
    else:
        return struct.pack('>B', total)


def calculate_checksum(document) -> bytes:
    """
    Calculate the checksum for an item set document.

    Args:
        document: Document (or the equivalent JSON dictionary)

    Returns:
        1, 2 or 3 checksum bytes, big-endian
    """
    return encode_total(calculate_total(document))
