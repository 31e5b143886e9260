"""
Tests for locating and parsing the item set document
"""

import pytest

from conftest import PROPERTIES_PREFIX, VALID_FILE_ITEM_SETS
from envelope_scanner import (
    DocumentSpan,
    extract_document_bytes,
    find_ending_position,
    find_starting_position,
    get_item_sets,
    locate_document,
)
from itemset_errors import (
    AmbiguousError,
    InvalidInputError,
    ItemSetError,
    MalformedDocumentError,
    NotFoundError,
)
from itemset_model import Document


def test_rejects_text_input():
    with pytest.raises(InvalidInputError, match='requires bytes'):
        get_item_sets('hi')


def test_invalid_input_is_a_type_error():
    with pytest.raises(TypeError):
        get_item_sets(['hi'])


def test_returns_the_item_sets(valid_properties):
    document = get_item_sets(valid_properties)
    assert document == Document.from_dict(VALID_FILE_ITEM_SETS)
    assert document.to_dict() == VALID_FILE_ITEM_SETS


def test_not_found_without_marker():
    with pytest.raises(NotFoundError, match='no document start found'):
        get_item_sets(b'hi')


def test_not_found_on_empty_input():
    with pytest.raises(NotFoundError):
        get_item_sets(b'')


def test_marker_at_end_of_data_does_not_overrun():
    with pytest.raises(NotFoundError):
        find_starting_position(bytes([0x00, 0x7B, 0x06, 0x88]))


def test_two_balanced_regions_are_ambiguous():
    # Start(0x06), Checksum (0x88 0x88), {}, then a random open and closing bracket
    data = bytes([0x06, 0x88, 0x88, 0x7B, 0x7D, 0x7B, 0x7D])
    with pytest.raises(AmbiguousError):
        get_item_sets(data)


def test_balanced_region_before_marker_is_ambiguous():
    data = b'{}' + bytes([0x01, 0x02, 0x06, 0x88, 0x88]) + b'{}'
    with pytest.raises(AmbiguousError, match='more than one balanced'):
        get_item_sets(data)


def test_ignores_closing_brackets_before_item_sets():
    # Random Closing Bracket, Start(0x06), Checksum (0x88 0x88), {}, Unrelated Info(0x88)
    data = bytes([0x7D, 0x06, 0x88, 0x88, 0x7B, 0x7D, 0x88])
    assert get_item_sets(data) == Document()


def test_three_byte_header():
    data = bytes([0x06, 0x81, 0xA7, 0x49, 0x7B, 0x7D])
    span = locate_document(data)
    assert span == DocumentSpan(marker=0, start=4, end=6)
    assert span.header_width == 3


def test_two_byte_header(valid_properties):
    span = locate_document(valid_properties)
    assert span.marker == len(PROPERTIES_PREFIX)
    assert span.start == span.marker + 3
    assert span.header_width == 2
    assert valid_properties[span.end - 1] == 0x7D


def test_first_matching_marker_wins():
    data = bytes([0x06, 0x00, 0x00, 0x00, 0x00, 0x06, 0x88, 0x88, 0x7B, 0x7D])
    assert find_starting_position(data) == 8


def test_unbalanced_braces_are_not_found():
    data = bytes([0x06, 0x88, 0x88, 0x7B, 0x7B, 0x7D])
    assert find_ending_position(data) is None
    with pytest.raises(NotFoundError):
        get_item_sets(data)


def test_no_braces_ends_nowhere():
    assert find_ending_position(b'\x06\x01\x02') is None


def test_nested_braces_end_on_outermost():
    data = bytes([0x06, 0x88, 0x88]) + b'{"a":{"b":{}}}' + b'\x88'
    assert find_ending_position(data) == len(data) - 1


def test_not_json_is_malformed():
    data = bytes([0x06, 0x88, 0x88, 0x7B, 0x78, 0x7D])
    with pytest.raises(MalformedDocumentError):
        get_item_sets(data)


def test_invalid_utf8_is_malformed():
    data = bytes([0x06, 0x88, 0x88, 0x7B, 0xFF, 0x7D])
    with pytest.raises(MalformedDocumentError, match='UTF-8'):
        get_item_sets(data)


def test_wrong_structure_is_malformed():
    data = bytes([0x06, 0x88, 0x88]) + b'{"itemSets":5}'
    with pytest.raises(MalformedDocumentError):
        get_item_sets(data)


def test_end_before_start_is_malformed():
    data = b'{}' + bytes([0x06, 0x88, 0x88, 0x7B])
    with pytest.raises(MalformedDocumentError):
        get_item_sets(data)


def test_errors_share_a_base_class():
    with pytest.raises(ItemSetError):
        get_item_sets(b'')


@pytest.mark.parametrize("wrap", [bytes, bytearray, memoryview])
def test_accepts_bytes_like_input(valid_properties, wrap):
    raw = extract_document_bytes(wrap(valid_properties))
    assert isinstance(raw, bytes)
    assert raw.startswith(b'{"itemSets":')
