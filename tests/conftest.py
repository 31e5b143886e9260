"""
Pytest configuration and fixtures for the item set editor tests
"""

import pytest

from itemset_model import Block, Document, Item, ItemSet


VALID_FILE_ITEM_SETS = {
    'itemSets': [
        {
            'uid': 'LOL_7962AA86-44CC-5D6F-4959-B68C8B1D0888',
            'type': 'custom',
            'associatedChampions': [],
            'mode': 'any',
            'sortrank': 0,
            'associatedMaps': [],
            'map': 'any',
            'title': 'Custom Item Set 1',
            'blocks': [
                {
                    'items': [],
                    'type': 'starting'
                }
            ],
            'isGlobalForMaps': True,
            'priority': False,
            'isGlobalForChampions': True
        }
    ],
    'timeStamp': 1402018653132
}

# No 0x06 marker and no braces in either
PROPERTIES_PREFIX = bytes([0x0A, 0x0B, 0x01, 0x29, 0x73, 0x75, 0x6D, 0x6D, 0x00])
PROPERTIES_SUFFIX = bytes([0x01, 0x02, 0x03, 0x88])


def add_custom_item_set(document, title):
    item_set = ItemSet(
        title=title,
        uid='LOL_4A10C341-090D-0A22-4209-ECE41F1DB04F',
        type='custom',
        mode='any',
        sortrank=0,
        map='any',
        is_global_for_maps=True,
        is_global_for_champions=True,
        priority=False,
    )
    document.item_sets.append(item_set)
    return item_set


def add_block(item_set, block_type):
    block = Block(type=block_type)
    item_set.blocks.append(block)
    return block


def add_item(block, item_id):
    block.items.append(Item(id=item_id, count=1))


def add_map(item_set, map_id):
    item_set.associated_maps.append(map_id)
    item_set.is_global_for_maps = False


def add_champion(item_set, champion_id):
    item_set.associated_champions.append(champion_id)
    item_set.is_global_for_champions = False


def expected_checksum_of(value):
    if value > 65535:
        return value.to_bytes(4, 'big')[1:]
    return value.to_bytes(2, 'big')


@pytest.fixture
def base_document():
    """Empty item set document"""
    return Document(time_stamp=1402323520721)


@pytest.fixture
def valid_document():
    """Document with one custom item set holding an empty "starting" block"""
    return Document.from_dict(VALID_FILE_ITEM_SETS)


@pytest.fixture
def valid_properties(valid_document):
    """Preferences file contents wrapping valid_document"""
    from envelope_writer import build_envelope
    return build_envelope(valid_document, prefix=PROPERTIES_PREFIX, suffix=PROPERTIES_SUFFIX)


@pytest.fixture
def properties_file(tmp_path, valid_properties):
    """Preferences file on disk"""
    path = tmp_path / "summoner.properties"
    path.write_bytes(valid_properties)
    return path
