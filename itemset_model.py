#!/usr/bin/env python3
"""
Item Set Data Model
===================

Dataclasses for the item set document embedded in a summoner preferences file.

Document layout (JSON):
----------------------
    {
      "itemSets": [
        {
          "uid": "LOL_...", "type": "custom", "associatedChampions": [],
          "mode": "any", "sortrank": 0, "associatedMaps": [], "map": "any",
          "title": "Custom Item Set 1",
          "blocks": [ {"items": [{"count": 1, "id": 3000}], "type": "starting"} ],
          "isGlobalForMaps": true, "priority": false, "isGlobalForChampions": true
        }
      ],
      "timeStamp": 1402018653132
    }

Only titles, block types, map/champion ids and the number of items feed the
checksum. Every other field is passed through untouched, and keys the model
does not know are kept in `extra` so a parsed document serializes back to
the same dictionary.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from itemset_errors import MalformedDocumentError


# =============================================================================
# HELPERS
# =============================================================================

class _Missing:
    """Marks a pass-through key that was absent, as opposed to present with null"""

    def __repr__(self):
        return 'MISSING'


MISSING = _Missing()


def utf16_length(text: str) -> int:
    """Length of a string in UTF-16 code units (characters outside the BMP count twice)"""
    return len(text.encode('utf-16-le')) // 2


def _require_dict(value, what: str) -> dict:
    if not isinstance(value, dict):
        raise MalformedDocumentError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _require_list(data: dict, key: str, what: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedDocumentError(f"{what}.{key} must be an array, got {type(value).__name__}")
    return value


def _require_str(data: dict, key: str, what: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise MalformedDocumentError(f"{what}.{key} must be a string, got {type(value).__name__}")
    return value


def _extra_keys(data: dict, known: tuple) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


def _put_optional(out: dict, key: str, value):
    if value is not MISSING:
        out[key] = value


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class Item:
    """A single item entry inside a block"""
    id: Any = MISSING
    count: Any = MISSING
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ('count', 'id')

    @classmethod
    def from_dict(cls, data) -> 'Item':
        data = _require_dict(data, "item")
        return cls(id=data.get('id', MISSING), count=data.get('count', MISSING),
                   extra=_extra_keys(data, cls.KEYS))

    def to_dict(self) -> dict:
        out = {}
        _put_optional(out, 'count', self.count)
        _put_optional(out, 'id', self.id)
        out.update(self.extra)
        return out


@dataclass
class Block:
    """A titled group of items (e.g. "starting")"""
    type: str = ""
    items: List[Item] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ('items', 'type')

    @classmethod
    def from_dict(cls, data) -> 'Block':
        data = _require_dict(data, "block")
        return cls(
            type=_require_str(data, 'type', "block"),
            items=[Item.from_dict(i) for i in _require_list(data, 'items', "block")],
            extra=_extra_keys(data, cls.KEYS),
        )

    def to_dict(self) -> dict:
        out = {
            'items': [i.to_dict() for i in self.items],
            'type': self.type,
        }
        out.update(self.extra)
        return out


@dataclass
class ItemSet:
    """One custom item set. Field order follows the client's own output."""
    title: str = ""
    associated_maps: List[int] = field(default_factory=list)
    associated_champions: List[int] = field(default_factory=list)
    blocks: List[Block] = field(default_factory=list)

    # Pass-through fields, never read by the checksum
    uid: Any = MISSING
    type: Any = MISSING
    mode: Any = MISSING
    sortrank: Any = MISSING
    map: Any = MISSING
    is_global_for_maps: Any = MISSING
    is_global_for_champions: Any = MISSING
    priority: Any = MISSING

    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ('uid', 'type', 'associatedChampions', 'mode', 'sortrank',
            'associatedMaps', 'map', 'title', 'blocks', 'isGlobalForMaps',
            'priority', 'isGlobalForChampions')

    @classmethod
    def from_dict(cls, data) -> 'ItemSet':
        data = _require_dict(data, "item set")
        return cls(
            title=_require_str(data, 'title', "itemSet"),
            associated_maps=list(_require_list(data, 'associatedMaps', "itemSet")),
            associated_champions=list(_require_list(data, 'associatedChampions', "itemSet")),
            blocks=[Block.from_dict(b) for b in _require_list(data, 'blocks', "itemSet")],
            uid=data.get('uid', MISSING),
            type=data.get('type', MISSING),
            mode=data.get('mode', MISSING),
            sortrank=data.get('sortrank', MISSING),
            map=data.get('map', MISSING),
            is_global_for_maps=data.get('isGlobalForMaps', MISSING),
            is_global_for_champions=data.get('isGlobalForChampions', MISSING),
            priority=data.get('priority', MISSING),
            extra=_extra_keys(data, cls.KEYS),
        )

    def to_dict(self) -> dict:
        out = {}
        _put_optional(out, 'uid', self.uid)
        _put_optional(out, 'type', self.type)
        out['associatedChampions'] = list(self.associated_champions)
        _put_optional(out, 'mode', self.mode)
        _put_optional(out, 'sortrank', self.sortrank)
        out['associatedMaps'] = list(self.associated_maps)
        _put_optional(out, 'map', self.map)
        out['title'] = self.title
        out['blocks'] = [b.to_dict() for b in self.blocks]
        _put_optional(out, 'isGlobalForMaps', self.is_global_for_maps)
        _put_optional(out, 'priority', self.priority)
        _put_optional(out, 'isGlobalForChampions', self.is_global_for_champions)
        out.update(self.extra)
        return out


@dataclass
class Document:
    """Root of the item set document"""
    item_sets: List[ItemSet] = field(default_factory=list)
    time_stamp: Any = MISSING
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ('itemSets', 'timeStamp')

    @classmethod
    def from_dict(cls, data) -> 'Document':
        data = _require_dict(data, "document")
        return cls(
            item_sets=[ItemSet.from_dict(s) for s in _require_list(data, 'itemSets', "document")],
            time_stamp=data.get('timeStamp', MISSING),
            extra=_extra_keys(data, cls.KEYS),
        )

    def to_dict(self) -> dict:
        out = {'itemSets': [s.to_dict() for s in self.item_sets]}
        _put_optional(out, 'timeStamp', self.time_stamp)
        out.update(self.extra)
        return out
