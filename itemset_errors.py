#!/usr/bin/env python3
"""
Item Set Errors
===============

Exceptions raised while extracting or checksumming the item sets stored in a
summoner preferences file. Each one also derives from the closest built-in
exception, so callers can catch ValueError/LookupError/TypeError as usual.
"""


class ItemSetError(Exception):
    """Base class for all item set errors"""


class InvalidInputError(ItemSetError, TypeError):
    """Input is not the expected type (raw bytes, or an item set Document)"""


class NotFoundError(ItemSetError, LookupError):
    """No item set document could be located in the properties data"""


class AmbiguousError(ItemSetError, ValueError):
    """More than one balanced top-level document was found"""


class MalformedDocumentError(ItemSetError, ValueError):
    """The located bytes do not form a valid item set document"""
