"""A map whose keys are associated with collections of values."""

import logging
from importlib.metadata import version

from ._collections import Collection, OrderedCollection, UniqueCollection
from ._exceptions import InvalidArgumentError
from ._map import MultiValuedMap
from ._options import MultiValuedMapOptions

__version__ = version("multivaluemap")

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Collection",
    "InvalidArgumentError",
    "MultiValuedMap",
    "MultiValuedMapOptions",
    "OrderedCollection",
    "UniqueCollection",
]
