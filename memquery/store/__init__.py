"""
The engine works with a document tree that it does not own.
A store keeps the tree, and knows how to save it.

* MemoryStore: keeps nothing
* JsonFileStore: a JSON file
* SqlAlchemyStore: a database table (see `memquery.sa`)
"""

from .base import Store, MemoryStore
from .jsonfile import JsonFileStore
