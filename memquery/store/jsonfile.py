import asyncio
import json
import logging
import os
import tempfile
from copy import deepcopy

from .base import Store
from ..exc import StoreError

logger = logging.getLogger(__name__)


class JsonFileStore(Store):
    """ A store that keeps the tree in a JSON file

        The file is read once, when the store is created.
        Every persist() rewrites it atomically: a temporary file is written next to it, then moved over it.

        Example:

            store = JsonFileStore('db.json', default={'posts': [], 'comments': []})
    """

    def __init__(self, path, default: dict = None, indent: int = 2):
        """ Open a JSON file store

        :param path: Path to the JSON file. It does not have to exist.
        :param default: The tree to start with when the file does not exist
        :param indent: JSON indentation
        :raises StoreError: the file can't be read, or is not a JSON object
        """
        self.path = os.fspath(path)
        self.default = default
        self.indent = indent
        self.data = None
        self.load()

    def load(self):
        """ (Re-)read the file """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            data = deepcopy(self.default) if self.default is not None else {}
        except (OSError, ValueError) as e:
            raise StoreError(repr(self), 'failed to load: {}'.format(e)) from e

        if not isinstance(data, dict):
            raise StoreError(repr(self), 'the document tree must be a JSON object, {} found'.format(type(data).__name__))

        self.data = data
        return self

    async def persist(self):
        # Serialize now: the tree may change while we are writing
        try:
            text = json.dumps(self.data, indent=self.indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StoreError(repr(self), 'the document tree is not JSON-serializable: {}'.format(e)) from e

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write, text)
        logger.debug('Saved %s', self.path)

    def _write(self, text: str):
        """ Write the file atomically """
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(text)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StoreError(repr(self), 'failed to save: {}'.format(e)) from e

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.path)
