"""
### Include Operation
Include lets the API user load related items together with the items themselves.

Relations are not declared anywhere: they are discovered by a naming convention.
An item of the `comments` resource that belongs to a post has a `postId` field.

Include works both ways:

* Embed: give the name of a child resource to load all children of every item:

    ```
    GET /posts?_include=comments
    ```

    Every post gets a `comments` list of the comments that have `postId` equal to the post's `id`.
    A post without comments gets an empty list.

* Expand: give the singular name of a parent resource to load the parent of every item:

    ```
    GET /comments?_include=post
    ```

    Every comment gets a `post` object: the item of the `posts` resource with `id` equal to the comment's `postId`.
    A comment without a `postId` (or with `postId: null`) gets no `post` key at all;
    a comment whose `postId` points to a missing post gets `post: null`.

Several relations can be included at once: `?_include=comments&_include=author`.
Related items are loaded one level deep: their own relations are never included.
Ids and foreign keys are compared as strings: `postId: 1` refers to the post with `id: "1"`.
"""

import logging

from .base import MemQueryHandlerBase
from ..exc import InvalidQueryError, InvalidRelationError
from ..util.compare import same_id
from ..util.inflect import pluralize, singularize

logger = logging.getLogger(__name__)


class MemInclude(MemQueryHandlerBase):
    """ Embed children, expand parents

        Input: list of relation names, or a single name

        Supports: child resources (embed), parent resources by their singular name (expand)
    """

    query_object_section_name = 'include'

    #: The field that identifies an item
    ID_FIELD = 'id'

    #: Foreign key field name format
    FOREIGN_KEY_FORMAT = '{}Id'

    def __init__(self, resource, allowed_includes=None):
        """ Init an include handler

        :param resource: Resource name
        :param allowed_includes: List of relation names that the API user can include. None: no limitation.
        """
        super(MemInclude, self).__init__(resource)

        # Config
        self.allowed_includes = frozenset(allowed_includes) if allowed_includes is not None else None

        # On input
        #: list of relation names
        self.includes = None

    def input(self, includes):
        super(MemInclude, self).input(includes)
        self.includes = self._input(includes)
        return self

    def _input(self, includes):
        # Empty
        if not includes:
            return []

        # String syntax
        if isinstance(includes, str):
            includes = [includes]

        if not isinstance(includes, (list, tuple)) or not all(isinstance(v, str) for v in includes):
            raise InvalidQueryError('{} must be a list of relation names'.format(self.query_object_section_name))

        # Validate
        if self.allowed_includes is not None:
            for name in includes:
                if name not in self.allowed_includes:
                    raise InvalidRelationError(self.resource, name, self.query_object_section_name)

        # Unique, in order
        return list(dict.fromkeys(includes))

    def is_input_empty(self):
        return not self.includes

    @property
    def data(self) -> dict:
        """ The whole document tree, to look related items up in """
        return self.query.data

    def foreign_key(self, resource: str) -> str:
        """ Get the name of the field that refers to an item of `resource`: 'posts' -> 'postId' """
        return self.FOREIGN_KEY_FORMAT.format(singularize(resource))

    def pluck_item(self, item: dict) -> dict:
        """ Make a copy of an item, and attach related items to it

            The stored item itself is never modified.
        """
        result = dict(item)
        for name in self.includes or ():
            self._include(result, item, name)
        return result

    def _include(self, result: dict, item: dict, name: str):
        """ Include one relation into `result` """
        # Embed: `name` is a resource
        if isinstance(self.data.get(name), list):
            result[name] = self._embed(item, name)
            return

        # Expand: `name` is a singular name of a resource
        parent_resource = pluralize(name)
        if isinstance(self.data.get(parent_resource), list):
            fk = self.FOREIGN_KEY_FORMAT.format(name)
            fk_value = item.get(fk)
            if fk_value is not None:
                result[name] = self._expand(fk_value, parent_resource)
            return

        logger.debug('Cannot include %r into %r: neither %r nor %r is a resource',
                     name, self.resource, name, parent_resource)

    def _embed(self, item: dict, child_resource: str) -> list:
        """ Get the children of an item """
        fk = self.foreign_key(self.resource)
        item_id = item.get(self.ID_FIELD)
        if item_id is None:
            return []
        return [dict(child)
                for child in self.data[child_resource]
                if isinstance(child, dict) and same_id(child.get(fk), item_id)]

    def _expand(self, fk_value, parent_resource: str):
        """ Get the parent item by id, or None """
        for parent in self.data[parent_resource]:
            if isinstance(parent, dict) and same_id(parent.get(self.ID_FIELD), fk_value):
                return dict(parent)
        return None

    def alter_items(self, items):
        return [self.pluck_item(item) for item in items]

    def get_final_input_value(self):
        return list(self.includes)
