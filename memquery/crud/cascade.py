""" What happens to dependent items when an item is deleted

When a post is deleted, its comments still refer to it with `postId`.
There are two ways to deal with them:

* Unlink (default): `postId` is set to `null` in every item of every other resource.
  The comments stay.
* Delete: the caller names the resources whose items depend on the post: `['comments']`,
  and every comment with the post's `postId` is deleted.
  Other resources are not touched, even if they refer to the post.
"""

import logging
from typing import Iterable, Optional

from ..util.compare import same_id
from ..util.inflect import singularize

logger = logging.getLogger(__name__)


class CascadeDeleter:
    """ Clean up the items that refer to a deleted item """

    #: Foreign key field name format
    FOREIGN_KEY_FORMAT = '{}Id'

    def __init__(self, data: dict):
        """
        :param data: The whole document tree
        """
        self.data = data

    def foreign_key(self, resource: str) -> str:
        """ Get the name of the field that refers to an item of `resource`: 'posts' -> 'postId' """
        return self.FOREIGN_KEY_FORMAT.format(singularize(resource))

    def cascade(self, resource: str, item_id, dependents: Optional[Iterable[str]] = None) -> int:
        """ Clean up after an item of `resource` was deleted

        :param resource: The resource the item was deleted from
        :param item_id: The id of the deleted item
        :param dependents: None to unlink every reference, or a list of resources to delete dependent items from
        :return: The number of items unlinked or deleted
        """
        if dependents is None:
            count = self.unlink(resource, item_id)
        else:
            count = self.delete(resource, item_id, dependents)

        logger.debug('Cascade from %s/%s: %d %s',
                     resource, item_id, count, 'unlinked' if dependents is None else 'deleted')
        return count

    def unlink(self, resource: str, item_id) -> int:
        """ Set the foreign key to None in every item of every other resource that refers to the deleted item """
        fk = self.foreign_key(resource)
        count = 0
        for name, items in self.data.items():
            if name == resource or not isinstance(items, list):
                continue
            for item in items:
                if isinstance(item, dict) and same_id(item.get(fk), item_id):
                    item[fk] = None
                    count += 1
        return count

    def delete(self, resource: str, item_id, dependents: Iterable[str]) -> int:
        """ Delete every item that refers to the deleted item, in the given resources only """
        fk = self.foreign_key(resource)
        count = 0
        for name in dependents:
            items = self.data.get(name)
            if not isinstance(items, list):
                continue  # unknown resource
            kept = [item for item in items
                    if not (isinstance(item, dict) and same_id(item.get(fk), item_id))]
            count += len(items) - len(kept)
            items[:] = kept  # in place
        return count
