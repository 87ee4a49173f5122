"""
memquery is designed to serve a document tree through a REST-like API.
To ease the pain of implementing CRUD for every resource,
memquery comes with a service that exposes querying to the API user
and keeps the store up to date on every change.
"""

import asyncio
import logging
from copy import copy
from typing import Callable, Iterable, Mapping, Optional, Union

from .. import exc
from ..ids import generate_id
from ..parser import QueryDescriptor, QueryParser
from ..query import ResourceQuery
from ..store import Store
from ..util.compare import same_id, to_string
from .cascade import CascadeDeleter

logger = logging.getLogger(__name__)


class ResourceService:
    """ Resource service: an object that implements CRUD operations for every resource of a store

        * Read: use ResourceQuery for querying
        * Create: add a new item, with a fresh id
        * Update, Patch: replace or merge an item, keeping its id
        * Delete: remove an item, and clean up the items that refer to it

        Every mutation modifies `store.data` in place, and then awaits `store.persist()`.

        Unknown resources and unknown ids are not errors: methods just return `None`.
        A resource is known when the store has it, and it is a list.

        This object is supposed to be initialized only once:
        it keeps a configured ResourceQuery for every resource it has seen, and copies it for every request.

        ```python
        from memquery import ResourceService, JsonFileStore, ServiceSettingsDict

        service = ResourceService(
            JsonFileStore('db.json'),
            **ServiceSettingsDict(
                max_items=100,
                allowed_includes=('comments', 'post'),
            )
        )

        posts = service.find('posts', {'_sort': '-views', '_limit': '10'})
        post = await service.create('posts', {'title': 'Hello'})
        ```
    """

    # The class to use for queries
    _RESOURCE_QUERY_CLS = ResourceQuery
    # The class to parse query strings with
    _QUERY_PARSER_CLS = QueryParser
    # The class to clean up after a deleted item
    _CASCADE_DELETER_CLS = CascadeDeleter

    #: The field that identifies an item
    ID_FIELD = 'id'

    def __init__(self, store: Store,
                 id_factory: Optional[Callable[[Iterable[str]], str]] = None,
                 **handler_settings):
        """ Init the service

        :param store: The store to work with
        :param id_factory: A function to generate ids for created items.
            It receives the ids already taken in the resource. Default: `generate_id`
        :param handler_settings: Settings for the ResourceQuery used to make queries. See QuerySettingsDict.
        """
        self.store = store
        self.id_factory = id_factory or generate_id
        self.handler_settings = handler_settings

        # One configured query per resource
        self._queries = {}  # type: dict[str, ResourceQuery]

        # Persist calls are serialized: one writer at a time.
        # Created on first use: it has to belong to the running event loop
        self._persist_lock = None  # type: asyncio.Lock | None

    # region Read

    def find(self, resource: str, params: Union[Mapping, None] = None) -> Union[list, dict, None]:
        """ Find items with a query

        :param resource: Resource name
        :param params: Query string parameters
        :return: list of items; a pagination envelope when `_page` is used; `None` when the resource is unknown
        :raises exc.InvalidQueryError: There is an error in the query that the user has made
        :raises exc.InvalidRelationError: The user has tried to include a relation that is not allowed
        :raises exc.DisabledError: A feature is disabled. See handler_settings.
        """
        if self._get_items(resource) is None:
            return None
        return self.query_resource(resource, params).end()

    def find_by_id(self, resource: str, item_id, params: Union[Mapping, None] = None) -> Optional[dict]:
        """ Find a single item by id

            Only `_include` is used from `params`: filters, sorting and pagination make no sense here.

        :return: a copy of the item, with related items included; or `None`
        """
        items = self._get_items(resource)
        if items is None:
            return None

        index = self._find_index(items, item_id)
        if index is None:
            return None

        descriptor = self._QUERY_PARSER_CLS().parse(params)
        query = self.query_resource(resource, QueryDescriptor(includes=descriptor.includes))
        return query.pluck_item(items[index])

    def query_resource(self, resource: str, params: Union[Mapping, QueryDescriptor, None] = None) -> ResourceQuery:
        """ Make a ResourceQuery for the resource, bound to the current tree """
        return self._get_query(resource).from_data(self.store.data).query(params)

    def _get_query(self, resource: str) -> ResourceQuery:
        """ Get a fresh copy of the resource's query """
        if resource not in self._queries:
            self._queries[resource] = self._RESOURCE_QUERY_CLS(resource, self.handler_settings)
        return copy(self._queries[resource])

    # endregion

    # region Write

    async def create(self, resource: str, data: Mapping) -> Optional[dict]:
        """ Add a new item to a resource

            The item gets a fresh id unless `data` has one.

        :return: the stored item, or `None` when the resource is unknown
        :raises exc.InvalidQueryError: `data` is not an object
        """
        data = self.validate_incoming_item(data, 'create')

        items = self._get_items(resource)
        if items is None:
            return None

        item = dict(data)
        if item.get(self.ID_FIELD) is None:
            item[self.ID_FIELD] = self.id_factory(
                to_string(i.get(self.ID_FIELD)) for i in items if isinstance(i, dict))
        items.append(item)
        logger.debug('Created %s/%s', resource, item[self.ID_FIELD])

        await self._persist()
        return item

    async def update(self, resource: str, item_id, data: Mapping) -> Optional[dict]:
        """ Replace an item. Its id never changes.

        :return: the new item, or `None` when the resource or the item is unknown
        :raises exc.InvalidQueryError: `data` is not an object
        """
        data = self.validate_incoming_item(data, 'update')

        items = self._get_items(resource)
        index = self._find_index(items, item_id) if items is not None else None
        if index is None:
            return None

        item = {**data, self.ID_FIELD: items[index][self.ID_FIELD]}
        items[index] = item
        logger.debug('Updated %s/%s', resource, item[self.ID_FIELD])

        await self._persist()
        return item

    async def patch(self, resource: str, item_id, data: Mapping) -> Optional[dict]:
        """ Merge fields into an item. Its id never changes.

        :return: the new item, or `None` when the resource or the item is unknown
        :raises exc.InvalidQueryError: `data` is not an object
        """
        data = self.validate_incoming_item(data, 'patch')

        items = self._get_items(resource)
        index = self._find_index(items, item_id) if items is not None else None
        if index is None:
            return None

        item = {**items[index], **data, self.ID_FIELD: items[index][self.ID_FIELD]}
        items[index] = item
        logger.debug('Patched %s/%s: %s', resource, item[self.ID_FIELD], ', '.join(map(str, data.keys())))

        await self._persist()
        return item

    async def destroy(self, resource: str, item_id, cascade: Optional[Iterable[str]] = None) -> Optional[dict]:
        """ Delete an item, and clean up the items that refer to it

        :param resource: Resource name
        :param item_id: Id of the item to delete
        :param cascade: `None` to unlink the items of other resources that refer to the deleted one,
            or a list of resources to delete such items from. See CascadeDeleter.
        :return: the deleted item, or `None` when the resource or the item is unknown
        """
        items = self._get_items(resource)
        index = self._find_index(items, item_id) if items is not None else None
        if index is None:
            return None

        item = items.pop(index)
        logger.debug('Deleted %s/%s', resource, item.get(self.ID_FIELD))

        self._CASCADE_DELETER_CLS(self.store.data).cascade(
            resource,
            item.get(self.ID_FIELD),
            list(cascade) if cascade is not None else None)

        await self._persist()
        return item

    def validate_incoming_item(self, data: Mapping, action: str) -> Mapping:
        """ Validate the incoming JSON data """
        if not isinstance(data, Mapping):
            raise exc.InvalidQueryError(f'Item "{action}": the value has to be an object, '
                                        f'not {type(data)}')
        return data

    async def _persist(self):
        """ Save the tree. Failures propagate to the caller. """
        if self._persist_lock is None:
            self._persist_lock = asyncio.Lock()
        async with self._persist_lock:
            await self.store.persist()
        logger.debug('Persisted %r', self.store)

    # endregion

    # region Internals

    def _get_items(self, resource: str) -> Optional[list]:
        """ Get the items of a resource, or None if there's no such resource """
        data = self.store.data
        if data is None:
            return None
        items = data.get(resource)
        if not isinstance(items, list):
            return None
        return items

    def _find_index(self, items: list, item_id) -> Optional[int]:
        """ Find the position of an item by id. Ids are compared as strings. """
        for i, item in enumerate(items):
            if isinstance(item, dict) and same_id(item.get(self.ID_FIELD), item_id):
                return i
        return None

    # endregion
