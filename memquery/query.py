from copy import copy
from typing import Union

from . import handlers
from .exc import InvalidQueryError
from .parser import QueryDescriptor, QueryParser
from .util import QuerySettingsHandler


class ResourceQuery:
    """ A query against one resource of the document tree """

    # The class to parse query strings with
    _QUERY_PARSER_CLS = QueryParser

    def __init__(self, resource: str, handler_settings=None):
        """ Init a query

        :param resource: Name of the resource to query: e.g. 'posts'
        :param handler_settings: Settings for Query Object handlers.
            These are just plain kwargs names for every handler object's __init__ method.
            Note that you don't have to specify which object receives which kwarg:
            the `QuerySettingsHandler` object does that automatically.

            To disable a handler, give its name mapped to a `False`.
            Example:

                include_enabled=False

            The list of all settings:
                # limit & page
                    max_items=None
                # page
                    default_per_page=None
                # include
                    allowed_includes=None
                # enabled handlers?
                    filter_enabled=True
                    sort_enabled=True
                    limit_enabled=True
                    page_enabled=True
                    include_enabled=True

        :type handler_settings: dict | QuerySettingsDict | None
        """
        self._resource = resource

        # Initialize the settings
        self._handler_settings = QuerySettingsHandler(dict(handler_settings or {}))

        # Initialized later
        self._data = None  # type: dict | None

        # Get ready: Query object handlers
        self._init_query_object_handlers()

        # NOTE: keep in mind that this object is copy()ed in order to make it reusable.
        # This means that every property that can't be safely reused has to be copy()ied manually
        # inside the __copy__() method.

    def __copy__(self):
        """ ResourceQuery can be reused: keep one, and copy() it for every request

            It actually makes sense to have reusable ResourceQuery because there's settings
            you don't want to parse over and over again.
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update(self.__dict__)

        # Copy Query Object handlers
        for name in self.HANDLER_ATTR_NAMES:
            setattr(result, name, copy(getattr(result, name)))

        # Re-initialize properties that can't be copied
        result._data = None

        return result

    @property
    def resource(self) -> str:
        return self._resource

    @property
    def data(self) -> dict:
        """ The document tree this query works with """
        if self._data is None:
            raise RuntimeError('{!r} has no data: use from_data() first'.format(self))
        return self._data

    def from_data(self, data: dict):
        """ Specify the document tree to work with

        :param data: The whole tree: {resource-name: [items]}.
            The whole tree is needed, because related items are looked up in other resources.
        """
        self._data = data
        return self

    def query(self, params: Union[dict, QueryDescriptor, None] = None):
        """ Build a query from the query string parameters

        :param params: Query string parameters, or a QueryDescriptor that has already been parsed
        :raises InvalidQueryError: syntax error in the query string
        :raises InvalidRelationError: a relation that is not allowed
        :raises DisabledError: input provided to a disabled handler
        :rtype: ResourceQuery
        """
        # Parse
        if isinstance(params, QueryDescriptor):
            descriptor = params
        else:
            descriptor = self._QUERY_PARSER_CLS().parse(params)

        # Convert the descriptor into a Query Object: {handler-name: input}
        query_object = self._query_object_from_descriptor(descriptor)

        # Bind every handler with ourselves
        for handler_name, handler in self._handlers():
            handler.with_query(self)

        # Process every field with its method
        # Every handler should be invoked because they may have defaults even when no input was provided
        for handler_name, handler in self._handlers():
            input_value = query_object.get(handler_name, None)

            # Disabled handlers exception
            # But only test that if there actually was any input
            if input_value is not None:
                self._raise_if_handler_is_not_enabled(handler_name)

            handler.input(input_value)

        # Page mode takes over range mode
        if self.handler_page.is_active:
            self.handler_limit.skip_this_handler = True

        # Done
        return self

    def end(self):
        """ Run the query and get the results

        :return: list of items, or a pagination envelope dict when `_page` was used
        :rtype: list[dict] | dict
        """
        items = self.data.get(self._resource)
        if not isinstance(items, list):
            raise InvalidQueryError('Resource "{}" is not a collection'.format(self._resource))

        # Apply every handler
        for handler_name, handler in self._handlers():
            if not handler.skip_this_handler:
                items = handler.alter_items(items)

        # Wrap
        if self.handler_page.is_active:
            return self.handler_page.envelope(items)
        return items

    def pluck_item(self, item: dict) -> dict:
        """ Prepare a single item for output: copy it, include related items

            This method is used to load an item by id: no filters, no sorting, no pagination.
        """
        return self.handler_include.pluck_item(item)

    def get_final_query_object(self) -> dict:
        """ Get the Query Object as understood by the handlers

            This is mainly useful for debugging and logging.
        """
        return {name: handler.get_final_input_value()
                for name, handler in self._handlers()
                if not handler.is_input_empty()}

    def __repr__(self):
        return 'ResourceQuery({!r})'.format(self._resource)

    # region Query Object handlers

    # This section initializes every Query Object handler, one per method.
    # Doing it this way enables you to override the way they are initialized, and use a custom query class with
    # custom settings.

    _QO_HANDLER_FILTER = handlers.MemFilter
    _QO_HANDLER_SORT = handlers.MemSort
    _QO_HANDLER_LIMIT = handlers.MemLimit
    _QO_HANDLER_PAGE = handlers.MemPage
    _QO_HANDLER_INCLUDE = handlers.MemInclude

    HANDLER_NAMES = frozenset(('filter',
                               'sort',
                               'limit',
                               'page',
                               'include'))
    HANDLER_ATTR_NAMES = frozenset('handler_'+name
                                   for name in HANDLER_NAMES)

    def _handlers(self):
        """ Get the list of all (handler_name, handler) """
        return (
            # Note that the ordering of these handlers defines the way items are processed!
            # 1. 'filter' before everything: pagination counts filtered items
            # 2. 'sort' before 'limit' and 'page'
            # 3. 'include' last: related items are only loaded for items that are returned
            ('filter', self.handler_filter),
            ('sort', self.handler_sort),
            ('limit', self.handler_limit),
            ('page', self.handler_page),
            ('include', self.handler_include),
        )

    # for IDE completion
    handler_filter = None  # type: handlers.MemFilter
    handler_sort = None  # type: handlers.MemSort
    handler_limit = None  # type: handlers.MemLimit
    handler_page = None  # type: handlers.MemPage
    handler_include = None  # type: handlers.MemInclude

    def _init_query_object_handlers(self):
        """ Initialize every Query Object handler """
        for name in self.HANDLER_NAMES:
            # Every handler: name, attr, clas
            handler_attr_name = 'handler_' + name
            handler_cls_attr_name = '_QO_HANDLER_' + name.upper()
            handler_cls = getattr(self, handler_cls_attr_name)

            # Use _init_handler()
            setattr(self, handler_attr_name,
                    self._init_handler(name, handler_cls)
                    )

        # Check settings
        self._handler_settings.raise_if_invalid_handler_settings(self)

    def _init_handler(self, handler_name, handler_cls):
        """ Init a handler, and load its settings """
        handler_settings = self._handler_settings.get_settings(handler_name, handler_cls)
        return handler_cls(self._resource, **handler_settings)

    # endregion

    # region Internals

    @staticmethod
    def _query_object_from_descriptor(descriptor: QueryDescriptor) -> dict:
        """ Split a QueryDescriptor into sections, one per handler. Empty sections are None. """
        has_filter = descriptor.id_filter or descriptor.field_filters
        return {
            'filter': (descriptor.id_filter, descriptor.field_filters) if has_filter else None,
            'sort': descriptor.sort or None,
            'limit': descriptor.range,
            'page': descriptor.page,
            'include': descriptor.includes or None,
        }

    def _raise_if_handler_is_not_enabled(self, handler_name):
        """ Raise an error if a handler is not enabled. """
        self._handler_settings.raise_if_not_handler_enabled(self._resource, handler_name)

    # endregion
