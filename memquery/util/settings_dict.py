from typing import Callable, Iterable, Optional


class QuerySettingsDict(dict):
    """ ResourceQuery settings container.

        Is used for nice autocompletion and documentation purposes only! :)

        The keyword settings in this object are just plain kwargs names
        for every handler object's __init__ method,
        which are fed to subclasses of MemQueryHandlerBase by QuerySettingsHandler.

        In addition to that, there are '<handler-name>_enabled' settings,
        that can enable or disable a handler.
    """

    def __init__(self,
                 # --- limit & page
                 max_items: Optional[int] = None,
                 # --- page
                 default_per_page: Optional[int] = None,
                 # --- include
                 allowed_includes: Optional[Iterable[str]] = None,
                 # --- enabled handlers?
                 filter_enabled: bool = True,
                 sort_enabled: bool = True,
                 limit_enabled: bool = True,
                 page_enabled: bool = True,
                 include_enabled: bool = True,
                 ):
        """ `ResourceQuery` has a few settings that let you limit what the API user can do.

        These settings can be nicely kept in a QuerySettingsDict
        and given to ResourceService or ResourceQuery as keyword arguments.

        Example:
            ```python
            from memquery import ResourceService, QuerySettingsDict

            service = ResourceService(store, **QuerySettingsDict(
                # never return more than 100 items
                max_items=100,
                # `?_page=2` is enough to paginate
                default_per_page=10,
                # only these relations can be included
                allowed_includes=('comments', 'post'),
            ))
            ```

        Args:
            max_items (int | None): (for: limit, page)
                The maximum number of items that a query can return.
                Range slices are cut to this size, and `_per_page` is capped by it.
            default_per_page (int | None): (for: page)
                The page size to use when the API user gives `_page`, but no `_per_page`.
                When `None`, page mode requires both `_page` and `_per_page`.
            allowed_includes (list[str] | None): (for: include)
                The list of relation names that can be given to `_include`.
                When `None`, every relation is allowed.
            filter_enabled (bool): Enable filtering?
            sort_enabled (bool): Enable `_sort`?
            limit_enabled (bool): Enable `_start`, `_end`, `_limit`?
            page_enabled (bool): Enable `_page`, `_per_page`?
            include_enabled (bool): Enable `_include`?
        """
        super(QuerySettingsDict, self).__init__()
        self.update({k: v
                     for k, v in locals().items()
                     if k not in {'__class__', 'self'}})
        # locals(), because every keyword argument is a setting, and none should be forgotten

    def and_more(self, **settings):
        """ Copy the object and add more settings to it """
        return self.__class__(**{**self, **settings})


class ServiceSettingsDict(QuerySettingsDict):
    """ ResourceService + ResourceQuery settings container. """

    def __init__(self,
                 id_factory: Optional[Callable[[Iterable[str]], str]] = None,
                 **query_settings):
        """ Settings for ResourceService

        Args:
            id_factory (callable | None): A function that generates a fresh id for a created item.
                It receives the ids already present in the resource.
                Default: `memquery.ids.generate_id`
            **query_settings: Settings for ResourceQuery. See QuerySettingsDict.
        """
        super(ServiceSettingsDict, self).__init__(**query_settings)
        self['id_factory'] = id_factory
