from .inspect import pluck_kwargs_from
from ..exc import DisabledError


class QuerySettingsHandler:
    """ Settings keeper for ResourceQuery

        This is essentially a helper which will feed the correct kwargs to every class.

        Handlers receive settings as kwargs to their __init__() methods,
        and those kwargs have unique names.

        This class will collect all settings as a single, flat dict,
        and give each handler only the settings it wants.

        This approach will let us use a flat configuration dict.
        In addition, because some handlers have matching settings (e.g. `max_items` for limit and page),
        both of those will receive them!
    """

    def __init__(self, settings: dict):
        """ Store the settings for every handler

            :param settings: dict of handler kwargs
        """
        assert isinstance(settings, dict)

        #: Settings dict
        self._settings = settings  # we don't make a copy, because we don't modify it

        #: Handler names
        self._handler_names = set()

        #: all kwargs names (to identify invalid ones)
        self._all_known_kwargs_names = set()

        #: disabled handler names
        self._disabled_handlers = set()

    def get_settings(self, handler_name: str, handler_cls: type) -> dict:
        """ Get settings for the given handler

            Every time a class is given us, we analyze its __init__() method in order to know its kwargs and its default values.
            Then, we take the matching keys from the settings dict, we take defaults from the argument defaults,
            and make it all into `kwargs` that will be given to the class.

            In addition to that, if the settings contain `<handler_name>_enabled=False`, then it means it's disabled.
            is_handler_enabled() method will later tell that to ResourceQuery.
        """
        # See if it's actually disabled
        if not self._settings.get('{}_enabled'.format(handler_name), True):
            self._disabled_handlers.add(handler_name)

        # Analyze a function, pluck the arguments that it needs
        kwargs = pluck_kwargs_from(self._settings, for_func=handler_cls.__init__)

        # Store the data that we'll need
        self._handler_names.add(handler_name)
        self._all_known_kwargs_names.update(kwargs.keys())

        # Done
        return kwargs  # for the handler's __init__()

    def is_handler_enabled(self, handler_name: str) -> bool:
        """ Test if the handler is enabled in the configuration """
        return handler_name not in self._disabled_handlers

    def raise_if_not_handler_enabled(self, resource: str, handler_name: str):
        """ Raise an error if the handler is not enabled """
        if not self.is_handler_enabled(handler_name):
            raise DisabledError('Query handler "{}" is disabled for "{}"'
                                .format(handler_name, resource))

    def raise_if_invalid_handler_settings(self, query):
        """ Check whether there were any typos in setting names

            After all handlers were initialized, we've had a chance to analyze all their keyword arguments.
            Now, we have the information about them, and we can check whether every kwarg was actually used.
            If not, there must be a typo.

            :raises: KeyError: Invalid settings provided
        """
        # Known keys
        handler_names = set('{}_enabled'.format(handler_name)
                            for handler_name in self._handler_names)
        all_known_keys = handler_names | self._all_known_kwargs_names

        # Result: unknown keys
        invalid_keys = set(self._settings.keys()) - all_known_keys

        # Raise?
        if invalid_keys:
            raise KeyError('Invalid settings were provided for {!r}: {}'
                           .format(query, ','.join(sorted(invalid_keys))))

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self._settings)
