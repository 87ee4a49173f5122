"""
Query String Syntax
-------------------

The API user controls the way `find()` results are generated with query string parameters.
They come straight from a URL:

```
GET /posts?views_gte=100&author.name=foo&_sort=-views,id&_page=2&_per_page=10&_include=comments
```

and are given to the engine the way `urllib.parse.parse_qs()` (or a web framework's multi-dict) returns them:
a mapping from a key to a string, or to a list of strings.

The following keys are reserved:

* `id`: filter by id. Repeat it to get several items: `?id=1&id=2`
* `_sort`: comma-separated list of fields; `-` in front of a field sorts descending: `?_sort=-views,id`
* `_start`, `_end`, `_limit`: range pagination. `_end` is exclusive: `?_start=10&_end=20`, `?_start=10&_limit=10`
* `_page`, `_per_page`: page pagination: `?_page=2&_per_page=10`
* `_include`: embed child resources, or expand parent resources: `?_include=comments&_include=author`

Every other key is a filter on a field. Use dots to reach into nested objects: `?author.name=foo`.
Repeat a key to match any of the values: `?title=a&title=b`.
A key may end with an operator:

* `field=value`: equality
* `field_ne=value`: inequality
* `field_lt=value`, `field_lte=value`: less than, less or equal
* `field_gt=value`, `field_gte=value`: greater than, greater or equal

Keys that start with an underscore but are not listed above are filters too: `?_status=live`.
"""

from collections.abc import Mapping
from typing import List, NamedTuple, Optional, Tuple

from .exc import InvalidQueryError


class FieldFilter(NamedTuple):
    """ A filter clause: `views_gte=100` -> FieldFilter('views', '$gte', ('100',)) """
    path: str
    operator: str
    #: Values are OR-ed together
    values: Tuple[str, ...]


class RangeSpec(NamedTuple):
    """ Range pagination: `_start`, `_end`, `_limit` """
    start: Optional[int]
    end: Optional[int]
    limit: Optional[int]


class PageSpec(NamedTuple):
    """ Page pagination: `_page`, `_per_page` """
    page: int
    per_page: Optional[int]


class QueryDescriptor:
    """ A parsed query string

        Every attribute feeds one of the Query Object handlers of ResourceQuery.
    """

    __slots__ = ('id_filter', 'field_filters', 'sort', 'range', 'page', 'includes')

    def __init__(self,
                 id_filter: Optional[Tuple[str, ...]] = None,
                 field_filters: List[FieldFilter] = None,
                 sort: List[Tuple[str, int]] = None,
                 range: Optional[RangeSpec] = None,
                 page: Optional[PageSpec] = None,
                 includes: List[str] = None):
        #: Ids to match, or None
        self.id_filter = id_filter
        #: Filter clauses, AND-ed together
        self.field_filters = field_filters or []
        #: Sort keys: [(path, +1 | -1)]
        self.sort = sort or []
        #: Range pagination
        self.range = range
        #: Page pagination
        self.page = page
        #: Relation names to include
        self.includes = includes or []

    def __eq__(self, other):
        if not isinstance(other, QueryDescriptor):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join('{}={!r}'.format(name, getattr(self, name))
                      for name in self.__slots__
                      if getattr(self, name)))


class QueryParser:
    """ Parse query string parameters into a QueryDescriptor

        Subclass it to change the syntax: e.g. add more operator suffixes.
    """

    #: Keys that are never treated as filters
    RESERVED_KEYS = frozenset(('id', '_sort', '_start', '_end', '_limit', '_page', '_per_page', '_include'))

    #: Operator suffixes. Longer ones go first.
    OPERATOR_SUFFIXES = (
        ('_lte', '$lte'),
        ('_gte', '$gte'),
        ('_ne', '$ne'),
        ('_lt', '$lt'),
        ('_gt', '$gt'),
    )

    def parse(self, params) -> QueryDescriptor:
        """ Parse the query string parameters

            :param params: dict of str | list[str], or a multi-dict with getlist()
            :raises InvalidQueryError: the input is neither a mapping, nor a string or a list of strings
        """
        if params is None:
            params = {}
        if not isinstance(params, Mapping) and not hasattr(params, 'getlist'):
            raise InvalidQueryError('query parameters must be a mapping, {} provided'.format(type(params)))

        # Filters
        id_filter = None
        field_filters = []
        for key in dict.fromkeys(params):  # unique keys, in order
            if key == 'id':
                id_filter = self._get_values(params, key) or None
            elif key in self.RESERVED_KEYS:
                continue  # reserved
            else:
                path, operator = self._split_operator(key)
                field_filters.append(FieldFilter(path, operator, self._get_values(params, key)))

        # Done
        return QueryDescriptor(
            id_filter=id_filter,
            field_filters=field_filters,
            sort=self._parse_sort(params),
            range=self._parse_range(params),
            page=self._parse_page(params),
            includes=list(self._get_values(params, '_include')),
        )

    def _split_operator(self, key: str) -> Tuple[str, str]:
        """ Split a filter key into the field path and the operator: 'views_gte' -> ('views', '$gte') """
        for suffix, operator in self.OPERATOR_SUFFIXES:
            if key.endswith(suffix) and len(key) > len(suffix):
                return key[:-len(suffix)], operator
        return key, '$eq'

    def _parse_sort(self, params) -> List[Tuple[str, int]]:
        """ Parse `_sort=-views,id` into [('views', -1), ('id', +1)] """
        sort = []
        for value in self._get_values(params, '_sort'):
            for field in value.split(','):
                field = field.strip()
                if field.startswith('-'):
                    field, direction = field[1:], -1
                else:
                    direction = +1
                if field:
                    sort.append((field, direction))
        return sort

    def _parse_range(self, params) -> Optional[RangeSpec]:
        """ Parse `_start`, `_end`, `_limit` """
        spec = RangeSpec(
            start=self._get_int(params, '_start'),
            end=self._get_int(params, '_end'),
            limit=self._get_int(params, '_limit'),
        )
        return None if spec == (None, None, None) else spec

    def _parse_page(self, params) -> Optional[PageSpec]:
        """ Parse `_page`, `_per_page`

            A non-positive `_per_page` is as good as a missing one.
        """
        page = self._get_int(params, '_page')
        if page is None:
            return None

        per_page = self._get_int(params, '_per_page')
        if per_page is not None and per_page < 1:
            per_page = None
        return PageSpec(page=page, per_page=per_page)

    def _get_int(self, params, key: str) -> Optional[int]:
        """ Get an integer value. Malformed values are treated as absent. """
        values = self._get_values(params, key)
        if not values:
            return None
        try:
            return int(values[0])
        except ValueError:
            return None

    def _get_values(self, params, key: str) -> Tuple[str, ...]:
        """ Get all values for the key as a tuple of strings

            :raises InvalidQueryError: a value is not a string
        """
        if key not in params:
            return ()

        if hasattr(params, 'getlist'):
            values = params.getlist(key)
        else:
            values = params[key]

        if isinstance(values, str):
            values = (values,)
        elif isinstance(values, (list, tuple)):
            values = tuple(values)
        else:
            raise InvalidQueryError('"{}" must be a string or a list of strings, {} provided'.format(key, type(values)))

        if not all(isinstance(v, str) for v in values):
            raise InvalidQueryError('"{}" must only contain strings'.format(key))
        return values


def parse_query_params(params) -> QueryDescriptor:
    """ Parse query string parameters with the default QueryParser """
    return QueryParser().parse(params)
