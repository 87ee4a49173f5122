"""
### Sort Operation

The sort operation lets the API user specify the ordering of the results.

```
GET /posts?_sort=-views,title
```

#### Syntax

Comma-separated list of field names. A `-` in front of a name sorts descending; ascending otherwise.
Dots reach into nested objects: `?_sort=author.name`.

The sort is stable: items that compare equal on every key keep their order in the resource.
Numbers are compared as numbers, everything else as strings. Numbers go before other values.
Items that do not have the field go before all others (or after, when descending).
"""

from functools import cmp_to_key

from .base import MemQueryHandlerBase
from ..exc import InvalidQueryError
from ..util.compare import compare_values
from ..util.path import resolve_path


class MemSort(MemQueryHandlerBase):
    """ Sorting

        * None: no sorting
        * [ ('a', +1), ('b', -1) ]  - list of (path, direction), as parsed by QueryParser
        * [ 'a', '-b' ]  - list of strings '[-]<path>'
    """

    query_object_section_name = 'sort'

    def __init__(self, resource):
        super(MemSort, self).__init__(resource)

        # On input
        #: list of a sort spec: [(path, +1|-1)]
        self.sort_spec = None

    def _input(self, spec):
        """ Normalize the sort spec """
        # Empty
        if not spec:
            return []

        # String syntax
        if isinstance(spec, str):
            spec = spec.split(',')

        if not isinstance(spec, (list, tuple)):
            raise InvalidQueryError('{name} must be either a list, or a string; {type} provided.'
                                    .format(name=self.query_object_section_name, type=type(spec)))

        # Strings: convert "[-]path" into a tuple
        spec = [
            ((v[1:], -1) if v.startswith('-') else (v, +1))
            if isinstance(v, str)
            else tuple(v)
            for v in spec
        ]

        # Validate directions: +1 or -1
        if not all(direction in {-1, +1} for path, direction in spec):
            raise InvalidQueryError('{} direction can be either +1 or -1'.format(self.query_object_section_name))

        return [(path, direction) for path, direction in spec if path]

    def input(self, sort_spec):
        super(MemSort, self).input(sort_spec)
        self.sort_spec = self._input(sort_spec)
        return self

    def is_input_empty(self):
        return not self.sort_spec

    def compare_items(self, a: dict, b: dict) -> int:
        """ Compare two items using every sort key in turn """
        for path, direction in self.sort_spec:
            result = compare_values(resolve_path(a, path), resolve_path(b, path))
            if result:
                return result * direction
        return 0

    def alter_items(self, items):
        if not self.sort_spec:
            return list(items)  # short-circuit
        # sorted() is stable
        return sorted(items, key=cmp_to_key(self.compare_items))

    def get_final_input_value(self):
        return ['{}{}'.format('-' if d == -1 else '', name)
                for name, d in self.sort_spec]
