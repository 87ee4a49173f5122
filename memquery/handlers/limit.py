"""
### Range Operation
Range pagination slices the results, the way `LIMIT .. OFFSET ..` does in SQL.

* `_start`: the index of the first item (0-based)
* `_end`: the index of the item to stop before (exclusive)
* `_limit`: the number of items to return, starting from `_start`

Example:

```
GET /posts?_start=20&_end=30
GET /posts?_start=20&_limit=10
```

When both `_end` and `_limit` are given, `_end` wins.
Out-of-range values are clamped: no error is ever reported.
The result is a plain list.
"""

from .base import MemQueryHandlerBase
from ..parser import RangeSpec


class MemLimit(MemQueryHandlerBase):
    """ Range pagination

        Input: RangeSpec(start, end, limit), or None
    """

    query_object_section_name = 'limit'

    def __init__(self, resource, max_items=None):
        """ Init a limit

        :param resource: Resource name
        :param max_items: The maximum number of items that can be loaded with this query.
            The user can never go any higher than that, and this value is forced onto every query.
        """
        super(MemLimit, self).__init__(resource)

        # Config
        self.max_items = max_items
        assert self.max_items is None or self.max_items > 0

        # On input
        self.start = None
        self.end = None
        self.limit = None

    def input(self, range_spec=None):
        super(MemLimit, self).input(range_spec)

        if range_spec is not None:
            self.start, self.end, self.limit = RangeSpec(*range_spec)

        return self

    @property
    def has_limit(self):
        """ Check whether there's a limit on this handler """
        return self.start is not None or self.end is not None or self.limit is not None or bool(self.max_items)

    def get_slice(self, count: int):
        """ Get the (start, stop) indices for a sequence of `count` items

            The indices are always within [0, count], and start <= stop
        """
        start = min(max(self.start or 0, 0), count)

        if self.end is not None:
            stop = self.end
        elif self.limit is not None:
            stop = start + self.limit
        else:
            stop = count
        stop = min(max(stop, start), count)

        # Max limit
        if self.max_items:
            stop = min(stop, start + self.max_items)

        return start, stop

    def alter_items(self, items):
        if not self.has_limit:
            return list(items)  # short-circuit
        start, stop = self.get_slice(len(items))
        return items[start:stop]

    def get_final_input_value(self):
        return dict(start=self.start, end=self.end, limit=self.limit)
