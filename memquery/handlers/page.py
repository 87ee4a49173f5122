"""
### Page Operation
Page pagination returns one page of results, wrapped into an envelope with navigation metadata.

```
GET /posts?_page=2&_per_page=10
```

Result:

```javascript
{
    first: 1,      // the first page
    last: 5,       // the last page
    prev: 1,       // the previous page, or null
    next: 3,       // the next page, or null
    pages: 5,      // the number of pages
    items: 42,     // the number of items that matched the filter
    data: [ ... ]  // items on this page
}
```

Pages are numbered from 1. A page beyond the last one gives the last page.
`items` counts the filtered items, before they were sliced into pages.

Page pagination takes over range pagination when both are given.
"""

import math

from .base import MemQueryHandlerBase
from ..parser import PageSpec


class MemPage(MemQueryHandlerBase):
    """ Page pagination

        Input: PageSpec(page, per_page), or None.
        `per_page` may be None: then, `default_per_page` is used.
    """

    query_object_section_name = 'page'

    def __init__(self, resource, max_items=None, default_per_page=None):
        """ Init a page handler

        :param resource: Resource name
        :param max_items: The maximum page size
        :param default_per_page: The page size to use when the input does not have one.
            When None, the page mode is only active when both `_page` and `_per_page` are given.
        """
        super(MemPage, self).__init__(resource)

        # Config
        self.max_items = max_items
        self.default_per_page = default_per_page
        assert self.max_items is None or self.max_items > 0
        assert self.default_per_page is None or self.default_per_page > 0

        # On input
        self.page = None
        self.per_page = None

        # On alter_items()
        #: The number of items before slicing
        self.items_count = None
        #: The number of pages
        self.pages = None
        #: The page actually returned
        self.effective_page = None

    def input(self, page_spec=None):
        super(MemPage, self).input(page_spec)

        if page_spec is not None:
            page, per_page = PageSpec(*page_spec)
            per_page = per_page or self.default_per_page

            # Page mode needs a page size
            if per_page is not None:
                if self.max_items:
                    per_page = min(per_page, self.max_items)
                self.page = page
                self.per_page = per_page

        return self

    @property
    def is_active(self):
        """ Is page pagination requested? """
        return self.page is not None

    def is_input_empty(self):
        return not self.is_active

    def alter_items(self, items):
        if not self.is_active:
            return list(items)  # short-circuit

        self.items_count = len(items)
        self.pages = math.ceil(self.items_count / self.per_page)

        # Clamp the page into [1, pages]; an empty result has its only (empty) page at 1
        self.effective_page = max(min(self.page, self.pages), 1)

        offset = (self.effective_page - 1) * self.per_page
        return items[offset:offset + self.per_page]

    def envelope(self, data: list) -> dict:
        """ Wrap a page of items into the pagination envelope

            alter_items() must have been called first
        """
        page, pages = self.effective_page, self.pages
        return {
            'first': 1,
            'last': pages,
            'prev': page - 1 if page > 1 else None,
            'next': page + 1 if page < pages else None,
            'pages': pages,
            'items': self.items_count,
            'data': data,
        }

    def get_final_input_value(self):
        return dict(page=self.page, per_page=self.per_page)
