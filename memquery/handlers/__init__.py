"""
Every section of a query is handled by a separate Query Object handler.

The query string is parsed into a QueryDescriptor (see `memquery.parser`),
and every handler receives its own piece of it:

* `filter`: [Filter Operation](#filter-operation) selects the matching items
* `sort`: [Sort Operation](#sort-operation) orders them
* `limit`: [Range Operation](#range-operation) slices them: `_start`, `_end`, `_limit`
* `page`: [Page Operation](#page-operation) paginates them: `_page`, `_per_page`
* `include`: [Include Operation](#include-operation) loads related items

Handlers are applied in this order.
"""

from .base import MemQueryHandlerBase
from .filter import MemFilter, \
    FilterExpressionBase, FilterIdExpression, FilterFieldExpression
from .sort import MemSort
from .limit import MemLimit
from .page import MemPage
from .include import MemInclude
