"""
### Filter Operation
Filtering selects the items that match every condition given in the query string.

Example of filtering:

```
GET /posts?views_gte=100&views_lt=500&author.name=foo&author.name=bar
```

All keys are AND-ed together; repeated values of one key are OR-ed.
So this reads: "100 <= views < 500, and the author is either `foo` or `bar`".

#### Field Operators

* `field=value` - equality check: `field == value`. This is the `$eq` operator.
* `field_ne=value` - inequality check: `field != value`
* `field_lt=value` - less than: `field < value`
* `field_lte=value` - less or equal than: `field <= value`
* `field_gt=value` - greater than: `field > value`
* `field_gte=value` - greater or equal than: `field >= value`

Query string values are always strings. When the stored value is a number,
the query value is compared as a number; otherwise, both are compared as strings.
Comparison operators (`_lt`, `_lte`, `_gt`, `_gte`) only ever match numbers.

A field that is missing from an item never matches: not even with `_ne`.

#### Nested fields
Use a dot to reach into nested objects:

```
GET /posts?author.name=foo
```

#### Filtering by id
The `id` key is special: it matches the `id` of an item as a string.
Repeat it to get several items at once: `?id=1&id=2`.
"""

from .base import MemQueryHandlerBase
from ..exc import InvalidQueryError
from ..parser import FieldFilter
from ..util.compare import coerce_query_value, is_number, to_string
from ..util.path import ABSENT, resolve_path


# region Filter Expression Classes

class FilterExpressionBase:
    """ An expression from the MemFilter object """

    __slots__ = ('operator_str', 'value')

    def __init__(self, operator_str, value):
        self.operator_str = operator_str
        self.value = value

    def matches(self, item: dict) -> bool:
        """ Test whether an item matches the expression """
        raise NotImplementedError()


class FilterIdExpression(FilterExpressionBase):
    """ An expression on the `id` of an item: any of the given ids """

    __slots__ = ()

    def __init__(self, ids):
        super(FilterIdExpression, self).__init__('$in', frozenset(ids))

    def __repr__(self):
        return 'id {} {!r}'.format(self.operator_str, sorted(self.value))

    def matches(self, item: dict) -> bool:
        item_id = item.get('id', ABSENT)
        if item_id is ABSENT:
            return False
        return to_string(item_id) in self.value


class FilterFieldExpression(FilterExpressionBase):
    """ An expression involving a field

        Consists of: a field path, an operator ($eq, etc), and the values to compare the field to.
        The values are OR-ed together.
    """

    __slots__ = ('path', 'operator_lambda', 'numeric_only')

    def __init__(self, path, operator_str, operator_lambda, value, numeric_only=False):
        """ Init a field expression

        :param path: Name of the field (possibly, with dots!)
        :param operator_str: The operator to use, e.g. $eq
        :param operator_lambda: A callable that implements the operator: lambda stored, query
        :param value: Tuple of values the operator is applied to
        :param numeric_only: Does the operator only work with numbers?
        """
        super(FilterFieldExpression, self).__init__(operator_str, value)
        self.path = path
        self.operator_lambda = operator_lambda
        self.numeric_only = numeric_only

    def __repr__(self):
        return '{} {} {!r}'.format(self.path, self.operator_str, self.value)

    def matches(self, item: dict) -> bool:
        stored = resolve_path(item, self.path)

        # Absence is not inequality: a missing field never matches
        if stored is ABSENT:
            return False

        # Comparisons only make sense on numbers
        if self.numeric_only and not is_number(stored):
            return False

        return any(self._matches_value(stored, v) for v in self.value)

    def _matches_value(self, stored, query_value: str) -> bool:
        coerced = coerce_query_value(stored, query_value)

        # The query value is not a number, but the field is:
        # the two can't be equal, and can't be compared
        if coerced is None:
            return self.operator_str == '$ne'

        return self.operator_lambda(*coerced)

# endregion


class MemFilter(MemQueryHandlerBase):
    """ Filter items

        Input: a tuple of (id_filter, field_filters), as parsed by QueryParser
        * id_filter: None, or a tuple of ids
        * field_filters: list[FieldFilter]
    """

    query_object_section_name = 'filter'

    def __init__(self, resource):
        super(MemFilter, self).__init__(resource)

        # On input
        #: list[FilterExpressionBase]
        self.expressions = None

    # Operators: operator => lambda stored, query
    # Both values have already been coerced to a common type
    _operators = {
        '$eq':  lambda val, qval: val == qval,
        '$ne':  lambda val, qval: val != qval,
        '$lt':  lambda val, qval: val < qval,
        '$lte': lambda val, qval: val <= qval,
        '$gt':  lambda val, qval: val > qval,
        '$gte': lambda val, qval: val >= qval,
    }

    # Operators that only match numbers
    _operators_numeric = frozenset(('$lt', '$lte', '$gt', '$gte'))

    # These classes implement the matching
    # You can override them, if necessary
    _FIELD_EXPRESSION_CLS = FilterFieldExpression
    _ID_EXPRESSION_CLS = FilterIdExpression

    def input(self, criteria):
        super(MemFilter, self).input(criteria)
        self.expressions = self._parse_criteria(criteria)
        return self

    def is_input_empty(self):
        return not self.expressions

    def _parse_criteria(self, criteria):
        """ Parse the filter input into a list of expressions

            :type criteria: (tuple | None, list[FieldFilter]) | None
            :rtype: list[FilterExpressionBase]
        """
        # None
        if not criteria:
            return []

        id_filter, field_filters = criteria

        # Expressions are AND-ed together
        expressions = []

        if id_filter:
            expressions.append(self._ID_EXPRESSION_CLS(id_filter))

        for field_filter in field_filters:
            path, operator, values = FieldFilter(*field_filter)

            # Operator lookup
            try:
                operator_lambda = self._operators[operator]
            except KeyError:
                raise InvalidQueryError('Unsupported operator "{}" found in filter for field `{}`'
                                        .format(operator, path))

            expressions.append(self._FIELD_EXPRESSION_CLS(
                path, operator, operator_lambda, tuple(values),
                numeric_only=operator in self._operators_numeric,
            ))

        # Done
        return expressions

    def matches(self, item: dict) -> bool:
        """ Test whether an item matches every expression """
        return all(e.matches(item) for e in self.expressions)

    def alter_items(self, items):
        if not self.expressions:
            return list(items)  # short-circuit
        return [item for item in items if self.matches(item)]

    def get_final_input_value(self):
        return [repr(e) for e in self.expressions]
