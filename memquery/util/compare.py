""" Comparison of stored JSON values with query string values

Query string values always come as strings, while documents store JSON values.
The rules are:

* When the stored value is a number, the query value is parsed as a number
* Otherwise, both sides are compared as strings.
  Non-string values are rendered as JSON: `true`, `false`, `null`, `[1,2]`, `{"a":1}`

`bool` is never a number here, even though it is an `int` in Python.
"""

import json
import math

from .path import ABSENT


def is_number(value) -> bool:
    """ Is the stored value a JSON number? """
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_number(value: str):
    """ Parse a query string value as a number

        :return: float, or None if the string is not a finite number
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_string(value) -> str:
    """ Render a stored value as a string for string comparisons """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False, default=str)


def same_id(a, b) -> bool:
    """ Do two ids (or an id and a foreign key) refer to the same item?

        Ids are compared as strings: `1` and `"1"` are the same id.
        `None` is never an id.
    """
    if a is None or b is None:
        return False
    return to_string(a) == to_string(b)


def coerce_query_value(stored, query_value: str):
    """ Coerce both sides of a comparison to a common type

        :param stored: The value from the document
        :param query_value: The string from the query
        :return: (stored, query) pair of comparable values,
            or None when the query value can't be coerced to the type of the stored value
    """
    if is_number(stored):
        number = parse_number(query_value)
        return None if number is None else (stored, number)
    return to_string(stored), query_value


def _type_rank(value) -> int:
    """ The order of value kinds: ABSENT, then numbers, then everything else """
    if value is ABSENT:
        return 0
    if is_number(value):
        return 1
    return 2


def compare_values(a, b) -> int:
    """ Compare two stored values, `cmp()`-style

        * ABSENT is less than any present value
        * Numbers are less than other values, and compare as numbers
        * Anything else compares as strings

        The order is total: sorting mixed values gives the same result whatever the input order is.

        :return: -1, 0, +1
    """
    rank_a, rank_b = _type_rank(a), _type_rank(b)
    if rank_a != rank_b:
        return (rank_a > rank_b) - (rank_a < rank_b)
    if rank_a == 0:
        return 0
    if rank_a == 2:
        a, b = to_string(a), to_string(b)
    return (a > b) - (a < b)
