""" Dotted-path access to fields of JSON documents """

from collections.abc import Mapping


class _ABSENT_TYPE:
    """ A falsy marker for fields that are not present in a document

        It is distinct from `None`, which is a present JSON `null`.
    """
    def __repr__(self):
        return '-'

    def __bool__(self):
        return False


ABSENT = _ABSENT_TYPE()  # A falsy marker for missing fields


def resolve_path(item, path: str):
    """ Get the value of a field, following a dotted path through nested objects

        Example:

            resolve_path({'author': {'name': 'foo'}}, 'author.name')  # -> 'foo'
            resolve_path({'author': None}, 'author.name')  # -> ABSENT

        :param item: The document
        :param path: Field name, possibly with dots: 'author.name'
        :return: The value, or ABSENT when any segment of the path is missing
    """
    value = item
    for segment in path.split('.'):
        if not isinstance(value, Mapping) or segment not in value:
            return ABSENT
        value = value[segment]
    return value
