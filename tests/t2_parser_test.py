import unittest

from memquery import QueryParser, QueryDescriptor, parse_query_params
from memquery.exc import InvalidQueryError
from memquery.parser import FieldFilter, RangeSpec, PageSpec


class MultiDict(dict):
    """ A dict of lists that quacks like the query string of a web framework """

    def getlist(self, key):
        return list(self[key])


class ParserTest(unittest.TestCase):
    """ Test QueryParser """

    longMessage = True
    maxDiff = None

    def test_empty(self):
        # === Test: None and {} are the same empty query
        self.assertEqual(parse_query_params(None), QueryDescriptor())
        self.assertEqual(parse_query_params({}), QueryDescriptor())

        q = parse_query_params({})
        self.assertIsNone(q.id_filter)
        self.assertEqual(q.field_filters, [])
        self.assertEqual(q.sort, [])
        self.assertIsNone(q.range)
        self.assertIsNone(q.page)
        self.assertEqual(q.includes, [])

        # === Test: not a mapping
        with self.assertRaises(InvalidQueryError):
            parse_query_params('views=1')
        with self.assertRaises(InvalidQueryError):
            parse_query_params([('views', '1')])

    def test_filters(self):
        # === Test: id
        self.assertEqual(parse_query_params({'id': '1'}).id_filter, ('1',))
        self.assertEqual(parse_query_params({'id': ['1', '2']}).id_filter, ('1', '2'))
        self.assertIsNone(parse_query_params({'id': []}).id_filter)

        # === Test: equality, nested fields
        self.assertEqual(parse_query_params({'views': '100', 'author.name': 'foo'}).field_filters, [
            FieldFilter('views', '$eq', ('100',)),
            FieldFilter('author.name', '$eq', ('foo',)),
        ])

        # === Test: operators
        q = parse_query_params({
            'views_ne': '1',
            'views_lt': '2',
            'views_lte': '3',
            'views_gt': '4',
            'views_gte': '5',
        })
        self.assertEqual(q.field_filters, [
            FieldFilter('views', '$ne', ('1',)),
            FieldFilter('views', '$lt', ('2',)),
            FieldFilter('views', '$lte', ('3',)),
            FieldFilter('views', '$gt', ('4',)),
            FieldFilter('views', '$gte', ('5',)),
        ])

        # === Test: multi-valued
        self.assertEqual(parse_query_params({'title': ['a', 'b']}).field_filters, [
            FieldFilter('title', '$eq', ('a', 'b')),
        ])

        # === Test: a suffix alone is a field name
        self.assertEqual(parse_query_params({'_lt': '1', 'x_lt': '2'}).field_filters, [
            FieldFilter('_lt', '$eq', ('1',)),
            FieldFilter('x', '$lt', ('2',)),
        ])
        self.assertEqual(parse_query_params({'created_at_gte': '1'}).field_filters, [
            FieldFilter('created_at', '$gte', ('1',)),
        ])

        # === Test: reserved keys are not filters; other underscore keys are
        q = parse_query_params({'_sort': 'id', '_status': 'live', '_q': 'search', '_status_ne': 'draft'})
        self.assertEqual(q.field_filters, [
            FieldFilter('_status', '$eq', ('live',)),
            FieldFilter('_q', '$eq', ('search',)),
            FieldFilter('_status', '$ne', ('draft',)),
        ])
        self.assertEqual(q.sort, [('id', +1)])

        # === Test: values must be strings
        with self.assertRaises(InvalidQueryError):
            parse_query_params({'views': 100})
        with self.assertRaises(InvalidQueryError):
            parse_query_params({'views': ['1', 2]})
        with self.assertRaises(InvalidQueryError):
            parse_query_params({'id': None})

    def test_sort(self):
        # === Test: comma-separated, with directions
        self.assertEqual(parse_query_params({'_sort': '-views,id'}).sort, [('views', -1), ('id', +1)])

        # === Test: repeated
        self.assertEqual(parse_query_params({'_sort': ['title', '-author.name']}).sort,
                         [('title', +1), ('author.name', -1)])

        # === Test: empty segments are skipped
        self.assertEqual(parse_query_params({'_sort': ' views , ,-'}).sort, [('views', +1)])

    def test_range(self):
        # === Test: all keys
        self.assertEqual(parse_query_params({'_start': '1', '_end': '3'}).range, RangeSpec(1, 3, None))
        self.assertEqual(parse_query_params({'_start': '1', '_limit': '2'}).range, RangeSpec(1, None, 2))
        self.assertEqual(parse_query_params({'_limit': '2'}).range, RangeSpec(None, None, 2))

        # === Test: malformed values are ignored
        self.assertIsNone(parse_query_params({'_start': 'a', '_limit': ''}).range)
        self.assertEqual(parse_query_params({'_start': '-5'}).range, RangeSpec(-5, None, None))

        # === Test: the first value wins
        self.assertEqual(parse_query_params({'_limit': ['2', '5']}).range, RangeSpec(None, None, 2))

    def test_page(self):
        # === Test: page
        self.assertEqual(parse_query_params({'_page': '2', '_per_page': '10'}).page, PageSpec(2, 10))
        self.assertEqual(parse_query_params({'_page': '2'}).page, PageSpec(2, None))

        # === Test: no page
        self.assertIsNone(parse_query_params({'_per_page': '10'}).page)
        self.assertIsNone(parse_query_params({'_page': 'x', '_per_page': '10'}).page)

        # === Test: non-positive page size is ignored
        self.assertEqual(parse_query_params({'_page': '1', '_per_page': '0'}).page, PageSpec(1, None))
        self.assertEqual(parse_query_params({'_page': '1', '_per_page': '-3'}).page, PageSpec(1, None))

    def test_include(self):
        self.assertEqual(parse_query_params({'_include': 'comments'}).includes, ['comments'])
        self.assertEqual(parse_query_params({'_include': ['comments', 'author']}).includes, ['comments', 'author'])

    def test_multidict(self):
        """ Test an object with getlist() """
        params = MultiDict({
            'id': ['1', '2'],
            'views_gte': ['100'],
            '_sort': ['-views'],
            '_page': ['1'],
            '_per_page': ['2'],
            '_include': ['comments', 'author'],
        })
        self.assertEqual(QueryParser().parse(params), QueryDescriptor(
            id_filter=('1', '2'),
            field_filters=[FieldFilter('views', '$gte', ('100',))],
            sort=[('views', -1)],
            page=PageSpec(1, 2),
            includes=['comments', 'author'],
        ))

    def test_custom_operators(self):
        """ Test: QueryParser can be extended """
        class MyParser(QueryParser):
            OPERATOR_SUFFIXES = QueryParser.OPERATOR_SUFFIXES + (('_like', '$like'),)

        self.assertEqual(MyParser().parse({'title_like': 'a'}).field_filters, [
            FieldFilter('title', '$like', ('a',)),
        ])

    def test_repr(self):
        self.assertEqual(repr(parse_query_params({'id': '1', '_sort': 'id'})),
                         "QueryDescriptor(id_filter=('1',), sort=[('id', 1)])")
