import unittest

from memquery.util import pluralize, singularize, resolve_path, ABSENT, compare_values, coerce_query_value, same_id
from memquery.util.compare import is_number, parse_number, to_string
from memquery.util.inspect import get_function_defaults, pluck_kwargs_from
from memquery.ids import generate_id


class UtilTest(unittest.TestCase):
    """ Test helpers """

    longMessage = True
    maxDiff = None

    def test_inflect(self):
        # === Test: regular words
        for singular, plural in (
            ('post', 'posts'),
            ('comment', 'comments'),
            ('box', 'boxes'),
            ('match', 'matches'),
            ('wish', 'wishes'),
            ('address', 'addresses'),
            ('category', 'categories'),
            ('day', 'days'),
        ):
            self.assertEqual(pluralize(singular), plural)
            self.assertEqual(singularize(plural), singular)

        # === Test: irregular words
        for singular, plural in (
            ('person', 'people'),
            ('child', 'children'),
            ('movie', 'movies'),
            ('status', 'statuses'),
            ('index', 'indices'),
            ('ox', 'oxen'),
        ):
            self.assertEqual(pluralize(singular), plural)
            self.assertEqual(singularize(plural), singular)

        # === Test: irregular words in compound names
        self.assertEqual(pluralize('blogPerson'), 'blogPeople')
        self.assertEqual(singularize('blogPeople'), 'blogPerson')
        self.assertEqual(singularize('blog_people'), 'blog_person')
        self.assertEqual(pluralize('userStatus'), 'userStatuses')
        # 'box' ends with 'ox', but is not 'ox'
        self.assertEqual(pluralize('box'), 'boxes')
        self.assertEqual(singularize('boxes'), 'box')

        # === Test: uncountable
        self.assertEqual(pluralize('news'), 'news')
        self.assertEqual(singularize('news'), 'news')
        self.assertEqual(pluralize('sheep'), 'sheep')
        self.assertEqual(singularize('userSettings'), 'userSettings')

        # === Test: singular words stay singular
        self.assertEqual(singularize('post'), 'post')
        self.assertEqual(singularize('person'), 'person')
        self.assertEqual(singularize('status'), 'status')
        self.assertEqual(singularize('analysis'), 'analysis')

        # === Test: empty
        self.assertEqual(pluralize(''), '')
        self.assertEqual(singularize(''), '')

    def test_resolve_path(self):
        item = {'id': 1, 'author': {'name': 'foo', 'address': {'city': None}}, 'tags': ['a']}

        # === Test: plain fields
        self.assertEqual(resolve_path(item, 'id'), 1)
        self.assertEqual(resolve_path(item, 'tags'), ['a'])

        # === Test: nested fields
        self.assertEqual(resolve_path(item, 'author.name'), 'foo')
        self.assertIsNone(resolve_path(item, 'author.address.city'))

        # === Test: missing fields
        self.assertIs(resolve_path(item, 'title'), ABSENT)
        self.assertIs(resolve_path(item, 'author.age'), ABSENT)
        self.assertIs(resolve_path(item, 'author.address.city.name'), ABSENT)  # through a null
        self.assertIs(resolve_path(item, 'tags.0'), ABSENT)  # lists are not walked into
        self.assertIs(resolve_path(item, 'id.value'), ABSENT)

        # === Test: ABSENT is falsy, and is not None
        self.assertFalse(ABSENT)
        self.assertIsNot(ABSENT, None)

    def test_compare(self):
        # === Test: is_number()
        self.assertTrue(is_number(1))
        self.assertTrue(is_number(1.5))
        self.assertFalse(is_number(True))
        self.assertFalse(is_number('1'))
        self.assertFalse(is_number(None))

        # === Test: parse_number()
        self.assertEqual(parse_number('100'), 100.0)
        self.assertEqual(parse_number(' -1.5 '), -1.5)
        self.assertIsNone(parse_number('abc'))
        self.assertIsNone(parse_number(''))
        self.assertIsNone(parse_number('nan'))
        self.assertIsNone(parse_number('inf'))

        # === Test: to_string()
        self.assertEqual(to_string('a'), 'a')
        self.assertEqual(to_string(1), '1')
        self.assertEqual(to_string(True), 'true')
        self.assertEqual(to_string(None), 'null')
        self.assertEqual(to_string([1, 2]), '[1,2]')
        self.assertEqual(to_string({'a': 1}), '{"a":1}')

        # === Test: coerce_query_value()
        self.assertEqual(coerce_query_value(100, '100'), (100, 100.0))
        self.assertIsNone(coerce_query_value(100, 'abc'))
        self.assertEqual(coerce_query_value('100', '100'), ('100', '100'))
        self.assertEqual(coerce_query_value(False, 'false'), ('false', 'false'))
        self.assertEqual(coerce_query_value(None, 'null'), ('null', 'null'))

        # === Test: compare_values()
        self.assertEqual(compare_values(1, 2), -1)
        self.assertEqual(compare_values(2, 2.0), 0)
        self.assertEqual(compare_values(10, 9), 1)
        self.assertEqual(compare_values('10', '9'), -1)  # strings
        self.assertEqual(compare_values(10, '9'), -1)  # mixed: numbers first
        self.assertEqual(compare_values('1a', 9), 1)
        self.assertEqual(compare_values(True, 1), 1)  # bool is not a number
        self.assertEqual(compare_values(ABSENT, 0), -1)
        self.assertEqual(compare_values('', ABSENT), 1)
        self.assertEqual(compare_values(ABSENT, ABSENT), 0)

        # === Test: same_id()
        self.assertTrue(same_id('1', '1'))
        self.assertTrue(same_id(1, '1'))
        self.assertFalse(same_id('1', '2'))
        self.assertFalse(same_id(None, None))
        self.assertFalse(same_id(None, 'null'))

    def test_inspect(self):
        def f(resource, a=1, *args, b=2, **kwargs):
            pass

        # === Test: get_function_defaults()
        self.assertEqual(get_function_defaults(f), {'a': 1, 'b': 2})

        # === Test: pluck_kwargs_from()
        self.assertEqual(pluck_kwargs_from({'a': 10, 'c': 30}, f), {'a': 10, 'b': 2})
        self.assertEqual(pluck_kwargs_from({'a': 10}, f, skip=('b',)), {'a': 10})

    def test_generate_id(self):
        # === Test: a short hex string
        new_id = generate_id()
        self.assertIsInstance(new_id, str)
        self.assertEqual(len(new_id), 4)
        int(new_id, 16)

        # === Test: never collides
        taken = set()
        for i in range(300):
            new_id = generate_id(taken)
            self.assertNotIn(new_id, taken)
            taken.add(new_id)

        # === Test: grows when crowded
        all_short_ids = {'{:02x}'.format(i) for i in range(256)}
        new_id = generate_id(all_short_ids, nbytes=1)
        self.assertNotIn(new_id, all_short_ids)
        self.assertGreater(len(new_id), 2)
