""" Singular and plural forms of resource names

Relations between resources are discovered by naming convention:
a `comments` item refers to its `posts` parent with a `postId` field.
This module converts between the two forms.

The rules are:

1. Uncountable words (`UNCOUNTABLE`) are returned as is.
2. Irregular words (`IRREGULAR`) are looked up in the table, case-insensitively.
   The case of the first letter is kept.
3. Otherwise, suffix rules apply.

    pluralize():
        * `-s`, `-x`, `-z`, `-ch`, `-sh` -> `-es`       (box -> boxes)
        * consonant + `-y` -> `-ies`                    (category -> categories)
        * everything else -> `-s`                       (post -> posts)

    singularize():
        * consonant + `-ies` -> `-y`                    (categories -> category)
        * `-sses`, `-xes`, `-zes`, `-ches`, `-shes` -> drop `-es`  (boxes -> box)
        * `-ss`, `-us`, `-is` -> unchanged              (address, status, analysis)
        * `-s` -> drop `-s`                             (posts -> post)
        * everything else -> unchanged                  (post -> post)

Irregular and uncountable words are matched against the last segment of a camelCase or snake_case
name, so `blogPeople` -> `blogPerson`, while `box` is never mistaken for `ox`.
"""

from typing import Dict, Tuple

#: singular -> plural
IRREGULAR = {
    'person': 'people',
    'man': 'men',
    'woman': 'women',
    'child': 'children',
    'mouse': 'mice',
    'goose': 'geese',
    'foot': 'feet',
    'tooth': 'teeth',
    'ox': 'oxen',
    'leaf': 'leaves',
    'life': 'lives',
    'knife': 'knives',
    'wife': 'wives',
    'half': 'halves',
    'shelf': 'shelves',
    'movie': 'movies',
    'cookie': 'cookies',
    'pie': 'pies',
    'tie': 'ties',
    'hero': 'heroes',
    'potato': 'potatoes',
    'tomato': 'tomatoes',
    'bus': 'buses',
    'status': 'statuses',
    'alias': 'aliases',
    'quiz': 'quizzes',
    'datum': 'data',
    'medium': 'media',
    'criterion': 'criteria',
    'index': 'indices',
    'matrix': 'matrices',
    'vertex': 'vertices',
    'analysis': 'analyses',
    'axis': 'axes',
}  # type: Dict[str, str]

#: plural -> singular
IRREGULAR_PLURALS = {plural: singular for singular, plural in IRREGULAR.items()}

#: Words that have the same singular and plural form
UNCOUNTABLE = frozenset((
    'news', 'series', 'species', 'sheep', 'fish', 'deer',
    'equipment', 'information', 'feedback', 'metadata', 'settings',
))

_VOWELS = frozenset('aeiou')


def pluralize(word: str) -> str:
    """ Get the plural form of a word: 'post' -> 'posts' """
    if not word or _split_last_segment(word)[1].lower() in UNCOUNTABLE:
        return word

    irregular = _lookup_irregular(word, IRREGULAR)
    if irregular is not None:
        return irregular

    if word.endswith(('s', 'x', 'z', 'ch', 'sh')):
        return word + 'es'
    if word.endswith('y') and len(word) > 1 and word[-2].lower() not in _VOWELS:
        return word[:-1] + 'ies'
    return word + 's'


def singularize(word: str) -> str:
    """ Get the singular form of a word: 'posts' -> 'post'

        Singular words are returned unchanged.
    """
    if not word or _split_last_segment(word)[1].lower() in UNCOUNTABLE:
        return word

    irregular = _lookup_irregular(word, IRREGULAR_PLURALS)
    if irregular is not None:
        return irregular
    # Already singular, and irregular
    if _lookup_irregular(word, IRREGULAR) is not None:
        return word

    if word.endswith('ies') and len(word) > 3 and word[-4].lower() not in _VOWELS:
        return word[:-3] + 'y'
    if word.endswith(('sses', 'xes', 'zes', 'ches', 'shes')):
        return word[:-2]
    if word.endswith(('ss', 'us', 'is')):
        return word
    if word.endswith('s'):
        return word[:-1]
    return word


def _lookup_irregular(word: str, table: Dict[str, str]):
    """ Look the last segment of a word up in an irregular words table

        The case of the first letter of the segment is kept: 'blogPerson' -> 'blogPeople'

        :return: the replaced word, or None
    """
    head, tail = _split_last_segment(word)
    replacement = table.get(tail.lower())
    if replacement is None:
        return None
    if tail[0].isupper():
        replacement = replacement[0].upper() + replacement[1:]
    return head + replacement


def _split_last_segment(word: str) -> Tuple[str, str]:
    """ Split a name into (head, last segment) at the last camelCase hump, underscore, or dash """
    for i in range(len(word) - 1, 0, -1):
        if word[i].isupper() or word[i - 1] in '_-':
            return word[:i], word[i:]
    return '', word
