import sqlalchemy
from sqlalchemy import create_engine


def content_samples():
    """ Generate the document tree: posts, comments """
    return {
        'posts': [
            {'id': '1', 'title': 'a', 'views': 100, 'author': {'name': 'foo'}},
            {'id': '2', 'title': 'b', 'views': 200, 'author': {'name': 'bar'}},
            {'id': '3', 'title': 'c', 'views': 300, 'author': {'name': 'baz'}},
        ],
        'comments': [
            {'id': '1', 'title': 'a', 'postId': '1'},
        ],
    }


def more_content_samples():
    """ A bigger tree, with more relations """
    return {
        'users': [
            {'id': 'u1', 'name': 'alice', 'age': 30, 'admin': True},
            {'id': 'u2', 'name': 'bob', 'age': 17, 'admin': False},
            {'id': 'u3', 'name': 'carol'},
        ],
        'posts': [
            {'id': 'p1', 'title': 'First', 'views': 5, 'userId': 'u1', 'tags': ['a', 'b']},
            {'id': 'p2', 'title': 'Second', 'views': 10, 'userId': 'u2'},
            {'id': 'p3', 'title': 'Third', 'views': 5, 'userId': 'u1'},
            {'id': 'p4', 'title': 'Orphan', 'views': 0, 'userId': 'u404'},
            {'id': 'p5', 'title': 'Nobody', 'views': '7', 'userId': None},
        ],
        'comments': [
            {'id': 'c1', 'body': 'Hi', 'postId': 'p1', 'userId': 'u2'},
            {'id': 'c2', 'body': 'Hello', 'postId': 'p1', 'userId': 'u3'},
            {'id': 'c3', 'body': 'Hey', 'postId': 'p2', 'userId': 'u1'},
        ],
        'profile': {'name': 'typicode'},
    }


def get_working_db_for_tests():
    """ An in-memory SQLite database that all threads share """
    engine = create_engine('sqlite://',
                           connect_args={'check_same_thread': False},
                           poolclass=sqlalchemy.pool.StaticPool)
    return engine
