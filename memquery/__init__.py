"""
memquery is an in-memory query engine that lets you serve a JSON document tree
like a REST database.

The main use case is the interaction with the UI:
every time the UI needs some *sorting*, *filtering*, *pagination*, or to load some
*related items*, you won't have to write a single line of repetitive code!

The tree is just a dict of resources, every resource is a list of items:

```python
data = {
    'posts': [{'id': '1', 'title': 'Hello', 'views': 100}],
    'comments': [{'id': '1', 'body': 'Hi', 'postId': '1'}],
}
```

The API user sends the query in the query string, and controls the way the result is generated:

```
GET /posts?views_gte=100&_sort=-views&_page=1&_per_page=10&_include=comments
```

Items refer to each other by convention: a comment that belongs to a post has a `postId`.
"""

# Exceptions that are used here and there
from .exc import *

# The heart of memquery are the handlers:
# that's where every part of the query string is applied to the items!
from . import handlers

# The parser turns query string parameters into a QueryDescriptor
from .parser import QueryParser, QueryDescriptor, parse_query_params

# ResourceQuery is the man that gives every handler its part of the query, and runs them in order
from .query import ResourceQuery

# Stores keep the document tree, and save it
from .store import Store, MemoryStore, JsonFileStore
from .sa import SqlAlchemyStore

# ResourceService is something that you'll need when building JSON API that implements CRUD:
# Create/Read/Update/Delete
from .crud import ResourceService, CascadeDeleter

# Helpers
# settings dicts for ResourceQuery and ResourceService
from .util import QuerySettingsDict, ServiceSettingsDict
# The marker for a missing value
from .util import ABSENT
# Resource names
from .util import pluralize, singularize
# Ids for new items
from .ids import generate_id
