class BaseMemQueryException(Exception):
    pass


class InvalidQueryError(BaseMemQueryException):
    """ Invalid input provided by the User """

    def __init__(self, err: str):
        super(InvalidQueryError, self).__init__('Query error: {err}'.format(err=err))


class DisabledError(InvalidQueryError):
    """ The feature is disabled """


class InvalidRelationError(BaseMemQueryException):
    """ Query mentioned a relation that cannot be included """

    def __init__(self, resource: str, relation_name: str, where: str):
        self.resource = resource
        self.relation_name = relation_name
        self.where = where

        super(InvalidRelationError, self).__init__(
            'Invalid relation "{relation_name}" for "{resource}" specified in {where}'.format(
                relation_name=relation_name,
                resource=resource,
                where=where)
        )


class StoreError(BaseMemQueryException):
    """ The store has failed to load or persist the document tree

    The original error is always chained as `__cause__`
    """

    def __init__(self, store: str, err: str):
        self.store = store

        super(StoreError, self).__init__('{store}: {err}'.format(store=store, err=err))
