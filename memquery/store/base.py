class Store:
    """ The document tree, and the way to save it

        The engine never loads nor saves anything by itself:
        it works with the live `data` tree, and calls persist() after every change.

        Subclasses implement:

        * `data`: the tree: {resource-name: [item, ...]}.
          It is modified in place by ResourceService.
        * `persist()`: a coroutine that saves the current tree.
          Its failures are propagated to the caller of the mutating operation.
    """

    #: The document tree: {resource-name: [item, ...]}
    data = None  # type: dict

    async def persist(self):
        """ Save the current state of `data` """
        raise NotImplementedError()

    def __repr__(self):
        return '{}()'.format(self.__class__.__name__)


class MemoryStore(Store):
    """ A store that keeps the tree in memory only

        Nothing is saved anywhere; `persist_count` tells how many times it was asked to.
    """

    def __init__(self, data: dict = None):
        self.data = data if data is not None else {}
        self.persist_count = 0

    async def persist(self):
        self.persist_count += 1
