from typing import List


class MemQueryHandlerBase:
    """ An implementation of a handler from ResourceQuery

        Every subclass will handle a single section of the Query Object
    """

    #: Name of the Query Object section that this object is capable of handling
    query_object_section_name = None

    def __init__(self, resource: str):
        """ Initialize the Query Object section handler with a resource name.

        This method does *not* receive any input data just yet, with the purpose of having an
        object that can be extended with some interesting defaults right at init time.

        :param resource: Name of the resource the query is made against: e.g. 'posts'

        NOTE: Any arguments that have default values will be treated as handler settings!!
        """
        #: The resource to handle the Query Object for
        self.resource = resource

        # Has the input() method been called already?
        self.input_received = False
        self.input_value = None

        # Should this handler's alter_items() be skipped by ResourceQuery?
        # This is used when page pagination takes over range pagination.
        self.skip_this_handler = False

        #: ResourceQuery bound to this object. It may remain uninitialized.
        self.query = None

    def with_query(self, query):
        """ Bind this object with a ResourceQuery

            :type query: memquery.query.ResourceQuery
        """
        self.query = query
        return self

    def __copy__(self):
        """ Some objects may be reused: i.e. their state before input() is called.

        A handler is reused by keeping one configured instance, and copy()ing it
        before every input() call
        """
        cls = self.__class__
        result = cls.__new__(cls)
        result.__dict__.update(self.__dict__)
        return result

    def input(self, qo_value):
        """ Get a section of the Query object.

        The purpose of this method is to receive the input, validate it, and store as a public
        property so that external tools may export its value.

        :param qo_value: the value of the Query object section it's handling
        :rtype: MemQueryHandlerBase
        :raises InvalidQueryError
        :raises InvalidRelationError
        """
        self.input_value = qo_value  # no copying. Try not to modify it.

        # Set the flag
        self.input_received = True

        # Make sure that input() can only be used once
        self.input = self.__raise_input_not_reusable

        return self

    def is_input_empty(self):
        """ Test whether the input value was empty """
        return not self.input_value

    def __raise_input_not_reusable(self, *args, **kwargs):
        raise RuntimeError("You can't use the {}.input() method twice. "
                           "copy() it first!"
                           .format(self.__class__.__name__))

    def alter_items(self, items: List[dict]) -> List[dict]:
        """ Apply the Query Object section this handler is handling to a list of items

        Handlers never modify the list they are given, nor the items in it:
        a new list is returned.

        :param items: The items of the resource, possibly already processed by other handlers
        :rtype: list[dict]
        """
        raise NotImplementedError()

    def get_final_input_value(self):
        """ Get the final input of the handler """
        return self.input_value
