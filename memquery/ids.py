""" Unique ids for created items """

import secrets
from typing import Iterable


def generate_id(existing: Iterable[str] = (), nbytes: int = 2) -> str:
    """ Generate a short random hex id that is not in `existing`

        Ids start at 4 hex characters, and grow when the resource gets crowded.

        :param existing: Ids that are already taken
        :param nbytes: Number of random bytes to start with
    """
    taken = frozenset(str(i) for i in existing)
    attempts = 0
    while True:
        new_id = secrets.token_hex(nbytes)
        if new_id not in taken:
            return new_id

        # Too many collisions: use longer ids
        attempts += 1
        if attempts % 8 == 0:
            nbytes += 1
