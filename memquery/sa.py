import asyncio
import logging
from copy import deepcopy

import sqlalchemy as sa
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Engine

from .exc import StoreError
from .store.base import Store

logger = logging.getLogger(__name__)


class SqlAlchemyStore(Store):
    """ A store that keeps the tree in a database table, with SqlAlchemy as a back-end

        Every resource is a row: (name, items), where `items` is a JSON column.
        Every persist() rewrites the whole table in one transaction.

        Example:

            engine = sqlalchemy.create_engine('postgresql://localhost/app')
            store = SqlAlchemyStore(engine).load()

        With an in-memory SQLite database, make sure every thread uses the same connection:

            engine = sqlalchemy.create_engine('sqlite://',
                                              connect_args={'check_same_thread': False},
                                              poolclass=sqlalchemy.pool.StaticPool)
    """

    def __init__(self, engine: Engine, table_name: str = 'resources', metadata: sa.MetaData = None, default: dict = None):
        """ Init a database store

        :param engine: The engine to connect with
        :param table_name: Name of the table to keep the resources in
        :param metadata: MetaData to put the table on. Give yours to have it created with your other tables.
        :param default: The tree to start with when the table is empty
        """
        self.engine = engine
        self.default = default
        self.data = None

        #: The table: one row per resource
        self.table = sa.Table(
            table_name, metadata if metadata is not None else sa.MetaData(),
            sa.Column('name', sa.String(255), primary_key=True),
            sa.Column('items', sa.JSON, nullable=False),
        )

    def create_table(self):
        """ Create the table, unless it exists """
        try:
            self.table.create(self.engine, checkfirst=True)
        except sa_exc.SQLAlchemyError as e:
            raise StoreError(repr(self), 'failed to create the table: {}'.format(e)) from e
        return self

    def load(self):
        """ Load the tree from the table. The table is created if it does not exist. """
        self.create_table()

        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    sa.select(self.table.c['name'], self.table.c['items']).order_by(self.table.c['name'])
                ).fetchall()
        except sa_exc.SQLAlchemyError as e:
            raise StoreError(repr(self), 'failed to load: {}'.format(e)) from e

        if rows:
            self.data = {name: items for name, items in rows}
        else:
            self.data = deepcopy(self.default) if self.default is not None else {}
        return self

    async def persist(self):
        # Take a snapshot now: the tree may change while we are writing
        snapshot = deepcopy(self.data)

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write, snapshot)
        logger.debug('Saved %d resources into %s', len(snapshot), self.table.name)

    def _write(self, snapshot: dict):
        """ Replace all rows in one transaction """
        try:
            with self.engine.begin() as conn:
                conn.execute(self.table.delete())
                if snapshot:
                    conn.execute(self.table.insert(), [
                        {'name': name, 'items': items}
                        for name, items in snapshot.items()
                    ])
        except sa_exc.SQLAlchemyError as e:
            raise StoreError(repr(self), 'failed to save: {}'.format(e)) from e

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.table.name)
