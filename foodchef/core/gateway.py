# foodchef/core/gateway.py
"""
Persistence gateway used by the domain managers.

Wraps a SQLAlchemy ``Session`` with a small table-oriented API. Writes commit
straight away unless a transaction was opened with ``begin_transaction`` (or
the ``transaction()`` context manager), in which case they are only flushed
until ``commit``.
"""
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import Table, delete as sa_delete, insert, text, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable

from foodchef.core.database import Base
from foodchef.models import sql_models  # noqa: F401  registers the tables

Query = Union[str, Executable]


class Db:
    def __init__(self, session: Session):
        self.session = session
        self.last_insert_id: Optional[int] = None
        self._in_transaction = False

    # --- helpers ---
    @staticmethod
    def table(name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise ValueError(f"Unknown table: {name}")

    @staticmethod
    def _statement(query: Query) -> Executable:
        return text(query) if isinstance(query, str) else query

    def _autocommit(self):
        if self._in_transaction:
            self.session.flush()
        else:
            self.session.commit()

    # --- reads ---
    def fetch_one(self, query: Query, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        row = self.session.execute(self._statement(query), params or {}).mappings().first()
        return dict(row) if row else None

    def fetch_all(self, query: Query, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        rows = self.session.execute(self._statement(query), params or {}).mappings().all()
        return [dict(r) for r in rows]

    def fetch_by_id(self, table: str, _id: int) -> Optional[Dict[str, Any]]:
        tbl = self.table(table)
        return self.fetch_one(tbl.select().where(tbl.c.id == _id))

    # --- writes ---
    def insert_or_update(self, table: str, fields: Dict[str, Any], _id: Optional[int] = None) -> int:
        """Insert a row (returns the new id) or update row ``_id`` (returns rowcount)."""
        tbl = self.table(table)
        if _id is not None:
            result = self.session.execute(update(tbl).where(tbl.c.id == _id).values(**fields))
            self._autocommit()
            return result.rowcount

        result = self.session.execute(insert(tbl).values(**fields))
        self.last_insert_id = result.inserted_primary_key[0]
        self._autocommit()
        return self.last_insert_id

    def execute(self, query: Query, params: Optional[Dict[str, Any]] = None) -> int:
        result = self.session.execute(self._statement(query), params or {})
        self._autocommit()
        return result.rowcount

    def delete(self, table: str, _id: int) -> int:
        tbl = self.table(table)
        result = self.session.execute(sa_delete(tbl).where(tbl.c.id == _id))
        self._autocommit()
        return result.rowcount

    # --- transactions ---
    def begin_transaction(self):
        self._in_transaction = True

    def commit(self):
        self._in_transaction = False
        self.session.commit()

    def rollback(self):
        self._in_transaction = False
        self.session.rollback()

    @contextmanager
    def transaction(self):
        self.begin_transaction()
        try:
            yield self
        except Exception:
            self.rollback()
            raise
        else:
            self.commit()
