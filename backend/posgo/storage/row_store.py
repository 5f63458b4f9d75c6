# Overview: Generic row store over the hosted (cloud) tables, plus its access policy.

"""
Row Store

WHY: Store-mode persistence talks to the hosted database as an opaque row
store: CRUD with equality filters and single-column ordering. Keeping that
surface narrow lets the cloud backend and the demo template service stay
independent of the concrete engine.

DESIGN:
- Rows are plain dicts keyed by remote (snake_case) column names
- Date/time columns travel as ISO-8601 "Z" strings on both sides
- One commit per call; nothing spans calls
- Unknown tables/columns raise RowStoreError (schema drift is loud)
- AccessPolicy mirrors the hosted service's row-level rules

SECURITY:
- Writes into the demo template scope require a super-admin identity
- leads/stores are global; listing and deleting them is super-admin only
- An upsert can never move an existing row to another store
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable

from sqlalchemy import DateTime, and_, select
from sqlalchemy.exc import SQLAlchemyError

from ..constants import DEMO_TEMPLATE_STORE_ID
from ..extensions import db
from ..time_utils import parse_iso_datetime, to_utc_z


class RowStoreError(Exception):
    """Remote call failed (network/engine/schema). Callers treat it as transient."""


class RowStorePermissionError(RowStoreError):
    """Remote rejected the call under its access policy."""


GLOBAL_TABLES = {"leads", "stores"}


class RowStore(ABC):
    """Minimal CRUD surface of the hosted database."""

    @abstractmethod
    def select(
        self,
        table: str,
        filters: dict | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]:
        ...

    @abstractmethod
    def insert(self, table: str, rows: list[dict]) -> None:
        ...

    @abstractmethod
    def upsert(self, table: str, rows: list[dict], on_conflict: str = "id") -> None:
        ...

    @abstractmethod
    def update(self, table: str, values: dict, filters: dict) -> int:
        ...

    @abstractmethod
    def delete(self, table: str, filters: dict) -> int:
        ...


class AccessPolicy:
    """
    Row-level rules evaluated against the current session identity.

    `context` needs `is_super_admin` and `resolve_store_id()`
    (posgo.storage.router.SessionContext).
    """

    def __init__(self, context):
        self.context = context

    def _deny(self, message: str):
        raise RowStorePermissionError(message)

    def _touches_template(self, table: str, row: dict) -> bool:
        if row.get("store_id") == DEMO_TEMPLATE_STORE_ID:
            return True
        return table == "stores" and row.get("id") == DEMO_TEMPLATE_STORE_ID

    def authorize_read(self, table: str, filters: dict) -> None:
        if self.context.is_super_admin:
            return
        if table == "leads":
            self._deny("Only a super admin can list leads")
        if table == "stores":
            store_id = filters.get("id")
            if store_id not in (DEMO_TEMPLATE_STORE_ID, self.context.resolve_store_id()) or store_id is None:
                self._deny("Only a super admin can list stores")

    def authorize_write(self, table: str, rows: Iterable[dict]) -> None:
        if self.context.is_super_admin:
            return
        for row in rows:
            if self._touches_template(table, row):
                self._deny("Only a super admin can modify the demo template")
            if table == "stores" and row.get("id") not in (None, self.context.resolve_store_id()):
                self._deny("Store access denied")

    def authorize_delete(self, table: str, filters: dict) -> None:
        if self.context.is_super_admin:
            return
        if table in GLOBAL_TABLES:
            self._deny(f"Only a super admin can delete {table}")
        if self._touches_template(table, filters):
            self._deny("Only a super admin can modify the demo template")


class SqlRowStore(RowStore):
    """RowStore over the Flask-SQLAlchemy metadata of the cloud bind."""

    def __init__(self, policy: AccessPolicy | None = None):
        self.policy = policy

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _table(self, name: str):
        table = db.metadata.tables.get(name)
        if table is None:
            raise RowStoreError(f"Unknown table: {name}")
        return table

    def _check_columns(self, table, keys: Iterable[str]) -> None:
        unknown = [k for k in keys if k not in table.c]
        if unknown:
            raise RowStoreError(f"Unknown column(s) on {table.name}: {', '.join(sorted(unknown))}")

    def _to_db(self, table, row: dict) -> dict:
        self._check_columns(table, row.keys())
        out = {}
        for key, value in row.items():
            if isinstance(table.c[key].type, DateTime) and isinstance(value, str):
                try:
                    value = parse_iso_datetime(value)
                except ValueError as exc:
                    raise RowStoreError(f"Invalid datetime for {table.name}.{key}: {value!r}") from exc
            out[key] = value
        return out

    def _from_db(self, mapping) -> dict:
        row: dict[str, Any] = {}
        for key, value in mapping.items():
            row[key] = to_utc_z(value) if isinstance(value, datetime) else value
        return row

    def _where(self, table, filters: dict):
        prepared = self._to_db(table, filters)
        return and_(*[table.c[k] == v for k, v in prepared.items()])

    def _run(self, operation):
        try:
            result = operation()
            db.session.commit()
            return result
        except RowStoreError:
            db.session.rollback()
            raise
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise RowStoreError(str(exc)) from exc

    # -------------------------------------------------------------------------
    # RowStore
    # -------------------------------------------------------------------------

    def select(self, table, filters=None, order_by=None, descending=False):
        t = self._table(table)
        filters = filters or {}
        if self.policy:
            self.policy.authorize_read(table, filters)

        stmt = select(t)
        if filters:
            stmt = stmt.where(self._where(t, filters))
        if order_by:
            self._check_columns(t, [order_by])
            column = t.c[order_by]
            stmt = stmt.order_by(column.desc() if descending else column.asc())

        def _op():
            return [self._from_db(r) for r in db.session.execute(stmt).mappings().all()]

        return self._run(_op)

    def insert(self, table, rows):
        t = self._table(table)
        if self.policy:
            self.policy.authorize_write(table, rows)
        prepared = [self._to_db(t, r) for r in rows]
        if not prepared:
            return

        def _op():
            db.session.execute(t.insert(), prepared)

        self._run(_op)

    def upsert(self, table, rows, on_conflict="id"):
        t = self._table(table)
        self._check_columns(t, [on_conflict])
        if self.policy:
            self.policy.authorize_write(table, rows)
        prepared = [self._to_db(t, r) for r in rows]
        has_store = "store_id" in t.c

        def _op():
            for row in prepared:
                key = row.get(on_conflict)
                existing = None
                if key is not None:
                    existing = db.session.execute(
                        select(t).where(t.c[on_conflict] == key)
                    ).mappings().first()
                if existing is None:
                    db.session.execute(t.insert(), [row])
                    continue
                if has_store and "store_id" in row and existing["store_id"] != row["store_id"]:
                    raise RowStorePermissionError(f"{table} row {key} belongs to another store")
                values = {k: v for k, v in row.items() if k != on_conflict}
                if values:
                    db.session.execute(t.update().where(t.c[on_conflict] == key).values(**values))

        self._run(_op)

    def update(self, table, values, filters):
        t = self._table(table)
        if self.policy:
            self.policy.authorize_write(table, [{**filters, **values}])
        prepared = self._to_db(t, values)
        where = self._where(t, filters)

        def _op():
            return db.session.execute(t.update().where(where).values(**prepared)).rowcount

        return self._run(_op)

    def delete(self, table, filters):
        t = self._table(table)
        if not filters:
            raise RowStoreError(f"Refusing unfiltered delete on {table}")
        if self.policy:
            self.policy.authorize_delete(table, filters)
        where = self._where(t, filters)

        def _op():
            return db.session.execute(t.delete().where(where)).rowcount

        return self._run(_op)
