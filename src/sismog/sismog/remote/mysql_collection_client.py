from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError, NotFoundError, RemoteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_value
from .client import CollectionClient, Eq, Order, Record, Relation
from .collections import COLLECTIONS, CollectionSchema

logger = logging.getLogger(__name__)

# MySQL server error numbers
ER_DUP_ENTRY = 1062
ER_ROW_IS_REFERENCED = 1451
ER_NO_REFERENCED_ROW = 1452


def _translate(exc: mysql.connector.Error) -> RemoteError:
    if exc.errno == ER_DUP_ENTRY:
        return ConflictError("Este registro já existe.", code=str(exc.errno))
    if exc.errno == ER_ROW_IS_REFERENCED:
        return RemoteError("Não foi possível excluir: o registro possui vínculos.", code=str(exc.errno))
    if exc.errno == ER_NO_REFERENCED_ROW:
        return RemoteError("Referência inválida. Verifique os dados relacionados.", code=str(exc.errno))
    return RemoteError(exc.msg or str(exc), code=str(exc.errno) if exc.errno else None)


class MySQLCollectionClient(CollectionClient):
    """Collection client over the console's MySQL tables."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _schema(collection: str) -> CollectionSchema:
        schema = COLLECTIONS.get(collection)
        if schema is None:
            raise RemoteError(f"Coleção desconhecida: {collection}")
        return schema

    @staticmethod
    def _check_columns(schema: CollectionSchema, columns, *, allowed) -> None:
        unknown = [c for c in columns if c not in allowed]
        if unknown:
            raise RemoteError(f"Campos inválidos para {schema.table}: {', '.join(sorted(unknown))}")

    def _to_record(self, schema: CollectionSchema, row: Mapping[str, Any]) -> Record:
        return {c: normalize_mysql_value(row.get(c), as_bool=c in schema.bool_columns) for c in schema.columns}

    def query(
        self,
        collection: str,
        *,
        filters: Sequence[Eq] = (),
        order: Optional[Order] = None,
        relations: Sequence[Relation] = (),
    ) -> List[Record]:
        schema = self._schema(collection)
        self._check_columns(schema, [f.column for f in filters], allowed=schema.columns)

        select_parts = [f"t.`{c}` AS `{c}`" for c in schema.columns]
        joins: list[str] = []
        for i, rel in enumerate(relations):
            rel_schema = self._schema(rel.collection)
            self._check_columns(schema, [rel.foreign_key], allowed=schema.columns)
            self._check_columns(rel_schema, rel.fields, allowed=rel_schema.columns)
            alias = f"r{i}"
            joins.append(f"LEFT JOIN `{rel_schema.table}` {alias} ON {alias}.`id` = t.`{rel.foreign_key}`")
            for f in ("id",) + tuple(x for x in rel.fields if x != "id"):
                select_parts.append(f"{alias}.`{f}` AS `{rel.name}__{f}`")

        sql = f"SELECT {', '.join(select_parts)} FROM `{schema.table}` t"
        if joins:
            sql += " " + " ".join(joins)
        params: list[Any] = []
        if filters:
            sql += " WHERE " + " AND ".join(f"t.`{f.column}` = %s" for f in filters)
            params.extend(f.value for f in filters)
        if order is not None:
            self._check_columns(schema, [order.column], allowed=schema.columns)
            sql += f" ORDER BY t.`{order.column}` {order.direction.value.upper()}"

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, tuple(params))
                rows = fetchall(cur)
        except mysql.connector.Error as exc:
            logger.warning("query %s failed: %s", collection, exc)
            raise _translate(exc) from exc

        out: list[Record] = []
        for row in rows:
            record = self._to_record(schema, row)
            for rel in relations:
                if row.get(f"{rel.name}__id") is None:
                    record[rel.name] = None
                    continue
                rel_schema = self._schema(rel.collection)
                record[rel.name] = {
                    f: normalize_mysql_value(row.get(f"{rel.name}__{f}"), as_bool=f in rel_schema.bool_columns)
                    for f in ("id",) + tuple(rel.fields)
                }
            out.append(record)
        return out

    def insert(self, collection: str, rows: Sequence[Mapping[str, Any]]) -> List[Record]:
        schema = self._schema(collection)
        ids: list[int] = []
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for row in rows:
                    self._check_columns(schema, row.keys(), allowed=schema.writable)
                    cols = list(row.keys())
                    placeholders = ", ".join(["%s"] * len(cols))
                    col_sql = ", ".join(f"`{c}`" for c in cols)
                    cur.execute(
                        f"INSERT INTO `{schema.table}` ({col_sql}) VALUES ({placeholders})",
                        tuple(row[c] for c in cols),
                    )
                    ids.append(int(cur.lastrowid))

                created: list[Record] = []
                for new_id in ids:
                    cur.execute(
                        f"SELECT {', '.join(f'`{c}`' for c in schema.columns)} FROM `{schema.table}` WHERE id=%s",
                        (new_id,),
                    )
                    row = fetchone(cur)
                    if row:
                        created.append(self._to_record(schema, row))
        except mysql.connector.Error as exc:
            logger.warning("insert into %s failed: %s", collection, exc)
            raise _translate(exc) from exc
        logger.info("inserted %d row(s) into %s", len(ids), collection)
        return created

    def update(self, collection: str, record_id: Any, patch: Mapping[str, Any]) -> None:
        schema = self._schema(collection)
        self._check_columns(schema, patch.keys(), allowed=schema.writable)
        if not patch:
            return
        assignments = ", ".join(f"`{c}` = %s" for c in patch.keys())
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT id FROM `{schema.table}` WHERE id=%s", (record_id,))
                if not fetchone(cur):
                    raise NotFoundError("Registro não encontrado.")
                cur.execute(
                    f"UPDATE `{schema.table}` SET {assignments} WHERE id=%s",
                    tuple(patch.values()) + (record_id,),
                )
        except mysql.connector.Error as exc:
            logger.warning("update %s id=%s failed: %s", collection, record_id, exc)
            raise _translate(exc) from exc

    def delete(self, collection: str, record_id: Any) -> None:
        schema = self._schema(collection)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE FROM `{schema.table}` WHERE id=%s", (record_id,))
                if cur.rowcount == 0:
                    raise NotFoundError("Registro não encontrado.")
        except mysql.connector.Error as exc:
            logger.warning("delete %s id=%s failed: %s", collection, record_id, exc)
            raise _translate(exc) from exc
        logger.info("deleted %s id=%s", collection, record_id)
