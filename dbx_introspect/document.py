"""Assemble the introspection document from column rows.

This is the Python counterpart of the aggregation done by the introspection
query, for warehouses that cannot build JSON themselves.
"""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

import json
from dataclasses import dataclass
from dataclasses import field as data_field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from dbx_introspect.emitter import execute_rows
from dbx_introspect.query import EXCLUDED_SCHEMA, build_column_listing_query


@dataclass
class ColumnDescriptor:
    """A column of a table."""

    name: str
    scalar_type: str
    nullable: bool

    def to_data(self) -> Dict[str, Any]:
        """Convert to JSON object."""
        return {
            "name": self.name,
            "scalarType": self.scalar_type,
            "nullable": self.nullable,
        }


@dataclass
class TableDescriptor:
    """A table, keyed by `schema.table` in the document.

    `catalog` is left empty for the connector to fill in.
    """

    physical_catalog: str
    physical_schema: str
    name: str
    columns: Dict[str, ColumnDescriptor] = data_field(default_factory=dict)
    primary_keys: Optional[List[str]] = None
    exported_keys: List[Any] = data_field(default_factory=list)

    @property
    def key(self) -> str:
        """The document key of this table."""
        return f"{self.physical_schema}.{self.name}"

    def to_data(self) -> Dict[str, Any]:
        """Convert to JSON object."""
        return {
            "physicalCatalog": self.physical_catalog,
            "physicalSchema": self.physical_schema,
            "catalog": "",
            "schema": self.physical_schema,
            "name": self.name,
            "columns": {
                name: column.to_data() for name, column in self.columns.items()
            },
            "primaryKeys": self.primary_keys,
            "exportedKeys": list(self.exported_keys),
        }


def build_document(rows: Iterable[Sequence[Any]]) -> Dict[str, Any]:
    """Group column rows into the introspection document.

    Each row is `(catalog, schema, table, column, data type, is nullable)`.
    When two catalogs contain the same `schema.table`, the last one wins.
    """
    tables: Dict[Tuple[str, str, str], TableDescriptor] = {}
    for catalog, schema, table_name, column_name, data_type, is_nullable in rows:
        if schema == EXCLUDED_SCHEMA:
            continue
        table = tables.setdefault(
            (catalog, schema, table_name),
            TableDescriptor(catalog, schema, table_name),
        )
        table.columns[column_name] = ColumnDescriptor(
            column_name, str(data_type).upper(), is_nullable == "YES"
        )
    return {table.key: table.to_data() for table in tables.values()}


def fetch_document(
    connection, catalog: Optional[str] = None, schema: Optional[str] = None
) -> str:
    """Query column metadata and return the document as JSON text."""
    query = build_column_listing_query(catalog, schema)
    rows = execute_rows(connection, query, "fetch_document")
    return json.dumps(build_document(rows))
