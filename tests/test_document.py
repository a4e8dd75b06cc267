"""Tests for assembling the introspection document in Python.

The warehouse is replaced by an in-memory SQLite database with an attached
`information_schema`.
"""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

import json
import sqlite3

import pytest

from dbx_introspect.document import (
    ColumnDescriptor,
    TableDescriptor,
    build_document,
    fetch_document,
)
from dbx_introspect.exceptions import QueryExecutionError


@pytest.fixture
def warehouse():
    connection = sqlite3.connect(":memory:")
    connection.execute("attach database ':memory:' as information_schema")
    connection.executescript(
        """
        create table information_schema.tables (
            table_catalog text,
            table_schema text,
            table_name text,
            table_type text
        );
        create table information_schema.columns (
            table_catalog text,
            table_schema text,
            table_name text,
            column_name text,
            data_type text,
            is_nullable text,
            ordinal_position integer
        );

        insert into information_schema.tables values
            ('main', 'sales', 'orders', 'MANAGED'),
            ('main', 'sales', 'empty', 'MANAGED'),
            ('main', 'reporting', 'orders', 'VIEW'),
            ('main', 'information_schema', 'tables', 'VIEW'),
            ('dev', 'sales', 'customers', 'MANAGED');

        insert into information_schema.columns values
            ('main', 'sales', 'orders', 'id', 'bigint', 'NO', 1),
            ('main', 'sales', 'orders', 'note', 'varchar', 'YES', 2),
            ('main', 'reporting', 'orders', 'total', 'decimal(10,2)', 'YES', 1),
            ('main', 'information_schema', 'tables', 'table_name', 'string', 'NO', 1),
            ('dev', 'sales', 'customers', 'name', 'string', 'YES', 1);
        """
    )
    yield connection
    connection.close()


def test_tables_without_columns_are_excluded(warehouse) -> None:
    document = json.loads(fetch_document(warehouse))
    assert "sales.empty" not in document
    assert "sales.orders" in document


def test_same_table_in_different_schemas(warehouse) -> None:
    document = json.loads(fetch_document(warehouse, "main"))
    assert set(document.keys()) == {"sales.orders", "reporting.orders"}
    assert document["sales.orders"]["physicalSchema"] == "sales"
    assert document["reporting.orders"]["physicalSchema"] == "reporting"


def test_information_schema_is_excluded(warehouse) -> None:
    document = json.loads(fetch_document(warehouse))
    assert all(not key.startswith("information_schema.") for key in document)


def test_schema_filter(warehouse) -> None:
    document = json.loads(fetch_document(warehouse, None, "sales"))
    assert set(document.keys()) == {"sales.orders", "sales.customers"}


def test_catalog_and_schema_filter(warehouse) -> None:
    document = json.loads(fetch_document(warehouse, "dev", "sales"))
    assert list(document.keys()) == ["sales.customers"]
    assert document["sales.customers"]["physicalCatalog"] == "dev"


def test_table_descriptor(warehouse) -> None:
    document = json.loads(fetch_document(warehouse, "main", "sales"))
    assert document == {
        "sales.orders": {
            "physicalCatalog": "main",
            "physicalSchema": "sales",
            "catalog": "",
            "schema": "sales",
            "name": "orders",
            "columns": {
                "id": {"name": "id", "scalarType": "BIGINT", "nullable": False},
                "note": {"name": "note", "scalarType": "VARCHAR", "nullable": True},
            },
            "primaryKeys": None,
            "exportedKeys": [],
        }
    }


def test_query_failure() -> None:
    connection = sqlite3.connect(":memory:")
    with pytest.raises(QueryExecutionError) as exc_info:
        fetch_document(connection)
    assert exc_info.value.function == "fetch_document"
    connection.close()


def test_scalar_type_is_upper_cased() -> None:
    document = build_document([("main", "sales", "orders", "note", "varchar", "YES")])
    assert document["sales.orders"]["columns"]["note"]["scalarType"] == "VARCHAR"


def test_nullable_requires_yes() -> None:
    document = build_document(
        [
            ("main", "sales", "orders", "a", "int", "YES"),
            ("main", "sales", "orders", "b", "int", "NO"),
            ("main", "sales", "orders", "c", "int", None),
        ]
    )
    columns = document["sales.orders"]["columns"]
    assert columns["a"]["nullable"] is True
    assert columns["b"]["nullable"] is False
    assert columns["c"]["nullable"] is False


def test_build_skips_information_schema() -> None:
    document = build_document(
        [("main", "information_schema", "columns", "a", "string", "NO")]
    )
    assert document == {}


def test_same_key_in_two_catalogs_keeps_last() -> None:
    document = build_document(
        [
            ("dev", "sales", "orders", "a", "int", "YES"),
            ("main", "sales", "orders", "b", "int", "YES"),
        ]
    )
    assert document["sales.orders"]["physicalCatalog"] == "main"
    assert list(document["sales.orders"]["columns"].keys()) == ["b"]


def test_descriptor_to_data() -> None:
    table = TableDescriptor("main", "sales", "orders")
    table.columns["id"] = ColumnDescriptor("id", "BIGINT", False)
    assert table.key == "sales.orders"
    data = table.to_data()
    assert data["catalog"] == ""
    assert data["schema"] == "sales"
    assert data["columns"]["id"] == {
        "name": "id",
        "scalarType": "BIGINT",
        "nullable": False,
    }
