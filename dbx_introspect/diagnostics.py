"""Log what the connection is allowed to see.

These listings only help a user understand an empty or partial document.
A failing listing is reported and does not stop the introspection.
"""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import List

from dbx_introspect.emitter import execute_rows
from dbx_introspect.exceptions import QueryExecutionError
from dbx_introspect.query import CATALOGS_QUERY, SCHEMAS_QUERY, TABLES_QUERY

logger = logging.getLogger(__name__)


def list_catalogs(connection) -> List[str]:
    """List the accessible catalogs."""
    rows = execute_rows(connection, CATALOGS_QUERY, "list_catalogs")
    try:
        return [catalog for catalog, in rows]
    except ValueError as err:
        raise QueryExecutionError("list_catalogs", "failed to scan row", err) from err


def list_schemas(connection) -> List[str]:
    """List the accessible schemas as `catalog.schema`."""
    rows = execute_rows(connection, SCHEMAS_QUERY, "list_schemas")
    try:
        return [f"{catalog}.{schema}" for catalog, schema in rows]
    except ValueError as err:
        raise QueryExecutionError("list_schemas", "failed to scan row", err) from err


def list_tables(connection) -> List[str]:
    """List the accessible tables as `catalog.schema.table (type)`."""
    rows = execute_rows(connection, TABLES_QUERY, "list_tables")
    try:
        return [
            f"{catalog}.{schema}.{name} ({table_type})"
            for catalog, schema, name, table_type in rows
        ]
    except ValueError as err:
        raise QueryExecutionError("list_tables", "failed to scan row", err) from err


def report_access(connection) -> bool:
    """Log the accessible catalogs, schemas and tables.

    Returns False when a listing failed.
    """
    for title, listing in [
        ("Accessible Catalogs", list_catalogs),
        ("Accessible Schemas", list_schemas),
        ("Accessible Tables", list_tables),
    ]:
        try:
            names = listing(connection)
        except QueryExecutionError as err:
            logger.warning("Debug error: %s", err)
            return False
        logger.info("%s:\n%s", title, "\n".join(f"- {name}" for name in names))
    return True

