"""Build the SQL statements that introspect `information_schema`.

The introspection query lets the warehouse shape the document itself:
`map_from_entries`, `array_agg` and `to_json` turn the joined table and column
metadata into a single JSON text value keyed by `schema.table`.

Filter values are spliced into the statement as string literals. Quote
characters in them are not escaped.
"""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

from typing import Optional

CATALOGS_QUERY = """
    SELECT DISTINCT catalog_name
    FROM information_schema.catalogs
    ORDER BY catalog_name"""

SCHEMAS_QUERY = """
    SELECT DISTINCT table_catalog, table_schema
    FROM information_schema.tables
    ORDER BY table_catalog, table_schema"""

TABLES_QUERY = """
    SELECT table_catalog, table_schema, table_name, table_type
    FROM information_schema.tables
    ORDER BY table_catalog, table_schema, table_name"""

EXCLUDED_SCHEMA = "information_schema"

_TABLE_COLUMN_JOIN = """
        FROM information_schema.tables t
        JOIN information_schema.columns c
            ON t.table_catalog = c.table_catalog
            AND t.table_schema = c.table_schema
            AND t.table_name = c.table_name"""


def build_filter_conditions(
    catalog: Optional[str] = None, schema: Optional[str] = None
) -> str:
    """Return the WHERE clause shared by the introspection queries.

    An empty or missing filter does not restrict the result.
    """
    conditions = f"\n        WHERE t.table_schema != '{EXCLUDED_SCHEMA}'"
    if catalog:
        conditions += f"\n        AND t.table_catalog = '{catalog}'"
    if schema:
        conditions += f"\n        AND t.table_schema = '{schema}'"
    return conditions


def build_introspection_query(
    catalog: Optional[str] = None, schema: Optional[str] = None
) -> str:
    """Build the query that returns the introspection document as JSON text.

    The result is one row with one column. Tables without columns are dropped
    by the inner join. `primaryKeys` is always null and `exportedKeys` is
    always empty.
    """
    conditions = build_filter_conditions(catalog, schema)
    return f"""
    WITH column_info AS (
        SELECT
            t.table_catalog,
            t.table_schema,
            t.table_name,
            t.table_type,
            map_from_entries(array_agg(
                struct(
                    c.column_name as key,
                    struct(
                        c.column_name as name,
                        UPPER(c.data_type) as scalarType,
                        c.is_nullable = 'YES' as nullable
                    ) as value
                )
            )) as columns,
            null as primary_keys{_TABLE_COLUMN_JOIN}{conditions}
        GROUP BY t.table_catalog, t.table_schema, t.table_name, t.table_type
    )
    SELECT to_json(
        map_from_entries(
            array_agg(
                struct(
                    CONCAT(table_schema, '.', table_name) as key,
                    struct(
                        table_catalog as physicalCatalog,
                        table_schema as physicalSchema,
                        '' as catalog,
                        table_schema as schema,
                        table_name as name,
                        columns as columns,
                        primary_keys as primaryKeys,
                        array() as exportedKeys
                    ) as value
                )
            )
        )
    ) as tables
    FROM column_info"""


def build_column_listing_query(
    catalog: Optional[str] = None, schema: Optional[str] = None
) -> str:
    """Build the query that lists one row per column.

    This is used to assemble the document in Python for warehouses that lack
    map and JSON aggregation.
    """
    conditions = build_filter_conditions(catalog, schema)
    return f"""
        SELECT
            t.table_catalog,
            t.table_schema,
            t.table_name,
            c.column_name,
            c.data_type,
            c.is_nullable{_TABLE_COLUMN_JOIN}{conditions}
        ORDER BY t.table_catalog, t.table_schema, t.table_name, c.ordinal_position"""
