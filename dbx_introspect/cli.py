"""CLI for dbx-introspect.

This connects to the warehouse named by `DATABRICKS_DSN`, describes its tables
and writes the document to a file or to standard output.
"""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

import argparse
import logging
from contextlib import closing
from typing import List, Optional

import dbx_introspect.logging
from dbx_introspect.config import IntrospectOptions, from_toml
from dbx_introspect.connection import connect, connection_string_from_environment
from dbx_introspect.diagnostics import report_access
from dbx_introspect.document import fetch_document
from dbx_introspect.emitter import (
    execute_introspection,
    format_document,
    write_document,
)
from dbx_introspect.exceptions import IntrospectionException
from dbx_introspect.query import build_introspection_query

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    """Parse the command line arguments given to dbx-introspect."""
    parser = argparse.ArgumentParser(
        description="Describe the tables of a Databricks SQL warehouse as JSON."
    )
    parser.add_argument("--catalog", help="Optional: Specific catalog to introspect")
    parser.add_argument("--schema", help="Optional: Specific schema to introspect")
    parser.add_argument("--output", help="Optional: Output JSON file path")
    parser.add_argument(
        "--config-file", help="Optional: Path to a TOML configuration file"
    )
    parser.add_argument(
        "--no-diagnostics",
        action="store_true",
        help="Do not list the accessible catalogs, schemas and tables",
    )
    parser.add_argument(
        "--client-side",
        action="store_true",
        help="Build the document locally instead of in the warehouse",
    )
    return parser.parse_args(argv)


def _get_options(args, config) -> IntrospectOptions:
    options = IntrospectOptions.from_data(config.get("introspect", {}))
    if args.catalog is not None:
        options.catalog = args.catalog
    if args.schema is not None:
        options.schema = args.schema
    if args.output is not None:
        options.output = args.output
    if args.no_diagnostics:
        options.diagnostics = False
    if args.client_side:
        options.client_side = True
    return options


def _run(options: IntrospectOptions) -> None:
    connection_string = connection_string_from_environment()
    with closing(connect(connection_string)) as connection:
        if options.diagnostics:
            report_access(connection)

        if options.client_side:
            json_text = fetch_document(connection, options.catalog, options.schema)
        else:
            query = build_introspection_query(options.catalog, options.schema)
            json_text = execute_introspection(connection, query)

    write_document(format_document(json_text), options.output)


def main(argv: Optional[List[str]] = None) -> int:
    """Run dbx-introspect and return the process exit code."""
    args = parse_args(argv)
    try:
        config = {}
        if args.config_file is not None:
            config = from_toml(args.config_file)
        dbx_introspect.logging.configure(config)
        _run(_get_options(args, config))
    except IntrospectionException as err:
        logger.error("Error: %s", err)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
