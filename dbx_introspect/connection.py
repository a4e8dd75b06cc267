"""Connect to a Databricks SQL warehouse over ODBC.

The connection string is a complete Databricks ODBC driver connection string,
for example:

    Driver=Simba Spark ODBC Driver;Host=<host>;Port=443;SSL=1;
    ThriftTransport=2;HTTPPath=<http path>;AuthMech=3;UID=token;PWD=<token>
"""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

import logging
import os
import re
from typing import Mapping, Optional

from dbx_introspect.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    MissingModuleException,
)

try:
    import pyodbc

    HAS_ODBC = True
except ImportError:
    HAS_ODBC = False

CONNECTION_STRING_VARIABLE = "DATABRICKS_DSN"

# databricks-sql-go form: token:<access token>@<host>:443/<http path>
_GO_DSN = re.compile(r"^[^=;]+@[^;]+$")

logger = logging.getLogger(__name__)


def connection_string_from_environment(
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the connection string from the environment."""
    if environ is None:
        environ = os.environ
    connection_string = environ.get(CONNECTION_STRING_VARIABLE, "")
    if connection_string == "":
        raise ConfigurationError(
            "No connection string found. "
            f"Set the {CONNECTION_STRING_VARIABLE} environment variable."
        )
    if _GO_DSN.match(connection_string):
        raise ConfigurationError(
            f"{CONNECTION_STRING_VARIABLE} uses the `token:<token>@<host>/<path>` "
            "form. Set it to a Databricks ODBC driver connection string, for "
            "example `Driver=...;Host=<host>;Port=443;HTTPPath=<path>;"
            "AuthMech=3;UID=token;PWD=<token>`."
        )
    return connection_string


def connect(connection_string: str):
    """Open a connection to the warehouse and verify it responds."""
    if not HAS_ODBC:
        raise MissingModuleException("pyodbc")
    try:
        connection = pyodbc.connect(connection_string, autocommit=True)
    except pyodbc.Error as err:
        raise DatabaseConnectionError(str(err)) from err

    try:
        ping(connection)
    except pyodbc.Error as err:
        connection.close()
        raise DatabaseConnectionError(str(err)) from err
    logger.debug("connected to warehouse")
    return connection


def ping(connection):
    """Run a trivial statement to check the connection is usable."""
    cursor = connection.cursor()
    try:
        cursor.execute("SELECT 1")
        cursor.fetchall()
    finally:
        cursor.close()
