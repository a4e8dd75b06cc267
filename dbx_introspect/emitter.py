"""Execute the introspection query and emit the resulting document."""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Union

from dbx_introspect.exceptions import (
    FormattingError,
    OutputError,
    QueryExecutionError,
)

logger = logging.getLogger(__name__)


def execute_rows(connection, query: str, function_name: str) -> List[Tuple]:
    """Run a query and return all rows.

    Driver errors are raised as QueryExecutionError naming `function_name`.
    """
    logger.debug("Query: %s", query)
    cursor = connection.cursor()
    try:
        cursor.execute(query)
        return [tuple(row) for row in cursor.fetchall()]
    except Exception as err:
        raise QueryExecutionError(
            function_name, "failed to execute query", err
        ) from err
    finally:
        cursor.close()


def execute_introspection(connection, query: str) -> str:
    """Run the introspection query and return the JSON text it produces.

    The query must return exactly one row with exactly one text column.
    """
    function_name = "execute_introspection"
    rows = execute_rows(connection, query, function_name)
    column_count = len(rows[0]) if rows else 0
    if len(rows) != 1 or column_count != 1:
        raise QueryExecutionError(
            function_name,
            "expected exactly one row with one column",
            ValueError(f"got {len(rows)} rows of {column_count} columns"),
        )
    (json_text,) = rows[0]
    if not isinstance(json_text, str):
        raise QueryExecutionError(
            function_name,
            "expected a text column",
            TypeError(f"got {type(json_text).__name__}"),
        )
    return json_text


def format_document(json_text: str) -> str:
    """Re-indent JSON text with two spaces.

    Key order is kept. The structure of the document is not validated.
    """
    try:
        document = json.loads(json_text)
    except json.JSONDecodeError as err:
        raise FormattingError(str(err)) from err
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_document(text: str, output: Optional[Union[str, Path]] = None):
    """Write the document to `output`, or to standard output when not given."""
    if output is None or str(output) == "":
        _write_stdout(text)
        return

    try:
        Path(output).write_bytes(text.encode("utf-8"))
    except OSError as err:
        raise OutputError(str(output), str(err)) from err
    logger.info("Results written to %s", output)


def _write_stdout(text: str):
    """Write UTF-8 bytes to standard output, whatever its text encoding."""
    stream = getattr(sys.stdout, "buffer", None)
    try:
        if stream is None:
            print(text)  # noqa: T201
            return
        sys.stdout.flush()
        stream.write(text.encode("utf-8") + b"\n")
        stream.flush()
    except (OSError, UnicodeEncodeError) as err:
        raise OutputError("<stdout>", str(err)) from err
