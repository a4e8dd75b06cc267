"""dbx-introspect describes the tables of a Databricks SQL warehouse as JSON."""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

from .exceptions import IntrospectionException  # noqa
from .query import build_introspection_query  # noqa
