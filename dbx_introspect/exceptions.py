"""Exceptions raised while introspecting a warehouse."""

# SPDX-FileCopyrightText: 2024 Timeseer.AI
# SPDX-License-Identifier: Apache-2.0

from typing import Optional


class IntrospectionException(Exception):  # noqa: N818
    """Base class for all Exceptions thrown by dbx-introspect."""


class ConfigurationError(IntrospectionException):
    """Raised when the configuration or environment is incomplete."""

    def __init__(self, message: str):
        IntrospectionException.__init__(self, f"invalid configuration: {message}")


class InvalidLogLevelException(IntrospectionException):
    """Raised when the logging level in the configuration is invalid."""

    def __init__(self):
        super().__init__("Configured log level unknown.")


class MissingModuleException(IntrospectionException):
    """Raised when a required Python module is not available."""

    def __init__(self, module_name: str):
        IntrospectionException.__init__(
            self, f'missing Python package: "{module_name}"'
        )


class DatabaseConnectionError(IntrospectionException):
    """Raised when the warehouse cannot be reached."""

    def __init__(self, message: str):
        IntrospectionException.__init__(self, f"connection failed: {message}")


class QueryExecutionError(IntrospectionException):
    """Raised when a query fails or returns an unexpected result.

    `function` names the function that ran the query.
    """

    def __init__(self, function: str, message: str, cause: Optional[Exception] = None):
        self.function = function
        self.message = message
        self.cause = cause
        IntrospectionException.__init__(self, f"[{function}] {message}: {cause}")


class FormattingError(IntrospectionException):
    """Raised when the warehouse returns text that is not valid JSON."""

    def __init__(self, message: str):
        IntrospectionException.__init__(self, f"error formatting JSON: {message}")


class OutputError(IntrospectionException):
    """Raised when the document cannot be written."""

    def __init__(self, path: str, message: str):
        IntrospectionException.__init__(
            self, f"error writing to file {path}: {message}"
        )
