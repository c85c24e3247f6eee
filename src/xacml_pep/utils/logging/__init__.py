"""Logging formatters for xacml-pep."""

from xacml_pep.utils.logging.formatters import ConsoleFormatter, ISO8601Formatter

__all__ = [
    "ConsoleFormatter",
    "ISO8601Formatter",
]
