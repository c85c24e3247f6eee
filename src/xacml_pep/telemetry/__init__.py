"""Telemetry for xacml-pep: operational logging and PDP wire logging.

Structure:
    system_logger.py  - Singleton operational logger and configure_logging()
    wire_logger.py    - httpx event hooks logging PDP traffic at DEBUG
"""

from xacml_pep.telemetry.system_logger import (
    configure_logging,
    configure_system_logger_file,
    get_system_logger,
)
from xacml_pep.telemetry.wire_logger import WireLogHooks, get_wire_logger

__all__ = [
    "WireLogHooks",
    "configure_logging",
    "configure_system_logger_file",
    "get_system_logger",
    "get_wire_logger",
]
