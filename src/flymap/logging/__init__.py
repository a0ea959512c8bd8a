"""FlyMap Logging — hexagonal logging port and adapters."""

from flymap.logging.port import LoggingPort
from flymap.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
