"""
Enumerations shared across pipeline stages.
"""

from enum import Enum, IntEnum


class SeverityLevel(IntEnum):
    """Ordered severity of a destructive command."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class ExecutionMode(Enum):
    """Which host primitive a command is dispatched through."""

    SYNC = "sync"  # blocks, returns a result string
    ASYNC = "async"  # enqueues, returns immediately
    ASYNC_AND_WAIT = "async_and_wait"  # enqueues, blocks until that item completes
