"""
LightCmd execution against the console host.
"""

from lightcmd.execution.dispatcher import CommandDispatcher
from lightcmd.execution.host import CallableHost, HostRuntime, invoke
from lightcmd.execution.outcomes import (
    BatchOutcome,
    DispatchState,
    ExecutionAttempt,
    ExecutionOutcome,
    OutcomeStatus,
)

__all__ = [
    "BatchOutcome",
    "CallableHost",
    "CommandDispatcher",
    "DispatchState",
    "ExecutionAttempt",
    "ExecutionOutcome",
    "HostRuntime",
    "OutcomeStatus",
    "invoke",
]
