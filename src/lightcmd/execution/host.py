"""
Interface to the console's command primitives.

The console runtime is single-threaded and cooperative. It offers a blocking
primitive that returns a result string, a fire-and-forget primitive and a
primitive that enqueues and then waits for that item to finish. A host
signals failure by raising.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from lightcmd.core.enums import ExecutionMode
from lightcmd.core.types import Handle


@runtime_checkable
class HostRuntime(Protocol):
    """Command primitives implemented by the console environment."""

    def execute_sync(self, command: str, undo_handle: Handle | None = None) -> str:
        ...

    def execute_async(
        self,
        command: str,
        undo_handle: Handle | None = None,
        target_handle: Handle | None = None,
    ) -> None:
        ...

    def execute_async_and_wait(
        self,
        command: str,
        undo_handle: Handle | None = None,
        target_handle: Handle | None = None,
    ) -> None:
        ...


class CallableHost:
    """Adapts the console's three plain functions to `HostRuntime`.

    Params:
        sync: Blocking primitive `(command, undo_handle) -> str`
        async_: Fire-and-forget primitive `(command, undo_handle, target_handle)`
        async_and_wait: Enqueue-and-wait primitive `(command, undo_handle, target_handle)`
    """

    def __init__(
        self,
        sync: Callable[..., str],
        async_: Callable[..., None] | None = None,
        async_and_wait: Callable[..., None] | None = None,
    ):
        self._sync = sync
        self._async = async_
        self._async_and_wait = async_and_wait

    def execute_sync(self, command: str, undo_handle: Handle | None = None) -> str:
        result = self._sync(command, undo_handle)
        return "" if result is None else str(result)

    def execute_async(
        self,
        command: str,
        undo_handle: Handle | None = None,
        target_handle: Handle | None = None,
    ) -> None:
        if self._async is None:
            raise NotImplementedError("Host does not provide an asynchronous primitive")
        self._async(command, undo_handle, target_handle)

    def execute_async_and_wait(
        self,
        command: str,
        undo_handle: Handle | None = None,
        target_handle: Handle | None = None,
    ) -> None:
        if self._async_and_wait is None:
            raise NotImplementedError(
                "Host does not provide an asynchronous-and-wait primitive"
            )
        self._async_and_wait(command, undo_handle, target_handle)


def invoke(
    host: HostRuntime,
    mode: ExecutionMode,
    command: str,
    undo_handle: Handle | None = None,
    target_handle: Handle | None = None,
) -> str:
    """
    Run a command through the host primitive selected by `mode`.

    Params:
        host: Host runtime
        mode: Which primitive to use
        command: Command string
        undo_handle: Optional undo handle
        target_handle: Optional target handle (ignored by the sync primitive)

    Returns:
        The sync primitive's result, or "" for the asynchronous primitives
    """
    if mode is ExecutionMode.ASYNC:
        host.execute_async(command, undo_handle, target_handle)
        return ""
    if mode is ExecutionMode.ASYNC_AND_WAIT:
        host.execute_async_and_wait(command, undo_handle, target_handle)
        return ""
    result = host.execute_sync(command, undo_handle)
    return "" if result is None else result
