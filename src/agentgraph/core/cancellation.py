"""Cooperative cancellation for graph runs.

A CancellationToken is handed to Graph.run() and fired from elsewhere
(another task, a signal handler, a UI). The executor checks it before
every visit and races it against the step in flight, so a slow step is
abandoned instead of awaited. The reason passed to cancel() ends up on
the CancelledError the run raises.

A token fires once. Runs that need a fresh start take a fresh token.
"""

from __future__ import annotations

import asyncio

from agentgraph.core.errors import CancelledError

DEFAULT_REASON = "cancelled"


class CancellationToken:
    """One-shot cancellation signal shared between a run and its caller.

    Example:
        >>> token = CancellationToken()
        >>> task = asyncio.create_task(graph.run("hello", cancellation=token))
        >>> token.cancel("user pressed stop")
        >>> try:
        ...     await task
        ... except CancelledError as e:
        ...     print(e.reason)
        user pressed stop
    """

    def __init__(self) -> None:
        self._reason: str | None = None
        self._event = asyncio.Event()

    def cancel(self, reason: str = DEFAULT_REASON) -> None:
        """Fire the token.

        Only the first call sets the reason; later calls are no-ops.
        """
        if self._reason is not None:
            return
        self._reason = reason
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> str:
        """Reason given to cancel(), or the default before it fires."""
        return self._reason or DEFAULT_REASON

    def check(self) -> None:
        """Raise CancelledError if the token has fired."""
        if self._reason is not None:
            raise CancelledError(self._reason)

    async def wait(self) -> None:
        """Block until the token fires."""
        await self._event.wait()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled}, reason={self._reason!r})"
