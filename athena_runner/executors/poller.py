"""
Execution poller

Drives an execution to a terminal state by polling its status at
state-dependent intervals.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from .base import RemoteQueryService
from ..core import (ExecutionState, StatusSnapshot, ExecutionFailed,
                    ExecutionCancelled, UnknownState, PollTimeout)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollPolicy:
    """
    Timing and bounds for the poll loop

    Attributes:
        queued_interval: Wait after observing QUEUED (seconds)
        running_interval: Wait after observing RUNNING (seconds)
        timeout: Overall wait bound (seconds), None for no bound
        max_polls: Maximum status calls, None for no bound
    """
    queued_interval: float = 0.05
    running_interval: float = 0.01
    timeout: Optional[float] = None
    max_polls: Optional[int] = None

    @classmethod
    def from_config(cls, config) -> 'PollPolicy':
        defaults = cls()
        return cls(
            queued_interval=config.get('polling.queued_interval', defaults.queued_interval),
            running_interval=config.get('polling.running_interval', defaults.running_interval),
            timeout=config.get('polling.timeout'),
            max_polls=config.get('polling.max_polls'),
        )

    def interval_for(self, state: ExecutionState) -> float:
        if state is ExecutionState.QUEUED:
            return self.queued_interval
        return self.running_interval


class ExecutionPoller:
    """
    Poll loop for a single execution id

    Keeps no state between calls other than what is passed in. Several
    pollers (or several wait() calls on one poller) can run concurrently.
    """

    def __init__(self, service: RemoteQueryService, policy: Optional[PollPolicy] = None,
                 sleep=asyncio.sleep):
        """
        Args:
            service: Remote service to poll
            policy: Timing policy (defaults to PollPolicy())
            sleep: Coroutine function used to wait between polls
        """
        self.service = service
        self.policy = policy or PollPolicy()
        self._sleep = sleep

    async def poll_status(self, execution_id: str) -> StatusSnapshot:
        """Query the service once and return the full snapshot"""
        snapshot = await self.service.get_status(execution_id)
        logger.debug("[%s] Query %s: %s", self.service.name, execution_id, snapshot.raw_state)
        return snapshot

    async def poll(self, execution_id: str) -> ExecutionState:
        """Query the service once and return the observed state"""
        snapshot = await self.poll_status(execution_id)
        return snapshot.state

    async def wait(self, execution_id: str, timeout: Optional[float] = None,
                   max_polls: Optional[int] = None) -> StatusSnapshot:
        """
        Poll until the execution reaches a terminal state

        Each iteration checks the status first and only then waits. Task
        cancellation propagates from the wait unchanged.

        Args:
            execution_id: Execution to wait for
            timeout: Overall bound in seconds (overrides the policy)
            max_polls: Maximum number of status calls (overrides the policy)

        Returns:
            The SUCCEEDED snapshot

        Raises:
            ExecutionFailed: The execution reached FAILED
            ExecutionCancelled: The execution reached CANCELLED
            UnknownState: The service reported a state outside the known set
            PollTimeout: timeout or max_polls was exhausted first
        """
        if timeout is None:
            timeout = self.policy.timeout
        if max_polls is None:
            max_polls = self.policy.max_polls

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout if timeout is not None else None
        polls = 0
        state = None

        while True:
            if deadline is None:
                snapshot = await self.poll_status(execution_id)
            else:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise PollTimeout(execution_id, polls, state)
                try:
                    snapshot = await asyncio.wait_for(self.poll_status(execution_id), remaining)
                except asyncio.TimeoutError:
                    raise PollTimeout(execution_id, polls, state) from None
            polls += 1
            state = snapshot.state

            if state.is_terminal:
                return self._resolve(execution_id, snapshot, polls)
            if state is ExecutionState.UNKNOWN:
                raise UnknownState(execution_id, snapshot.raw_state)

            if max_polls is not None and polls >= max_polls:
                raise PollTimeout(execution_id, polls, state)

            interval = self.policy.interval_for(state)
            if deadline is not None:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise PollTimeout(execution_id, polls, state)
                interval = min(interval, remaining)

            await self._sleep(interval)

    def _resolve(self, execution_id: str, snapshot: StatusSnapshot, polls: int) -> StatusSnapshot:
        """Return the snapshot for SUCCEEDED, raise for FAILED/CANCELLED"""
        if snapshot.state is ExecutionState.SUCCEEDED:
            logger.info("[%s] Query %s succeeded after %d polls",
                        self.service.name, execution_id, polls)
            return snapshot

        logger.info("[%s] Query %s %s: %s", self.service.name, execution_id,
                    snapshot.state.value.lower(), snapshot.reason)
        if snapshot.state is ExecutionState.FAILED:
            raise ExecutionFailed(execution_id, snapshot.reason)
        raise ExecutionCancelled(execution_id, snapshot.reason)
