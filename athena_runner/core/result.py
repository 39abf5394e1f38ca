"""
Execution state and result models
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ExecutionState(Enum):
    """State of a remote execution, as observed by the client"""
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: Optional[str]) -> 'ExecutionState':
        """Map a raw state string to a member; anything unrecognized is UNKNOWN"""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset({
    ExecutionState.SUCCEEDED,
    ExecutionState.FAILED,
    ExecutionState.CANCELLED,
})


@dataclass
class StatusSnapshot:
    """
    One status observation

    Attributes:
        execution_id: Execution the status belongs to
        state: Parsed state
        raw_state: State string exactly as the service returned it
        reason: State change reason (set by the service on failure/cancel)
        statistics: Execution statistics (data scanned, engine time, ...)
    """
    execution_id: str
    state: ExecutionState
    raw_state: Optional[str] = None
    reason: Optional[str] = None
    statistics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ResultPage:
    """
    One page of result rows

    Rows are kept exactly as the service returned them. next_token is None
    on the last page.
    """
    rows: List[Any]
    next_token: Optional[str] = None

    @property
    def is_last(self) -> bool:
        return self.next_token is None


@dataclass
class ExecutionResult:
    """
    Outcome of a full submit/poll/fetch run

    Attributes:
        execution_id: Execution identifier (None if submission failed)
        status: Last observed state (None if never polled)
        rows: First page of result rows on success
        error: The error that ended the run, if any
        metadata: Extra information (statistics, timings)
    """
    execution_id: Optional[str]
    status: Optional[ExecutionState]
    rows: Optional[List[Any]] = None
    error: Optional[Exception] = None
    metadata: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.status is ExecutionState.SUCCEEDED
