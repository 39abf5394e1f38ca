"""
Error taxonomy for query execution

Every error carries the execution id it relates to (None when the failure
happened before an execution existed).
"""

from typing import Optional


class QueryServiceError(Exception):
    """Base class for all query service errors"""

    def __init__(self, message: str, execution_id: Optional[str] = None):
        super().__init__(message)
        self.execution_id = execution_id


class InvalidRequest(QueryServiceError):
    """Bad local input, detected before anything is sent"""


class TransportError(QueryServiceError):
    """A call to the remote service failed or returned a malformed response"""

    def __init__(self, message: str, execution_id: Optional[str] = None,
                 code: Optional[str] = None):
        super().__init__(message, execution_id)
        self.code = code


class ExecutionError(QueryServiceError):
    """An execution reached a terminal state other than SUCCEEDED"""

    state = None

    def __init__(self, execution_id: str, reason: Optional[str] = None):
        message = f"Query {execution_id} {self.state}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, execution_id)
        self.reason = reason


class ExecutionFailed(ExecutionError):
    state = 'FAILED'


class ExecutionCancelled(ExecutionError):
    state = 'CANCELLED'


class UnknownState(QueryServiceError):
    """The service reported a state this client does not recognize"""

    def __init__(self, execution_id: str, raw_state: Optional[str]):
        super().__init__(f"Query {execution_id} reported unknown state {raw_state!r}",
                         execution_id)
        self.raw_state = raw_state


class PollTimeout(QueryServiceError):
    """Polling gave up before a terminal state was observed"""

    def __init__(self, execution_id: str, polls: int, last_state=None):
        super().__init__(f"Query {execution_id} not finished after {polls} polls "
                         f"(last state: {last_state})", execution_id)
        self.polls = polls
        self.last_state = last_state
