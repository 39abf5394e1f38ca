"""
Asynchronous query runner for AWS Athena
"""

from .core import (QueryRequest, ReusePolicy, ServiceConfig, ExecutionState,
                   StatusSnapshot, ResultPage, ExecutionResult,
                   QueryServiceError, InvalidRequest, TransportError, ExecutionError,
                   ExecutionFailed, ExecutionCancelled, UnknownState, PollTimeout)
from .executors import (RemoteQueryService, AthenaService, ExecutionRequestBuilder,
                        ExecutionPoller, PollPolicy, ResultFetcher)
from .config import Config
from .service import QueryService

__version__ = "0.1.0"

__all__ = [
    'QueryRequest', 'ReusePolicy', 'ServiceConfig', 'ExecutionState',
    'StatusSnapshot', 'ResultPage', 'ExecutionResult',
    'QueryServiceError', 'InvalidRequest', 'TransportError', 'ExecutionError',
    'ExecutionFailed', 'ExecutionCancelled', 'UnknownState', 'PollTimeout',
    'RemoteQueryService', 'AthenaService', 'ExecutionRequestBuilder',
    'ExecutionPoller', 'PollPolicy', 'ResultFetcher',
    'Config',
    'QueryService',
]
