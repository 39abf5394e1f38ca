"""
Execution lifecycle components
"""

from .base import RemoteQueryService
from .athena import AthenaService
from .builder import ExecutionRequestBuilder, coerce_max_age
from .poller import ExecutionPoller, PollPolicy
from .fetcher import ResultFetcher

__all__ = ['RemoteQueryService', 'AthenaService', 'ExecutionRequestBuilder',
           'coerce_max_age', 'ExecutionPoller', 'PollPolicy', 'ResultFetcher']
