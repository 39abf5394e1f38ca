"""
Core data models and types
"""

from .query import QueryRequest, ReusePolicy
from .service import ServiceConfig, DEFAULT_WORKGROUP
from .result import (ExecutionState, StatusSnapshot,
                     ResultPage, ExecutionResult)
from .errors import (QueryServiceError, InvalidRequest, TransportError,
                     ExecutionError, ExecutionFailed, ExecutionCancelled,
                     UnknownState, PollTimeout)

__all__ = ['QueryRequest', 'ReusePolicy', 'ServiceConfig', 'DEFAULT_WORKGROUP',
           'ExecutionState', 'StatusSnapshot', 'ResultPage',
           'ExecutionResult',
           'QueryServiceError', 'InvalidRequest', 'TransportError', 'ExecutionError',
           'ExecutionFailed', 'ExecutionCancelled', 'UnknownState', 'PollTimeout']
