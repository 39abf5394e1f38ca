"""
Query service facade

Composes builder, poller and fetcher into the public entry points.
"""

import logging
import time
from typing import Any, List, Mapping, Optional, Union

from .core import (QueryRequest, ReusePolicy, ServiceConfig, ExecutionState,
                   ExecutionResult, QueryServiceError, ExecutionError,
                   UnknownState, PollTimeout, InvalidRequest)
from .executors import (RemoteQueryService, AthenaService, ExecutionRequestBuilder,
                        ExecutionPoller, PollPolicy, ResultFetcher)

logger = logging.getLogger(__name__)


class QueryService:
    """
    Submit a query, wait for it and return its rows

    By default every failure is raised as a QueryServiceError subclass.
    With swallow_errors=True, run_query() logs failures and returns None
    instead (legacy behaviour); all other methods always raise.
    """

    def __init__(self, config: Union[ServiceConfig, Mapping[str, Any]],
                 service: Optional[RemoteQueryService] = None,
                 policy: Optional[PollPolicy] = None,
                 swallow_errors: bool = False):
        """
        Initialize the facade

        Args:
            config: ServiceConfig or a mapping accepted by ServiceConfig.from_dict
            service: Remote service to use (an AthenaService is created if omitted)
            policy: Poll timing policy
            swallow_errors: Log and return None from run_query() instead of raising
        """
        if not isinstance(config, ServiceConfig):
            config = ServiceConfig.from_dict(config)
        self.config = config
        self.service = service or AthenaService.from_config(config)
        self.swallow_errors = swallow_errors

        self.builder = ExecutionRequestBuilder()
        self.poller = ExecutionPoller(self.service, policy)
        self.fetcher = ResultFetcher(self.service)

    @classmethod
    def from_config(cls, config, service: Optional[RemoteQueryService] = None) -> 'QueryService':
        """Create from a Config (see athena_runner.config)"""
        return cls(
            ServiceConfig.from_config(config),
            service=service,
            policy=PollPolicy.from_config(config),
            swallow_errors=bool(config.get('service.swallow_errors', False)),
        )

    @property
    def name(self) -> str:
        return self.service.name

    def _to_request(self, query: Union[str, QueryRequest],
                    reuse: Union[ReusePolicy, Mapping[str, Any], None]) -> QueryRequest:
        if isinstance(query, QueryRequest):
            if reuse is not None:
                raise InvalidRequest("Pass the reuse policy inside the QueryRequest, not alongside it")
            return query
        if isinstance(reuse, Mapping):
            reuse = ReusePolicy.from_dict(reuse)
        return QueryRequest(query=query, reuse=reuse)

    async def submit(self, query: Union[str, QueryRequest], reuse=None) -> str:
        """
        Build the payload and start an execution

        Returns:
            Execution identifier
        """
        request = self._to_request(query, reuse)
        payload = self.builder.build(self.config, request)
        execution_id = await self.service.submit(payload)
        logger.info("[%s] Submitted query %s to workgroup %s",
                    self.name, execution_id, self.config.workgroup)
        return execution_id

    async def run_query(self, query: Union[str, QueryRequest], reuse=None,
                        timeout: Optional[float] = None) -> Optional[List[Any]]:
        """
        Submit a query, wait for completion and return the first page of rows

        Args:
            query: SQL text or a QueryRequest
            reuse: ReusePolicy or mapping with enabled/maxAgeInMinutes
            timeout: Overall wait bound in seconds

        Returns:
            Result rows, or None when swallow_errors is set and the run failed
        """
        try:
            execution_id = await self.submit(query, reuse)
            return await self.await_query(execution_id, timeout=timeout)
        except Exception:
            if not self.swallow_errors:
                raise
            logger.exception("[%s] Query run failed", self.name)
            return None

    async def await_query(self, execution_id: str,
                          timeout: Optional[float] = None) -> List[Any]:
        """
        Wait for an existing execution and return its first page of rows

        Args:
            execution_id: Identifier from a previous submission
            timeout: Overall wait bound in seconds

        Returns:
            Result rows
        """
        await self.poller.wait(execution_id, timeout=timeout)
        return await self.fetcher.fetch(execution_id)

    async def get_query_results(self, execution_id: str) -> List[Any]:
        """Fetch the first page of rows for an execution known to have succeeded"""
        return await self.fetcher.fetch(execution_id)

    async def execute(self, query: Union[str, QueryRequest], reuse=None,
                      timeout: Optional[float] = None) -> ExecutionResult:
        """
        Run a query and report the outcome as a value

        Never raises for query failures; the error is returned in the result.

        Returns:
            ExecutionResult
        """
        start_time = time.time()
        execution_id = None
        status = None

        try:
            execution_id = await self.submit(query, reuse)
            snapshot = await self.poller.wait(execution_id, timeout=timeout)
            status = snapshot.state
            rows = await self.fetcher.fetch(execution_id)

            return ExecutionResult(
                execution_id=execution_id,
                status=status,
                rows=rows,
                metadata={
                    'total_time': time.time() - start_time,
                    'statistics': snapshot.statistics,
                }
            )

        except Exception as e:
            if isinstance(e, QueryServiceError):
                status = _status_for(e, status)
                logger.warning("[%s] %s", self.name, e)
            else:
                logger.exception("[%s] Unexpected error", self.name)

            return ExecutionResult(
                execution_id=execution_id,
                status=status,
                error=e,
                metadata={'total_time': time.time() - start_time}
            )


def _status_for(error: QueryServiceError, default: Optional[ExecutionState]) -> Optional[ExecutionState]:
    """Last known state implied by an error"""
    if isinstance(error, ExecutionError):
        return ExecutionState.parse(error.state)
    if isinstance(error, UnknownState):
        return ExecutionState.UNKNOWN
    if isinstance(error, PollTimeout):
        return error.last_state
    return default
