"""
AWS Athena implementation of the remote query service
"""

import asyncio
import functools
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import RemoteQueryService
from ..core import (ServiceConfig, ExecutionState, StatusSnapshot, ResultPage,
                    TransportError)

logger = logging.getLogger(__name__)


class AthenaService(RemoteQueryService):
    """
    Athena service backed by a boto3 client

    boto3 calls block, so each one runs in the event loop's default executor.
    The boto3 client is thread-safe and is shared by all executions.
    """

    name = 'athena'

    def __init__(self, client):
        """
        Args:
            client: boto3 'athena' client
        """
        self.client = client

    @classmethod
    def from_config(cls, config: ServiceConfig) -> 'AthenaService':
        """Create a boto3 client from region and (optional) static credentials"""
        kwargs = {'region_name': config.region}
        if config.has_static_credentials:
            kwargs['aws_access_key_id'] = config.access_key_id
            kwargs['aws_secret_access_key'] = config.secret_access_key
        return cls(boto3.client('athena', **kwargs))

    async def _call(self, operation: str, execution_id: Optional[str] = None, **kwargs) -> Dict[str, Any]:
        method = getattr(self.client, operation)
        logger.debug("[%s] %s %s", self.name, operation, execution_id or "")
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(method, **kwargs))
        except ClientError as e:
            error = e.response.get('Error', {})
            raise TransportError(f"[{self.name}] {operation} failed: {error.get('Message', e)}",
                                 execution_id, code=error.get('Code')) from e
        except BotoCoreError as e:
            raise TransportError(f"[{self.name}] {operation} failed: {e}", execution_id) from e

    async def submit(self, payload: Dict[str, Any]) -> str:
        response = await self._call('start_query_execution', **payload)
        try:
            return response['QueryExecutionId']
        except KeyError as e:
            raise TransportError(f"[{self.name}] start_query_execution returned no execution id") from e

    async def get_status(self, execution_id: str) -> StatusSnapshot:
        response = await self._call('get_query_execution', execution_id,
                                    QueryExecutionId=execution_id)
        try:
            execution = response['QueryExecution']
            status = execution['Status']
        except KeyError as e:
            raise TransportError(f"[{self.name}] Malformed status response for {execution_id}",
                                 execution_id) from e

        raw_state = status.get('State')
        return StatusSnapshot(
            execution_id=execution_id,
            state=ExecutionState.parse(raw_state),
            raw_state=raw_state,
            reason=status.get('StateChangeReason'),
            statistics=execution.get('Statistics', {}),
        )

    async def get_results(self, execution_id: str, next_token: Optional[str] = None,
                          max_results: Optional[int] = None) -> ResultPage:
        kwargs = {'QueryExecutionId': execution_id}
        if next_token:
            kwargs['NextToken'] = next_token
        if max_results:
            kwargs['MaxResults'] = max_results

        response = await self._call('get_query_results', execution_id, **kwargs)
        try:
            rows = response['ResultSet']['Rows']
        except KeyError as e:
            raise TransportError(f"[{self.name}] Malformed results response for {execution_id}",
                                 execution_id) from e
        return ResultPage(rows=rows, next_token=response.get('NextToken'))

    def get_service_info(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'region': self.client.meta.region_name,
        }
