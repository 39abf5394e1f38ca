"""
Remote query service interface
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..core import StatusSnapshot, ResultPage


class RemoteQueryService(ABC):
    """
    Base class for remote query-execution services

    Defines the three operations the execution lifecycle needs. Implementations
    must be safe to share between concurrently running executions.
    """

    name = 'remote'

    @abstractmethod
    async def submit(self, payload: Dict[str, Any]) -> str:
        """
        Start an execution

        Args:
            payload: Submission payload built by ExecutionRequestBuilder

        Returns:
            Execution identifier
        """
        pass

    @abstractmethod
    async def get_status(self, execution_id: str) -> StatusSnapshot:
        """
        Read the current status of an execution

        Args:
            execution_id: Execution identifier

        Returns:
            StatusSnapshot
        """
        pass

    @abstractmethod
    async def get_results(self, execution_id: str, next_token: Optional[str] = None,
                          max_results: Optional[int] = None) -> ResultPage:
        """
        Read one page of results

        Args:
            execution_id: Execution identifier
            next_token: Continuation token from a previous page
            max_results: Page size limit

        Returns:
            ResultPage
        """
        pass

    def get_service_info(self) -> Dict[str, Any]:
        """Get service information"""
        return {'name': self.name}
