"""
Result fetcher
"""

import logging
from typing import Any, List, Optional

from .base import RemoteQueryService
from ..core import ResultPage

logger = logging.getLogger(__name__)


class ResultFetcher:
    """
    Reads results of a SUCCEEDED execution

    fetch() returns the first page only. Callers that need every row use
    fetch_all(), which follows continuation tokens.
    """

    def __init__(self, service: RemoteQueryService):
        self.service = service

    async def fetch_page(self, execution_id: str, next_token: Optional[str] = None,
                         max_results: Optional[int] = None) -> ResultPage:
        return await self.service.get_results(execution_id, next_token=next_token,
                                              max_results=max_results)

    async def fetch(self, execution_id: str) -> List[Any]:
        """
        Fetch the first page of rows

        Args:
            execution_id: Execution identifier

        Returns:
            Rows exactly as returned by the service
        """
        page = await self.fetch_page(execution_id)
        if not page.is_last:
            logger.debug("[%s] Query %s: returning first page only (%d rows, more available)",
                         self.service.name, execution_id, len(page.rows))
        return page.rows

    async def fetch_all(self, execution_id: str, max_pages: Optional[int] = None,
                        page_size: Optional[int] = None) -> List[Any]:
        """
        Fetch every page of rows

        Args:
            execution_id: Execution identifier
            max_pages: Stop after this many pages (None for all)
            page_size: MaxResults per call

        Returns:
            Concatenated rows of all fetched pages
        """
        rows: List[Any] = []
        next_token = None
        pages = 0

        while True:
            page = await self.fetch_page(execution_id, next_token=next_token,
                                         max_results=page_size)
            rows.extend(page.rows)
            pages += 1
            next_token = page.next_token
            if next_token is None:
                break
            if max_pages is not None and pages >= max_pages:
                logger.debug("[%s] Query %s: stopped after %d pages",
                             self.service.name, execution_id, pages)
                break

        return rows
