from typing import Any, Dict, List, Optional

import pytest

from athena_runner import (RemoteQueryService, ServiceConfig, ExecutionState,
                           StatusSnapshot, ResultPage)


class ScriptedService(RemoteQueryService):
    """In-memory service that replays a list of states and records every call"""

    name = 'scripted'

    def __init__(self, states: List[str], pages: Optional[List[ResultPage]] = None,
                 execution_id: str = 'exec-1', reason: Optional[str] = None):
        self.states = list(states)
        self.pages = list(pages) if pages is not None else [ResultPage(rows=[])]
        self.execution_id = execution_id
        self.reason = reason
        self.calls: List[Any] = []
        self.payloads: List[Dict[str, Any]] = []

    async def submit(self, payload):
        self.calls.append(('submit',))
        self.payloads.append(payload)
        return self.execution_id

    async def get_status(self, execution_id):
        self.calls.append(('status', execution_id))
        raw = self.states.pop(0) if len(self.states) > 1 else self.states[0]
        return StatusSnapshot(
            execution_id=execution_id,
            state=ExecutionState.parse(raw),
            raw_state=raw,
            reason=self.reason,
        )

    async def get_results(self, execution_id, next_token=None, max_results=None):
        self.calls.append(('results', execution_id, next_token))
        return self.pages.pop(0)

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call[0] == kind)


class SleepRecorder:
    """Stand-in for asyncio.sleep that records intervals without waiting"""

    def __init__(self, service: Optional[ScriptedService] = None):
        self.intervals: List[float] = []
        self.service = service

    async def __call__(self, interval):
        self.intervals.append(interval)
        if self.service is not None:
            self.service.calls.append(('sleep', interval))


def rows(*values):
    return [{'Data': [{'VarCharValue': str(v)}]} for v in values]


@pytest.fixture
def service_config():
    return ServiceConfig(region='us-east-1', database='analytics',
                         access_key_id='AKIDEXAMPLE', secret_access_key='secret')
