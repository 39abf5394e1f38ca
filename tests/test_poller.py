import asyncio

import pytest

from athena_runner import (ExecutionPoller, PollPolicy, ExecutionState,
                           ExecutionFailed, ExecutionCancelled, UnknownState, PollTimeout)
from conftest import ScriptedService, SleepRecorder


def make_poller(states, **kwargs):
    service = ScriptedService(states, **kwargs)
    sleep = SleepRecorder(service)
    return service, sleep, ExecutionPoller(service, sleep=sleep)


def test_poll_returns_observed_state():
    service, _, poller = make_poller(['RUNNING'])
    assert asyncio.run(poller.poll('exec-1')) is ExecutionState.RUNNING
    assert service.count('status') == 1


def test_interval_selection_and_order():
    service, sleep, poller = make_poller(['QUEUED', 'RUNNING', 'RUNNING', 'SUCCEEDED'])

    snapshot = asyncio.run(poller.wait('exec-1'))

    assert snapshot.state is ExecutionState.SUCCEEDED
    assert service.count('status') == 4
    assert sleep.intervals == [0.05, 0.01, 0.01]
    # each wait follows a status check
    assert [call[0] for call in service.calls] == [
        'status', 'sleep', 'status', 'sleep', 'status', 'sleep', 'status'
    ]


def test_failed_raises_with_reason():
    _, sleep, poller = make_poller(['FAILED'], reason='SYNTAX_ERROR: line 1:8')

    with pytest.raises(ExecutionFailed) as excinfo:
        asyncio.run(poller.wait('exec-1'))

    assert excinfo.value.execution_id == 'exec-1'
    assert excinfo.value.state == 'FAILED'
    assert 'SYNTAX_ERROR' in str(excinfo.value)
    assert sleep.intervals == []


def test_cancelled_raises():
    _, _, poller = make_poller(['QUEUED', 'CANCELLED'])
    with pytest.raises(ExecutionCancelled) as excinfo:
        asyncio.run(poller.wait('exec-1'))
    assert excinfo.value.state == 'CANCELLED'


def test_unrecognized_state_raises_unknown_state():
    service, _, poller = make_poller(['RUNNING', 'PAUSED'])
    with pytest.raises(UnknownState) as excinfo:
        asyncio.run(poller.wait('exec-1'))
    assert excinfo.value.raw_state == 'PAUSED'
    assert service.count('status') == 2


def test_max_polls_bounds_the_loop():
    service, sleep, poller = make_poller(['QUEUED'])
    with pytest.raises(PollTimeout) as excinfo:
        asyncio.run(poller.wait('exec-1', max_polls=3))
    assert excinfo.value.polls == 3
    assert excinfo.value.last_state is ExecutionState.QUEUED
    assert service.count('status') == 3
    assert len(sleep.intervals) == 2


def test_timeout_bounds_the_loop():
    service = ScriptedService(['RUNNING'])
    poller = ExecutionPoller(service, PollPolicy(running_interval=0.01, timeout=0.05))
    with pytest.raises(PollTimeout):
        asyncio.run(poller.wait('exec-1'))
    assert service.count('status') >= 2


def test_custom_intervals_from_policy():
    service = ScriptedService(['QUEUED', 'RUNNING', 'SUCCEEDED'])
    sleep = SleepRecorder()
    poller = ExecutionPoller(service, PollPolicy(queued_interval=1.0, running_interval=0.25),
                             sleep=sleep)
    asyncio.run(poller.wait('exec-1'))
    assert sleep.intervals == [1.0, 0.25]


def test_task_cancellation_propagates():
    service = ScriptedService(['RUNNING'])
    poller = ExecutionPoller(service, PollPolicy(running_interval=0.01))

    async def scenario():
        task = asyncio.ensure_future(poller.wait('exec-1'))
        await asyncio.sleep(0.03)
        task.cancel()
        await task

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(scenario())
    assert service.count('submit') == 0


class SlowStatusService(ScriptedService):
    """get_status takes longer than the whole wait bound"""

    async def get_status(self, execution_id):
        await asyncio.sleep(0.5)
        return await super().get_status(execution_id)


def test_timeout_bounds_a_slow_status_call():
    service = SlowStatusService(['RUNNING'])
    poller = ExecutionPoller(service, PollPolicy(timeout=0.1))

    async def scenario():
        loop = asyncio.get_running_loop()
        started = loop.time()
        with pytest.raises(PollTimeout) as excinfo:
            await poller.wait('exec-1')
        return loop.time() - started, excinfo.value

    elapsed, error = asyncio.run(scenario())

    assert elapsed < 0.3
    assert error.polls == 0
    assert error.execution_id == 'exec-1'


@pytest.mark.parametrize("state,terminal", [
    (ExecutionState.QUEUED, False),
    (ExecutionState.RUNNING, False),
    (ExecutionState.UNKNOWN, False),
    (ExecutionState.SUCCEEDED, True),
    (ExecutionState.FAILED, True),
    (ExecutionState.CANCELLED, True),
])
def test_terminal_states(state, terminal):
    assert state.is_terminal is terminal
