import asyncio

import pytest

from algorithms.kmp import kmp_search
from algorithms.step import Trace
from engine import SPEED_PRESETS, Stepper, StepperState, autoplay


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def trace() -> Trace:
    return kmp_search("ABABCABABA", "ABABA")


def test_idle_until_loaded() -> None:
    stepper = Stepper()
    assert stepper.state is StepperState.IDLE
    assert stepper.current_step is None
    assert stepper.current_index == -1
    assert not stepper.next()
    assert not stepper.previous()
    assert not stepper.seek(0)
    assert not stepper.start_auto_play()


def test_empty_trace_stays_idle() -> None:
    stepper = Stepper()
    stepper.load(kmp_search("AB", "ABC"))
    assert stepper.state is StepperState.IDLE
    assert stepper.total_steps == 0
    assert not stepper.next()


def test_next_reaches_the_end_then_is_a_no_op(trace: Trace) -> None:
    stepper = Stepper()
    stepper.load(trace)
    assert stepper.state is StepperState.PAUSED
    assert stepper.current_step.index == 1

    for _ in range(len(trace) - 1):
        assert stepper.next()
    assert stepper.state is StepperState.DONE
    assert stepper.current_step is trace.last

    assert not stepper.next()
    assert stepper.current_index == len(trace) - 1


def test_previous_and_seek(trace: Trace) -> None:
    stepper = Stepper()
    stepper.load(trace)
    assert not stepper.previous()
    assert stepper.jump_to_end()
    assert stepper.is_done
    assert stepper.previous()
    assert stepper.state is StepperState.PAUSED
    assert stepper.seek(3)
    assert stepper.current_step.index == 4
    assert not stepper.seek(len(trace))
    assert stepper.current_index == 3
    assert stepper.rewind()
    assert stepper.current_index == 0


def test_reset_discards_trace(trace: Trace) -> None:
    stepper = Stepper()
    stepper.load(trace)
    stepper.next()
    stepper.reset()
    assert stepper.state is StepperState.IDLE
    assert stepper.trace is None
    assert stepper.current_step is None


def test_on_step_fires_on_every_index_change(trace: Trace) -> None:
    seen = []
    stepper = Stepper(on_step=lambda step: seen.append(step.index))
    stepper.load(trace)
    stepper.next()
    stepper.next()
    stepper.previous()
    stepper.next()
    assert seen == [1, 2, 3, 2, 3]


def test_tick_waits_for_a_full_period(trace: Trace) -> None:
    clock = FakeClock()
    stepper = Stepper(period=1.0, clock=clock)
    stepper.load(trace)
    assert stepper.start_auto_play()
    assert stepper.state is StepperState.PLAYING

    clock.advance(0.5)
    assert not stepper.tick()
    clock.advance(0.5)
    assert stepper.tick()
    assert stepper.current_index == 1
    assert stepper.is_playing


def test_auto_play_runs_to_done(trace: Trace) -> None:
    clock = FakeClock()
    stepper = Stepper(period=1.0, clock=clock)
    stepper.load(trace)
    stepper.start_auto_play()
    ticks = 0
    while stepper.is_playing:
        clock.advance(1.0)
        ticks += stepper.tick()
    assert ticks == len(trace) - 1
    assert stepper.state is StepperState.DONE
    assert not stepper.start_auto_play()


def test_manual_navigation_cancels_auto_play(trace: Trace) -> None:
    stepper = Stepper(clock=FakeClock())
    stepper.load(trace)
    stepper.start_auto_play()
    stepper.next()
    assert stepper.state is StepperState.PAUSED
    assert not stepper.tick(force=True)


def test_toggle_play(trace: Trace) -> None:
    stepper = Stepper(clock=FakeClock())
    stepper.load(trace)
    assert stepper.toggle_play() is True
    assert stepper.toggle_play() is False
    assert stepper.state is StepperState.PAUSED


def test_speed_presets() -> None:
    stepper = Stepper()
    stepper.set_speed("fast")
    assert stepper.period == SPEED_PRESETS["fast"]
    stepper.set_period(0.0)
    assert stepper.period > 0


# ---------------------------------------------------------------------------
# asyncio driver
# ---------------------------------------------------------------------------
def test_autoplay_coroutine_plays_to_the_end(trace: Trace) -> None:
    stepper = Stepper(period=0)
    stepper.load(trace)
    asyncio.run(autoplay(stepper))
    assert stepper.state is StepperState.DONE
    assert stepper.current_index == len(trace) - 1


def test_cancelling_autoplay_task_pauses(trace: Trace) -> None:
    stepper = Stepper(period=10)
    stepper.load(trace)

    async def scenario() -> None:
        task = asyncio.create_task(autoplay(stepper))
        await asyncio.sleep(0)
        assert stepper.is_playing
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert stepper.state is StepperState.PAUSED
    assert stepper.current_index == 0


def test_autoplay_stops_when_navigated_manually(trace: Trace) -> None:
    stepper = Stepper(period=0)
    stepper.load(trace)

    async def scenario() -> None:
        task = asyncio.create_task(autoplay(stepper))
        await asyncio.sleep(0)
        stepper.seek(2)
        await task

    asyncio.run(scenario())
    assert stepper.state is StepperState.PAUSED
    assert stepper.current_index == 2
