"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object a renderer interacts with during a
visualisation session.  It owns one already-computed Trace and a cursor
into it, and exposes next/previous/seek/auto-play/reset.

State machine:
    IDLE     →  load(trace)        →  PAUSED   (DONE for a 1-step trace)
    PAUSED   →  start_auto_play()  →  PLAYING
    PLAYING  →  stop_auto_play()   →  PAUSED
    PLAYING  →  (last step reached) → DONE
    PLAYING  →  next/previous/seek →  PAUSED / DONE   (manual navigation cancels)
    any      →  reset()            →  IDLE
    DONE     ⇄  PAUSED             (cursor leaves / reaches the last step)

Auto-play is cooperative: call tick() from your event loop / timer, or
run the `autoplay()` coroutine as an asyncio task.  Either way exactly
one thread of control drives the cursor.

Thread safety:
  This class is NOT thread-safe.  Call it from a single thread (or from
  one asyncio event loop).
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Callable, Optional

import config
from algorithms.step import Step, Trace


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE    = "idle"
    PAUSED  = "paused"
    PLAYING = "playing"
    DONE    = "done"


SPEED_PRESETS = config.SPEED_PRESETS


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state           : Current StepperState.
        period          : Seconds between auto-play ticks.
        on_step         : Optional callback(Step) fired every time the current
                          step changes.  The UI hooks its re-render here.
        play_generation : Bumped on every start_auto_play(); lets a running
                          autoplay task notice it has been superseded.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Step], None]] = None,
        period: float = config.DEFAULT_PLAYBACK_PERIOD,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._trace:      Optional[Trace] = None
        self._index:      int             = -1
        self.state:       StepperState    = StepperState.IDLE
        self.period:      float           = period
        self.on_step:     Optional[Callable[[Step], None]] = on_step
        self.play_generation: int         = 0

        # for auto-play timing
        self._clock      = clock
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, trace: Trace) -> None:
        """Take ownership of a fresh trace and show its first step."""
        self.stop_auto_play()
        if len(trace) == 0:
            self._trace = None
            self._index = -1
            self._set_state(StepperState.IDLE)
            return
        self._trace = trace
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE — the trace is discarded."""
        self.stop_auto_play()
        self._trace = None
        self._index = -1
        self._set_state(StepperState.IDLE)

    def close(self) -> None:
        """Teardown: make sure nothing keeps ticking."""
        self.stop_auto_play()

    # ------------------------------------------------------------------
    # Navigation (manual — always cancels auto-play)
    # ------------------------------------------------------------------
    def next(self) -> bool:
        """Advance one step.  Returns False if there is nothing to advance to."""
        if self._trace is None:
            return False
        self.stop_auto_play()
        if self._index >= len(self._trace) - 1:
            return False
        self._goto(self._index + 1)
        return True

    def previous(self) -> bool:
        """Rewind one step.  Returns False if already at the start."""
        if self._trace is None:
            return False
        self.stop_auto_play()
        if self._index <= 0:
            return False
        self._goto(self._index - 1)
        return True

    def seek(self, index: int) -> bool:
        """Jump to a 0-based position.  Out-of-range indices are ignored."""
        if self._trace is None:
            return False
        self.stop_auto_play()
        if not 0 <= index < len(self._trace):
            return False
        self._goto(index)
        return True

    def rewind(self) -> bool:
        return self.seek(0)

    def jump_to_end(self) -> bool:
        if self._trace is None:
            return False
        return self.seek(len(self._trace) - 1)

    # ------------------------------------------------------------------
    # Auto-play
    # ------------------------------------------------------------------
    def start_auto_play(self) -> bool:
        if self._trace is None or self.is_done:
            return False
        self.play_generation += 1
        self._last_tick = self._clock()
        self._set_state(StepperState.PLAYING)
        return True

    def stop_auto_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self._settle()

    def toggle_play(self) -> bool:
        """Returns whether the stepper is playing afterwards."""
        if self.is_playing:
            self.stop_auto_play()
        else:
            self.start_auto_play()
        return self.is_playing

    def tick(self, force: bool = False) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and a full period
        has elapsed (or `force`), advances one step.  Returns True if a step
        was taken.  Reaching the last step ends auto-play.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = self._clock()
        if not force and now - self._last_tick < self.period:
            return False
        self._last_tick = now
        self._goto(self._index + 1)
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.period = SPEED_PRESETS.get(preset, config.DEFAULT_PLAYBACK_PERIOD)

    def set_period(self, seconds: float) -> None:
        self.period = max(config.MIN_PLAYBACK_PERIOD, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def trace(self) -> Optional[Trace]:
        return self._trace

    @property
    def current_step(self) -> Optional[Step]:
        if self._trace is not None and 0 <= self._index < len(self._trace):
            return self._trace[self._index]
        return None

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def total_steps(self) -> int:
        return len(self._trace) if self._trace is not None else 0

    @property
    def is_done(self) -> bool:
        return self._trace is not None and self._index == len(self._trace) - 1

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self._index = idx
        if self.state != StepperState.PLAYING or self.is_done:
            self._settle()
        step = self.current_step
        if self.on_step and step is not None:
            self.on_step(step)

    def _settle(self) -> None:
        self._set_state(StepperState.DONE if self.is_done else StepperState.PAUSED)

    def _set_state(self, state: StepperState) -> None:
        if state != self.state:
            logger.debug("stepper %s → %s at %d", self.state.value, state.value, self._index)
            self.state = state


# ---------------------------------------------------------------------------
# asyncio driver
# ---------------------------------------------------------------------------
async def autoplay(stepper: Stepper) -> None:
    """
    Auto-play as a cancellable periodic task:

        task = asyncio.create_task(autoplay(stepper))
        …
        task.cancel()          # or any manual navigation / reset

    Ends on its own when the last step is reached, when auto-play is stopped
    by any other path, or when a newer auto-play session starts.
    """
    if not stepper.start_auto_play():
        return
    generation = stepper.play_generation
    try:
        while stepper.is_playing and stepper.play_generation == generation:
            await asyncio.sleep(stepper.period)
            if stepper.play_generation != generation:
                break
            stepper.tick(force=True)
    finally:
        if stepper.play_generation == generation:
            stepper.stop_auto_play()
