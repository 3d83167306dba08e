"""
player.py — Step Player
========================
Plays a precomputed, immutable Step list one merge per tick.  This is
the object the UI drives during a run.

State machine:
    IDLE     →  start()          →  PAUSED
    PAUSED   →  play()           →  PLAYING
    PLAYING  →  pause()/cancel() →  PAUSED
    PLAYING  →  (last step merged) → FINISHED
    any      →  reset()          →  IDLE

Rules:
  - start() discards the previous trace and resets the merged state to
    its empty default BEFORE anything is played, so steps from an old run
    are never interleaved with a new one.
  - pause()/cancel() stop at a tick boundary; the merged state stays at
    its last fully merged value (no rollback).
  - Once a merged state is `finished` the player is FINISHED and further
    next_step() calls leave the state untouched.
  - goto_step() replays from the initial state, which gives the same
    state as playing forward (merging is deterministic).

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread / event
  loop, the way the browser drives its interval timer.
"""

import logging
import time
from dataclasses import replace
from enum import Enum
from typing import Callable, List, Optional, Sequence

from algorithms.step import Step
from engine.normalize import iter_states, merge_step
from engine.state import MergeContext, VisualizationState

logger = logging.getLogger(__name__)


class PlayerState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.5,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}

MIN_DELAY = 0.02


class StepPlayer:
    """
    Attributes:
        state   : Current PlayerState.
        steps   : The trace being played (never modified).
        index   : Index of the last merged step, -1 before the first merge.
        speed   : Seconds between auto-advance ticks.
        on_state: Optional callback(VisualizationState) fired after every
                  merge / reset.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        on_state: Optional[Callable[[VisualizationState], None]] = None,
        speed: str = "medium",
    ):
        self.steps:    List[Step]         = []
        self.index:    int                = -1
        self.state:    PlayerState        = PlayerState.IDLE
        self.speed:    float              = SPEED_PRESETS.get(speed, SPEED_PRESETS["medium"])
        self.on_state: Optional[Callable[[VisualizationState], None]] = on_state

        self.context:  MergeContext       = MergeContext()
        self._initial: VisualizationState = VisualizationState()
        self._current: VisualizationState = self._initial
        self._last_tick: float            = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        steps: Sequence[Step],
        context: Optional[MergeContext] = None,
        initial: Optional[VisualizationState] = None,
    ) -> None:
        """Load a fresh trace.  Nothing is merged until the first advance."""
        self.steps    = list(steps)
        self.context  = context or MergeContext()
        self._initial = initial or VisualizationState()
        self._current = self._initial
        self.index    = -1
        self.state    = PlayerState.PAUSED
        self._notify()

    def reset(self) -> None:
        """Back to IDLE.  Caller must call start() again."""
        self.steps    = []
        self.context  = MergeContext()
        self._initial = VisualizationState()
        self._current = self._initial
        self.index    = -1
        self.state    = PlayerState.IDLE
        self._notify()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Merge the next step.  Returns False when nothing was merged."""
        if self.state in (PlayerState.IDLE, PlayerState.FINISHED):
            return False
        target = self.index + 1
        if target >= len(self.steps):
            self._mark_finished()
            return False

        merged = merge_step(self.steps[target], self._current, self.context)
        self._current = replace(merged, step=target + 1)
        self.index = target
        if self._current.finished or target == len(self.steps) - 1:
            self._mark_finished()
        self._notify()
        return True

    def goto_step(self, idx: int) -> bool:
        """Show the state after step `idx` (0-based), replayed from the start."""
        if not 0 <= idx < len(self.steps):
            return False
        state = self._initial
        for state in iter_states(self.steps[: idx + 1], self._initial, self.context):
            pass
        self._current = state
        self.index = idx
        if state.finished or idx == len(self.steps) - 1:
            self._mark_finished()
        elif self.state == PlayerState.FINISHED:
            self.state = PlayerState.PAUSED
        self._notify()
        return True

    def rewind(self) -> None:
        """Back to the empty state of this run, trace kept."""
        if self.state == PlayerState.IDLE:
            return
        self._current = self._initial
        self.index = -1
        self.state = PlayerState.PAUSED
        self._notify()

    def jump_to_end(self) -> None:
        while self.next_step():
            pass

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (PlayerState.IDLE, PlayerState.FINISHED):
            return
        self.state      = PlayerState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == PlayerState.PLAYING:
            self.state = PlayerState.PAUSED

    def cancel(self) -> None:
        """Stop playback at this tick boundary; the merged state is kept."""
        if self.state == PlayerState.PLAYING:
            logger.debug("playback cancelled at step %d of %d", self.index + 1, len(self.steps))
        self.pause()

    def toggle_play(self) -> None:
        if self.state == PlayerState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and enough
        time has elapsed, merges one step.  Returns True if a step
        was merged.
        """
        if self.state != PlayerState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(MIN_DELAY, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_state(self) -> VisualizationState:
        return self._current

    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.index < len(self.steps):
            return self.steps[self.index]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == PlayerState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == PlayerState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _mark_finished(self) -> None:
        if not self._current.finished:
            self._current = replace(self._current, finished=True)
        self.state = PlayerState.FINISHED

    def _notify(self) -> None:
        if self.on_state:
            self.on_state(self._current)
