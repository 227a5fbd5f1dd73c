"""
Timed Visibility State Machine

Loop mode cycles ENTERING → VISIBLE → EXITING → HIDDEN → ENTERING.
The timing policy is a pure transition function (advance_loop); the
VisibilityStateMachine adapts it to a Scheduler and owns cancellation.

Non-loop mode uses DelayedExit: a single trigger that fires "should exit"
once after N seconds and is irreversible.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from engine.scheduler import Scheduler, TimerHandle
from models.enums import LoopState
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TIMING)

_NEXT_STATE = {
    LoopState.ENTERING: LoopState.VISIBLE,
    LoopState.VISIBLE: LoopState.EXITING,
    LoopState.EXITING: LoopState.HIDDEN,
    LoopState.HIDDEN: LoopState.ENTERING,
}


@dataclass(frozen=True)
class LoopTiming:
    """
    Durations (seconds) of one loop cycle; negative inputs clamp to 0

    ENTERING lasts delay + entrance_speed, VISIBLE lasts hold,
    EXITING lasts exit_speed and HIDDEN lasts pause.
    """
    delay: float = 0.0
    entrance_speed: float = 0.0
    hold: float = 0.0
    exit_speed: float = 0.0
    pause: float = 0.0

    def __post_init__(self):
        for name in ("delay", "entrance_speed", "hold", "exit_speed", "pause"):
            object.__setattr__(self, name, max(0.0, float(getattr(self, name))))

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "LoopTiming":
        return cls(
            delay=config["delay"],
            entrance_speed=config["entrancespeed"],
            hold=config["hold"],
            exit_speed=config["exitspeed"],
            pause=config["pause"],
        )

    def duration_of(self, state: LoopState) -> float:
        if state is LoopState.ENTERING:
            return self.delay + self.entrance_speed
        if state is LoopState.VISIBLE:
            return self.hold
        if state is LoopState.EXITING:
            return self.exit_speed
        return self.pause

    @property
    def cycle_length(self) -> float:
        return sum(self.duration_of(state) for state in LoopState)


@dataclass(frozen=True)
class LoopPosition:
    """Where a loop is after some elapsed time"""
    state: LoopState
    cycle: int
    time_in_state: float


def next_loop_state(state: LoopState) -> LoopState:
    return _NEXT_STATE[state]


def advance_loop(state: LoopState, cycle: int, elapsed: float, timing: LoopTiming) -> LoopPosition:
    """
    Pure transition function

    Args:
        state: State the loop entered `elapsed` seconds ago
        cycle: Cycle counter at that moment
        elapsed: Seconds since entering `state`
        timing: Cycle durations

    Returns:
        LoopPosition after consuming `elapsed`. A transition happens when
        the elapsed time reaches the state's duration (boundaries belong to
        the next state). A zero-length cycle never advances.

    Example:
        timing = LoopTiming(delay=1, entrance_speed=1, hold=2, exit_speed=1, pause=1)
        advance_loop(LoopState.ENTERING, 0, 4.0, timing)
        # LoopPosition(state=EXITING, cycle=0, time_in_state=0.0)
    """
    elapsed = max(0.0, elapsed)
    cycle_length = timing.cycle_length
    if cycle_length <= 0:
        return LoopPosition(state, cycle, elapsed)

    while True:
        if state is LoopState.ENTERING and elapsed >= cycle_length:
            skipped = int(elapsed // cycle_length)
            cycle += skipped
            elapsed -= skipped * cycle_length
        duration = timing.duration_of(state)
        if elapsed < duration:
            return LoopPosition(state, cycle, elapsed)
        elapsed -= duration
        state = next_loop_state(state)
        if state is LoopState.ENTERING:
            cycle += 1


class VisibilityStateMachine:
    """
    Scheduler adapter for the looping visibility cycle

    Exactly one timer is pending while running. Any timing or loop change
    cancels it; when looping stays enabled the cycle restarts from ENTERING
    and the cycle counter increments so entrance/exit effects replay.

    Example:
        sm = VisibilityStateMachine(scheduler, LoopTiming(delay=1, entrance_speed=1,
                                                          hold=2, exit_speed=1, pause=1))
        sm.start()
        scheduler.advance(2.0)
        sm.state   # LoopState.VISIBLE
    """

    def __init__(
        self,
        scheduler: Scheduler,
        timing: LoopTiming,
        loop: bool = True,
        on_change: Optional[Callable[[LoopState, int], None]] = None,
        name: str = "overlay",
    ):
        self.scheduler = scheduler
        self.timing = timing
        self.loop = loop
        self.on_change = on_change
        self.name = name

        self.state = LoopState.ENTERING
        self.cycle = 0
        self.entered_at = scheduler.now()
        self._timer: Optional[TimerHandle] = None
        self._running = False

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------

    def start(self, elapsed: float = 0.0) -> None:
        """
        Enter ENTERING and schedule the first transition

        With `elapsed`, the loop is positioned where it would be that many
        seconds after starting, without replaying the transitions in between.
        """
        self._cancel_timer()
        self._running = True
        position = LoopPosition(LoopState.ENTERING, self.cycle, 0.0)
        if self.loop and elapsed > 0:
            position = advance_loop(LoopState.ENTERING, self.cycle, elapsed, self.timing)
        self.cycle = position.cycle
        self._enter(position.state, notify=False, time_in_state=position.time_in_state)
        log.debug("Visibility loop started", overlay=self.name, loop=self.loop, elapsed=elapsed)
        self._schedule(position.time_in_state)

    def stop(self) -> None:
        """Cancel the pending transition"""
        self._cancel_timer()
        self._running = False

    def update(self, timing: Optional[LoopTiming] = None, loop: Optional[bool] = None) -> None:
        """
        Apply new timing and/or loop flag

        Cancels the pending timer. If looping is (still) enabled, restarts
        from ENTERING with the cycle counter incremented.
        """
        changed = False
        if timing is not None and timing != self.timing:
            self.timing = timing
            changed = True
        if loop is not None and loop != self.loop:
            self.loop = loop
            changed = True
        if not changed or not self._running:
            return

        self._cancel_timer()
        if self.loop:
            self.cycle += 1
            self._enter(LoopState.ENTERING)
            self._schedule()
        log.debug("Visibility loop reconfigured", overlay=self.name, loop=self.loop, cycle=self.cycle)

    # ------------------------------------------------------------
    # State
    # ------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending_timers(self) -> int:
        return 1 if self._timer is not None and not self._timer.cancelled() else 0

    def is_visible(self, include_exiting: bool = False) -> bool:
        """True in ENTERING/VISIBLE (and EXITING when include_exiting)"""
        if self.state in (LoopState.ENTERING, LoopState.VISIBLE):
            return True
        return include_exiting and self.state is LoopState.EXITING

    def position(self) -> LoopPosition:
        return LoopPosition(self.state, self.cycle, self.scheduler.now() - self.entered_at)

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _enter(self, state: LoopState, notify: bool = True, time_in_state: float = 0.0) -> None:
        previous = self.state
        self.state = state
        self.entered_at = self.scheduler.now() - time_in_state
        log.debug(
            "Loop state changed",
            overlay=self.name,
            state=f"{previous.value} → {state.value}",
            cycle=self.cycle,
        )
        if notify and self.on_change:
            self.on_change(state, self.cycle)

    def _schedule(self, time_in_state: float = 0.0) -> None:
        if not self.loop:
            return
        if self.timing.cycle_length <= 0:
            log.warn("Zero-length loop cycle, holding in entering", overlay=self.name)
            return
        remaining = self.timing.duration_of(self.state) - time_in_state
        self._timer = self.scheduler.call_later(max(0.0, remaining), self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        if not self._running:
            return
        # The timer fires once the current state's duration has elapsed
        position = advance_loop(self.state, self.cycle, self.timing.duration_of(self.state), self.timing)
        self.cycle = position.cycle
        self._enter(position.state, time_in_state=position.time_in_state)
        self._schedule(position.time_in_state)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class DelayedExit:
    """
    Non-loop exit trigger

    Fires once after `after` seconds (0 disables). Once fired it stays
    fired; later updates cannot revert it.

    Example:
        exit_trigger = DelayedExit(scheduler, after=10)
        exit_trigger.start()
        scheduler.advance(10)
        exit_trigger.should_exit   # True
    """

    def __init__(
        self,
        scheduler: Scheduler,
        after: float,
        on_exit: Optional[Callable[[], None]] = None,
        name: str = "overlay",
    ):
        self.scheduler = scheduler
        self.after = max(0.0, after)
        self.on_exit = on_exit
        self.name = name
        self.should_exit = False
        self._timer: Optional[TimerHandle] = None

    @property
    def enabled(self) -> bool:
        return self.after > 0

    def start(self, elapsed: float = 0.0) -> None:
        """Arm the trigger; `elapsed` seconds of the delay are treated as already spent"""
        self.cancel()
        if self.should_exit or not self.enabled:
            return
        if elapsed >= self.after:
            self._fire()
            return
        self._timer = self.scheduler.call_later(self.after - max(0.0, elapsed), self._fire)

    def update(self, after: float) -> None:
        """Reschedule with a new delay unless already fired"""
        self.after = max(0.0, after)
        if not self.should_exit:
            self.start()

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        self.should_exit = True
        log.debug("Delayed exit fired", overlay=self.name, after=self.after)
        if self.on_exit:
            self.on_exit()
