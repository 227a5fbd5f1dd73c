"""
Tests for the looping visibility state machine and DelayedExit.
"""

import pytest

from engine.visibility import (
    DelayedExit, LoopTiming, VisibilityStateMachine, advance_loop, next_loop_state
)
from models.enums import LoopState

TIMING = LoopTiming(delay=1, entrance_speed=1, hold=2, exit_speed=1, pause=1)


class TestLoopTiming:

    def test_negative_values_clamp(self):
        timing = LoopTiming(delay=-1, hold=-2)
        assert timing.delay == 0.0
        assert timing.hold == 0.0

    def test_durations(self):
        assert TIMING.duration_of(LoopState.ENTERING) == 2
        assert TIMING.duration_of(LoopState.HIDDEN) == 1
        assert TIMING.cycle_length == 6

    def test_from_config(self):
        timing = LoopTiming.from_config({
            "delay": 0.5, "entrancespeed": 0.5, "hold": 6, "exitspeed": 0.4, "pause": 20,
        })
        assert timing.cycle_length == pytest.approx(27.4)


class TestAdvanceLoop:
    """Pure transition function."""

    def test_order(self):
        assert next_loop_state(LoopState.ENTERING) is LoopState.VISIBLE
        assert next_loop_state(LoopState.HIDDEN) is LoopState.ENTERING

    @pytest.mark.parametrize("elapsed,state,cycle", [
        (0.0, LoopState.ENTERING, 0),
        (2.0, LoopState.VISIBLE, 0),
        (4.0, LoopState.EXITING, 0),
        (5.0, LoopState.HIDDEN, 0),
        (6.0, LoopState.ENTERING, 1),
        (13.5, LoopState.ENTERING, 2),
        (15.0, LoopState.VISIBLE, 2),
    ])
    def test_positions(self, elapsed, state, cycle):
        position = advance_loop(LoopState.ENTERING, 0, elapsed, TIMING)
        assert position.state is state
        assert position.cycle == cycle

    def test_starting_mid_cycle(self):
        position = advance_loop(LoopState.EXITING, 3, 1.5, TIMING)
        assert position.state is LoopState.HIDDEN
        assert position.time_in_state == pytest.approx(0.5)

    def test_zero_cycle_never_advances(self):
        position = advance_loop(LoopState.ENTERING, 0, 100.0, LoopTiming())
        assert position.state is LoopState.ENTERING
        assert position.cycle == 0


class TestVisibilityStateMachine:

    def test_timeline(self, scheduler):
        """delay=1 entrance=1 hold=2 exit=1 pause=1"""
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start()

        scheduler.advance_to(2.0)
        assert sm.state is LoopState.VISIBLE
        assert sm.is_visible()

        scheduler.advance_to(4.0)
        assert sm.state is LoopState.EXITING
        assert not sm.is_visible()
        assert sm.is_visible(include_exiting=True)

        scheduler.advance_to(5.0)
        assert sm.state is LoopState.HIDDEN
        assert not sm.is_visible(include_exiting=True)

        scheduler.advance_to(6.0)
        assert sm.state is LoopState.ENTERING
        assert sm.cycle == 1

    def test_matches_pure_function(self, scheduler):
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start()
        for t in (0.5, 1.9, 3.3, 4.5, 5.5, 7.0, 12.1, 20.0):
            scheduler.advance_to(t)
            expected = advance_loop(LoopState.ENTERING, 0, t, TIMING)
            assert (sm.state, sm.cycle) == (expected.state, expected.cycle)

    def test_exactly_one_pending_timer(self, scheduler):
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start()
        for t in (1, 3, 4.5, 5.5, 8):
            scheduler.advance_to(t)
            assert sm.pending_timers == 1
            assert scheduler.pending == 1

    def test_stop_cancels(self, scheduler):
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start()
        sm.stop()
        assert not sm.running
        assert scheduler.pending == 0
        scheduler.advance_to(10)
        assert sm.state is LoopState.ENTERING

    def test_update_restarts_with_next_cycle(self, scheduler):
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start()
        scheduler.advance_to(3.0)

        sm.update(timing=LoopTiming(delay=0, entrance_speed=1, hold=1, exit_speed=1, pause=1))
        assert sm.state is LoopState.ENTERING
        assert sm.cycle == 1
        assert scheduler.pending == 1

        scheduler.advance_to(4.0)
        assert sm.state is LoopState.VISIBLE

    def test_update_with_same_values_is_noop(self, scheduler):
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start()
        scheduler.advance_to(3.0)
        sm.update(timing=TIMING, loop=True)
        assert sm.state is LoopState.VISIBLE
        assert sm.cycle == 0

    def test_disabling_loop_cancels_timer(self, scheduler):
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start()
        sm.update(loop=False)
        assert scheduler.pending == 0

    def test_zero_length_cycle_holds_entering(self, scheduler):
        sm = VisibilityStateMachine(scheduler, LoopTiming())
        sm.start()
        scheduler.advance_to(10)
        assert sm.state is LoopState.ENTERING
        assert scheduler.pending == 0

    def test_on_change_receives_transitions(self, scheduler):
        changes = []
        sm = VisibilityStateMachine(scheduler, TIMING, on_change=lambda s, c: changes.append((s, c)))
        sm.start()
        scheduler.advance_to(6.0)
        assert changes == [
            (LoopState.VISIBLE, 0),
            (LoopState.EXITING, 0),
            (LoopState.HIDDEN, 0),
            (LoopState.ENTERING, 1),
        ]

    def test_position(self, scheduler):
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start()
        scheduler.advance_to(2.5)
        position = sm.position()
        assert position.state is LoopState.VISIBLE
        assert position.time_in_state == pytest.approx(0.5)


class TestDelayedExit:

    def test_fires_once_after_delay(self, scheduler):
        calls = []
        trigger = DelayedExit(scheduler, 10, on_exit=lambda: calls.append(scheduler.now()))
        trigger.start()

        scheduler.advance_to(9.9)
        assert not trigger.should_exit
        scheduler.advance_to(10.0)
        assert trigger.should_exit
        scheduler.advance_to(30.0)
        assert calls == [10.0]

    def test_zero_disables(self, scheduler):
        trigger = DelayedExit(scheduler, 0)
        trigger.start()
        assert not trigger.enabled
        assert scheduler.pending == 0

    def test_update_reschedules(self, scheduler):
        trigger = DelayedExit(scheduler, 5)
        trigger.start()
        scheduler.advance_to(3)
        trigger.update(5)
        scheduler.advance_to(7)
        assert not trigger.should_exit
        scheduler.advance_to(8)
        assert trigger.should_exit

    def test_irreversible(self, scheduler):
        trigger = DelayedExit(scheduler, 1)
        trigger.start()
        scheduler.advance_to(1)
        trigger.update(100)
        trigger.start()
        assert trigger.should_exit
        assert scheduler.pending == 0

    def test_cancel(self, scheduler):
        trigger = DelayedExit(scheduler, 1)
        trigger.start()
        trigger.cancel()
        scheduler.advance_to(5)
        assert not trigger.should_exit


class TestStartAtElapsed:
    """Starting part-way through the loop positions it without replaying transitions."""

    def test_positions_like_pure_function(self, scheduler):
        t = 6 * 100000 + 2.5
        scheduler.advance_to(t)
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start(elapsed=t)

        expected = advance_loop(LoopState.ENTERING, 0, t, TIMING)
        assert (sm.state, sm.cycle) == (expected.state, expected.cycle)
        assert sm.state is LoopState.VISIBLE
        assert sm.cycle == 100000
        assert sm.position().time_in_state == pytest.approx(0.5)
        assert scheduler.pending == 1

    def test_remaining_time_is_scheduled(self, scheduler):
        scheduler.advance_to(20.0)
        sm = VisibilityStateMachine(scheduler, TIMING)
        sm.start(elapsed=20.0)
        assert (sm.state, sm.cycle) == (LoopState.VISIBLE, 3)

        scheduler.advance_to(21.9)
        assert sm.state is LoopState.VISIBLE
        scheduler.advance_to(22.0)
        assert sm.state is LoopState.EXITING
        assert sm.cycle == 3

    def test_same_state_as_running_from_zero(self, scheduler):
        replayed = VisibilityStateMachine(scheduler, TIMING)
        replayed.start()
        scheduler.advance_to(17.5)

        seeked = VisibilityStateMachine(scheduler, TIMING)
        seeked.start(elapsed=17.5)
        assert (seeked.state, seeked.cycle) == (replayed.state, replayed.cycle)
        assert seeked.position().time_in_state == pytest.approx(replayed.position().time_in_state)

    def test_zero_length_cycle_ignores_elapsed(self, scheduler):
        sm = VisibilityStateMachine(scheduler, LoopTiming())
        sm.start(elapsed=50)
        assert sm.state is LoopState.ENTERING
        assert sm.cycle == 0
        assert scheduler.pending == 0

    def test_delayed_exit_counts_elapsed(self, scheduler):
        scheduler.advance_to(4)
        trigger = DelayedExit(scheduler, 10)
        trigger.start(elapsed=4)
        scheduler.advance_to(9.9)
        assert not trigger.should_exit
        scheduler.advance_to(10)
        assert trigger.should_exit

    def test_delayed_exit_already_due(self, scheduler):
        trigger = DelayedExit(scheduler, 10)
        trigger.start(elapsed=1e6)
        assert trigger.should_exit
        assert scheduler.pending == 0
