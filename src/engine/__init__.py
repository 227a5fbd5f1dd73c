"""
Timing engine

- animation_clock: time sources and cycle progress
- scheduler: cancellable one-shot callbacks (asyncio and manual)
- visibility: looping visibility state machine and delayed exit
- sequenced_reveal: stagger and one-by-one item reveal
- effect_registry: named declarative effects
- frame_sampler: per-frame sampling task
"""

from .animation_clock import cycle_progress, Clock, MonotonicClock, ManualClock
from .scheduler import Scheduler, TimerHandle, AsyncioScheduler, LoopClock, ManualScheduler, TimerGroup
from .visibility import LoopTiming, LoopPosition, next_loop_state, advance_loop, VisibilityStateMachine, DelayedExit
from .sequenced_reveal import (
    STAGGER_STEP, HIDE_STEP, ONE_BY_ONE_TRANSITION_GAP,
    parse_priority, order_items, SequencedRevealController, StaggerReveal, OneByOneReveal,
)
from .effect_registry import EffectSpec, EffectRegistry, register_default_effects

__all__ = [
    "cycle_progress",
    "Clock",
    "MonotonicClock",
    "ManualClock",
    "Scheduler",
    "TimerHandle",
    "AsyncioScheduler",
    "LoopClock",
    "ManualScheduler",
    "TimerGroup",
    "LoopTiming",
    "LoopPosition",
    "next_loop_state",
    "advance_loop",
    "VisibilityStateMachine",
    "DelayedExit",
    "STAGGER_STEP",
    "HIDE_STEP",
    "ONE_BY_ONE_TRANSITION_GAP",
    "parse_priority",
    "order_items",
    "SequencedRevealController",
    "StaggerReveal",
    "OneByOneReveal",
    "EffectSpec",
    "EffectRegistry",
    "register_default_effects",
]
