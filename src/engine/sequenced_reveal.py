"""
Sequenced Reveal Controllers

Drive per-item visibility of an ordered item list (social platforms):

- StaggerReveal: every item revealed, item i flipping visible i * STAGGER_STEP
  after the shared trigger; in loop mode a hide sequence follows the hold
  with a shorter HIDE_STEP per item, then the cycle restarts after pause.
- OneByOneReveal: exactly one item visible at a time, cycling forever.

Every per-item timer belongs to the controller's TimerGroup; changing the
item list or timing cancels all of them before anything is rescheduled.
"""

import re
from dataclasses import replace
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from engine.scheduler import Scheduler, TimerGroup
from models.domain.sequenced_item import SequencedItem
from models.enums import LoopState
from utils.logger import get_logger, LogCategory
from utils.query import parse_pairs

log = get_logger().for_category(LogCategory.SEQUENCE)

STAGGER_STEP = 0.15
HIDE_STEP = 0.08
ONE_BY_ONE_TRANSITION_GAP = 0.3

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ---------------------------------------------------------------------------
# ORDERING
# ---------------------------------------------------------------------------

def parse_priority(text: Optional[str]) -> Dict[str, int]:
    """
    Parse "github:1,twitter:2" into a rank map

    Ranks use their leading integer; entries without one are dropped.
    """
    ranks: Dict[str, int] = {}
    for identity, rank in parse_pairs(text).items():
        match = _LEADING_INT.match(rank)
        if match:
            ranks[identity] = int(match.group(1))
    return ranks


def order_items(identities: Sequence[str], ranks: Mapping[str, int]) -> List[str]:
    """
    Stable sort by explicit rank

    Ranked identities come first in ascending rank (ties keep input order),
    unranked ones follow in input order.

    Example:
        order_items(["a", "b", "c"], {"c": 1})   # ["c", "a", "b"]
    """
    def key(identity: str) -> Tuple[int, int]:
        if identity in ranks:
            return (0, ranks[identity])
        return (1, 0)

    return sorted(identities, key=key)


# ---------------------------------------------------------------------------
# BASE CONTROLLER
# ---------------------------------------------------------------------------

class SequencedRevealController:
    """
    Owns the item list and the timers that mutate it

    Subclasses implement _begin(); everything else (snapshots, restart on
    item or timing change, cancellation) is shared.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        items: Sequence[SequencedItem] = (),
        on_change: Optional[Callable[[Tuple[SequencedItem, ...]], None]] = None,
        name: str = "reveal",
    ):
        self.scheduler = scheduler
        self.timers = TimerGroup(scheduler)
        self.on_change = on_change
        self.name = name
        self.phase = LoopState.ENTERING
        self._items: List[SequencedItem] = [replace(item, visible=False) for item in items]
        self._running = False

    # --- Snapshots ---

    @property
    def items(self) -> Tuple[SequencedItem, ...]:
        return tuple(self._items)

    @property
    def visible_ids(self) -> List[str]:
        return [item.identity for item in self._items if item.visible]

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending_timers(self) -> int:
        return len(self.timers)

    # --- Lifecycle ---

    def start(self, elapsed: float = 0.0) -> None:
        """
        Begin the reveal

        With `elapsed`, items and timers are set up as they would be that
        many seconds after starting; looping sequences are folded modulo
        their cycle so the cost does not grow with `elapsed`.
        """
        self.timers.cancel_all()
        self._running = True
        self.phase = LoopState.ENTERING
        self._begin(max(0.0, elapsed))

    def stop(self) -> None:
        cancelled = self.timers.cancel_all()
        self._running = False
        if cancelled:
            log.debug("Reveal stopped", reveal=self.name, cancelled=cancelled)

    def restart(self) -> None:
        """Cancel everything, hide all items and begin again"""
        was_running = self._running
        self.stop()
        self._items = [replace(item, visible=False) for item in self._items]
        if was_running:
            self.start()

    def update_items(self, items: Sequence[SequencedItem]) -> None:
        """Replace the item list; pending timers of the old list never fire"""
        was_running = self._running
        self.stop()
        self._items = [replace(item, visible=False) for item in items]
        log.debug("Reveal items replaced", reveal=self.name, count=len(self._items))
        if was_running:
            self.start()

    def configure(self, **timing) -> None:
        """Set timing attributes without touching running timers"""
        for attr, value in timing.items():
            if not hasattr(self, attr):
                raise AttributeError(f"{type(self).__name__} has no timing attribute '{attr}'")
            setattr(self, attr, value)

    def update_timing(self, **timing) -> None:
        """Change timing attributes and restart the reveal"""
        self.configure(**timing)
        self.restart()

    def _begin(self, elapsed: float) -> None:
        raise NotImplementedError

    def _after(self, delay: float, elapsed: float, callback: Callable[..., None]) -> None:
        """
        Run `callback` `delay` seconds into the sequence

        When `elapsed` already covers the delay the callback runs now and
        receives the overshoot; otherwise it is scheduled for the remainder.
        """
        if elapsed >= delay:
            callback(elapsed - delay)
        else:
            self.timers.schedule(delay - elapsed, callback)

    # --- Item mutation ---

    def _set_visible(self, index: int, visible: bool) -> None:
        if index >= len(self._items) or self._items[index].visible == visible:
            return
        self._items[index] = replace(self._items[index], visible=visible)
        self._notify()

    def _set_all(self, visible: bool) -> None:
        self._items = [replace(item, visible=visible) for item in self._items]
        self._notify()

    def _set_only(self, index: int) -> None:
        self._items = [replace(item, visible=(i == index)) for i, item in enumerate(self._items)]
        self._notify()

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self.items)


# ---------------------------------------------------------------------------
# STAGGER
# ---------------------------------------------------------------------------

class StaggerReveal(SequencedRevealController):
    """
    Simultaneous reveal with per-item offsets

    Without loop: after `delay`, item i turns visible at i * step (all at
    once when stagger is off) and stays visible.

    With loop: items show immediately (staggered), hide after
    hold + delay + n * step (n * step only when staggered), one every
    hide_step, and the cycle restarts pause + n * hide_step later.

    Example:
        reveal = StaggerReveal(scheduler, items, delay=0.3)
        reveal.start()
        scheduler.advance(0.3)    # item 0 visible
        scheduler.advance(0.15)   # item 1 visible
    """

    def __init__(
        self,
        scheduler: Scheduler,
        items: Sequence[SequencedItem] = (),
        delay: float = 0.0,
        stagger: bool = True,
        loop: bool = False,
        hold: float = 5.0,
        pause: float = 3.0,
        step: float = STAGGER_STEP,
        hide_step: float = HIDE_STEP,
        on_change: Optional[Callable[[Tuple[SequencedItem, ...]], None]] = None,
        name: str = "stagger",
    ):
        super().__init__(scheduler, items, on_change, name)
        self.delay = delay
        self.stagger = stagger
        self.loop = loop
        self.hold = hold
        self.pause = pause
        self.step = step
        self.hide_step = hide_step
        self.cycle = 0

    def _offset(self, index: int) -> float:
        return index * self.step if self.stagger else 0.0

    @property
    def hide_at(self) -> float:
        """Loop mode: seconds from cycle start to the hide sequence"""
        stagger_span = len(self._items) * self.step if self.stagger else 0.0
        return self.hold + self.delay + stagger_span

    @property
    def cycle_length(self) -> float:
        """Loop mode: seconds from one cycle start to the next"""
        return self.hide_at + self.pause + len(self._items) * self.hide_step

    def _begin(self, elapsed: float) -> None:
        self.cycle = 0
        if not self.loop:
            self._after(self.delay, elapsed, self._show_all)
            return
        length = self.cycle_length
        if length <= 0:
            log.warn("Zero-length reveal cycle, showing items without looping", reveal=self.name)
            self._show_all()
            return
        if elapsed >= length:
            self.cycle = int(elapsed // length)
            elapsed -= self.cycle * length
        self._loop_cycle(elapsed)

    def _reveal_each(self, visible: bool, offsets: Sequence[float], elapsed: float) -> None:
        for index, offset in enumerate(offsets):
            if offset <= elapsed:
                self._set_visible(index, visible)
            else:
                self.timers.schedule(offset - elapsed, self._set_visible, index, visible)

    def _show_all(self, elapsed: float = 0.0) -> None:
        self.phase = LoopState.VISIBLE
        if not self.stagger:
            self._set_all(True)
            return
        self._reveal_each(True, [self._offset(i) for i in range(len(self._items))], elapsed)

    def _hide_all(self, elapsed: float = 0.0) -> None:
        self.phase = LoopState.EXITING
        self._reveal_each(False, [i * self.hide_step for i in range(len(self._items))], elapsed)

    def _loop_cycle(self, elapsed: float = 0.0) -> None:
        self._show_all(elapsed)
        self._after(self.hide_at, elapsed, self._loop_hide)

    def _loop_hide(self, elapsed: float = 0.0) -> None:
        self._hide_all(elapsed)
        self._after(self.pause + len(self._items) * self.hide_step, elapsed, self._next_cycle)

    def _next_cycle(self, elapsed: float = 0.0) -> None:
        self.cycle += 1
        self._loop_cycle(elapsed)


# ---------------------------------------------------------------------------
# ONE BY ONE
# ---------------------------------------------------------------------------

class OneByOneReveal(SequencedRevealController):
    """
    Exclusive cyclic reveal

    After `delay`: hide all, wait `gap`, show item[index], wait
    each + each_pause, advance index modulo the item count, repeat.
    An empty item list schedules nothing.

    Example:
        reveal = OneByOneReveal(scheduler, items, each=2, each_pause=0.5)
        reveal.start()
        scheduler.advance(0.3)   # item 0 visible
        scheduler.advance(2.8)   # item 1 visible
    """

    def __init__(
        self,
        scheduler: Scheduler,
        items: Sequence[SequencedItem] = (),
        delay: float = 0.0,
        each: float = 3.0,
        each_pause: float = 0.5,
        gap: float = ONE_BY_ONE_TRANSITION_GAP,
        on_change: Optional[Callable[[Tuple[SequencedItem, ...]], None]] = None,
        name: str = "onebyone",
    ):
        super().__init__(scheduler, items, on_change, name)
        self.delay = delay
        self.each = each
        self.each_pause = each_pause
        self.gap = gap
        self.index = 0

    @property
    def period(self) -> float:
        """Seconds each item occupies: gap + each + each_pause"""
        return self.gap + self.each + self.each_pause

    def _begin(self, elapsed: float) -> None:
        self.index = 0
        if not self._items:
            log.debug("One-by-one reveal has no items", reveal=self.name)
            return
        if self.period <= 0:
            log.warn("Zero-length one-by-one period, showing the first item", reveal=self.name)
            self._show_current()
            return
        if elapsed > self.delay:
            turns = int((elapsed - self.delay) // self.period)
            self.index = turns % len(self._items)
            elapsed -= turns * self.period
        self._after(self.delay, elapsed, self._step)

    def _step(self, elapsed: float = 0.0) -> None:
        self.phase = LoopState.EXITING
        self._set_all(False)
        self._after(self.gap, elapsed, self._show_current)

    def _show_current(self, elapsed: float = 0.0) -> None:
        self.phase = LoopState.VISIBLE
        self._set_only(self.index)
        if self.period > 0:
            self._after(self.each + self.each_pause, elapsed, self._advance)

    def _advance(self, elapsed: float = 0.0) -> None:
        if not self._items:
            return
        self.index = (self.index + 1) % len(self._items)
        self._step(elapsed)
