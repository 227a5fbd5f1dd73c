"""
Frame Sampler

Per-frame sampling loop of one overlay instance:
  - Reads the clock once per frame and calls the overlay's pure sample(t)
  - Keeps only the latest frame (nothing accumulates between frames)
  - Tracks its task in the TaskRegistry; stop() cancels and awaits it
"""

import asyncio
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, Optional

from engine.animation_clock import Clock, MonotonicClock
from lifecycle.task_registry import create_tracked_task, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.RENDER_ENGINE)

Frame = Dict[str, Any]


class FrameSampler:
    """
    Drives an overlay's continuous effects at a target frame rate

    Example:
        sampler = FrameSampler(overlay, clock, fps=60)
        await sampler.start()
        ...
        sampler.latest_frame   # last dict returned by overlay.sample()
        await sampler.stop()
    """

    def __init__(
        self,
        overlay: Any,
        clock: Optional[Clock] = None,
        fps: int = 60,
        on_frame: Optional[Callable[[Frame], None]] = None,
    ):
        self.overlay = overlay
        self.clock = clock or MonotonicClock()
        self.fps = max(1, min(fps, 240))
        self.on_frame = on_frame
        self.log = log.bind(overlay=getattr(overlay, "name", "overlay"))

        self.running = False
        self.task: Optional[asyncio.Task] = None
        self.latest_frame: Optional[Frame] = None

        self.frames_sampled = 0
        self.sample_errors = 0
        self.frame_times: Deque[float] = deque(maxlen=300)

    def set_fps(self, fps: int) -> None:
        """Change FPS at runtime."""
        self.fps = max(1, min(fps, 240))
        self.log.info(f"FrameSampler FPS set to {self.fps}")

    # === Lifecycle ===

    async def start(self) -> None:
        if self.running:
            self.log.warn("FrameSampler already running")
            return
        self.running = True
        self.task = create_tracked_task(
            self._sample_loop(),
            category=TaskCategory.RENDER,
            description=f"Frame sampler ({getattr(self.overlay, 'name', 'overlay')})",
            owner=getattr(self.overlay, 'name', None),
        )
        self.log.info(f"FrameSampler started @ {self.fps} FPS")

    async def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.task = None
        self.log.info("FrameSampler stopped", frames_sampled=self.frames_sampled, errors=self.sample_errors)

    # === Metrics ===

    def get_actual_fps(self) -> float:
        if len(self.frame_times) < 2:
            return 0.0
        duration = self.frame_times[-1] - self.frame_times[0]
        if duration <= 0:
            return 0.0
        return len(self.frame_times) / duration

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "fps_target": self.fps,
            "fps_actual": self.get_actual_fps(),
            "frames_sampled": self.frames_sampled,
            "sample_errors": self.sample_errors,
        }

    # === Loop ===

    def sample_once(self) -> Frame:
        """Sample the overlay at the current clock time"""
        frame = self.overlay.sample(self.clock.now())
        self.latest_frame = frame
        self.frames_sampled += 1
        self.frame_times.append(time.perf_counter())
        if self.on_frame:
            self.on_frame(frame)
        return frame

    async def _sample_loop(self) -> None:
        frame_delay = 1.0 / self.fps
        while self.running:
            try:
                self.sample_once()
            except Exception as e:
                self.sample_errors += 1
                self.log.error(f"Sample error: {e}", exc_info=True)
            await asyncio.sleep(frame_delay)
