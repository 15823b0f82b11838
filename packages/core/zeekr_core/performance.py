"""Render performance budgeting and adaptive tuning hints."""

from __future__ import annotations

from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class PerformanceTargets:
    cpu_percent_max: float = 25.0
    rss_mb_max: float = 300.0
    fps_min: float = 30.0
    fps_max: float = 60.0


@dataclass(frozen=True)
class BudgetStatus:
    cpu_percent: float
    rss_mb: float
    fps: float
    overloaded: bool
    warning: str | None
    recommended_frame_ms: int
    recommended_supersample: int


class PerformanceController:
    def __init__(self, targets: PerformanceTargets | None = None) -> None:
        self.targets = targets or PerformanceTargets()
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def sample(
        self,
        fps: float,
        frame_ms: int,
        supersample: int,
        preferred_frame_ms: int | None = None,
        preferred_supersample: int | None = None,
    ) -> BudgetStatus:
        """Check one measurement window against the targets.

        Degradations are taken one step per window. Once a window is healthy
        again, the frame interval and supersample factor step back toward the
        preferred values, if given.
        """
        cpu = float(self._process.cpu_percent(interval=None))
        rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)
        overloaded = cpu > self.targets.cpu_percent_max or rss_mb > self.targets.rss_mb_max

        warning = None
        rec_frame = frame_ms
        rec_supersample = supersample

        if overloaded:
            warning = "resource_overload"
            rec_supersample = max(1, supersample - 1)
            rec_frame = min(100, int(frame_ms * 1.25) + 2)
        elif fps < self.targets.fps_min:
            warning = "below_fps_target"
            rec_supersample = max(1, supersample - 1)
        elif fps > self.targets.fps_max:
            warning = "above_fps_target"
            rec_frame = min(100, frame_ms + 4)
        else:
            if preferred_supersample is not None and supersample < preferred_supersample:
                rec_supersample = supersample + 1
            if preferred_frame_ms is not None and frame_ms > preferred_frame_ms:
                faster = max(preferred_frame_ms, frame_ms - 4)
                # Do not step back into the above_fps_target range.
                if 1000.0 / faster <= self.targets.fps_max:
                    rec_frame = faster

        return BudgetStatus(
            cpu_percent=cpu,
            rss_mb=rss_mb,
            fps=float(fps),
            overloaded=overloaded,
            warning=warning,
            recommended_frame_ms=rec_frame,
            recommended_supersample=rec_supersample,
        )


class FrameRateMeter:
    """Frames per second over the time frames were actually being produced.

    The desktop app only repaints while a transition runs, so dividing by wall
    time would count idle stretches as slow frames.
    """

    def __init__(self, min_active_s: float = 0.25) -> None:
        self.min_active_s = min_active_s
        self._frames = 0
        self._active_s = 0.0
        self._since: float | None = None

    @property
    def running(self) -> bool:
        return self._since is not None

    def start(self, now: float) -> None:
        if self._since is None:
            self._since = now

    def stop(self, now: float) -> None:
        if self._since is not None:
            self._active_s += max(0.0, now - self._since)
            self._since = None

    def frame(self) -> None:
        self._frames += 1

    def take(self, now: float) -> float | None:
        """Return the rate for the window ending at ``now``, or None if too short to judge."""
        active = self._active_s
        if self._since is not None:
            active += max(0.0, now - self._since)
        if self._frames == 0 or active < self.min_active_s:
            return None
        fps = self._frames / active
        self._frames = 0
        self._active_s = 0.0
        if self._since is not None:
            self._since = now
        return fps
