"""engine.frames

Frame time monitoring for the tick loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class FrameMonitor:
    budget_ms: float = 1000.0 / 60.0
    report_every: int = 300

    frame_count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0
    _warned: bool = False

    @property
    def average_ms(self) -> float:
        return self.total_ms / self.frame_count if self.frame_count else 0.0

    def record(self, frame_ms: float) -> None:
        self.frame_count += 1
        self.total_ms += frame_ms
        self.max_ms = max(self.max_ms, frame_ms)

        if frame_ms > self.budget_ms:
            # once per overrun streak, then every 60th frame while it lasts
            if not self._warned or self.frame_count % 60 == 0:
                logger.warning(f"Frame time {frame_ms:.2f}ms exceeded budget {self.budget_ms:.2f}ms")
                self._warned = True
        else:
            self._warned = False

        if self.report_every and self.frame_count % self.report_every == 0:
            logger.info(f"Frames: avg {self.average_ms:.2f}ms, max {self.max_ms:.2f}ms over {self.frame_count} frames")

    def reset(self) -> None:
        self.frame_count = 0
        self.total_ms = 0.0
        self.max_ms = 0.0
        self._warned = False
