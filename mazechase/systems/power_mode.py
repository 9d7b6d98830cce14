from __future__ import annotations


class PowerMode:
    """Countdown for the session-wide power mode (milliseconds)."""

    def __init__(self, duration_ms: float) -> None:
        self.duration = float(duration_ms)
        self.remaining = 0.0

    @property
    def active(self) -> bool:
        return self.remaining > 0

    def activate(self) -> None:
        # a second power pellet restarts the full duration
        self.remaining = self.duration

    def clear(self) -> None:
        self.remaining = 0.0

    def update(self, dt_ms: float) -> bool:
        """Advance the timer; True exactly on the tick it runs out."""
        if self.remaining <= 0:
            return False
        self.remaining = max(0.0, self.remaining - dt_ms)
        return self.remaining == 0
