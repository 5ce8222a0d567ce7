"""
Viewport and clock collaborators the simulation reads from its host.
"""

from .config import MAX_FRAME_TIME


def clamp_frame_time(elapsed: float) -> float:
    """Clamp an elapsed frame time into [0, MAX_FRAME_TIME]."""
    return max(0.0, min(elapsed, MAX_FRAME_TIME))


class Viewport:
    """Fixed-size drawing area the agents are kept inside."""

    def __init__(self, width: float, height: float):
        self._width = float(width)
        self._height = float(height)

    def width(self) -> float:
        return self._width

    def height(self) -> float:
        return self._height

    def __repr__(self) -> str:
        return f"Viewport({self._width:g}, {self._height:g})"


class FixedClock:
    """
    Clock that reports the same elapsed time on every step.

    Used for headless runs where wall-clock time should not influence
    integration.
    """

    def __init__(self, dt: float):
        self.dt = dt

    def elapsed_since_last_step(self) -> float:
        return self.dt
