"""UI package."""

from .timer_widget import TimerWidget
from .styles import build_stylesheet

__all__ = ["TimerWidget", "build_stylesheet"]
