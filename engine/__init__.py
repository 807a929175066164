"""
engine/
-------
Playback & analytics layer.

    from engine import PlaybackController, Recorder, run_to_completion
"""

from engine.controller import PlaybackController, PlaybackState, interval_for_speed
from engine.recorder   import Recorder, RunMetrics, run_to_completion

__all__ = [
    "PlaybackController",
    "PlaybackState",
    "interval_for_speed",
    "Recorder",
    "RunMetrics",
    "run_to_completion",
]
