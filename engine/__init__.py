"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder, autoplay
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS, autoplay
from engine.recorder import Recorder, RunMetrics, step_to_dict, to_json, trace_result

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "autoplay",
    "Recorder",
    "RunMetrics",
    "step_to_dict",
    "to_json",
    "trace_result",
]
