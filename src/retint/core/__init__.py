"""Dynamic theme engine and its collaborators."""

from .base_styles import BASE_STYLE_CLASS, OVERRIDE_STYLE_CLASS, build_base_css
from .engine import DynamicThemeEngine
from .loop_guard import LoopGuard
from .scheduler import AwaitLoad, ForgetNode, QueueState, ScheduleFlush, reduce_mutation
from .state_machine import EngineState, EngineStateMachine
from .svg import SvgClassifier

__all__ = [
    "BASE_STYLE_CLASS",
    "OVERRIDE_STYLE_CLASS",
    "AwaitLoad",
    "DynamicThemeEngine",
    "EngineState",
    "EngineStateMachine",
    "ForgetNode",
    "LoopGuard",
    "QueueState",
    "ScheduleFlush",
    "SvgClassifier",
    "build_base_css",
    "reduce_mutation",
]
