"""Site-level theme decisions driving the engine."""

from .pipeline import (
    PipelineDecision,
    PipelineResult,
    ThemePipeline,
    resolve_desired_theme,
    should_apply,
)

__all__ = [
    "PipelineDecision",
    "PipelineResult",
    "ThemePipeline",
    "resolve_desired_theme",
    "should_apply",
]
