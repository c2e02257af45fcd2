"""
SetSight Core - Foundation modules for replay loading and configuration.

This module contains the fundamental components:
- constants: Game-end methods, stat ids and shared numeric constants
- config: Application configuration management
- lookup: Stage, move and character display names
- parser: Replay loading from parsed JSON files
"""

from setsight.core.config import SetSightConfig, get_config, load_config
from setsight.core.constants import (
    FRAMES_PER_SECOND,
    TOP_EVENT_COUNT,
    BetterDirection,
    ExclusionReason,
    GameEndMethod,
    Outcome,
    StatId,
    ValueType,
)

__all__ = [
    "SetSightConfig",
    "get_config",
    "load_config",
    "FRAMES_PER_SECOND",
    "TOP_EVENT_COUNT",
    "BetterDirection",
    "ExclusionReason",
    "GameEndMethod",
    "Outcome",
    "StatId",
    "ValueType",
]
