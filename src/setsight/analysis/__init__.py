"""
SetSight Analysis - Set filtering and stat aggregation.

This module contains:
- filtering: Reduces a replay batch to one comparable match set
- orientation: Subject/opponent orderings for symmetric stats
- ratios: Weighted ratio aggregation across matches
- catalogue: The registry of set statistics
- outcome: Winner/loser resolution from the game-end event
- narrative: Per-game summaries
- highlights: Randomized highlight recap
"""

from setsight.analysis.catalogue import STAT_CATALOGUE, compute_stats, get_definition
from setsight.analysis.filtering import (
    Exclusion,
    FilterResult,
    NoValidMatchSetError,
    filter_matches,
)
from setsight.analysis.highlights import choose_random, compose_highlights, make_rng
from setsight.analysis.models import MatchRecord, PlayerOrientation, StatOutput
from setsight.analysis.narrative import compose_narrative
from setsight.analysis.orientation import resolve_orientations
from setsight.analysis.outcome import resolve_outcome
from setsight.analysis.ratios import aggregate_ratios

__all__: list[str] = [
    "STAT_CATALOGUE",
    "compute_stats",
    "get_definition",
    "Exclusion",
    "FilterResult",
    "NoValidMatchSetError",
    "filter_matches",
    "choose_random",
    "compose_highlights",
    "make_rng",
    "MatchRecord",
    "PlayerOrientation",
    "StatOutput",
    "compose_narrative",
    "resolve_orientations",
    "resolve_outcome",
    "aggregate_ratios",
]
