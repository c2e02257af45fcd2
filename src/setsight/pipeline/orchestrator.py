"""
Set Analysis Orchestrator - Main pipeline for processing a batch of replays.

load replays -> filter to one comparable set -> per-game narrative,
full stat summary and highlight recap.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from setsight.analysis.catalogue import compute_stats
from setsight.analysis.filtering import FilterResult, filter_matches
from setsight.analysis.highlights import compose_highlights, make_rng
from setsight.analysis.models import GameSummary, HighlightRecord, MatchRecord, StatOutput
from setsight.analysis.narrative import compose_narrative
from setsight.analysis.orientation import resolve_orientations
from setsight.core.config import SetSightConfig, get_config
from setsight.core.parser import load_replays

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetReport:
    """Everything computed for one match set."""

    games: tuple[GameSummary, ...]
    summary: tuple[StatOutput, ...]
    bts_summary: tuple[HighlightRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "games": [g.to_dict() for g in self.games],
            "summary": [s.to_dict() for s in self.summary],
            "btsSummary": [h.to_dict() for h in self.bts_summary],
        }


@dataclass(frozen=True)
class AnalysisRun:
    """A report together with the filter outcome that produced its match set."""

    report: SetReport
    filter_result: FilterResult


def generate_output(
    matches: Sequence[MatchRecord],
    rng: np.random.Generator | None = None,
    *,
    seed: int | None = None,
    config: SetSightConfig | None = None,
) -> SetReport:
    """
    Compute the narrative, stat summary and highlight recap of a match set.

    Args:
        matches: A filtered match set (see filter_matches)
        rng: Random source for highlight selection; built from ``seed`` or
            the configured seed when omitted
        seed: Seed used when no rng is given
        config: Configuration, the global one by default

    Returns:
        SetReport
    """
    config = config or get_config()
    if rng is None:
        rng = make_rng(seed if seed is not None else config.stats.seed)

    orientations = resolve_orientations(matches)
    summary = compute_stats(matches, orientations)
    highlights = compose_highlights(
        summary,
        rng,
        random_count=config.stats.highlight_random_count,
        self_destruct_threshold=config.stats.self_destruct_threshold,
    )

    return SetReport(
        games=tuple(compose_narrative(matches)),
        summary=tuple(summary),
        bts_summary=tuple(highlights),
    )


def analyze_matches(
    matches: Sequence[MatchRecord],
    *,
    seed: int | None = None,
    config: SetSightConfig | None = None,
) -> AnalysisRun:
    """Filter a replay batch and generate the report for the surviving set."""
    filter_result = filter_matches(matches)
    report = generate_output(filter_result.matches, seed=seed, config=config)
    return AnalysisRun(report=report, filter_result=filter_result)


def analyze_folder(
    folder: str | Path,
    *,
    seed: int | None = None,
    config: SetSightConfig | None = None,
) -> AnalysisRun:
    """
    Execute the complete pipeline for a folder of replays.

    Raises:
        FileNotFoundError: If the folder does not exist
        NoValidMatchSetError: If no comparable match set remains
    """
    config = config or get_config()
    matches = load_replays(
        folder,
        pattern=config.loader.file_pattern,
        recursive=config.loader.recursive,
    )
    return analyze_matches(matches, seed=seed, config=config)
