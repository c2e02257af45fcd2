"""
SetSight - Melee Set Analyzer

Computes head-to-head statistics for two players across a batch of parsed
Slippi replays: openings per kill, damage per opening, earliest kills,
latest deaths, most common kill moves and more.

Usage:
    from setsight import analyze_folder

    run = analyze_folder("replays/", seed=42)
    for stat in run.report.summary:
        print(stat.definition.display_name, [r.simple.text for r in stat.results])
"""

__version__ = "0.1.0"
__author__ = "SetSight Contributors"


def __getattr__(name):
    """Lazy import for heavy dependencies."""
    if name == "MatchRecord":
        from setsight.analysis.models import MatchRecord
        return MatchRecord
    elif name == "filter_matches":
        from setsight.analysis.filtering import filter_matches
        return filter_matches
    elif name == "NoValidMatchSetError":
        from setsight.analysis.filtering import NoValidMatchSetError
        return NoValidMatchSetError
    elif name == "STAT_CATALOGUE":
        from setsight.analysis.catalogue import STAT_CATALOGUE
        return STAT_CATALOGUE
    elif name == "generate_output":
        from setsight.pipeline.orchestrator import generate_output
        return generate_output
    elif name == "analyze_folder":
        from setsight.pipeline.orchestrator import analyze_folder
        return analyze_folder
    elif name == "load_replays":
        from setsight.core.parser import load_replays
        return load_replays
    raise AttributeError(f"module 'setsight' has no attribute '{name}'")


__all__ = [
    "__version__",
    "MatchRecord",
    "filter_matches",
    "NoValidMatchSetError",
    "STAT_CATALOGUE",
    "generate_output",
    "analyze_folder",
    "load_replays",
]
