"""
SetSight Pipeline - Set analysis orchestration.

This module handles the complete processing pipeline:
- Replay loading
- Match set filtering
- Stat, narrative and highlight generation
"""

from setsight.pipeline.orchestrator import (
    AnalysisRun,
    SetReport,
    analyze_folder,
    analyze_matches,
    generate_output,
)

__all__ = ["AnalysisRun", "SetReport", "analyze_folder", "analyze_matches", "generate_output"]
