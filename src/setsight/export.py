"""
Export Functionality for SetSight

Provides output formats for a set report:
- JSON (default): the complete report, same shape as ``output.json``
- CSV: one row per stat with each player's simple value side by side
- Games CSV: one row per game with stage, duration and each player's result

JSON output carries no timestamps, so the same match set and seed always
produce byte-identical files.
"""

import json
import logging
from pathlib import Path

import pandas as pd

from setsight.pipeline.orchestrator import SetReport

logger = logging.getLogger(__name__)


# ============================================================================
# JSON Export
# ============================================================================


def export_to_json(
    report: SetReport,
    output_path: Path | None = None,
    indent: int | None = None,
) -> str:
    """
    Export a set report to JSON.

    Args:
        report: Report from generate_output()
        output_path: Optional path to write the file
        indent: JSON indentation level, compact when None

    Returns:
        JSON string
    """
    json_str = json.dumps(report.to_dict(), indent=indent, ensure_ascii=False)

    if output_path:
        output_path.write_text(json_str, encoding="utf-8")
        logger.info(f"Exported JSON to: {output_path}")

    return json_str


# ============================================================================
# Tabular Views
# ============================================================================


def summary_frame(report: SetReport) -> pd.DataFrame:
    """One row per stat; a ``port_<n>`` column per player holding the simple text."""
    rows = []
    for output in report.summary:
        row = {
            "id": str(output.id),
            "name": output.definition.display_name,
            "better": str(output.definition.better_direction),
        }
        for result in output.results:
            row[f"port_{result.port}"] = result.simple.text
        rows.append(row)
    return pd.DataFrame(rows)


def games_frame(report: SetReport) -> pd.DataFrame:
    """One row per game with both players flattened into columns."""
    rows = []
    for number, game in enumerate(report.games, start=1):
        row = {
            "game": number,
            "stage": game.stage_name,
            "start_time": game.start_time,
            "duration": game.duration,
        }
        for player in game.players:
            prefix = f"port_{player.port}"
            row[f"{prefix}_character"] = player.character_name
            row[f"{prefix}_nametag"] = player.nametag
            row[f"{prefix}_result"] = player.outcome
        rows.append(row)
    return pd.DataFrame(rows)


# ============================================================================
# CSV Export
# ============================================================================


def export_summary_to_csv(
    report: SetReport,
    output_path: Path | None = None,
    delimiter: str = ",",
) -> str:
    """
    Export the stat summary to CSV.

    Args:
        report: Report from generate_output()
        output_path: Optional path to write the file
        delimiter: CSV delimiter character

    Returns:
        CSV string
    """
    csv_str = summary_frame(report).to_csv(index=False, sep=delimiter, lineterminator="\n")

    if output_path:
        output_path.write_text(csv_str, encoding="utf-8")
        logger.info(f"Exported CSV to: {output_path}")

    return csv_str


def export_games_to_csv(
    report: SetReport,
    output_path: Path | None = None,
    delimiter: str = ",",
) -> str:
    """Export the per-game narrative to CSV, one row per game."""
    csv_str = games_frame(report).to_csv(index=False, sep=delimiter, lineterminator="\n")

    if output_path:
        output_path.write_text(csv_str, encoding="utf-8")
        logger.info(f"Exported games CSV to: {output_path}")

    return csv_str
