"""Per-game summary of a set: stage, players, outcome and duration."""

from __future__ import annotations

from collections.abc import Sequence

from setsight.analysis.models import GameSummary, MatchRecord, PlayerSummary
from setsight.analysis.outcome import resolve_outcome
from setsight.core.constants import FRAMES_PER_SECOND
from setsight.core.lookup import get_character_color_name, get_character_name, get_stage_name


def format_duration(frame_count: int, fps: int = FRAMES_PER_SECOND) -> str:
    """
    Render a frame count as ``m:ss``.

    Minutes are not wrapped at the hour; negative counts render as ``0:00``.
    """
    total_seconds = max(0, int(frame_count // fps))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


def _start_key(match: MatchRecord) -> tuple[bool, str]:
    start_at = match.metadata.start_at
    return (start_at is None, start_at or "")


def summarize_game(match: MatchRecord) -> GameSummary:
    players = tuple(
        PlayerSummary(
            port=player.port,
            character_id=player.character_id,
            character_color=player.character_color,
            nametag=player.nametag,
            character_name=get_character_name(player.character_id),
            character_color_name=get_character_color_name(player.character_id, player.character_color),
            outcome=str(resolve_outcome(match, player.player_index)),
        )
        for player in match.settings.players
    )
    return GameSummary(
        stage_id=match.settings.stage_id,
        stage_name=get_stage_name(match.settings.stage_id),
        players=players,
        start_time=match.metadata.start_at,
        duration=format_duration(match.stats.last_frame),
    )


def compose_narrative(matches: Sequence[MatchRecord]) -> list[GameSummary]:
    """Summaries of every match, earliest start first (undated matches last)."""
    return [summarize_game(match) for match in sorted(matches, key=_start_key)]
