"""
Replay Loading for SetSight

Reads parsed Slippi replays from disk. A replay is a JSON document holding
the output of a Slippi parser:

    {
        "settings":    {...},   # players, ports, stage
        "stats":       {...},   # overall, conversions, stocks, lastFrame
        "metadata":    {...},   # startAt
        "latestFrame": {...},   # per-player post-frame state
        "gameEnd":     {...}    # gameEndMethod, lrasInitiatorIndex
    }

Any object implementing ReplaySource can stand in for JsonReplay.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from setsight.analysis.models import MatchRecord

logger = logging.getLogger(__name__)


class ReplaySource(Protocol):
    """Accessors a parsed replay must provide."""

    def get_settings(self) -> dict[str, Any] | None: ...

    def get_stats(self) -> dict[str, Any] | None: ...

    def get_metadata(self) -> dict[str, Any] | None: ...

    def get_latest_frame(self) -> dict[str, Any] | None: ...

    def get_game_end(self) -> dict[str, Any] | None: ...


class JsonReplay:
    """
    A parsed replay stored as JSON.

    The file is read lazily on first access and cached.
    """

    def __init__(self, replay_path: str | Path):
        self.replay_path = Path(replay_path)
        if not self.replay_path.exists():
            raise FileNotFoundError(f"Replay file not found: {replay_path}")

        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            with open(self.replay_path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"Expected a JSON object in {self.replay_path}")
            self._data = data
        return self._data

    def get_settings(self) -> dict[str, Any] | None:
        return self._load().get("settings")

    def get_stats(self) -> dict[str, Any] | None:
        return self._load().get("stats")

    def get_metadata(self) -> dict[str, Any] | None:
        return self._load().get("metadata")

    def get_latest_frame(self) -> dict[str, Any] | None:
        return self._load().get("latestFrame")

    def get_game_end(self) -> dict[str, Any] | None:
        return self._load().get("gameEnd")


def record_from_source(source: ReplaySource, file_path: str | None = None) -> MatchRecord:
    """Build an immutable MatchRecord from any replay source."""
    return MatchRecord.from_dict(
        {
            "settings": source.get_settings(),
            "stats": source.get_stats(),
            "metadata": source.get_metadata(),
            "latestFrame": source.get_latest_frame(),
            "gameEnd": source.get_game_end(),
        },
        file_path=file_path,
    )


def find_replays(folder: Path, pattern: str = "*.json", recursive: bool = False) -> list[Path]:
    """List replay files in a folder, sorted by path."""
    if not folder.exists():
        raise FileNotFoundError(f"Replay folder not found: {folder}")
    if not folder.is_dir():
        raise NotADirectoryError(f"Not a folder: {folder}")

    matches = folder.rglob(pattern) if recursive else folder.glob(pattern)
    return sorted(p for p in matches if p.is_file())


def load_replays(
    folder: str | Path,
    pattern: str = "*.json",
    recursive: bool = False,
) -> list[MatchRecord]:
    """
    Load every replay in a folder.

    Files that cannot be read or do not have the expected shape are logged
    and skipped; they never abort the batch.

    Args:
        folder: Folder containing replay JSON files
        pattern: Glob pattern selecting replay files
        recursive: Whether to descend into sub-folders

    Returns:
        MatchRecords in file-name order
    """
    folder = Path(folder)
    logger.info(f"Reading files in {folder}...")

    records = []
    for path in find_replays(folder, pattern, recursive):
        try:
            records.append(record_from_source(JsonReplay(path), file_path=str(path)))
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Skipping unreadable replay {path.name}: {e}")

    logger.info(f"Loaded {len(records)} replays")
    return records
