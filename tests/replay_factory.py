"""Builders for parsed-replay dicts and MatchRecords used across the tests."""

from setsight.analysis.models import MatchRecord


def ratio(count: float, total: float) -> dict:
    return {"count": count, "total": total, "ratio": count / total if total else None}


def overall(
    player_index: int,
    *,
    openings_per_kill=(0, 0),
    damage_per_opening=(0, 0),
    neutral_win_ratio=(0, 0),
    inputs_per_minute=(0, 0),
) -> dict:
    return {
        "playerIndex": player_index,
        "openingsPerKill": ratio(*openings_per_kill),
        "damagePerOpening": ratio(*damage_per_opening),
        "neutralWinRatio": ratio(*neutral_win_ratio),
        "inputsPerMinute": ratio(*inputs_per_minute),
    }


def conversion(
    player_index: int,
    moves=(),
    *,
    did_kill: bool = False,
    opening_type: str = "neutral-win",
    start_percent: float = 0.0,
    end_percent: float | None = None,
) -> dict:
    return {
        "playerIndex": player_index,
        "didKill": did_kill,
        "openingType": opening_type,
        "startPercent": start_percent,
        "endPercent": end_percent,
        "moves": [{"moveId": move_id} for move_id in moves],
    }


def stock(player_index: int, end_percent: float | None) -> dict:
    return {"playerIndex": player_index, "endPercent": end_percent}


def replay_dict(
    ports=(1, 2),
    *,
    stage_id: int = 31,
    characters=(2, 20),
    overall_stats=None,
    conversions=None,
    stocks=None,
    last_frame: int = 3600,
    start_at: str | None = "2020-01-01T20:00:00Z",
    stocks_remaining=(2, 0),
    game_end_method: int | None = 2,
    lras_initiator_index: int | None = None,
) -> dict:
    """A parsed Slippi replay; player index is port - 1 like real replays."""
    players = [
        {
            "port": port,
            "playerIndex": port - 1,
            "characterId": characters[i % len(characters)],
            "characterColor": 0,
            "nametag": "",
        }
        for i, port in enumerate(ports)
    ]
    frame_players = {
        str(port - 1): {"post": {"stocksRemaining": stocks_remaining[i % len(stocks_remaining)]}}
        for i, port in enumerate(ports)
    }
    game_end = None
    if game_end_method is not None:
        game_end = {"gameEndMethod": game_end_method, "lrasInitiatorIndex": lras_initiator_index}

    stats = {"lastFrame": last_frame}
    if overall_stats is not None:
        stats["overall"] = overall_stats
    if conversions is not None:
        stats["conversions"] = conversions
    if stocks is not None:
        stats["stocks"] = stocks

    return {
        "settings": {"stageId": stage_id, "players": players},
        "stats": stats,
        "metadata": {"startAt": start_at},
        "latestFrame": {"frame": last_frame, "players": frame_players},
        "gameEnd": game_end,
    }


def make_match(file_path: str | None = None, **kwargs) -> MatchRecord:
    return MatchRecord.from_dict(replay_dict(**kwargs), file_path=file_path)
