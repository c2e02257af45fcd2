"""
Data models for set analysis.

Contains the immutable match record built from a parsed replay and the
result types produced by the stat catalogue, narrative and highlight
composers. Every type that ends up in the output file has a ``to_dict``
producing the camelCase shape of ``output.json``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, is_dataclass
from typing import Any

from setsight.core.constants import SINGLES_PLAYER_COUNT, BetterDirection, StatId, ValueType

# =============================================================================
# Helpers
# =============================================================================


def _as_list(value: Any) -> list:
    """Missing or null arrays in a replay are treated as empty."""
    if value is None:
        return []
    return list(value)


def _opt_int(value: Any) -> int | None:
    return int(value) if value is not None else None


def _opt_float(value: Any) -> float | None:
    return float(value) if value is not None else None


def to_plain(value: Any) -> Any:
    """Convert model objects (or nested collections of them) to plain data."""
    if hasattr(value, "to_dict") and is_dataclass(value) and not isinstance(value, type):
        return value.to_dict()
    elif isinstance(value, Mapping):
        return {k: to_plain(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    else:
        return value


# =============================================================================
# Match Record (replay parser output)
# =============================================================================


@dataclass(frozen=True)
class RatioObservation:
    """One per-match count/total pair from the replay's overall stats."""

    count: float = 0.0
    total: float = 0.0
    ratio: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> RatioObservation:
        if not data:
            return cls()
        return cls(
            count=float(data.get("count") or 0),
            total=float(data.get("total") or 0),
            ratio=_opt_float(data.get("ratio")),
        )


@dataclass(frozen=True)
class OverallStats:
    """Precomputed per-player ratios for a single match."""

    player_index: int
    openings_per_kill: RatioObservation = field(default_factory=RatioObservation)
    damage_per_opening: RatioObservation = field(default_factory=RatioObservation)
    neutral_win_ratio: RatioObservation = field(default_factory=RatioObservation)
    inputs_per_minute: RatioObservation = field(default_factory=RatioObservation)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OverallStats:
        return cls(
            player_index=int(data["playerIndex"]),
            openings_per_kill=RatioObservation.from_dict(data.get("openingsPerKill")),
            damage_per_opening=RatioObservation.from_dict(data.get("damagePerOpening")),
            neutral_win_ratio=RatioObservation.from_dict(data.get("neutralWinRatio")),
            inputs_per_minute=RatioObservation.from_dict(data.get("inputsPerMinute")),
        )


@dataclass(frozen=True)
class MoveLanded:
    """A single hit inside a conversion."""

    move_id: int
    frame: int | None = None
    hit_count: int | None = None
    damage: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MoveLanded:
        return cls(
            move_id=int(data["moveId"]),
            frame=_opt_int(data.get("frame")),
            hit_count=_opt_int(data.get("hitCount")),
            damage=_opt_float(data.get("damage")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "moveId": self.move_id,
            "frame": self.frame,
            "hitCount": self.hit_count,
            "damage": self.damage,
        }


@dataclass(frozen=True)
class Conversion:
    """A punish sequence credited to ``player_index``."""

    player_index: int
    did_kill: bool = False
    opening_type: str | None = None
    start_percent: float = 0.0
    end_percent: float | None = None
    start_frame: int | None = None
    end_frame: int | None = None
    moves: tuple[MoveLanded, ...] = ()

    @property
    def damage(self) -> float | None:
        """Percent dealt over the punish, None while it has no end percent."""
        if self.end_percent is None:
            return None
        return self.end_percent - self.start_percent

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Conversion:
        return cls(
            player_index=int(data["playerIndex"]),
            did_kill=bool(data.get("didKill", False)),
            opening_type=data.get("openingType"),
            start_percent=float(data.get("startPercent") or 0),
            end_percent=_opt_float(data.get("endPercent")),
            start_frame=_opt_int(data.get("startFrame")),
            end_frame=_opt_int(data.get("endFrame")),
            moves=tuple(MoveLanded.from_dict(m) for m in _as_list(data.get("moves"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerIndex": self.player_index,
            "didKill": self.did_kill,
            "openingType": self.opening_type,
            "startPercent": self.start_percent,
            "endPercent": self.end_percent,
            "startFrame": self.start_frame,
            "endFrame": self.end_frame,
            "moves": [m.to_dict() for m in self.moves],
        }


@dataclass(frozen=True)
class Stock:
    """One life of a player; ``end_percent`` is None if it never ended."""

    player_index: int
    end_percent: float | None = None
    start_frame: int | None = None
    end_frame: int | None = None
    count: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Stock:
        return cls(
            player_index=int(data["playerIndex"]),
            end_percent=_opt_float(data.get("endPercent")),
            start_frame=_opt_int(data.get("startFrame")),
            end_frame=_opt_int(data.get("endFrame")),
            count=_opt_int(data.get("count")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerIndex": self.player_index,
            "endPercent": self.end_percent,
            "startFrame": self.start_frame,
            "endFrame": self.end_frame,
            "count": self.count,
        }


@dataclass(frozen=True)
class MatchStats:
    """The precomputed stats block of a replay."""

    overall: tuple[OverallStats, ...] = ()
    conversions: tuple[Conversion, ...] = ()
    stocks: tuple[Stock, ...] = ()
    last_frame: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MatchStats:
        data = data or {}
        return cls(
            overall=tuple(OverallStats.from_dict(o) for o in _as_list(data.get("overall"))),
            conversions=tuple(Conversion.from_dict(c) for c in _as_list(data.get("conversions"))),
            stocks=tuple(Stock.from_dict(s) for s in _as_list(data.get("stocks"))),
            last_frame=int(data.get("lastFrame") or 0),
        )


@dataclass(frozen=True)
class PlayerSettings:
    """Player slot configuration from the game settings."""

    port: int
    player_index: int
    character_id: int | None = None
    character_color: int | None = None
    nametag: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlayerSettings:
        return cls(
            port=int(data["port"]),
            player_index=int(data["playerIndex"]),
            character_id=_opt_int(data.get("characterId")),
            character_color=_opt_int(data.get("characterColor")),
            nametag=data.get("nametag") or "",
        )


@dataclass(frozen=True)
class GameSettings:
    stage_id: int | None = None
    players: tuple[PlayerSettings, ...] = ()

    @property
    def port_signature(self) -> str:
        """Ports in player order joined with dashes, e.g. ``"1-2"``."""
        return "-".join(str(p.port) for p in self.players)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> GameSettings:
        data = data or {}
        return cls(
            stage_id=_opt_int(data.get("stageId")),
            players=tuple(PlayerSettings.from_dict(p) for p in _as_list(data.get("players"))),
        )


@dataclass(frozen=True)
class MatchMetadata:
    start_at: str | None = None
    played_on: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> MatchMetadata:
        data = data or {}
        return cls(start_at=data.get("startAt"), played_on=data.get("playedOn"))


@dataclass(frozen=True)
class PlayerFrameState:
    """Post-frame state of one player at the last observed frame."""

    player_index: int
    stocks_remaining: int | None = None
    percent: float | None = None


@dataclass(frozen=True)
class LatestFrame:
    frame: int | None = None
    players: tuple[PlayerFrameState, ...] = ()

    def for_player(self, player_index: int) -> PlayerFrameState | None:
        for state in self.players:
            if state.player_index == player_index:
                return state
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LatestFrame:
        if not data:
            return cls()

        # Slippi keys frame players by player index, either as a sparse list
        # or as an object with string keys once serialized.
        raw_players = data.get("players") or {}
        if isinstance(raw_players, Mapping):
            items = [(int(k), v) for k, v in raw_players.items()]
        else:
            items = list(enumerate(raw_players))

        players = []
        for index, frame_data in items:
            if not frame_data:
                continue
            post = frame_data.get("post") or {}
            players.append(
                PlayerFrameState(
                    player_index=index,
                    stocks_remaining=_opt_int(post.get("stocksRemaining")),
                    percent=_opt_float(post.get("percent")),
                )
            )
        return cls(frame=_opt_int(data.get("frame")), players=tuple(players))


@dataclass(frozen=True)
class GameEnd:
    game_end_method: int | None = None
    lras_initiator_index: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> GameEnd | None:
        if data is None:
            return None
        return cls(
            game_end_method=_opt_int(data.get("gameEndMethod")),
            lras_initiator_index=_opt_int(data.get("lrasInitiatorIndex")),
        )


@dataclass(frozen=True)
class MatchRecord:
    """One parsed replay, read-only for the duration of a run."""

    settings: GameSettings
    stats: MatchStats = field(default_factory=MatchStats)
    metadata: MatchMetadata = field(default_factory=MatchMetadata)
    latest_frame: LatestFrame = field(default_factory=LatestFrame)
    game_end: GameEnd | None = None
    file_path: str | None = None

    @property
    def players(self) -> tuple[PlayerSettings, ...]:
        return self.settings.players

    @property
    def is_singles(self) -> bool:
        return len(self.settings.players) == SINGLES_PLAYER_COUNT

    def player(self, player_index: int) -> PlayerSettings | None:
        for player in self.settings.players:
            if player.player_index == player_index:
                return player
        return None

    def overall_for(self, player_index: int) -> OverallStats | None:
        for overall in self.stats.overall:
            if overall.player_index == player_index:
                return overall
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], file_path: str | None = None) -> MatchRecord:
        """
        Build a record from the JSON shape of a parsed Slippi replay.

        Args:
            data: Mapping with ``settings``, ``stats``, ``metadata``,
                ``latestFrame`` and ``gameEnd`` keys (camelCase)
            file_path: Source file, used for exclusion reporting

        Returns:
            MatchRecord
        """
        return cls(
            settings=GameSettings.from_dict(data.get("settings")),
            stats=MatchStats.from_dict(data.get("stats")),
            metadata=MatchMetadata.from_dict(data.get("metadata")),
            latest_frame=LatestFrame.from_dict(data.get("latestFrame")),
            game_end=GameEnd.from_dict(data.get("gameEnd")),
            file_path=file_path or data.get("filePath"),
        )


# =============================================================================
# Stat Catalogue Types
# =============================================================================


@dataclass(frozen=True)
class PlayerOrientation:
    """A (subject, opponent) pair of player indices."""

    subject_index: int
    opponent_index: int

    def mirrored(self) -> PlayerOrientation:
        return PlayerOrientation(self.opponent_index, self.subject_index)


@dataclass(frozen=True)
class RatioAccumulator:
    """Summed count/total over several matches."""

    count: float = 0
    total: float = 0
    ratio: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "total": self.total, "ratio": self.ratio}


@dataclass(frozen=True)
class MoveCount:
    """How often a move ended (or opened) a conversion."""

    move_id: int
    name: str
    short_name: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "id": self.move_id,
            "name": self.name,
            "shortName": self.short_name,
        }


@dataclass(frozen=True)
class SimpleValue:
    """Human-readable projection of a stat; ``number`` is None when undefined."""

    text: str
    number: float | None = None

    def get(self, value_type: ValueType) -> str | float | None:
        return self.text if value_type == ValueType.TEXT else self.number

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "number": self.number}


@dataclass(frozen=True)
class StatResult:
    result: Any
    simple: SimpleValue

    def to_dict(self) -> dict[str, Any]:
        return {"result": to_plain(self.result), "simple": self.simple.to_dict()}


# (matches, subject_index, opponent_index, rounding_digits) -> StatResult
StatCompute = Callable[[Sequence[MatchRecord], int, int, int], StatResult]


@dataclass(frozen=True)
class StatDefinition:
    """A registered metric; ``compute`` is a pure function."""

    id: StatId
    display_name: str
    value_type: ValueType
    compute: StatCompute
    better_direction: BetterDirection = BetterDirection.NONE
    rounding_digits: int = 0

    def describe(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.display_name,
            "type": str(self.value_type),
            "betterDirection": str(self.better_direction),
            "recommendedRounding": self.rounding_digits,
        }

    def evaluate(self, matches: Sequence[MatchRecord], subject_index: int, opponent_index: int) -> StatResult:
        """Run ``compute`` for one orientation with this definition's rounding."""
        return self.compute(matches, subject_index, opponent_index, self.rounding_digits)


@dataclass(frozen=True)
class PortResult:
    """A stat result for one orientation, tagged with the subject's port."""

    port: int
    stat: StatResult

    @property
    def simple(self) -> SimpleValue:
        return self.stat.simple

    def to_dict(self) -> dict[str, Any]:
        return {**self.stat.to_dict(), "port": self.port}


@dataclass(frozen=True)
class StatOutput:
    """A stat definition decorated with one result per orientation."""

    definition: StatDefinition
    results: tuple[PortResult, ...]

    @property
    def id(self) -> StatId:
        return self.definition.id

    def to_dict(self) -> dict[str, Any]:
        return {**self.definition.describe(), "results": [r.to_dict() for r in self.results]}


@dataclass(frozen=True)
class HighlightRecord:
    """A stat output with results reduced to bare simple values."""

    definition: StatDefinition
    results: tuple[str | float | None, ...]

    @property
    def id(self) -> StatId:
        return self.definition.id

    def to_dict(self) -> dict[str, Any]:
        return {**self.definition.describe(), "results": list(self.results)}


# =============================================================================
# Narrative Types
# =============================================================================


@dataclass(frozen=True)
class PlayerSummary:
    port: int
    character_id: int | None
    character_color: int | None
    nametag: str
    character_name: str
    character_color_name: str
    outcome: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "port": self.port,
            "characterId": self.character_id,
            "characterColor": self.character_color,
            "nametag": self.nametag,
            "characterName": self.character_name,
            "characterColorName": self.character_color_name,
            "gameResult": self.outcome,
        }


@dataclass(frozen=True)
class GameSummary:
    """Human-facing summary of one match of the set."""

    stage_id: int | None
    stage_name: str
    players: tuple[PlayerSummary, ...]
    start_time: str | None
    duration: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": {"id": self.stage_id, "name": self.stage_name},
            "players": [p.to_dict() for p in self.players],
            "startTime": self.start_time,
            "duration": self.duration,
        }
