"""Tests for replay loading and match record parsing."""

import json
import logging

import pytest

from replay_factory import replay_dict
from setsight.analysis.models import MatchRecord
from setsight.core.parser import (
    JsonReplay,
    find_replays,
    load_replays,
    record_from_source,
)


class FakeReplay:
    """In-memory replay source."""

    def __init__(self, data):
        self.data = data

    def get_settings(self):
        return self.data.get("settings")

    def get_stats(self):
        return self.data.get("stats")

    def get_metadata(self):
        return self.data.get("metadata")

    def get_latest_frame(self):
        return self.data.get("latestFrame")

    def get_game_end(self):
        return self.data.get("gameEnd")


class TestMatchRecord:
    """Tests for building records from replay dicts."""

    def test_settings(self):
        record = MatchRecord.from_dict(replay_dict(ports=(1, 4), stage_id=32))

        assert record.settings.stage_id == 32
        assert [p.port for p in record.players] == [1, 4]
        assert [p.player_index for p in record.players] == [0, 3]
        assert record.is_singles

    def test_missing_stat_arrays_are_empty(self):
        record = MatchRecord.from_dict(replay_dict())
        assert record.stats.overall == ()
        assert record.stats.conversions == ()
        assert record.stats.stocks == ()
        assert record.stats.last_frame == 3600

    def test_null_stats_block(self):
        data = replay_dict()
        data["stats"] = None
        assert MatchRecord.from_dict(data).stats.last_frame == 0

    def test_latest_frame_as_list(self):
        """Frame players may arrive as a list indexed by player index."""
        data = replay_dict(ports=(1, 3))
        data["latestFrame"]["players"] = [
            {"post": {"stocksRemaining": 2, "percent": 45.5}},
            None,
            {"post": {"stocksRemaining": 0}},
        ]
        frame = MatchRecord.from_dict(data).latest_frame

        assert frame.for_player(0).stocks_remaining == 2
        assert frame.for_player(0).percent == 45.5
        assert frame.for_player(1) is None
        assert frame.for_player(2).stocks_remaining == 0

    def test_latest_frame_as_mapping(self):
        frame = MatchRecord.from_dict(replay_dict(stocks_remaining=(3, 1))).latest_frame
        assert frame.for_player(1).stocks_remaining == 1

    def test_game_end(self):
        record = MatchRecord.from_dict(replay_dict(game_end_method=7, lras_initiator_index=1))
        assert record.game_end.game_end_method == 7
        assert record.game_end.lras_initiator_index == 1

    def test_conversion_damage(self):
        data = replay_dict(
            conversions=[{"playerIndex": 0, "startPercent": 12.0, "endPercent": 80.5, "moves": None}]
        )
        conversion = MatchRecord.from_dict(data).stats.conversions[0]
        assert conversion.damage == pytest.approx(68.5)
        assert conversion.moves == ()

    def test_record_is_frozen(self):
        record = MatchRecord.from_dict(replay_dict())
        with pytest.raises(AttributeError):
            record.file_path = "other.json"  # type: ignore[misc]


class TestReplaySources:
    def test_record_from_fake_source(self):
        record = record_from_source(FakeReplay(replay_dict(ports=(2, 3))), file_path="mem")
        assert record.settings.port_signature == "2-3"
        assert record.file_path == "mem"

    def test_json_replay(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text(json.dumps(replay_dict(stage_id=8)))

        replay = JsonReplay(path)

        assert replay.get_settings()["stageId"] == 8
        assert replay.get_game_end()["gameEndMethod"] == 2

    def test_json_replay_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonReplay(tmp_path / "missing.json")

    def test_json_replay_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError):
            JsonReplay(path).get_settings()


class TestLoadReplays:
    """Tests for folder scanning."""

    def test_sorted_by_name(self, tmp_path):
        for name in ("b.json", "a.json", "notes.txt"):
            (tmp_path / name).write_text(json.dumps(replay_dict()))

        records = load_replays(tmp_path)

        assert [r.file_path for r in records] == [str(tmp_path / "a.json"), str(tmp_path / "b.json")]

    def test_recursive(self, tmp_path):
        (tmp_path / "day1").mkdir()
        (tmp_path / "day1" / "g1.json").write_text(json.dumps(replay_dict()))
        (tmp_path / "g2.json").write_text(json.dumps(replay_dict()))

        assert len(load_replays(tmp_path)) == 1
        assert len(load_replays(tmp_path, recursive=True)) == 2

    def test_bad_files_skipped_and_logged(self, tmp_path, caplog):
        (tmp_path / "good.json").write_text(json.dumps(replay_dict()))
        (tmp_path / "broken.json").write_text("{")
        (tmp_path / "shapeless.json").write_text(json.dumps({"settings": {"players": [{}]}}))

        with caplog.at_level(logging.ERROR):
            records = load_replays(tmp_path)

        assert len(records) == 1
        assert "broken.json" in caplog.text
        assert "shapeless.json" in caplog.text

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            find_replays(tmp_path / "nope")

    def test_file_instead_of_folder(self, tmp_path):
        path = tmp_path / "file.json"
        path.write_text("{}")
        with pytest.raises(NotADirectoryError):
            find_replays(path)
