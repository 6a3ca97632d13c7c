import json

from voxel_dungeon import logging_utils


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", 10)
    logging_utils.get_logger("t").info(event="room placed", rooms=3, skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "event=room_placed" in out
    assert "rooms=3" in out
    assert "skipped" not in out
    assert "logger=t" in out


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", 10)
    logging_utils.get_logger("j").debug(event="x", coord=(1, 2, 3))
    rec = json.loads(capsys.readouterr().out)
    assert rec["level"] == "debug"
    assert rec["event"] == "x"
    assert rec["logger"] == "j"


def test_threshold_and_stderr(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", 30)
    lg = logging_utils.get_logger("lvl")
    lg.info(event="hidden")
    lg.error(event="shown")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=shown" in captured.err


def test_set_level(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", 20)
    logging_utils.set_level("ERROR")
    assert logging_utils.CURRENT_LEVEL == 40


def test_logger_cache():
    assert logging_utils.get_logger("same") is logging_utils.get_logger("same")


def test_coordinates_written_compactly(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", 10)
    logging_utils.get_logger("c").debug(event="barriers_attached", coord=(2, 3, 2), count=5)
    out = capsys.readouterr().out.strip()
    assert "coord=2,3,2" in out
    assert len(out.split(" ")) == 6
