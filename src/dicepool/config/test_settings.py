from pathlib import Path

from src.dicepool.config.settings import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.faces_path == Path("data") / "dice_faces.json"
    assert s.seed is None
    assert "BLACK" in s.required_colors


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DICEPOOL_SEED", "7")
    monkeypatch.setenv("DICEPOOL_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DICEPOOL_DATA_DIR", "/srv/dice")
    s = Settings(_env_file=None)
    assert s.seed == 7
    assert s.log_level == "DEBUG"
    assert s.faces_path == Path("/srv/dice/dice_faces.json")
