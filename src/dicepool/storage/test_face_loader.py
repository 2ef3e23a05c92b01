import json

import pytest

from src.dicepool.exceptions import FaceTableError
from src.dicepool.models import STANDARD_COLORS, SymbolKind
from src.dicepool.scenarios import DEMO_FACES, create_demo_face_table
from src.dicepool.storage import load_face_table, save_face_table


def test_load_face_table(tmp_path):
    path = tmp_path / "faces.json"
    path.write_text(json.dumps({"Red": [{"HIT": 1}] * 2 + [{}] * 6}))

    table = load_face_table(path)
    assert table.colors == ["RED"]
    assert table.get("RED")[0] == (SymbolKind.HIT,)


def test_missing_file(tmp_path):
    with pytest.raises(FaceTableError, match="Cannot read"):
        load_face_table(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "faces.json"
    path.write_text("{not json")
    with pytest.raises(FaceTableError, match="not valid JSON") as exc:
        load_face_table(path)
    assert isinstance(exc.value.__cause__, json.JSONDecodeError)


def test_top_level_must_be_object(tmp_path):
    path = tmp_path / "faces.json"
    path.write_text("[]")
    with pytest.raises(FaceTableError):
        load_face_table(path)


def test_required_colors_checked_on_load(tmp_path):
    path = tmp_path / "faces.json"
    path.write_text(json.dumps({"RED": [[]] * 8}))
    with pytest.raises(FaceTableError, match="Missing dice color"):
        load_face_table(path, required_colors=STANDARD_COLORS)


def test_saved_table_loads_back(tmp_path):
    table = create_demo_face_table()
    path = save_face_table(table, tmp_path / "nested" / "faces.json")
    assert load_face_table(path, required_colors=STANDARD_COLORS).to_dict() == table.to_dict()


def test_demo_table_has_all_standard_colors():
    assert set(DEMO_FACES) == set(STANDARD_COLORS)
    assert all(len(faces) == 8 for faces in DEMO_FACES.values())
