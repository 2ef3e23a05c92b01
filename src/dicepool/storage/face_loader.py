"""
Face table files.
Reads and writes the {COLOR: [face x 8]} JSON document the engine rolls against.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from src.dicepool.exceptions import FaceTableError
from src.dicepool.models import FaceTable

logger = logging.getLogger(__name__)


def to_json(obj: Any) -> str:
    """Serialize to JSON string for storage."""
    return json.dumps(obj, indent=2)


def from_json(s: str | None) -> Any:
    """Deserialize JSON string from storage."""
    if s is None:
        return None
    return json.loads(s)


def load_face_table(path: Path | str, required_colors: Iterable[str] | None = None) -> FaceTable:
    """
    Load and validate a face table file.

    Args:
        path: JSON file mapping each color to its 8 faces
        required_colors: Colors that must be present, e.g. the six standard dice

    Raises:
        FaceTableError: If the file can't be read, isn't valid JSON, or fails validation
    """
    path = Path(path)
    try:
        raw = from_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FaceTableError(f"Cannot read face table {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FaceTableError(f"Face table {path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise FaceTableError(f"Face table {path} must be a JSON object of color -> faces")

    table = FaceTable.from_mapping(raw, required_colors=required_colors)
    logger.info("Loaded face table from %s (%d colors)", path, len(table.colors))
    return table


def save_face_table(table: FaceTable, path: Path | str) -> Path:
    """Write a face table as JSON, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(table.to_dict()), encoding="utf-8")
    logger.debug("Saved face table to %s", path)
    return path
