"""
Storage layer for the dice pool engine.

Provides:
- JSON face table files: load once, validate, hand a read-only FaceTable to the engine
"""

from src.dicepool.storage.face_loader import load_face_table, save_face_table, to_json, from_json

__all__ = [
    "load_face_table",
    "save_face_table",
    "to_json",
    "from_json",
]
