from typing import Dict

from src.dicepool.core.aggregator import count_symbols
from src.dicepool.core.roller import Pool, normalize_pool
from src.dicepool.models import (
    FACES_PER_DIE,
    Face,
    FaceTable,
    RerollValueWeights,
    SymbolKind,
    is_attack_color,
)

# ============================================================
# EXPECTATION ENGINE
# ============================================================

def color_symbol_expectation(faces: tuple[Face, ...], symbol: SymbolKind) -> float:
    """Mean count of one symbol over a die's 8 faces."""
    total = sum(count_symbols(face).get(symbol) for face in faces)
    return total / FACES_PER_DIE


def pool_expected_value(pool: Pool, face_table: FaceTable, symbol: SymbolKind | str) -> float:
    """
    Expected count of `symbol` for a whole pool: per-die expectation of each
    color times its die count, summed over colors. Unknown colors add nothing.
    """
    symbol = SymbolKind.parse(symbol)
    total = 0.0
    for color, count in normalize_pool(pool).items():
        faces = face_table.get(color)
        if faces is None:
            continue
        total += color_symbol_expectation(faces, symbol) * count
    return total


def color_expected_values(face_table: FaceTable, weights: RerollValueWeights) -> Dict[str, float]:
    """Per-color expected weighted value of a single die."""
    expectations: Dict[str, float] = {}
    for color, faces in face_table.faces.items():
        total = sum(weights.value_of(count_symbols(face)) for face in faces)
        expectations[color] = total / FACES_PER_DIE
    return expectations


def compute_die_stats(faces: tuple[Face, ...], color: str) -> Dict[str, float | str]:
    """
    Share of faces (in percent) showing the die's primary symbol and a special.
    Attack colors count faces with a filled hit, the rest faces with a filled block.
    """
    primary = SymbolKind.HIT if is_attack_color(color) else SymbolKind.BLOCK
    total = len(faces)
    primary_faces = sum(1 for face in faces if primary in face)
    special_faces = sum(1 for face in faces if SymbolKind.SPECIAL in face)
    return {
        "primary_label": "Hit" if primary is SymbolKind.HIT else "Block",
        "primary_pct": primary_faces / total * 100 if total else 0.0,
        "secondary_label": "Special",
        "secondary_pct": special_faces / total * 100 if total else 0.0,
    }
