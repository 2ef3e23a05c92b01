import logging
from typing import Dict, List, Mapping, Sequence

from src.dicepool.core.aggregator import count_symbols
from src.dicepool.core.random_source import RandomSource, draw_face_index
from src.dicepool.models import (
    FACES_PER_DIE,
    Aggregate,
    DieRoll,
    FaceTable,
    FixedDie,
    RollResult,
    normalize_color,
)

logger = logging.getLogger(__name__)

Pool = Mapping[str, int | float]


def clamp_count(raw) -> int:
    """Die counts are truncated to whole numbers; negative or unreadable counts become 0."""
    try:
        count = int(raw)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, count)


def normalize_pool(pool: Pool) -> Dict[str, int]:
    """
    Canonical {COLOR: count} view of a pool. Counts for colors that only
    differ by casing are merged.
    """
    normalized: Dict[str, int] = {}
    for color, raw in pool.items():
        key = normalize_color(color)
        normalized[key] = normalized.get(key, 0) + clamp_count(raw)
    return normalized


# ============================================================
# POOL ROLLER
# ============================================================

def roll_die(color: str, face_table: FaceTable, rng: RandomSource) -> DieRoll | None:
    """Draws one face for a single die; None when the color has no faces."""
    faces = face_table.get(color)
    if faces is None:
        return None
    face_index = draw_face_index(rng, FACES_PER_DIE)
    return DieRoll(
        color=normalize_color(color),
        face_index=face_index,
        symbols=count_symbols(faces[face_index]),
    )


def roll_pool(pool: Pool, face_table: FaceTable, rng: RandomSource) -> Aggregate:
    """
    Rolls every die in the pool and returns only the aggregate.

    Colors missing from the face table are skipped; non-positive counts
    contribute nothing.
    """
    agg = Aggregate()
    for color, count in normalize_pool(pool).items():
        faces = face_table.get(color)
        if faces is None:
            logger.debug("Skipping %d %s dice: color not in face table", count, color)
            continue
        for _ in range(count):
            agg.add(count_symbols(faces[draw_face_index(rng, FACES_PER_DIE)]))
    return agg


def roll_pool_detailed(pool: Pool, face_table: FaceTable, rng: RandomSource) -> RollResult:
    """Rolls the pool keeping one DieRoll per die, in draw order."""
    dice: List[DieRoll] = []
    for color, count in normalize_pool(pool).items():
        if color not in face_table:
            logger.debug("Skipping %d %s dice: color not in face table", count, color)
            continue
        for _ in range(count):
            dice.append(roll_die(color, face_table, rng))

    return RollResult(aggregate=Aggregate.sum(d.symbols for d in dice), dice=dice)


# ============================================================
# FORCED FACES
# ============================================================

def _resolve_fixed(
    pool: Pool,
    fixed_dice: Sequence[FixedDie],
    face_table: FaceTable,
) -> tuple[List[DieRoll], Dict[str, int]]:
    """
    Applies forced faces and returns them with the pool left to roll.
    Each forced die uses up one die of its color; a forced die beyond the
    pool's count still counts, it just leaves nothing to roll.
    """
    remaining = normalize_pool(pool)
    forced: List[DieRoll] = []

    for fixed in fixed_dice:
        color = normalize_color(fixed.color)
        faces = face_table.get(color)
        if faces is None:
            logger.debug("Ignoring fixed %s die: color not in face table", color)
            continue
        face_index = min(FACES_PER_DIE - 1, max(0, int(fixed.face_index)))
        forced.append(DieRoll(
            color=color,
            face_index=face_index,
            symbols=count_symbols(faces[face_index]),
            fixed=True,
        ))
        remaining[color] = max(0, remaining.get(color, 0) - 1)

    return forced, remaining


def roll_pool_with_fixed(
    pool: Pool,
    fixed_dice: Sequence[FixedDie],
    face_table: FaceTable,
    rng: RandomSource,
) -> Aggregate:
    """Like roll_pool, but the listed dice show their forced face instead of a draw."""
    if not fixed_dice:
        return roll_pool(pool, face_table, rng)
    forced, remaining = _resolve_fixed(pool, fixed_dice, face_table)
    agg = Aggregate.sum(d.symbols for d in forced)
    return agg.add(roll_pool(remaining, face_table, rng))


def roll_pool_with_fixed_detailed(
    pool: Pool,
    fixed_dice: Sequence[FixedDie],
    face_table: FaceTable,
    rng: RandomSource,
) -> RollResult:
    """Detailed variant: forced dice come first in the per-die list."""
    if not fixed_dice:
        return roll_pool_detailed(pool, face_table, rng)
    forced, remaining = _resolve_fixed(pool, fixed_dice, face_table)
    rolled = roll_pool_detailed(remaining, face_table, rng)
    dice = forced + rolled.dice
    return RollResult(aggregate=Aggregate.sum(d.symbols for d in dice), dice=dice)
