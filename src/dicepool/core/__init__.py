from src.dicepool.core.aggregator import aggregate_dice, count_symbols, sum_counts
from src.dicepool.core.expectation import (
    color_expected_values,
    compute_die_stats,
    pool_expected_value,
)
from src.dicepool.core.pipeline import Pipeline, build_pipeline, serialize_pipeline
from src.dicepool.core.random_source import RandomSource, scripted_source, seeded_source
from src.dicepool.core.reroll_resolver import (
    select_dice_to_reroll,
    should_reroll,
    weights_for_priority,
)
from src.dicepool.core.roller import (
    roll_pool,
    roll_pool_detailed,
    roll_pool_with_fixed,
    roll_pool_with_fixed_detailed,
)
from src.dicepool.core.rules_engine import RulesEngine
from src.dicepool.core.state_effects import apply_cancellation, apply_state_effects
from src.dicepool.models import FaceTable


def initialize_rules_engine(face_table: FaceTable, seed: int | None = None) -> RulesEngine:
    """Build a RulesEngine with its own seeded random source."""
    return RulesEngine(face_table=face_table, rng=seeded_source(seed))


__all__ = [
    'RulesEngine',
    'initialize_rules_engine',
    'RandomSource',
    'seeded_source',
    'scripted_source',
    'count_symbols',
    'sum_counts',
    'aggregate_dice',
    'roll_pool',
    'roll_pool_detailed',
    'roll_pool_with_fixed',
    'roll_pool_with_fixed_detailed',
    'pool_expected_value',
    'color_expected_values',
    'compute_die_stats',
    'should_reroll',
    'weights_for_priority',
    'select_dice_to_reroll',
    'apply_cancellation',
    'apply_state_effects',
    'Pipeline',
    'serialize_pipeline',
    'build_pipeline',
]
