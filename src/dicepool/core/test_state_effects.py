from src.dicepool.core import aggregate_dice, apply_state_effects
from src.dicepool.core.state_effects import (
    DISARMED,
    VULNERABLE,
    apply_disarmed,
    apply_vulnerable,
    select_die_to_cancel,
)
from src.dicepool.models import Aggregate, DieRoll, StateEffects


def _roll(*symbols):
    dice = [DieRoll(color="RED", face_index=i, symbols=s) for i, s in enumerate(symbols)]
    return dice, aggregate_dice(dice)


def test_disarmed_cancels_die_with_most_hits():
    dice, agg = _roll(Aggregate(hits=1, specials=1), Aggregate(hits=2))
    assert apply_disarmed(dice, agg) == 1
    assert agg.hits == 1
    assert agg.specials == 1
    assert dice[1].symbols == Aggregate()


def test_disarmed_without_filled_hits_is_noop():
    dice, agg = _roll(Aggregate(hollow_hits=2), Aggregate(blocks=1))
    before = agg.copy()
    assert apply_disarmed(dice, agg) is None
    assert agg == before


def test_cancel_removes_hollow_symbols_too():
    dice, agg = _roll(Aggregate(hits=1, hollow_hits=1, hollow_specials=1), Aggregate(hollow_hits=1))
    apply_disarmed(dice, agg)
    assert agg == Aggregate(hollow_hits=1)


def test_specials_break_a_tie_on_hits():
    dice, _ = _roll(Aggregate(hits=1), Aggregate(hits=1, specials=1))
    assert select_die_to_cancel(dice, DISARMED) == 1


def test_full_tie_keeps_earliest_die():
    dice, _ = _roll(Aggregate(blocks=2, specials=1), Aggregate(blocks=2, specials=1))
    assert select_die_to_cancel(dice, VULNERABLE) == 0


def test_vulnerable_cancels_die_with_most_blocks():
    dice, agg = _roll(Aggregate(blocks=1), Aggregate(blocks=3, hollow_blocks=1))
    assert apply_vulnerable(dice, agg) == 1
    assert agg == Aggregate(blocks=1)


def test_disarmed_runs_before_vulnerable():
    dice, agg = _roll(Aggregate(hits=1, blocks=2), Aggregate(blocks=1))
    apply_state_effects(dice, agg, StateEffects(disarmed=True, vulnerable=True))
    # die 0 lost its blocks to Disarmed, so Vulnerable takes die 1
    assert agg == Aggregate()
    assert all(d.symbols == Aggregate() for d in dice)


def test_subtraction_clamps_at_zero():
    dice = [DieRoll(color="RED", face_index=0, symbols=Aggregate(hits=2, specials=1))]
    agg = Aggregate(hits=1)
    apply_disarmed(dice, agg)
    assert agg == Aggregate()
