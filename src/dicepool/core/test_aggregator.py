import itertools

from src.dicepool.core import aggregate_dice, count_symbols, sum_counts
from src.dicepool.models import Aggregate, DieRoll, SymbolKind


def test_empty_face_counts_nothing():
    assert count_symbols(()) == Aggregate()


def test_face_total_matches_occurrences():
    face = (SymbolKind.HIT, SymbolKind.HIT, SymbolKind.HOLLOW_SPECIAL)
    counts = count_symbols(face)
    assert counts.hits == 2
    assert counts.hollow_specials == 1
    assert sum(counts.as_dict().values()) == len(face)


def test_sum_is_order_independent():
    parts = [Aggregate(hits=1), Aggregate(blocks=2, specials=1), Aggregate(hollow_hits=3)]
    results = {tuple(sum_counts(*perm).as_dict().items()) for perm in itertools.permutations(parts)}
    assert len(results) == 1


def test_aggregate_dice():
    dice = [
        DieRoll(color="RED", face_index=0, symbols=Aggregate(hits=2)),
        DieRoll(color="BLUE", face_index=1, symbols=Aggregate(blocks=1, specials=1)),
    ]
    assert aggregate_dice(dice) == Aggregate(hits=2, blocks=1, specials=1)
