import pytest

from src.dicepool.models import COUNTER_NAMES, Aggregate, SymbolKind


class TestSymbolKind:
    @pytest.mark.parametrize("name", ["HOLLOW_HIT", "hollow_hit", "hollow_hits", "hollowHits"])
    def test_parse_accepts_tags_and_counter_names(self, name):
        assert SymbolKind.parse(name) is SymbolKind.HOLLOW_HIT

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            SymbolKind.parse("damage")

    def test_hollow_counterpart(self):
        assert SymbolKind.BLOCK.hollow is SymbolKind.HOLLOW_BLOCK
        assert SymbolKind.HOLLOW_BLOCK.hollow is SymbolKind.HOLLOW_BLOCK
        assert SymbolKind.SPECIAL.counter == "specials"


class TestAggregate:
    def test_six_independent_counters(self):
        assert COUNTER_NAMES == (
            "hits", "blocks", "specials", "hollow_hits", "hollow_blocks", "hollow_specials",
        )

    def test_subtract_clamps_at_zero(self):
        agg = Aggregate(hits=1, specials=2)
        agg.subtract(Aggregate(hits=3, specials=1))
        assert agg.hits == 0
        assert agg.specials == 1

    def test_combine_leaves_operands_untouched(self):
        a = Aggregate(hits=1)
        b = Aggregate(hits=2, hollow_hits=1)
        total = a.combine(b)
        assert total == Aggregate(hits=3, hollow_hits=1)
        assert a == Aggregate(hits=1)
        assert total.total_hits == 4

    def test_from_counts_accepts_any_symbol_name(self):
        agg = Aggregate.from_counts({"HIT": 2, "hollowBlocks": 1, "specials": None})
        assert agg == Aggregate(hits=2, hollow_blocks=1)
