import logging

import pytest

from src.dicepool.core import Pipeline, build_pipeline, serialize_pipeline
from src.dicepool.core.pipeline import (
    AddSymbolsStep,
    CombatSwitchStep,
    ElitePromotionStep,
    SwitchSymbolsStep,
)
from src.dicepool.exceptions import PipelineConfigError
from src.dicepool.models import Aggregate, SymbolKind


class TestSteps:
    def test_elite_promotion_respects_max(self):
        agg = Aggregate(hollow_hits=1, hollow_blocks=3)
        ElitePromotionStep(id="elite", max=2).apply_post(agg)
        assert agg == Aggregate(hits=1, blocks=1, hollow_blocks=2)

    def test_elite_promotion_only_listed_symbols(self):
        agg = Aggregate(hollow_hits=2, hollow_specials=2)
        ElitePromotionStep(id="elite", symbols=["hollowHits"]).apply_post(agg)
        assert agg == Aggregate(hits=2, hollow_specials=2)

    def test_add_symbols_never_goes_negative(self):
        agg = Aggregate(hits=2)
        AddSymbolsStep(id="add", delta={"hits": -5, "SPECIAL": 2}).apply_post(agg)
        assert agg == Aggregate(specials=2)

    def test_switch_symbols_in_groups(self):
        step = SwitchSymbolsStep(id="sw", from_symbol="specials", to="hits", ratio={"x": 2, "y": 1})
        agg = Aggregate(specials=5)
        step.apply_post(agg)
        assert agg == Aggregate(hits=2, specials=1)

        capped = step.model_copy(update={"max_groups": 1})
        agg = Aggregate(specials=5)
        capped.apply_post(agg)
        assert agg == Aggregate(hits=1, specials=3)

    def test_switch_symbols_from_parts(self):
        step = SwitchSymbolsStep.model_validate({
            "id": "combo",
            "type": "SwitchSymbols",
            "to": "blocks",
            "fromParts": [
                {"symbol": "hits", "units": 1},
                {"symbol": "specials", "units": 1},
                {"symbol": "blocks", "units": 1},
            ],
        })
        assert len(step.from_parts) == 2
        agg = Aggregate(hits=3, specials=2)
        step.apply_post(agg)
        assert agg == Aggregate(hits=1, blocks=2)

    def test_combat_switch(self):
        step = CombatSwitchStep(id="pierce", cost_count=2, self_delta={"hits": 1}, opp_delta={"blocks": 2})
        own, opp = Aggregate(specials=3), Aggregate(blocks=3)
        step.apply_combat(own, opp, "attacker")
        assert own == Aggregate(hits=1, specials=1)
        assert opp == Aggregate(blocks=1)

    def test_unknown_cost_symbol_falls_back_to_specials(self):
        step = CombatSwitchStep.model_validate({"id": "x", "costSymbol": "mana"})
        assert step.cost_symbol is SymbolKind.SPECIAL


class TestPipeline:
    def test_disabled_steps_are_skipped(self):
        pipeline = Pipeline([
            AddSymbolsStep(id="on", delta={"hits": 1}),
            AddSymbolsStep(id="off", enabled=False, delta={"hits": 10}),
        ])
        agg = Aggregate()
        assert pipeline.transform(agg) == Aggregate(hits=1)
        assert agg == Aggregate()

    def test_combat_clamps_both_sides(self):
        own, opp = Aggregate(hits=-1), Aggregate(blocks=-2)
        Pipeline().apply_combat(own, opp, "defender")
        assert own == Aggregate()
        assert opp == Aggregate()

    def test_serialized_form_round_trips(self):
        pipeline = Pipeline([
            ElitePromotionStep(id="elite", max=1),
            SwitchSymbolsStep(id="sw", from_symbol=SymbolKind.SPECIAL, to=SymbolKind.HIT),
            CombatSwitchStep(id="pierce", opp_delta={"blocks": 1}),
        ])
        data = serialize_pipeline(pipeline)
        assert data[1]["from"] == "SPECIAL"
        assert data[0]["max"] == 1
        rebuilt = build_pipeline(data)
        assert [s.model_dump() for s in rebuilt.steps] == [s.model_dump() for s in pipeline.steps]

    def test_unknown_step_type_is_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            pipeline = build_pipeline([{"id": "a", "type": "Teleport"}, {"id": "b", "type": "AddSymbols"}])
        assert [step.id for step in pipeline.steps] == ["b"]
        assert "Teleport" in caplog.text

    def test_invalid_step_raises(self):
        with pytest.raises(PipelineConfigError):
            build_pipeline([{"id": "sw", "type": "SwitchSymbols"}])
