"""
Tests for the composed pipeline in src/modules/risk_evaluator.
"""

import logging

import pytest

from src.modules.risk_data import CriterionAssessment
from src.modules.risk_evaluator import RiskEvaluator, build_default_assessments, evaluate
from src.utils.config import EvaluationConfig
from src.utils.exceptions import (
    CriterionNotFoundError,
    DegenerateInputError,
    ScenarioNotFoundError,
    TermNotFoundError,
    ThreatLevelNotFoundError,
)


def make_config(**overrides):
    values = dict(
        default_scenario="S3",
        default_threat_level="C3",
        clamp_inputs=True,
        default_confidence=0.5,
        min_weight=1.0,
        max_weight=10.0,
    )
    values.update(overrides)
    return EvaluationConfig(**values)


class TestEvaluate:

    def test_uniform_average_assessment(self, uniform_assessments):
        result = evaluate(uniform_assessments, "S3", "C3")

        assert result.aggregate_score == pytest.approx(0.5)
        assert result.adjusted_score == pytest.approx(0.5 ** (5 / 9))
        assert result.adjusted_score == pytest.approx(0.680, abs=1e-3)
        assert result.conclusion.id == "R2"
        assert result.scenario == "S3"
        assert result.threat_level == "C3"

    def test_contributions(self, uniform_assessments):
        result = evaluate(uniform_assessments, "S3", "C3")

        assert [c.criterion_id for c in result.contributions] == [f"K{i}" for i in range(1, 8)]
        for item in result.contributions:
            assert item.delta == pytest.approx(0.5)
            assert item.omega == pytest.approx(1 / 7)
            assert item.contribution == pytest.approx(0.5 / 7)

    def test_contributions_sum_to_average_aggregate(self):
        items = [
            CriterionAssessment("K1", "T1", 0.2, 3),
            CriterionAssessment("K2", "T4", 0.9, 8),
            CriterionAssessment("K3", "T2", 0.5, 1),
        ]
        result = evaluate(items, "S3", "C1")
        assert sum(c.contribution for c in result.contributions) == pytest.approx(
            result.aggregate_score
        )

    def test_accepts_mappings(self):
        raw = [{"term": "T3", "confidence": 0.5, "weight": 5} for _ in range(7)]
        result = evaluate(raw, "S3", "C3")
        assert result.conclusion.id == "R2"
        assert result.contributions[6].criterion_id == "K7"

    def test_higher_threat_never_lowers_score(self, uniform_assessments):
        mild = evaluate(uniform_assessments, "S2", "C1")
        severe = evaluate(uniform_assessments, "S2", "C5")
        assert severe.aggregate_score == pytest.approx(mild.aggregate_score)
        assert severe.adjusted_score >= mild.adjusted_score

    def test_unknown_scenario_is_rejected(self, uniform_assessments):
        with pytest.raises(ScenarioNotFoundError):
            evaluate(uniform_assessments, "S5", "C3")

    def test_unknown_threat_level_is_rejected(self, uniform_assessments):
        with pytest.raises(ThreatLevelNotFoundError):
            evaluate(uniform_assessments, "S3", "C0")

    def test_unknown_term_is_rejected(self):
        with pytest.raises(TermNotFoundError):
            evaluate([CriterionAssessment("K1", "T9", 0.5, 5)], "S3", "C3")

    def test_empty_assessments_are_degenerate(self):
        with pytest.raises(DegenerateInputError):
            evaluate([], "S3", "C3")

    def test_pessimistic_with_certain_risk_is_degenerate(self):
        items = [CriterionAssessment("K1", "T5", 1.0, 5), CriterionAssessment("K2", "T1", 0.5, 5)]
        with pytest.raises(DegenerateInputError):
            evaluate(items, "S1", "C3")

    @pytest.mark.parametrize("confidence, weight", [
        (float("nan"), 5),
        (0.5, float("nan")),
        (0.5, float("inf")),
        (float("-inf"), 5),
    ])
    def test_non_finite_inputs_are_degenerate(self, confidence, weight):
        items = [CriterionAssessment("K1", "T2", confidence, weight),
                 CriterionAssessment("K2", "T3", 0.5, 5)]
        with pytest.raises(DegenerateInputError, match="Non-finite"):
            evaluate(items, "S3", "C3")

    def test_result_to_dict(self, uniform_assessments):
        data = evaluate(uniform_assessments, "S3", "C3").to_dict()
        assert data["conclusion"] == {"id": "R2", "label": "Above average"}
        assert len(data["contributions"]) == 7
        assert data["contributions"][0]["criterion_id"] == "K1"


class TestDefaults:

    def test_default_assessments_match_form(self):
        defaults = build_default_assessments()
        assert [a.criterion_id for a in defaults] == [f"K{i}" for i in range(1, 8)]
        assert {a.term_id for a in defaults} == {"T1"}
        assert {a.confidence for a in defaults} == {0.5}
        assert [a.weight for a in defaults] == [5, 6, 7, 5, 6, 7, 5]

    def test_default_assessments_evaluate_to_high_safety(self):
        # Every delta is 0.1, so S(P) = 0.9 for the average scenario
        result = evaluate(build_default_assessments(), "S3", "C3")
        assert result.aggregate_score == pytest.approx(0.9)
        assert result.conclusion.id == "R1"


class TestRiskEvaluator:

    def test_uses_configured_defaults(self, uniform_assessments):
        evaluator = RiskEvaluator(make_config(default_scenario="S4", default_threat_level="C5"))
        result = evaluator.evaluate(uniform_assessments)
        assert result.scenario == "S4"
        assert result.threat_level == "C5"

    def test_explicit_scenario_wins(self, uniform_assessments):
        evaluator = RiskEvaluator(make_config())
        assert evaluator.evaluate(uniform_assessments, "S1", "C2").scenario == "S1"

    def test_clamps_out_of_range_inputs(self):
        evaluator = RiskEvaluator(make_config())
        prepared = evaluator.prepare([CriterionAssessment("K1", "T2", 1.4, 0)])
        assert prepared[0].confidence == 1.0
        assert prepared[0].weight == 1.0

    def test_clamping_can_be_disabled(self):
        evaluator = RiskEvaluator(make_config(clamp_inputs=False))
        prepared = evaluator.prepare([CriterionAssessment("K1", "T2", 1.4, 12)])
        assert prepared[0].confidence == 1.4
        assert prepared[0].weight == 12

    @pytest.mark.parametrize("clamp_inputs", [True, False])
    @pytest.mark.parametrize("confidence, weight", [
        (float("nan"), 5),
        (0.5, float("nan")),
        (0.5, float("inf")),
    ])
    def test_rejects_non_finite_inputs(self, uniform_assessments, clamp_inputs, confidence, weight):
        evaluator = RiskEvaluator(make_config(clamp_inputs=clamp_inputs))
        items = [CriterionAssessment("K1", "T2", confidence, weight)] + uniform_assessments[1:]
        with pytest.raises(DegenerateInputError):
            evaluator.evaluate(items)

    def test_rejects_unknown_criterion(self):
        evaluator = RiskEvaluator(make_config())
        with pytest.raises(CriterionNotFoundError):
            evaluator.prepare([CriterionAssessment("K8", "T2", 0.5, 5)])

    def test_logs_completion(self, uniform_assessments, caplog):
        evaluator = RiskEvaluator(make_config())
        with caplog.at_level(logging.INFO, logger="RiskEvaluator"):
            evaluator.evaluate(uniform_assessments)
        assert "Evaluation complete" in caplog.text
        record = [r for r in caplog.records if r.getMessage().startswith("Evaluation complete")][0]
        assert record.extra_fields["conclusion"] == "R2"
