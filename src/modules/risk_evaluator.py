"""
Risk Evaluator
Composes the five pipeline stages into a single evaluation
"""

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from .aggregator import aggregate
from .defuzzifier import defuzzify
from .fuzzifier import fuzzify
from .risk_data import CriterionAssessment, CriterionContribution, EvaluationResult
from .risk_tables import (
    CRITERIA,
    Scenario,
    ThreatLevel,
    get_criterion,
    get_scenario,
    get_term,
    get_threat_level,
)
from .threat_adjuster import threat_adjust
from .weight_normalizer import normalize
from ..utils.exceptions import DegenerateInputError
from ..utils.sanitization import sanitize_for_logging
from ..utils.validators import clamp_assessment

logger = logging.getLogger("RiskEvaluator")

AssessmentLike = Union[CriterionAssessment, Mapping[str, Any]]


def build_default_assessments(
    default_term: str = "T1",
    default_confidence: float = 0.5,
) -> List[CriterionAssessment]:
    """
    Return one assessment per criterion, pre-filled the way the input form is:
    the first term, confidence 0.5 and the criterion's weight seed.
    """
    return [
        CriterionAssessment(
            criterion_id=criterion.id,
            term_id=default_term,
            confidence=default_confidence,
            weight=criterion.default_weight,
        )
        for criterion in CRITERIA
    ]


def _coerce(item: AssessmentLike, position: int) -> CriterionAssessment:
    if isinstance(item, CriterionAssessment):
        return item

    # Positional criterion ids only make sense for the fixed 7-criteria order
    fallback_id = CRITERIA[position].id if position < len(CRITERIA) else f"#{position + 1}"
    return CriterionAssessment(
        criterion_id=item.get("criterion", fallback_id),
        term_id=item["term"],
        confidence=float(item["confidence"]),
        weight=float(item["weight"]),
    )


def evaluate(
    assessments: Sequence[AssessmentLike],
    scenario: Union[str, Scenario],
    threat_level: Union[str, ThreatLevel],
) -> EvaluationResult:
    """
    Run the full pipeline: fuzzify, normalize, aggregate, adjust, defuzzify.

    Unlike ``aggregate``, an unknown scenario is rejected here instead of
    silently producing a zero score.

    Args:
        assessments: One entry per criterion, either CriterionAssessment
            objects or mappings with ``term``, ``confidence``, ``weight`` and
            an optional ``criterion`` key
        scenario: Scenario identifier (S1..S4)
        threat_level: Threat level identifier (C1..C5)

    Returns:
        EvaluationResult

    Raises:
        ScenarioNotFoundError, ThreatLevelNotFoundError, TermNotFoundError:
            For unknown identifiers
        DegenerateInputError: For an empty assessment list, a NaN or
            infinite confidence or weight, weights that do not sum to a
            positive number, or S1 with a delta of exactly 1
    """
    scenario = get_scenario(scenario)
    threat_level = get_threat_level(threat_level)

    items = [_coerce(item, i) for i, item in enumerate(assessments)]
    if not items:
        raise DegenerateInputError("At least one criterion assessment is required")
    for item in items:
        if not (math.isfinite(item.confidence) and math.isfinite(item.weight)):
            raise DegenerateInputError(
                f"Non-finite input for {sanitize_for_logging(item.criterion_id)}: "
                f"confidence={item.confidence}, weight={item.weight}"
            )

    deltas = [fuzzify(item.term_id, item.confidence) for item in items]
    omega = normalize([item.weight for item in items])
    logger.debug(f"Fuzzified deltas={deltas}, normalized weights={omega}")

    sp = aggregate(scenario, deltas, omega)
    rp = threat_adjust(sp, threat_level)
    conclusion = defuzzify(rp)

    contributions = tuple(
        CriterionContribution(
            criterion_id=item.criterion_id,
            delta=delta,
            omega=weight,
            contribution=weight * (1 - delta),
        )
        for item, delta, weight in zip(items, deltas, omega)
    )

    return EvaluationResult(
        aggregate_score=sp,
        adjusted_score=rp,
        conclusion=conclusion,
        contributions=contributions,
        scenario=scenario.id,
        threat_level=threat_level.id,
    )


class RiskEvaluator:
    """Runs evaluations with the configured input policy"""

    def __init__(self, config):
        """
        Initialize evaluator

        Args:
            config: EvaluationConfig object
        """
        self.config = config
        self.logger = logger

    def prepare(self, assessments: Iterable[AssessmentLike]) -> List[CriterionAssessment]:
        """Coerce, check ids and, if enabled, clamp the raw inputs"""
        prepared = []
        for position, item in enumerate(assessments):
            assessment = _coerce(item, position)
            get_criterion(assessment.criterion_id)
            get_term(assessment.term_id)
            if self.config.clamp_inputs:
                assessment = clamp_assessment(
                    assessment, self.config.min_weight, self.config.max_weight
                )
            prepared.append(assessment)
        return prepared

    def evaluate(
        self,
        assessments: Iterable[AssessmentLike],
        scenario: Optional[str] = None,
        threat_level: Optional[str] = None,
    ) -> EvaluationResult:
        """
        Evaluate *assessments*, falling back to the configured scenario and
        threat level when none is given
        """
        scenario = scenario or self.config.default_scenario
        threat_level = threat_level or self.config.default_threat_level

        self.logger.info(
            f"Evaluating flight scenario: scenario={scenario}, threat={threat_level}"
        )
        result = evaluate(self.prepare(assessments), scenario, threat_level)

        self.logger.info(
            f"Evaluation complete: S(P)={result.aggregate_score:.3f}, "
            f"r(P)={result.adjusted_score:.3f}, conclusion={result.conclusion.id}",
            extra={"extra_fields": {
                "scenario": result.scenario,
                "threat_level": result.threat_level,
                "aggregate_score": result.aggregate_score,
                "adjusted_score": result.adjusted_score,
                "conclusion": result.conclusion.id,
            }}
        )
        return result
