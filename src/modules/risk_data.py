"""
Risk Assessment Data Model
Contains the dataclasses passed into and out of the evaluation pipeline
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple

from .risk_tables import Conclusion


@dataclass(frozen=True)
class CriterionAssessment:
    """
    Expert judgment for one criterion

    Created fresh for every evaluation run and never persisted.
    """
    criterion_id: str
    term_id: str
    confidence: float
    weight: float


@dataclass(frozen=True)
class CriterionContribution:
    """Per-criterion share of the complement-weighted aggregate"""
    criterion_id: str
    delta: float
    omega: float
    contribution: float


@dataclass(frozen=True)
class EvaluationResult:
    """
    Output of one pipeline run

    contributions[i].contribution is omega_i * (1 - delta_i), the value the
    bar chart visualizes.
    """
    aggregate_score: float
    adjusted_score: float
    conclusion: Conclusion
    contributions: Tuple[CriterionContribution, ...]
    scenario: str
    threat_level: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # R5 has an infinite lower bound, which is not valid JSON
        data["conclusion"] = {"id": self.conclusion.id, "label": self.conclusion.label}
        data["contributions"] = [asdict(c) for c in self.contributions]
        return data


@dataclass
class AssessmentRequest:
    """Everything needed to run one evaluation"""
    scenario: str
    threat_level: str
    assessments: List[CriterionAssessment]
