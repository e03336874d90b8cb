"""
Risk Model Tables
Static definitions of the criteria, linguistic terms, threat levels,
aggregation scenarios and conclusions used by the assessment pipeline.

Every table is a tuple of frozen dataclasses plus a read-only index keyed by
identifier. Both are built once at import time and never mutated.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from ..utils.exceptions import (
    CriterionNotFoundError,
    ScenarioNotFoundError,
    TermNotFoundError,
    ThreatLevelNotFoundError,
)


@dataclass(frozen=True)
class Criterion:
    """A risk factor the expert judges for a flight scenario"""
    id: str
    label: str
    default_weight: float


@dataclass(frozen=True)
class Term:
    """Linguistic term bound to a sub-range of [0, 100]"""
    id: str
    label: str
    lo: float
    hi: float

    @property
    def midpoint(self) -> float:
        return (self.lo + self.hi) / 2


@dataclass(frozen=True)
class ThreatLevel:
    """External threat level and the exponent applied to S(P)"""
    id: str
    label: str
    exponent: float


@dataclass(frozen=True)
class Scenario:
    """Aggregation attitude"""
    id: str
    label: str
    mean: str


@dataclass(frozen=True)
class Conclusion:
    """Linguistic safety conclusion; matched when r(P) > lower_bound"""
    id: str
    label: str
    lower_bound: float


CRITERIA: Tuple[Criterion, ...] = tuple(
    Criterion(id=f"K{index + 1}", label=label, default_weight=float(5 + index % 3))
    for index, label in enumerate((
        "Loss of control in flight",
        "Failure of the deterrence function",
        "Collision with objects",
        "Hacker attacks",
        "Deterioration of weather conditions",
        "Emergency landing",
        "Loss of signal with the dispatcher",
    ))
)

TERMS: Tuple[Term, ...] = (
    Term("T1", "Minimal possibility", 0, 20),
    Term("T2", "Below average", 20, 40),
    Term("T3", "Average possibility", 40, 60),
    Term("T4", "High possibility", 60, 80),
    Term("T5", "Critical possibility", 80, 100),
)

# Exponent decreases as severity grows
THREAT_LEVELS: Tuple[ThreatLevel, ...] = (
    ThreatLevel("C1", "Minimal", 8 / 9),
    ThreatLevel("C2", "Low", 7 / 9),
    ThreatLevel("C3", "Medium", 5 / 9),
    ThreatLevel("C4", "High", 3 / 9),
    ThreatLevel("C5", "Maximal", 1 / 9),
)

SCENARIOS: Tuple[Scenario, ...] = (
    Scenario("S1", "Pessimistic", "harmonic"),
    Scenario("S2", "Cautious", "geometric"),
    Scenario("S3", "Average", "arithmetic"),
    Scenario("S4", "Optimistic", "quadratic"),
)

# Ordered top-down; the last entry catches everything at or below 0.2
CONCLUSIONS: Tuple[Conclusion, ...] = (
    Conclusion("R1", "High level of safety", 0.8),
    Conclusion("R2", "Above average", 0.6),
    Conclusion("R3", "Average", 0.4),
    Conclusion("R4", "Low", 0.2),
    Conclusion("R5", "Very low", float("-inf")),
)


def _index(entries) -> Mapping:
    return MappingProxyType({entry.id: entry for entry in entries})


CRITERIA_BY_ID: Mapping[str, Criterion] = _index(CRITERIA)
TERMS_BY_ID: Mapping[str, Term] = _index(TERMS)
THREAT_LEVELS_BY_ID: Mapping[str, ThreatLevel] = _index(THREAT_LEVELS)
SCENARIOS_BY_ID: Mapping[str, Scenario] = _index(SCENARIOS)
CONCLUSIONS_BY_ID: Mapping[str, Conclusion] = _index(CONCLUSIONS)


def _lookup(table: Mapping, key, entry_type, error_type):
    if isinstance(key, entry_type):
        return key
    try:
        return table[key]
    except (KeyError, TypeError):
        raise error_type(key) from None


def get_criterion(criterion: Union[str, Criterion]) -> Criterion:
    return _lookup(CRITERIA_BY_ID, criterion, Criterion, CriterionNotFoundError)


def get_term(term: Union[str, Term]) -> Term:
    """
    Resolve a term identifier.

    Raises:
        TermNotFoundError: If *term* is not one of T1..T5
    """
    return _lookup(TERMS_BY_ID, term, Term, TermNotFoundError)


def get_threat_level(level: Union[str, ThreatLevel]) -> ThreatLevel:
    """
    Resolve a threat level identifier.

    Raises:
        ThreatLevelNotFoundError: If *level* is not one of C1..C5
    """
    return _lookup(THREAT_LEVELS_BY_ID, level, ThreatLevel, ThreatLevelNotFoundError)


def get_scenario(scenario: Union[str, Scenario]) -> Scenario:
    return _lookup(SCENARIOS_BY_ID, scenario, Scenario, ScenarioNotFoundError)
