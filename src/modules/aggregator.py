"""
Step 3: Scenario-dependent aggregation
Combines fuzzified criterion values and normalized weights into S(P)
"""

import logging
from typing import Sequence, Union

import numpy as np

from .risk_tables import Scenario
from ..utils.exceptions import DegenerateInputError
from ..utils.sanitization import sanitize_for_logging

logger = logging.getLogger("Aggregator")


def _pessimistic(complements: np.ndarray, omega: np.ndarray) -> float:
    # Weighted harmonic mean of the complements
    if np.any(complements == 0):
        raise DegenerateInputError(
            "Pessimistic aggregation is undefined when a criterion value equals 1"
        )
    return float(1.0 / np.sum(omega / complements))


def _cautious(complements: np.ndarray, omega: np.ndarray) -> float:
    return float(np.prod(np.power(complements, omega)))


def _average(complements: np.ndarray, omega: np.ndarray) -> float:
    return float(np.sum(omega * complements))


def _optimistic(complements: np.ndarray, omega: np.ndarray) -> float:
    return float(np.sqrt(np.sum(omega * complements ** 2)))


AGGREGATORS = {
    "S1": _pessimistic,
    "S2": _cautious,
    "S3": _average,
    "S4": _optimistic,
}


def aggregate(
    scenario: Union[str, Scenario],
    deltas: Sequence[float],
    omega: Sequence[float],
) -> float:
    """
    Aggregate criterion values under the chosen scenario.

    S1 is the weighted harmonic mean of (1 - delta), S2 the weighted
    geometric mean, S3 the weighted arithmetic mean and S4 the weighted
    quadratic mean.

    An unknown scenario yields 0.0 rather than an error, matching the legacy
    behaviour. This hides bad input, so a warning is logged; callers should
    validate the scenario before calling (``evaluate`` does).

    Args:
        scenario: Scenario identifier (S1..S4) or a Scenario
        deltas: Fuzzified criterion values in [0, 1]
        omega: Normalized weights, same length as *deltas*

    Returns:
        Aggregate score S(P)

    Raises:
        ValueError: If *deltas* and *omega* differ in length
        DegenerateInputError: For S1 when any delta equals 1
    """
    if len(deltas) != len(omega):
        raise ValueError(
            f"deltas and omega must have equal length ({len(deltas)} != {len(omega)})"
        )

    scenario_id = scenario.id if isinstance(scenario, Scenario) else scenario
    strategy = AGGREGATORS.get(scenario_id) if isinstance(scenario_id, str) else None
    if strategy is None:
        logger.warning(
            f"Unknown scenario '{sanitize_for_logging(str(scenario_id))}'; "
            f"aggregate score defaults to 0"
        )
        return 0.0

    complements = 1.0 - np.asarray(deltas, dtype=float)
    return strategy(complements, np.asarray(omega, dtype=float))
