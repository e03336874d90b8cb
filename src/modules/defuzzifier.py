"""
Step 5: Defuzzification

Buckets r(P) into one of the five ordered safety conclusions. The ladder
lives here only, so every consumer (evaluator, report, tests) classifies a
score the same way.
"""

from .risk_tables import CONCLUSIONS, Conclusion


def defuzzify(r: float) -> Conclusion:
    """Return the conclusion for the adjusted score *r*.

    Thresholds are checked from the top (R1) down and the first match wins.
    Comparison is strict, so a score sitting exactly on a threshold falls
    into the lower bucket: ``defuzzify(0.8)`` is R2, not R1.

    Args:
        r: Adjusted score r(P), nominally in [0, 1].

    Returns:
        The matching Conclusion; R5 for anything at or below 0.2, including
        0 and negative values.
    """
    for conclusion in CONCLUSIONS:
        if r > conclusion.lower_bound:
            return conclusion
    return CONCLUSIONS[-1]
