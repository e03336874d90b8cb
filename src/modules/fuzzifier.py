"""
Step 1: Fuzzification
Turns a linguistic term plus the expert's confidence into a value in [0, 1]
"""

from typing import Union

from .risk_tables import Term, get_term

# Confidence at which the S-curve switches branches
CURVE_CENTER = 0.5


def fuzzify(term: Union[str, Term], confidence: float) -> float:
    """
    Map *term* and *confidence* onto the term's band using a quadratic S-curve.

    The curve starts at the lower edge of the band for confidence 0, passes
    through the band midpoint at 0.5 and reaches the upper edge at 1. The
    result is the band position divided by 100.

    Both branches are scaled by the half-width (b - a) / 2. This is a
    deliberate departure from the legacy formula, which scaled by the full
    width and jumped from b/100 to a/100 just above 0.5.

    Confidence is not clamped here. Values outside [0, 1] extrapolate along
    the quadratic branch they fall on and may leave the band; callers that
    need a bounded result should clamp first (see
    ``src.utils.validators.clamp_assessment``).

    Args:
        term: Term identifier (T1..T5) or a Term
        confidence: Expert confidence, nominally in [0, 1]

    Returns:
        Fuzzified value delta

    Raises:
        TermNotFoundError: If *term* is unknown
    """
    band = get_term(term)
    a, b = band.lo, band.hi
    half_width = (b - a) / 2

    if confidence <= CURVE_CENTER:
        position = (confidence / CURVE_CENTER) ** 2 * half_width + a
    else:
        position = b - ((1 - confidence) / CURVE_CENTER) ** 2 * half_width

    return position / 100
