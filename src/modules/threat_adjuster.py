"""
Step 4: Threat-level adjustment
Reshapes S(P) through a power law chosen by the external threat level
"""

from typing import Union

from .risk_tables import ThreatLevel, get_threat_level


def threat_adjust(sp: float, threat_level: Union[str, ThreatLevel]) -> float:
    """
    Return r(P) = clamp(sp, 0, 1) ** exponent(threat_level).

    Every exponent lies in (0, 1), so for sp in (0, 1) the result is at
    least sp and grows as the threat level becomes more severe (C1 lowest,
    C5 highest). 0 and 1 are fixed points for every level.

    Out-of-range *sp* is clamped silently.

    Raises:
        ThreatLevelNotFoundError: If *threat_level* is unknown
    """
    level = get_threat_level(threat_level)
    bounded = min(max(sp, 0.0), 1.0)
    return bounded ** level.exponent
