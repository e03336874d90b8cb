"""
Exception Hierarchy
Errors raised by the risk assessment pipeline and its adapters
"""


class RiskAssessmentError(Exception):
    """Base class for every error the pipeline reports to its caller"""


class NotFoundError(RiskAssessmentError, KeyError):
    """
    An identifier does not name an entry of one of the fixed lookup tables.

    Subclasses KeyError so callers that treat the tables as plain mappings
    keep working.
    """

    kind = "entry"

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(identifier)

    def __str__(self) -> str:
        return f"Unknown {self.kind}: {self.identifier!r}"


class TermNotFoundError(NotFoundError):
    kind = "linguistic term"


class ThreatLevelNotFoundError(NotFoundError):
    kind = "threat level"


class ScenarioNotFoundError(NotFoundError):
    kind = "scenario"


class CriterionNotFoundError(NotFoundError):
    kind = "criterion"


class DegenerateInputError(RiskAssessmentError, ValueError):
    """Input would divide by zero or otherwise yield inf/NaN"""


class ConfigurationError(RiskAssessmentError, ValueError):
    """Invalid settings in the environment file"""


class AssessmentFileError(RiskAssessmentError):
    """Assessment file is missing, unreadable or malformed"""
