"""
Assessment File Loader
Reads an expert's criterion judgments from a JSON document
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .risk_data import AssessmentRequest, CriterionAssessment
from .risk_evaluator import build_default_assessments
from .risk_tables import get_criterion, get_term
from ..utils.exceptions import AssessmentFileError
from ..utils.sanitization import sanitize_for_logging

logger = logging.getLogger("AssessmentLoader")

# Upper bound on file size; an assessment is a handful of short records
MAX_FILE_SIZE = 1024 * 1024


def _number(entry: Dict[str, Any], key: str, default: Optional[float]) -> float:
    value = entry.get(key, default)
    if isinstance(value, bool) or value is None:
        raise AssessmentFileError(
            f"'{key}' for {sanitize_for_logging(entry.get('criterion'))} must be a number"
        )
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise AssessmentFileError(
            f"'{key}' for {sanitize_for_logging(entry.get('criterion'))} "
            f"must be a number, got {sanitize_for_logging(value)}"
        ) from None
    # json accepts NaN and Infinity literals
    if not math.isfinite(number):
        raise AssessmentFileError(
            f"'{key}' for {sanitize_for_logging(entry.get('criterion'))} "
            f"must be a finite number, got {number}"
        )
    return number


def parse_assessment_document(
    document: Any,
    default_scenario: str = "S3",
    default_threat_level: str = "C3",
    default_confidence: float = 0.5,
) -> AssessmentRequest:
    """
    Build an AssessmentRequest from a decoded JSON document.

    Criteria that the document leaves out keep the form defaults (term T1,
    *default_confidence* and the criterion's weight seed). The result always
    lists the criteria in table order.

    Raises:
        AssessmentFileError: If the document has the wrong shape
        CriterionNotFoundError, TermNotFoundError: For unknown identifiers
    """
    if not isinstance(document, dict):
        raise AssessmentFileError("Assessment document must be a JSON object")

    entries = document.get("assessments", [])
    if not isinstance(entries, list):
        raise AssessmentFileError("'assessments' must be a list")

    by_criterion = {
        a.criterion_id: a
        for a in build_default_assessments(default_confidence=default_confidence)
    }

    for entry in entries:
        if not isinstance(entry, dict):
            raise AssessmentFileError("Each assessment must be a JSON object")
        if "criterion" not in entry:
            raise AssessmentFileError("Each assessment needs a 'criterion' id")

        criterion = get_criterion(entry["criterion"])
        default = by_criterion[criterion.id]
        term = get_term(entry.get("term", default.term_id))

        by_criterion[criterion.id] = CriterionAssessment(
            criterion_id=criterion.id,
            term_id=term.id,
            confidence=_number(entry, "confidence", default.confidence),
            weight=_number(entry, "weight", default.weight),
        )

    return AssessmentRequest(
        scenario=str(document.get("scenario", default_scenario)).upper(),
        threat_level=str(document.get("threat_level", default_threat_level)).upper(),
        assessments=list(by_criterion.values()),
    )


def load_assessment_file(path: Union[str, Path], **defaults) -> AssessmentRequest:
    """
    Load and parse an assessment JSON file

    Args:
        path: Path to the JSON document
        **defaults: Passed through to ``parse_assessment_document``

    Raises:
        AssessmentFileError: If the file is missing, too large or not JSON
    """
    file_path = Path(path)
    try:
        size = file_path.stat().st_size
        if size > MAX_FILE_SIZE:
            raise AssessmentFileError(f"Assessment file too large: {size} bytes")
        with open(file_path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except FileNotFoundError:
        raise AssessmentFileError(f"Assessment file not found: {file_path}") from None
    except json.JSONDecodeError as e:
        raise AssessmentFileError(f"Invalid JSON in {file_path}: {e}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise AssessmentFileError(f"Could not read {file_path}: {e}") from None

    logger.debug(f"Loaded assessment file {file_path}")
    return parse_assessment_document(document, **defaults)
