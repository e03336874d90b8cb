import logging
import math
from dataclasses import replace
from typing import List

from src.utils.config import Config
from src.utils.exceptions import DegenerateInputError
from src.utils.sanitization import sanitize_for_logging

logger = logging.getLogger("Validators")

# Placeholder values shipped in .env.example
DEFAULT_WEBHOOK = "https://your-webhook-url.com/reports"
DEFAULT_SLACK = "https://hooks.slack.com/services/YOUR/WEBHOOK/URL"


def check_default_settings(config: Config) -> List[str]:
    """
    Check if the configuration uses default example values.
    Returns a list of error messages.
    """
    errors = []

    if config.reports.webhook_enabled:
        if config.reports.webhook_url == DEFAULT_WEBHOOK:
            errors.append("Webhook reports enabled but uses default URL")

    if config.reports.slack_enabled:
        if config.reports.slack_webhook == DEFAULT_SLACK:
            errors.append("Slack reports enabled but uses default Webhook URL")

    return errors


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def clamp_assessment(assessment, min_weight: float = 1.0, max_weight: float = 10.0):
    """
    Clamp confidence into [0, 1] and weight into [min_weight, max_weight].

    Returns the assessment unchanged when both values are already in range,
    otherwise a copy with the clamped values. Each adjustment is logged.

    Raises:
        DegenerateInputError: If confidence or weight is NaN or infinite;
            clamping would pass NaN straight through
    """
    for name in ("confidence", "weight"):
        value = getattr(assessment, name)
        if not math.isfinite(value):
            raise DegenerateInputError(
                f"{name} for {sanitize_for_logging(assessment.criterion_id)} "
                f"must be a finite number, got {value}"
            )

    confidence = clamp(assessment.confidence, 0.0, 1.0)
    weight = clamp(assessment.weight, min_weight, max_weight)

    if confidence == assessment.confidence and weight == assessment.weight:
        return assessment

    logger.warning(
        f"Clamped input for {sanitize_for_logging(assessment.criterion_id)}: "
        f"confidence {assessment.confidence} -> {confidence}, "
        f"weight {assessment.weight} -> {weight}"
    )
    return replace(assessment, confidence=confidence, weight=weight)
