"""
Configuration Management Module
Handles loading and validation of environment variables and settings
"""

import math
import os
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

from .exceptions import ConfigurationError


@dataclass
class EvaluationConfig:
    """Configuration for the assessment pipeline"""
    default_scenario: str
    default_threat_level: str
    clamp_inputs: bool
    default_confidence: float
    min_weight: float
    max_weight: float


@dataclass
class ReportConfig:
    """Configuration for report delivery"""
    console: bool
    show_chart: bool
    webhook_enabled: bool
    webhook_url: Optional[str]
    slack_enabled: bool
    slack_webhook: Optional[str]


@dataclass
class SystemConfig:
    """Configuration for system settings"""
    log_level: str
    log_file: str
    log_format: str


class Config:
    """Main configuration class"""

    def __init__(self, env_file: str = ".env"):
        """
        Initialize configuration from environment file

        A missing file is not an error; defaults and the process
        environment apply.

        Args:
            env_file: Path to environment file (default: .env)
        """
        load_dotenv(env_file)

        self.evaluation = self._load_evaluation_config()
        self.reports = self._load_report_config()
        self.system = self._load_system_config()

    def _load_evaluation_config(self) -> EvaluationConfig:
        """Load evaluation configuration"""
        return EvaluationConfig(
            default_scenario=os.getenv("DEFAULT_SCENARIO", "S3").strip().upper(),
            default_threat_level=os.getenv("DEFAULT_THREAT_LEVEL", "C3").strip().upper(),
            clamp_inputs=self._get_bool("CLAMP_INPUTS", True),
            default_confidence=self._get_float("DEFAULT_CONFIDENCE", 0.5),
            min_weight=self._get_float("MIN_WEIGHT", 1.0),
            max_weight=self._get_float("MAX_WEIGHT", 10.0)
        )

    def _load_report_config(self) -> ReportConfig:
        """Load report configuration"""
        return ReportConfig(
            console=self._get_bool("REPORT_CONSOLE", True),
            show_chart=self._get_bool("REPORT_SHOW_CHART", True),
            webhook_enabled=self._get_bool("REPORT_WEBHOOK_ENABLED", False),
            webhook_url=os.getenv("REPORT_WEBHOOK_URL"),
            slack_enabled=self._get_bool("REPORT_SLACK_ENABLED", False),
            slack_webhook=os.getenv("REPORT_SLACK_WEBHOOK")
        )

    def _load_system_config(self) -> SystemConfig:
        """Load system configuration"""
        return SystemConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/uav_risk.log"),
            log_format=os.getenv("LOG_FORMAT", "text").strip().lower()
        )

    @staticmethod
    def _get_bool(key: str, default: bool = False) -> bool:
        """Convert environment variable to boolean"""
        value = os.getenv(key, str(default)).lower()
        return value in ('true', '1', 'yes', 'on')

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Convert environment variable to float"""
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        try:
            number = float(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got '{value}'") from None
        if not math.isfinite(number):
            raise ConfigurationError(f"{key} must be a finite number, got '{value}'")
        return number

    def validate(self) -> bool:
        """
        Validate configuration

        Returns:
            True if configuration is valid

        Raises:
            ConfigurationError: If configuration is invalid
        """
        # Imported here so loading settings never depends on the model tables
        from ..modules.risk_tables import SCENARIOS_BY_ID, THREAT_LEVELS_BY_ID

        evaluation = self.evaluation
        if evaluation.default_scenario not in SCENARIOS_BY_ID:
            raise ConfigurationError(f"Unknown DEFAULT_SCENARIO: {evaluation.default_scenario}")

        if evaluation.default_threat_level not in THREAT_LEVELS_BY_ID:
            raise ConfigurationError(
                f"Unknown DEFAULT_THREAT_LEVEL: {evaluation.default_threat_level}"
            )

        if not 0.0 <= evaluation.default_confidence <= 1.0:
            raise ConfigurationError("DEFAULT_CONFIDENCE must be between 0 and 1")

        if evaluation.min_weight <= 0:
            raise ConfigurationError("MIN_WEIGHT must be positive")

        if evaluation.min_weight > evaluation.max_weight:
            raise ConfigurationError("MIN_WEIGHT cannot exceed MAX_WEIGHT")

        if self.reports.webhook_enabled and not self.reports.webhook_url:
            raise ConfigurationError("Webhook enabled but no URL provided")

        if self.reports.slack_enabled and not self.reports.slack_webhook:
            raise ConfigurationError("Slack reports enabled but no webhook URL provided")

        return True
