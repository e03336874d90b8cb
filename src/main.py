#!/usr/bin/env python3
"""
UAV Flight Risk Assessment
Main orchestrator that loads the expert assessment, runs the evaluation
pipeline and publishes the report
"""

import sys
import logging
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils.config import Config
from src.utils.logging_utils import ColoredFormatter
from src.utils.structured_logging import JSONFormatter
from src.modules.assessment_loader import load_assessment_file
from src.modules.risk_data import AssessmentRequest, EvaluationResult
from src.modules.risk_evaluator import RiskEvaluator, build_default_assessments
from src.modules.report_system import ReportSystem


class RiskAssessmentPipeline:
    """Main pipeline orchestrator"""

    def __init__(self, config_file: str = ".env", config: Optional[Config] = None):
        """
        Initialize pipeline

        Args:
            config_file: Path to configuration file
            config: Already loaded configuration; skips reading config_file
        """
        self.config = config if config is not None else Config(config_file)

        self._setup_logging()

        self.logger = logging.getLogger("RiskAssessmentPipeline")
        self.logger.debug("Initializing risk assessment pipeline")

        self.evaluator = RiskEvaluator(self.config.evaluation)
        self.report_system = ReportSystem(self.config.reports)

    def _setup_logging(self):
        """Setup logging configuration"""
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        # Create logs directory if needed
        log_path = Path(self.config.system.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Resolve log level with safe fallback
        level_name = str(self.config.system.log_level).upper()
        level = logging._nameToLevel.get(level_name, logging.INFO)

        file_handler = logging.FileHandler(self.config.system.log_file)
        if self.config.system.log_format == "json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(log_format))

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter(log_format))

        logging.basicConfig(
            level=level,
            handlers=[file_handler, console_handler]
        )

        if level_name not in logging._nameToLevel:
            logging.getLogger("RiskAssessmentPipeline").warning(
                "Invalid log level '%s'; defaulting to INFO",
                self.config.system.log_level
            )

    def load_request(self, assessment_file: Optional[str] = None) -> AssessmentRequest:
        """
        Load the assessment to evaluate

        Args:
            assessment_file: JSON assessment file; form defaults when None
        """
        evaluation = self.config.evaluation
        if assessment_file is None:
            self.logger.info("No assessment file given; using default criterion values")
            return AssessmentRequest(
                scenario=evaluation.default_scenario,
                threat_level=evaluation.default_threat_level,
                assessments=build_default_assessments(
                    default_confidence=evaluation.default_confidence
                ),
            )

        return load_assessment_file(
            assessment_file,
            default_scenario=evaluation.default_scenario,
            default_threat_level=evaluation.default_threat_level,
            default_confidence=evaluation.default_confidence,
        )

    def run(
        self,
        assessment_file: Optional[str] = None,
        scenario: Optional[str] = None,
        threat_level: Optional[str] = None,
    ) -> EvaluationResult:
        """
        Run one assessment end to end

        Args:
            assessment_file: JSON assessment file; form defaults when None
            scenario: Overrides the scenario from the file or config
            threat_level: Overrides the threat level from the file or config

        Returns:
            EvaluationResult

        Raises:
            RiskAssessmentError: On invalid configuration or input
        """
        self.config.validate()

        request = self.load_request(assessment_file)
        result = self.evaluator.evaluate(
            request.assessments,
            scenario or request.scenario,
            threat_level or request.threat_level,
        )

        self.report_system.publish(result)
        return result


def main():
    """Main entry point"""
    from src.app_runner import AppRunner
    sys.exit(AppRunner().run())


if __name__ == "__main__":
    main()
