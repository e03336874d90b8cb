import logging
import unittest
from unittest.mock import MagicMock

from src.modules.risk_data import CriterionAssessment
from src.utils.validators import check_default_settings, clamp, clamp_assessment
from src.utils.config import Config, ReportConfig
from src.utils.exceptions import DegenerateInputError


class TestDefaultSettings(unittest.TestCase):
    def setUp(self):
        self.config = MagicMock(spec=Config)
        self.config.reports = MagicMock(spec=ReportConfig)
        self.config.reports.webhook_enabled = False
        self.config.reports.slack_enabled = False

    def test_no_defaults_clean(self):
        errors = check_default_settings(self.config)
        self.assertEqual(len(errors), 0)

    def test_default_webhook(self):
        self.config.reports.webhook_enabled = True
        self.config.reports.webhook_url = "https://your-webhook-url.com/reports"
        errors = check_default_settings(self.config)
        self.assertIn("Webhook reports enabled but uses default URL", errors)

    def test_default_slack(self):
        self.config.reports.slack_enabled = True
        self.config.reports.slack_webhook = "https://hooks.slack.com/services/YOUR/WEBHOOK/URL"
        errors = check_default_settings(self.config)
        self.assertIn("Slack reports enabled but uses default Webhook URL", errors)

    def test_disabled_channel_ignored(self):
        self.config.reports.webhook_url = "https://your-webhook-url.com/reports"
        errors = check_default_settings(self.config)
        self.assertEqual(len(errors), 0)


class TestClamping(unittest.TestCase):
    def test_clamp(self):
        self.assertEqual(clamp(-1, 0, 1), 0)
        self.assertEqual(clamp(2, 0, 1), 1)
        self.assertEqual(clamp(0.3, 0, 1), 0.3)

    def test_in_range_assessment_is_returned_unchanged(self):
        assessment = CriterionAssessment("K1", "T2", 0.4, 6)
        self.assertIs(clamp_assessment(assessment), assessment)

    def test_out_of_range_assessment_is_clamped(self):
        assessment = CriterionAssessment("K4", "T2", -0.2, 15)
        with self.assertLogs("Validators", level=logging.WARNING) as logs:
            clamped = clamp_assessment(assessment, 1, 10)
        self.assertEqual(clamped.confidence, 0.0)
        self.assertEqual(clamped.weight, 10)
        self.assertEqual(clamped.term_id, "T2")
        self.assertIn("K4", logs.output[0])

    def test_custom_weight_bounds(self):
        clamped = clamp_assessment(CriterionAssessment("K1", "T1", 0.5, 3), 4, 8)
        self.assertEqual(clamped.weight, 4)

    def test_nan_confidence_is_rejected(self):
        assessment = CriterionAssessment("K3", "T2", float("nan"), 5)
        with self.assertRaises(DegenerateInputError):
            clamp_assessment(assessment)

    def test_infinite_weight_is_rejected(self):
        for weight in (float("inf"), float("-inf"), float("nan")):
            with self.subTest(weight=weight):
                with self.assertRaises(DegenerateInputError):
                    clamp_assessment(CriterionAssessment("K3", "T2", 0.5, weight))


if __name__ == '__main__':
    unittest.main()
