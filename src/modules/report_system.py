"""
Report System
Presents evaluation results on the console and forwards them to webhooks
"""

import logging
import requests
from typing import Dict, List
from dataclasses import dataclass, asdict
from datetime import datetime

from .risk_data import EvaluationResult
from .risk_tables import CRITERIA_BY_ID, SCENARIOS_BY_ID, THREAT_LEVELS_BY_ID
from ..utils.colors import Colors
from ..utils.sanitization import sanitize_for_display

GAUGE_WIDTH = 20
BAR_WIDTH = 40


@dataclass
class RiskReport:
    """Evaluation result enriched for presentation"""
    scenario: str
    threat_level: str
    aggregate_score: float
    adjusted_score: float
    conclusion_id: str
    conclusion_label: str
    contributions: List[Dict]
    recommendations: List[str]
    timestamp: str


class ReportSystem:
    """Publishes risk reports through the configured channels"""

    def __init__(self, config):
        """
        Initialize report system

        Args:
            config: ReportConfig object
        """
        self.config = config
        self.logger = logging.getLogger("ReportSystem")

    def publish(self, result: EvaluationResult) -> RiskReport:
        """
        Send a report for *result* through every enabled channel

        Args:
            result: Evaluation to report on

        Returns:
            The RiskReport that was published
        """
        report = generate_risk_report(result)

        if self.config.console:
            self._console_report(report)

        if self.config.webhook_enabled and self.config.webhook_url:
            self._webhook_report(report)

        if self.config.slack_enabled and self.config.slack_webhook:
            self._slack_report(report)

        return report

    def _console_report(self, report: RiskReport):
        """Print report to console"""
        color = Colors.get_conclusion_color(report.conclusion_id)
        header_bar = Colors.colorize("=" * 80, color)

        print("\n" + header_bar)
        print(Colors.colorize(f"FLIGHT RISK ASSESSMENT - {report.conclusion_id}", color + Colors.BOLD))
        print(header_bar)

        print(f"{Colors.BOLD}Timestamp:{Colors.RESET}  {report.timestamp}")
        print(f"{Colors.BOLD}Scenario:{Colors.RESET}   {self._describe_scenario(report.scenario)}")
        print(f"{Colors.BOLD}Threat:{Colors.RESET}     {self._describe_threat(report.threat_level)}")
        print(f"{Colors.BOLD}S(P):{Colors.RESET}       {report.aggregate_score:.3f}")
        print(f"{Colors.BOLD}r(P):{Colors.RESET}       {report.adjusted_score:.3f}  "
              f"{render_gauge(report.adjusted_score, color)}")
        print(f"{Colors.BOLD}Conclusion:{Colors.RESET} "
              f"{Colors.colorize(f'{report.conclusion_id}(P) - {report.conclusion_label}', color + Colors.BOLD)}")

        if self.config.show_chart:
            print(f"\n{Colors.BOLD}--- CRITERIA INFLUENCE ---{Colors.RESET}")
            for line in render_bar_chart(report.contributions):
                print(f"  {line}")

        print(f"\n{Colors.BOLD}--- RECOMMENDATIONS ---{Colors.RESET}")
        for rec in report.recommendations:
            print(f"  {Colors.colorize('►', Colors.GREEN)} {rec}")

        print(header_bar + "\n")

    @staticmethod
    def _describe_scenario(scenario_id: str) -> str:
        scenario = SCENARIOS_BY_ID.get(scenario_id)
        return f"{scenario.id} ({scenario.label})" if scenario else sanitize_for_display(scenario_id)

    @staticmethod
    def _describe_threat(level_id: str) -> str:
        level = THREAT_LEVELS_BY_ID.get(level_id)
        return f"{level.id} ({level.label})" if level else sanitize_for_display(level_id)

    def _webhook_report(self, report: RiskReport):
        """Send report via webhook"""
        try:
            response = requests.post(
                self.config.webhook_url,
                json=asdict(report),
                headers={'Content-Type': 'application/json'},
                timeout=10
            )

            if response.status_code == 200:
                self.logger.info("Webhook report sent successfully")
            else:
                self.logger.warning(f"Webhook report failed: {response.status_code}")

        except requests.RequestException as e:
            self.logger.error(f"Failed to send webhook report: {type(e).__name__}")

    def _slack_report(self, report: RiskReport):
        """Send report to Slack"""
        try:
            color = {
                "R1": "#36a64f",
                "R2": "#8bc34a",
                "R3": "#ff9900",
                "R4": "#ff5722",
                "R5": "#ff0000"
            }.get(report.conclusion_id, "#808080")

            attachments = [{
                "color": color,
                "title": f"Flight Risk Assessment - {report.conclusion_id}(P) {report.conclusion_label}",
                "fields": [
                    {
                        "title": "r(P)",
                        "value": f"{report.adjusted_score:.3f}",
                        "short": True
                    },
                    {
                        "title": "S(P)",
                        "value": f"{report.aggregate_score:.3f}",
                        "short": True
                    },
                    {
                        "title": "Scenario / Threat",
                        "value": f"{report.scenario} / {report.threat_level}",
                        "short": True
                    },
                    {
                        "title": "Top Recommendation",
                        "value": report.recommendations[0] if report.recommendations else "Review assessment",
                        "short": False
                    }
                ],
                "footer": "UAV Flight Risk Assessment",
                "ts": int(datetime.now().timestamp())
            }]

            payload = {
                "text": "New flight risk assessment",
                "attachments": attachments
            }

            response = requests.post(
                self.config.slack_webhook,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=10
            )

            if response.status_code == 200:
                self.logger.info("Slack report sent successfully")
            else:
                self.logger.warning(f"Slack report failed: {response.status_code}")

        except requests.RequestException as e:
            self.logger.error(f"Failed to send Slack report: {type(e).__name__}")


def render_gauge(score: float, color: str = "", width: int = GAUGE_WIDTH) -> str:
    """Render r(P) as a fixed-width bar of filled and empty cells"""
    bounded = min(max(score, 0.0), 1.0)
    filled = int(round(bounded * width))
    bar = "█" * filled + "░" * (width - filled)
    return Colors.colorize(bar, color) if color else bar


def render_bar_chart(contributions: List[Dict], width: int = BAR_WIDTH) -> List[str]:
    """One line per criterion: id, bar proportional to its contribution, percentage"""
    lines = []
    for item in contributions:
        share = min(max(item["contribution"], 0.0), 1.0)
        bar = "█" * int(round(share * width))
        lines.append(
            f"{sanitize_for_display(item['criterion_id']):<4} "
            f"{Colors.colorize(bar.ljust(width), Colors.CYAN)} {share * 100:5.1f}%"
        )
    return lines


def generate_risk_report(result: EvaluationResult) -> RiskReport:
    """
    Generate a presentation report from an evaluation

    Args:
        result: Evaluation result

    Returns:
        RiskReport
    """
    return RiskReport(
        scenario=result.scenario,
        threat_level=result.threat_level,
        aggregate_score=result.aggregate_score,
        adjusted_score=result.adjusted_score,
        conclusion_id=result.conclusion.id,
        conclusion_label=result.conclusion.label,
        contributions=[asdict(c) for c in result.contributions],
        recommendations=_generate_recommendations(result),
        timestamp=datetime.now().isoformat()
    )


def _generate_recommendations(result: EvaluationResult) -> List[str]:
    """Generate actionable recommendations"""
    recommendations = []
    conclusion_id = result.conclusion.id

    if conclusion_id in ("R4", "R5"):
        recommendations.append("Postpone the flight until the dominant risks are mitigated")
    elif conclusion_id == "R3":
        recommendations.append("Fly only with additional monitoring and a contingency plan")

    # Criteria judged at high or critical possibility
    critical = [c for c in result.contributions if c.delta > 0.6]
    for item in sorted(critical, key=lambda c: c.delta, reverse=True)[:3]:
        criterion = CRITERIA_BY_ID.get(item.criterion_id)
        name = criterion.label if criterion else sanitize_for_display(item.criterion_id)
        recommendations.append(f"Mitigate {item.criterion_id}: {name} (value {item.delta:.2f})")

    if result.threat_level in ("C4", "C5"):
        recommendations.append("Threat level is elevated: confirm countermeasures before launch")

    if not recommendations:
        recommendations.append("No blocking risks identified; proceed with standard checks")

    return recommendations
